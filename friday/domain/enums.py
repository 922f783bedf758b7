"""
friday.domain.enums — All enumerations used across the site.

Keep this module import-clean (stdlib only).
"""

from enum import Enum


# ---------------------------------------------------------------------------
# Gate decision (derived from geo state, never stored)
# ---------------------------------------------------------------------------

class GateDecision(str, Enum):
    """Outcome of gating a primary action on the caller's region."""
    SUSPEND  = "suspend"    # geo still resolving: neither allow nor deny
    ALLOW    = "allow"
    FALLBACK = "fallback"   # outside the recognized region: alternate list


# ---------------------------------------------------------------------------
# Geo resolver lifecycle
# ---------------------------------------------------------------------------

class ResolutionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    RESOLVING     = "resolving"
    RESOLVED      = "resolved"


# ---------------------------------------------------------------------------
# Feedback form categories
# ---------------------------------------------------------------------------

class FeedbackCategory(str, Enum):
    FEEDBACK     = "feedback"
    COMMENTS     = "comments"
    CALL         = "call"
    CONTRIBUTION = "contribution"
    PARTNERSHIP  = "partnership"

    @property
    def label(self) -> str:
        """Option label shown in the form's category picker."""
        return {
            "feedback":     "General Feedback",
            "comments":     "Comments",
            "call":         "Request a Call",
            "contribution": "Contribute to Vision",
            "partnership":  "Partnership",
        }[self.value]

    @property
    def email_subject(self) -> str:
        return {
            "feedback":     "💬 New Feedback from Friday Website",
            "comments":     "🗨️ New Comment from Friday Website",
            "call":         "📞 Call Request from Friday Website",
            "contribution": "🤝 Vision Contribution from Friday Website",
            "partnership":  "🤝 Partnership Inquiry from Friday Website",
        }[self.value]


DEFAULT_EMAIL_SUBJECT = "📝 New Message from Friday Website"


# ---------------------------------------------------------------------------
# Relationship of an invited friend to the inviter
# ---------------------------------------------------------------------------

class RelationshipType(str, Enum):
    MOM           = "Mom"
    DAD           = "Dad"
    FAMILY        = "Family"
    SPOUSE        = "Spouse"
    CLOSE_FRIENDS = "Close Friends"
    FRIENDS       = "Friends"
    ACQUAINTANCE  = "Acquaintance"
    JUST_MET      = "Just Met"
    PARTNER       = "Partner"


DEFAULT_RELATIONSHIP = RelationshipType.FRIENDS
