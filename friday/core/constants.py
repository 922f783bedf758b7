"""
Friday — System-wide constants.

Fixed keys, option lists and copy that both the client controllers and the
HTTP service rely on. Tunable values live in ``friday.config`` instead.
"""

# ---------------------------------------------------------------------------
# Durable client cache keys
# ---------------------------------------------------------------------------

GEO_CACHE_KEY: str = "friday_geo_data"
BANNER_DISMISSED_KEY: str = "friday_banner_dismissed"
INTERNATIONAL_WAITLIST_PREFIX: str = "intl_waitlist:"

# ---------------------------------------------------------------------------
# Geo fallback (fail-open) values
# ---------------------------------------------------------------------------

FALLBACK_COUNTRY: str = "Unknown"
FALLBACK_COUNTRY_CODE: str = "US"

# ---------------------------------------------------------------------------
# User-facing messages
# ---------------------------------------------------------------------------

MSG_FILL_ALL_FIELDS = "Please fill in all fields"
MSG_ACCEPT_TERMS = "You must accept the Terms & Conditions and Privacy Policy"
MSG_NETWORK_ERROR = "Network error. Please try again."
MSG_SIGNUP_FAILED = "Signup failed"
MSG_INVALID_INVITATION = "Invalid or expired invitation"
MSG_INVITATION_CHECK_FAILED = "Failed to validate invitation"
MSG_INVALID_PROFILE = "Invalid profile token"
MSG_PROFILE_LOAD_FAILED = "Failed to load profile"
MSG_PROFILE_UPDATE_FAILED = "Failed to update profile"
MSG_PROFILE_UPDATED = "Profile updated successfully!"
MSG_NO_CHANGES = "No changes to save"
MSG_FEEDBACK_FAILED = "Failed to send feedback"
MSG_GENERIC_RETRY = "Something went wrong. Please try again."

GATE_LOADING_TEXT = "Loading..."
GATE_INTERNATIONAL_TEXT = "US Only - Join International List"
GATE_UNAVAILABLE_TITLE = "Currently available in US only"

# ---------------------------------------------------------------------------
# Option lists
# ---------------------------------------------------------------------------

INTERNATIONAL_COUNTRIES = (
    "Canada", "United Kingdom", "Australia", "Germany", "France", "Netherlands",
    "Sweden", "Norway", "Denmark", "Switzerland", "Austria", "Belgium", "Spain",
    "Italy", "Japan", "South Korea", "Singapore", "New Zealand", "Ireland", "Other",
)

# Loose RFC-5322-ish shape check used by the form routes.
EMAIL_PATTERN: str = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
