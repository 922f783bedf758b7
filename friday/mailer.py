"""
Feedback email dispatch over SMTP (Gmail app password by default).

Sends one message per feedback submission to the site's own inbox, with
``Reply-To`` set to the visitor so the team can answer directly.
"""

import asyncio
import html
import logging
import smtplib
from datetime import datetime
from email.message import EmailMessage
from typing import Optional

from friday import config
from friday.domain.enums import DEFAULT_EMAIL_SUBJECT, FeedbackCategory

logger = logging.getLogger(__name__)


def subject_for(category: str) -> str:
    try:
        return FeedbackCategory(category).email_subject
    except ValueError:
        return DEFAULT_EMAIL_SUBJECT


def render_text(name: str, email: str, category: str, message: str) -> str:
    return (
        f"Friday Feedback - {category.upper()}\n\n"
        f"From: {name}\n"
        f"Email: {email}\n"
        f"Type: {category}\n\n"
        f"Message:\n{message}\n\n"
        "---\n"
        "This message was sent from the Friday website feedback form.\n"
        f"Reply directly to this email to respond to {name}.\n"
    )


def render_html(name: str, email: str, category: str, message: str) -> str:
    n, e, c = html.escape(name), html.escape(email), html.escape(category)
    body = html.escape(message).replace("\n", "<br>")
    year = datetime.now().year
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="background: linear-gradient(135deg, #11d0be, #0fb8a8); padding: 20px; border-radius: 10px 10px 0 0;">
    <h1 style="color: white; margin: 0; font-size: 24px;">Friday Feedback</h1>
  </div>
  <div style="background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px;">
    <h2 style="color: #333; margin-top: 0; text-transform: capitalize;">{c}</h2>
    <div style="background: white; padding: 20px; border-radius: 8px; margin-bottom: 20px;">
      <h3 style="color: #11d0be; margin-top: 0;">Contact Information</h3>
      <p><strong>Name:</strong> {n}</p>
      <p><strong>Email:</strong> <a href="mailto:{e}">{e}</a></p>
      <p><strong>Type:</strong> {c.capitalize()}</p>
    </div>
    <div style="background: white; padding: 20px; border-radius: 8px;">
      <h3 style="color: #11d0be; margin-top: 0;">Message</h3>
      <div style="background: #f8f9fa; padding: 15px; border-radius: 5px; border-left: 4px solid #11d0be;">
        {body}
      </div>
    </div>
    <div style="margin-top: 20px; padding: 15px; background: #e3f2fd; border-radius: 8px; border-left: 4px solid #2196f3;">
      <p style="margin: 0; color: #1976d2; font-size: 14px;">
        <strong>📧 Reply directly to this email to respond to {n}</strong>
      </p>
    </div>
  </div>
  <div style="text-align: center; padding: 20px; color: #666; font-size: 12px;">
    <p>This message was sent from the Friday website feedback form.</p>
    <p>© {year} Friday</p>
  </div>
</div>
"""


def build_message(name: str, email: str, category: str, message: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = f'"Friday Website" <{config.EMAIL_USER}>'
    msg["To"] = config.EMAIL_USER
    msg["Reply-To"] = email
    msg["Subject"] = subject_for(category)
    msg.set_content(render_text(name, email, category, message))
    msg.add_alternative(render_html(name, email, category, message), subtype="html")
    return msg


def is_configured() -> bool:
    return bool(config.EMAIL_USER and config.EMAIL_APP_PASSWORD)


def _smtp_send(msg: EmailMessage) -> None:
    if config.SMTP_USE_SSL:
        server = smtplib.SMTP_SSL(config.SMTP_HOST, config.SMTP_PORT, timeout=config.SMTP_TIMEOUT_SECONDS)
    else:
        server = smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=config.SMTP_TIMEOUT_SECONDS)
    with server:
        if not config.SMTP_USE_SSL:
            server.starttls()
        server.login(config.EMAIL_USER, config.EMAIL_APP_PASSWORD)
        server.send_message(msg)


async def send_feedback_email(name: str, email: str, category: str, message: str) -> dict:
    """Send one feedback message. Returns ``{"success": bool, "error"?: str}``."""
    if not is_configured():
        logger.error("Email sending error: EMAIL_USER / EMAIL_APP_PASSWORD not configured")
        return {"success": False, "error": "EMAIL_USER / EMAIL_APP_PASSWORD not configured"}
    msg = build_message(name, email, category, message)
    try:
        await asyncio.to_thread(_smtp_send, msg)
    except Exception as exc:
        logger.error("Email sending error: %s", exc)
        return {"success": False, "error": str(exc)}
    logger.info("Feedback email sent (%s from %s)", category, email)
    return {"success": True}
