"""
Email Service using Resend

Handles sending account emails to staff (welcome credentials, password resets).
"""

import asyncio
import logging
from html import escape

import resend

from division_sms.core.config import settings

logger = logging.getLogger(__name__)

resend.api_key = settings.resend_api_key

_BASE_STYLES = """
            body { font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }
            .container { max-width: 600px; margin: 0 auto; padding: 40px 20px; }
            .header { color: #1e3a8a; margin-bottom: 24px; }
            .credentials-box { background-color: #f9fafb; border: 1px solid #e5e7eb; padding: 16px; border-radius: 8px; margin: 16px 0; }
            .credentials-box p { margin: 8px 0; }
            .warning { background-color: #fef3c7; border: 1px solid #f59e0b; padding: 12px 16px; border-radius: 8px; margin: 16px 0; font-size: 14px; }
            .button { display: inline-block; background-color: #1e3a8a; color: white; padding: 14px 28px; text-decoration: none; border-radius: 8px; margin: 24px 0; }
            .footer { margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }
"""


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
) -> bool:
    """
    Send an email using Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML content of the email

    Returns:
        True if email was sent successfully
    """
    if not resend.api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {to_email} | SUBJECT: {subject}")
        return True

    try:
        params: resend.Emails.SendParams = {
            "from": settings.email_from,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        # Resend's client is synchronous
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent successfully to {to_email}, id: {email['id']}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False


def _credentials_email(title: str, intro: str, name: str, email: str, temp_password: str) -> str:
    login_url = f"{settings.frontend_url}/login"
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>{_BASE_STYLES}</style>
    </head>
    <body>
        <div class="container">
            <h1 class="header">{title}</h1>

            <p>Dear {escape(name)},</p>

            <p>{intro}</p>

            <div class="credentials-box">
                <p><strong>Login URL:</strong> <a href="{login_url}">{login_url}</a></p>
                <p><strong>Email:</strong> {escape(email)}</p>
                <p><strong>Temporary Password:</strong> <code>{escape(temp_password)}</code></p>
            </div>

            <div class="warning">
                <strong>Important:</strong> You will be required to change your password on first login.
            </div>

            <a href="{login_url}" class="button">Log In Now</a>

            <div class="footer">
                <p>Division SMS - School Management System</p>
            </div>
        </div>
    </body>
    </html>
    """


async def send_staff_welcome(
    to_email: str,
    staff_name: str,
    school_name: str | None,
    role_label: str,
    temp_password: str,
) -> bool:
    """Send login credentials to a newly created staff account."""
    where = f" at <strong>{escape(school_name)}</strong>" if school_name else ""
    intro = (
        f"An account has been created for you as <strong>{escape(role_label)}</strong>{where}. "
        "Here are your login credentials:"
    )
    html_content = _credentials_email(
        "Welcome to Division SMS", intro, staff_name, to_email, temp_password
    )
    return await send_email(
        to_email=to_email,
        subject="Your Division SMS account",
        html_content=html_content,
    )


async def send_password_reset_by_admin(
    to_email: str,
    staff_name: str,
    temp_password: str,
) -> bool:
    """Send a new temporary password after an administrator reset it."""
    intro = "An administrator has reset your password. Use the temporary password below to log in:"
    html_content = _credentials_email(
        "Your password was reset", intro, staff_name, to_email, temp_password
    )
    return await send_email(
        to_email=to_email,
        subject="Your Division SMS password was reset",
        html_content=html_content,
    )
