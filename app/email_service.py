"""
Email Service using Resend
Provides email functionality using MJML templates for responsive design
"""

import logging
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from . import config
from .email_templates import (
    changes_requested_notification_template,
    payment_confirmation_template,
    quote_approved_notification_template,
    quote_to_client_template,
    welcome_email_template,
)

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when an email could not be handed to the provider"""


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise EmailDeliveryError(f"Failed to compile MJML template: {e}") from e

    # mjml_to_html returns an object (or dict) with 'html' and 'errors'
    if isinstance(result, dict):
        errors, html = result.get("errors"), result.get("html", "")
    else:
        errors, html = getattr(result, "errors", None), getattr(result, "html", result)
    if errors:
        logger.warning(f"MJML compilation warnings: {errors}")
    return str(html)


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
    reply_to: Optional[str] = None,
) -> dict:
    """
    Send an email through Resend

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address
        reply_to: Optional reply-to address (the business owner for client emails)

    Returns:
        Send response dict (contains the provider message "id")
    """
    if not config.RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise EmailDeliveryError("Email service not configured")

    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    email_data = {
        "from": from_address or config.EMAIL_FROM_ADDRESS,
        "to": recipients,
        "subject": subject,
        "html": html_content,
    }
    if reply_to:
        email_data["reply_to"] = reply_to

    resend.api_key = config.RESEND_API_KEY
    try:
        logger.info(f"📧 Sending email via Resend to: {recipients}")
        response = resend.Emails.send(email_data)
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise EmailDeliveryError(f"Failed to send email: {e}") from e

    logger.info(f"✅ Email sent successfully via Resend: {response}")
    return response


# ============================================
# Pre-built emails for common events
# ============================================


async def send_welcome_email(to: str, user_name: str) -> dict:
    """Send welcome email to new users"""
    return await send_email(
        to=to,
        subject="Welcome to CleanlyQuote",
        mjml_content=welcome_email_template(user_name),
    )


async def send_quote_email(
    to: str,
    business_name: str,
    share_url: str,
    total_price,
    client_name: Optional[str] = None,
    service_type: Optional[str] = None,
    property_address: Optional[str] = None,
    frequency: Optional[str] = None,
    notes: Optional[str] = None,
    reply_to: Optional[str] = None,
) -> dict:
    """Send a quote to the client; raises EmailDeliveryError on failure"""
    mjml_content = quote_to_client_template(
        client_name=client_name,
        business_name=business_name,
        share_url=share_url,
        total_price=total_price,
        service_type=service_type,
        property_address=property_address,
        frequency=frequency,
        notes=notes,
    )
    return await send_email(
        to=to,
        subject=f"Your Cleaning Quote from {business_name}",
        mjml_content=mjml_content,
        reply_to=reply_to,
    )


async def send_payment_confirmation_email(
    to: str, user_name: str, plan: str = "Pro", amount=29
) -> dict:
    """Send subscription payment confirmation"""
    return await send_email(
        to=to,
        subject="Payment Confirmed - Welcome to CleanlyQuote Pro",
        mjml_content=payment_confirmation_template(user_name, plan, amount),
    )


async def send_quote_approved_notification(
    to: str, client_name: Optional[str], quote_id: int, total_price
) -> dict:
    """Notify the business owner that a client approved a quote"""
    return await send_email(
        to=to,
        subject=f"{client_name or 'A client'} approved your quote",
        mjml_content=quote_approved_notification_template(client_name, quote_id, total_price),
    )


async def send_changes_requested_notification(
    to: str, client_name: Optional[str], quote_id: int, message: str
) -> dict:
    """Notify the business owner that a client requested changes"""
    return await send_email(
        to=to,
        subject=f"{client_name or 'A client'} requested changes to your quote",
        mjml_content=changes_requested_notification_template(client_name, quote_id, message),
    )
