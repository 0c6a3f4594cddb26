"""
MJML Email Templates
All email templates using MJML for responsive, cross-client compatibility
"""

from decimal import Decimal
from html import escape
from typing import Optional

from .config import FRONTEND_URL

# App theme colors - Teal/Slate color scheme
THEME = {
    "primary": "#14b8a6",
    "background": "#f8fafc",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
    "warning": "#f59e0b",
}

APP_NAME = "CleanlyQuote"


def _money(value) -> str:
    return f"${Decimal(str(value or 0)):,.2f}"


def _detail_row(label: str, value: Optional[str]) -> str:
    if not value:
        return ""
    return f"""
    <mj-text padding="0 0 6px 0">
      <strong>{label}:</strong> {escape(str(value))}
    </mj-text>
    """


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
    is_user_email: bool = False,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section padding="20px 0">
          <mj-column>
            <mj-button
              href="{cta_url}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              font-weight="600"
              border-radius="8px"
              padding="18px 40px"
              font-size="16px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    footer_notice = ""
    if is_user_email:
        footer_notice = f"""
        <mj-text align="center" font-size="12px" color="#94a3b8" padding="12px 0 0 0">
          You're receiving this because you have an account with {APP_NAME}.
        </mj-text>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="40px 40px 48px 40px">
          <mj-column>
            <mj-text font-size="24px" font-weight="600" color="{THEME['text_primary']}" line-height="1.3" padding="0 0 16px 0">
              {title}
            </mj-text>
            <mj-divider border-color="{THEME['border']}" border-width="1px" padding="0 0 24px 0" />
            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section padding="32px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="#94a3b8" padding="0">
              Sent with {APP_NAME}
            </mj-text>
            {footer_notice}
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def welcome_email_template(user_name: str) -> str:
    """Welcome email MJML template"""
    content = f"""
    <mj-text>
      Hi {escape(user_name)},
    </mj-text>

    <mj-text>
      Welcome to {APP_NAME}! You can send up to 3 professional quotes for free.
      Upgrade to Pro any time for unlimited quotes and team scheduling.
    </mj-text>
    """

    return get_base_template(
        title=f"Welcome to {APP_NAME}!",
        preview_text="Your account has been created successfully",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/dashboard",
        cta_label="Create your first quote",
        is_user_email=True,
    )


def quote_to_client_template(
    client_name: Optional[str],
    business_name: str,
    share_url: str,
    total_price,
    service_type: Optional[str] = None,
    property_address: Optional[str] = None,
    frequency: Optional[str] = None,
    notes: Optional[str] = None,
) -> str:
    """Quote sent to a client with a link to the public proposal page"""
    greeting = f"Hi {escape(client_name)}," if client_name else "Hello,"
    notes_section = ""
    if notes:
        notes_section = f"""
    <mj-text color="{THEME['text_muted']}" padding="16px 0 0 0">
      {escape(notes)}
    </mj-text>
    """

    content = f"""
    <mj-text>
      {greeting}
    </mj-text>

    <mj-text>
      {escape(business_name)} has prepared a cleaning quote for you.
    </mj-text>

    {_detail_row("Service", service_type)}
    {_detail_row("Property", property_address)}
    {_detail_row("Frequency", frequency)}

    <mj-text font-size="22px" font-weight="700" color="{THEME['text_primary']}" padding="16px 0 0 0">
      Total: {_money(total_price)}
    </mj-text>
    {notes_section}
    <mj-text padding="16px 0 0 0">
      Review the full quote online to approve it or request changes.
    </mj-text>
    """

    return get_base_template(
        title=f"Your quote from {escape(business_name)}",
        preview_text=f"Quote total {_money(total_price)}",
        content_sections=content,
        cta_url=share_url,
        cta_label="View & Approve Quote",
    )


def payment_confirmation_template(user_name: str, plan: str, amount) -> str:
    """Pro subscription payment confirmation"""
    content = f"""
    <mj-text>
      Hi {escape(user_name)},
    </mj-text>

    <mj-text>
      Thanks for upgrading! Your {escape(plan)} subscription is now active.
    </mj-text>

    <mj-text font-weight="600" color="{THEME['text_primary']}">
      Amount paid: {_money(amount)}
    </mj-text>

    <mj-text>
      You now have unlimited quotes, team management and scheduling.
    </mj-text>
    """

    return get_base_template(
        title="Payment Confirmed",
        preview_text=f"Your {APP_NAME} Pro subscription is active",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/dashboard",
        cta_label="Go to Dashboard",
        is_user_email=True,
    )


def quote_approved_notification_template(
    client_name: Optional[str], quote_id: int, total_price
) -> str:
    """Tell the business owner a client approved their quote"""
    content = f"""
    <mj-text>
      Good news! {escape(client_name or "Your client")} approved quote #{quote_id}
      for {_money(total_price)}.
    </mj-text>

    <mj-text>
      Head to your dashboard to schedule the job.
    </mj-text>
    """

    return get_base_template(
        title="Quote Approved",
        preview_text=f"{client_name or 'A client'} approved your quote",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/quotes/{quote_id}",
        cta_label="View Quote",
        is_user_email=True,
    )


def changes_requested_notification_template(
    client_name: Optional[str], quote_id: int, message: str
) -> str:
    """Tell the business owner a client asked for changes"""
    content = f"""
    <mj-text>
      {escape(client_name or "Your client")} requested changes to quote #{quote_id}:
    </mj-text>

    <mj-text padding="8px 0 8px 16px" color="{THEME['text_primary']}">
      "{escape(message)}"
    </mj-text>
    """

    return get_base_template(
        title="Changes Requested",
        preview_text="A client requested changes to your quote",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/quotes/{quote_id}",
        cta_label="Update Quote",
        is_user_email=True,
    )
