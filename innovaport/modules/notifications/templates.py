"""
HTML e-mail templates.
Every builder returns an EmailMessage; user-provided text is escaped.
"""

from html import escape
from typing import Any, Dict, List, Optional

from innovaport.config import settings
from innovaport.modules.notifications.schemas import EmailMessage

APP_NAME = "InnovaPort"

BRAND_COLORS = {
    "primary": "#1E3A8A",
    "secondary": "#10B981",
    "warning": "#F59E0B",
    "gray_50": "#F9FAFB",
    "gray_500": "#6B7280",
}

STATUS_LABELS = {
    "new": "New",
    "discussing": "In discussion",
    "quoted": "Quote sent",
    "accepted": "Accepted",
    "rejected": "Declined",
}

NOT_SPECIFIED = "Not specified"


def _layout(title: str, body: str, footer: Optional[str] = None) -> str:
    footer = footer or f"This e-mail was sent automatically by {APP_NAME}"
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<style>
body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 0; background-color: #f5f5f5; }}
.container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
.wrapper {{ background: white; border-radius: 8px; overflow: hidden; }}
.header {{ background: {BRAND_COLORS["primary"]}; color: white; padding: 30px 20px; text-align: center; }}
.header h1 {{ margin: 0; font-size: 24px; }}
.content {{ background: {BRAND_COLORS["gray_50"]}; padding: 30px; }}
.field {{ margin: 8px 0; }}
.label {{ font-weight: bold; color: {BRAND_COLORS["primary"]}; }}
.button {{ display: inline-block; background: {BRAND_COLORS["secondary"]}; color: white; padding: 12px 24px; border-radius: 6px; text-decoration: none; }}
.footer {{ text-align: center; padding: 20px; color: {BRAND_COLORS["gray_500"]}; font-size: 12px; }}
</style>
</head>
<body>
<div class="container"><div class="wrapper">
<div class="header"><h1>{escape(title)}</h1></div>
<div class="content">{body}</div>
<div class="footer"><p>{escape(footer)}</p></div>
</div></div>
</body>
</html>"""


def _field(label: str, value: Any) -> str:
    text = value if value not in (None, "") else NOT_SPECIFIED
    return f'<p class="field"><span class="label">{escape(label)}:</span> {escape(str(text))}</p>'


def _paragraphs(text: str) -> str:
    return escape(text).replace("\n", "<br>")


def _quote_url(quote: Dict[str, Any]) -> str:
    return settings.get_dashboard_url(f"/quotes/{quote.get('id', '')}")


def quote_notification(to: str, developer_name: str, quote: Dict[str, Any]) -> EmailMessage:
    body = (
        f"<p>Hello {escape(developer_name)},</p>"
        "<p>You received a new quote request from your portfolio.</p>"
        + _field("Client", quote.get("name"))
        + _field("Email", quote.get("email"))
        + _field("Project type", quote.get("project_type"))
        + _field("Budget", quote.get("budget"))
        + _field("Deadline", quote.get("deadline"))
        + f"<p>{_paragraphs(quote.get('description') or '')}</p>"
        + f'<p><a class="button" href="{escape(_quote_url(quote))}">View in dashboard</a></p>'
    )
    return EmailMessage(
        to=[to],
        subject=f"New quote request - {quote.get('project_type')}",
        html=_layout("New quote request", body),
        reply_to=quote.get("email"),
    )


def quote_confirmation(to: str, client_name: str) -> EmailMessage:
    body = (
        f"<p>Hello {escape(client_name)},</p>"
        "<p>Your quote request has been received. The developer will get back to you shortly.</p>"
    )
    return EmailMessage(
        to=[to],
        subject="Your quote request has been received",
        html=_layout("Request received", body),
    )


def auto_response(
    to: str,
    subject: str,
    rendered_body_html: str,
    developer_name: str,
    developer_email: Optional[str] = None,
) -> EmailMessage:
    """rendered_body_html is the developer's own template, already rendered"""
    signature = f"<p>Best regards,</p><p><strong>{escape(developer_name)}</strong></p>"
    if developer_email:
        signature += f'<p><a href="mailto:{escape(developer_email)}">{escape(developer_email)}</a></p>'
    body = f'{rendered_body_html}<div class="signature">{signature}</div>'
    return EmailMessage(
        to=[to],
        subject=subject,
        html=_layout("Reply to your request", body),
        reply_to=developer_email,
    )


def developer_response(
    to: str,
    client_name: str,
    developer_name: str,
    developer_email: Optional[str],
    response_text: str,
    quote: Dict[str, Any],
) -> EmailMessage:
    features: List[str] = quote.get("features") if isinstance(quote.get("features"), list) else []
    body = (
        f"<p>Hello {escape(client_name)},</p>"
        f"<p>{_paragraphs(response_text)}</p>"
        "<h3>Your request</h3>"
        + _field("Project type", quote.get("project_type"))
        + _field("Budget", quote.get("budget"))
        + _field("Deadline", quote.get("deadline"))
        + _field("Features", ", ".join(features) if features else None)
        + f"<p>Best regards,<br><strong>{escape(developer_name)}</strong></p>"
    )
    return EmailMessage(
        to=[to],
        subject=f"Reply to your quote request - {quote.get('project_type')}",
        html=_layout(f"Message from {developer_name}", body),
        reply_to=developer_email,
    )


def follow_up_reminder(
    to: str,
    developer_name: str,
    quote: Dict[str, Any],
    days_since_quote: int,
) -> EmailMessage:
    plural = "s" if days_since_quote > 1 else ""
    body = (
        f"<p>Hello {escape(developer_name)},</p>"
        f"<p>The quote request from <strong>{escape(str(quote.get('name')))}</strong> "
        f"has been waiting for {days_since_quote} day{plural}.</p>"
        + _field("Project type", quote.get("project_type"))
        + _field("Budget", quote.get("budget"))
        + _field("Status", STATUS_LABELS.get(quote.get("status"), quote.get("status")))
        + f'<p><a class="button" href="{escape(_quote_url(quote))}">Follow up</a></p>'
    )
    return EmailMessage(
        to=[to],
        subject=f"Reminder: quote pending for {days_since_quote} day{plural}",
        html=_layout("Follow-up reminder", body),
    )


def status_update(
    to: str,
    client_name: str,
    developer_name: str,
    developer_email: Optional[str],
    quote: Dict[str, Any],
    old_status: str,
    new_status: str,
) -> EmailMessage:
    new_label = STATUS_LABELS.get(new_status, new_status)
    body = (
        f"<p>Hello {escape(client_name)},</p>"
        f"<p>{escape(developer_name)} updated your quote request.</p>"
        + _field("Previous status", STATUS_LABELS.get(old_status, old_status))
        + _field("New status", new_label)
        + _field("Project type", quote.get("project_type"))
        + _field("Budget", quote.get("budget"))
    )
    return EmailMessage(
        to=[to],
        subject=f"Update on your quote request - {new_label}",
        html=_layout("Quote update", body),
        reply_to=developer_email,
    )


def contact_confirmation(to: str, name: str) -> EmailMessage:
    body = (
        f"<p>Hello {escape(name)},</p>"
        f"<p>Thank you for contacting {APP_NAME}. We will reply as soon as possible.</p>"
    )
    return EmailMessage(
        to=[to],
        subject="We received your message",
        html=_layout("Message received", body),
    )


def admin_reply(
    to: str,
    client_name: str,
    original_subject: Optional[str],
    original_message: str,
    reply_message: str,
    admin_name: str,
    admin_email: Optional[str] = None,
) -> EmailMessage:
    body = (
        f"<p>Hello {escape(client_name)},</p>"
        f"<p>{_paragraphs(reply_message)}</p>"
        f"<p>Best regards,<br><strong>{escape(admin_name)}</strong></p>"
        "<hr>"
        f"<p><em>Your message:</em><br>{_paragraphs(original_message)}</p>"
    )
    subject = f"Re: {original_subject}" if original_subject else f"Reply from {APP_NAME}"
    return EmailMessage(
        to=[to],
        subject=subject,
        html=_layout("Reply to your message", body),
        reply_to=admin_email,
    )
