"""
Email notifications for payments and intake tickets.

Every public method returns a bool and never raises: a notification that
cannot be delivered is logged and reported as False, it never affects the
transaction or ticket that triggered it.
"""
import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Any, Callable, Dict, Optional

from jinja2 import DictLoader, Environment, select_autoescape

from app.config import Settings
from app.services.rates import is_card_payment, is_crypto_payment

logger = logging.getLogger(__name__)


TEMPLATES = {
    "payment_confirmation.html": """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #27ae60;">Payment Confirmation</h2>
  <p>Dear {{ txn.customer_info.name }},</p>
  <p>Your {{ method }} payment has been processed successfully!</p>
  <div style="background: #f8f9fa; padding: 20px; border-left: 4px solid #27ae60; margin: 20px 0;">
    <h3 style="margin-top: 0;">Payment Details:</h3>
    <p><strong>Transaction ID:</strong> {{ txn.id }}</p>
    <p><strong>Amount:</strong> ${{ "{:,.2f}".format(txn.amount) }}</p>
    <p><strong>Payment Method:</strong> {{ method }}</p>
    <p><strong>Confirmation Code:</strong> {{ txn.confirmation_code }}</p>
    {% if crypto %}
    <p><strong>Crypto Amount:</strong> {{ details.crypto_amount }} {{ details.crypto_type }}</p>
    <p><strong>Network Fee:</strong> {{ details.network_fee }} {{ details.crypto_type }}</p>
    <p><strong>Transaction Hash:</strong> {{ details.transaction_hash }}</p>
    {% elif card %}
    <p><strong>Card:</strong> {{ details.card_type }} ending in {{ details.card_last4 }}</p>
    {% endif %}
    <p><strong>Date:</strong> {{ txn.timestamp.strftime("%Y-%m-%d") }}</p>
  </div>
  <p>Thank you for your business with {{ company }}!</p>
  <p>Best regards,<br>{{ company }} Team</p>
</div>
""",
    "contact_confirmation.html": """
<h2>Thank you for contacting {{ company }}!</h2>
<p>Dear {{ ticket.name }},</p>
<p>We have received your inquiry and will get back to you within 24 hours.</p>
<p><strong>Your ticket ID:</strong> {{ ticket.id }}</p>
""",
    "quote_confirmation.html": """
<h2>Quote Request Received - {{ company }}</h2>
<p>Dear {{ ticket.name }},</p>
<p>We have received your quote request and will prepare a detailed proposal within 48 hours.</p>
<p><strong>Your quote ID:</strong> {{ ticket.id }}</p>
<p><strong>Project Type:</strong> {{ ticket.project_type }}</p>
<p><strong>Budget Range:</strong> {{ ticket.budget }}</p>
""",
}

TICKET_SUBJECTS = {
    "contact": "Thank you for your inquiry",
    "quote": "Quote Request Received",
}

env = Environment(loader=DictLoader(TEMPLATES), autoescape=select_autoescape(["html"]))


class EmailNotifier:
    """Renders Jinja2 templates and delivers them over SMTP."""

    def __init__(self, settings: Settings, deliver: Optional[Callable[[EmailMessage], None]] = None):
        self.settings = settings
        self._deliver = deliver or self._smtp_deliver

    @property
    def configured(self) -> bool:
        return bool(self.settings.email_user)

    def _smtp_deliver(self, message: EmailMessage) -> None:
        s = self.settings
        with smtplib.SMTP(s.email_host, s.email_port, timeout=30) as smtp:
            if s.email_use_tls:
                smtp.starttls()
            smtp.login(s.email_user, s.email_password)
            smtp.send_message(message)

    def build_message(self, to: str, subject: str, text: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = f'"{self.settings.company_name}" <{self.settings.email_user}>'
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text or subject)
        message.add_alternative(html, subtype="html")
        return message

    async def send_email(self, to: str, subject: str, text: str, html: str) -> bool:
        if not self.configured:
            logger.info("Email not configured, would send %r to %s", subject, to)
            return True
        try:
            message = self.build_message(to, subject, text, html)
            await asyncio.to_thread(self._deliver, message)
        except Exception as e:
            logger.error("Error sending email to %s: %s", to, e)
            return False
        logger.info("Email sent to %s", to)
        return True

    async def notify(self, transaction: Dict[str, Any]) -> bool:
        """Payment confirmation for a completed transaction."""
        try:
            method = transaction["payment_method"].upper()
            html = env.get_template("payment_confirmation.html").render(
                txn=transaction,
                details=transaction.get("payment_details") or {},
                method=method,
                crypto=is_crypto_payment(transaction["payment_method"]),
                card=is_card_payment(transaction["payment_method"]),
                company=self.settings.company_name,
            )
            to = transaction["customer_info"]["email"]
            text = f"Your {method} payment of ${transaction['amount']} has been processed successfully."
        except Exception as e:
            logger.error("Could not render payment confirmation for %s: %s", transaction.get("id"), e)
            return False
        return await self.send_email(to, f"Payment Confirmation - {transaction['id']}", text, html)

    async def send_ticket_confirmation(self, ticket: Dict[str, Any]) -> bool:
        try:
            html = env.get_template(f"{ticket['type']}_confirmation.html").render(
                ticket=ticket,
                company=self.settings.company_name,
            )
            subject = TICKET_SUBJECTS[ticket["type"]]
        except Exception as e:
            logger.error("Could not render confirmation for ticket %s: %s", ticket.get("id"), e)
            return False
        return await self.send_email(ticket["email"], subject, "", html)
