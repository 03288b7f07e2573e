"""
SMTP email delivery.

When no SMTP host is configured (development), messages are logged instead
of sent.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from typing import Optional

from src.app.services.email_sender import DocumentReviewedEmail, IEmailSender, InvitationEmail

logger = logging.getLogger(__name__)

FROM_NAME = "Onboarding"


class SmtpEmailSender(IEmailSender):
    def __init__(
        self,
        host: str = "",
        port: int = 587,
        user: str = "",
        password: str = "",
        from_email: str = "noreply@localhost",
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.from_email = from_email

    @classmethod
    def from_config(cls, config) -> "SmtpEmailSender":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            user=config.SMTP_USER,
            password=config.SMTP_PASSWORD,
            from_email=config.FROM_EMAIL,
        )

    def _send(self, to: str, subject: str, html_body: str, text_body: Optional[str] = None) -> bool:
        if not self.host:
            logger.info(f"[EMAIL-DEV] To: {to} | Subject: {subject}")
            logger.debug(f"[EMAIL-DEV] Body: {text_body or html_body[:200]}")
            return True

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{FROM_NAME} <{self.from_email}>"
        msg["To"] = to
        if text_body:
            msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))

        try:
            with smtplib.SMTP(self.host, self.port, timeout=10) as server:
                server.starttls()
                if self.user and self.password:
                    server.login(self.user, self.password)
                server.sendmail(self.from_email, to, msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to}: {e}")
            return False

        logger.info(f"Email sent to {to}: {subject}")
        return True

    def send_invitation(self, message: InvitationEmail) -> bool:
        subject = f"You've been invited to join {message.company_name}"
        greeting = f"Hi {message.invitee_name}," if message.invitee_name else "Hi,"
        role = message.role.replace("_", " ")

        text = (
            f"{greeting}\n\n"
            f"You have been invited to join {message.company_name} as {role}.\n"
            f"Accept the invitation: {message.accept_url}\n"
            f"This invitation expires on {message.expires_at}.\n"
        )
        credentials_html = ""
        if message.generated_email and message.temporary_password:
            text += (
                f"\nYour work mailbox: {message.generated_email}\n"
                f"Temporary password: {message.temporary_password}\n"
            )
            credentials_html = f"""
        <p>Your work mailbox: <strong>{escape(message.generated_email)}</strong><br>
        Temporary password: <code>{escape(message.temporary_password)}</code></p>"""

        html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <p>{escape(greeting)}</p>
        <p>You have been invited to join <strong>{escape(message.company_name)}</strong>
        as {escape(role)}.</p>{credentials_html}
        <p><a href="{escape(message.accept_url)}"
              style="display: inline-block; padding: 12px 24px; background: #1e40af;
                     color: white; text-decoration: none; border-radius: 6px;">
            Accept Invitation
        </a></p>
        <p style="color: #6b7280; font-size: 12px;">
            This invitation expires on {escape(message.expires_at)}.</p>
    </div>"""
        return self._send(message.to, subject, html, text)

    def send_document_reviewed(self, message: DocumentReviewedEmail) -> bool:
        outcome = "approved" if message.approved else "rejected"
        document = message.document_type.replace("_", " ")
        subject = f"Your {document} document was {outcome}"

        text = f"Your {document} document was {outcome}."
        reason_html = ""
        if not message.approved and message.rejection_reason:
            text += f"\nReason: {message.rejection_reason}\nPlease upload a new version."
            reason_html = f"""
        <p>Reason: {escape(message.rejection_reason)}</p>
        <p>Please upload a new version.</p>"""

        html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <p>Your <strong>{escape(document)}</strong> document was {outcome}.</p>{reason_html}
    </div>"""
        return self._send(message.to, subject, html, text)
