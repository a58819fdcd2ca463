"""Mail service for emailing new-report alerts over SMTP."""
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

from app.models.report import ReportResponse
from app.utils.dates import format_display
from app.utils.text import or_unknown

logger = logging.getLogger(__name__)


class Mailer:
    """Sends one plaintext alert per new report to a fixed recipient."""

    def __init__(
        self,
        host: Optional[str],
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        recipient: Optional[str] = None,
        use_tls: bool = True,
        enabled: bool = True,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.recipient = recipient
        self.use_tls = use_tls
        self.enabled = enabled

    @classmethod
    def from_settings(cls, settings) -> "Mailer":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            sender=settings.MAIL_FROM,
            recipient=settings.ALERT_EMAIL_TO,
            use_tls=settings.SMTP_USE_TLS,
            enabled=settings.MAIL_ENABLED,
        )

    def is_configured(self) -> bool:
        return bool(self.enabled and self.host and self.recipient and self.sender)

    def compose(self, report: ReportResponse) -> MIMEMultipart:
        message = MIMEMultipart()
        message["From"] = self.sender
        message["To"] = self.recipient
        message["Subject"] = f"🚨 New {or_unknown(report.severity)} report: {or_unknown(report.incident)}"

        body = f"""
A new emergency report was submitted.

Role: {or_unknown(report.role)}
Patient Name: {or_unknown(report.patient_name)}
Location: {or_unknown(report.location)}
Incident: {or_unknown(report.incident)}
Severity: {or_unknown(report.severity)}
Symptoms: {or_unknown(report.symptoms)}
Reported At: {format_display(report.created_at)}
        """.strip()

        message.attach(MIMEText(body, "plain"))
        return message

    def send_alert(self, report: ReportResponse) -> bool:
        """Email the report to the configured recipient. Never raises."""
        if not self.is_configured():
            logger.info(f"Mail not configured, skipping alert for report {report.id}")
            return False

        try:
            message = self.compose(report)
            with smtplib.SMTP(self.host, self.port) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(message)
        except Exception as e:
            logger.error(f"⚠️ Alert email failed for report {report.id}: {e}", exc_info=True)
            return False

        logger.info(f"✅ Alert email for report {report.id} sent to {self.recipient}")
        return True
