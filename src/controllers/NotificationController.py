import asyncio
import html
import logging
import smtplib
from enum import Enum
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from .BaseController import BaseController
from models.DB_schemas.interview import InterviewReport

logger = logging.getLogger(__name__)

NEXT_STEP_MESSAGES = {
    "onsite": "We'd like to invite you for an onsite interview. Our team will contact you soon to schedule this.",
    "hr": "We'd like to move forward with HR discussions. Our HR team will reach out to you shortly.",
    "reject": "Thank you for your time. We'll keep your information on file for future opportunities.",
}


class DeliveryStatus(Enum):
    SENT = "sent"
    FAILED = "failed"
    UNAVAILABLE = "unavailable"


def _list_items(items: list[str]) -> str:
    return "".join(f"<li>{html.escape(item)}</li>" for item in items)


class NotificationController(BaseController):
    """Sends the recruitment emails through the configured SMTP relay."""

    def __init__(self, capabilities=None):
        super().__init__(capabilities)

    def _deliver(self, to_email: str, subject: str, html_body: str) -> None:
        settings = self.app_settings
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = settings.SMTP_USER
        msg["To"] = to_email
        msg.attach(MIMEText(html_body, "html"))

        if settings.SMTP_PORT == 465:
            with smtplib.SMTP_SSL(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
                server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                server.sendmail(settings.SMTP_USER, to_email, msg.as_string())
        else:
            with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
                server.starttls()
                server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                server.sendmail(settings.SMTP_USER, to_email, msg.as_string())

    async def send(self, to_email: str, subject: str, html_body: str) -> DeliveryStatus:
        """Send one HTML email. Failures are logged and reported, never raised."""
        if not self.capabilities.email:
            logger.warning(f"Email is not configured; not sending '{subject}' to {to_email}")
            return DeliveryStatus.UNAVAILABLE
        if not to_email:
            logger.warning(f"No recipient for '{subject}'")
            return DeliveryStatus.FAILED
        try:
            await asyncio.to_thread(self._deliver, to_email, subject, html_body)
        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return DeliveryStatus.FAILED
        logger.info(f"Email '{subject}' sent to {to_email}")
        return DeliveryStatus.SENT

    async def send_shortlist_email(self, to_email: str, candidate_name: str) -> DeliveryStatus:
        name = html.escape(candidate_name or "there")
        body = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h2 style="color: #2563eb;">Congratulations {name}!</h2>
          <p>Great news! Your application has been reviewed and you've been shortlisted for the next round of interviews.</p>
          <p>We were impressed by your qualifications and would like to schedule an interview with you.</p>
          <p><a href="{self.app_settings.CALENDLY_LINK}"
                style="background-color: #2563eb; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px;">
            Schedule Your Interview
          </a></p>
          <p>Please use the link above to select a convenient time for your interview.</p>
          <p>Best regards,<br>The Hiring Team</p>
        </div>
        """
        return await self.send(to_email, "Congratulations! You've been shortlisted for an interview", body)

    async def send_admin_report(self, candidate_name: str, candidate_email: str,
                                report: InterviewReport) -> DeliveryStatus:
        if not self.app_settings.ADMIN_EMAIL:
            logger.warning("ADMIN_EMAIL is not set; skipping the interview report email")
            return DeliveryStatus.UNAVAILABLE
        body = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h2 style="color: #2563eb;">Interview Completed</h2>
          <p><strong>Candidate:</strong> {html.escape(candidate_name)} ({html.escape(candidate_email)})</p>
          <p><strong>Overall Score:</strong> {report.overall_score}/100</p>
          <p><strong>Recommendation:</strong> {report.recommended_next_step}</p>
          <h3>Strengths:</h3>
          <ul>{_list_items(report.strengths)}</ul>
          <h3>Areas for Improvement:</h3>
          <ul>{_list_items(report.weaknesses)}</ul>
          <h3>Detailed Notes:</h3>
          <p>{html.escape(report.detailed_notes)}</p>
        </div>
        """
        return await self.send(self.app_settings.ADMIN_EMAIL, f"Interview Completed: {candidate_name}", body)

    async def send_candidate_follow_up(self, to_email: str, candidate_name: str,
                                       report: InterviewReport) -> DeliveryStatus:
        body = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h2 style="color: #2563eb;">Thank you, {html.escape(candidate_name)}!</h2>
          <p>Thank you for completing the interview. We appreciate the time you took to speak with us.</p>
          <p><strong>Next Steps:</strong> {NEXT_STEP_MESSAGES[report.recommended_next_step]}</p>
          <p>Best regards,<br>The Hiring Team</p>
        </div>
        """
        return await self.send(to_email, "Interview Follow-up", body)
