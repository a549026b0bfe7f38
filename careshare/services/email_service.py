'''
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
'''

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from careshare.config import settings
from careshare.db import models
from careshare.logging_config import get_logger

logger = get_logger(__name__)


class EmailService:
    def __init__(self):
        self.sg = SendGridAPIClient(settings.sendgrid_api_key)
        self.sender_email = settings.mail_sender_email
        self.sender_name = settings.mail_sender_name

    async def send_pending_email(self, volunteer: models.Volunteer):
        """
        Tells a newly registered volunteer that an administrator still has to
        approve the account.
        """
        subject = "We received your Care and Share registration"
        html_content = f"""
        <html>
        <body>
            <p>Hi {volunteer.first_name},</p>
            <p>Thank you for registering with <strong>Care and Share</strong>.</p>
            <p>Your account is pending review. We will email you again as soon as an administrator
            approves it.</p>
            <p>Best regards,</p>
            <p>{self.sender_name}</p>
        </body>
        </html>
        """
        await self._send_email(volunteer.email, subject, html_content)

    async def send_approval_email(self, volunteer: models.Volunteer):
        """
        Tells a volunteer that their account was approved and where to log in.
        """
        subject = "Your Care and Share account has been approved!"
        html_content = f"""
        <html>
        <body>
            <h3>Welcome to the team, {volunteer.first_name}!</h3>
            <p>Your registration with <strong>Care and Share</strong> has been approved by our
            administrators.</p>
            <p>You can now <a href="{settings.login_url}">log in</a> to start tracking your volunteer
            hours.</p>
            <p>Best regards,</p>
            <p>{self.sender_name}</p>
        </body>
        </html>
        """
        await self._send_email(volunteer.email, subject, html_content)

    async def _send_email(self, to_email: str, subject: str, html_content: str):
        """
        Internal helper to send an email using SendGrid. Delivery is best
        effort: failures are logged, never raised.
        """
        message = Mail(
            from_email=(self.sender_email, self.sender_name),
            to_emails=to_email,
            subject=subject,
            html_content=html_content
        )
        try:
            response = self.sg.send(message)
            logger.info("Email sent to %s. Status Code: %s", to_email, response.status_code)
        except Exception as e:
            logger.error("Error sending email to %s: %s", to_email, e)
