"""
Notification dispatchers for password reset links.
"""

import asyncio
import logging
import smtplib
from email.mime.text import MIMEText
from urllib.parse import quote

from fastapi import BackgroundTasks

from src.app.services.notification import INotificationDispatcher

logger = logging.getLogger(__name__)


def build_reset_link(url_template: str, email: str, token: str) -> str:
    return url_template.format(token=quote(token, safe=""), email=quote(email, safe=""))


class LoggingNotificationDispatcher(INotificationDispatcher):
    """Development dispatcher: logs that a reset link was produced instead of mailing it."""

    def __init__(self, url_template: str):
        self.url_template = url_template

    async def send_password_reset_email(self, email: str, token: str) -> None:
        link = build_reset_link(self.url_template, email, token)
        logger.warning(f"SMTP not configured, password reset email to {email} was not sent")
        logger.debug(f"Password reset link for {email}: {link}")


class SmtpNotificationDispatcher(INotificationDispatcher):
    """Sends reset links over SMTP from a worker thread."""

    def __init__(
        self,
        url_template: str,
        host: str,
        port: int,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        from_address: str = "no-reply@example.com",
        from_name: str = "Auth Service",
    ):
        self.url_template = url_template
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_address = from_address
        self.from_name = from_name

    async def send_password_reset_email(self, email: str, token: str) -> None:
        link = build_reset_link(self.url_template, email, token)
        message = MIMEText(
            "You are receiving this email because we received a password reset "
            f"request for your account.\n\nReset your password: {link}\n\n"
            "This link will expire soon. If you did not request a password reset, "
            "no further action is required.\n",
            "plain",
            "utf-8",
        )
        message["Subject"] = "Reset Password Notification"
        message["From"] = f"{self.from_name} <{self.from_address}>"
        message["To"] = email

        await asyncio.to_thread(self._send, message)
        logger.info(f"Password reset email sent to {email}")

    def _send(self, message: MIMEText) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=10) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(message)


class BackgroundNotificationDispatcher(INotificationDispatcher):
    """
    Schedules delivery on FastAPI background tasks so it runs after the
    response is sent. Response time is the same whether or not mail goes out.
    """

    def __init__(self, delegate: INotificationDispatcher, background_tasks: BackgroundTasks):
        self.delegate = delegate
        self.background_tasks = background_tasks

    async def send_password_reset_email(self, email: str, token: str) -> None:
        self.background_tasks.add_task(self._deliver, email, token)

    async def _deliver(self, email: str, token: str) -> None:
        try:
            await self.delegate.send_password_reset_email(email, token)
        except Exception:
            logger.exception(f"Failed to deliver password reset email to {email}")
