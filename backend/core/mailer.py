# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Outbound email.

Services depend on the :class:`Mailer` protocol only; the SMTP implementation
is wired in by ``auth.dependencies.get_mailer`` and replaced by a fake in the
test-suite.
"""

import smtplib
import ssl
from email.message import EmailMessage
from typing import Protocol

from core.config import settings


class MailDeliveryError(Exception):
    """The message could not be handed to the mail server."""


class Mailer(Protocol):
    def deliver(self, recipient: str, subject: str, body: str) -> None: ...


class SmtpMailer:
    """Send HTML mail through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        sender: str = "",
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "SmtpMailer":
        return cls(
            host=settings.email_host,
            port=settings.email_port,
            username=settings.email_user,
            password=settings.email_pass,
            sender=settings.email_from,
        )

    def _build(self, recipient: str, subject: str, body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = f'"{self.sender}" <{self.sender}>'
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.set_content("This message requires an HTML-capable mail client.")
        msg.add_alternative(body, subtype="html")
        return msg

    def deliver(self, recipient: str, subject: str, body: str) -> None:
        if not self.host:
            raise MailDeliveryError("EMAIL_HOST is not configured")

        msg = self._build(recipient, subject, body)
        context = ssl.create_default_context()
        try:
            # 465 is implicit TLS; every other port starts in plaintext and
            # upgrades when the server offers STARTTLS.
            if self.port == 465:
                client = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)
            else:
                client = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            with client:
                client.ehlo()
                if self.port != 465 and client.has_extn("starttls"):
                    client.starttls(context=context)
                    client.ehlo()
                if self.username:
                    client.login(self.username, self.password)
                client.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(f"SMTP delivery to {self.host}:{self.port} failed: {exc}") from exc
