# =============================================================================
# File: collabhub/infra/email/smtp_sender.py
# Description: SMTP adapter for EmailSenderPort (smtplib in a worker thread)
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Any, Dict, Optional

from collabhub.config.email_config import EmailConfig, get_email_config
from collabhub.notification.email_templates import render

log = logging.getLogger("collabhub.infra.email")


class SmtpEmailSender:
    """
    Sends templated multipart (text + html) mail.

    smtplib is blocking, so each send runs in asyncio.to_thread. Errors
    propagate to the caller; the side-effect runner is what keeps them away
    from the chat flow.
    """

    def __init__(self, config: Optional[EmailConfig] = None):
        self.config = config or get_email_config()

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def build_message(self, to: str, subject: str, template_data: Dict[str, Any]) -> EmailMessage:
        rendered = render(template_data)

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.config.from_address
        msg["To"] = to
        msg.set_content(rendered.text)
        msg.add_alternative(rendered.html, subtype="html")
        return msg

    async def send(self, to: str, subject: str, template_data: Dict[str, Any]) -> None:
        if not self.is_configured:
            log.info(f"SMTP not configured, skipping email to {to}: {subject}")
            return

        msg = self.build_message(to, subject, template_data)
        await asyncio.to_thread(self._send_sync, msg)
        log.info(f"Email sent to {to}: {subject}")

    def _send_sync(self, msg: EmailMessage) -> None:
        cfg = self.config
        with smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=cfg.timeout_seconds) as smtp:
            if cfg.use_tls:
                smtp.starttls()
            if cfg.smtp_user:
                smtp.login(cfg.smtp_user, cfg.smtp_password.get_secret_value())
            smtp.send_message(msg)
