# =============================================================================
# File: collabhub/notification/ports/email_sender_port.py
# Description: Port interface for outbound email
# Pattern: Hexagonal Architecture / Ports & Adapters
# =============================================================================

from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class EmailSenderPort(Protocol):
    """
    Port: Email sender

    Implemented by: SmtpEmailSender (collabhub/infra/email/smtp_sender.py)

    template_data carries the rendered-template inputs; the adapter picks
    the template by template_data["template"].
    """

    async def send(self, to: str, subject: str, template_data: Dict[str, Any]) -> None:
        """Send one email. Raises on delivery failure."""
        ...
