# =============================================================================
# File: tests/test_email.py
# Description: Mention email templates and the SMTP adapter
# =============================================================================

import pytest

from collabhub.config.email_config import EmailConfig
from collabhub.infra.email.smtp_sender import SmtpEmailSender
from collabhub.notification.email_templates import (
    mention_subject,
    mention_template_data,
    render,
)


def _data(**overrides):
    data = mention_template_data("Bob", "Alice", "Apollo", "Hello @Bob")
    data.update(overrides)
    return data


class TestTemplates:

    def test_subject(self):
        assert mention_subject("Apollo", "Alice") == "[Apollo] Alice mentioned you"

    def test_text_body(self):
        rendered = render(_data())
        assert rendered.text == 'Hi Bob, Alice mentioned you in "Apollo": Hello @Bob'

    def test_html_is_escaped(self):
        rendered = render(_data(message_preview="<script>alert(1)</script>", mentioned_by="A&B"))
        assert "<script>" not in rendered.html
        assert "&lt;script&gt;" in rendered.html
        assert "A&amp;B" in rendered.html

    def test_unknown_template(self):
        with pytest.raises(KeyError):
            render({"template": "digest"})


class TestSmtpEmailSender:

    def test_not_configured_without_host(self):
        sender = SmtpEmailSender(EmailConfig(smtp_host=""))
        assert sender.is_configured is False

    def test_disabled_switch(self):
        sender = SmtpEmailSender(EmailConfig(smtp_host="smtp.example.com", enabled=False))
        assert sender.is_configured is False

    @pytest.mark.asyncio
    async def test_send_skips_when_not_configured(self, monkeypatch):
        sender = SmtpEmailSender(EmailConfig(smtp_host=""))

        def _fail(msg):
            raise AssertionError("should not connect")

        monkeypatch.setattr(sender, "_send_sync", _fail)
        await sender.send("bob@example.com", "subject", _data())

    @pytest.mark.asyncio
    async def test_send_hands_message_to_worker(self, monkeypatch):
        sender = SmtpEmailSender(EmailConfig(smtp_host="smtp.example.com", from_address="hub@example.com"))
        sent = []
        monkeypatch.setattr(sender, "_send_sync", sent.append)

        await sender.send("bob@example.com", "[Apollo] Alice mentioned you", _data())

        assert len(sent) == 1
        assert sent[0]["To"] == "bob@example.com"
        assert sent[0]["From"] == "hub@example.com"

    def test_build_message_is_multipart(self):
        sender = SmtpEmailSender(EmailConfig(smtp_host="smtp.example.com"))

        msg = sender.build_message("bob@example.com", "[Apollo] Alice mentioned you", _data())

        assert msg["Subject"] == "[Apollo] Alice mentioned you"
        assert msg.is_multipart()
        content_types = [part.get_content_type() for part in msg.iter_parts()]
        assert content_types == ["text/plain", "text/html"]

    @pytest.mark.asyncio
    async def test_smtp_errors_propagate(self, monkeypatch):
        sender = SmtpEmailSender(EmailConfig(smtp_host="smtp.example.com"))

        def _refuse(msg):
            raise ConnectionRefusedError("no smtp")

        monkeypatch.setattr(sender, "_send_sync", _refuse)
        with pytest.raises(ConnectionRefusedError):
            await sender.send("bob@example.com", "s", _data())
