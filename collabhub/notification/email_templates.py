# =============================================================================
# File: collabhub/notification/email_templates.py
# Description: Email templates (subject / text / html) for notification mail
# =============================================================================

from __future__ import annotations

from html import escape
from typing import Any, Dict, NamedTuple

MENTION_TEMPLATE = "mention"


class RenderedEmail(NamedTuple):
    text: str
    html: str


def mention_subject(project_title: str, mentioned_by: str) -> str:
    return f"[{project_title}] {mentioned_by} mentioned you"


def mention_template_data(to_name: str, mentioned_by: str, project_title: str, message_preview: str) -> Dict[str, Any]:
    return {
        "template": MENTION_TEMPLATE,
        "to_name": to_name,
        "mentioned_by": mentioned_by,
        "project_title": project_title,
        "message_preview": message_preview,
    }


def render_mention(data: Dict[str, Any]) -> RenderedEmail:
    to_name = data.get("to_name", "")
    mentioned_by = data.get("mentioned_by", "")
    project_title = data.get("project_title", "")
    preview = data.get("message_preview", "")

    text = f'Hi {to_name}, {mentioned_by} mentioned you in "{project_title}": {preview}'
    html = (
        '<div style="font-family:sans-serif;max-width:560px;margin:0 auto;">'
        '<h2 style="color:#22d3ee;">You were mentioned</h2>'
        f'<p>Hi <strong>{escape(to_name)}</strong>,</p>'
        f'<p><strong>{escape(mentioned_by)}</strong> mentioned you in <strong>{escape(project_title)}</strong>:</p>'
        '<blockquote style="border-left:3px solid #22d3ee;padding:8px 12px;margin:12px 0;'
        'background:#f8fafc;color:#334155;">'
        f'{escape(preview)}'
        '</blockquote>'
        '<p>Log in to reply.</p>'
        '</div>'
    )
    return RenderedEmail(text=text, html=html)


TEMPLATES = {
    MENTION_TEMPLATE: render_mention,
}


def render(template_data: Dict[str, Any]) -> RenderedEmail:
    """Render by template_data["template"]; KeyError for unknown templates."""
    return TEMPLATES[template_data["template"]](template_data)
