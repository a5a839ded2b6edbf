"""
Notification Service

Approval notifications for content that waits on design approval. Sending is
fire-and-forget: the lifecycle operation that triggered it has already
committed and never waits on, or fails because of, the mail transport.
"""

import asyncio
import logging
import re
import smtplib
from dataclasses import dataclass, field
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Any, Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape

from pagecms.config import Settings, settings
from pagecms.models.enums import WorkflowStatus
from pagecms.utils.urls import build_cms_edit_url, build_preview_url

logger = logging.getLogger(__name__)

ADMIN_TEMPLATE = "approval_request"
AUTHOR_TEMPLATE = "approval_submitted"

_author_pattern = re.compile(r"^\s*(?P<name>[^<]*?)\s*<(?P<email>[^>]+)>\s*$")


class NotificationSender(Protocol):
    async def send(self, template_selector: str, recipients: list[str], template_data: dict[str, Any]) -> None: ...


@dataclass
class NotificationRequest:
    template_selector: str
    recipients: list[str]
    template_data: dict[str, Any] = field(default_factory=dict)


def parse_author(author: str | None) -> tuple[str, str]:
    """Split ``"Name <email>"`` into its parts; a bare address is used as both."""
    author = (author or "").strip()
    match = _author_pattern.match(author)
    if match:
        email = match.group("email").strip()
        return match.group("name") or email, email
    if "@" in author:
        return author, author
    return author, ""


class ApprovalNotifier:
    """Builds approval notifications for a content version and dispatches them in the background."""

    def __init__(self, sender: NotificationSender, config: Settings = settings):
        self.sender = sender
        self.config = config
        # Strong references keep scheduled sends alive until they finish
        self._tasks: set[asyncio.Task] = set()

    def should_notify(self, content) -> bool:
        return content.workflow_status == WorkflowStatus.WAITING_DESIGN.value and bool(content.approval_email)

    def build_requests(self, page_kind: str, content) -> list[NotificationRequest]:
        if not self.should_notify(content):
            return []

        author = content.revision.author if content.revision is not None else ""
        author_name, author_email = parse_author(author)
        data = {
            "category": self.config.approval_email_category,
            "language": content.language,
            "pageTitle": content.title,
            "author": author_name,
            "urlPreview": build_preview_url(self.config.web_base_url, content.language, page_kind, content.id),
            "urlCms": build_cms_edit_url(
                self.config.cms_base_url, page_kind, content.page_id, content.id, content.language
            ),
        }

        requests = [NotificationRequest(ADMIN_TEMPLATE, list(content.approval_email), dict(data))]
        if author_email:
            requests.append(NotificationRequest(AUTHOR_TEMPLATE, [author_email], dict(data)))
        return requests

    def notify_approval(self, page_kind: str, content) -> asyncio.Task | None:
        """Schedule the approval notifications for ``content``; returns the background task if any."""
        requests = self.build_requests(page_kind, content)
        if not requests:
            return None
        task = asyncio.create_task(self._dispatch(requests))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _dispatch(self, requests: list[NotificationRequest]) -> None:
        for request in requests:
            try:
                await self.sender.send(request.template_selector, request.recipients, request.template_data)
                logger.info(f"Sent '{request.template_selector}' notification to {len(request.recipients)} recipient(s)")
            except Exception:
                logger.exception(f"Failed to send '{request.template_selector}' notification")

    async def drain(self) -> None:
        """Wait for notifications still in flight, e.g. on shutdown."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)


class EmailNotificationSender:
    """Renders notification templates with Jinja2 and delivers them over SMTP."""

    SUBJECTS = {
        ADMIN_TEMPLATE: "Approval requested: {pageTitle}",
        AUTHOR_TEMPLATE: "Submitted for approval: {pageTitle}",
    }

    def __init__(self, config: Settings = settings):
        template_dir = Path(__file__).parent.parent / "templates" / "emails"
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.config = config

    def render(self, template_selector: str, template_data: dict[str, Any]) -> tuple[str, str]:
        template = self.env.get_template(f"{template_selector}.html")
        html_body = template.render(app_name=self.config.app_name, **template_data)
        subject = self.SUBJECTS.get(template_selector, template_selector).format(**template_data)
        return subject, html_body

    async def send(self, template_selector: str, recipients: list[str], template_data: dict[str, Any]) -> None:
        subject, html_body = self.render(template_selector, template_data)
        await asyncio.to_thread(self._send_email, recipients, subject, html_body)

    def _send_email(self, recipients: list[str], subject: str, html_body: str) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.config.smtp_from
        msg["To"] = ", ".join(recipients)
        msg.attach(MIMEText(html_body, "html"))

        with smtplib.SMTP(self.config.smtp_host, self.config.smtp_port) as server:
            server.starttls()
            if self.config.smtp_user and self.config.smtp_password:
                server.login(self.config.smtp_user, self.config.smtp_password)
            server.send_message(msg)


_approval_notifier: ApprovalNotifier | None = None


def get_approval_notifier() -> ApprovalNotifier:
    """Process-wide notifier, so in-flight sends outlive the request that scheduled them."""
    global _approval_notifier
    if _approval_notifier is None:
        _approval_notifier = ApprovalNotifier(EmailNotificationSender())
    return _approval_notifier
