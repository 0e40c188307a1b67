"""
Meeting summariser – forwards the transcript to the configured webhook.

The webhook either answers with structured JSON, which is rendered into the
plain-text layout the rest of the app parses, or with free text, which is
used as-is.
"""

from __future__ import annotations

from typing import List, Optional

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError as PydanticValidationError

from core.errors import ValidationError, WebhookError

MISSING = "N/A"


class ActionItem(BaseModel):
    task: str
    assignee: Optional[str] = None
    due_date: Optional[str] = None


class FollowUpReminder(BaseModel):
    reminder: str
    due_date: Optional[str] = None
    context: Optional[str] = None


class WebhookResponse(BaseModel):
    summary: str
    action_items: Optional[List[ActionItem]] = None
    decisions_made: Optional[List[str]] = None
    follow_up_reminders: Optional[List[FollowUpReminder]] = None


def _or_missing(value: Optional[str]) -> str:
    return value if value else MISSING


def format_webhook_response(response: WebhookResponse) -> str:
    sections = [f"Summary:\n{response.summary}"]

    if response.action_items:
        lines = [
            f"  - {item.task} (Assignee: {_or_missing(item.assignee)}, Due: {_or_missing(item.due_date)})"
            for item in response.action_items
        ]
        sections.append("Action Items:\n" + "\n".join(lines))

    if response.decisions_made:
        lines = [f"  - {decision}" for decision in response.decisions_made]
        sections.append("Decisions Made:\n" + "\n".join(lines))

    if response.follow_up_reminders:
        lines = [
            f"  - {item.reminder} (Due: {_or_missing(item.due_date)}, Context: {_or_missing(item.context)})"
            for item in response.follow_up_reminders
        ]
        sections.append("Follow-up Reminders:\n" + "\n".join(lines))

    return "\n\n".join(sections).strip()


def render_summary(body: str) -> str:
    """Render a webhook body into display text, falling back to the raw body."""
    try:
        payload = WebhookResponse.model_validate_json(body)
    except PydanticValidationError:
        logger.debug("Webhook body is not structured JSON, using raw text ({} chars)", len(body))
        return body
    return format_webhook_response(payload)


async def summarize(
    transcript: str,
    endpoint: str,
    client: httpx.AsyncClient,
    timeout: float = 120.0,
) -> str:
    """
    POST the transcript as text/plain to `endpoint` and return display-ready
    summary text. Single attempt; callers decide whether to retry.
    """
    if not transcript or not transcript.strip():
        raise ValidationError("Transcript cannot be empty.")

    logger.info("Sending transcript ({} chars) to summarization webhook", len(transcript))
    try:
        response = await client.post(
            endpoint,
            content=transcript.encode("utf-8"),
            headers={"Content-Type": "text/plain"},
            timeout=timeout,
        )
    except httpx.HTTPError as exc:
        logger.error("Summarization webhook unreachable: {}", exc)
        raise WebhookError(f"Webhook request failed: {exc}") from exc

    if not response.is_success:
        logger.warning("Summarization webhook returned {}", response.status_code)
        raise WebhookError(
            f"Webhook request failed with status: {response.status_code}. Body: {response.text}",
            status=response.status_code,
            body=response.text,
        )

    return render_summary(response.text)
