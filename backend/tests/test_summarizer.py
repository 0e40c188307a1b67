import asyncio
import json

import httpx
import pytest

from core.errors import ValidationError, WebhookError
from services.summarizer import WebhookResponse, format_webhook_response, render_summary, summarize

ENDPOINT = "http://webhook.test/summarize"


def _summarize(transcript, handler):
    async def _main():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await summarize(transcript, ENDPOINT, client)

    return asyncio.run(_main())


def test_summary_only_renders_single_section():
    text = render_summary(json.dumps({"summary": "We agreed on the roadmap."}))
    assert text == "Summary:\nWe agreed on the roadmap."


def test_action_items_render_with_assignee_and_due_date():
    body = {
        "summary": "Discussed X",
        "action_items": [{"task": "Fix bug", "assignee": "Alice", "due_date": "January 5, 2025"}],
    }
    text = render_summary(json.dumps(body))
    assert text.startswith("Summary:\nDiscussed X\n\nAction Items:\n")
    assert "  - Fix bug (Assignee: Alice, Due: January 5, 2025)" in text.splitlines()


def test_all_sections_in_order_separated_by_blank_lines():
    response = WebhookResponse(
        summary="Sprint review",
        action_items=[{"task": "Ship", "assignee": "Bo", "due_date": "March 1, 2025"}],
        decisions_made=["Adopt weekly releases"],
        follow_up_reminders=[{"reminder": "Check metrics", "due_date": "March 8, 2025", "context": "launch"}],
    )
    assert format_webhook_response(response) == (
        "Summary:\nSprint review\n\n"
        "Action Items:\n  - Ship (Assignee: Bo, Due: March 1, 2025)\n\n"
        "Decisions Made:\n  - Adopt weekly releases\n\n"
        "Follow-up Reminders:\n  - Check metrics (Due: March 8, 2025, Context: launch)"
    )


def test_empty_lists_are_omitted_and_missing_fields_shown_as_na():
    body = {"summary": "S", "decisions_made": [], "action_items": [{"task": "Call vendor"}]}
    text = render_summary(json.dumps(body))
    assert "Decisions Made" not in text
    assert "  - Call vendor (Assignee: N/A, Due: N/A)" in text


def test_non_json_body_is_returned_verbatim():
    raw = "Title: Weekly sync\nKey Discussion Points:\n- Budget\n"
    assert render_summary(raw) == raw


def test_json_without_summary_falls_back_to_raw_text():
    raw = json.dumps({"result": "ok"})
    assert render_summary(raw) == raw


def test_summarize_posts_plain_text_transcript():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"summary": "Short meeting"})

    assert _summarize("Alice: hello\nBob: hi", handler) == "Summary:\nShort meeting"
    assert seen[0].method == "POST"
    assert seen[0].headers["content-type"] == "text/plain"
    assert seen[0].content == b"Alice: hello\nBob: hi"


def test_summarize_non_success_raises_webhook_error():
    with pytest.raises(WebhookError) as info:
        _summarize("transcript", lambda request: httpx.Response(500, text="model overloaded"))
    assert info.value.status == 500
    assert info.value.body == "model overloaded"
    assert "500" in info.value.message


def test_summarize_transport_failure_raises_webhook_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(WebhookError) as info:
        _summarize("transcript", handler)
    assert info.value.status is None


def test_summarize_rejects_blank_transcript_without_calling_webhook():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, text="unused")

    with pytest.raises(ValidationError):
        _summarize("   \n", handler)
    assert calls == []
