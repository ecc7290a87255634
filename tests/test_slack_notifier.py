# tests/test_slack_notifier.py
import json

import httpx
import pytest

from build_notify.adapters.slack_notifier import SlackNotifier

WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"


def make_notifier(handler, webhook_url: str = WEBHOOK_URL) -> SlackNotifier:
    return SlackNotifier(webhook_url, transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_send_posts_payload_as_json():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text="ok")

    payload = {"channel": "#dev", "attachments": [{"text": "hi", "fallback": "hi", "color": "good"}]}

    assert await make_notifier(handler).send(payload) is True
    assert len(requests) == 1
    assert requests[0].method == "POST"
    assert str(requests[0].url) == WEBHOOK_URL
    assert json.loads(requests[0].content) == payload


@pytest.mark.anyio
async def test_send_returns_false_on_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="no_service")

    assert await make_notifier(handler).send({"text": "hi"}) is False


@pytest.mark.anyio
async def test_send_returns_false_on_request_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert await make_notifier(handler).send({"text": "hi"}) is False


@pytest.mark.anyio
async def test_send_without_webhook_skips_request():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200)

    assert await make_notifier(handler, webhook_url="").send({"text": "hi"}) is False
    assert requests == []
