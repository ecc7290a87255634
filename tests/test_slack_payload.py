# tests/test_slack_payload.py
import pytest

from build_notify.adapters.slack_payload import (
    AttachmentField,
    build_payload,
    parse_fields,
    resolve_channel,
    resolve_color,
)
from build_notify.application.services.composer import ComposedMessage, compose
from build_notify.domain.build import Build, NotificationConfig, Plugin
from build_notify.domain.errors import FieldsJSONError


# --- fields -----------------------------------------------------------------

def test_parse_fields():
    fields = parse_fields('[{"title": "success", "short": true, "value": "master"}]')

    assert fields == [AttachmentField(title="success", short=True, value="master")]


def test_parse_empty_fields():
    assert parse_fields("") == []
    assert parse_fields("[]") == []


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        '{"title": "success", "short": true, "value": "master"}',
        '[{"title": ["success"]}]',
        '["success"]',
        '[{"title": "success", "short": true, "value": "master"},]',
    ],
)
def test_invalid_fields_fail(text):
    with pytest.raises(FieldsJSONError):
        parse_fields(text)


def test_missing_field_keys_use_defaults():
    """빠진 key 는 기본값 ("" / False) 으로 채운다"""
    fields = parse_fields('[{"title": "x", "short": true}, {"value": "master"}, {}]')

    assert fields == [
        AttachmentField(title="x", short=True, value=""),
        AttachmentField(title="", short=False, value="master"),
        AttachmentField(title="", short=False, value=""),
    ]


# --- channel / color --------------------------------------------------------

def test_recipient_wins_over_channel():
    config = NotificationConfig(channel="dev", recipient="octocat")

    assert resolve_channel(config) == "@octocat"


def test_channel_prefix_is_not_doubled():
    assert resolve_channel(NotificationConfig(channel="dev")) == "#dev"
    assert resolve_channel(NotificationConfig(channel="#dev")) == "#dev"
    assert resolve_channel(NotificationConfig()) is None


@pytest.mark.parametrize(
    "status, color",
    [("success", "good"), ("failure", "danger"), ("error", "danger"), ("killed", "danger"), ("running", "warning")],
)
def test_color_follows_build_status(status, color):
    assert resolve_color(NotificationConfig(), Build(status=status)) == color


def test_configured_color_wins():
    assert resolve_color(NotificationConfig(color="#439FE0"), Build(status="failure")) == "#439FE0"


# --- build_payload ----------------------------------------------------------

def test_build_payload_with_defaults(plugin):
    payload = build_payload(compose(plugin), plugin).to_dict()

    assert payload == {
        "link_names": False,
        "attachments": [
            {
                "text": "*success* <http://github.com/octocat/hello-world|octocat/hello-world#7fd1a60b> (master) by octocat",
                "fallback": "success octocat/hello-world#7fd1a60b (master) by octocat",
                "color": "good",
                "mrkdwn_in": ["text", "fallback"],
                "fields": [],
            }
        ],
    }


def test_build_payload_with_templates(template_plugin):
    payload = build_payload(compose(template_plugin), template_plugin)

    attachment = payload.attachments[0]
    assert attachment.fields == [AttachmentField(title="success", short=True, value="master")]
    assert attachment.fallback == "Message Template Fallback:\nInitial commit\nmaster\nsuccess"


def test_build_payload_copies_config(repo, build):
    plugin = Plugin(
        repo=repo,
        build=build,
        config=NotificationConfig(
            channel="builds",
            username="drone",
            icon_emoji=":drone:",
            image_url="https://example.com/badge.png",
            link_names=True,
        ),
    )

    payload = build_payload(compose(plugin), plugin).to_dict()

    assert payload["channel"] == "#builds"
    assert payload["username"] == "drone"
    assert payload["icon_emoji"] == ":drone:"
    assert "icon_url" not in payload
    assert payload["link_names"] is True
    assert payload["attachments"][0]["image_url"] == "https://example.com/badge.png"


def test_build_payload_rejects_invalid_fields(plugin):
    composed = ComposedMessage(message="m", fallback="f", fields_json='{"oops": 1}')

    with pytest.raises(FieldsJSONError):
        build_payload(composed, plugin)
