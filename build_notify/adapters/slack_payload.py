# build_notify/adapters/slack_payload.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from build_notify.application.services.composer import ComposedMessage
from build_notify.domain.build import Build, NotificationConfig, Plugin
from build_notify.domain.errors import FieldsJSONError

FAILED_STATUSES = ("failure", "error", "killed")


class AttachmentField(BaseModel):
    """
    Slack attachments[].fields[] 한 줄.
    ex) { "title": "success", "short": true, "value": "master" }
    빠진 key 는 기본값으로 채운다.
    """

    title: str = ""
    value: str = ""
    short: bool = False


class Attachment(BaseModel):
    """
    Slack attachments[] 하나.
    우리가 쓰는 건 text / fallback / color / fields 정도라서 나머지는 생략.
    """

    text: str
    fallback: str
    color: str
    mrkdwn_in: List[str] = Field(default_factory=lambda: ["text", "fallback"])
    image_url: Optional[str] = None
    fields: List[AttachmentField] = Field(default_factory=list)


class SlackPayload(BaseModel):
    """Slack incoming webhook payload"""

    username: Optional[str] = None
    channel: Optional[str] = None
    icon_url: Optional[str] = None
    icon_emoji: Optional[str] = None
    link_names: bool = False
    attachments: List[Attachment] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


_FIELDS_ADAPTER = TypeAdapter(List[AttachmentField])


def parse_fields(fields_json: str) -> List[AttachmentField]:
    """
    렌더링된 fields 텍스트를 AttachmentField 리스트로 변환한다.

    Raises:
        FieldsJSONError: JSON 이 아니거나 [{title, short, value}, ...] 모양이 아닌 경우
    """
    if not fields_json:
        return []
    try:
        return _FIELDS_ADAPTER.validate_json(fields_json)
    except ValidationError as exc:
        raise FieldsJSONError(f"invalid fields JSON: {exc}") from exc


def resolve_channel(config: NotificationConfig) -> Optional[str]:
    """recipient 가 있으면 DM(@), 없으면 채널(#)"""
    if config.recipient:
        return _prepend("@", config.recipient)
    if config.channel:
        return _prepend("#", config.channel)
    return None


def resolve_color(config: NotificationConfig, build: Build) -> str:
    if config.color:
        return config.color
    if build.status == "success":
        return "good"
    if build.status in FAILED_STATUSES:
        return "danger"
    return "warning"


def _prepend(prefix: str, value: str) -> str:
    if value.startswith(prefix):
        return value
    return prefix + value


def build_payload(composed: ComposedMessage, plugin: Plugin) -> SlackPayload:
    """ComposedMessage 를 Slack webhook payload 로 감싼다"""
    config = plugin.config

    attachment = Attachment(
        text=composed.message,
        fallback=composed.fallback,
        color=resolve_color(config, plugin.build),
        image_url=config.image_url or None,
        fields=parse_fields(composed.fields_json),
    )

    return SlackPayload(
        username=config.username or None,
        channel=resolve_channel(config),
        icon_url=config.icon_url or None,
        icon_emoji=config.icon_emoji or None,
        link_names=config.link_names,
        attachments=[attachment],
    )
