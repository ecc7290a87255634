# build_notify/application/services/notification.py
from __future__ import annotations

import logging

from build_notify.adapters.slack_payload import build_payload
from build_notify.application.ports.notifier import Notifier
from build_notify.domain.build import Plugin
from build_notify.domain.errors import FieldsJSONError, TemplateError
from .composer import compose

logger = logging.getLogger(__name__)


class NotificationService:
    """
    빌드 결과 알림 서비스

    책임:
    - message / fallback / fields 조립
    - Slack payload 생성
    - 알림 전송
    """

    def __init__(self, notifier: Notifier):
        """
        Args:
            notifier: 알림 전송 구현체
        """
        self.notifier = notifier

    async def notify(self, plugin: Plugin) -> bool:
        """
        빌드 1건에 대한 알림을 만들어 전송한다.

        템플릿이나 fields JSON 이 잘못되어 있으면 아무것도 보내지 않고
        예외를 그대로 올린다 (기본 포맷으로 대체하지 않는다).

        Args:
            plugin: repo / build / config

        Returns:
            True  -> 전송 성공
            False -> 전송 실패
        """
        try:
            composed = compose(plugin)
            payload = build_payload(composed, plugin)
        except TemplateError as exc:
            logger.error("⚠️ Failed to render notification template: %s", exc)
            raise
        except FieldsJSONError as exc:
            logger.error("⚠️ Rendered fields are not valid: %s", exc)
            raise

        logger.info(
            "Sending build notification (repo=%s, build=%s, status=%s)",
            plugin.repo.full_name,
            plugin.build.number,
            plugin.build.status,
        )
        return await self.notifier.send(payload.to_dict())
