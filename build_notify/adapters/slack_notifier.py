# build_notify/adapters/slack_notifier.py
"""
Slack Webhook 알림 전송 어댑터
"""
from typing import Any, Dict, Optional
import logging

import httpx

logger = logging.getLogger(__name__)


class SlackNotifier:
    """Slack Incoming Webhook 으로 payload 전송"""

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 5.0,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            webhook_url: Slack Incoming Webhook URL
            timeout: 요청 타임아웃 (초)
            verify_ssl: TLS 인증서 검증 여부
            transport: httpx transport (테스트에서 MockTransport 주입용)
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.transport = transport

    async def send(self, payload: Dict[str, Any]) -> bool:
        """
        Slack Webhook 으로 payload 전송

        재시도는 하지 않는다.

        Args:
            payload: SlackPayload.to_dict() 결과

        Returns:
            전송 성공 여부
        """
        if not self.webhook_url:
            logger.error("❌ Slack webhook url is not configured. Skip sending.")
            return False

        async with httpx.AsyncClient(
            timeout=self.timeout,
            verify=self.verify_ssl,
            transport=self.transport,
        ) as client:
            try:
                resp = await client.post(self.webhook_url, json=payload)

                if resp.is_error:
                    logger.error(
                        "❌ Slack response error. status=%s body=%s",
                        resp.status_code,
                        resp.text[:200],
                    )
                    return False

                logger.info("✅ Build notification successfully posted to Slack.")
                return True

            except httpx.RequestError as exc:
                logger.error("❌ Slack request error: %s", exc)
                return False
