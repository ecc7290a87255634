from typing import Mapping, Optional
import asyncio
import logging
import os
import sys

from build_notify.adapters.drone_env import load_plugin
from build_notify.config import LOG_LEVEL
from build_notify.container import ServiceContainer
from build_notify.domain.errors import BuildNotifyError
from build_notify.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def run(env: Mapping[str, str]) -> bool:
    """환경 변수로부터 알림 1건을 만들어 전송한다"""
    plugin = load_plugin(env)
    container = ServiceContainer(plugin.config.webhook)
    return await container.notification_service.notify(plugin)


def main(env: Optional[Mapping[str, str]] = None) -> int:
    """
    build-notify 엔트리포인트

    Returns:
        프로세스 종료 코드 (0: 성공, 1: 실패)
    """
    setup_logging(LOG_LEVEL)

    try:
        sent = asyncio.run(run(os.environ if env is None else env))
    except BuildNotifyError as exc:
        logger.error("❌ Build notification aborted: %s", exc)
        return 1

    if not sent:
        logger.error("❌ Build notification was not delivered")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
