# build_notify/application/ports/notifier.py
"""
알림 전송 포트 (인터페이스)

Secondary Port: 애플리케이션이 외부 채팅 서비스를 사용하기 위한 인터페이스
required Port
"""
from typing import Protocol, Dict, Any


class Notifier(Protocol):
    """
    알림 전송 인터페이스

    이 Protocol을 구현하는 어댑터:
    - SlackNotifier (adapters/slack_notifier.py)

    Protocol을 사용하는 서비스:
    - notification.py (빌드 결과 알림 전송)
    """

    async def send(self, payload: Dict[str, Any]) -> bool:
        """
        webhook 으로 payload 전송

        Args:
            payload: Slack webhook payload 딕셔너리

        Returns:
            전송 성공 여부
        """
        ...
