"""
의존성 조립 (Dependency Assembly)
"""
from build_notify.adapters.slack_notifier import SlackNotifier
from build_notify.application.services.notification import NotificationService
from build_notify.config import HTTP_TIMEOUT, VERIFY_SSL


class ServiceContainer:
    """
    서비스 컨테이너

    알림 1건을 보내는 데 필요한 의존성을 생성하고 조립합니다.
    """

    def __init__(self, webhook_url: str):
        # Adapter 생성
        self._notifier = SlackNotifier(
            webhook_url,
            timeout=HTTP_TIMEOUT,
            verify_ssl=VERIFY_SSL,
        )

        # Services 생성
        self._notification_service = NotificationService(self._notifier)

    @property
    def notification_service(self) -> NotificationService:
        """NotificationService 인스턴스"""
        return self._notification_service
