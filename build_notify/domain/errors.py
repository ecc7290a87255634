# build_notify/domain/errors.py
"""
build-notify 예외 정의
"""


class BuildNotifyError(Exception):
    """build-notify 에서 발생하는 모든 예외의 기반 클래스"""


class ConfigError(BuildNotifyError):
    """CI 환경 변수 / 플러그인 설정이 잘못된 경우"""


class TemplateError(BuildNotifyError):
    """템플릿 파싱/렌더링 실패의 기반 클래스"""


class TemplateParseError(TemplateError):
    """
    템플릿 문법 오류.

    ex) 닫히지 않은 '{{', 빈 태그, 짝이 맞지 않는 block, 알 수 없는 helper
    """

    def __init__(self, message: str, position: int | None = None):
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position


class TemplateFieldError(TemplateError):
    """템플릿이 정의되지 않은 field path 를 참조한 경우"""

    def __init__(self, path: str):
        super().__init__(f"undefined field: {path}")
        self.path = path


class TemplateHelperError(TemplateError):
    """helper 가 입력값을 처리하지 못한 경우 (ex. 잘못된 timestamp, timezone)"""


class FieldsJSONError(BuildNotifyError):
    """렌더링된 fields 텍스트가 [{title, short, value}, ...] JSON 이 아닌 경우"""
