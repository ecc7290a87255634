"""
로깅 설정
"""
import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# 요청마다 INFO 로그를 남기는 라이브러리 (webhook URL 이 그대로 찍힌다)
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str = "INFO"):
    """
    빌드 알림 프로세스 로깅 설정

    - stdout 으로 출력 (CI 빌드 로그에 그대로 남는다)
    - level 이 잘못된 값이면 INFO
    - httpx/httpcore 는 WARNING 이상만 출력
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # 기존 핸들러 제거 (중복 방지)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
