import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional
from portal.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logger(name: str, level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """콘솔(+선택적 회전 파일) 핸들러를 붙인 이름 있는 로거를 반환합니다."""
    logger = logging.getLogger(name)
    if logger.handlers:  # 중복 핸들러 방지
        return logger

    logger.setLevel((level or settings.LOG_LEVEL).upper())
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    log_file = settings.LOG_FILE if log_file is None else log_file
    if log_file:
        handlers.append(RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger

# 포털 로거
app_logger = setup_logger("portal")           # 라우터
workflow_logger = setup_logger("workflow")    # 상태 전이, 세션
artifact_logger = setup_logger("artifact")    # 설치 파일 생성, 인증서 파일
admin_logger = setup_logger("admin")          # 관리자 API
