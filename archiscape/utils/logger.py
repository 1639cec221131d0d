"""로깅 설정"""
import logging
import sys
from pathlib import Path
from typing import Optional

from ..config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(name: str, level: str = "INFO", log_dir: Optional[str] = "logs") -> logging.Logger:
    """콘솔 + (선택) 파일 로거

    모듈별 로거는 ``get_logger``로 이 로거의 자식으로 만든다.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    # 재임포트 시 핸들러 중복 방지
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path / f"{name}.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(component: str) -> logging.Logger:
    """``archiscape.<component>`` 로거 (핸들러는 부모 것을 사용)"""
    return logger.getChild(component)


# 전역 로거 인스턴스
logger = setup_logger("archiscape", settings.log_level, settings.log_dir)
