"""Data URL 처리 유틸"""
import base64
import binascii
import re
import time
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>image/[\w.+-]+);base64,", re.IGNORECASE)
WHITESPACE_PATTERN = re.compile(r"\s+")
DEFAULT_MIME_TYPE = "image/jpeg"
DOWNLOAD_PREFIX = "archiscape-render"


def split_data_url(data: str) -> Tuple[str, str]:
    """(mime_type, base64 본문) 반환, 접두사 없는 base64는 JPEG로 간주"""
    match = DATA_URL_PATTERN.match(data)
    if not match:
        return DEFAULT_MIME_TYPE, data
    return match.group("mime").lower(), data[match.end():]


def strip_data_url_prefix(data: str) -> str:
    return split_data_url(data)[1]


def decode_image(data: str) -> Tuple[bytes, str]:
    """Data URL (또는 base64) -> (원본 바이트, mime type)"""
    mime_type, payload = split_data_url(data)
    # MIME 줄바꿈(76자) 등 공백 제거
    payload = WHITESPACE_PATTERN.sub("", payload)
    try:
        return base64.b64decode(payload, validate=True), mime_type
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


def to_data_url(raw: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(raw).decode('ascii')}"


def sniff_mime_type(raw: bytes) -> Optional[str]:
    """Pillow로 업로드 이미지 형식 확인 (이미지가 아니면 None)"""
    try:
        with Image.open(BytesIO(raw)) as img:
            return Image.MIME.get(img.format)
    except (UnidentifiedImageError, OSError):
        return None


def download_filename(now: Optional[float] = None) -> str:
    """archiscape-render-<epoch ms>.png"""
    millis = int((time.time() if now is None else now) * 1000)
    return f"{DOWNLOAD_PREFIX}-{millis}.png"
