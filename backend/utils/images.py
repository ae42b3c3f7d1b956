import base64
import binascii
import io
import re
import secrets
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from backend import config

_DATA_URI = re.compile(r"^data:(image/(?:jpeg|jpg|png|webp|gif));base64,(.+)$", re.IGNORECASE | re.DOTALL)

# PIL 포맷 → 저장 확장자
EXT_BY_FMT = {"JPEG": ".jpg", "JPG": ".jpg", "PNG": ".png", "WEBP": ".webp", "GIF": ".gif"}


class ImageError(ValueError):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


def decode_data_uri(data_uri: str, max_bytes: int | None = None) -> bytes:
    """
    data:image/<jpeg|png|webp|gif>;base64,... → 원본 바이트
    형식 오류 400, 용량 초과 413
    """
    max_bytes = config.MAX_IMAGE_BYTES if max_bytes is None else max_bytes
    m = _DATA_URI.match((data_uri or "").strip())
    if not m:
        raise ImageError("Image must be a base64 data URI of a JPEG, PNG, WEBP or GIF image.")

    payload = m.group(2)
    # base64 길이로 먼저 대략 검사 (디코딩 전에 거대한 입력 차단)
    if len(payload) * 3 // 4 > max_bytes + 3:
        raise ImageError(f"Image is larger than {max_bytes} bytes.", status_code=413)
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ImageError("Image data is not valid base64.")

    if not raw:
        raise ImageError("Image data is empty.")
    if len(raw) > max_bytes:
        raise ImageError(f"Image is larger than {max_bytes} bytes.", status_code=413)
    return raw


def open_image(raw: bytes) -> Image.Image:
    # Pillow로 먼저 열어 유효성 확인
    try:
        pil = Image.open(io.BytesIO(raw))
        pil.load()
    except UnidentifiedImageError:
        raise ImageError("Unrecognised image format (JPG/PNG recommended).", status_code=415)
    except OSError as e:
        raise ImageError(f"Image could not be processed: {e}", status_code=415)
    return pil


def validate_data_uri(data_uri: str) -> None:
    open_image(decode_data_uri(data_uri))


def store_data_uri(data_uri: str, upload_dir: str | Path | None = None) -> str:
    """검증된 이미지를 업로드 폴더에 임의 파일명으로 저장하고 경로 반환"""
    pil = open_image(decode_data_uri(data_uri))
    suffix = EXT_BY_FMT.get((pil.format or "").upper(), ".jpg")

    target_dir = Path(upload_dir or config.UPLOAD_DIR)
    target_dir.mkdir(parents=True, exist_ok=True)
    dst = target_dir / f"{secrets.token_hex(8)}{suffix}"

    if suffix == ".jpg" and pil.mode not in ("RGB", "L"):
        pil = pil.convert("RGB")
    try:
        pil.save(dst)
    except OSError as e:
        raise ImageError(f"Failed to store image: {e}", status_code=500)
    return str(dst)
