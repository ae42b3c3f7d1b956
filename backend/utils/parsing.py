import json
import re
from typing import Any, Optional

_FENCED = re.compile(r"```(?:json)?\s*([\{\[][\s\S]*[\}\]])\s*```", re.IGNORECASE)
_FENCE_MARK = re.compile(r"```(?:json)?\n?", re.IGNORECASE)
_LEADING_NUMBER = re.compile(r"^\s*(-?\d+(?:[.,]\d+)?)")


class ModelOutputError(ValueError):
    """모델 출력이 기대한 JSON 형태가 아님"""


def extract_json(text: str) -> Any:
    """
    모델 응답 텍스트에서 JSON 추출.
    ```json ... ``` 코드 블록으로 감싸져 있으면 펜스를 벗긴 뒤 파싱한다.
    """
    if not isinstance(text, str) or not text.strip():
        raise ModelOutputError("empty model output")

    match = _FENCED.search(text)
    body = match.group(1) if match else _FENCE_MARK.sub("", text).strip()
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise ModelOutputError(f"model output is not valid JSON: {e}") from e


def leading_number(value: Any) -> Optional[float]:
    """'8g', '3.2 mg', 12 → 8.0, 3.2, 12.0 / 숫자 없으면 None"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _LEADING_NUMBER.match(value)
        if m:
            return float(m.group(1).replace(",", "."))
    return None
