from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List

import requests

from backend import config
from backend.utils.parsing import extract_json, ModelOutputError

logger = logging.getLogger(__name__)


class GatewayStatus(str, Enum):
    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    QUOTA_EXHAUSTED = "quota_exhausted"
    PARSE_ERROR = "parse_error"
    TRANSPORT_ERROR = "transport_error"


# 상태 → (HTTP 코드, 사용자 메시지)
STATUS_HTTP = {
    GatewayStatus.RATE_LIMITED: (429, "Rate limit exceeded. Please try again in a moment."),
    GatewayStatus.QUOTA_EXHAUSTED: (402, "AI credits exhausted. Please add credits to continue."),
    GatewayStatus.PARSE_ERROR: (500, "Failed to parse the AI response."),
    GatewayStatus.TRANSPORT_ERROR: (500, "AI service error."),
}


@dataclass
class GatewayResult:
    status: GatewayStatus
    data: Any = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is GatewayStatus.SUCCESS

    @property
    def http_status(self) -> int:
        return 200 if self.ok else STATUS_HTTP[self.status][0]

    @classmethod
    def failure(cls, status: GatewayStatus, message: str = "") -> "GatewayResult":
        return cls(status=status, message=message or STATUS_HTTP[status][1])


def image_message(text: str, image_data_uri: str) -> List[Dict[str, Any]]:
    """텍스트 + 이미지(data URI) 멀티모달 user 콘텐츠"""
    return [
        {"type": "text", "text": text},
        {"type": "image_url", "image_url": {"url": image_data_uri}},
    ]


def chat_completion(messages: List[Dict[str, Any]]) -> GatewayResult:
    """
    chat-completions 호출 1회. 재시도 없음.
    성공 시 data = 모델 응답 텍스트(choices[0].message.content)
    """
    if not config.AI_GATEWAY_API_KEY:
        logger.error("AI_GATEWAY_API_KEY is not configured")
        return GatewayResult.failure(GatewayStatus.TRANSPORT_ERROR, "AI_GATEWAY_API_KEY is not configured")

    try:
        res = requests.post(
            config.AI_GATEWAY_URL,
            headers={
                "Authorization": f"Bearer {config.AI_GATEWAY_API_KEY}",
                "Content-Type": "application/json",
            },
            json={"model": config.AI_GATEWAY_MODEL, "messages": messages},
            timeout=config.AI_GATEWAY_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error("AI gateway request failed: %s", e)
        return GatewayResult.failure(GatewayStatus.TRANSPORT_ERROR, f"AI service unreachable: {e}")

    if not res.ok:
        logger.error("AI gateway error: %s %s", res.status_code, res.text[:500])
        if res.status_code == 429:
            return GatewayResult.failure(GatewayStatus.RATE_LIMITED)
        if res.status_code == 402:
            return GatewayResult.failure(GatewayStatus.QUOTA_EXHAUSTED)
        return GatewayResult.failure(GatewayStatus.TRANSPORT_ERROR, f"AI service error: {res.status_code}")

    try:
        body = res.json()
        content = body["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        logger.error("Invalid AI response structure: %s", res.text[:500])
        return GatewayResult.failure(GatewayStatus.PARSE_ERROR, "Invalid response from AI service")

    if not isinstance(content, str):
        logger.error("AI response content is not text: %r", content)
        return GatewayResult.failure(GatewayStatus.PARSE_ERROR, "Invalid response from AI service")

    return GatewayResult(status=GatewayStatus.SUCCESS, data=content)


def structured_completion(
    messages: List[Dict[str, Any]],
    parse: Callable[[Any], Any],
    what: str,
) -> GatewayResult:
    """
    chat_completion → JSON 추출 → parse(obj) 로 검증.
    parse 는 실패 시 ValueError(pydantic ValidationError 포함)를 던진다.
    """
    result = chat_completion(messages)
    if not result.ok:
        return result

    try:
        parsed = parse(extract_json(result.data))
    except (ModelOutputError, ValueError) as e:
        logger.error("Failed to parse %s from AI: %s | output=%s", what, e, str(result.data)[:500])
        return GatewayResult.failure(GatewayStatus.PARSE_ERROR, f"Failed to parse {what} from AI")

    return GatewayResult(status=GatewayStatus.SUCCESS, data=parsed)
