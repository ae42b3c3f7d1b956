
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.routes.auth import oauth2_scheme, resolve_user
from backend.schemas.analysis_schema import AnalyzeFoodRequest, ChatAdvisorRequest, GenerateRecipesRequest
from backend.services.advisor_service import ask_advisor
from backend.services.analysis_service import analyze_food
from backend.services.recipe_service import generate_recipes
from backend.utils.gateway import GatewayResult
from backend.utils.images import ImageError, validate_data_uri

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["AI functions"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

FUNCTION_NAMES = ("analyze-food", "chat-advisor", "generate-recipes")


def _json(body: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)


def _error(message: str, status_code: int = 500) -> JSONResponse:
    return _json({"error": message}, status_code)


def _failure(result: GatewayResult, keep_status: bool = True) -> JSONResponse:
    """
    keep_status=False 면 원격 실패를 모두 500 으로 응답
    (429/402 구분은 analyze-food 만)
    """
    return _error(result.message, result.http_status if keep_status else 500)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request body"


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """/functions/* 는 본문 검증 실패도 {error} 형태로 응답, 나머지 경로는 FastAPI 기본 422"""
    if request.url.path.startswith(router.prefix + "/"):
        message = _validation_message(exc)
        logger.warning("Rejected %s body: %s", request.url.path, message)
        return _error(message, 400)
    return await request_validation_exception_handler(request, exc)


@router.options("/{name}")
def preflight(name: str):
    status_code = 200 if name in FUNCTION_NAMES else 404
    return Response(status_code=status_code, headers=CORS_HEADERS)


@router.post("/analyze-food")
def analyze_food_route(payload: AnalyzeFoodRequest):
    try:
        validate_data_uri(payload.image)
    except ImageError as e:
        return _error(str(e), e.status_code)

    result = analyze_food(payload.image)
    if not result.ok:
        return _failure(result)
    return _json({"analysis": result.data.model_dump(by_alias=True)})


@router.post("/chat-advisor")
def chat_advisor_route(
    payload: ChatAdvisorRequest,
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
):
    # 인증 실패 시 모델 호출 전에 거절
    user, reason = resolve_user(token, db)
    if user is None:
        logger.warning("chat-advisor rejected: %s", reason)
        return _json({"error": reason}, 401)

    logger.info("chat-advisor request from user %s", user.id)
    result = ask_advisor(payload.message, payload.user_profile)
    if not result.ok:
        return _failure(result, keep_status=False)
    return _json({"response": result.data})


@router.post("/generate-recipes")
def generate_recipes_route(payload: GenerateRecipesRequest):
    try:
        validate_data_uri(payload.image_base64)
    except ImageError as e:
        return _error(str(e), e.status_code)

    result = generate_recipes(payload.image_base64)
    if not result.ok:
        return _failure(result, keep_status=False)
    return _json(result.data.model_dump())
