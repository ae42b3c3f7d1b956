
from __future__ import annotations
from typing import Any, List, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.utils.parsing import leading_number

# 일일 권장량 기준 (g)
REFERENCE_DAILY_VALUES = {"protein": 50.0, "carbs": 300.0, "fats": 70.0}


class MacroAmount(BaseModel):
    amount: float = Field(ge=0)
    percentage: float = Field(ge=0)


class Macros(BaseModel):
    protein: MacroAmount
    carbs: MacroAmount
    fats: MacroAmount

    @field_validator("protein", "carbs", "fats", mode="before")
    @classmethod
    def _accept_bare_number(cls, v: Any, info) -> Any:
        """
        허용 형태 두 가지:
          - {"amount": 42, "percentage": 88}
          - 42  (구버전 응답; percentage는 일일 권장량 기준으로 계산)
        그 외는 파싱 실패.
        """
        if isinstance(v, bool):
            raise ValueError(f"{info.field_name}: boolean is not a macro amount")
        if isinstance(v, (int, float)):
            ref = REFERENCE_DAILY_VALUES[info.field_name]
            return {"amount": float(v), "percentage": round(float(v) / ref * 100)}
        if isinstance(v, dict):
            if "amount" not in v or "percentage" not in v:
                raise ValueError(f"{info.field_name}: expected keys 'amount' and 'percentage'")
            return v
        raise ValueError(f"{info.field_name}: unsupported macro shape {type(v).__name__}")


class Nutrient(BaseModel):
    name: str
    amount: str
    daily: float = Field(0, ge=0)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return f"{v:g}"
        return v


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    serving_size: str = Field(alias="servingSize")
    calories: int = Field(ge=0)
    macros: Macros
    nutrients: List[Nutrient] = []
    ingredients: List[str] = []
    health_score: int = Field(alias="healthScore", ge=0, le=100)

    @field_validator("calories", "health_score", mode="before")
    @classmethod
    def _round_int(cls, v: Any) -> Any:
        if isinstance(v, float):
            return int(round(v))
        return v

    def fiber_grams(self) -> float:
        """이름에 'fiber'가 들어간 첫 영양소의 g 값 (없으면 0)"""
        for n in self.nutrients:
            if "fiber" in n.name.lower():
                return leading_number(n.amount) or 0.0
        return 0.0


class Recipe(BaseModel):
    name: str
    description: str = ""
    time: int = Field(ge=0, description="minutes")
    servings: int = Field(ge=1)
    difficulty: Literal["easy", "medium", "hard"]
    calories: int = Field(ge=0)
    sustainability: int = Field(ge=0, le=100)
    ingredients: List[str] = []
    instructions: List[str] = []

    @field_validator("time", "servings", "calories", "sustainability", mode="before")
    @classmethod
    def _numeric(cls, v: Any) -> Any:
        num = leading_number(v)
        return int(round(num)) if num is not None else v

    @field_validator("difficulty", mode="before")
    @classmethod
    def _lower(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class RecipeSuggestions(BaseModel):
    ingredients: List[str] = []
    recipes: List[Recipe]


class AnalyzeFoodRequest(BaseModel):
    image: str


class ChatAdvisorRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(min_length=1)
    user_profile: dict | None = Field(None, alias="userProfile")


class GenerateRecipesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_base64: str = Field(alias="imageBase64")
