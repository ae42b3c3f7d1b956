
from __future__ import annotations
import logging

from backend.schemas.analysis_schema import AnalysisResult
from backend.utils.gateway import GatewayResult, image_message, structured_completion

logger = logging.getLogger(__name__)

ANALYSIS_SYSTEM_PROMPT = """You are an expert nutritionist AI that analyzes food images. Your task is to:
1. Identify all food items in the image
2. Estimate portion sizes
3. Calculate total calories and macronutrients
4. Provide a health score (0-100)
5. List key nutrients

Return your analysis in this exact JSON format:
{
  "name": "Brief food name",
  "servingSize": "Estimated size with unit",
  "calories": number,
  "macros": {
    "protein": { "amount": number, "percentage": number },
    "carbs": { "amount": number, "percentage": number },
    "fats": { "amount": number, "percentage": number }
  },
  "nutrients": [
    { "name": "Nutrient name", "amount": "amount with unit", "daily": number }
  ],
  "ingredients": ["ingredient1", "ingredient2"],
  "healthScore": number (0-100)
}

Be accurate with portion estimates. Use standard serving sizes. Calculate percentages based on daily recommended values (protein: 50g, carbs: 300g, fats: 70g)."""

ANALYSIS_USER_PROMPT = "Analyze this food image and provide detailed nutritional information."


def analyze_food(image_data_uri: str) -> GatewayResult:
    """음식 사진 1장 → AnalysisResult (result.data)"""
    logger.info("Starting food analysis...")
    result = structured_completion(
        [
            {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
            {"role": "user", "content": image_message(ANALYSIS_USER_PROMPT, image_data_uri)},
        ],
        parse=AnalysisResult.model_validate,
        what="nutrition data",
    )
    if result.ok:
        logger.info("Analysis completed successfully: %s", result.data.name)
    return result
