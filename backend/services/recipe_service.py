
from __future__ import annotations
import logging

from backend.schemas.analysis_schema import RecipeSuggestions
from backend.utils.gateway import GatewayResult, image_message, structured_completion

logger = logging.getLogger(__name__)

RECIPE_PROMPT = """Analyze this leftover food image and suggest 3-5 creative, sustainable recipes that use these ingredients.

For each recipe, provide:
- name: Creative recipe name
- description: Brief description (1-2 sentences)
- time: Cooking time in minutes
- servings: Number of servings
- difficulty: easy, medium, or hard
- calories: Estimated calories per serving
- sustainability: Percentage (how sustainable this recipe is)
- ingredients: List of ingredients
- instructions: Step-by-step cooking instructions

Return ONLY valid JSON in this exact format:
{
  "ingredients": ["ingredient1", "ingredient2"],
  "recipes": [
    {
      "name": "Recipe Name",
      "description": "Brief description",
      "time": 30,
      "servings": 4,
      "difficulty": "medium",
      "calories": 350,
      "sustainability": 85,
      "ingredients": ["ingredient1", "ingredient2"],
      "instructions": ["Step 1", "Step 2", "Step 3"]
    }
  ]
}"""


def generate_recipes(image_data_uri: str) -> GatewayResult:
    logger.info("Analyzing leftover food image...")
    result = structured_completion(
        [{"role": "user", "content": image_message(RECIPE_PROMPT, image_data_uri)}],
        parse=RecipeSuggestions.model_validate,
        what="recipes",
    )
    if result.ok:
        logger.info("Recipes generated successfully (%d)", len(result.data.recipes))
    return result
