import pytest
from pydantic import ValidationError

from backend.schemas.analysis_schema import AnalysisResult, Macros, Recipe, RecipeSuggestions
from backend.services.meal_service import meal_record_from_analysis


def test_macros_object_form(analysis_payload):
    result = AnalysisResult.model_validate(analysis_payload)
    assert result.macros.protein.amount == 42
    assert result.macros.protein.percentage == 84
    assert result.serving_size == "1 bowl (350g)"
    assert result.health_score == 92


def test_macros_bare_number_form():
    macros = Macros.model_validate({"protein": 25, "carbs": 30.0, "fats": 7})
    assert macros.protein.amount == 25
    assert macros.protein.percentage == 50      # 25 / 50g
    assert macros.carbs.percentage == 10        # 30 / 300g
    assert macros.fats.percentage == 10         # 7 / 70g


@pytest.mark.parametrize("bad", [
    "42g",
    [42, 84],
    {"amount": 42},
    {"percentage": 84},
    True,
    None,
])
def test_other_macro_shapes_fail(bad):
    with pytest.raises(ValidationError):
        Macros.model_validate({"protein": bad, "carbs": 10, "fats": 5})


def test_missing_macro_fails(analysis_payload):
    del analysis_payload["macros"]["fats"]
    with pytest.raises(ValidationError):
        AnalysisResult.model_validate(analysis_payload)


@pytest.mark.parametrize("score", [-1, 101])
def test_health_score_bounds(analysis_payload, score):
    analysis_payload["healthScore"] = score
    with pytest.raises(ValidationError):
        AnalysisResult.model_validate(analysis_payload)


def test_float_calories_are_rounded(analysis_payload):
    analysis_payload["calories"] = 384.6
    assert AnalysisResult.model_validate(analysis_payload).calories == 385


def test_numeric_nutrient_amount_becomes_text(analysis_payload):
    analysis_payload["nutrients"][1]["amount"] = 420
    assert AnalysisResult.model_validate(analysis_payload).nutrients[1].amount == "420"


def test_dump_uses_wire_names(analysis_payload):
    dumped = AnalysisResult.model_validate(analysis_payload).model_dump(by_alias=True)
    assert "servingSize" in dumped and "healthScore" in dumped
    assert dumped["macros"]["fats"] == {"amount": 12, "percentage": 17}


def test_fiber_grams(analysis_payload):
    result = AnalysisResult.model_validate(analysis_payload)
    assert result.fiber_grams() == 8.0


def test_fiber_grams_without_fiber_nutrient(analysis_payload):
    analysis_payload["nutrients"] = [{"name": "Sodium", "amount": "420mg", "daily": 18}]
    assert AnalysisResult.model_validate(analysis_payload).fiber_grams() == 0.0


def test_meal_record_projection(analysis_payload):
    record = meal_record_from_analysis(AnalysisResult.model_validate(analysis_payload), "uploads/a.png")
    assert record == {
        "name": "Grilled Chicken Salad",
        "calories": 385,
        "protein": 42.0,
        "carbs": 28.0,
        "fat": 12.0,
        "fiber": 8.0,
        "serving_size": "1 bowl (350g)",
        "image_url": "uploads/a.png",
    }


def _recipe(**overrides):
    base = {
        "name": "Veggie Stir Fry",
        "description": "Quick weeknight dinner",
        "time": 20,
        "servings": 2,
        "difficulty": "easy",
        "calories": 320,
        "sustainability": 85,
        "ingredients": ["broccoli", "carrot"],
        "instructions": ["Chop", "Fry"],
    }
    base.update(overrides)
    return base


def test_recipe_normalises_text_fields():
    recipe = Recipe.model_validate(_recipe(time="25 minutes", difficulty="Medium", calories="410 kcal"))
    assert recipe.time == 25
    assert recipe.difficulty == "medium"
    assert recipe.calories == 410


def test_recipe_unknown_difficulty_fails():
    with pytest.raises(ValidationError):
        Recipe.model_validate(_recipe(difficulty="expert"))


def test_recipe_suggestions_require_recipes():
    with pytest.raises(ValidationError):
        RecipeSuggestions.model_validate({"ingredients": ["egg"]})
