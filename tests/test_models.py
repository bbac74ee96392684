import pytest
from pydantic import ValidationError

from diet_engine.models import (
    AllergenTag,
    DietTag,
    RestrictionProfile,
    SearchOptions,
    TranslatedQuery,
)


class TestRestrictionProfile:

    def test_duplicates_are_removed_keeping_first_occurrence(self):
        profile = RestrictionProfile(
            diets=["paleo", "vegan", "paleo"],
            allergies=["soy", "Soy", AllergenTag.DAIRY],
            exclusions=["onion", "onion"],
            preferences=["low_sodium", "low_sodium"],
        )
        assert profile.diets == (DietTag.PALEO, DietTag.VEGAN)
        assert profile.primary_diet == DietTag.PALEO
        assert profile.allergies == ("soy", "dairy")
        assert profile.exclusions == ("onion",)
        assert len(profile.preferences) == 1

    def test_unknown_diet_is_rejected(self):
        with pytest.raises(ValidationError):
            RestrictionProfile(diets=["carnivore"])

    def test_unknown_preference_is_rejected(self):
        with pytest.raises(ValidationError):
            RestrictionProfile(preferences=["spicy"])

    def test_profile_is_immutable(self):
        profile = RestrictionProfile(diets=["vegan"])
        with pytest.raises(ValidationError):
            profile.diets = (DietTag.PALEO,)

    def test_primary_diet_of_empty_profile(self):
        assert RestrictionProfile().primary_diet is None


class TestSearchOptions:

    def test_defaults(self):
        options = SearchOptions()
        assert options.result_count == 30
        assert options.offset == 0
        assert options.max_ready_time_minutes is None
        assert options.calorie_range is None

    def test_negative_offset_is_rejected(self):
        with pytest.raises(ValidationError):
            SearchOptions(offset=-1)

    def test_zero_ready_time_is_rejected(self):
        with pytest.raises(ValidationError):
            SearchOptions(max_ready_time_minutes=0)


def test_translated_query_params_use_api_names():
    query = TranslatedQuery(diet="vegan", exclude_ingredients="egg", max_ready_time=20)
    assert query.to_params() == {
        "diet": "vegan",
        "excludeIngredients": "egg",
        "number": 30,
        "offset": 0,
        "addRecipeInformation": True,
        "addRecipeNutrition": True,
        "addRecipeInstructions": False,
        "maxReadyTime": 20,
    }
