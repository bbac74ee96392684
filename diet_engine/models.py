from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DietTag(str, Enum):
    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    PESCATARIAN = "pescatarian"
    KETOGENIC = "ketogenic"
    PALEO = "paleo"
    PRIMAL = "primal"
    LOW_FODMAP = "low-fodmap"
    WHOLE30 = "whole30"
    NONE = "none"


class AllergenTag(str, Enum):
    DAIRY = "dairy"
    EGGS = "eggs"
    FISH = "fish"
    SHELLFISH = "shellfish"
    TREE_NUTS = "tree_nuts"
    PEANUTS = "peanuts"
    WHEAT = "wheat"
    SOY = "soy"
    SESAME = "sesame"
    GLUTEN = "gluten"
    GRAIN = "grain"
    SEAFOOD = "seafood"


class PreferenceTag(str, Enum):
    ORGANIC_PREFERRED = "organic_preferred"
    LOCAL_PREFERRED = "local_preferred"
    MINIMAL_PROCESSING = "minimal_processing"
    LOW_SODIUM = "low_sodium"
    LOW_SUGAR = "low_sugar"


def _unique(values: Tuple[Any, ...]) -> Tuple[Any, ...]:
    """Drop duplicates, keeping the first occurrence of each value."""
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return tuple(seen)


class RestrictionProfile(BaseModel):
    """A user's dietary restrictions. Immutable; transformations return copies."""

    model_config = ConfigDict(frozen=True)

    # Ordered: the first diet is the primary one sent to the recipe API.
    diets: Tuple[DietTag, ...] = ()
    # Known tags are AllergenTag values; unknown tags are kept for forward compatibility.
    allergies: Tuple[str, ...] = ()
    exclusions: Tuple[str, ...] = ()
    preferences: Tuple[PreferenceTag, ...] = ()
    strict_fodmap: bool = False

    @field_validator("allergies", mode="before")
    @classmethod
    def _lowercase_allergies(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set, frozenset)):
            return tuple(
                item.value if isinstance(item, AllergenTag) else str(item).strip().lower()
                for item in value
            )
        return value

    @field_validator("diets", "allergies", "exclusions", "preferences")
    @classmethod
    def _deduplicate(cls, value: Tuple[Any, ...]) -> Tuple[Any, ...]:
        return _unique(value)

    @property
    def primary_diet(self) -> Optional[DietTag]:
        return self.diets[0] if self.diets else None


class CalorieRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: Optional[int] = Field(default=None, ge=0)
    max: Optional[int] = Field(default=None, ge=0)


class SearchOptions(BaseModel):
    """Recipe search options. Every field is optional and has a documented effect."""

    model_config = ConfigDict(frozen=True)

    result_count: int = Field(default=30, ge=1, description="Number of recipes to request")
    offset: int = Field(default=0, ge=0, description="Pagination offset")
    max_ready_time_minutes: Optional[int] = Field(
        default=None, gt=0, description="Upper bound on total cooking time"
    )
    calorie_range: Optional[CalorieRange] = Field(
        default=None, description="Per-serving calorie bounds"
    )
    include_nutrition: bool = Field(default=True, description="Ask the API for nutrition data")
    include_instructions: bool = Field(default=False, description="Ask the API for instructions")


class TranslatedQuery(BaseModel):
    """Query parameters for the external recipe search. Never cached itself."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    diet: Optional[str] = None
    intolerances: Optional[str] = None
    exclude_ingredients: Optional[str] = Field(default=None, alias="excludeIngredients")
    number: int = 30
    offset: int = 0
    add_recipe_information: bool = Field(default=True, alias="addRecipeInformation")
    add_recipe_nutrition: bool = Field(default=True, alias="addRecipeNutrition")
    add_recipe_instructions: bool = Field(default=False, alias="addRecipeInstructions")
    max_ready_time: Optional[int] = Field(default=None, alias="maxReadyTime")
    min_calories: Optional[int] = Field(default=None, alias="minCalories")
    max_calories: Optional[int] = Field(default=None, alias="maxCalories")

    def to_params(self) -> Dict[str, Any]:
        """Request parameters with the API's names; absent values are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class RelaxationStepId(str, Enum):
    TIME = "time"
    COMMON_EXCLUSIONS = "common-exclusions"
    CALORIES = "calories"
    DIET = "diet"


class RelaxationStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    step_id: RelaxationStepId
    description: str
    action_summary: str
    profile_delta: Dict[str, Any] = Field(default_factory=dict)
    options_delta: Dict[str, Any] = Field(default_factory=dict)


class ValidationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_issues(self) -> bool:
        return bool(self.errors or self.warnings)


# --- API payloads ---

class EngineRequest(BaseModel):
    profile: RestrictionProfile = Field(default_factory=RestrictionProfile)
    options: SearchOptions = Field(default_factory=SearchOptions)


class ApplyRelaxationRequest(EngineRequest):
    step_id: str = Field(..., min_length=1, description="Id of a step returned by /api/relaxations")


class TranslateResponse(BaseModel):
    query: Dict[str, Any]
    cache_key: str


class CacheKeyResponse(BaseModel):
    cache_key: str


class ExclusionsResponse(BaseModel):
    exclusions: List[str]
    sources: Dict[str, List[str]]


class RelaxationPlanResponse(BaseModel):
    steps: List[RelaxationStep]


class ApplyRelaxationResponse(BaseModel):
    applied: bool
    profile: RestrictionProfile
    options: SearchOptions


class AllergenInfo(BaseModel):
    name: str
    display_name: str
    description: str
    intolerance_token: str
    severity: str


class VocabularyResponse(BaseModel):
    diets: List[str]
    allergens: List[AllergenInfo]
    common_exclusions: List[str]
