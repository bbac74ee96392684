"""
Zero-result recovery for recipe searches.

When a search comes back empty the caller asks for the relaxation ladder,
shows it, and applies the step the user picks. Steps are always offered in
the same order:

    time -> common-exclusions -> calories -> diet

Convenience constraints loosen before diet constraints. Allergies are never
part of any step.
"""
import math
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Union

from diet_engine.core.engine_config import EngineConfig, engine_config
from diet_engine.core.logging_config import get_logger
from diet_engine.core.vocabulary import COMMONLY_OVER_EXCLUDED
from diet_engine.models import (
    DietTag,
    RelaxationStep,
    RelaxationStepId,
    RestrictionProfile,
    SearchOptions,
)
from diet_engine.utils.normalizer import normalize, normalize_all

logger = get_logger(__name__)


class RelaxationPlanner:
    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or engine_config

    def plan(
        self,
        profile: RestrictionProfile,
        options: Optional[SearchOptions] = None
    ) -> List[RelaxationStep]:
        """Return the applicable relaxation steps in priority order."""
        options = options or self._default_options()
        candidates = (
            self._time_step(options),
            self._exclusions_step(profile),
            self._calories_step(options),
            self._diet_step(profile),
        )
        return [step for step in candidates if step is not None]

    def apply(
        self,
        profile: RestrictionProfile,
        options: Optional[SearchOptions],
        step_id: Union[RelaxationStepId, str]
    ) -> Tuple[RestrictionProfile, Optional[SearchOptions]]:
        """Apply one step from a freshly computed plan.

        Unknown or currently inapplicable step ids leave both inputs untouched.
        """
        step = self.find_step(profile, options, step_id)
        if step is None:
            logger.info(f"Relaxation step '{step_id}' is not applicable; nothing changed")
            return profile, options

        new_profile = _merged(profile, step.profile_delta)
        new_options = _merged(options or self._default_options(), step.options_delta)
        logger.info(f"Applied relaxation step '{step.step_id.value}'")
        return new_profile, new_options

    def next_step(
        self,
        profile: RestrictionProfile,
        options: Optional[SearchOptions] = None
    ) -> Optional[RelaxationStep]:
        """The highest-priority applicable step, or None when nothing is left to relax."""
        steps = self.plan(profile, options)
        return steps[0] if steps else None

    def find_step(
        self,
        profile: RestrictionProfile,
        options: Optional[SearchOptions],
        step_id: Union[RelaxationStepId, str]
    ) -> Optional[RelaxationStep]:
        wanted = step_id.value if isinstance(step_id, RelaxationStepId) else str(step_id)
        for step in self.plan(profile, options):
            if step.step_id.value == wanted:
                return step
        return None

    def _default_options(self) -> SearchOptions:
        return SearchOptions(result_count=self.config.default_result_count)

    def _time_step(self, options: SearchOptions) -> Optional[RelaxationStep]:
        current = options.max_ready_time_minutes
        if not current or current >= self.config.time_ceiling_minutes:
            return None
        relaxed = current + self.config.time_increment_minutes
        return RelaxationStep(
            step_id=RelaxationStepId.TIME,
            description="Increase cooking time",
            action_summary=f"Allow up to {relaxed} minutes",
            options_delta={"max_ready_time_minutes": relaxed},
        )

    def _exclusions_step(self, profile: RestrictionProfile) -> Optional[RelaxationStep]:
        if not profile.exclusions:
            return None
        common = set(normalize_all(COMMONLY_OVER_EXCLUDED))
        kept = [exclusion for exclusion in profile.exclusions if normalize(exclusion) not in common]
        return RelaxationStep(
            step_id=RelaxationStepId.COMMON_EXCLUSIONS,
            description="Allow common excluded ingredients",
            action_summary=f"Temporarily allow {', '.join(COMMONLY_OVER_EXCLUDED)}",
            profile_delta={"exclusions": kept},
        )

    def _calories_step(self, options: SearchOptions) -> Optional[RelaxationStep]:
        calorie_range = options.calorie_range
        if calorie_range is None or not calorie_range.max:
            return None
        ratio = Decimal(str(self.config.calorie_widen_ratio))
        widened = math.floor(ratio * calorie_range.max)
        return RelaxationStep(
            step_id=RelaxationStepId.CALORIES,
            description="Widen calorie range",
            action_summary=f"Allow up to {widened} calories",
            options_delta={"calorie_range": {"min": calorie_range.min, "max": widened}},
        )

    def _diet_step(self, profile: RestrictionProfile) -> Optional[RelaxationStep]:
        if not any(diet != DietTag.NONE for diet in profile.diets):
            return None
        return RelaxationStep(
            step_id=RelaxationStepId.DIET,
            description="Temporarily ignore diet restrictions",
            action_summary="Show all recipes (keeping allergies)",
            profile_delta={"diets": [DietTag.NONE.value]},
        )


def _merged(model: Any, delta: Dict[str, Any]) -> Any:
    """A new validated instance of model's type with delta applied on top."""
    if not delta:
        return model.model_copy()
    data = model.model_dump()
    data.update(delta)
    return type(model).model_validate(data)


relaxation_planner = RelaxationPlanner()


def plan_relaxations(
    profile: RestrictionProfile,
    options: Optional[SearchOptions] = None
) -> List[RelaxationStep]:
    return relaxation_planner.plan(profile, options)


def apply_relaxation(
    profile: RestrictionProfile,
    options: Optional[SearchOptions],
    step_id: Union[RelaxationStepId, str]
) -> Tuple[RestrictionProfile, Optional[SearchOptions]]:
    return relaxation_planner.apply(profile, options, step_id)


def next_relaxation(
    profile: RestrictionProfile,
    options: Optional[SearchOptions] = None
) -> Optional[RelaxationStep]:
    return relaxation_planner.next_step(profile, options)
