from typing import Optional, Set

from diet_engine.core.engine_config import EngineConfig, engine_config
from diet_engine.core.logging_config import get_logger
from diet_engine.core.vocabulary import ALLERGEN_DEFINITIONS, DIET_TOKENS, intolerance_token
from diet_engine.models import RestrictionProfile, SearchOptions, TranslatedQuery
from diet_engine.services.exclusion_builder import build_exclusions

logger = get_logger(__name__)


class QueryTranslator:
    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or engine_config

    def translate(
        self,
        profile: RestrictionProfile,
        options: Optional[SearchOptions] = None
    ) -> TranslatedQuery:
        """Translate restrictions and search options into recipe API parameters.

        Args:
            profile: The user's restriction profile.
            options: Pagination, bounds and response flags. Defaults apply when omitted.

        Returns:
            A fresh TranslatedQuery.

        Notes:
            - Only the first diet becomes the API diet token; the API cannot
              combine diets. The other diets still contribute exclusions.
            - low-fodmap has no token and is expressed through exclusions only.
            - Unknown allergens are passed through as their own tag.
            - Intolerance tokens are deduplicated and sorted.
        """
        if options is None:
            options = SearchOptions(result_count=self.config.default_result_count)

        exclusions = build_exclusions(profile)
        calorie_range = options.calorie_range

        return TranslatedQuery(
            diet=self._diet_token(profile),
            intolerances=self._intolerances(profile),
            exclude_ingredients=",".join(exclusions) if exclusions else None,
            number=options.result_count,
            offset=options.offset,
            add_recipe_nutrition=options.include_nutrition,
            add_recipe_instructions=options.include_instructions,
            max_ready_time=options.max_ready_time_minutes,
            min_calories=calorie_range.min if calorie_range else None,
            max_calories=calorie_range.max if calorie_range else None,
        )

    def _diet_token(self, profile: RestrictionProfile) -> Optional[str]:
        primary = profile.primary_diet
        if primary is None:
            return None
        if len(profile.diets) > 1:
            logger.debug(
                f"Using {primary.value} as diet token; "
                f"{', '.join(d.value for d in profile.diets[1:])} applied through exclusions only"
            )
        return DIET_TOKENS.get(primary.value)

    def _intolerances(self, profile: RestrictionProfile) -> Optional[str]:
        tokens: Set[str] = set()
        for allergen in profile.allergies:
            if allergen not in ALLERGEN_DEFINITIONS:
                logger.warning(f"Unknown allergen '{allergen}' passed through as intolerance")
            tokens.add(intolerance_token(allergen))
        return ",".join(sorted(tokens)) if tokens else None


query_translator = QueryTranslator()


def translate(profile: RestrictionProfile, options: Optional[SearchOptions] = None) -> TranslatedQuery:
    return query_translator.translate(profile, options)
