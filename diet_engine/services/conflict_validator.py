from typing import List, Optional

from diet_engine.core.engine_config import EngineConfig, engine_config
from diet_engine.core.logging_config import get_logger
from diet_engine.core.vocabulary import (
    CONFLICTING_DIETS,
    REDUNDANT_RESTRICTIONS,
    RESTRICTIVE_DIET_COMBINATIONS,
    VEGAN_CONFLICT_TERMS,
)
from diet_engine.models import DietTag, RestrictionProfile, ValidationReport
from diet_engine.utils.normalizer import normalize_all

logger = get_logger(__name__)


class ConflictValidator:
    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or engine_config

    def validate(self, profile: RestrictionProfile) -> ValidationReport:
        """
        Checks a profile for contradictory or over-restrictive settings.
        Every check runs; nothing is raised.

        Errors mean the profile should not be submitted as-is.
        Warnings are advisory only.
        """
        errors: List[str] = []
        warnings: List[str] = []
        diets = {diet.value for diet in profile.diets}

        # 1. Vegan diet vs. animal products in the exclusion list
        # TODO: confirm with product whether this should look at exclusions at all;
        # an excluded animal product reinforces a vegan diet rather than contradicting it.
        if DietTag.VEGAN.value in diets and any(
            exclusion.lower() in VEGAN_CONFLICT_TERMS for exclusion in profile.exclusions
        ):
            errors.append("Vegan diet conflicts with included animal products")

        # 2. Over-restriction
        if len(profile.allergies) > self.config.max_allergies:
            warnings.append(
                f"{len(profile.allergies)} allergies may severely limit recipe results"
            )

        # Names that normalize alike count once
        exclusion_count = len(set(normalize_all(profile.exclusions)))
        if exclusion_count > self.config.max_exclusions:
            warnings.append(
                f"{exclusion_count} excluded ingredients may severely limit recipe results"
            )

        # 3. Diet pairs
        for first, second in CONFLICTING_DIETS:
            if {first, second}.issubset(diets):
                errors.append(f"Conflicting diets: {first} and {second} are difficult to combine")

        for first, second in RESTRICTIVE_DIET_COMBINATIONS:
            if {first, second}.issubset(diets):
                warnings.append(f"{first} + {second} is very restrictive")

        # 4. Redundant restrictions
        selected = {("diet", diet) for diet in diets} | {("allergy", allergy) for allergy in profile.allergies}
        for covering, covered, message in REDUNDANT_RESTRICTIONS:
            if {covering, covered}.issubset(selected):
                warnings.append(message)

        if errors:
            logger.info(f"Profile validation found {len(errors)} error(s)")

        return ValidationReport(errors=tuple(errors), warnings=tuple(warnings))


conflict_validator = ConflictValidator()


def validate(profile: RestrictionProfile) -> ValidationReport:
    return conflict_validator.validate(profile)
