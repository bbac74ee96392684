from typing import Dict, Iterable, List, Set

from diet_engine.core.logging_config import get_logger
from diet_engine.core.vocabulary import allergen_exclusions, diet_exclusions, synonyms_for
from diet_engine.models import DietTag, RestrictionProfile
from diet_engine.utils.normalizer import normalize_all

logger = get_logger(__name__)


def _diet_terms(profile: RestrictionProfile) -> List[str]:
    terms: List[str] = []
    for diet in profile.diets:
        if diet == DietTag.NONE:
            continue
        terms.extend(diet_exclusions(diet.value, profile.strict_fodmap))
    return terms


def _allergen_terms(profile: RestrictionProfile) -> List[str]:
    # Sent in addition to the intolerance tokens, never instead of them.
    terms: List[str] = []
    for allergen in profile.allergies:
        terms.extend(allergen_exclusions(allergen))
    return terms


def _expand(names: Iterable[str]) -> Set[str]:
    """One level of synonym expansion, looked up per name."""
    expanded: Set[str] = set()
    for name in names:
        expanded |= synonyms_for(name)
    return expanded


def build_exclusions(profile: RestrictionProfile) -> List[str]:
    """Build the sorted, deduplicated set of ingredients a search must avoid.

    Collects diet-implied, allergen-implied and custom exclusions, normalizes
    them, expands each through the synonym table once, and returns the result
    sorted so that equivalent profiles always produce the same list.

    Args:
        profile: Restrictions to resolve.

    Returns:
        Lexicographically sorted ingredient names; empty for an empty profile.
    """
    collected = _diet_terms(profile) + _allergen_terms(profile) + list(profile.exclusions)
    unique = set(normalize_all(collected))
    exclusions = sorted(_expand(unique))
    logger.debug(f"Resolved {len(exclusions)} exclusions from {len(collected)} collected terms")
    return exclusions


def explain_exclusions(profile: RestrictionProfile) -> Dict[str, List[str]]:
    """Per-source breakdown of the exclusion set, before synonym expansion.

    Returns:
        Mapping with "diet", "allergen" and "custom" keys, each a sorted list
        of normalized names. A name may appear under several sources.
    """
    return {
        "diet": sorted(set(normalize_all(_diet_terms(profile)))),
        "allergen": sorted(set(normalize_all(_allergen_terms(profile)))),
        "custom": sorted(set(normalize_all(profile.exclusions))),
    }
