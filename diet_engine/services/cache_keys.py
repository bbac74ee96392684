import json
from typing import Iterable, List, Optional

from diet_engine.core.engine_config import engine_config
from diet_engine.models import CalorieRange, RestrictionProfile, SearchOptions
from diet_engine.utils.normalizer import normalize_all

SEGMENT_DELIMITER = "|"
STRICT_FODMAP_TOKEN = "strict-fodmap"


def _segment(label: str, values: Iterable[str]) -> str:
    joined = ",".join(sorted(set(values)))
    return f"{label}={joined}" if joined else ""


def _calorie_json(calorie_range: Optional[CalorieRange]) -> str:
    if calorie_range is None:
        return ""
    bounds = calorie_range.model_dump(exclude_none=True)
    if not bounds:
        return ""
    return json.dumps(bounds, sort_keys=True, separators=(",", ":"))


def cache_key(profile: RestrictionProfile, options: Optional[SearchOptions] = None) -> str:
    """Order- and duplicate-insensitive fingerprint of a profile and its search options.

    Each collection is deduplicated and sorted independently, then every
    non-empty, non-default segment is joined with "|". Segments carry a short
    field label so values from different fields cannot collide.

    Profiles that are set-equal in every field always produce the same key.
    """
    if options is None:
        options = SearchOptions(result_count=engine_config.default_result_count)

    segments: List[str] = [
        _segment("diets", (diet.value for diet in profile.diets)),
        _segment("allergies", profile.allergies),
        _segment("exclusions", normalize_all(profile.exclusions)),
        _segment("preferences", (pref.value for pref in profile.preferences)),
        STRICT_FODMAP_TOKEN if profile.strict_fodmap else "",
        f"number={options.result_count}",
        f"offset={options.offset}" if options.offset else "",
        f"time={options.max_ready_time_minutes}" if options.max_ready_time_minutes else "",
    ]

    calories = _calorie_json(options.calorie_range)
    if calories:
        segments.append(f"calories={calories}")
    if not options.include_nutrition:
        segments.append("nutrition=off")
    if options.include_instructions:
        segments.append("instructions=on")

    return SEGMENT_DELIMITER.join(segment for segment in segments if segment)
