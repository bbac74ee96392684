import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from diet_engine.core.logging_config import get_logger

load_dotenv()

logger = get_logger(__name__)

CONFIG_ENV_VAR = "DIET_ENGINE_CONFIG"


@dataclass(frozen=True)
class EngineConfig:
    default_result_count: int = 30
    time_increment_minutes: int = 15
    time_ceiling_minutes: int = 60
    calorie_widen_ratio: float = 1.2
    max_allergies: int = 6
    max_exclusions: int = 20


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    if isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return default
        return parsed if parsed > 0 else default
    return default


def _as_ratio(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if value >= 1 else default
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return default
        return parsed if parsed >= 1 else default
    return default


def _config_path() -> Path:
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[2] / "config" / "engine_config.json"


def load_engine_config(path: Optional[Path] = None) -> EngineConfig:
    config_path = path or _config_path()
    defaults = EngineConfig()
    try:
        data: Dict[str, Any] = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return defaults
    except json.JSONDecodeError as exc:
        logger.warning(f"Invalid engine config JSON at {config_path}: {exc}")
        return defaults

    if not isinstance(data, dict):
        logger.warning(f"Engine config at {config_path} is not a JSON object; using defaults")
        return defaults

    return EngineConfig(
        default_result_count=_as_int(data.get("default_result_count"), defaults.default_result_count),
        time_increment_minutes=_as_int(data.get("time_increment_minutes"), defaults.time_increment_minutes),
        time_ceiling_minutes=_as_int(data.get("time_ceiling_minutes"), defaults.time_ceiling_minutes),
        calorie_widen_ratio=_as_ratio(data.get("calorie_widen_ratio"), defaults.calorie_widen_ratio),
        max_allergies=_as_int(data.get("max_allergies"), defaults.max_allergies),
        max_exclusions=_as_int(data.get("max_exclusions"), defaults.max_exclusions),
    )


engine_config = load_engine_config()
