import pytest
from diet_engine.core.engine_config import EngineConfig
from diet_engine.models import CalorieRange, RestrictionProfile, SearchOptions
from diet_engine.services.conflict_validator import ConflictValidator
from diet_engine.services.query_translator import QueryTranslator
from diet_engine.services.relaxation_planner import RelaxationPlanner


@pytest.fixture
def config():
    """Default engine configuration, independent of config/engine_config.json."""
    return EngineConfig()


@pytest.fixture
def translator(config):
    return QueryTranslator(config)


@pytest.fixture
def validator(config):
    return ConflictValidator(config)


@pytest.fixture
def planner(config):
    return RelaxationPlanner(config)


@pytest.fixture
def vegan_dairy_profile():
    return RestrictionProfile(diets=["vegan"], allergies=["dairy"])


@pytest.fixture
def ladder_inputs():
    """Profile/options pair for which every relaxation step applies."""
    profile = RestrictionProfile(
        diets=["vegetarian"],
        allergies=["peanuts"],
        exclusions=["onion", "garlic"],
    )
    options = SearchOptions(
        max_ready_time_minutes=30,
        calorie_range=CalorieRange(max=500),
    )
    return profile, options
