from diet_engine.core.engine_config import EngineConfig
from diet_engine.models import (
    CalorieRange,
    DietTag,
    RelaxationStepId,
    RestrictionProfile,
    SearchOptions,
)
from diet_engine.services.relaxation_planner import (
    RelaxationPlanner,
    apply_relaxation,
    next_relaxation,
    plan_relaxations,
)


class TestPlanRelaxations:

    def test_full_ladder_order(self, planner, ladder_inputs):
        """Every step applies, in the fixed priority order."""
        profile, options = ladder_inputs
        steps = planner.plan(profile, options)
        assert [step.step_id for step in steps] == [
            RelaxationStepId.TIME,
            RelaxationStepId.COMMON_EXCLUSIONS,
            RelaxationStepId.CALORIES,
            RelaxationStepId.DIET,
        ]

    def test_nothing_to_relax(self, planner):
        assert planner.plan(RestrictionProfile(), SearchOptions()) == []
        assert planner.plan(RestrictionProfile(diets=["none"], allergies=["soy"])) == []

    def test_time_step_needs_bound_below_ceiling(self, planner):
        profile = RestrictionProfile()
        assert planner.plan(profile, SearchOptions(max_ready_time_minutes=60)) == []
        steps = planner.plan(profile, SearchOptions(max_ready_time_minutes=55))
        assert steps[0].options_delta == {"max_ready_time_minutes": 70}

    def test_calorie_step_floors_widened_max(self, planner):
        options = SearchOptions(calorie_range=CalorieRange(min=100, max=333))
        (step,) = planner.plan(RestrictionProfile(), options)
        assert step.step_id == RelaxationStepId.CALORIES
        assert step.options_delta == {"calorie_range": {"min": 100, "max": 399}}

    def test_calorie_step_needs_max_bound(self, planner):
        options = SearchOptions(calorie_range=CalorieRange(min=100))
        assert planner.plan(RestrictionProfile(), options) == []

    def test_steps_never_touch_allergies(self, planner, ladder_inputs):
        profile, options = ladder_inputs
        for step in planner.plan(profile, options):
            assert "allergies" not in step.profile_delta
            new_profile, _ = planner.apply(profile, options, step.step_id)
            assert new_profile.allergies == profile.allergies

    def test_steps_are_presentable(self, planner, ladder_inputs):
        for step in planner.plan(*ladder_inputs):
            assert step.description
            assert step.action_summary


class TestApplyRelaxation:

    def test_time_step(self, planner, ladder_inputs):
        profile, options = ladder_inputs
        new_profile, new_options = planner.apply(profile, options, "time")
        assert new_options.max_ready_time_minutes == 45
        assert new_options.calorie_range == options.calorie_range
        assert new_profile == profile
        # Inputs are untouched
        assert options.max_ready_time_minutes == 30

    def test_common_exclusions_step(self, planner):
        profile = RestrictionProfile(exclusions=["Onion", "Mushrooms", "basil", "tomatoes"])
        new_profile, _ = planner.apply(profile, SearchOptions(), RelaxationStepId.COMMON_EXCLUSIONS)
        assert new_profile.exclusions == ("basil",)
        assert profile.exclusions == ("Onion", "Mushrooms", "basil", "tomatoes")

    def test_calories_step(self, planner, ladder_inputs):
        profile, options = ladder_inputs
        _, new_options = planner.apply(profile, options, "calories")
        assert new_options.calorie_range.max == 600
        assert new_options.calorie_range.min is None
        assert new_options.max_ready_time_minutes == 30

    def test_diet_step_keeps_allergies(self, planner, ladder_inputs):
        profile, options = ladder_inputs
        new_profile, new_options = planner.apply(profile, options, "diet")
        assert new_profile.diets == (DietTag.NONE,)
        assert new_profile.allergies == ("peanuts",)
        assert new_profile.exclusions == profile.exclusions
        assert new_options == options

    def test_unknown_step_is_a_no_op(self, planner, ladder_inputs):
        profile, options = ladder_inputs
        new_profile, new_options = planner.apply(profile, options, "allergies")
        assert new_profile is profile
        assert new_options is options

    def test_default_options_follow_config(self):
        planner = RelaxationPlanner(EngineConfig(default_result_count=12))
        profile = RestrictionProfile(diets=["vegan"])
        _, new_options = planner.apply(profile, None, "diet")
        assert new_options.result_count == 12

    def test_inapplicable_step_is_a_no_op(self, planner):
        profile = RestrictionProfile(diets=["vegan"])
        options = SearchOptions(max_ready_time_minutes=90)
        assert planner.apply(profile, options, "time") == (profile, options)

    def test_walking_the_ladder_keeps_allergies(self, planner, ladder_inputs):
        """Retrying with the next step each time loosens convenience constraints first."""
        profile, options = ladder_inputs
        applied = []
        for _ in range(5):
            step = planner.next_step(profile, options)
            applied.append(step.step_id)
            profile, options = planner.apply(profile, options, step.step_id)
            assert profile.allergies == ("peanuts",)

        assert applied == [
            RelaxationStepId.TIME,
            RelaxationStepId.TIME,
            RelaxationStepId.COMMON_EXCLUSIONS,
            RelaxationStepId.CALORIES,
            RelaxationStepId.CALORIES,
        ]
        assert options.max_ready_time_minutes == 60
        assert profile.exclusions == ()
        assert options.calorie_range.max == 720


def test_module_functions_use_shared_planner(ladder_inputs):
    profile, options = ladder_inputs
    assert [step.step_id for step in plan_relaxations(profile, options)][0] == RelaxationStepId.TIME
    assert next_relaxation(profile, options).step_id == RelaxationStepId.TIME
    _, new_options = apply_relaxation(profile, options, "time")
    assert new_options.max_ready_time_minutes == 45


def test_planner_constants_follow_config(ladder_inputs):
    planner = RelaxationPlanner(EngineConfig(time_increment_minutes=10, calorie_widen_ratio=1.5))
    profile, options = ladder_inputs
    _, relaxed = planner.apply(profile, options, "time")
    assert relaxed.max_ready_time_minutes == 40
    _, relaxed = planner.apply(profile, options, "calories")
    assert relaxed.calorie_range.max == 750
