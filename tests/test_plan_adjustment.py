"""Tests for plan edits, reset and plan analytics."""

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from training_planner.analysis import periodization
from training_planner.analysis.model import LoadStatus, TrainingLoadMetrics
from training_planner.analysis.periodization import fallback_weekly_plan, generate_weekly_plan
from training_planner.analysis.plan_adjustment import (
    AdvicePriority,
    apply_day_edit,
    reset_to_recommended,
    summarize_plan,
    todays_workout_from_plan,
)
from training_planner.analysis.recommendations import PlanningContext
from training_planner.analysis.workouts import long_workout
from training_planner.models import Activity

MONDAY = date(2024, 1, 1)


def make_context(today=MONDAY):
    metrics = TrainingLoadMetrics(
        acute=40, chronic=80, balance=5, ramp_rate=0, status=LoadStatus.MAINTAIN, recommendation=""
    )
    recent = tuple(
        Activity(
            start_date_local=datetime.combine(today - timedelta(days=i + 1), datetime.min.time()),
            moving_time=3600,
            training_load=50,
        )
        for i in range(2)
    )
    return PlanningContext(metrics=metrics, recent_activities=recent, today=today)


class TestApplyDayEdit:
    """Test single-day plan edits."""

    def setup_method(self):
        """Set up test fixtures."""
        self.plan = generate_weekly_plan(make_context())

    def test_clear_day(self):
        """Clearing a day drops its time from the totals."""
        edited = apply_day_edit(self.plan, 3, None)
        assert edited.workouts[3] is None
        expected = sum(w.duration for day, w in self.plan.workouts.items() if day != 3)
        assert edited.total_time == expected
        assert edited.total_time == 255
        assert edited.rest_days == 1

    def test_original_untouched(self):
        """Edits return a new plan."""
        apply_day_edit(self.plan, 3, None)
        assert self.plan.workouts[3] is not None
        assert self.plan.total_time == 285

    def test_replace_day(self):
        """Replacing a day recomputes every total."""
        edited = apply_day_edit(self.plan, 1, long_workout(MONDAY))
        assert edited.workouts[1].id == "long-2024-01-01"
        assert edited.total_time == 285 - 45 + 60
        assert edited.total_distance == 44 - 6 + 10
        assert edited.total_tss == pytest.approx(227.5 - 37.5 + 40)
        assert edited.id == self.plan.id

    @pytest.mark.parametrize("day_index", [-1, 7, 10])
    def test_invalid_day(self, day_index):
        """Days outside 0-6 are rejected."""
        with pytest.raises(ValueError):
            apply_day_edit(self.plan, day_index, None)

    def test_not_editable(self):
        """Locked plans cannot be edited."""
        locked = replace(self.plan, is_editable=False)
        with pytest.raises(ValueError):
            apply_day_edit(locked, 1, None)

    def test_todays_workout_follows_edits(self):
        """Today's view reads the edited plan."""
        assert todays_workout_from_plan(self.plan, MONDAY).id == "moderate-2024-01-01"
        edited = apply_day_edit(self.plan, 1, None)
        assert todays_workout_from_plan(edited, MONDAY) is None


class TestResetToRecommended:
    """Test reset to the generated plan."""

    def test_reset_discards_edits(self):
        """Reset returns the freshly generated plan."""
        context = make_context()
        plan = reset_to_recommended(context)
        assert plan.to_dict() == generate_weekly_plan(context).to_dict()

    def test_failure_installs_fallback(self, monkeypatch, caplog):
        """A regeneration failure is logged and replaced by the fallback plan."""
        def broken(context):
            raise RuntimeError("store unavailable")

        monkeypatch.setattr(periodization, "generate_weekly_plan", broken)
        with caplog.at_level(logging.ERROR):
            plan = reset_to_recommended(make_context())

        assert plan.to_dict() == fallback_weekly_plan(MONDAY).to_dict()
        assert sorted(plan.workouts) == list(range(7))
        assert "Plan regeneration failed" in caplog.text


class TestSummarizePlan:
    """Test plan analytics."""

    def test_fallback_summary(self):
        """Three easy runs: low variety and low volume."""
        summary = summarize_plan(fallback_weekly_plan(MONDAY))
        assert summary.total_workouts == 3
        assert summary.rest_days == 4
        assert summary.workout_distribution == {"easy": 3}
        assert summary.sport_distribution == {"Run": 3}
        assert summary.intensity_distribution == {"low": 0, "moderate": 3, "high": 0}
        assert [a.priority for a in summary.advice] == [AdvicePriority.MEDIUM, AdvicePriority.MEDIUM]

    def test_week_without_rest(self):
        """A full week without rest gets a high priority warning."""
        summary = summarize_plan(generate_weekly_plan(make_context()))
        assert summary.total_workouts == 7
        assert summary.intensity_distribution == {"low": 3, "moderate": 2, "high": 2}
        assert summary.workout_distribution == {"easy": 4, "tempo": 2, "long": 1}
        assert [a.message for a in summary.advice] == ["Include at least one rest day for recovery"]
        assert summary.advice[0].priority == AdvicePriority.HIGH

    def test_too_many_intense_sessions(self):
        """More than two intense sessions without recovery days."""
        plan = generate_weekly_plan(make_context())
        plan = apply_day_edit(plan, 6, replace(plan.workouts[2], id="extra-tempo"))
        summary = summarize_plan(plan)
        assert summary.intensity_distribution["high"] == 3
        assert summary.advice[0].priority == AdvicePriority.HIGH
        assert "recovery days" in summary.advice[0].message
