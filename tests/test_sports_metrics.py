"""Tests for training load calculations."""

from datetime import datetime

import pytest

from training_planner.analysis.sports_metrics import TrainingLoadCalculator
from training_planner.analysis.strength import (
    ExerciseType,
    calculate_strength_load,
    classify_exercise_type,
    rpe_multiplier,
)
from training_planner.analysis.thresholds import (
    DEFAULT_THRESHOLDS,
    AthleteThresholds,
    estimate_thresholds,
)
from training_planner.models import Activity


def make_activity(day=1, hour=7, **kwargs):
    kwargs.setdefault("moving_time", 3600)
    return Activity(start_date_local=datetime(2024, 1, day, hour), **kwargs)


class TestTrainingLoadCalculator:
    """Test per-session load formulas."""

    def setup_method(self):
        """Set up test fixtures."""
        self.thresholds = AthleteThresholds(max_heart_rate=185, resting_heart_rate=60)
        self.calculator = TrainingLoadCalculator(self.thresholds)

    def test_trimp_hour_at_150_bpm(self):
        """One hour at 150 bpm: HR reserve ratio 0.72."""
        activity = make_activity(average_heartrate=150)
        assert self.calculator.calculate_trimp(activity) == 110

    @pytest.mark.parametrize("sport", ["Run", "Ride", "Swim", "WeightTraining", "Golf", "Unknown"])
    @pytest.mark.parametrize("moving_time", [600, 3600, 14400])
    def test_trimp_zero_without_heart_rate(self, sport, moving_time):
        """TRIMP is 0 for any sport and duration without HR."""
        activity = make_activity(sport_type=sport, moving_time=moving_time)
        assert self.calculator.calculate_trimp(activity) == 0

    def test_trimp_scaled_by_sport(self):
        """Cycling TRIMP carries the 0.85 sport multiplier."""
        run = make_activity(average_heartrate=150)
        ride = make_activity(average_heartrate=150, sport_type="Ride")
        assert self.calculator.calculate_trimp(ride) == round(110.17 * 0.85)
        assert self.calculator.calculate_trimp(ride) < self.calculator.calculate_trimp(run)

    def test_tss_duration_fallback(self):
        """Without HR or power, TSS is 50 per hour."""
        activity = make_activity(moving_time=1800)
        assert self.calculator.calculate_tss(activity) == 25

    def test_tss_power_at_ftp(self):
        """One hour at FTP with the cycling variability index."""
        calculator = TrainingLoadCalculator(DEFAULT_THRESHOLDS)
        activity = make_activity(sport_type="Ride", average_watts=250)
        assert calculator.calculate_tss(activity) == 105

    def test_tss_power_ignored_without_ftp(self):
        """Power is unusable without an FTP; HR takes over."""
        activity = make_activity(average_watts=250, average_heartrate=150)
        # IF = 150 / (185 * 0.85)
        assert self.calculator.calculate_tss(activity) == 91

    def test_tss_hr_intensity_clamped(self):
        """HR intensity factor is clamped to [0.5, 1.15]."""
        easy = make_activity(average_heartrate=50)
        maximal = make_activity(average_heartrate=200)
        assert self.calculator.calculate_tss(easy) == 25
        assert self.calculator.calculate_tss(maximal) == round(1.15 ** 2 * 100)

    def test_normalized_load_duration_only(self):
        """No HR or power: hours * 50 TSS halved onto the 0-100 scale."""
        activity = make_activity()
        assert self.calculator.calculate_normalized_load(activity) == 25

    def test_normalized_load_bounds(self):
        """Normalized load stays within [0, 100]."""
        activities = [
            make_activity(),
            make_activity(moving_time=301),
            make_activity(moving_time=6 * 3600, average_heartrate=180, sport_type="Swim"),
            make_activity(moving_time=8 * 3600, average_watts=400, sport_type="Ride"),
            make_activity(average_heartrate=40, sport_type="Walk"),
            make_activity(sport_type="WeightTraining", perceived_exertion=10, moving_time=10800),
        ]
        for activity in activities:
            load = self.calculator.calculate_normalized_load(activity)
            assert 0 <= load <= 100

    def test_normalized_load_caps_at_100(self):
        """Very long hard sessions saturate."""
        activity = make_activity(moving_time=6 * 3600, average_heartrate=180, sport_type="Swim")
        assert self.calculator.calculate_normalized_load(activity) == 100

    def test_strength_sport_uses_strength_formula(self):
        """Strength sessions bypass the TRIMP/TSS blend."""
        activity = make_activity(sport_type="WeightTraining", name="Heavy 5x5 squats")
        assert self.calculator.calculate_normalized_load(activity) == calculate_strength_load(
            activity, self.thresholds
        )

    def test_intensity_multiplier(self):
        """Intensity relative to max HR, then FTP, else neutral."""
        assert self.calculator.get_intensity_multiplier(make_activity()) == 1.0
        hr = make_activity(average_heartrate=185)
        assert self.calculator.get_intensity_multiplier(hr) == 1.0
        low = make_activity(average_heartrate=60)
        assert self.calculator.get_intensity_multiplier(low) == 0.5


class TestStrengthLoad:
    """Test strength session load estimation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.thresholds = DEFAULT_THRESHOLDS

    def test_classify_from_name(self):
        """Keywords are matched in rule order."""
        assert classify_exercise_type("Heavy 5x5 squats") == ExerciseType.STRENGTH
        assert classify_exercise_type("Power cleans") == ExerciseType.POWER
        assert classify_exercise_type("HIIT circuit") == ExerciseType.CIRCUIT
        assert classify_exercise_type("Light high rep day") == ExerciseType.ENDURANCE
        assert classify_exercise_type("Upper body") == ExerciseType.HYPERTROPHY
        assert classify_exercise_type("") == ExerciseType.HYPERTROPHY

    def test_explicit_tag_wins(self):
        """An explicit tag overrides the name."""
        assert classify_exercise_type("Heavy 5x5 squats", "circuit") == ExerciseType.CIRCUIT

    def test_unknown_tag_falls_back_to_name(self):
        """Unrecognized tags are ignored."""
        assert classify_exercise_type("Heavy 5x5 squats", "mystery") == ExerciseType.STRENGTH

    def test_rpe_multiplier(self):
        """RPE 10 maps to 1.3, missing RPE is neutral."""
        assert rpe_multiplier(None) == 1.0
        assert rpe_multiplier(10) == pytest.approx(1.3)
        assert rpe_multiplier(5) == pytest.approx(0.9)

    def test_load_without_heart_rate(self):
        """0.8 per minute scaled by exercise type."""
        strength = make_activity(sport_type="WeightTraining", name="Heavy 5x5 squats")
        hypertrophy = make_activity(sport_type="WeightTraining", name="Upper body")
        assert calculate_strength_load(strength, self.thresholds) == 34
        assert calculate_strength_load(hypertrophy, self.thresholds) == 38

    def test_load_with_rpe(self):
        """Perceived exertion scales the load."""
        activity = make_activity(sport_type="WeightTraining", name="Heavy 5x5 squats", perceived_exertion=10)
        assert calculate_strength_load(activity, self.thresholds) == 44

    def test_load_with_heart_rate(self):
        """HR reserve ratio with the neuromuscular factor."""
        activity = make_activity(
            sport_type="WeightTraining",
            name="Morning session",
            exercise_type="circuit",
            average_heartrate=125,
        )
        # 60 min * 0.52 * 1.3
        assert calculate_strength_load(activity, self.thresholds) == 41

    def test_load_capped(self):
        """Long sessions still fit the 0-100 scale."""
        activity = make_activity(sport_type="Crossfit", name="WOD", moving_time=4 * 3600, perceived_exertion=10)
        assert calculate_strength_load(activity, self.thresholds) == 100


class TestProcessActivities:
    """Test daily aggregation of activities."""

    def setup_method(self):
        """Set up test fixtures."""
        self.calculator = TrainingLoadCalculator(DEFAULT_THRESHOLDS)

    def test_empty(self):
        """No activities yield no load points."""
        assert self.calculator.process_activities([]) == []

    def test_short_sessions_skipped(self):
        """Sessions of 300 s or less are dropped."""
        activities = [make_activity(moving_time=300), make_activity(day=2, moving_time=200)]
        assert self.calculator.process_activities(activities) == []

    def test_sorted_one_point_per_day(self):
        """Points come out sorted ascending by date."""
        activities = [make_activity(day=3), make_activity(day=1), make_activity(day=2)]
        points = self.calculator.process_activities(activities)
        assert [p.date.day for p in points] == [1, 2, 3]

    def test_same_day_sessions_summed(self):
        """Loads are summed and the day summary describes both sessions."""
        run = make_activity(name="Morning run", average_heartrate=150)
        ride = make_activity(hour=18, name="Evening ride", sport_type="Ride", moving_time=1800, average_watts=200)
        points = self.calculator.process_activities([run, ride])

        assert len(points) == 1
        point = points[0]
        assert point.normalized_load == (
            self.calculator.calculate_normalized_load(run) + self.calculator.calculate_normalized_load(ride)
        )
        assert point.trimp == self.calculator.calculate_trimp(run)
        assert point.activity.name == "2 activities"
        assert point.activity.sport_type == "Mixed"
        assert point.activity.duration == 5400
        assert point.activity.avg_hr == 75
        assert point.activity.avg_power == 100

    def test_single_session_summary(self):
        """A single session keeps its own name and sport."""
        points = self.calculator.process_activities([make_activity(name="Tempo", sport_type="Run")])
        assert points[0].activity.name == "Tempo"
        assert points[0].activity.sport_type == "Run"
        assert points[0].activity.avg_hr is None


class TestEstimateThresholds:
    """Test threshold estimation from history."""

    def test_defaults_without_data(self):
        """No HR data falls back to 190/60 and no FTP."""
        thresholds = estimate_thresholds([make_activity()])
        assert thresholds.max_heart_rate == 190
        assert thresholds.resting_heart_rate == 60
        assert thresholds.functional_threshold_power is None
        assert thresholds.lactate_threshold == pytest.approx(190 * 0.85)

    def test_percentiles(self):
        """Max HR from the top 5%, resting HR from the bottom 5%."""
        activities = [
            make_activity(day=i + 1, average_heartrate=100 + i, max_heartrate=160 + i)
            for i in range(20)
        ]
        thresholds = estimate_thresholds(activities)
        # floor(20 * 0.05) = index 1
        assert thresholds.max_heart_rate == 178
        assert thresholds.resting_heart_rate == 101

    def test_ftp_from_long_efforts(self):
        """FTP only considers efforts longer than 20 minutes."""
        activities = [
            make_activity(sport_type="Ride", average_watts=200, moving_time=3600),
            make_activity(day=2, sport_type="Ride", average_watts=400, moving_time=600),
        ]
        assert estimate_thresholds(activities).functional_threshold_power == 200

    def test_single_sample_keeps_reserve_positive(self):
        """Resting HR is pulled below max when they collide."""
        thresholds = estimate_thresholds([make_activity(average_heartrate=150)])
        assert thresholds.max_heart_rate == 150
        assert thresholds.resting_heart_rate < thresholds.max_heart_rate
