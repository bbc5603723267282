"""Workout recommendation values and the catalog of session templates."""

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class WorkoutType(Enum):
    """Workout types with their physiological target."""

    EASY = "easy"
    TEMPO = "tempo"
    THRESHOLD = "threshold"
    LONG = "long"
    RECOVERY = "recovery"
    STRENGTH = "strength"
    INTERVAL = "interval"
    FARTLEK = "fartlek"
    HILL = "hill"
    CROSS_TRAINING = "cross-training"


class Difficulty(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class Modifications:
    """Ways to scale a workout up or down."""

    easier: Optional[str] = None
    harder: Optional[str] = None
    shorter: Optional[str] = None
    longer: Optional[str] = None


@dataclass(frozen=True)
class WorkoutRecommendation:
    """A single proposed training session."""

    id: str
    type: WorkoutType
    sport: str
    duration: int  # minutes
    intensity: int  # 1-10
    difficulty: Difficulty
    energy_cost: int  # 1-10
    recovery_hours: int
    reasoning: str
    distance: Optional[float] = None  # km
    alternatives: Tuple["WorkoutRecommendation", ...] = field(default_factory=tuple)
    instructions: Tuple[str, ...] = field(default_factory=tuple)
    tips: Tuple[str, ...] = field(default_factory=tuple)
    modifications: Optional[Modifications] = None
    goal_alignment: Optional[str] = None
    weather_consideration: Optional[str] = None

    @property
    def estimated_tss(self) -> float:
        """Rough TSS from duration and intensity."""
        return (self.duration / 60) * (self.intensity / 10) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["type"] = self.type.value
        data["difficulty"] = self.difficulty.value
        data["alternatives"] = [alt.to_dict() for alt in self.alternatives]
        data["instructions"] = list(self.instructions)
        data["tips"] = list(self.tips)
        return data


def _workout_id(kind: str, day: date) -> str:
    return f"{kind}-{day.isoformat()}"


def recovery_workout(day: date) -> WorkoutRecommendation:
    return WorkoutRecommendation(
        id=_workout_id("recovery", day),
        type=WorkoutType.RECOVERY,
        sport="Run",
        duration=30,
        intensity=3,
        difficulty=Difficulty.BEGINNER,
        energy_cost=2,
        recovery_hours=2,
        reasoning=(
            "Your training stress balance is low, indicating high fatigue. "
            "A light recovery session will help you bounce back."
        ),
        alternatives=(
            WorkoutRecommendation(
                id=_workout_id("recovery-yoga", day),
                type=WorkoutType.RECOVERY,
                sport="Yoga",
                duration=45,
                intensity=2,
                difficulty=Difficulty.BEGINNER,
                energy_cost=1,
                recovery_hours=1,
                reasoning="Gentle yoga can help with recovery and flexibility.",
                instructions=(
                    "Start with 5 minutes of gentle breathing",
                    "Move through basic sun salutations slowly",
                    "Hold poses for 30-60 seconds",
                    "End with 5 minutes of relaxation",
                ),
            ),
            WorkoutRecommendation(
                id=_workout_id("recovery-swim", day),
                type=WorkoutType.RECOVERY,
                sport="Swim",
                duration=20,
                intensity=2,
                difficulty=Difficulty.INTERMEDIATE,
                energy_cost=3,
                recovery_hours=2,
                reasoning="Low-impact swimming is excellent for active recovery.",
                instructions=(
                    "Start with 5 minutes of easy freestyle",
                    "Include 5 minutes of backstroke",
                    "Add 5 minutes of gentle kicking",
                    "Finish with 5 minutes of easy freestyle",
                ),
            ),
        ),
        instructions=(
            "Start with 5 minutes of walking",
            "Gradually increase to a very easy jog",
            "Keep pace conversational - you should be able to talk easily",
            "Include 2-3 walking breaks if needed",
            "Finish with 5 minutes of walking",
        ),
        tips=(
            "Keep heart rate below 65% of max",
            "Focus on good form and relaxation",
            "Stop if you feel any pain or excessive fatigue",
        ),
        modifications=Modifications(
            easier="Walk instead of run, or reduce duration to 20 minutes",
            harder="Add 5 minutes of very light stretching",
            shorter="Reduce to 20 minutes",
            longer="Extend to 45 minutes but keep intensity very low",
        ),
    )


def easy_workout(day: date) -> WorkoutRecommendation:
    return WorkoutRecommendation(
        id=_workout_id("easy", day),
        type=WorkoutType.EASY,
        sport="Run",
        duration=30,
        intensity=3,
        distance=4,
        difficulty=Difficulty.BEGINNER,
        energy_cost=3,
        recovery_hours=12,
        reasoning="An easy session to promote recovery and maintain aerobic fitness.",
        alternatives=(
            WorkoutRecommendation(
                id=_workout_id("easy-ride", day),
                type=WorkoutType.EASY,
                sport="Ride",
                duration=45,
                intensity=3,
                distance=15,
                difficulty=Difficulty.BEGINNER,
                energy_cost=3,
                recovery_hours=12,
                reasoning="Easy cycling is great for active recovery.",
            ),
        ),
        instructions=(
            "Start with 5 minutes of walking",
            "Gradually increase to very easy jogging",
            "Keep pace very comfortable",
            "Finish with 5 minutes of walking",
        ),
        tips=(
            "Focus on enjoyment and relaxation",
            "Don't worry about pace or distance",
        ),
    )


def moderate_workout(day: date) -> WorkoutRecommendation:
    return WorkoutRecommendation(
        id=_workout_id("moderate", day),
        type=WorkoutType.EASY,
        sport="Run",
        duration=45,
        intensity=5,
        distance=6,
        difficulty=Difficulty.INTERMEDIATE,
        energy_cost=5,
        recovery_hours=24,
        reasoning="A moderate session to maintain fitness and build consistency.",
        alternatives=(
            WorkoutRecommendation(
                id=_workout_id("moderate-ride", day),
                type=WorkoutType.EASY,
                sport="Ride",
                duration=60,
                intensity=4,
                distance=20,
                difficulty=Difficulty.INTERMEDIATE,
                energy_cost=4,
                recovery_hours=18,
                reasoning="Cycling provides good aerobic training with less impact.",
            ),
        ),
        instructions=(
            "Start with 5 minutes of easy jogging",
            "Gradually increase to moderate pace",
            "Maintain steady effort for 30 minutes",
            "Finish with 5 minutes of easy jogging",
        ),
        tips=(
            "Keep effort conversational",
            "Don't push too hard - this is a maintenance run",
        ),
        modifications=Modifications(
            easier="Add more walking breaks or reduce duration",
            harder="Add 2-3 short tempo segments",
            shorter="Reduce to 30 minutes",
            longer="Extend to 60 minutes but keep intensity moderate",
        ),
    )


def intensity_workout(day: date, advanced: bool = False) -> WorkoutRecommendation:
    """Interval session for advanced athletes, tempo run otherwise."""
    if advanced:
        return WorkoutRecommendation(
            id=_workout_id("advanced-interval", day),
            type=WorkoutType.INTERVAL,
            sport="Run",
            duration=60,
            intensity=9,
            distance=8,
            difficulty=Difficulty.ADVANCED,
            energy_cost=9,
            recovery_hours=48,
            reasoning="Advanced interval training will push your VO2 max and improve race performance.",
            alternatives=(
                WorkoutRecommendation(
                    id=_workout_id("advanced-fartlek", day),
                    type=WorkoutType.FARTLEK,
                    sport="Run",
                    duration=50,
                    intensity=8,
                    distance=10,
                    difficulty=Difficulty.ADVANCED,
                    energy_cost=8,
                    recovery_hours=36,
                    reasoning="Fartlek training improves both aerobic and anaerobic capacity.",
                ),
            ),
            instructions=(
                "Warm up with 15 minutes of easy jogging",
                "Run 8 x 400m at mile pace with 90-second recovery",
                "Follow with 4 x 200m at 800m pace with 2-minute recovery",
                "Cool down with 15 minutes of easy jogging",
            ),
            tips=(
                "Use a track for accurate distances",
                "Focus on maintaining form when tired",
            ),
        )

    return WorkoutRecommendation(
        id=_workout_id("tempo", day),
        type=WorkoutType.TEMPO,
        sport="Run",
        duration=45,
        intensity=7,
        distance=8,
        difficulty=Difficulty.INTERMEDIATE,
        energy_cost=7,
        recovery_hours=36,
        reasoning="Tempo runs improve your lactate threshold, which is key for race performance.",
        alternatives=(
            WorkoutRecommendation(
                id=_workout_id("threshold", day),
                type=WorkoutType.THRESHOLD,
                sport="Run",
                duration=30,
                intensity=8,
                distance=5,
                difficulty=Difficulty.INTERMEDIATE,
                energy_cost=8,
                recovery_hours=48,
                reasoning="Threshold intervals will improve your aerobic capacity.",
            ),
            WorkoutRecommendation(
                id=_workout_id("strength", day),
                type=WorkoutType.STRENGTH,
                sport="WeightTraining",
                duration=60,
                intensity=6,
                difficulty=Difficulty.INTERMEDIATE,
                energy_cost=6,
                recovery_hours=36,
                reasoning="Strength training complements your running and prevents injury.",
            ),
        ),
        instructions=(
            "Warm up with 10 minutes of easy jogging",
            "Run 20 minutes at half-marathon pace",
            "Keep effort steady - you should be able to speak in short phrases",
            "Cool down with 10 minutes of easy jogging",
        ),
        tips=(
            "Don't start too fast - build into the pace",
            "Use heart rate monitor if available (85-90% of max HR)",
        ),
    )


def long_workout(day: date, advanced: bool = False) -> WorkoutRecommendation:
    difficulty = Difficulty.ADVANCED if advanced else Difficulty.INTERMEDIATE
    return WorkoutRecommendation(
        id=_workout_id("long", day),
        type=WorkoutType.LONG,
        sport="Run",
        duration=90 if advanced else 60,
        intensity=4,
        distance=16 if advanced else 10,
        difficulty=difficulty,
        energy_cost=7,
        recovery_hours=48,
        reasoning=(
            "Long runs build endurance and prepare you for longer races. "
            "This is the foundation of your training."
        ),
        alternatives=(
            WorkoutRecommendation(
                id=_workout_id("long-ride", day),
                type=WorkoutType.LONG,
                sport="Ride",
                duration=120 if advanced else 90,
                intensity=4,
                distance=40 if advanced else 25,
                difficulty=difficulty,
                energy_cost=6,
                recovery_hours=36,
                reasoning="Long cycling sessions provide excellent endurance training with less impact.",
            ),
        ),
        instructions=(
            "Start with 10 minutes of easy jogging",
            "Gradually increase to moderate pace",
            "Maintain steady effort for the middle portion",
            "Finish with 10 minutes of easy jogging",
        ),
        tips=(
            "Keep effort conversational for most of the run",
            "Fuel with water and energy gels if over 90 minutes",
            "Focus on time on feet rather than speed",
        ),
        modifications=Modifications(
            easier="Reduce duration to 45 minutes and add walking breaks",
            harder="Add 2-3 tempo segments of 5 minutes each",
            shorter="Reduce to 45 minutes total",
            longer="Extend to 2 hours but keep intensity low",
        ),
    )


def distance_volume_workout(day: date, progress_percentage: float) -> WorkoutRecommendation:
    return WorkoutRecommendation(
        id=_workout_id("distance-volume", day),
        type=WorkoutType.LONG,
        sport="Run",
        duration=60,
        intensity=4,
        distance=8,
        difficulty=Difficulty.INTERMEDIATE,
        energy_cost=6,
        recovery_hours=24,
        reasoning=(
            f"You're {round(progress_percentage)}% toward your distance goal. "
            f"This long run will help build the endurance needed."
        ),
        instructions=(
            "Start with 10 minutes of easy jogging",
            "Gradually increase pace to moderate effort",
            "Maintain steady pace for 40 minutes",
            "Finish with 10 minutes of easy jogging",
        ),
        tips=(
            "Keep effort conversational for most of the run",
            "Focus on consistent pace rather than speed",
        ),
        modifications=Modifications(
            easier="Reduce distance to 6km and duration to 45 minutes",
            harder="Increase distance to 10km and add 2-3 tempo segments",
            shorter="Reduce to 45 minutes total",
            longer="Extend to 90 minutes with more distance",
        ),
    )


def pace_interval_workout(day: date) -> WorkoutRecommendation:
    return WorkoutRecommendation(
        id=_workout_id("pace-interval", day),
        type=WorkoutType.INTERVAL,
        sport="Run",
        duration=45,
        intensity=8,
        distance=6,
        difficulty=Difficulty.ADVANCED,
        energy_cost=8,
        recovery_hours=48,
        reasoning=(
            "To improve pace, you need structured speed work. "
            "This interval session will target your lactate threshold."
        ),
        alternatives=(
            WorkoutRecommendation(
                id=_workout_id("pace-tempo", day),
                type=WorkoutType.TEMPO,
                sport="Run",
                duration=40,
                intensity=7,
                distance=8,
                difficulty=Difficulty.INTERMEDIATE,
                energy_cost=7,
                recovery_hours=36,
                reasoning="Tempo runs improve your lactate threshold, which is key for pace improvement.",
            ),
        ),
        instructions=(
            "Warm up with 10 minutes of easy jogging",
            "Run 6 x 800m at 5K pace with 2-minute recovery",
            "Keep intervals consistent - don't start too fast",
            "Cool down with 10 minutes of easy jogging",
        ),
        tips=(
            "Use a track or measured route for accurate intervals",
            "Don't run intervals faster than 5K race pace",
        ),
        modifications=Modifications(
            easier="Reduce to 4 x 600m intervals",
            harder="Increase to 8 x 800m or add 400m intervals",
            shorter="Reduce to 4 intervals",
            longer="Add 2 more intervals or extend warm-up/cool-down",
        ),
    )


def frequency_easy_workout(day: date) -> WorkoutRecommendation:
    return WorkoutRecommendation(
        id=_workout_id("frequency-easy", day),
        type=WorkoutType.EASY,
        sport="Run",
        duration=30,
        intensity=3,
        distance=4,
        difficulty=Difficulty.BEGINNER,
        energy_cost=3,
        recovery_hours=12,
        reasoning="To build consistency, focus on easy, enjoyable runs that you can complete regularly.",
        alternatives=(
            WorkoutRecommendation(
                id=_workout_id("frequency-walk", day),
                type=WorkoutType.EASY,
                sport="Walk",
                duration=45,
                intensity=2,
                difficulty=Difficulty.BEGINNER,
                energy_cost=2,
                recovery_hours=6,
                reasoning="Walking is a great way to build the habit of daily activity.",
            ),
        ),
        instructions=(
            "Start with 5 minutes of walking",
            "Gradually increase to a very easy jog",
            "Include walking breaks if needed",
            "Finish with 5 minutes of walking",
        ),
        tips=(
            "Focus on consistency over intensity",
            "Don't worry about pace or distance initially",
        ),
        modifications=Modifications(
            easier="Walk-run intervals (1 min run, 2 min walk)",
            harder="Add 5 minutes of moderate pace in the middle",
            shorter="Reduce to 20 minutes",
            longer="Extend to 45 minutes but keep intensity low",
        ),
    )


def basic_workout(day: date, kind: str = "fallback") -> WorkoutRecommendation:
    """Generic easy run used when there is nothing to base a plan on."""
    return WorkoutRecommendation(
        id=_workout_id(kind, day),
        type=WorkoutType.EASY,
        sport="Run",
        duration=30,
        intensity=4,
        distance=5,
        difficulty=Difficulty.BEGINNER,
        energy_cost=4,
        recovery_hours=12,
        reasoning="Basic training session to maintain fitness.",
        instructions=(
            "Start with 5 minutes of walking",
            "Gradually increase to easy jogging",
            "Keep pace comfortable and conversational",
            "Finish with 5 minutes of walking",
        ),
        tips=(
            "Focus on consistency over intensity",
            "Listen to your body",
            "Stay hydrated throughout",
        ),
    )
