"""Configuration management for the training planner."""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration."""

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Load Model Parameters (exponential moving average time constants)
    FITNESS_DECAY_RATE: float = float(os.getenv("FITNESS_DECAY_RATE", "42"))  # days, chronic load
    FATIGUE_DECAY_RATE: float = float(os.getenv("FATIGUE_DECAY_RATE", "7"))  # days, acute load
    RAMP_RATE_WINDOW: int = 7  # days per block compared week-over-week

    # Activity filtering
    MIN_ACTIVITY_SECONDS: int = int(os.getenv("MIN_ACTIVITY_SECONDS", "300"))
    RECENT_ACTIVITY_WINDOW: int = int(os.getenv("RECENT_ACTIVITY_WINDOW", "20"))

    # Default athlete thresholds for bulk jobs with no calibration at all
    DEFAULT_MAX_HEART_RATE: float = float(os.getenv("DEFAULT_MAX_HEART_RATE", "185"))
    DEFAULT_RESTING_HEART_RATE: float = float(os.getenv("DEFAULT_RESTING_HEART_RATE", "60"))
    DEFAULT_FTP: float = float(os.getenv("DEFAULT_FTP", "250"))

    # Fallbacks used when estimating thresholds from history with no HR data
    ESTIMATED_MAX_HEART_RATE: float = 190
    ESTIMATED_RESTING_HEART_RATE: float = 60
    LACTATE_THRESHOLD_RATIO: float = 0.85

    # Recovery gate
    RECOVERY_MIN_SESSIONS: int = 3
    RECOVERY_BALANCE_THRESHOLD: float = float(os.getenv("RECOVERY_BALANCE_THRESHOLD", "-30"))
    RECOVERY_ACUTE_THRESHOLD: float = float(os.getenv("RECOVERY_ACUTE_THRESHOLD", "100"))
    INTENSE_SESSION_LOAD: float = float(os.getenv("INTENSE_SESSION_LOAD", "80"))

    # Intensity and long-workout gates
    INTENSITY_BALANCE_MIN: float = float(os.getenv("INTENSITY_BALANCE_MIN", "0"))
    INTENSITY_ACUTE_MAX: float = float(os.getenv("INTENSITY_ACUTE_MAX", "70"))
    LONG_BALANCE_MIN: float = float(os.getenv("LONG_BALANCE_MIN", "-10"))
    LONG_CHRONIC_MIN: float = float(os.getenv("LONG_CHRONIC_MIN", "70"))
    SUNDAY_REST_ACUTE_MIN: float = float(os.getenv("SUNDAY_REST_ACUTE_MIN", "50"))

    # Periodization phase thresholds
    PHASE_RECOVERY_BALANCE: float = -15
    PHASE_BASE_CHRONIC: float = 30
    PHASE_PEAK_CHRONIC: float = 60

    # Weather adjustments
    HOT_TEMPERATURE: float = float(os.getenv("HOT_TEMPERATURE", "25"))  # °C
    COLD_TEMPERATURE: float = float(os.getenv("COLD_TEMPERATURE", "5"))  # °C
    WET_PRECIPITATION: float = float(os.getenv("WET_PRECIPITATION", "0.5"))  # mm
    WINDY_SPEED: float = float(os.getenv("WINDY_SPEED", "20"))  # km/h
    HEAT_DURATION_CAP: int = 45  # minutes
    COLD_EXTRA_WARMUP: int = 5  # minutes

    # Sport Load Multipliers
    # Scales TRIMP, HR-based TSS and normalized load by sport-specific systemic impact
    SPORT_LOAD_MULTIPLIERS = {
        "Run": float(os.getenv("LOAD_MULTIPLIER_RUNNING", "1.0")),
        "Ride": float(os.getenv("LOAD_MULTIPLIER_CYCLING", "0.85")),
        "VirtualRide": float(os.getenv("LOAD_MULTIPLIER_CYCLING", "0.85")),
        "Swim": float(os.getenv("LOAD_MULTIPLIER_SWIMMING", "1.1")),
        "Hike": float(os.getenv("LOAD_MULTIPLIER_HIKING", "0.7")),
        "Walk": float(os.getenv("LOAD_MULTIPLIER_WALKING", "0.5")),
        "Workout": float(os.getenv("LOAD_MULTIPLIER_WORKOUT", "0.9")),
        "WeightTraining": float(os.getenv("LOAD_MULTIPLIER_WEIGHT_TRAINING", "0.8")),
        "Yoga": float(os.getenv("LOAD_MULTIPLIER_YOGA", "0.6")),
        "CrossCountrySkiing": 1.0,
        "AlpineSki": 0.8,
        "Snowboard": 0.8,
        "IceSkate": 0.9,
        "InlineSkate": 0.9,
        "Rowing": 1.0,
        "Kayaking": 0.9,
        "Canoeing": 0.9,
        "StandUpPaddling": 0.8,
        "Surfing": 0.7,
        "Kitesurf": 0.8,
        "Windsurf": 0.8,
        "Soccer": 1.0,
        "Tennis": 0.9,
        "Basketball": 0.95,
        "Badminton": 0.9,
        "Golf": 0.4,
        "RockClimbing": 0.9,
    }
    DEFAULT_SPORT_LOAD_MULTIPLIER: float = 0.8

    # Variability index approximating normalized power from average power
    VARIABILITY_INDEX = {
        "Run": 1.02,
        "Ride": 1.05,
        "VirtualRide": 1.02,
    }
    DEFAULT_VARIABILITY_INDEX: float = 1.03

    # Sports scored with the dedicated strength formula
    STRENGTH_SPORTS = ("WeightTraining", "StrengthTraining", "Crossfit")

    @classmethod
    def get_sport_load_multiplier(cls, sport: str) -> float:
        """Get load multiplier for sport-specific load adjustment."""
        return cls.SPORT_LOAD_MULTIPLIERS.get(sport, cls.DEFAULT_SPORT_LOAD_MULTIPLIER)

    @classmethod
    def get_variability_index(cls, sport: str) -> float:
        """Get the estimated power variability index for a sport."""
        return cls.VARIABILITY_INDEX.get(sport, cls.DEFAULT_VARIABILITY_INDEX)

    @classmethod
    def is_strength_sport(cls, sport: str) -> bool:
        return sport in cls.STRENGTH_SPORTS

    @classmethod
    def validate(cls) -> bool:
        """Validate configuration consistency."""
        if cls.DEFAULT_RESTING_HEART_RATE >= cls.DEFAULT_MAX_HEART_RATE:
            raise ValueError(
                "DEFAULT_RESTING_HEART_RATE must be lower than DEFAULT_MAX_HEART_RATE"
            )
        if cls.FITNESS_DECAY_RATE <= 0 or cls.FATIGUE_DECAY_RATE <= 0:
            raise ValueError("FITNESS_DECAY_RATE and FATIGUE_DECAY_RATE must be positive")
        if cls.MIN_ACTIVITY_SECONDS < 0:
            raise ValueError("MIN_ACTIVITY_SECONDS cannot be negative")
        return True


config = Config()
