"""Weather adjustments applied to workout recommendations.

Environmental factors that change what a session should look like:
- Heat: lower intensity, shorter sessions
- Cold: longer warm-up, layered clothing
- Rain: lower intensity for footing
- Wind: offer an indoor alternative
"""

import logging
from dataclasses import replace
from datetime import date
from enum import Enum
from typing import List, Optional

from ..config import config
from ..models import WeatherSnapshot
from .workouts import WorkoutRecommendation, WorkoutType

logger = logging.getLogger(__name__)


class WeatherStressor(Enum):
    """Weather conditions that trigger an adjustment."""

    HEAT = "heat"
    COLD = "cold"
    RAIN = "rain"
    WIND = "wind"


WEATHER_NOTES = {
    WeatherStressor.HEAT: "High temperature - reduce intensity by 1-2 points and stay hydrated",
    WeatherStressor.COLD: "Cold weather - warm up thoroughly and dress in layers",
    WeatherStressor.RAIN: "Wet conditions - reduce intensity and be extra careful on turns",
    WeatherStressor.WIND: "High winds - consider indoor alternatives or reduce intensity",
}


class EnvironmentalAnalyzer:
    """Analyze current conditions and adjust recommendations for them."""

    def __init__(self):
        self.hot_temperature = config.HOT_TEMPERATURE
        self.cold_temperature = config.COLD_TEMPERATURE
        self.wet_precipitation = config.WET_PRECIPITATION
        self.windy_speed = config.WINDY_SPEED

    def detect_stressors(self, weather: WeatherSnapshot) -> List[WeatherStressor]:
        stressors = []
        if weather.temperature > self.hot_temperature:
            stressors.append(WeatherStressor.HEAT)
        if weather.temperature < self.cold_temperature:
            stressors.append(WeatherStressor.COLD)
        if weather.precipitation > self.wet_precipitation:
            stressors.append(WeatherStressor.RAIN)
        if weather.wind_speed > self.windy_speed:
            stressors.append(WeatherStressor.WIND)
        return stressors

    def adjust_workout(
        self,
        workout: WorkoutRecommendation,
        weather: Optional[WeatherSnapshot],
        day: Optional[date] = None,
    ) -> WorkoutRecommendation:
        """Return a copy of the workout adjusted for the weather.

        Args:
            workout: Candidate recommendation
            weather: Current conditions, no adjustment when None
            day: Date used for the indoor alternative's identifier

        Returns:
            Adjusted recommendation, intensity never below 1
        """
        if weather is None:
            return workout

        stressors = self.detect_stressors(weather)
        if not stressors:
            return workout

        duration = workout.duration
        intensity = workout.intensity
        alternatives = workout.alternatives

        if WeatherStressor.HEAT in stressors:
            intensity = max(1, intensity - 1)
            duration = min(duration, config.HEAT_DURATION_CAP)

        if WeatherStressor.COLD in stressors:
            duration += config.COLD_EXTRA_WARMUP

        if WeatherStressor.RAIN in stressors:
            intensity = max(1, intensity - 1)

        if WeatherStressor.WIND in stressors:
            suffix = (day or date.today()).isoformat()
            indoor = WorkoutRecommendation(
                id=f"indoor-{suffix}",
                type=WorkoutType.EASY,
                sport="Workout",
                duration=duration,
                intensity=max(1, intensity - 1),
                difficulty=workout.difficulty,
                energy_cost=max(1, workout.energy_cost - 1),
                recovery_hours=workout.recovery_hours,
                reasoning="Indoor workout to avoid windy conditions",
            )
            alternatives = alternatives + (indoor,)

        logger.debug(
            f"Weather adjusted {workout.id} for {[s.value for s in stressors]}: "
            f"duration {workout.duration}->{duration}, intensity {workout.intensity}->{intensity}"
        )

        return replace(
            workout,
            duration=duration,
            intensity=intensity,
            alternatives=alternatives,
            weather_consideration="; ".join(WEATHER_NOTES[s] for s in stressors),
        )
