"""Per-session training stress metrics and daily aggregation."""

import logging
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

from ..config import config
from ..models import Activity
from .model import DaySummary, TrainingLoadPoint
from .strength import calculate_strength_load
from .thresholds import AthleteThresholds, DEFAULT_THRESHOLDS

logger = logging.getLogger(__name__)


class TrainingLoadCalculator:
    """Calculate TRIMP, TSS and normalized load for activities."""

    def __init__(self, thresholds: Optional[AthleteThresholds] = None):
        """Initialize with athlete-specific thresholds.

        Args:
            thresholds: Athlete calibration (DEFAULT_THRESHOLDS if None)
        """
        self.thresholds = thresholds or DEFAULT_THRESHOLDS

    def calculate_trimp(self, activity: Activity) -> int:
        """Calculate Training Impulse (TRIMP) using Banister's method.

        TRIMP = duration * HR_ratio * 0.64 * e^(1.92 * HR_ratio)
        where HR_ratio = (HR_avg - HR_rest) / (HR_max - HR_rest)

        Returns 0 for sessions without heart rate data.
        """
        if not activity.has_heartrate or not activity.moving_time:
            return 0

        reserve = self.thresholds.heart_rate_reserve
        if reserve <= 0:
            return 0

        hr_ratio = (activity.average_heartrate - self.thresholds.resting_heart_rate) / reserve
        hr_ratio = max(0.0, min(1.0, hr_ratio))  # Clamp between 0 and 1

        trimp = activity.duration_minutes * hr_ratio * (0.64 * np.exp(1.92 * hr_ratio))
        trimp *= config.get_sport_load_multiplier(activity.sport_type)

        return int(round(trimp))

    def calculate_tss(self, activity: Activity) -> int:
        """Calculate Training Stress Score.

        Power-based when average power and FTP are known:
            TSS = (duration_seconds * NP * IF) / (FTP * 3600) * 100
        HR-based otherwise, and a flat 50 TSS per hour without either.
        """
        ftp = self.thresholds.functional_threshold_power

        if activity.has_power and ftp:
            intensity_factor = activity.average_watts / ftp
            normalized_power = activity.average_watts * config.get_variability_index(activity.sport_type)
            tss = (activity.moving_time * normalized_power * intensity_factor) / (ftp * 3600) * 100
            return int(round(max(0.0, tss)))

        if activity.has_heartrate:
            hr_ratio = activity.average_heartrate / self.thresholds.effective_lactate_threshold
            intensity_factor = max(0.5, min(1.15, hr_ratio))
            tss = activity.duration_hours * intensity_factor ** 2 * 100
            tss *= config.get_sport_load_multiplier(activity.sport_type)
            return int(round(max(0.0, tss)))

        return int(round(activity.duration_hours * 50))

    def get_intensity_multiplier(self, activity: Activity) -> float:
        """Intensity relative to max HR, or to FTP when only power exists."""
        if activity.has_heartrate and self.thresholds.max_heart_rate:
            return max(0.5, min(1.2, activity.average_heartrate / self.thresholds.max_heart_rate))
        ftp = self.thresholds.functional_threshold_power
        if activity.has_power and ftp:
            return max(0.5, min(1.3, activity.average_watts / ftp))
        return 1.0

    def calculate_normalized_load(self, activity: Activity) -> int:
        """Calculate normalized training load on a 0-100 scale.

        Strength sessions use the dedicated strength formula. Everything else
        blends TRIMP and TSS, scaled by intensity and sport.
        """
        if config.is_strength_sport(activity.sport_type):
            return calculate_strength_load(activity, self.thresholds)

        trimp = self.calculate_trimp(activity)
        tss = self.calculate_tss(activity)

        if trimp > 0 and tss > 0:
            base_score = (trimp * 0.6 + tss * 0.4) / 2
        elif tss > 0:
            base_score = tss
        elif trimp > 0:
            base_score = trimp * 1.2  # Slight boost when only HR available
        else:
            base_score = activity.duration_hours * 30

        score = (
            base_score
            * self.get_intensity_multiplier(activity)
            * config.get_sport_load_multiplier(activity.sport_type)
        )

        return int(round(min(100.0, max(0.0, score / 2))))

    def process_activities(self, activities: Iterable[Activity]) -> List[TrainingLoadPoint]:
        """Aggregate activities into one load point per calendar day.

        Args:
            activities: Completed sessions, any order

        Returns:
            Load points sorted ascending by date
        """
        rows = []
        skipped = 0
        for activity in activities:
            if activity.moving_time <= config.MIN_ACTIVITY_SECONDS:
                skipped += 1
                continue
            rows.append({
                "date": activity.local_date,
                "activity": activity,
                "trimp": self.calculate_trimp(activity),
                "tss": self.calculate_tss(activity),
                "load": self.calculate_normalized_load(activity),
                "moving_time": activity.moving_time,
            })

        if skipped:
            logger.debug(f"Skipped {skipped} activities shorter than {config.MIN_ACTIVITY_SECONDS}s")

        if not rows:
            return []

        df = pd.DataFrame(rows)
        points = []
        for day, group in df.groupby("date", sort=True):
            points.append(TrainingLoadPoint(
                date=day,
                trimp=float(group["trimp"].sum()),
                tss=float(group["tss"].sum()),
                normalized_load=float(group["load"].sum()),
                activity=self._summarize_day(list(group["activity"])),
            ))

        return points

    @staticmethod
    def _summarize_day(day_activities: List[Activity]) -> DaySummary:
        primary = max(day_activities, key=lambda a: a.moving_time)
        count = len(day_activities)

        avg_hr = None
        if any(a.has_heartrate for a in day_activities):
            avg_hr = int(round(sum(a.average_heartrate or 0 for a in day_activities) / count))
        avg_power = None
        if any(a.has_power for a in day_activities):
            avg_power = int(round(sum(a.average_watts or 0 for a in day_activities) / count))

        return DaySummary(
            name=f"{count} activities" if count > 1 else primary.name,
            sport_type="Mixed" if count > 1 else primary.sport_type,
            duration=sum(a.moving_time for a in day_activities),
            avg_hr=avg_hr,
            avg_power=avg_power,
        )
