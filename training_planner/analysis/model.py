"""Acute/chronic training load model over daily load points."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ..config import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DaySummary:
    """Representative summary of the sessions on one day."""

    name: str
    sport_type: str
    duration: int  # seconds, summed over the day
    avg_hr: Optional[int] = None
    avg_power: Optional[int] = None


@dataclass(frozen=True)
class TrainingLoadPoint:
    """Aggregated load for one calendar day."""

    date: date
    trimp: float
    tss: float
    normalized_load: float
    activity: Optional[DaySummary] = None


class LoadStatus(Enum):
    """Training status derived from load balance and ramp rate."""

    PEAK = "peak"
    BUILD = "build"
    MAINTAIN = "maintain"
    RECOVER = "recover"


STATUS_RECOMMENDATIONS = {
    LoadStatus.PEAK: "High training stress detected. Consider reducing intensity and incorporating recovery.",
    LoadStatus.BUILD: "Good building phase. Maintain current training progression while monitoring recovery.",
    LoadStatus.MAINTAIN: "Steady training load. Consider varying intensity or adding progressive overload.",
    LoadStatus.RECOVER: "Low training stress. Good time for recovery or gradually increasing training load.",
}
NO_DATA_RECOMMENDATION = "Start building your training load gradually"


@dataclass(frozen=True)
class TrainingLoadMetrics:
    """Current fatigue/fitness state of the athlete."""

    acute: float  # ATL, 7-day EMA
    chronic: float  # CTL, 42-day EMA
    balance: float  # TSB = CTL - ATL
    ramp_rate: float  # week-over-week load change
    status: LoadStatus
    recommendation: str

    @classmethod
    def empty(cls) -> "TrainingLoadMetrics":
        return cls(
            acute=0,
            chronic=0,
            balance=0,
            ramp_rate=0,
            status=LoadStatus.RECOVER,
            recommendation=NO_DATA_RECOMMENDATION,
        )


class TrainingLoadModel:
    """Exponentially weighted acute/chronic load model."""

    def __init__(
        self,
        acute_time_constant: Optional[float] = None,
        chronic_time_constant: Optional[float] = None,
        ramp_window: Optional[int] = None,
    ):
        """Initialize the model with EMA time constants.

        Args:
            acute_time_constant: Fatigue time constant (days) - typically 7
            chronic_time_constant: Fitness time constant (days) - typically 42
            ramp_window: Days per block compared for the ramp rate
        """
        self.acute_time_constant = acute_time_constant or config.FATIGUE_DECAY_RATE
        self.chronic_time_constant = chronic_time_constant or config.FITNESS_DECAY_RATE
        self.ramp_window = ramp_window or config.RAMP_RATE_WINDOW

    @staticmethod
    def exponential_average(values: Sequence[float], time_constant: float) -> float:
        """EMA with alpha = 1 / time_constant, seeded with the first value."""
        if len(values) == 0:
            return 0.0
        series = pd.Series(values, dtype=float)
        return float(series.ewm(alpha=1 / time_constant, adjust=False).mean().iloc[-1])

    def ramp_rate(self, loads: Sequence[float]) -> float:
        """Average load of the last block minus the block before it."""
        window = self.ramp_window
        if len(loads) < window * 2:
            return 0.0
        recent = np.asarray(loads[-window * 2:], dtype=float)
        return float(recent[window:].mean() - recent[:window].mean())

    @staticmethod
    def classify_status(balance: float, ramp_rate: float) -> LoadStatus:
        if balance < -10 and ramp_rate > 5:
            return LoadStatus.PEAK
        if balance > 5:
            return LoadStatus.RECOVER
        if ramp_rate > 3:
            return LoadStatus.BUILD
        return LoadStatus.MAINTAIN

    def calculate_load_metrics(self, points: Sequence[TrainingLoadPoint]) -> TrainingLoadMetrics:
        """Calculate acute/chronic load metrics from daily load points.

        Args:
            points: Daily load points, any order

        Returns:
            TrainingLoadMetrics, zeroed with status recover for no data
        """
        if not points:
            return TrainingLoadMetrics.empty()

        ordered = sorted(points, key=lambda p: p.date)
        loads = [p.normalized_load for p in ordered]

        chronic = self.exponential_average(loads, self.chronic_time_constant)
        acute = self.exponential_average(loads[-int(self.acute_time_constant):], self.acute_time_constant)
        balance = chronic - acute
        ramp = self.ramp_rate(loads)
        status = self.classify_status(balance, ramp)

        logger.debug(
            f"Load metrics over {len(loads)} days: acute {acute:.1f}, chronic {chronic:.1f}, "
            f"balance {balance:.1f}, ramp {ramp:.1f} -> {status.value}"
        )

        return TrainingLoadMetrics(
            acute=round(acute),
            chronic=round(chronic),
            balance=round(balance),
            ramp_rate=round(ramp, 1),
            status=status,
            recommendation=STATUS_RECOMMENDATIONS[status],
        )
