"""Athlete physiological thresholds and their estimation from history."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from ..config import config
from ..models import Activity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AthleteThresholds:
    """Per-athlete calibration used by every load formula."""

    max_heart_rate: float
    resting_heart_rate: float
    functional_threshold_power: Optional[float] = None
    lactate_threshold: Optional[float] = None
    weight: Optional[float] = None

    @property
    def heart_rate_reserve(self) -> float:
        return self.max_heart_rate - self.resting_heart_rate

    @property
    def effective_lactate_threshold(self) -> float:
        """Lactate threshold HR, estimated from max HR when not measured."""
        if self.lactate_threshold:
            return self.lactate_threshold
        return self.max_heart_rate * config.LACTATE_THRESHOLD_RATIO


# Calibration for bulk jobs that have neither explicit nor estimated thresholds
DEFAULT_THRESHOLDS = AthleteThresholds(
    max_heart_rate=config.DEFAULT_MAX_HEART_RATE,
    resting_heart_rate=config.DEFAULT_RESTING_HEART_RATE,
    functional_threshold_power=config.DEFAULT_FTP,
)


def _select_percentile(values: np.ndarray, fraction: float, descending: bool) -> float:
    """Pick the value at floor(n * fraction) of the sorted sample."""
    ordered = np.sort(values)
    if descending:
        ordered = ordered[::-1]
    return float(ordered[int(len(ordered) * fraction)])


def estimate_thresholds(activities: Iterable[Activity]) -> AthleteThresholds:
    """Estimate thresholds from an athlete's own activity history.

    Max HR is the 95th percentile of observed max HR (average HR when a
    session has no max), resting HR the 5th percentile of average HR, and FTP
    the 90th percentile of weighted-average power over efforts longer than
    20 minutes. Defaults apply when there is no HR data at all.

    Args:
        activities: Completed sessions, any order

    Returns:
        AthleteThresholds, always fully resolved for HR
    """
    activities = list(activities)
    with_hr = [a for a in activities if a.has_heartrate]

    max_hrs = np.array([a.max_heartrate or a.average_heartrate for a in with_hr], dtype=float)
    max_hrs = max_hrs[max_hrs > 0]
    if max_hrs.size:
        max_heart_rate = _select_percentile(max_hrs, 0.05, descending=True)
    else:
        max_heart_rate = config.ESTIMATED_MAX_HEART_RATE

    avg_hrs = np.array([a.average_heartrate for a in with_hr], dtype=float)
    if avg_hrs.size:
        resting_heart_rate = _select_percentile(avg_hrs, 0.05, descending=False)
    else:
        resting_heart_rate = config.ESTIMATED_RESTING_HEART_RATE

    power_values = np.array(
        [
            a.weighted_average_watts or a.average_watts
            for a in activities
            if a.has_power and a.moving_time > 1200
        ],
        dtype=float,
    )
    power_values = power_values[power_values > 0]
    ftp = _select_percentile(power_values, 0.1, descending=True) if power_values.size else None

    if resting_heart_rate >= max_heart_rate:
        # Only happens with a single HR sample; keep the reserve positive
        logger.warning(
            f"Estimated resting HR {resting_heart_rate:.0f} >= max HR {max_heart_rate:.0f}, "
            f"using default resting HR"
        )
        resting_heart_rate = min(config.ESTIMATED_RESTING_HEART_RATE, max_heart_rate - 1)

    logger.debug(
        f"Estimated thresholds from {len(activities)} activities: "
        f"max HR {max_heart_rate:.0f}, resting HR {resting_heart_rate:.0f}, FTP {ftp}"
    )

    return AthleteThresholds(
        max_heart_rate=max_heart_rate,
        resting_heart_rate=resting_heart_rate,
        functional_threshold_power=ftp,
        lactate_threshold=max_heart_rate * config.LACTATE_THRESHOLD_RATIO,
    )
