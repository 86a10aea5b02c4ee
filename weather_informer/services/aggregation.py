"""
Forecast aggregation.

OpenWeatherMap returns a flat list of 3-hour samples aligned to UTC slots.
This module groups them by *local* calendar day and reduces each group to
a `DaySummary` carrying daily high/low, averages, a representative
condition and the normalized hourly entries.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence

from weather_informer.schemas.forecast import DaySummary, HourlyRecord, RawSample
from weather_informer.services.time_format import (
    local_date_key,
    local_day_name,
    local_now,
    resolve_timezone,
    to_12_hour_clock,
)

logger = logging.getLogger(__name__)

MAX_DAYS = 6
MIDDAY_MARKER = "12:00:00"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (-2.5 -> -2, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def transform_hourly_item(sample: RawSample) -> HourlyRecord:
    """
    Normalize one raw sample for the hourly drill-down.

    Temperatures and wind are rounded to integers; precipitation
    probability becomes a 0-100 percentage.
    """
    pop = min(100, max(0, round_half_up(sample.pop * 100)))
    return HourlyRecord(
        time=to_12_hour_clock(sample.dt_txt),
        temp=round_half_up(sample.temp),
        feels_like=round_half_up(sample.feels_like),
        humidity=sample.humidity,
        wind_speed=round_half_up(sample.wind_speed),
        condition=sample.condition,
        description=sample.description,
        icon=sample.icon,
        pop=pop,
    )


def representative_sample(bucket: Sequence[RawSample]) -> RawSample:
    """
    Pick the sample that supplies a day's condition, description and icon.

    Prefers the provider's 12:00:00 slot. That clock string is the
    provider's (UTC) time, not local time, so the chosen sample is not
    necessarily local noon. Without a 12:00 slot the middle sample is
    used (the earlier one for even-sized buckets).
    """
    for sample in bucket:
        if MIDDAY_MARKER in sample.dt_txt:
            return sample
    return bucket[len(bucket) // 2]


def group_by_local_date(samples: Iterable[RawSample], tz: tzinfo) -> Dict[str, List[RawSample]]:
    """
    Bucket samples by the local calendar date of their absolute timestamp.

    Buckets keep first-insertion order and samples keep input order.
    """
    buckets: Dict[str, List[RawSample]] = {}
    for sample in samples:
        buckets.setdefault(local_date_key(sample.dt, tz), []).append(sample)
    return buckets


def summarize_day(
    date_key: str,
    bucket: Sequence[RawSample],
    tz: tzinfo,
    now: Optional[datetime] = None,
) -> DaySummary:
    """
    Reduce one non-empty bucket to a `DaySummary`.
    """
    temps = [s.temp for s in bucket]
    midday = representative_sample(bucket)

    return DaySummary(
        date=date_key,
        day_name=local_day_name(date_key, tz, now),
        temp_high=round_half_up(max(temps)),
        temp_low=round_half_up(min(temps)),
        condition=midday.condition,
        description=midday.description,
        icon=midday.icon,
        humidity=round_half_up(_mean([s.humidity for s in bucket])),
        wind_speed=round_half_up(_mean([s.wind_speed for s in bucket])),
        hourly=[transform_hourly_item(s) for s in bucket],
    )


def transform_forecast_data(
    samples: Sequence[RawSample],
    tz: Optional[tzinfo] = None,
    now: Optional[datetime] = None,
    max_days: int = MAX_DAYS,
) -> List[DaySummary]:
    """
    Turn a flat list of 3-hour samples into daily summaries.

    Args:
        samples: Provider samples, in provider order.
        tz: Timezone whose calendar defines a "day". Defaults to
            `LOCAL_TIMEZONE`.
        now: Reference instant for "today". Defaults to the current time.
        max_days: Maximum number of summaries returned, never above
            `MAX_DAYS`.

    Returns:
        Summaries sorted by date, at most one per date and at most
        `max_days` of them. When the samples all fall after today, a
        placeholder for today built from the first sample comes first.
        An empty input yields an empty list.
    """
    if not samples:
        return []

    tz = tz or resolve_timezone()
    today = local_now(tz, now).date().isoformat()

    buckets = group_by_local_date(samples, tz)
    keys = sorted(buckets)

    if keys[0] > today:
        # Late-night queries: the provider's first slot is already tomorrow
        logger.debug("No samples for %s; backfilling today from the first sample", today)
        buckets[today] = [samples[0]]
        keys.insert(0, today)

    max_days = min(max_days, MAX_DAYS)
    if len(keys) > max_days:
        logger.debug("Dropping %d day(s) beyond the %d-day cap", len(keys) - max_days, max_days)

    return [summarize_day(key, buckets[key], tz, now) for key in keys[:max_days]]
