"""Brute-force slot search over a bounded range.

The candidate space is small (a week at 30-minute steps is a few hundred
starts), so every start on the grid is scored and the viable ones ranked.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterator, List, Sequence

from .. import constants as C
from ..events import Event
from ..interval import Interval, InvalidIntervalError
from ..preferences import SchedulingPreferences
from .scorer import TimeSlot, score_slot

logger = logging.getLogger(__name__)


class EmptyRangeError(ValueError):
    """Raised when a range cannot hold even one candidate of the requested duration."""


def candidate_intervals(
    search_range: Interval,
    duration_minutes: int,
    *,
    granularity_minutes: int = C.SLOT_GRANULARITY_MINUTES,
) -> Iterator[Interval]:
    """Yield ``[t, t + duration)`` for every grid start that fits in the range.

    Raises:
        EmptyRangeError: if the range is shorter than the duration.
    """
    duration = timedelta(minutes=duration_minutes)
    if search_range.duration < duration:
        raise EmptyRangeError(
            f"Range of {search_range.duration} cannot fit {duration_minutes} minutes"
        )
    step = timedelta(minutes=granularity_minutes)
    current: datetime = search_range.start
    while current < search_range.end:
        end = current + duration
        if end > search_range.end:
            break
        yield Interval(current, end)
        current += step


def search_slots(
    duration_minutes: int,
    events: Sequence[Event],
    search_range: Interval,
    prefs: SchedulingPreferences,
    attendees: Sequence[str] = (),
    top_n: int = C.DEFAULT_TOP_N,
) -> List[TimeSlot]:
    """Return the ``top_n`` best viable slots, best first.

    Ties keep enumeration order, so the earlier slot wins. A range too short
    for the duration, a zero duration or a non-positive ``top_n`` all give an
    empty list: finding nothing is a normal outcome.

    Raises:
        InvalidIntervalError: if ``duration_minutes`` is negative.
    """
    if duration_minutes < 0:
        raise InvalidIntervalError(f"Negative duration: {duration_minutes} minutes")
    if duration_minutes == 0 or top_n <= 0:
        return []

    try:
        candidates = list(candidate_intervals(search_range, duration_minutes))
    except EmptyRangeError as exc:
        logger.debug("No candidates: %s", exc)
        return []

    slots = [score_slot(candidate, events, prefs, attendees) for candidate in candidates]
    viable = [slot for slot in slots if slot.is_viable]
    viable.sort(key=lambda slot: slot.score, reverse=True)

    logger.debug(
        "Scored %d candidates for %d minutes, %d viable",
        len(candidates),
        duration_minutes,
        len(viable),
    )
    return viable[:top_n]
