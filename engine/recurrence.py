"""
Recurrence expansion — which dates does a recurring obligation land on inside a window?

Every occurrence is computed directly from the anchor as anchor + k * step,
never by walking one mutable date forward. That keeps month-end handling
stable: an obligation anchored on the 31st falls on Feb 29 (or 28), then
back on Mar 31, instead of drifting to the 28th/29th forever.

Month-end policy: clamp to the last day of the target month (dateutil's
relativedelta semantics). A Feb 29 yearly anchor lands on Feb 28 in
non-leap years.

The number of occurrences produced per call is capped (31 by default) so a
daily obligation expanded across a multi-year window stays cheap.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterator, List, Optional, Sequence

import structlog
from dateutil.relativedelta import relativedelta

from core.errors import InvalidProjectionInput

from .records import Frequency, RecurringObligation

log = structlog.get_logger(__name__)

DEFAULT_MAX_OCCURRENCES = 31

_DAY_STEPS = {
    Frequency.DAILY: 1,
    Frequency.WEEKLY: 7,
}


def resolve_frequency(raw) -> Optional[Frequency]:
    """Map a stored frequency value to Frequency, or None if unrecognized."""
    if isinstance(raw, Frequency):
        return raw
    if raw is None:
        return None
    try:
        return Frequency(str(raw).strip().lower())
    except ValueError:
        return None


def _interval_days(frequency: Frequency, custom_interval_days: Optional[int]) -> Optional[int]:
    if frequency in _DAY_STEPS:
        return _DAY_STEPS[frequency]
    if frequency is Frequency.CUSTOM:
        if custom_interval_days is None or int(custom_interval_days) <= 0:
            return None
        return int(custom_interval_days)
    return None


def _nth(anchor: date, frequency: Frequency, interval: Optional[int], k: int) -> date:
    if frequency is Frequency.MONTHLY:
        return anchor + relativedelta(months=k)
    if frequency is Frequency.YEARLY:
        return anchor + relativedelta(years=k)
    return anchor + timedelta(days=interval * k)


def _first_index(anchor: date, frequency: Frequency, interval: Optional[int], window_start: date) -> int:
    """Smallest k >= 0 whose occurrence is on or after window_start."""
    if anchor >= window_start:
        return 0

    if interval is not None:
        gap = (window_start - anchor).days
        return -(-gap // interval)

    if frequency is Frequency.MONTHLY:
        k = (window_start.year - anchor.year) * 12 + (window_start.month - anchor.month) - 1
    else:
        k = window_start.year - anchor.year - 1
    k = max(k, 0)
    while _nth(anchor, frequency, interval, k) < window_start:
        k += 1
    return k


@dataclass(frozen=True)
class Occurrences:
    """
    Lazy, finite, restartable view of an obligation's dates in a window.

    Iterating twice yields the same dates; nothing is computed until iterated.
    """

    obligation: RecurringObligation
    window_start: date
    window_end: date
    start_from: Optional[date] = None
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES
    _frequency: Optional[Frequency] = field(default=None, repr=False)
    _interval: Optional[int] = field(default=None, repr=False)

    def __iter__(self) -> Iterator[date]:
        frequency = self._frequency
        if frequency is None:
            return
        if frequency not in (Frequency.MONTHLY, Frequency.YEARLY) and self._interval is None:
            return

        anchor = self.start_from or self.obligation.anchor
        end = self.window_end
        if self.obligation.end_date is not None and self.obligation.end_date < end:
            end = self.obligation.end_date

        k = _first_index(anchor, frequency, self._interval, self.window_start)
        produced = 0
        while produced < self.max_occurrences:
            current = _nth(anchor, frequency, self._interval, k)
            if current > end:
                break
            yield current
            produced += 1
            k += 1

    def count(self) -> int:
        return sum(1 for _ in self)


def expand_occurrences(
    obligation: RecurringObligation,
    window_start: date,
    window_end: date,
    *,
    start_from: Optional[date] = None,
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
) -> Occurrences:
    """
    Occurrence dates of `obligation` within [window_start, window_end].

    Parameters
    ----------
    obligation : RecurringObligation
        Template to expand. Inactive obligations, unknown frequencies and
        custom frequencies without a positive interval expand to nothing.
    window_start, window_end : date
        Inclusive window. window_start must not be after window_end.
    start_from : date, optional
        Externally tracked "next occurrence" cursor; replaces the anchor.
    max_occurrences : int
        Hard cap on dates produced for this call.
    """
    if window_start > window_end:
        raise InvalidProjectionInput(
            f"window_start {window_start} is after window_end {window_end}"
        )
    if max_occurrences <= 0:
        raise InvalidProjectionInput(f"max_occurrences must be positive, got {max_occurrences}")

    frequency = resolve_frequency(obligation.frequency)
    interval = None
    if frequency is not None:
        interval = _interval_days(frequency, obligation.custom_interval_days)

    if not obligation.is_active:
        frequency = None
    elif frequency is None:
        log.debug(
            "obligation_skipped",
            reason="unknown_frequency",
            obligation=obligation.name,
            frequency=str(obligation.frequency),
        )
    elif frequency is Frequency.CUSTOM and interval is None:
        log.debug(
            "obligation_skipped",
            reason="missing_custom_interval",
            obligation=obligation.name,
        )
        frequency = None

    return Occurrences(
        obligation=obligation,
        window_start=window_start,
        window_end=window_end,
        start_from=start_from,
        max_occurrences=max_occurrences,
        _frequency=frequency,
        _interval=interval,
    )


def next_occurrence(
    current: date,
    frequency,
    custom_interval_days: Optional[int] = None,
) -> date:
    """
    One step forward from `current`, used when a due obligation has been posted.
    Unknown frequencies leave the cursor where it is; custom without an
    interval steps a single day.
    """
    freq = resolve_frequency(frequency)
    if freq is None:
        return current
    if freq is Frequency.CUSTOM:
        days = int(custom_interval_days) if custom_interval_days else 1
        return current + timedelta(days=days)
    return _nth(current, freq, _DAY_STEPS.get(freq), 1)


@dataclass
class DueScan:
    """Obligations to post today, and ones whose end date has passed."""
    due: List[RecurringObligation] = field(default_factory=list)
    expired: List[RecurringObligation] = field(default_factory=list)


def due_obligations(obligations: Sequence[RecurringObligation], today: date) -> DueScan:
    """
    Split active obligations whose cursor (anchor) is on or before `today`
    into due and expired. Posting transactions and advancing cursors is the
    caller's job.
    """
    scan = DueScan()
    for ob in obligations:
        if not ob.is_active or ob.anchor > today:
            continue
        if ob.end_date is not None and ob.end_date < today:
            scan.expired.append(ob)
        else:
            scan.due.append(ob)
    return scan
