"""Weekly opening hours."""

from dataclasses import dataclass
from datetime import datetime, time, timedelta


@dataclass(frozen=True)
class OpenInterval:
    """One opening on a given weekday.

    A close time that is not after the open time means the interval runs
    past midnight into the following day.
    """

    opens: time
    closes: time

    @property
    def crosses_midnight(self) -> bool:
        return self.closes <= self.opens


@dataclass(frozen=True)
class WeeklyHours:
    """Opening intervals keyed by weekday (Monday is 0)."""

    days: tuple[tuple[OpenInterval, ...], ...] = ((),) * 7

    def __post_init__(self) -> None:
        if len(self.days) != 7:
            msg = f"WeeklyHours needs 7 days, got {len(self.days)}"
            raise ValueError(msg)

    @classmethod
    def from_mapping(cls, mapping: dict[int, list[OpenInterval]]) -> "WeeklyHours":
        days: list[tuple[OpenInterval, ...]] = [() for _ in range(7)]
        for weekday, intervals in mapping.items():
            if not 0 <= weekday < 7:
                msg = f"Invalid weekday {weekday!r}"
                raise ValueError(msg)
            days[weekday] = tuple(intervals)
        return cls(days=tuple(days))

    def intervals_on(self, weekday: int) -> tuple[OpenInterval, ...]:
        return self.days[weekday % 7]

    def is_open_at(self, at: datetime) -> bool:
        """Return True if any interval covers the given moment."""
        now = at.time()
        for interval in self.intervals_on(at.weekday()):
            if interval.crosses_midnight:
                if now >= interval.opens:
                    return True
            elif interval.opens <= now < interval.closes:
                return True

        # Yesterday's late intervals may still be running.
        yesterday = (at - timedelta(days=1)).weekday()
        return any(
            interval.crosses_midnight and now < interval.closes
            for interval in self.intervals_on(yesterday)
        )
