"""Outcome aggregator: graduation trends and licensure exam pass rates.

Reduces a record's graduation, tracer-study, and licensure-exam history into:
- a chronological graduation/employment trend, one point per (year, term)
- every licensure entry with its derived pass rates recomputed
- the latest licensure entry (the last one recorded)

Derived pass rates are percentages rounded half-up to two decimals and are
always recomputed from the raw counts, so stale stored values never reach
the presentation layer.
"""

from dataclasses import dataclass
from typing import Any

from program_compliance_engine.maturity.arithmetic import percentage, round_half_up
from program_compliance_engine.maturity.records import (
    GraduationRecord,
    LicensureExamRecord,
    TracerRecord,
)

# Academic term ordering within a year; unrecognized terms sort last
_TERM_RANKS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("1st", "first"), 0),
    (("2nd", "second"), 1),
    (("mid", "summer"), 2),
)
_UNKNOWN_TERM_RANK = 3


@dataclass(frozen=True)
class TrendPoint:
    """Graduates and employment rate for one academic year and term.

    Attributes:
        year: Academic year label.
        term: Term label within the year.
        graduates: Graduates recorded for the period.
        employment_rate: Tracer-study employment rate for the same period,
            0 when no tracer record matches.
    """

    year: str
    term: str
    graduates: int
    employment_rate: float

    @property
    def period(self) -> str:
        return f"{self.term} {self.year}".strip()

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "year": self.year,
            "term": self.term,
            "graduates": self.graduates,
            "employment_rate": self.employment_rate,
        }


@dataclass(frozen=True)
class OutcomeSummary:
    """Aggregated program outcomes.

    Attributes:
        trend: Chronological graduation/employment series.
        licensure_records: All licensure entries with recomputed rates, in
            insertion order.
        latest_licensure: Last licensure entry, or None when there are none.
        total_graduates: Sum of all graduation record counts.
        average_overall_pass_rate: Mean overall pass rate across licensure
            entries; 0 when there are none.
    """

    trend: tuple[TrendPoint, ...]
    licensure_records: tuple[LicensureExamRecord, ...]
    latest_licensure: LicensureExamRecord | None
    total_graduates: int
    average_overall_pass_rate: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "trend": [point.to_dict() for point in self.trend],
            "licensure_records": [entry.model_dump(mode="json") for entry in self.licensure_records],
            "latest_licensure": (
                self.latest_licensure.model_dump(mode="json")
                if self.latest_licensure is not None
                else None
            ),
            "total_graduates": self.total_graduates,
            "average_overall_pass_rate": self.average_overall_pass_rate,
        }


def recompute_licensure_rates(entry: LicensureExamRecord) -> LicensureExamRecord:
    """Return a copy of entry with its three derived pass rates recomputed.

    Args:
        entry: A licensure exam record, possibly carrying stale rates.

    Returns:
        A new LicensureExamRecord whose rates match its raw counts.
    """
    return entry.model_copy(
        update={
            "first_taker_pass_rate": percentage(entry.first_taker_passed, entry.first_taker_count),
            "retaker_pass_rate": percentage(entry.retaker_passed, entry.retaker_count),
            "overall_pass_rate": percentage(
                entry.first_taker_passed + entry.retaker_passed,
                entry.first_taker_count + entry.retaker_count,
            ),
        }
    )


def term_rank(term: str) -> int:
    """Return the position of a term label within the academic year."""
    lowered = term.lower()
    for prefixes, rank in _TERM_RANKS:
        if any(prefix in lowered for prefix in prefixes):
            return rank
    return _UNKNOWN_TERM_RANK


def build_trend(
    graduation_records: tuple[GraduationRecord, ...] | list[GraduationRecord],
    tracer_records: tuple[TracerRecord, ...] | list[TracerRecord],
) -> tuple[TrendPoint, ...]:
    """Join graduation counts with tracer employment rates per (year, term).

    Graduation records sharing a (year, term) pair are summed into one point.
    The first tracer record for a pair supplies its employment rate.

    Args:
        graduation_records: Graduates per period.
        tracer_records: Tracer study results per period.

    Returns:
        Trend points sorted by year, then term order, then term label.
    """
    graduates: dict[tuple[str, str], int] = {}
    for record in graduation_records:
        key = (record.year, record.term)
        graduates[key] = graduates.get(key, 0) + record.count

    employment: dict[tuple[str, str], float] = {}
    for tracer in tracer_records:
        employment.setdefault((tracer.year, tracer.term), tracer.employment_rate)

    points = [
        TrendPoint(
            year=year,
            term=term,
            graduates=count,
            employment_rate=employment.get((year, term), 0.0),
        )
        for (year, term), count in graduates.items()
    ]
    points.sort(key=lambda p: (p.year, term_rank(p.term), p.term))
    return tuple(points)


def aggregate_outcomes(
    graduation_records: tuple[GraduationRecord, ...] | list[GraduationRecord],
    tracer_records: tuple[TracerRecord, ...] | list[TracerRecord],
    licensure_records: tuple[LicensureExamRecord, ...] | list[LicensureExamRecord],
) -> OutcomeSummary:
    """Reduce outcome histories into a trend series and licensure snapshot.

    Args:
        graduation_records: Graduates per period.
        tracer_records: Tracer study results per period.
        licensure_records: Licensure exam results in recorded order.

    Returns:
        OutcomeSummary with recomputed licensure rates.
    """
    recomputed = tuple(recompute_licensure_rates(entry) for entry in licensure_records)

    average = 0.0
    if recomputed:
        average = round_half_up(sum(e.overall_pass_rate for e in recomputed) / len(recomputed))

    return OutcomeSummary(
        trend=build_trend(graduation_records, tracer_records),
        licensure_records=recomputed,
        latest_licensure=recomputed[-1] if recomputed else None,
        total_graduates=sum(record.count for record in graduation_records),
        average_overall_pass_rate=average,
    )
