"""Maturity composer: assembles the full analytics result for one record.

Runs the faculty alignment analyzer, the pillar calculators, the outcome
aggregator, and the gap detector over one compliance record, sums the five
pillar scores into the overall maturity index, and returns a single
MaturityAnalytics value for the presentation layer.

The composer never raises: every calculator degrades to zero or empty on
missing data, so an empty record yields a 0 index with every gap reported.
Nothing is cached; each call recomputes from the record.
"""

from dataclasses import dataclass
from typing import Any

from program_compliance_engine.maturity.arithmetic import round_half_up
from program_compliance_engine.maturity.faculty import FacultyAlignment, analyze_faculty_alignment
from program_compliance_engine.maturity.gaps import GapFinding, detect_gaps
from program_compliance_engine.maturity.outcomes import OutcomeSummary, aggregate_outcomes
from program_compliance_engine.maturity.pillars import DEFAULT_PILLAR_WEIGHT, compute_pillar_scores
from program_compliance_engine.maturity.records import (
    ComplianceRecord,
    LicensureExamRecord,
    Specialization,
)
from program_compliance_engine.observability import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MaturityAnalytics:
    """Complete maturity analytics for one program compliance record.

    Attributes:
        program_id: Program the record belongs to.
        academic_year: Academic year of the record.
        overall_score: Sum of pillar scores rounded to a whole number.
        pillar_scores: Pillar name -> score.
        faculty_alignment: Alignment statistics and specialization partition.
        outcomes: Graduation trend and licensure snapshot.
        gaps: Gap findings in rule order.
    """

    program_id: str
    academic_year: str
    overall_score: int
    pillar_scores: dict[str, float]
    faculty_alignment: FacultyAlignment
    outcomes: OutcomeSummary
    gaps: tuple[GapFinding, ...]

    @property
    def specialization_coverage(self) -> dict[str, str]:
        return self.faculty_alignment.specialization_coverage

    @property
    def latest_licensure(self) -> LicensureExamRecord | None:
        return self.outcomes.latest_licensure

    def to_dict(self) -> dict[str, Any]:
        """Return the analytics as a JSON-ready mapping."""
        return {
            "program_id": self.program_id,
            "academic_year": self.academic_year,
            "overall_score": self.overall_score,
            "pillar_scores": dict(self.pillar_scores),
            "faculty_alignment": self.faculty_alignment.to_dict(),
            "specialization_coverage": dict(self.specialization_coverage),
            "outcomes": self.outcomes.to_dict(),
            "gaps": [gap.to_dict() for gap in self.gaps],
        }


def compose_maturity(
    record: ComplianceRecord,
    specialization_catalog: list[Specialization] | tuple[Specialization, ...] = (),
    pillar_weight: float = DEFAULT_PILLAR_WEIGHT,
) -> MaturityAnalytics:
    """Compute the maturity analytics for a compliance record.

    Args:
        record: Fully assembled compliance record.
        specialization_catalog: Specialization tracks offered by the program.
        pillar_weight: Maximum score of each of the five pillars.

    Returns:
        MaturityAnalytics for the record.
    """
    alignment = analyze_faculty_alignment(record.faculty_roster, specialization_catalog)
    pillar_scores = compute_pillar_scores(record, alignment.alignment_rate, pillar_weight)
    outcomes = aggregate_outcomes(
        record.graduation_records,
        record.tracer_records,
        record.licensure_exam_records,
    )
    gaps = tuple(detect_gaps(record, alignment))

    overall_score = int(round_half_up(sum(pillar_scores.values()), 0))

    logger.debug(
        "Maturity analytics composed",
        program_id=record.program_id,
        academic_year=record.academic_year,
        overall_score=overall_score,
        gap_count=len(gaps),
    )

    return MaturityAnalytics(
        program_id=record.program_id,
        academic_year=record.academic_year,
        overall_score=overall_score,
        pillar_scores=pillar_scores,
        faculty_alignment=alignment,
        outcomes=outcomes,
        gaps=gaps,
    )
