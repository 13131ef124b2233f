"""Pillar score calculators.

Five independent calculators, one per compliance pillar, each mapping a
slice of the compliance record to a score in [0, pillar_weight]. There is no
partial credit beyond what each rule states, and a missing section scores 0.

Pillar rules (weight W, 20 in the reference rule set):
- regulatory: W with certificate, W/2 in progress, 0 otherwise
- accreditation: W when the latest milestone carries a real level, else 0
- faculty: alignment rate x W
- curriculum: W when noted by the regulator and the reference document is
  linked, W/2 when only one holds, 0 otherwise
- outcomes: W when any graduation or tracer record exists, else 0
"""

from collections.abc import Callable

from program_compliance_engine.maturity.records import (
    CertificateStatus,
    ComplianceRecord,
    is_accredited_level,
    latest_milestone,
)

# Reference weight of each pillar; five pillars sum to a 100-point index
DEFAULT_PILLAR_WEIGHT = 20.0

PILLAR_REGULATORY = "regulatory"
PILLAR_ACCREDITATION = "accreditation"
PILLAR_FACULTY = "faculty"
PILLAR_CURRICULUM = "curriculum"
PILLAR_OUTCOMES = "outcomes"

PILLARS: tuple[str, ...] = (
    PILLAR_REGULATORY,
    PILLAR_ACCREDITATION,
    PILLAR_FACULTY,
    PILLAR_CURRICULUM,
    PILLAR_OUTCOMES,
)


def score_regulatory(record: ComplianceRecord, weight: float = DEFAULT_PILLAR_WEIGHT) -> float:
    status = record.regulatory_status.certificate_status
    if status is CertificateStatus.WITH_CERTIFICATE:
        return weight
    if status is CertificateStatus.IN_PROGRESS:
        return weight / 2
    return 0.0


def score_accreditation(record: ComplianceRecord, weight: float = DEFAULT_PILLAR_WEIGHT) -> float:
    """Binary: the lifecycle stage of the latest milestone does not matter."""
    latest = latest_milestone(record)
    if latest is not None and is_accredited_level(latest.level):
        return weight
    return 0.0


def score_faculty(alignment_rate: float, weight: float = DEFAULT_PILLAR_WEIGHT) -> float:
    return min(max(alignment_rate, 0.0), 1.0) * weight


def score_curriculum(record: ComplianceRecord, weight: float = DEFAULT_PILLAR_WEIGHT) -> float:
    curriculum = record.curriculum_state
    satisfied = sum(
        (curriculum.reference_document_link is not None, curriculum.is_noted_by_regulator)
    )
    if satisfied == 2:
        return weight
    if satisfied == 1:
        return weight / 2
    return 0.0


def score_outcomes(record: ComplianceRecord, weight: float = DEFAULT_PILLAR_WEIGHT) -> float:
    if record.graduation_records or record.tracer_records:
        return weight
    return 0.0


_RECORD_CALCULATORS: dict[str, Callable[[ComplianceRecord, float], float]] = {
    PILLAR_REGULATORY: score_regulatory,
    PILLAR_ACCREDITATION: score_accreditation,
    PILLAR_CURRICULUM: score_curriculum,
    PILLAR_OUTCOMES: score_outcomes,
}


def compute_pillar_scores(
    record: ComplianceRecord,
    alignment_rate: float,
    pillar_weight: float = DEFAULT_PILLAR_WEIGHT,
) -> dict[str, float]:
    """Score all five pillars for a record.

    The faculty pillar takes the alignment rate already computed by the
    faculty alignment analyzer rather than re-deriving it.

    Args:
        record: The compliance record.
        alignment_rate: Faculty alignment rate in [0, 1].
        pillar_weight: Maximum score of each pillar.

    Returns:
        Pillar name -> score, in PILLARS order.
    """
    scores: dict[str, float] = {}
    for pillar in PILLARS:
        if pillar == PILLAR_FACULTY:
            scores[pillar] = score_faculty(alignment_rate, pillar_weight)
        else:
            scores[pillar] = _RECORD_CALCULATORS[pillar](record, pillar_weight)
    return scores
