"""Gap detector: rule catalog of unmet compliance conditions.

Each GapRule pairs a predicate over the compliance record (and the faculty
alignment statistics) with a category and a human-readable message. Every
rule is evaluated on every call; a record can trigger any subset of rules,
and findings are returned in catalog order, not by severity.

Messages are str.format_map templates. Available fields:
- unaligned_count: counted faculty not tagged Aligned
- alignment_percentage: whole-number alignment percentage
- total_faculty_count: counted faculty
"""

from collections.abc import Callable
from dataclasses import dataclass

from program_compliance_engine.maturity.faculty import FacultyAlignment
from program_compliance_engine.maturity.records import (
    CertificateStatus,
    ComplianceRecord,
    is_accredited_level,
    latest_milestone,
)

CATEGORY_INSTITUTIONAL = "Institutional"
CATEGORY_GOVERNANCE = "Governance"
CATEGORY_ACCREDITATION = "Accreditation"
CATEGORY_FACULTY = "Faculty"
CATEGORY_CURRICULUM = "Curriculum"
CATEGORY_OUTCOMES = "Outcomes"


@dataclass(frozen=True)
class GapFinding:
    """A single unmet compliance condition.

    Attributes:
        category: Compliance area the finding belongs to.
        message: Human-readable statement of what is missing.
    """

    category: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"category": self.category, "message": self.message}


@dataclass(frozen=True)
class GapRule:
    """Immutable rule producing a gap finding when its predicate holds.

    Attributes:
        rule_id: Stable identifier for the rule.
        category: Category of the finding the rule produces.
        message_template: str.format_map template for the finding message.
        applies: Predicate returning True when the gap is present.
    """

    rule_id: str
    category: str
    message_template: str
    applies: Callable[[ComplianceRecord, FacultyAlignment], bool]

    def evaluate(self, record: ComplianceRecord, alignment: FacultyAlignment) -> GapFinding | None:
        if not self.applies(record, alignment):
            return None
        message = self.message_template.format_map(
            {
                "unaligned_count": alignment.unaligned_faculty_count,
                "alignment_percentage": alignment.alignment_percentage,
                "total_faculty_count": alignment.total_faculty_count,
            }
        )
        return GapFinding(category=self.category, message=message)


def _missing_certificate(record: ComplianceRecord, _: FacultyAlignment) -> bool:
    return record.regulatory_status.certificate_status is not CertificateStatus.WITH_CERTIFICATE


def _missing_governance_approval(record: ComplianceRecord, _: FacultyAlignment) -> bool:
    return record.regulatory_status.governance_approval_link is None


def _not_accredited(record: ComplianceRecord, _: FacultyAlignment) -> bool:
    latest = latest_milestone(record)
    return latest is None or not is_accredited_level(latest.level)


def _faculty_not_fully_aligned(_: ComplianceRecord, alignment: FacultyAlignment) -> bool:
    return alignment.alignment_rate < 1.0


def _curriculum_not_noted(record: ComplianceRecord, _: FacultyAlignment) -> bool:
    return not record.curriculum_state.is_noted_by_regulator


def _no_graduation_data(record: ComplianceRecord, _: FacultyAlignment) -> bool:
    return not record.graduation_records


# ---------------------------------------------------------------------------
# Built-in gap rules, in reporting order
# ---------------------------------------------------------------------------

GAP_RULES: tuple[GapRule, ...] = (
    GapRule(
        rule_id="institutional-certificate",
        category=CATEGORY_INSTITUTIONAL,
        message_template=(
            "Program does not hold a Certificate of Program Compliance (COPC)."
        ),
        applies=_missing_certificate,
    ),
    GapRule(
        rule_id="governance-board-approval",
        category=CATEGORY_GOVERNANCE,
        message_template="No governing board approval is on file for the program.",
        applies=_missing_governance_approval,
    ),
    GapRule(
        rule_id="accreditation-level",
        category=CATEGORY_ACCREDITATION,
        message_template="Program has no accreditation at a recognized level.",
        applies=_not_accredited,
    ),
    GapRule(
        rule_id="faculty-alignment",
        category=CATEGORY_FACULTY,
        message_template=(
            "{unaligned_count} member(s) do not meet CMO qualification alignment "
            "({alignment_percentage}% aligned)."
        ),
        applies=_faculty_not_fully_aligned,
    ),
    GapRule(
        rule_id="curriculum-noted",
        category=CATEGORY_CURRICULUM,
        message_template="Curriculum has not been noted by the regulator.",
        applies=_curriculum_not_noted,
    ),
    GapRule(
        rule_id="outcomes-graduation-data",
        category=CATEGORY_OUTCOMES,
        message_template="No graduation outcome data has been recorded.",
        applies=_no_graduation_data,
    ),
)


def detect_gaps(
    record: ComplianceRecord,
    alignment: FacultyAlignment,
    rules: tuple[GapRule, ...] = GAP_RULES,
) -> list[GapFinding]:
    """Evaluate every gap rule against a record.

    Args:
        record: The compliance record.
        alignment: Faculty alignment statistics for the record's roster.
        rules: Rule catalog to evaluate, in reporting order.

    Returns:
        Findings for every rule whose predicate holds, in rule order.
    """
    findings: list[GapFinding] = []
    for rule in rules:
        finding = rule.evaluate(record, alignment)
        if finding is not None:
            findings.append(finding)
    return findings
