"""Program portfolio summary: institution-wide view over many programs.

Where the composer scores one record, the portfolio summary looks across
every program offering and its compliance record for the same academic
year and produces the dashboard aggregates:

1. Accreditation level distribution
2. Certificate (COPC) rate
3. Campus performance matrix
4. Missing document audit
5. Accreditation roadmap (overdue / upcoming / scheduled / unscheduled)
6. Faculty rank distribution

The summary is pure: the caller supplies the reference year used to judge
roadmap deadlines, so results do not depend on the wall clock.
"""

import re
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Any

from program_compliance_engine.maturity.arithmetic import whole_percentage
from program_compliance_engine.maturity.faculty import counted_faculty
from program_compliance_engine.maturity.records import (
    NON_ACCREDITED_LEVEL,
    AcademicProgram,
    AccreditationMilestone,
    Campus,
    CertificateStatus,
    ComplianceRecord,
    LifecycleStatus,
    is_accredited_level,
)

NOT_YET_SUBJECT = "Not Yet Subject"
PSV_LEVEL = "PSV"
_PSV_MARKER = "Preliminary Survey Visit"
UNSPECIFIED_RANK = "Unspecified"
UNKNOWN_CAMPUS = "Unknown"

# Buckets of the accreditation distribution, highest standing first
ACCREDITATION_LEVELS: tuple[str, ...] = (
    "Level IV Re-accredited",
    "Level IV Accredited",
    "Level III Re-accredited",
    "Level III Accredited",
    "Level II Re-accredited",
    "Level II Accredited",
    "Level I Re-accredited",
    "Level I Accredited",
    PSV_LEVEL,
    NON_ACCREDITED_LEVEL,
    NOT_YET_SUBJECT,
)

ROADMAP_OVERDUE = "Overdue"
ROADMAP_UPCOMING = "Upcoming"
ROADMAP_SCHEDULED = "Scheduled"
ROADMAP_UNSCHEDULED = "Unscheduled"

_YEAR_PATTERN = re.compile(r"\d{4}")


@dataclass(frozen=True)
class AccreditationLevelCount:
    level: str
    count: int
    percentage: int


@dataclass(frozen=True)
class CampusPerformance:
    campus_id: str
    campus_name: str
    offering_count: int
    accredited_count: int
    accredited_percentage: int
    certificate_count: int
    certificate_percentage: int


@dataclass(frozen=True)
class MissingDocuments:
    program_id: str
    program_name: str
    campus_name: str
    items: tuple[str, ...]


@dataclass(frozen=True)
class RoadmapEntry:
    program_id: str
    program_name: str
    campus_name: str
    level: str
    validity_text: str
    status: str


@dataclass(frozen=True)
class RankCount:
    rank: str
    count: int


@dataclass(frozen=True)
class PortfolioSummary:
    """Institution-wide compliance aggregates.

    Attributes:
        total_programs: Number of program offerings considered.
        monitored_count: Number of compliance records supplied.
        certificate_percentage: Share of programs holding a certificate.
        accredited_program_count: Programs at Level I or above.
        accreditation_summary: Non-empty accreditation buckets, largest first.
        campus_performance: Per-campus matrix, most offerings first.
        missing_documents: Programs with at least one missing item.
        roadmap: Accreditation deadlines, overdue first.
        faculty_rank_summary: Faculty counts per academic rank, largest first.
    """

    total_programs: int
    monitored_count: int
    certificate_percentage: int
    accredited_program_count: int
    accreditation_summary: tuple[AccreditationLevelCount, ...]
    campus_performance: tuple[CampusPerformance, ...]
    missing_documents: tuple[MissingDocuments, ...]
    roadmap: tuple[RoadmapEntry, ...]
    faculty_rank_summary: tuple[RankCount, ...]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def current_milestone(record: ComplianceRecord) -> AccreditationMilestone | None:
    """Return the milestone marked Current, falling back to the last one recorded."""
    milestones = record.accreditation_milestones
    for milestone in milestones:
        if milestone.lifecycle_status is LifecycleStatus.CURRENT:
            return milestone
    return milestones[-1] if milestones else None


def accreditation_bucket(program: AcademicProgram, record: ComplianceRecord | None) -> str:
    """Classify a program into one of ACCREDITATION_LEVELS."""
    if program.is_new_program:
        return NOT_YET_SUBJECT
    milestone = current_milestone(record) if record is not None else None
    if milestone is None:
        return NON_ACCREDITED_LEVEL

    level = milestone.level or NON_ACCREDITED_LEVEL
    if _PSV_MARKER in level:
        level = PSV_LEVEL
    return level if level in ACCREDITATION_LEVELS else NON_ACCREDITED_LEVEL


def _counts_as_accredited(milestone: AccreditationMilestone | None) -> bool:
    return (
        milestone is not None
        and is_accredited_level(milestone.level)
        and _PSV_MARKER not in milestone.level
    )


def summarize_accreditation(
    programs: list[AcademicProgram],
    records_by_program: dict[str, ComplianceRecord],
) -> tuple[AccreditationLevelCount, ...]:
    counts = Counter(
        accreditation_bucket(program, records_by_program.get(program.id)) for program in programs
    )
    summary = [
        AccreditationLevelCount(
            level=level,
            count=counts[level],
            percentage=whole_percentage(counts[level], len(programs)),
        )
        for level in ACCREDITATION_LEVELS
        if counts[level] > 0
    ]
    summary.sort(key=lambda entry: entry.count, reverse=True)
    return tuple(summary)


def summarize_campuses(
    programs: list[AcademicProgram],
    records_by_program: dict[str, ComplianceRecord],
    campuses: list[Campus],
) -> tuple[CampusPerformance, ...]:
    rows: list[CampusPerformance] = []
    for campus in campuses:
        campus_programs = [p for p in programs if p.campus_id == campus.id]
        if not campus_programs:
            continue

        accredited = 0
        certified = 0
        for program in campus_programs:
            record = records_by_program.get(program.id)
            if record is None:
                continue
            if record.regulatory_status.certificate_status is CertificateStatus.WITH_CERTIFICATE:
                certified += 1
            if not program.is_new_program and _counts_as_accredited(current_milestone(record)):
                accredited += 1

        total = len(campus_programs)
        rows.append(
            CampusPerformance(
                campus_id=campus.id,
                campus_name=campus.name,
                offering_count=total,
                accredited_count=accredited,
                accredited_percentage=whole_percentage(accredited, total),
                certificate_count=certified,
                certificate_percentage=whole_percentage(certified, total),
            )
        )
    rows.sort(key=lambda row: row.offering_count, reverse=True)
    return tuple(rows)


def missing_items(program: AcademicProgram, record: ComplianceRecord | None) -> list[str]:
    """List the compliance documents a program has not yet supplied."""
    if record is None:
        return ["Full Compliance Record"]

    items: list[str] = []
    if record.regulatory_status.certificate_status is not CertificateStatus.WITH_CERTIFICATE:
        items.append("COPC Certificate")
    if record.curriculum_state.reference_document_link is None:
        items.append("Official CMO Link")
    if not program.is_new_program and not record.accreditation_milestones:
        items.append("Accreditation Milestone")
    if not record.faculty_roster.members:
        items.append("Faculty Staffing List")
    if not record.graduation_records:
        items.append("Graduation Outcome Data")
    return items


def roadmap_status(validity_text: str, reference_year: int) -> str:
    """Judge an accreditation deadline from the first 4-digit year in its text."""
    match = _YEAR_PATTERN.search(validity_text)
    if match is None:
        return ROADMAP_UNSCHEDULED
    year = int(match.group(0))
    if year < reference_year:
        return ROADMAP_OVERDUE
    if year == reference_year:
        return ROADMAP_UPCOMING
    return ROADMAP_SCHEDULED


def build_roadmap(
    programs: list[AcademicProgram],
    records_by_program: dict[str, ComplianceRecord],
    campus_names: dict[str, str],
    reference_year: int,
) -> tuple[RoadmapEntry, ...]:
    entries: list[RoadmapEntry] = []
    for program in programs:
        campus_name = campus_names.get(program.campus_id, UNKNOWN_CAMPUS)
        record = records_by_program.get(program.id)
        milestone = current_milestone(record) if record is not None else None

        if milestone is None:
            # New programs with nothing logged are not yet subject to accreditation
            if program.is_new_program:
                continue
            entries.append(
                RoadmapEntry(
                    program_id=program.id,
                    program_name=program.name,
                    campus_name=campus_name,
                    level=NON_ACCREDITED_LEVEL,
                    validity_text="No schedule logged",
                    status=ROADMAP_UNSCHEDULED,
                )
            )
            continue

        if milestone.level == NOT_YET_SUBJECT:
            continue
        entries.append(
            RoadmapEntry(
                program_id=program.id,
                program_name=program.name,
                campus_name=campus_name,
                level=milestone.level or NON_ACCREDITED_LEVEL,
                validity_text=milestone.status_validity_date or "No schedule set",
                status=roadmap_status(milestone.status_validity_date, reference_year),
            )
        )

    entries.sort(key=lambda e: (e.status != ROADMAP_OVERDUE, e.program_name))
    return tuple(entries)


def summarize_faculty_ranks(records: list[ComplianceRecord]) -> tuple[RankCount, ...]:
    ranks: Counter[str] = Counter()
    for record in records:
        for person in counted_faculty(record.faculty_roster):
            if person.name.strip():
                ranks[person.academic_rank or UNSPECIFIED_RANK] += 1
    return tuple(RankCount(rank=rank, count=count) for rank, count in ranks.most_common())


def summarize_portfolio(
    programs: list[AcademicProgram],
    records: list[ComplianceRecord],
    campuses: list[Campus],
    reference_year: int,
) -> PortfolioSummary:
    """Aggregate compliance standing across a set of program offerings.

    Records are matched to programs by program_id; when several records
    share a program id the first one wins.

    Args:
        programs: Program offerings to summarize.
        records: Compliance records for the same academic year.
        campuses: Campuses the programs belong to.
        reference_year: Year against which roadmap deadlines are judged.

    Returns:
        PortfolioSummary for the programs.
    """
    records_by_program: dict[str, ComplianceRecord] = {}
    for record in records:
        records_by_program.setdefault(record.program_id, record)
    campus_names = {campus.id: campus.name for campus in campuses}

    accreditation_summary = summarize_accreditation(programs, records_by_program)
    certified = sum(
        1
        for record in records
        if record.regulatory_status.certificate_status is CertificateStatus.WITH_CERTIFICATE
    )

    missing: list[MissingDocuments] = []
    for program in programs:
        items = missing_items(program, records_by_program.get(program.id))
        if items:
            missing.append(
                MissingDocuments(
                    program_id=program.id,
                    program_name=program.name,
                    campus_name=campus_names.get(program.campus_id, UNKNOWN_CAMPUS),
                    items=tuple(items),
                )
            )

    return PortfolioSummary(
        total_programs=len(programs),
        monitored_count=len(records),
        certificate_percentage=whole_percentage(certified, len(programs)),
        accredited_program_count=sum(
            entry.count for entry in accreditation_summary if entry.level.startswith("Level")
        ),
        accreditation_summary=accreditation_summary,
        campus_performance=summarize_campuses(programs, records_by_program, campuses),
        missing_documents=tuple(missing),
        roadmap=build_roadmap(programs, records_by_program, campus_names, reference_year),
        faculty_rank_summary=summarize_faculty_ranks(records),
    )
