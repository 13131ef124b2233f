"""Compliance record value objects consumed by the maturity engine.

A ComplianceRecord is one academic program's compliance snapshot for one
academic year. It is assembled by the persistence layer and handed to the
engine whole; the engine only reads it.

Every model here is frozen and lenient:
- null values are dropped before validation so field defaults apply
- unknown tag strings fall back to the least favourable tag
- non-numeric counts and rates read as zero
- blank document links read as absent

Field names are snake_case in Python and camelCase on the wire.
"""

import math
from collections.abc import Callable
from enum import StrEnum
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Sentinel level meaning "no real accreditation level" in the free-form level field
NON_ACCREDITED_LEVEL = "Non Accredited"

# Reserved bucket for members without a valid specialization assignment
GENERAL_SPECIALIZATION = "General"


class CertificateStatus(StrEnum):
    """Regulatory certificate (COPC) state of a program."""

    WITH_CERTIFICATE = "With COPC"
    IN_PROGRESS = "In Progress"
    NONE = "No COPC"


class LifecycleStatus(StrEnum):
    """Lifecycle stage of an accreditation milestone."""

    TO_BE_ASSIGNED = "TBA"
    UNDERGOING = "Undergoing"
    COMPLETED = "Completed"
    CURRENT = "Current"


class AlignmentTag(StrEnum):
    """Whether a person's credentials meet the qualification standard."""

    ALIGNED = "Aligned"
    NOT_ALIGNED = "Not Aligned"
    NOT_APPLICABLE = "N/A"


_E = TypeVar("_E", bound=StrEnum)


def _lenient_tag(enum_cls: type[_E], fallback: _E) -> Callable[[Any], _E]:
    """Build a before-validator that maps unknown tag values to a fallback.

    Accepts either the tag value ("With COPC") or the member name
    ("WITH_CERTIFICATE").
    """

    def coerce(value: Any) -> _E:
        if isinstance(value, enum_cls):
            return value
        if isinstance(value, str):
            for member in enum_cls:
                if value in (member.value, member.name):
                    return member
        return fallback

    return coerce


def _coerce_rate(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _coerce_count(value: Any) -> int:
    if isinstance(value, int):
        return int(value)
    # Numeric strings such as "12.0" go through float first
    return int(_coerce_rate(value))


def _coerce_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _coerce_link(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _coerce_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


Count = Annotated[int, BeforeValidator(_coerce_count)]
Rate = Annotated[float, BeforeValidator(_coerce_rate)]
Text = Annotated[str, BeforeValidator(_coerce_text)]
Link = Annotated[str | None, BeforeValidator(_coerce_link)]
Flag = Annotated[bool, BeforeValidator(_coerce_flag)]


class RecordModel(BaseModel):
    """Base for all record value objects: frozen, camelCase aliases, null-tolerant."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# ---------------------------------------------------------------------------
# Record sections
# ---------------------------------------------------------------------------


class RegulatoryCompliance(RecordModel):
    """Regulatory certification state and governance approval reference."""

    certificate_status: Annotated[
        CertificateStatus,
        BeforeValidator(_lenient_tag(CertificateStatus, CertificateStatus.NONE)),
    ] = Field(default=CertificateStatus.NONE, description="Certificate of program compliance state")
    certificate_link: Link = Field(default=None, description="Certificate document reference")
    governance_approval_link: Link = Field(
        default=None,
        description="Governing board approval reference; presence means approval is on file",
    )


class AccreditationMilestone(RecordModel):
    """One entry of a program's accreditation history."""

    level: Text = Field(default="", description="Free-form accreditation rank, e.g. 'Level II Accredited'")
    lifecycle_status: Annotated[
        LifecycleStatus,
        BeforeValidator(_lenient_tag(LifecycleStatus, LifecycleStatus.TO_BE_ASSIGNED)),
    ] = Field(default=LifecycleStatus.TO_BE_ASSIGNED)
    certificate_link: Link = Field(default=None)
    status_validity_date: Text = Field(
        default="",
        description="Free-form validity text, e.g. 'Valid until December 2026'",
    )


class FacultyMember(RecordModel):
    """A dean, associate dean, program chair, or faculty member."""

    name: Text = ""
    alignment: Annotated[
        AlignmentTag,
        BeforeValidator(_lenient_tag(AlignmentTag, AlignmentTag.NOT_APPLICABLE)),
    ] = Field(default=AlignmentTag.NOT_APPLICABLE, description="Qualification alignment tag")
    specialization_id: Text | None = Field(
        default=None,
        description="Assigned specialization track id; unknown ids fall into the General bucket",
    )
    academic_rank: Text | None = None


class FacultyRoster(RecordModel):
    """Program leadership plus the open-ended member list.

    associate_dean is present only when the program has one; its presence is
    what the analyzer counts.
    """

    dean: FacultyMember = Field(default_factory=FacultyMember)
    associate_dean: FacultyMember | None = None
    program_chair: FacultyMember = Field(default_factory=FacultyMember)
    members: tuple[FacultyMember, ...] = ()


class CurriculumState(RecordModel):
    """Curriculum revision and regulator acknowledgement."""

    revision_number: Text = ""
    is_noted_by_regulator: Flag = False
    reference_document_link: Link = None


class GraduationRecord(RecordModel):
    """Number of graduates for one academic year and term."""

    year: Text = ""
    term: Text = ""
    count: Count = 0


class TracerRecord(RecordModel):
    """Graduate tracer study results for one academic year and term."""

    year: Text = ""
    term: Text = ""
    total_graduates: Count = 0
    traced_count: Count = 0
    employment_rate: Rate = 0.0


class LicensureExamRecord(RecordModel):
    """Licensure (board) examination results for one exam period.

    The three *_pass_rate fields are derived. Stored values are never
    trusted; the outcome aggregator recomputes them from the raw counts.
    """

    exam_period: Text = ""
    first_taker_count: Count = 0
    first_taker_passed: Count = 0
    retaker_count: Count = 0
    retaker_passed: Count = 0
    national_pass_rate: Rate = 0.0
    first_taker_pass_rate: Rate = 0.0
    retaker_pass_rate: Rate = 0.0
    overall_pass_rate: Rate = 0.0


class Specialization(RecordModel):
    """A named specialization track offered by a program."""

    id: Text
    name: Text = ""


# ---------------------------------------------------------------------------
# The record
# ---------------------------------------------------------------------------


class ComplianceRecord(RecordModel):
    """One program's compliance snapshot for one academic year."""

    program_id: Text = ""
    academic_year: Text = ""
    regulatory_status: RegulatoryCompliance = Field(default_factory=RegulatoryCompliance)
    accreditation_milestones: tuple[AccreditationMilestone, ...] = ()
    faculty_roster: FacultyRoster = Field(default_factory=FacultyRoster)
    curriculum_state: CurriculumState = Field(default_factory=CurriculumState)
    graduation_records: tuple[GraduationRecord, ...] = ()
    tracer_records: tuple[TracerRecord, ...] = ()
    licensure_exam_records: tuple[LicensureExamRecord, ...] = ()

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "ComplianceRecord":
        """Build a record from a compliance document as the portal stores it.

        The stored layout groups certificate data under "ched", calls the
        licensure history "boardPerformance", tags faculty alignment as
        "isAlignedWithCMO", and keeps the associate dean behind a
        "hasAssociateDean" toggle.

        Args:
            document: Raw compliance document.

        Returns:
            A ComplianceRecord; missing sections take their defaults.
        """
        ched = document.get("ched") or {}
        curriculum = document.get("curriculum") or {}
        faculty = document.get("faculty") or {}

        def person(raw: Any) -> dict[str, Any] | None:
            if not isinstance(raw, dict):
                return None
            return {
                "name": raw.get("name"),
                "alignment": raw.get("isAlignedWithCMO"),
                "specialization_id": raw.get("specializationId"),
                "academic_rank": raw.get("academicRank"),
            }

        roster: dict[str, Any] = {
            "dean": person(faculty.get("dean")),
            "program_chair": person(faculty.get("programChair")),
            "members": [p for p in map(person, faculty.get("members") or []) if p is not None],
        }
        if faculty.get("hasAssociateDean"):
            roster["associate_dean"] = person(faculty.get("associateDean"))

        return cls(
            program_id=document.get("programId"),
            academic_year=document.get("academicYear"),
            regulatory_status={
                "certificate_status": ched.get("copcStatus"),
                "certificate_link": ched.get("copcLink"),
                "governance_approval_link": ched.get("boardApprovalLink"),
            },
            accreditation_milestones=document.get("accreditationRecords") or [],
            faculty_roster=roster,
            curriculum_state={
                "revision_number": curriculum.get("revisionNumber"),
                "is_noted_by_regulator": curriculum.get("isNotedByChed"),
                "reference_document_link": curriculum.get("cmoLink"),
            },
            graduation_records=[
                {"year": g.get("year"), "term": g.get("semester"), "count": g.get("count")}
                for g in document.get("graduationRecords") or []
            ],
            tracer_records=[
                {
                    "year": t.get("year"),
                    "term": t.get("semester"),
                    "total_graduates": t.get("totalGraduates"),
                    "traced_count": t.get("tracedCount"),
                    "employment_rate": t.get("employmentRate"),
                }
                for t in document.get("tracerRecords") or []
            ],
            licensure_exam_records=[
                {
                    "exam_period": b.get("examDate"),
                    "first_taker_count": b.get("firstTakersCount"),
                    "first_taker_passed": b.get("firstTakersPassed"),
                    "retaker_count": b.get("retakersCount"),
                    "retaker_passed": b.get("retakersPassed"),
                    "national_pass_rate": b.get("nationalPassingRate"),
                }
                for b in document.get("boardPerformance") or []
            ],
        )


# ---------------------------------------------------------------------------
# Portfolio inputs
# ---------------------------------------------------------------------------


class AcademicProgram(RecordModel):
    """A program offering registered at a campus."""

    id: Text
    name: Text = ""
    campus_id: Text = ""
    is_new_program: Flag = False


class Campus(RecordModel):
    """A university campus."""

    id: Text
    name: Text = ""


def latest_milestone(record: ComplianceRecord) -> AccreditationMilestone | None:
    """Return the most recent accreditation milestone (last recorded), if any."""
    milestones = record.accreditation_milestones
    return milestones[-1] if milestones else None


def is_accredited_level(level: str | None) -> bool:
    """Return True when level names a real accreditation rank."""
    return bool(level and level.strip()) and level != NON_ACCREDITED_LEVEL
