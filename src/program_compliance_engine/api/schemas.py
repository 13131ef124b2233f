"""Pydantic request and response schemas for the compliance engine API.

Request bodies reuse the record value objects (camelCase on the wire).
Responses are snake_case and mirror the engine's result objects.

Resources:
- Maturity analytics: one program's scored compliance record
- Portfolio summary: institution-wide aggregates
- Rule catalog: gap rules and pillar weight
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from program_compliance_engine.maturity.records import (
    AcademicProgram,
    Campus,
    ComplianceRecord,
    Specialization,
)


class _CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Maturity analytics schemas
# ---------------------------------------------------------------------------


class MaturityAnalyticsRequest(_CamelRequest):
    """Request body for scoring one compliance record."""

    record: ComplianceRecord = Field(description="Fully assembled compliance record")
    specialization_catalog: list[Specialization] = Field(
        default_factory=list,
        description="Specialization tracks offered by the program (may be empty)",
    )


class FacultyMemberResponse(BaseModel):
    """A faculty member as reported in a specialization bucket."""

    name: str
    alignment: str = Field(description="Aligned | Not Aligned | N/A")
    specialization_id: str | None
    academic_rank: str | None


class FacultyAlignmentResponse(BaseModel):
    """Faculty alignment statistics."""

    total_faculty_count: int
    aligned_faculty_count: int
    unaligned_faculty_count: int
    alignment_rate: float = Field(description="Aligned share of counted faculty, 0.0-1.0")
    alignment_percentage: int = Field(description="Alignment rate as a whole percentage")
    specialization_members: dict[str, list[FacultyMemberResponse]] = Field(
        description="Specialization id -> assigned members; unassigned members are under 'General'",
    )
    specialization_coverage: dict[str, str] = Field(
        description="Specialization id -> covered | gap",
    )


class TrendPointResponse(BaseModel):
    """Graduates and employment rate for one period."""

    period: str
    year: str
    term: str
    graduates: int
    employment_rate: float


class LicensureExamResponse(BaseModel):
    """A licensure exam entry with recomputed pass rates (percentages)."""

    exam_period: str
    first_taker_count: int
    first_taker_passed: int
    retaker_count: int
    retaker_passed: int
    national_pass_rate: float
    first_taker_pass_rate: float
    retaker_pass_rate: float
    overall_pass_rate: float


class OutcomeSummaryResponse(BaseModel):
    """Graduation trend and licensure snapshot."""

    trend: list[TrendPointResponse]
    licensure_records: list[LicensureExamResponse]
    latest_licensure: LicensureExamResponse | None
    total_graduates: int
    average_overall_pass_rate: float


class GapFindingResponse(BaseModel):
    """One unmet compliance condition."""

    category: str = Field(
        description="Institutional | Governance | Accreditation | Faculty | Curriculum | Outcomes",
    )
    message: str


class MaturityAnalyticsResponse(BaseModel):
    """Complete maturity analytics for one program compliance record."""

    program_id: str
    academic_year: str
    overall_score: int = Field(description="Maturity index, 0-100 with the reference weights")
    pillar_scores: dict[str, float] = Field(description="Pillar name -> score")
    faculty_alignment: FacultyAlignmentResponse
    specialization_coverage: dict[str, str]
    outcomes: OutcomeSummaryResponse
    gaps: list[GapFindingResponse] = Field(description="Gap findings in fixed rule order")


# ---------------------------------------------------------------------------
# Portfolio summary schemas
# ---------------------------------------------------------------------------


class PortfolioSummaryRequest(_CamelRequest):
    """Request body for the institution-wide portfolio summary."""

    programs: list[AcademicProgram] = Field(default_factory=list)
    records: list[ComplianceRecord] = Field(default_factory=list)
    campuses: list[Campus] = Field(default_factory=list)
    reference_year: int | None = Field(
        default=None,
        description="Year for judging accreditation deadlines; defaults to the configured "
        "or current calendar year",
    )


class AccreditationLevelCountResponse(BaseModel):
    level: str
    count: int
    percentage: int


class CampusPerformanceResponse(BaseModel):
    campus_id: str
    campus_name: str
    offering_count: int
    accredited_count: int
    accredited_percentage: int
    certificate_count: int
    certificate_percentage: int


class MissingDocumentsResponse(BaseModel):
    program_id: str
    program_name: str
    campus_name: str
    items: list[str]


class RoadmapEntryResponse(BaseModel):
    program_id: str
    program_name: str
    campus_name: str
    level: str
    validity_text: str
    status: str = Field(description="Overdue | Upcoming | Scheduled | Unscheduled")


class RankCountResponse(BaseModel):
    rank: str
    count: int


class PortfolioSummaryResponse(BaseModel):
    """Institution-wide compliance aggregates."""

    total_programs: int
    monitored_count: int
    certificate_percentage: int
    accredited_program_count: int
    accreditation_summary: list[AccreditationLevelCountResponse]
    campus_performance: list[CampusPerformanceResponse]
    missing_documents: list[MissingDocumentsResponse]
    roadmap: list[RoadmapEntryResponse]
    faculty_rank_summary: list[RankCountResponse]


# ---------------------------------------------------------------------------
# Rule catalog schemas
# ---------------------------------------------------------------------------


class GapRuleResponse(BaseModel):
    rule_id: str
    category: str
    message_template: str


class RuleCatalogResponse(BaseModel):
    """Scoring configuration and gap rule catalog."""

    pillars: list[str] = Field(description="Pillar names in reporting order")
    pillar_weight: float = Field(description="Maximum score of each pillar")
    maximum_score: float = Field(description="Maximum overall maturity index")
    gap_rules: list[GapRuleResponse]
