"""Test fixtures for the program compliance engine.

Provides:
- make_member / make_record: builders for compliance record value objects
- specialization_catalog: a two-track specialization catalog
- complete_record: a record satisfying every compliance rule
- empty_record: a record with nothing but an unaligned dean
"""

from typing import Any

import pytest

from program_compliance_engine.maturity.records import (
    AlignmentTag,
    ComplianceRecord,
    FacultyMember,
    Specialization,
)


def make_member(
    name: str = "Dr. Jane Doe",
    alignment: AlignmentTag = AlignmentTag.ALIGNED,
    specialization_id: str | None = None,
    academic_rank: str | None = None,
) -> FacultyMember:
    """Create a FacultyMember for tests."""
    return FacultyMember(
        name=name,
        alignment=alignment,
        specialization_id=specialization_id,
        academic_rank=academic_rank,
    )


def make_record(**overrides: Any) -> ComplianceRecord:
    """Create a fully compliant ComplianceRecord, with section overrides.

    Args:
        **overrides: Field values replacing the compliant defaults. Values
            may be model instances or plain dicts.

    Returns:
        A ComplianceRecord.
    """
    fields: dict[str, Any] = {
        "program_id": "bsit-main",
        "academic_year": "2024-2025",
        "regulatory_status": {
            "certificate_status": "With COPC",
            "certificate_link": "https://drive.example.edu/copc.pdf",
            "governance_approval_link": "https://drive.example.edu/bor-resolution.pdf",
        },
        "accreditation_milestones": [
            {
                "level": "Level II Accredited",
                "lifecycle_status": "Current",
                "status_validity_date": "Valid until December 2026",
            }
        ],
        "faculty_roster": {
            "dean": make_member("Dr. Dean"),
            "program_chair": make_member("Dr. Chair"),
        },
        "curriculum_state": {
            "revision_number": "3",
            "is_noted_by_regulator": True,
            "reference_document_link": "https://drive.example.edu/cmo-25.pdf",
        },
        "graduation_records": [{"year": "2024", "term": "1st Semester", "count": 42}],
    }
    fields.update(overrides)
    return ComplianceRecord(**fields)


@pytest.fixture()
def specialization_catalog() -> list[Specialization]:
    """Return a catalog with two specialization tracks.

    Returns:
        Data Science and Network Technology specializations.
    """
    return [
        Specialization(id="spec-ds", name="Data Science"),
        Specialization(id="spec-nt", name="Network Technology"),
    ]


@pytest.fixture()
def complete_record() -> ComplianceRecord:
    """Return a record that satisfies every compliance rule.

    Returns:
        A ComplianceRecord scoring 100 with no gaps.
    """
    return make_record()


@pytest.fixture()
def empty_record() -> ComplianceRecord:
    """Return a record with nothing but an unaligned dean.

    Returns:
        A ComplianceRecord scoring 0 with every gap present.
    """
    return ComplianceRecord(
        faculty_roster={"dean": make_member("Dr. Dean", AlignmentTag.NOT_ALIGNED)},
    )
