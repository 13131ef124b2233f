"""Faculty alignment analyzer.

Counts how many people on a program's faculty roster meet the qualification
alignment standard and partitions the member list by specialization track.

Counted people:
- the dean and the program chair, always
- the associate dean, when the roster has one
- every entry of the member list

Members whose specialization assignment is missing or no longer in the
catalog are placed in the General bucket instead of being dropped.
"""

from dataclasses import dataclass
from typing import Any

from program_compliance_engine.maturity.arithmetic import whole_percentage
from program_compliance_engine.maturity.records import (
    GENERAL_SPECIALIZATION,
    AlignmentTag,
    FacultyMember,
    FacultyRoster,
    Specialization,
)

# Coverage labels for a specialization bucket
COVERAGE_COVERED = "covered"
COVERAGE_GAP = "gap"


@dataclass(frozen=True)
class FacultyAlignment:
    """Alignment statistics and specialization partition for one roster.

    Attributes:
        total_faculty_count: Number of counted people.
        aligned_faculty_count: Counted people tagged Aligned.
        alignment_rate: aligned / total in [0, 1]; 0 when nobody is counted.
        specialization_members: Bucket id -> members assigned to it, in
            catalog order followed by the General bucket.
        specialization_coverage: Bucket id -> "covered" if the bucket has at
            least one aligned member, otherwise "gap".
    """

    total_faculty_count: int
    aligned_faculty_count: int
    alignment_rate: float
    specialization_members: dict[str, tuple[FacultyMember, ...]]
    specialization_coverage: dict[str, str]

    @property
    def unaligned_faculty_count(self) -> int:
        return self.total_faculty_count - self.aligned_faculty_count

    @property
    def alignment_percentage(self) -> int:
        """Alignment rate as a whole-number percentage."""
        return whole_percentage(self.aligned_faculty_count, self.total_faculty_count)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_faculty_count": self.total_faculty_count,
            "aligned_faculty_count": self.aligned_faculty_count,
            "unaligned_faculty_count": self.unaligned_faculty_count,
            "alignment_rate": self.alignment_rate,
            "alignment_percentage": self.alignment_percentage,
            "specialization_members": {
                bucket: [member.model_dump(mode="json") for member in members]
                for bucket, members in self.specialization_members.items()
            },
            "specialization_coverage": dict(self.specialization_coverage),
        }


def counted_faculty(roster: FacultyRoster) -> list[FacultyMember]:
    """Return everyone on the roster who counts toward alignment, in roster order."""
    people = [roster.dean]
    if roster.associate_dean is not None:
        people.append(roster.associate_dean)
    people.append(roster.program_chair)
    people.extend(roster.members)
    return people


def partition_by_specialization(
    members: tuple[FacultyMember, ...] | list[FacultyMember],
    specialization_catalog: list[Specialization] | tuple[Specialization, ...],
) -> dict[str, tuple[FacultyMember, ...]]:
    """Group members by specialization id.

    Every catalog entry gets a bucket, even an empty one, so a track with no
    faculty still shows up as a coverage gap. The General bucket is always
    last.

    Args:
        members: Faculty member list.
        specialization_catalog: Specialization tracks offered by the program.

    Returns:
        Ordered mapping of bucket id to the members in it.
    """
    buckets: dict[str, list[FacultyMember]] = {
        spec.id: [] for spec in specialization_catalog if spec.id != GENERAL_SPECIALIZATION
    }
    buckets[GENERAL_SPECIALIZATION] = []

    for member in members:
        assignment = member.specialization_id
        if assignment in buckets:
            buckets[assignment].append(member)
        else:
            buckets[GENERAL_SPECIALIZATION].append(member)

    return {bucket: tuple(assigned) for bucket, assigned in buckets.items()}


def specialization_coverage(
    partition: dict[str, tuple[FacultyMember, ...]],
) -> dict[str, str]:
    """Label each bucket covered when it holds at least one aligned member."""
    return {
        bucket: (
            COVERAGE_COVERED
            if any(m.alignment is AlignmentTag.ALIGNED for m in members)
            else COVERAGE_GAP
        )
        for bucket, members in partition.items()
    }


def analyze_faculty_alignment(
    roster: FacultyRoster,
    specialization_catalog: list[Specialization] | tuple[Specialization, ...] = (),
) -> FacultyAlignment:
    """Compute alignment statistics and specialization coverage for a roster.

    Args:
        roster: The program's faculty roster.
        specialization_catalog: Specialization tracks offered by the program.

    Returns:
        FacultyAlignment for the roster.
    """
    people = counted_faculty(roster)
    total = len(people)
    aligned = sum(1 for person in people if person.alignment is AlignmentTag.ALIGNED)
    rate = aligned / total if total > 0 else 0.0

    partition = partition_by_specialization(roster.members, specialization_catalog)

    return FacultyAlignment(
        total_faculty_count=total,
        aligned_faculty_count=aligned,
        alignment_rate=rate,
        specialization_members=partition,
        specialization_coverage=specialization_coverage(partition),
    )
