"""Compliance maturity scoring and gap-analysis engine.

Modules:
- records: compliance record value objects, tags, and sentinels
- pillars: per-pillar score calculators
- faculty: faculty alignment analyzer and specialization partition
- outcomes: graduation trend and licensure pass-rate aggregator
- gaps: gap rule catalog and detector
- composer: assembles the full analytics result for one record
- portfolio: institution-wide summary across many programs
"""

from __future__ import annotations

from program_compliance_engine.maturity.composer import MaturityAnalytics, compose_maturity
from program_compliance_engine.maturity.faculty import FacultyAlignment, analyze_faculty_alignment
from program_compliance_engine.maturity.gaps import GAP_RULES, GapFinding, GapRule, detect_gaps
from program_compliance_engine.maturity.outcomes import (
    OutcomeSummary,
    aggregate_outcomes,
    recompute_licensure_rates,
)
from program_compliance_engine.maturity.pillars import PILLARS, compute_pillar_scores
from program_compliance_engine.maturity.portfolio import PortfolioSummary, summarize_portfolio
from program_compliance_engine.maturity.records import (
    GENERAL_SPECIALIZATION,
    NON_ACCREDITED_LEVEL,
    ComplianceRecord,
    Specialization,
)

__all__ = [
    "GAP_RULES",
    "GENERAL_SPECIALIZATION",
    "NON_ACCREDITED_LEVEL",
    "PILLARS",
    "ComplianceRecord",
    "FacultyAlignment",
    "GapFinding",
    "GapRule",
    "MaturityAnalytics",
    "OutcomeSummary",
    "PortfolioSummary",
    "Specialization",
    "aggregate_outcomes",
    "analyze_faculty_alignment",
    "compose_maturity",
    "compute_pillar_scores",
    "detect_gaps",
    "recompute_licensure_rates",
    "summarize_portfolio",
]
