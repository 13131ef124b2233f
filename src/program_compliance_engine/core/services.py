"""Service layer for the program compliance engine.

MaturityService binds the pure maturity functions to the service settings
(pillar weight, roadmap reference year) and converts results into API
response schemas. Routes stay thin and delegate here.
"""

from datetime import date

from program_compliance_engine.api.schemas import (
    GapRuleResponse,
    MaturityAnalyticsResponse,
    PortfolioSummaryResponse,
    RuleCatalogResponse,
)
from program_compliance_engine.maturity.composer import compose_maturity
from program_compliance_engine.maturity.gaps import GAP_RULES
from program_compliance_engine.maturity.pillars import PILLARS
from program_compliance_engine.maturity.portfolio import summarize_portfolio
from program_compliance_engine.maturity.records import (
    AcademicProgram,
    Campus,
    ComplianceRecord,
    Specialization,
)
from program_compliance_engine.observability import get_logger
from program_compliance_engine.settings import Settings

logger = get_logger(__name__)


class MaturityService:
    """Scores compliance records and summarizes program portfolios.

    Args:
        settings: Service settings supplying the pillar weight and the
            roadmap reference year.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize MaturityService.

        Args:
            settings: Service settings.
        """
        self._settings = settings

    def analyze_record(
        self,
        record: ComplianceRecord,
        specialization_catalog: list[Specialization],
    ) -> MaturityAnalyticsResponse:
        """Compute maturity analytics for one compliance record.

        Args:
            record: Fully assembled compliance record.
            specialization_catalog: Specialization tracks offered by the program.

        Returns:
            The analytics as a response schema.
        """
        analytics = compose_maturity(
            record,
            specialization_catalog,
            pillar_weight=self._settings.pillar_weight,
        )
        logger.info(
            "Compliance record analyzed",
            program_id=analytics.program_id,
            academic_year=analytics.academic_year,
            overall_score=analytics.overall_score,
            gap_categories=[gap.category for gap in analytics.gaps],
        )
        return MaturityAnalyticsResponse.model_validate(analytics.to_dict())

    def summarize_portfolio(
        self,
        programs: list[AcademicProgram],
        records: list[ComplianceRecord],
        campuses: list[Campus],
        reference_year: int | None = None,
    ) -> PortfolioSummaryResponse:
        """Aggregate compliance standing across program offerings.

        The reference year resolves from the argument, then the configured
        roadmap_reference_year, then today's calendar year.

        Args:
            programs: Program offerings.
            records: Compliance records for the same academic year.
            campuses: Campuses the programs belong to.
            reference_year: Optional explicit reference year.

        Returns:
            The portfolio summary as a response schema.
        """
        year = reference_year or self._settings.roadmap_reference_year or date.today().year
        summary = summarize_portfolio(programs, records, campuses, reference_year=year)
        logger.info(
            "Program portfolio summarized",
            total_programs=summary.total_programs,
            monitored_count=summary.monitored_count,
            reference_year=year,
            missing_document_programs=len(summary.missing_documents),
        )
        return PortfolioSummaryResponse.model_validate(summary.to_dict())

    def describe_rules(self) -> RuleCatalogResponse:
        """Return the pillar configuration and gap rule catalog."""
        weight = self._settings.pillar_weight
        return RuleCatalogResponse(
            pillars=list(PILLARS),
            pillar_weight=weight,
            maximum_score=weight * len(PILLARS),
            gap_rules=[
                GapRuleResponse(
                    rule_id=rule.rule_id,
                    category=rule.category,
                    message_template=rule.message_template,
                )
                for rule in GAP_RULES
            ],
        )
