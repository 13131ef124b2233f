"""API router for the program compliance engine.

All endpoints are registered here and included in main.py under the /api/v1
prefix. Routes are thin; all business logic lives in the maturity package
behind MaturityService.

Endpoints:
- POST /maturity/analytics: score one compliance record
- POST /maturity/portfolio: institution-wide portfolio summary
- GET /maturity/rules: pillar weights and gap rule catalog
"""

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends

from program_compliance_engine.api.schemas import (
    MaturityAnalyticsRequest,
    MaturityAnalyticsResponse,
    PortfolioSummaryRequest,
    PortfolioSummaryResponse,
    RuleCatalogResponse,
)
from program_compliance_engine.core.services import MaturityService
from program_compliance_engine.observability import get_logger
from program_compliance_engine.settings import Settings

logger = get_logger(__name__)

router = APIRouter(prefix="/maturity", tags=["maturity"])


# ---------------------------------------------------------------------------
# Dependency factories
# ---------------------------------------------------------------------------


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once from the environment."""
    return Settings()


def get_maturity_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> MaturityService:
    """Construct MaturityService with the injected settings.

    Args:
        settings: Service settings.

    Returns:
        MaturityService instance.
    """
    return MaturityService(settings)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/analytics", response_model=MaturityAnalyticsResponse)
async def analyze_compliance_record(
    request: MaturityAnalyticsRequest,
    service: Annotated[MaturityService, Depends(get_maturity_service)],
) -> MaturityAnalyticsResponse:
    """Score a program compliance record.

    Args:
        request: The compliance record and its specialization catalog.
        service: Injected MaturityService.

    Returns:
        Pillar scores, maturity index, faculty alignment, outcomes, and gaps.
    """
    logger.info("POST /maturity/analytics", program_id=request.record.program_id)
    return service.analyze_record(request.record, request.specialization_catalog)


@router.post("/portfolio", response_model=PortfolioSummaryResponse)
async def summarize_program_portfolio(
    request: PortfolioSummaryRequest,
    service: Annotated[MaturityService, Depends(get_maturity_service)],
) -> PortfolioSummaryResponse:
    """Summarize compliance standing across program offerings.

    Args:
        request: Programs, their compliance records, and campuses.
        service: Injected MaturityService.

    Returns:
        Institution-wide accreditation, certificate, campus, and roadmap aggregates.
    """
    logger.info(
        "POST /maturity/portfolio",
        program_count=len(request.programs),
        record_count=len(request.records),
    )
    return service.summarize_portfolio(
        programs=request.programs,
        records=request.records,
        campuses=request.campuses,
        reference_year=request.reference_year,
    )


@router.get("/rules", response_model=RuleCatalogResponse)
async def get_rule_catalog(
    service: Annotated[MaturityService, Depends(get_maturity_service)],
) -> RuleCatalogResponse:
    """Return the pillar weights and the gap rule catalog."""
    return service.describe_rules()
