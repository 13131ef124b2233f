"""Tests for API endpoints (router layer).

Exercises the FastAPI routes end to end against the real MaturityService,
with settings injected through dependency overrides.

Tests verify:
- camelCase request bodies and lenient record coercion
- HTTP status codes
- Response schema shapes
- Settings flowing through to the scoring weights
"""

from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from program_compliance_engine.api.router import get_settings, router
from program_compliance_engine.main import create_app
from program_compliance_engine.settings import Settings


def make_record_body(**overrides: Any) -> dict[str, Any]:
    """Create a compliant compliance record request body in wire (camelCase) form."""
    body: dict[str, Any] = {
        "programId": "bsit-main",
        "academicYear": "2024-2025",
        "regulatoryStatus": {
            "certificateStatus": "With COPC",
            "governanceApprovalLink": "https://drive.example.edu/bor-resolution.pdf",
        },
        "accreditationMilestones": [
            {
                "level": "Level II Accredited",
                "lifecycleStatus": "Current",
                "statusValidityDate": "Valid until December 2026",
            }
        ],
        "facultyRoster": {
            "dean": {"name": "Dr. Dean", "alignment": "Aligned"},
            "programChair": {"name": "Dr. Chair", "alignment": "Aligned"},
            "members": [{"name": "Prof. Cruz", "alignment": "Aligned"}],
        },
        "curriculumState": {
            "isNotedByRegulator": True,
            "referenceDocumentLink": "https://drive.example.edu/cmo-25.pdf",
        },
        "graduationRecords": [{"year": "2024", "term": "1st Semester", "count": 42}],
    }
    body.update(overrides)
    return body


@pytest.fixture()
def settings() -> Settings:
    """Return settings pinned for deterministic roadmap output."""
    return Settings(roadmap_reference_year=2025)


@pytest.fixture()
def test_app(settings: Settings) -> FastAPI:
    """Create a FastAPI test app with the settings dependency overridden.

    Args:
        settings: The settings fixture.

    Returns:
        FastAPI app with the maturity router mounted.
    """
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    app.dependency_overrides[get_settings] = lambda: settings
    return app


class TestAnalyticsEndpoint:
    """Tests for POST /maturity/analytics."""

    @pytest.mark.asyncio()
    async def test_compliant_record_scores_100(self, test_app: FastAPI) -> None:
        """A fully compliant record returns 200 with a perfect score and no gaps."""
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.post(
                "/api/v1/maturity/analytics",
                json={"record": make_record_body()},
            )

        assert response.status_code == 200
        body = response.json()
        assert body["program_id"] == "bsit-main"
        assert body["overall_score"] == 100
        assert body["gaps"] == []
        assert list(body["pillar_scores"]) == [
            "regulatory",
            "accreditation",
            "faculty",
            "curriculum",
            "outcomes",
        ]
        assert body["outcomes"]["trend"][0]["period"] == "1st Semester 2024"

    @pytest.mark.asyncio()
    async def test_empty_record_reports_every_gap(self, test_app: FastAPI) -> None:
        """An empty record is accepted and scores 0 with all six gap categories."""
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.post("/api/v1/maturity/analytics", json={"record": {}})

        assert response.status_code == 200
        body = response.json()
        assert body["overall_score"] == 0
        assert [gap["category"] for gap in body["gaps"]] == [
            "Institutional",
            "Governance",
            "Accreditation",
            "Faculty",
            "Curriculum",
            "Outcomes",
        ]

    @pytest.mark.asyncio()
    async def test_malformed_values_degrade_instead_of_failing(self, test_app: FastAPI) -> None:
        """Unknown tags and non-numeric counts fall back to defaults."""
        record = make_record_body(
            regulatoryStatus={"certificateStatus": "Pending?", "governanceApprovalLink": ""},
            licensureExamRecords=[{"firstTakerCount": "n/a", "firstTakerPassed": None}],
        )
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.post("/api/v1/maturity/analytics", json={"record": record})

        assert response.status_code == 200
        body = response.json()
        assert body["pillar_scores"]["regulatory"] == 0.0
        assert [gap["category"] for gap in body["gaps"]] == ["Institutional", "Governance"]
        assert body["outcomes"]["latest_licensure"]["overall_pass_rate"] == 0.0

    @pytest.mark.asyncio()
    async def test_out_of_range_numbers_degrade_to_zero(self, test_app: FastAPI) -> None:
        """A JSON number that overflows to infinity is read as zero, not a 500."""
        content = (
            '{"record": {"graduationRecords": [{"year": "2024", "term": "1st Semester", "count": 1e400}],'
            ' "tracerRecords": [{"year": "2024", "term": "1st Semester", "employmentRate": "nan"}]}}'
        )
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.post(
                "/api/v1/maturity/analytics",
                content=content,
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 200
        outcomes = response.json()["outcomes"]
        assert outcomes["total_graduates"] == 0
        assert outcomes["trend"][0]["employment_rate"] == 0.0

    @pytest.mark.asyncio()
    async def test_specialization_catalog_drives_coverage(self, test_app: FastAPI) -> None:
        """Catalog entries appear in the coverage map with General last."""
        record = make_record_body()
        record["facultyRoster"]["members"] = [
            {"name": "Prof. DS", "alignment": "Aligned", "specializationId": "spec-ds"},
        ]
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.post(
                "/api/v1/maturity/analytics",
                json={
                    "record": record,
                    "specializationCatalog": [
                        {"id": "spec-ds", "name": "Data Science"},
                        {"id": "spec-nt", "name": "Network Technology"},
                    ],
                },
            )

        assert response.status_code == 200
        coverage = response.json()["specialization_coverage"]
        assert list(coverage) == ["spec-ds", "spec-nt", "General"]
        assert coverage == {"spec-ds": "covered", "spec-nt": "gap", "General": "gap"}

    @pytest.mark.asyncio()
    async def test_missing_record_returns_422(self, test_app: FastAPI) -> None:
        """POST without a record field fails request validation."""
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.post("/api/v1/maturity/analytics", json={})

        assert response.status_code == 422

    @pytest.mark.asyncio()
    async def test_pillar_weight_setting_scales_scores(self) -> None:
        """A configured pillar weight changes the maximum per pillar."""
        app = FastAPI()
        app.include_router(router, prefix="/api/v1")
        app.dependency_overrides[get_settings] = lambda: Settings(pillar_weight=10.0)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post(
                "/api/v1/maturity/analytics",
                json={"record": make_record_body()},
            )

        assert response.status_code == 200
        assert response.json()["overall_score"] == 50


class TestPortfolioEndpoint:
    """Tests for POST /maturity/portfolio."""

    @pytest.mark.asyncio()
    async def test_portfolio_summary(self, test_app: FastAPI) -> None:
        """Programs, records, and campuses produce the dashboard aggregates."""
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.post(
                "/api/v1/maturity/portfolio",
                json={
                    "programs": [
                        {"id": "bsit-main", "name": "BS Information Technology", "campusId": "main"},
                        {"id": "bsds-main", "name": "BS Data Science", "campusId": "main", "isNewProgram": True},
                    ],
                    "records": [make_record_body()],
                    "campuses": [{"id": "main", "name": "Main Campus"}],
                },
            )

        assert response.status_code == 200
        body = response.json()
        assert body["total_programs"] == 2
        assert body["monitored_count"] == 1
        assert body["certificate_percentage"] == 50
        assert body["accredited_program_count"] == 1
        assert body["campus_performance"][0]["offering_count"] == 2
        assert body["missing_documents"] == [
            {
                "program_id": "bsds-main",
                "program_name": "BS Data Science",
                "campus_name": "Main Campus",
                "items": ["Full Compliance Record"],
            }
        ]
        assert [entry["status"] for entry in body["roadmap"]] == ["Scheduled"]

    @pytest.mark.asyncio()
    async def test_reference_year_in_body_overrides_settings(self, test_app: FastAPI) -> None:
        """An explicit referenceYear takes precedence over the configured year."""
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.post(
                "/api/v1/maturity/portfolio",
                json={
                    "programs": [{"id": "bsit-main", "name": "BSIT", "campusId": "main"}],
                    "records": [make_record_body()],
                    "campuses": [{"id": "main", "name": "Main Campus"}],
                    "referenceYear": 2027,
                },
            )

        assert response.status_code == 200
        assert response.json()["roadmap"][0]["status"] == "Overdue"

    @pytest.mark.asyncio()
    async def test_empty_portfolio(self, test_app: FastAPI) -> None:
        """An empty body is a valid, empty portfolio."""
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.post("/api/v1/maturity/portfolio", json={})

        assert response.status_code == 200
        assert response.json()["total_programs"] == 0


class TestRuleCatalogEndpoint:
    """Tests for GET /maturity/rules."""

    @pytest.mark.asyncio()
    async def test_rule_catalog(self, test_app: FastAPI) -> None:
        """The catalog lists pillars, weights, and the six gap rules in order."""
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.get("/api/v1/maturity/rules")

        assert response.status_code == 200
        body = response.json()
        assert body["pillar_weight"] == 20.0
        assert body["maximum_score"] == 100.0
        assert len(body["pillars"]) == 5
        assert [rule["category"] for rule in body["gap_rules"]] == [
            "Institutional",
            "Governance",
            "Accreditation",
            "Faculty",
            "Curriculum",
            "Outcomes",
        ]


class TestApplication:
    """Tests for the application factory."""

    @pytest.mark.asyncio()
    async def test_health(self) -> None:
        """GET /health reports the configured service name."""
        app = create_app(Settings(service_name="compliance-test"))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "compliance-test"}

    @pytest.mark.asyncio()
    async def test_router_mounted_under_api_v1(self) -> None:
        """create_app mounts the maturity routes with its own settings."""
        app = create_app(Settings(pillar_weight=5.0))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/v1/maturity/rules")

        assert response.status_code == 200
        assert response.json()["maximum_score"] == 25.0
