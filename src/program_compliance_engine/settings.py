"""Service settings for the program compliance engine.

Settings use the PROGRAM_COMPLIANCE_ prefix and cover:
- Logging output
- Maturity scoring weights
- Accreditation roadmap reference year
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the program compliance engine.

    Environment variable prefix: PROGRAM_COMPLIANCE_
    """

    service_name: str = "program-compliance-engine"
    version: str = "0.1.0"

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured log output.",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines instead of human-readable console output.",
    )

    # -------------------------------------------------------------------------
    # Maturity scoring
    # -------------------------------------------------------------------------

    pillar_weight: float = Field(
        default=20.0,
        gt=0,
        description="Maximum score of each of the five compliance pillars. "
        "The overall maturity index ranges from 0 to five times this value.",
    )

    # -------------------------------------------------------------------------
    # Portfolio summary
    # -------------------------------------------------------------------------

    roadmap_reference_year: int | None = Field(
        default=None,
        description="Year against which accreditation validity dates are judged "
        "overdue or upcoming. Leave unset to use the current calendar year.",
    )

    model_config = SettingsConfigDict(env_prefix="PROGRAM_COMPLIANCE_")
