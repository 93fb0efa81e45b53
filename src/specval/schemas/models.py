# src/specval/schemas/models.py
"""
@brief
Pydantic configuration models for the specval validation engine.

@details
Defines the runtime configuration consumed by ValidationEngine and the
report writer:
    - EngineConfig: report rendering and logging settings
    - ReportingConfig: nested block controlling JSON issue reports on disk

Models are loaded from YAML by specval.config.loader.ConfigLoader.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class _StrictBaseModel(BaseModel):
    """
    @brief
    Base model enforcing strict defaults for configuration and data contracts.

    @details
    Forbids unknown fields and preserves exact naming rules.
    Designed as a foundation for all other specval models.
    """

    model_config = {
        "extra": "forbid",  # Reject unknown fields
        "populate_by_name": True,  # Allow population by field name
        "use_enum_values": True,  # Export raw enum values if enums appear later
    }


class ReportingConfig(_StrictBaseModel):
    """
    @brief
    Controls persistence of validation issue reports.

    @details
    Used by ResultHandler to decide whether a failed validation result
    is written to disk as a JSON report, and where.
    """

    write_reports: bool = Field(
        False, description="If True, failed results are written as JSON reports."
    )
    output_dir: str = Field("data/reports", description="Directory for JSON reports")
    filename: str = Field("validation_report.json", description="Report file name")


class EngineConfig(_StrictBaseModel):
    """
    @brief
    Runtime configuration of the validation engine.

    @details
    Controls how failure reports are rendered and merged across nesting
    levels, how raw values are previewed in serialized reports, and the
    default logging level applied by configure_from_file().
    """

    report_separator: str = Field(
        "———",
        min_length=1,
        description="Visible delimiter placed between parent and nested report messages",
    )
    default_report_title: str = Field(
        "Validation failed", min_length=1, description="Title of default reports"
    )
    value_preview_length: int = Field(
        80, ge=8, description="Maximum length of raw value previews in reports"
    )
    log_level: str = Field("WARNING", description="Logging level name, e.g. 'DEBUG'")
    reporting: ReportingConfig = Field(default_factory=ReportingConfig.model_construct)


__all__ = ["EngineConfig", "ReportingConfig"]
