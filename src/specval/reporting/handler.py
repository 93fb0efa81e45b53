# src/specval/reporting/handler.py
from __future__ import annotations

import logging
from pathlib import Path

from specval.engine.engine import ValidationResult
from specval.errors import ReportError, ValidationIssue
from specval.reporting.writer import write_issue_report
from specval.schemas.models import EngineConfig

logger = logging.getLogger(__name__)


class ResultHandler:
    """
    @brief
    Handles a validation result and writes a diagnostic report if needed.

    @details
    Success passes through silently. A failure is logged and, when
    `reporting.write_reports` is enabled, written as a JSON report so the
    caller can stop gracefully while keeping the full failure tree.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def handle(self, result: ValidationResult) -> bool:
        """
        @returns
            True for success, False for any ValidationIssue.
        """
        if not isinstance(result, ValidationIssue):
            return True

        logger.warning(
            "Validation failed for %s: %d nested issue(s)",
            result.origin,
            len(result.nested),
        )

        reporting = self.config.reporting
        if reporting.write_reports:
            try:
                path = write_issue_report(
                    result,
                    out_dir=Path(reporting.output_dir),
                    filename=reporting.filename,
                    preview_length=self.config.value_preview_length,
                )
                logger.warning("See %s", path)
            except ReportError as e:
                logger.error("Failed to write validation report: %s", e)

        return False


__all__ = ["ResultHandler"]
