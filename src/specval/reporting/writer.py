# src/specval/reporting/writer.py
from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from specval.engine.engine import ValidationResult
from specval.errors import ReportError, ValidationIssue

logger = logging.getLogger(__name__)


def build_report(result: ValidationResult, preview_length: int = 80) -> dict[str, Any]:
    """
    @brief
    Serializable summary of one validation result.

    @returns
        {"timestamp", "valid", "issue"} where "issue" is the full failure
        tree, or None on success.
    """
    issue = result.to_dict(preview_length) if isinstance(result, ValidationIssue) else None
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "valid": issue is None,
        "issue": issue,
    }


def write_issue_report(
    result: ValidationResult,
    out_dir: Path | None = None,
    filename: str = "validation_report.json",
    preview_length: int = 80,
) -> Path:
    """
    @brief
    Writes the report of a validation result atomically to disk.

    @params
        result : ValidationResult
            SUCCESS or a ValidationIssue.
        out_dir : Path | None
            Target directory (defaults to 'data/reports').
        filename : str
            Target filename.

    @returns
        Path to the written JSON file.

    @raises
        ReportError
            If the report cannot be serialized or written.
    """
    report = build_report(result, preview_length)

    # (1) Serialize before touching the filesystem
    try:
        payload = json.dumps(report, ensure_ascii=False, indent=2)
    except (TypeError, ValueError) as e:
        raise ReportError(
            f"Validation report is not JSON-serializable: {e}",
            source="writer.write_issue_report",
        ) from e

    # (2) Write through a temporary file in the same directory
    target_dir = Path(out_dir) if out_dir is not None else Path("data/reports")
    final_path = target_dir / filename
    _atomic_write_text(final_path, payload)

    logger.info("Validation report saved: %s", final_path)
    return final_path


def render_tree(issue: ValidationIssue, indent: str = "  ") -> str:
    """
    @brief
    Indented text rendering of a failure tree.

    @details
    One line per node: variant, origin and failed conditions when present.
    Entity children are prefixed with their field name when known.
    """
    lines: list[str] = []
    _render_node(issue, 0, indent, lines, label=None)
    return "\n".join(lines)


def _render_node(
    issue: ValidationIssue, depth: int, indent: str, lines: list[str], label: str | None
) -> None:
    head = f"{indent * depth}{label + ': ' if label else ''}{issue.error_type} {issue.origin}"
    failed = getattr(issue, "failed_conditions", ())
    if failed:
        head += " [" + ", ".join(failed) + "]"
    lines.append(head)

    names = getattr(issue, "field_names", ())
    for i, child in enumerate(issue.nested):
        child_label = names[i] if i < len(names) else None
        _render_node(child, depth + 1, indent, lines, label=child_label)


def _atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """
    @brief
    Performs atomic text file writing using a temporary file swap.

    @raises
        ReportError
            On write or rename failure.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ReportError(
            f"cannot create report directory {path.parent}: {e}",
            source="writer._atomic_write_text",
            suggested_action="Check output directory permissions.",
        ) from e

    # (1) Create temporary file near the target for atomicity
    fd, tmp_path = tempfile.mkstemp(prefix=path.name + ".", dir=str(path.parent))
    try:
        with open(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except OSError as e:
        # (2) Clean up temp file on error
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise ReportError(
            f"atomic write failed for {path}: {e}",
            source="writer._atomic_write_text",
            suggested_action="Check output directory permissions and disk space.",
        ) from e


__all__ = ["build_report", "write_issue_report", "render_tree"]
