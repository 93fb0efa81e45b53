from specval.reporting.handler import ResultHandler
from specval.reporting.writer import build_report, render_tree, write_issue_report

__all__ = ["ResultHandler", "build_report", "render_tree", "write_issue_report"]
