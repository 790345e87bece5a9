"""Reporting: console renderers and file exporters."""

from locale_audit.reports.console import (
    render_audit,
    render_check,
    render_coverage,
    render_skeletons,
    render_sync,
)
from locale_audit.reports.exporters import (
    FORMATS,
    export_html,
    export_json,
    export_markdown,
    export_result,
)

__all__ = [
    "FORMATS",
    "export_html",
    "export_json",
    "export_markdown",
    "export_result",
    "render_audit",
    "render_check",
    "render_coverage",
    "render_skeletons",
    "render_sync",
]
