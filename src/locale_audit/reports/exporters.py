"""Multi-format exporters for coverage results.

Supports:

*  **JSON**: machine-readable, suitable for CI artifact storage.
*  **Markdown**: human-readable, suitable for PR comments.
*  **HTML**: self-contained coverage report with embedded CSS.

All exporters accept an :class:`AuditResult` and produce a string.
"""

from __future__ import annotations

import html as html_mod

from locale_audit.model.run_result import AuditResult, LanguageStats
from locale_audit.utils.json_norm import stable_json_dumps

_LANGUAGE_FLAGS = {
    "ar": "🇸🇦",
    "de": "🇩🇪",
    "en": "🇬🇧",
    "es": "🇪🇸",
    "fr": "🇫🇷",
    "it": "🇮🇹",
    "ja": "🇯🇵",
    "pt": "🇵🇹",
    "ru": "🇷🇺",
    "zh": "🇨🇳",
}


def _lang_label(lang: str) -> str:
    flag = _LANGUAGE_FLAGS.get(lang.split("-")[0].lower())
    return f"{flag} {lang.upper()}" if flag else lang.upper()


def card_status(percentage: int) -> str:
    """Language card colour: good ≥ 90, warn ≥ 70, else bad."""
    if percentage >= 90:
        return "good"
    if percentage >= 70:
        return "warn"
    return "bad"


def cell_status(percentage: int) -> str:
    if percentage == 100:
        return "complete"
    if percentage >= 70:
        return "partial"
    return "missing"


# ════════════════════════════════════════════════════════════════════
# JSON exporter
# ════════════════════════════════════════════════════════════════════


def export_json(result: AuditResult, *, indent: int = 2) -> str:
    """Export an ``AuditResult`` as indented JSON."""
    return stable_json_dumps(result.to_dict(), indent=indent)


# ════════════════════════════════════════════════════════════════════
# Markdown exporter
# ════════════════════════════════════════════════════════════════════


def export_markdown(result: AuditResult) -> str:
    """Export coverage as two Markdown tables (per language, per namespace)."""
    langs = list(result.config.target_langs)
    lines: list[str] = []

    lines.append("# i18n Coverage Report")
    lines.append("")
    lines.append(f"**Generated:** {result.created_at}  ")
    lines.append(f"**Reference:** `{result.config.source_lang}`  ")
    lines.append(f"**Namespaces:** {len(result.reference_counts)}")
    lines.append("")

    lines.append("## By Language")
    lines.append("")
    lines.append("| Language | Coverage | Translated | Untranslated | Missing |")
    lines.append("|----------|---------:|-----------:|-------------:|--------:|")
    for lang, s in result.language_stats().items():
        lines.append(
            f"| {lang} | {s.percentage}% | {s.translated}/{s.total} "
            f"| {s.untranslated} | {s.missing} |"
        )
    lines.append("")

    if result.reference_counts:
        lines.append("## By Namespace")
        lines.append("")
        lines.append("| Namespace | Keys | " + " | ".join(langs) + " |")
        lines.append("|-----------|-----:|" + "|".join("---:" for _ in langs) + "|")
        for ns, total in result.reference_counts.items():
            pairs = result.results_for(ns)
            cells = []
            for lang in langs:
                r = pairs.get(lang)
                if r is None or not r.exists:
                    cells.append("MISSING")
                elif r.parse_error is not None:
                    cells.append("INVALID")
                else:
                    cells.append(f"{r.percentage}%")
            lines.append(f"| {ns} | {total} | " + " | ".join(cells) + " |")
        lines.append("")

    lines.append("---")
    lines.append(f"*Exported by locale-audit {result.tool_version}*")
    lines.append("")
    return "\n".join(lines)


# ════════════════════════════════════════════════════════════════════
# HTML exporter
# ════════════════════════════════════════════════════════════════════

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>i18n Coverage Report</title>
<style>
  * {{ margin: 0; padding: 0; box-sizing: border-box; }}
  body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; padding: 2rem; background: #f5f5f5; }}
  .container {{ max-width: 1400px; margin: 0 auto; background: white; padding: 2rem; border-radius: 8px; box-shadow: 0 2px 8px rgba(0,0,0,0.1); }}
  h1 {{ margin-bottom: 0.5rem; color: #333; }}
  h2 {{ margin: 1.5rem 0 0.5rem; color: #333; }}
  .timestamp {{ color: #666; font-size: 0.9rem; margin-bottom: 2rem; }}
  .overall {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 1rem; margin-bottom: 2rem; }}
  .stat-card {{ padding: 1.5rem; border-radius: 8px; border: 2px solid #e0e0e0; }}
  .stat-card h3 {{ font-size: 0.9rem; color: #666; margin-bottom: 0.5rem; }}
  .stat-card .percentage {{ font-size: 2rem; font-weight: bold; margin-bottom: 0.25rem; }}
  .stat-card .details {{ font-size: 0.85rem; color: #888; }}
  .good {{ border-color: #4caf50; background: #f1f8f4; }}
  .good .percentage {{ color: #4caf50; }}
  .warn {{ border-color: #ff9800; background: #fff8f0; }}
  .warn .percentage {{ color: #ff9800; }}
  .bad {{ border-color: #f44336; background: #fef5f5; }}
  .bad .percentage {{ color: #f44336; }}
  table {{ width: 100%; border-collapse: collapse; margin-top: 1rem; }}
  th, td {{ padding: 0.75rem; text-align: left; border-bottom: 1px solid #e0e0e0; }}
  th {{ background: #f5f5f5; font-weight: 600; color: #333; }}
  .progress-bar {{ height: 8px; background: #e0e0e0; border-radius: 4px; overflow: hidden; margin-top: 0.25rem; }}
  .progress-fill {{ height: 100%; background: #4caf50; }}
  .status-badge {{ display: inline-block; padding: 0.25rem 0.5rem; border-radius: 4px; font-size: 0.75rem; font-weight: 600; color: white; }}
  .status-complete {{ background: #4caf50; }}
  .status-partial {{ background: #ff9800; }}
  .status-missing {{ background: #f44336; }}
  footer {{ margin-top: 2rem; color: #6c757d; font-size: 0.85em; }}
</style>
</head>
<body>
<div class="container">
{body}
</div>
</body>
</html>
"""


def _language_card(lang: str, stats: LanguageStats) -> str:
    pct = stats.percentage
    parts = [
        f'<div class="stat-card {card_status(pct)}">',
        f"<h3>{html_mod.escape(_lang_label(lang))}</h3>",
        f'<div class="percentage">{pct}%</div>',
        f'<div class="details">{stats.translated}/{stats.total} keys translated</div>',
    ]
    if stats.untranslated:
        parts.append(f'<div class="details">⚠️ {stats.untranslated} need translation</div>')
    if stats.missing:
        parts.append(f'<div class="details">❌ {stats.missing} missing</div>')
    parts.append("</div>")
    return "\n".join(parts)


def export_html(result: AuditResult) -> str:
    """Export coverage as a self-contained HTML document."""
    langs = list(result.config.target_langs)
    parts: list[str] = []

    parts.append("<h1>🌍 i18n Coverage Report</h1>")
    parts.append(
        f'<div class="timestamp">Generated: {html_mod.escape(result.created_at)}</div>'
    )

    parts.append('<div class="overall">')
    for lang, stats in result.language_stats().items():
        parts.append(_language_card(lang, stats))
    parts.append("</div>")

    parts.append("<h2>Coverage by Namespace</h2>")
    parts.append("<table>")
    header = "".join(f"<th>{html_mod.escape(_lang_label(lang))}</th>" for lang in langs)
    parts.append(f"<thead><tr><th>Namespace</th><th>Total Keys</th>{header}</tr></thead>")
    parts.append("<tbody>")
    for ns, total in result.reference_counts.items():
        pairs = result.results_for(ns)
        row = [f"<tr><td><strong>{html_mod.escape(ns)}</strong></td><td>{total}</td>"]
        for lang in langs:
            r = pairs.get(lang)
            if r is None or not r.exists:
                row.append('<td><span class="status-badge status-missing">MISSING</span></td>')
            elif r.parse_error is not None:
                title = html_mod.escape(r.parse_error, quote=True)
                row.append(
                    f'<td><span class="status-badge status-missing" title="{title}">'
                    "INVALID</span></td>"
                )
            else:
                pct = r.percentage
                row.append(
                    f'<td class="{cell_status(pct)}"><div>{pct}%</div>'
                    f'<div class="progress-bar"><div class="progress-fill" '
                    f'style="width: {pct}%"></div></div></td>'
                )
        row.append("</tr>")
        parts.append("".join(row))
    parts.append("</tbody>")
    parts.append("</table>")

    if result.reference_findings:
        parts.append("<h2>Reference Problems</h2>")
        parts.append("<ul>")
        for f in result.reference_findings:
            parts.append(
                f"<li><code>{html_mod.escape(f.file_label)}</code>: "
                f"{html_mod.escape(f.detail)}</li>"
            )
        parts.append("</ul>")

    parts.append(
        f"<footer>Exported by locale-audit {html_mod.escape(result.tool_version)}</footer>"
    )
    return _HTML_TEMPLATE.format(body="\n".join(parts))


# ════════════════════════════════════════════════════════════════════
# Dispatch
# ════════════════════════════════════════════════════════════════════

_EXPORTERS = {
    "json": export_json,
    "markdown": export_markdown,
    "html": export_html,
}

FORMATS = tuple(_EXPORTERS)


def export_result(result: AuditResult, *, fmt: str = "html") -> str:
    """Export *result* in the requested format (``json``, ``markdown``, ``html``)."""
    try:
        exporter = _EXPORTERS[fmt]
    except KeyError:
        raise ValueError(
            f"unknown export format {fmt!r}; choose from {', '.join(FORMATS)}"
        ) from None
    return exporter(result)
