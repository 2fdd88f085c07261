# src/markup_auditor/controllers/report_controller.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

import pandas as pd

from markup_auditor.model import Report, Severity

logger = logging.getLogger(__name__)

GOOD_THRESHOLD = 90
FAIR_THRESHOLD = 70

SEVERITY_MARKERS = {
    Severity.CRITICAL: "✖",
    Severity.WARNING: "⚠",
    Severity.INFO: "ℹ",
}

ISSUE_COLUMNS = [
    'source', 'category', 'severity', 'code', 'description', 'suggestion', 'line', 'context',
]


def score_band(score: int) -> str:
    """'good' from 90, 'fair' from 70, 'poor' below."""
    if score >= GOOD_THRESHOLD:
        return "good"
    if score >= FAIR_THRESHOLD:
        return "fair"
    return "poor"


class ReportController:
    """
    Turns Report values into human-readable text, JSON, and flat tables for export.
    """

    # --- RENDERING ---

    def render_text(self, report: Report) -> str:
        meta = report.metadata
        lines = [
            f"Markup audit: {meta.source}",
            f"Date: {meta.date.isoformat()} | Length: {meta.length} characters",
            f"Overall score: {report.overall_score}/100 ({score_band(report.overall_score)})",
            "",
        ]
        for category in report.categories:
            lines.append(f"{category.name}: {category.score}/100 ({score_band(category.score)})")
            if not category.issues:
                lines.append("  No issues found.")
            for issue in category.issues:
                marker = SEVERITY_MARKERS[issue.severity]
                lines.append(f"  {marker} [{issue.severity.value}] {issue.description}")
                if issue.line_number is not None:
                    lines.append(f"      Line {issue.line_number}: {issue.context}")
                if issue.suggestion:
                    lines.append(f"      Fix: {issue.suggestion}")
            lines.append("")

        counts = report.issue_counts()
        lines.append(
            f"Critical: {counts['Critical']} | Warning: {counts['Warning']} | Info: {counts['Info']}"
        )
        return "\n".join(lines)

    def render_json(self, report: Report, indent: int = 2) -> str:
        return json.dumps(report.to_dict(), indent=indent, ensure_ascii=False)

    # --- TABLES ---

    def to_rows(self, report: Report) -> List[Dict[str, Any]]:
        """One flat row per issue, in report order."""
        rows = []
        for category in report.categories:
            for issue in category.issues:
                rows.append({
                    'source': report.metadata.source,
                    'category': category.name,
                    'severity': issue.severity.value,
                    'code': issue.code,
                    'description': issue.description,
                    'suggestion': issue.suggestion or '',
                    'line': issue.line_number,
                    'context': issue.context or '',
                })
        return rows

    def issues_dataframe(self, reports: Iterable[Report]) -> pd.DataFrame:
        rows = [row for report in reports for row in self.to_rows(report)]
        return pd.DataFrame(rows, columns=ISSUE_COLUMNS)

    def summary_dataframe(self, reports: Sequence[Report]) -> pd.DataFrame:
        """One row per report: overall score plus each category score."""
        rows = []
        for report in reports:
            row: Dict[str, Any] = {'source': report.metadata.source, 'overall': report.overall_score}
            for category in report.categories:
                row[category.name] = category.score
            row.update(report.issue_counts())
            rows.append(row)
        return pd.DataFrame(rows)

    # --- EXPORT ---

    def export(self, reports: Sequence[Report], output_file: Path) -> Path:
        """
        Writes reports to disk. The format follows the suffix:
        .json (report contract), .csv (flat issues) or .xlsx (issues + summary sheets).
        """
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        suffix = output_file.suffix.lower()

        if suffix == '.json':
            payload = [r.to_dict() for r in reports]
            output_file.write_text(
                json.dumps(payload[0] if len(payload) == 1 else payload, indent=2, ensure_ascii=False),
                encoding='utf-8'
            )
        elif suffix == '.csv':
            self.issues_dataframe(reports).to_csv(output_file, index=False)
        elif suffix == '.xlsx':
            with pd.ExcelWriter(output_file, engine='openpyxl') as writer:
                self.summary_dataframe(reports).to_excel(writer, sheet_name='Summary', index=False)
                self.issues_dataframe(reports).to_excel(writer, sheet_name='Issues', index=False)
        else:
            raise ValueError(f"Unsupported export format '{suffix}'. Use .json, .csv or .xlsx")

        logger.info("Exported %d report(s) to %s", len(reports), output_file)
        return output_file
