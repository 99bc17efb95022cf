"""HTML report generator for suite runs.

Renders a RunSummary into a standalone dashboard page (totals, per-profile
and per-category tables, health check) with a template-based approach.
"""

import logging
from html import escape
from pathlib import Path
from typing import Dict

from qualtiva_e2e.models.run_models import HealthCheckResult, RunSummary, StatusCounts

logger = logging.getLogger(__name__)


def _pass_rate(counts: StatusCounts) -> float:
    executed = counts.total - counts.skipped
    if executed <= 0:
        return 100.0
    return counts.passed / executed * 100


def _rate_class(rate: float) -> str:
    if rate >= 95:
        return "passed"
    if rate >= 80:
        return "warning"
    return "failed"


class HtmlReporter:
    """
    Generate the HTML run dashboard.

    PATTERN: Template-based HTML generation
    GOTCHA: A run with no outcomes still renders (configured profiles only)
    """

    def __init__(self):
        self.logger = logger

    def generate_report(self, summary: RunSummary) -> str:
        """
        Generate HTML report from a run summary.

        Args:
            summary: Run summary to render

        Returns:
            HTML string
        """
        html = self._generate_html_structure(summary)
        self.logger.debug(f"HTML report generated ({len(html)} bytes)")
        return html

    def _generate_html_structure(self, summary: RunSummary) -> str:
        """Generate complete HTML document."""
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(summary.project)} - Test Report</title>
    {self._generate_styles()}
</head>
<body>
    <div class="container">
        {self._generate_header(summary)}
        {self._generate_summary_dashboard(summary)}
        {self._generate_health_section(summary.execution.health_check)}
        {self._generate_counts_table("Profiles", "Profile", summary.execution.profiles)}
        {self._generate_counts_table("Categories", "Category", summary.execution.categories)}
        {self._generate_configuration_section(summary)}
        {self._generate_footer(summary)}
    </div>
</body>
</html>"""

    def _generate_styles(self) -> str:
        """Generate CSS styles."""
        return """<style>
        * {
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }

        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            line-height: 1.6;
            color: #1f2937;
            background-color: #f3f4f6;
        }

        .container {
            max-width: 1100px;
            margin: 0 auto;
            padding: 20px;
        }

        .header {
            background: linear-gradient(135deg, #0f766e 0%, #1e3a8a 100%);
            color: white;
            padding: 28px;
            border-radius: 10px;
            margin-bottom: 24px;
        }

        .header h1 {
            font-size: 2em;
            margin-bottom: 8px;
        }

        .dashboard {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(180px, 1fr));
            gap: 16px;
            margin-bottom: 24px;
        }

        .metric-card, .section {
            background: white;
            padding: 20px;
            border-radius: 10px;
            box-shadow: 0 2px 4px rgba(0, 0, 0, 0.08);
        }

        .section {
            margin-bottom: 20px;
        }

        .section h2 {
            margin-bottom: 14px;
            padding-bottom: 8px;
            border-bottom: 2px solid #0f766e;
        }

        .metric-card h3 {
            color: #6b7280;
            font-size: 0.85em;
            text-transform: uppercase;
        }

        .metric-value {
            font-size: 2.2em;
            font-weight: bold;
        }

        .passed { color: #059669; }
        .warning { color: #d97706; }
        .failed { color: #dc2626; }

        table {
            width: 100%;
            border-collapse: collapse;
        }

        th, td {
            padding: 10px;
            text-align: left;
            border-bottom: 1px solid #e5e7eb;
        }

        th {
            background: #f9fafb;
        }

        .tag {
            display: inline-block;
            padding: 2px 10px;
            margin: 2px;
            border-radius: 12px;
            background: #e0f2f1;
        }

        .footer {
            text-align: center;
            padding: 16px;
            color: #6b7280;
            font-size: 0.85em;
        }
    </style>"""

    def _generate_header(self, summary: RunSummary) -> str:
        """Generate report header."""
        totals = summary.execution.totals
        status = "PASSED" if totals.ok else "FAILED"
        status_class = "passed" if totals.ok else "failed"

        return f"""<div class="header">
        <h1>{escape(summary.project)}</h1>
        <p><strong>Run:</strong> {summary.test_run.strftime('%Y-%m-%d %H:%M:%S %Z')}</p>
        <p><strong>Status:</strong> <span class="{status_class}">{status}</span></p>
    </div>"""

    def _generate_summary_dashboard(self, summary: RunSummary) -> str:
        """Generate summary dashboard with key metrics."""
        totals = summary.execution.totals
        rate = _pass_rate(totals)

        return f"""<div class="dashboard">
        <div class="metric-card">
            <h3>Pass Rate</h3>
            <div class="metric-value {_rate_class(rate)}">{rate:.1f}%</div>
        </div>
        <div class="metric-card">
            <h3>Total</h3>
            <div class="metric-value">{totals.total}</div>
        </div>
        <div class="metric-card">
            <h3>Passed</h3>
            <div class="metric-value passed">{totals.passed}</div>
        </div>
        <div class="metric-card">
            <h3>Failed</h3>
            <div class="metric-value {'failed' if totals.failed + totals.error else 'passed'}">{totals.failed + totals.error}</div>
        </div>
        <div class="metric-card">
            <h3>Skipped</h3>
            <div class="metric-value warning">{totals.skipped}</div>
        </div>
    </div>"""

    def _generate_health_section(self, health_check: HealthCheckResult) -> str:
        """Generate health check section."""
        if health_check is None:
            return ""

        if health_check.ok:
            detail = f'<span class="passed">OK</span> - {escape(health_check.title or "")}'
        else:
            detail = f'<span class="failed">FAILED</span> - {escape(health_check.error or "")}'

        return f"""<div class="section">
        <h2>Health Check</h2>
        <p><strong>URL:</strong> {escape(health_check.url)}</p>
        <p>{detail}</p>
    </div>"""

    def _generate_counts_table(
        self, title: str, label: str, rows: Dict[str, StatusCounts]
    ) -> str:
        """Generate a per-profile or per-category table."""
        if not rows:
            return ""

        html = f"""<div class="section">
        <h2>{title}</h2>
        <table>
            <tr><th>{label}</th><th>Total</th><th>Passed</th><th>Failed</th><th>Skipped</th><th>Pass Rate</th></tr>"""

        for name, counts in rows.items():
            rate = _pass_rate(counts)
            html += f"""
            <tr>
                <td>{escape(name)}</td>
                <td>{counts.total}</td>
                <td>{counts.passed}</td>
                <td>{counts.failed + counts.error}</td>
                <td>{counts.skipped}</td>
                <td class="{_rate_class(rate)}">{rate:.1f}%</td>
            </tr>"""

        html += "</table></div>"
        return html

    def _generate_configuration_section(self, summary: RunSummary) -> str:
        """Generate the configured browsers and categories section."""
        browsers = "".join(f'<span class="tag">{escape(b)}</span>' for b in summary.browsers)
        categories = "".join(
            f'<span class="tag">{escape(c)}</span>' for c in summary.test_categories
        )
        return f"""<div class="section">
        <h2>Configuration</h2>
        <p><strong>Browsers ({summary.total_browsers}):</strong> {browsers}</p>
        <p><strong>Categories:</strong> {categories}</p>
    </div>"""

    def _generate_footer(self, summary: RunSummary) -> str:
        """Generate report footer."""
        return f"""<div class="footer">
        <p>Generated by qualtiva-e2e | {summary.test_run.strftime('%Y-%m-%d %H:%M:%S')}</p>
    </div>"""

    def save_report(self, summary: RunSummary, output_path: Path) -> Path:
        """
        Generate and save HTML report to file.

        Args:
            summary: Run summary to render
            output_path: Path to save HTML file

        Returns:
            Path to saved file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        html = self.generate_report(summary)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(html)

        self.logger.info(f"HTML report saved to: {output_path}")
        return output_path
