"""
Export service - CSV download and the printable summary report.

Plain values come out comma-joined as-is. Cells that contain a delimiter,
quote or newline are quoted by the csv module so the row stays intact.
"""

import csv
import io
from datetime import UTC, datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from fatigue.config import settings
from fatigue.features.analysis.domain import AnalysisResult
from fatigue.infrastructure.observability.logging import get_logger
from fatigue.utils.formatting import format_number

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

USER_CSV_HEADER = [
    "Email",
    "Total Messages",
    "Daily Average",
    "Weekly Average",
    "Monthly Average",
    "Risk Level",
]

RECOMMENDATIONS = [
    "Consider reducing frequency for high-risk users",
    "Implement preference centers for user control",
    "Monitor engagement metrics regularly",
    "Test optimal sending frequencies",
]


class ExportService:
    def __init__(self, template_dir: Path = TEMPLATE_DIR):
        self._env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["number"] = format_number
        self._env.filters["thousands"] = lambda value: f"{value:,}"

    def users_csv(self, result: AnalysisResult) -> str:
        """One row per recipient, in upload order (ignores any view filter or sort)."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(USER_CSV_HEADER)
        for user in result.users:
            writer.writerow(
                [
                    user.email,
                    user.total_messages,
                    format_number(user.daily_avg),
                    format_number(user.weekly_avg),
                    format_number(user.monthly_avg),
                    user.risk_level.value,
                ]
            )

        content = buffer.getvalue()
        if content.endswith("\n"):
            content = content[:-1]

        logger.info("CSV export generated", rows=len(result.users))
        return content

    def render_report(self, result: AnalysisResult, generated_at: datetime | None = None) -> str:
        generated_at = generated_at or datetime.now(UTC)
        template = self._env.get_template("report.html")
        document = template.render(
            title=settings.REPORT_TITLE,
            generated_on=generated_at.date().isoformat(),
            summary=result.summary,
            date_range=result.date_range,
            file_info=result.file_info,
            recommendations=RECOMMENDATIONS,
        )

        logger.info("Report generated", filename=result.file_info.name)
        return document


export_service = ExportService()
