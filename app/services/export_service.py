"""
Report Exporter - monthly CSV download for the dashboard.
"""

import csv
import io
import logging
from typing import List, Optional

from app.core.exceptions import ValidationError
from app.models.report import ReportResponse
from app.services.report_service import ReportStore
from app.utils.dates import format_display

logger = logging.getLogger(__name__)

CSV_HEADER = "Role,Patient Name,Location,Incident,Severity,Symptoms,Date"


def _row(report: ReportResponse) -> List[str]:
    return [
        report.role or "",
        report.patient_name or "",
        report.location or "",
        report.incident or "",
        report.severity or "",
        report.symptoms or "",
        format_display(report.created_at),
    ]


def _legacy_row(report: ReportResponse) -> str:
    # Older dashboards expect quotes doubled in the symptoms column only
    fields = _row(report)
    fields[5] = fields[5].replace('"', '""')
    return ",".join(f'"{value}"' for value in fields)


def render_csv(reports: List[ReportResponse], escape_all_fields: bool = True) -> str:
    """
    Serialize reports under the fixed header, one quoted row per report.
    """
    buffer = io.StringIO()
    buffer.write(CSV_HEADER + "\n")

    if escape_all_fields:
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerows(_row(report) for report in reports)
    else:
        for report in reports:
            buffer.write(_legacy_row(report) + "\n")

    return buffer.getvalue()


class ReportExporter:

    def __init__(self, report_store: ReportStore, escape_all_fields: bool = True):
        self.report_store = report_store
        self.escape_all_fields = escape_all_fields

    def export_csv(self, month: Optional[int], year: Optional[int]) -> str:
        """
        CSV text for every report created in the given month (local time).

        Raises:
            ValidationError: month or year missing/invalid
            StorageError: Firestore query failed
        """
        if month is None or year is None:
            raise ValidationError("Month and year are required")

        reports = self.report_store.list_reports(month=month, year=year)
        logger.info(f"Exporting {len(reports)} report(s) for {year}-{month:02d}")
        return render_csv(reports, escape_all_fields=self.escape_all_fields)

    @staticmethod
    def filename(month: int, year: int) -> str:
        return f"reports-{year}-{month:02d}.csv"
