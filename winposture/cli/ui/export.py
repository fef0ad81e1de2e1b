"""Export utilities for audit reports."""
import csv

from ...core.result import AuditReport

CSV_HEADER = [
    'Check',
    'Category',
    'Subject',
    'Field',
    'Value',
    'Compliance',
    'Description',
    'Timestamp'
]


def export_to_csv(report: AuditReport, filepath: str):
    """
    Export audit report to CSV format, one row per finding.

    Absent values are written as the "(null)" sentinel.

    Raises:
        OSError: the file could not be written
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)

        for result in report.results:
            for finding in result.findings:
                writer.writerow([
                    result.check_id,
                    result.category,
                    finding.subject,
                    finding.field_name or '',
                    finding.display_value,
                    finding.compliance.value,
                    finding.description,
                    result.timestamp.isoformat() if result.timestamp else ''
                ])


def export_report(report: AuditReport, filepath: str, fmt: str = "json"):
    """Export a report as json or csv."""
    if fmt == "csv":
        export_to_csv(report, filepath)
    elif fmt == "json":
        report.save_json(filepath)
    else:
        raise ValueError(f"Unsupported export format: {fmt}")
