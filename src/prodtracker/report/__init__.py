from prodtracker.report.export import (
    EXPORT_COLUMNS,
    analysis_payload,
    default_report_name,
    export_rows,
    shift_message,
    write_report_xlsx,
)

__all__ = [
    "EXPORT_COLUMNS",
    "analysis_payload",
    "default_report_name",
    "export_rows",
    "shift_message",
    "write_report_xlsx",
]
