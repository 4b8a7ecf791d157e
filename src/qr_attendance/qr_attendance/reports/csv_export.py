"""CSV renderings of the reports: header row first, one row per student."""

from __future__ import annotations

import csv
import io

from .service import ClassReport, SessionSheet, SubjectReport


def _pct(value: int) -> str:
    return f"{value}%"


def _render(header: list[str], rows: list[list[str]], *, quoting: int = csv.QUOTE_MINIMAL) -> str:
    out = io.StringIO()
    writer = csv.writer(out, quoting=quoting, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return out.getvalue()


def subject_report_csv(report: SubjectReport) -> str:
    return _render(
        ["Student Name", "Roll No", "Attendance %", "Status"],
        [[r["name"], r["roll_no"], _pct(r["percentage"]), r["status"]] for r in report.rows],
    )


def class_report_csv(report: ClassReport) -> str:
    header = ["Student Name", "Roll No", "Class", *[s["name"] for s in report.subjects], "Overall %"]
    rows = [
        [r["name"], r["roll_no"], r["class_name"], *[_pct(p) for p in r["percentages"]], _pct(r["overall"])]
        for r in report.rows
    ]
    return _render(header, rows)


def session_sheet_csv(sheet: SessionSheet) -> str:
    header = ["Student Name", "Roll No", *sheet.dates, "Attendance %"]
    rows = [[r["name"], r["roll_no"], *r["cells"], _pct(r["percentage"])] for r in sheet.rows]
    return _render(header, rows, quoting=csv.QUOTE_ALL)
