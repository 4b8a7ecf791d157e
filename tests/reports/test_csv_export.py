from src.qr_attendance.qr_attendance.reports.csv_export import class_report_csv, session_sheet_csv, subject_report_csv
from src.qr_attendance.qr_attendance.reports.service import ClassReport, SessionSheet, SubjectReport


def test_subject_report_csv():
    report = SubjectReport(
        subject={"id": "sub-1", "name": "DSA", "code": "CS301"},
        rows=[
            {"student_id": "student-1", "name": "Priya Patel", "roll_no": "CS2024001", "percentage": 100, "status": "Good"},
            {"student_id": "student-2", "name": "Verma, Rahul", "roll_no": "", "percentage": 33, "status": "Critical"},
        ],
        average=67,
        above_threshold=1,
        below_threshold=1,
    )

    assert subject_report_csv(report).splitlines() == [
        "Student Name,Roll No,Attendance %,Status",
        "Priya Patel,CS2024001,100%,Good",
        '"Verma, Rahul",,33%,Critical',
    ]


def test_class_report_csv_has_column_per_subject():
    report = ClassReport(
        subjects=[{"id": "sub-1", "name": "DSA", "code": "CS301"}, {"id": "sub-2", "name": "DBMS", "code": "CS302"}],
        rows=[
            {
                "student_id": "student-1",
                "name": "Priya Patel",
                "roll_no": "CS2024001",
                "class_name": "CS-4A",
                "percentages": [100, 50],
                "overall": 75,
            }
        ],
        overall=75,
    )

    assert class_report_csv(report).splitlines() == [
        "Student Name,Roll No,Class,DSA,DBMS,Overall %",
        "Priya Patel,CS2024001,CS-4A,100%,50%,75%",
    ]


def test_session_sheet_csv_quotes_every_cell():
    sheet = SessionSheet(
        subject={"id": "sub-1", "name": "DSA", "code": "CS301"},
        dates=["2025-03-03", "2025-03-04"],
        rows=[{"name": "Priya Patel", "roll_no": "CS2024001", "cells": ["present", ""], "percentage": 100}],
    )

    assert session_sheet_csv(sheet).splitlines() == [
        '"Student Name","Roll No","2025-03-03","2025-03-04","Attendance %"',
        '"Priya Patel","CS2024001","present","","100%"',
    ]


def test_empty_report_is_header_only():
    report = SubjectReport(subject={"id": "s", "name": "n", "code": "c"}, rows=[], average=0, above_threshold=0, below_threshold=0)

    assert subject_report_csv(report) == "Student Name,Roll No,Attendance %,Status\n"
