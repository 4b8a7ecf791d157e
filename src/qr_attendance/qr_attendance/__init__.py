"""QR Attendance package.

Feature modules (users, classes, subjects, sessions, attendance, reports)
sit on a single record store with a thin Flask controller layer on top.
"""
