"""School Attendance package.

Feature modules (users, attendance, dashboards, ...) sit on top of a
Record Store abstraction, with a thin Flask controller layer over the
service layer.
"""
