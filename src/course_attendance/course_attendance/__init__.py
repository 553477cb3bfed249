"""Course Attendance package.

Organized by feature modules (attendance, reports, courses, users) with a thin
Flask controller layer over service/repository layers.
"""
