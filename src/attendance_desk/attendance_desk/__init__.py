"""Attendance Desk package.

This package is organized by feature modules (attendance, reports) with a thin
Flask controller layer over service/gateway layers. Persistence lives behind a
REST backend reached through the attendance gateway.
"""
