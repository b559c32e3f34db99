"""Pontual package.

Attendance reporting over CrossChex Cloud punch records, organized by feature
modules (events, schedules, attendance, reports, ...) with a thin Flask
controller layer on top of service/repository layers.
"""
