"""Timeclock System package.

Organized by feature modules (departments, time_entries, schedules, ...)
with a thin Flask controller layer over service/repository layers.
"""
