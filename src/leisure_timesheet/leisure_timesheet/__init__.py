"""Leisure center time-tracking package.

Organized by feature modules (timetracking, periods) with a thin Flask
controller layer over service/repository layers. The duration and period
computations under ``timetracking`` and ``periods`` are pure functions.
"""
