"""Break Tracker package.

Shift and break countdowns for a support agent dashboard, organized by feature
modules (shifts, breaks, countdown, schedules) with a thin Flask controller
layer on top of pure computation and repository layers.
"""
