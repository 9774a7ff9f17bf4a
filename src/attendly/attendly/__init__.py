"""Attendly package.

Personal attendance tracker organized by feature modules (statuses,
schedules, attendance, leaves, stats, ...) with a thin Flask controller
layer over plain service/repository layers.
"""
