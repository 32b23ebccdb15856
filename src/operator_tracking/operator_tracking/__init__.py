"""Operator Tracking package.

Factory-floor workforce tracking: which operators work which stations on
which shift, plus daily clock-in/clock-out attendance. Organized by feature
modules (operators, shifts, assignments, attendance, ...) with a thin Flask
controller layer over service/repository layers.
"""
