"""
Core utilities for campaign chart classification.

Modules:
    diagnostics — Structured records for excluded items
    registry    — Category table, series routing and activation gates
    validation  — Series / data-point shape contract
"""
