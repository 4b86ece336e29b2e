"""Core (UI-agnostic) booking dashboard logic.

This package contains:
- data loading (CSV -> pandas) and booking records
- date range normalization and filtering
- visitor aggregations (top countries, daily series, totals)
- the recompute-on-change dashboard state container
- chart helpers (Altair -> Vega-Lite spec dict)
"""
