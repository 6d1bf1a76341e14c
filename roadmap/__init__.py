"""Core (UI-agnostic) roadmap dashboard logic.

This package contains:
- text parsing (CSV text -> raw rows, durations, quarters)
- record projection and loading (raw rows -> Record, cached per file signature)
- view state normalization
- filter/aggregate and page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
