from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Sequence

import pandas as pd

from roadmap.data import ItemType, Record, records_frame
from roadmap.filters import QUARTERS, TEAMS, ViewState
from roadmap.parsing import duration_unit_hours


def _value_counts(series: pd.Series, key: str) -> list:
    if series.empty:
        return []
    counts = series.value_counts()
    return [{key: str(k), "count": int(v)} for k, v in counts.items()]


def compute_debug(state: ViewState, records: Sequence[Record], *, raw_rows: int | None = None) -> Dict[str, Any]:
    df = records_frame(records)
    payload: Dict[str, Any] = {
        "view": asdict(state),
        "row_counts": {
            "raw_rows": int(raw_rows if raw_rows is not None else len(df)),
            "records": int(len(df)),
        },
        "quarter_distribution": {q: 0 for q in QUARTERS},
        "unmatched_teams": [],
        "unknown_statuses": [],
        "folded_types": [],
        "effort_fallback": [],
    }
    if df.empty:
        return payload

    payload["quarter_distribution"] = {q: int(v) for q, v in df["quarter"].value_counts().reindex(QUARTERS, fill_value=0).items()}

    # Team filters match exactly, so these records never appear in a team view.
    payload["unmatched_teams"] = _value_counts(df.loc[~df["team"].isin(TEAMS), "team"], "team")
    payload["unknown_statuses"] = _value_counts(df.loc[df["status_bucket"].isna(), "status"], "status")
    # Values other than "Nuevo" and "Mejora" are counted with the improvements.
    folded = (df["kind"] == ItemType.MEJORA.value) & (df["type"] != ItemType.MEJORA.value)
    payload["folded_types"] = _value_counts(df.loc[folded, "type"], "type")

    payload["effort_fallback"] = [
        {"id": r.id, "name": r.name, "duration_text": r.duration_text, "hours": r.hours}
        for r in records
        if duration_unit_hours(r.duration_text) == 0
    ]
    return payload
