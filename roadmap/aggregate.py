from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

import pandas as pd

from roadmap.data import ItemType, Record, Status, records_frame, round_half_up
from roadmap.filters import TEAM_SHORT_NAMES, TEAMS, ViewState


CURRENT_STATE_LABEL = "Estado Actual"
NEW_LABEL = "Nuevos"
IMPROVEMENT_LABEL = "Mejoras"


@dataclass(frozen=True)
class Aggregate:
    filtered: List[Record] = field(default_factory=list)
    kpis: Dict[str, Any] = field(default_factory=dict)
    grouped: List[Dict[str, Any]] = field(default_factory=list)
    types: Dict[str, int] = field(default_factory=dict)
    radar: List[Dict[str, Any]] = field(default_factory=list)


def filter_frame(df: pd.DataFrame, state: ViewState) -> pd.DataFrame:
    out = df
    if state.team is not None:
        out = out[out["team"] == state.team]
    if state.quarter is not None:
        out = out[out["quarter"] == state.quarter]
    return out


def _status_count(df: pd.DataFrame, status: Status) -> int:
    return int((df["status_bucket"] == status.value).sum())


def _hours(df: pd.DataFrame) -> int:
    return int(df["hours"].sum()) if not df.empty else 0


def compute_kpis(df: pd.DataFrame) -> Dict[str, Any]:
    total = int(len(df))
    hours = _hours(df)
    avg_hours = round_half_up(hours / total, 1) if total else 0.0
    return {
        "total": total,
        "hours": hours,
        "avg_hours": avg_hours,
        "done": _status_count(df, Status.DONE),
        "wip": _status_count(df, Status.WIP),
        "todo": _status_count(df, Status.TODO),
        "display": {
            "total": str(total),
            "hours": f"{hours} h",
            "avg_hours": f"~{avg_hours:.1f} h/proy" if total else "0",
        },
    }


def _bucket(df: pd.DataFrame, label: str, team: str | None = None) -> Dict[str, Any]:
    return {
        "team": team,
        "label": label,
        "done": _status_count(df, Status.DONE),
        "wip": _status_count(df, Status.WIP),
        "todo": _status_count(df, Status.TODO),
        "count": int(len(df)),
        "hours": _hours(df),
    }


def compute_grouped(df: pd.DataFrame, state: ViewState) -> List[Dict[str, Any]]:
    if state.is_overview:
        return [_bucket(df[df["team"] == team], TEAM_SHORT_NAMES[team], team) for team in TEAMS]
    return [_bucket(df, CURRENT_STATE_LABEL, state.team)]


def compute_types(df: pd.DataFrame) -> Dict[str, int]:
    nuevos = int((df["kind"] == ItemType.NUEVO.value).sum())
    mejoras = int((df["kind"] == ItemType.MEJORA.value).sum())
    return {NEW_LABEL: nuevos, IMPROVEMENT_LABEL: mejoras}


def compute_radar(grouped: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Scale per-team volume and effort independently onto 0-100."""
    max_count = max((g["count"] for g in grouped), default=0) or 1
    max_hours = max((g["hours"] for g in grouped), default=0) or 1
    return [
        {
            "team": g["team"],
            "label": g["label"],
            "count": g["count"],
            "hours": g["hours"],
            "count_pct": g["count"] / max_count * 100,
            "hours_pct": g["hours"] / max_hours * 100,
        }
        for g in grouped
    ]


def aggregate(records: Sequence[Record], state: ViewState) -> Aggregate:
    df = records_frame(records)
    filtered_df = filter_frame(df, state)
    grouped = compute_grouped(filtered_df, state)
    return Aggregate(
        filtered=[records[i] for i in filtered_df.index],
        kpis=compute_kpis(filtered_df),
        grouped=grouped,
        types=compute_types(filtered_df),
        radar=compute_radar(grouped) if state.is_overview else [],
    )
