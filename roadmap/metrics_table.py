from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Sequence

import pandas as pd

from roadmap.aggregate import aggregate
from roadmap.data import Record
from roadmap.filters import ViewState, page_subtitle, page_title


TABLE_COLUMNS = ["name", "date", "team", "quarter", "status", "type", "hours"]


def table_rows(records: Sequence[Record]) -> List[Dict[str, Any]]:
    return [
        {
            "name": r.name,
            "date": r.date_text,
            "team": r.team,
            "quarter": r.quarter,
            "status": r.status,
            "type": r.type,
            "hours": r.hours,
            "hours_label": f"{r.hours}h",
        }
        for r in records
    ]


def table_frame(records: Sequence[Record]) -> pd.DataFrame:
    return pd.DataFrame(table_rows(records), columns=TABLE_COLUMNS)


def compute_table(state: ViewState, records: Sequence[Record]) -> Dict[str, Any]:
    filtered = aggregate(records, state).filtered
    return {
        "view": asdict(state),
        "title": page_title(state),
        "subtitle": page_subtitle(state),
        "count": len(filtered),
        "rows": table_rows(filtered),
    }
