from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Sequence

from roadmap.aggregate import aggregate
from roadmap.charts import status_bar_chart, to_vega_spec, type_donut_chart, volume_effort_chart
from roadmap.data import Record
from roadmap.filters import ViewState, page_subtitle, page_title


def compute_overview(state: ViewState, records: Sequence[Record]) -> Dict[str, Any]:
    agg = aggregate(records, state)

    charts: Dict[str, Any] = {
        "status_bar": to_vega_spec(status_bar_chart(agg.grouped)),
        "type_donut": to_vega_spec(type_donut_chart(agg.types)),
    }
    # The volume/effort comparison only makes sense across all teams.
    if state.is_overview:
        charts["volume_effort"] = to_vega_spec(volume_effort_chart(agg.radar))

    return {
        "view": asdict(state),
        "title": page_title(state),
        "subtitle": page_subtitle(state),
        "kpis": agg.kpis,
        "grouped": agg.grouped,
        "types": agg.types,
        "radar": agg.radar,
        "charts": charts,
    }
