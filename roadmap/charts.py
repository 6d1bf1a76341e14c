from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()

STATUS_COLORS = {"Done": "#10b981", "WIP": "#FFD400", "Todo": "#64748b"}
TYPE_COLORS = {"Nuevos": "#FA0050", "Mejoras": "#a855f7"}
VOLUME_LABEL = "Volumen (Proyectos)"
EFFORT_LABEL = "Esfuerzo (Horas)"
RADAR_COLORS = {VOLUME_LABEL: "#FA0050", EFFORT_LABEL: "#00A9E0"}


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def status_bar_chart(grouped: List[Dict[str, Any]]) -> alt.Chart:
    """Horizontal stacked bar of done/wip/todo per group."""
    long_df = pd.DataFrame(
        [{"label": g["label"], "status": status, "count": g[status.lower()]} for g in grouped for status in STATUS_COLORS],
        columns=["label", "status", "count"],
    )
    labels = [g["label"] for g in grouped]
    return (
        alt.Chart(long_df)
        .mark_bar(cornerRadius=4)
        .encode(
            y=alt.Y("label:N", title=None, sort=labels, axis=alt.Axis(labelFontWeight="bold")),
            x=alt.X("count:Q", title=None, stack="zero", axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color(
                "status:N",
                title=None,
                scale=alt.Scale(domain=list(STATUS_COLORS), range=list(STATUS_COLORS.values())),
                legend=alt.Legend(orient="bottom"),
            ),
            order=alt.Order("status_order:Q"),
            tooltip=["label", "status", alt.Tooltip("count:Q", format=",")],
        )
        .transform_calculate(status_order="indexof(['Done', 'WIP', 'Todo'], datum.status)")
        .properties(height=max(80, 36 * len(labels)))
    )


def type_donut_chart(types: Dict[str, int]) -> alt.Chart:
    df = pd.DataFrame([{"label": k, "count": v} for k, v in types.items()], columns=["label", "count"])
    return (
        alt.Chart(df)
        .mark_arc(innerRadius=60)
        .encode(
            theta=alt.Theta("count:Q"),
            color=alt.Color(
                "label:N",
                title=None,
                scale=alt.Scale(domain=list(TYPE_COLORS), range=list(TYPE_COLORS.values())),
                legend=alt.Legend(orient="bottom"),
            ),
            tooltip=["label", alt.Tooltip("count:Q", format=",")],
        )
    )


def volume_effort_chart(radar: List[Dict[str, Any]]) -> alt.Chart:
    """Normalized volume vs effort per team on a shared 0-100 axis.

    Vega-Lite has no radar mark, so both series are drawn as lines over the team
    axis; tooltips carry the raw project count and hours.
    """
    rows = []
    for r in radar:
        rows.append({"label": r["label"], "metric": VOLUME_LABEL, "value": r["count_pct"], "raw": f"Proyectos: {r['count']}"})
        rows.append({"label": r["label"], "metric": EFFORT_LABEL, "value": r["hours_pct"], "raw": f"Horas: {r['hours']}h"})
    df = pd.DataFrame(rows, columns=["label", "metric", "value", "raw"])
    hover = alt.selection_point(fields=["metric"], on="mouseover", empty="all")
    return (
        alt.Chart(df)
        .mark_line(point={"filled": True, "size": 60})
        .encode(
            x=alt.X("label:N", title=None, sort=[r["label"] for r in radar], axis=alt.Axis(grid=False, labelAngle=0)),
            y=alt.Y("value:Q", title=None, scale=alt.Scale(domain=[0, 100]), axis=alt.Axis(labels=False, gridDash=[4, 4])),
            color=alt.Color(
                "metric:N",
                title=None,
                scale=alt.Scale(domain=list(RADAR_COLORS), range=list(RADAR_COLORS.values())),
                legend=alt.Legend(orient="bottom"),
            ),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.3)),
            tooltip=[alt.Tooltip("label:N", title="Team"), alt.Tooltip("raw:N", title="Valor")],
        )
        .add_params(hover)
        .properties(height=260)
    )
