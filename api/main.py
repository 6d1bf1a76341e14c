from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import LoadStatusResponse, MetaCategoriesResponse, MetaListResponse, ViewStateModel
from roadmap.aggregate import aggregate
from roadmap.data import load_dashboard_data, reload_dashboard_data
from roadmap.filters import BUCKET_OPTIONS, OVERVIEW, TABLE_VIEW, TEAM_SHORT_NAMES, TEAMS, ViewState, normalize_view_state
from roadmap.metrics_debug import compute_debug
from roadmap.metrics_overview import compute_overview
from roadmap.metrics_table import compute_table, table_frame


app = FastAPI(title="Roadmap Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _state_from_model(model: ViewStateModel) -> ViewState:
    return normalize_view_state(model.model_dump())


def _json(data: object) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder(data))


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _with_load_error(payload: Dict[str, Any], data_ctx: Dict[str, Any]) -> Dict[str, Any]:
    payload["error"] = data_ctx.get("error")
    return payload


def _status(data_ctx: Dict[str, Any]) -> LoadStatusResponse:
    return LoadStatusResponse(
        source=str(data_ctx.get("source", "")),
        records=len(data_ctx.get("records", ())),
        raw_rows=int(data_ctx.get("raw_rows", 0) or 0),
        error=data_ctx.get("error"),
    )


@app.get("/meta/categories")
def meta_categories():
    return MetaCategoriesResponse(
        categories=TEAMS,
        short_names=[TEAM_SHORT_NAMES[t] for t in TEAMS],
        overview=OVERVIEW,
        table=TABLE_VIEW,
    )


@app.get("/meta/quarters")
def meta_quarters():
    return MetaListResponse(values=BUCKET_OPTIONS)


@app.get("/status")
def status():
    try:
        return _status(load_dashboard_data())
    except Exception as exc:
        logger.exception("status failed")
        return _error(exc)


@app.post("/reload")
def reload():
    try:
        return _status(reload_dashboard_data())
    except Exception as exc:
        logger.exception("reload failed")
        return _error(exc)


@app.post("/dashboard")
def dashboard(view: ViewStateModel):
    try:
        data_ctx = load_dashboard_data()
        state = _state_from_model(view)
        return _json(_with_load_error(compute_overview(state, data_ctx["records"]), data_ctx))
    except Exception as exc:
        logger.exception("dashboard failed")
        return _error(exc)


@app.post("/table")
def table(view: ViewStateModel):
    try:
        data_ctx = load_dashboard_data()
        state = _state_from_model(view)
        return _json(_with_load_error(compute_table(state, data_ctx["records"]), data_ctx))
    except Exception as exc:
        logger.exception("table failed")
        return _error(exc)


@app.post("/debug")
def debug(view: ViewStateModel):
    try:
        data_ctx = load_dashboard_data()
        state = _state_from_model(view)
        payload = compute_debug(state, data_ctx["records"], raw_rows=data_ctx.get("raw_rows"))
        return _json(_with_load_error(payload, data_ctx))
    except Exception as exc:
        logger.exception("debug failed")
        return _error(exc)


@app.post("/export")
def export(view: ViewStateModel):
    data_ctx = load_dashboard_data()
    state = _state_from_model(view)
    export_df = table_frame(aggregate(data_ctx["records"], state).filtered)
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=roadmap.csv"})
