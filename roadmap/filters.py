from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional


OVERVIEW = "Vista General"
TABLE_VIEW = "Base de Datos"
ALL_QUARTERS = "All"

TEAMS: List[str] = [
    "Martechs & Ads",
    "Onboarding",
    "Fulfillment",
    "Quick Commerce",
    "Plus & Pricing",
    "Payments",
    "Food",
]

TEAM_SHORT_NAMES: Dict[str, str] = {
    "Martechs & Ads": "Martech",
    "Onboarding": "Onboarding",
    "Fulfillment": "Fulfillment",
    "Quick Commerce": "QC",
    "Plus & Pricing": "Plus",
    "Payments": "Payments",
    "Food": "Food",
}

QUARTERS: List[str] = ["Q1", "Q2", "Q3", "Q4"]
BUCKET_OPTIONS: List[str] = [ALL_QUARTERS] + QUARTERS
CATEGORY_OPTIONS: List[str] = [OVERVIEW] + TEAMS + [TABLE_VIEW]

TABLE_SUBTITLE = "Registro completo de todas las tareas"
DASHBOARD_SUBTITLE = "Performance Metrics & KPIs"


@dataclass(frozen=True)
class ViewState:
    active_category: str = OVERVIEW
    active_bucket: str = ALL_QUARTERS

    @property
    def is_overview(self) -> bool:
        return self.active_category == OVERVIEW

    @property
    def is_table(self) -> bool:
        return self.active_category == TABLE_VIEW

    @property
    def team(self) -> Optional[str]:
        """The team the records are filtered on, or None when no team filter applies."""
        if self.is_overview or self.is_table:
            return None
        return self.active_category

    @property
    def quarter(self) -> Optional[str]:
        if self.active_bucket == ALL_QUARTERS:
            return None
        return self.active_bucket


def _as_option(value: object, options: List[str], default: str) -> str:
    if value is None:
        return default
    s = str(value).strip()
    return s if s in options else default


def normalize_view_state(raw: Optional[dict]) -> ViewState:
    raw = raw or {}
    return ViewState(
        active_category=_as_option(raw.get("active_category"), CATEGORY_OPTIONS, OVERVIEW),
        active_bucket=_as_option(raw.get("active_bucket"), BUCKET_OPTIONS, ALL_QUARTERS),
    )


def select_category(state: ViewState, name: str) -> ViewState:
    return replace(state, active_category=_as_option(name, CATEGORY_OPTIONS, OVERVIEW))


def select_bucket(state: ViewState, bucket: str) -> ViewState:
    return replace(state, active_bucket=_as_option(bucket, BUCKET_OPTIONS, ALL_QUARTERS))


def page_title(state: ViewState) -> str:
    return state.active_category


def page_subtitle(state: ViewState) -> str:
    return TABLE_SUBTITLE if state.is_table else DASHBOARD_SUBTITLE
