"""Shared fixtures for the roadmap dashboard tests."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from roadmap.data import Record, clear_load_cache, project_records
from roadmap.parsing import parse_csv


SAMPLE_CSV = """Name,TEAM,Status,Type,Duration,Date
"Checkout, nuevo flujo",Payments,Done,Nuevo,2 weeks,12/ene/2024
Campañas,Martechs & Ads,WIP,Mejora,3 days,05/feb/2024
KYC,Onboarding,Todo,Nuevo,1 week 2 days,20/abr/2024

Ruteo,Fulfillment,Done,Mejora,16 hours,02/may/2024
Menú,Food,Done,Nuevo,2 days,10/oct/2024
Reembolsos,Payments,WIP,Mejora,,
Cupones,Martechs & Ads,Blocked,Mejora,tbd,03/nov/2024
Propinas,food,Todo,Refactor,4 hours,18/dic/2024
"""


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def sample_records() -> List[Record]:
    return project_records(parse_csv(SAMPLE_CSV))


@pytest.fixture
def spec_records() -> List[Record]:
    """Two Food rows: one finished new feature, one bare improvement."""
    rows = [
        {"name": "A", "team": "Food", "status": "Done", "type": "Nuevo", "duration": "2 days", "date": "01/ene/2024"},
        {"name": "B", "team": "Food", "status": "Todo", "type": "Mejora", "duration": "", "date": ""},
    ]
    return project_records(rows)


@pytest.fixture
def data_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "data.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    monkeypatch.setenv("ROADMAP_DATA_CSV", str(path))
    return path


@pytest.fixture(autouse=True)
def reset_load_cache():
    clear_load_cache()
    yield
    clear_load_cache()
