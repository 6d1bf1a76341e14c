from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from roadmap.parsing import DEFAULT_EFFORT_HOURS, RawRow, get_quarter, parse_csv, parse_duration


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1]
DATA_FILE = "data.csv"
DATA_PATH_ENV = "ROADMAP_DATA_CSV"

FIELD_DEFAULTS = {
    "name": "Unknown",
    "team": "Unknown",
    "status": "Todo",
    "type": "Mejora",
    "duration": "0h",
    "date": "",
}

RECORD_COLUMNS = ["id", "name", "team", "status", "type", "duration_text", "date_text", "hours", "quarter"]
# Enum buckets; status_bucket is None for statuses outside Status.
FRAME_COLUMNS = RECORD_COLUMNS + ["status_bucket", "kind"]


class DataLoadError(Exception):
    pass


class Status(str, Enum):
    DONE = "Done"
    WIP = "WIP"
    TODO = "Todo"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Status"]:
        """Exact, case-sensitive match; anything else belongs to no status bucket."""
        for member in cls:
            if member.value == value:
                return member
        return None


class ItemType(str, Enum):
    NUEVO = "Nuevo"
    MEJORA = "Mejora"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ItemType":
        # Every value other than "Nuevo" is counted as an improvement.
        return cls.NUEVO if value == cls.NUEVO.value else cls.MEJORA


@dataclass(frozen=True)
class Record:
    id: int
    name: str
    team: str
    status: str
    type: str
    duration_text: str
    date_text: str
    hours: int
    quarter: str

    @property
    def status_bucket(self) -> Optional[Status]:
        return Status.parse(self.status)

    @property
    def kind(self) -> ItemType:
        return ItemType.parse(self.type)


def _lookup(row: RawRow, field: str) -> Optional[str]:
    # Headers are lowercased by the parser; the uppercase key covers rows built elsewhere.
    return row.get(field) or row.get(field.upper()) or None


def project_record(idx: int, row: RawRow) -> Record:
    values = {field: _lookup(row, field) for field in FIELD_DEFAULTS}
    hours = parse_duration(values["duration"]) or DEFAULT_EFFORT_HOURS
    return Record(
        id=idx,
        name=values["name"] or FIELD_DEFAULTS["name"],
        team=values["team"] or FIELD_DEFAULTS["team"],
        status=values["status"] or FIELD_DEFAULTS["status"],
        type=values["type"] or FIELD_DEFAULTS["type"],
        duration_text=values["duration"] or FIELD_DEFAULTS["duration"],
        date_text=values["date"] or FIELD_DEFAULTS["date"],
        hours=hours,
        quarter=get_quarter(values["date"]),
    )


def project_records(raw_rows: Iterable[RawRow]) -> List[Record]:
    return [project_record(i, row) for i, row in enumerate(raw_rows)]


def _frame_row(record: Record) -> Dict[str, object]:
    bucket = record.status_bucket
    return {
        **asdict(record),
        "status_bucket": bucket.value if bucket is not None else None,
        "kind": record.kind.value,
    }


def records_frame(records: Sequence[Record]) -> pd.DataFrame:
    """One row per record, positionally indexed (row i is records[i])."""
    if not records:
        return pd.DataFrame(columns=FRAME_COLUMNS).astype({"id": "int64", "hours": "int64"})
    return pd.DataFrame([_frame_row(r) for r in records], columns=FRAME_COLUMNS)


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    # Floats round on their exact binary value: 1.45 is stored as 1.4499... and gives 1.4.
    exact = Decimal(value) if isinstance(value, float) else Decimal(str(value))
    return float(exact.quantize(q, rounding=ROUND_HALF_UP))


def get_data_path() -> Path:
    override = os.environ.get(DATA_PATH_ENV, "").strip()
    return Path(override) if override else DATA_DIR / DATA_FILE


def file_signature(path: Path) -> Tuple[str, float]:
    try:
        return str(path), path.stat().st_mtime
    except OSError as exc:
        raise DataLoadError(f"Failed to load {path.name}: {exc.strerror or exc}") from exc


def read_source_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Failed to load {path.name}: {exc}") from exc


# ---------------- Public API (Streamlit + FastAPI use) ----------------
@lru_cache(maxsize=4)
def _load_dashboard_data_cached(file_sig: Tuple[str, float]) -> Dict[str, object]:
    path = Path(file_sig[0])
    raw_rows = parse_csv(read_source_text(path))
    records = tuple(project_records(raw_rows))
    logger.info("Loaded %d records from %s", len(records), path)
    return {"source": str(path), "records": records, "raw_rows": len(raw_rows), "error": None}


_failed_loads: Dict[str, Dict[str, object]] = {}


def load_dashboard_data(path: Optional[Path] = None) -> Dict[str, object]:
    """Load the record set, reusing the cached projection while the file is unchanged.

    A failed load is reported through the returned "error" message with an
    empty record set. The failure sticks for that source until
    reload_dashboard_data() is called.
    """
    source = Path(path) if path is not None else get_data_path()
    failed = _failed_loads.get(str(source))
    if failed is not None:
        return failed
    try:
        return _load_dashboard_data_cached(file_signature(source))
    except DataLoadError as exc:
        logger.error("Error loading data: %s", exc)
        failed = {"source": str(source), "records": (), "raw_rows": 0, "error": str(exc)}
        _failed_loads[str(source)] = failed
        return failed


def clear_load_cache() -> None:
    _load_dashboard_data_cached.cache_clear()
    _failed_loads.clear()


def reload_dashboard_data(path: Optional[Path] = None) -> Dict[str, object]:
    clear_load_cache()
    return load_dashboard_data(path)
