"""
Utilities for loading purchase interactions from CSV or demo data.
"""

import logging
from typing import Any, Dict, List, Optional
from pathlib import Path
import pandas as pd # type: ignore

from .config import INTERACTIONS_CSV

LOGGER = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"user_id", "item_id"}


def load_interactions(path: Optional[Path] = None, sep: str = ",") -> List[Dict[str, Any]]:
    """
    Loads user–item purchase interactions used by the recommender.

    Expected schema (implicit feedback):
        user_id   : int or str
        item_id   : int or str
    Any other column (rating, timestamp, ...) is ignored.

    Priority:
    1. CSV file (if exists)
    2. Demo data
    """
    path = Path(path) if path is not None else INTERACTIONS_CSV

    if path.exists():
        return _load_from_csv(path, sep)

    LOGGER.info("No interaction file at %s, using demo data", path)
    return _load_demo_data()


def _clean(value: Any) -> Any:
    if pd.isna(value):
        return None
    value = str(value).strip()
    # "10" -> 10 so ids compare like the demo data; "007" and "10.0" stay strings
    try:
        number = int(value)
    except ValueError:
        return value
    return number if str(number) == value else value


def _load_from_csv(path: Path, sep: str = ",") -> List[Dict[str, Any]]:
    """
    Load interactions from a delimited file (comma by default, pass sep="\\t" for TSV).

    Every column is read as text so ids are never coerced by type inference.
    Rows with empty cells come back with None so the store's malformed-record
    policy decides what happens to them.
    """
    df = pd.read_csv(path, sep=sep, skipinitialspace=True, dtype=str)
    df.columns = [str(col).strip() for col in df.columns]

    if not REQUIRED_COLUMNS.issubset(df.columns):
        raise ValueError(
            f"CSV must contain columns {sorted(REQUIRED_COLUMNS)}, "
            f"found {sorted(df.columns)}"
        )

    records = [
        {"user_id": _clean(user_id), "item_id": _clean(item_id)}
        for user_id, item_id in zip(df["user_id"], df["item_id"])
    ]
    LOGGER.info("Read %d interaction rows from %s", len(records), path)
    return records


def _load_demo_data() -> List[Dict[str, Any]]:
    """
    Small purchase log for local testing and demos.
    """
    return [
        {"user_id": 101, "item_id": "A"},
        {"user_id": 101, "item_id": "B"},
        {"user_id": 102, "item_id": "A"},
        {"user_id": 102, "item_id": "B"},
        {"user_id": 102, "item_id": "C"},
        {"user_id": 103, "item_id": "C"},
        {"user_id": 103, "item_id": "D"},
    ]
