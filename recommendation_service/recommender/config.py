"""
Runtime settings, read from the environment.

    RECOMMENDER_DATA_PATH     CSV of user_id,item_id pairs
    RECOMMENDER_METRIC        tanimoto | jaccard | cosine
    RECOMMENDER_THRESHOLD     minimum neighbor similarity
    RECOMMENDER_TOP_K         neighborhood size cap (unset = unlimited)
    RECOMMENDER_ON_MALFORMED  raise | skip
    RPYC_HOST / RPYC_PORT     where the RPyC service listens
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import InvalidArgumentError

# Default path where interaction data can live
DATA_DIR = Path(__file__).parent / "data"
INTERACTIONS_CSV = DATA_DIR / "interactions.csv"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 18861


def _read_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidArgumentError(f"{key} must be a number, got {raw!r}") from None


def _read_int(environ: Mapping[str, str], key: str, default: Optional[int]) -> Optional[int]:
    raw = environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidArgumentError(f"{key} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    data_path: Path = INTERACTIONS_CSV
    metric: str = "tanimoto"
    threshold: float = 0.0
    top_k: Optional[int] = None
    on_malformed: str = "raise"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        data_path = env.get("RECOMMENDER_DATA_PATH")
        return cls(
            data_path=Path(data_path).expanduser() if data_path else INTERACTIONS_CSV,
            metric=env.get("RECOMMENDER_METRIC", "tanimoto"),
            threshold=_read_float(env, "RECOMMENDER_THRESHOLD", 0.0),
            top_k=_read_int(env, "RECOMMENDER_TOP_K", None),
            on_malformed=env.get("RECOMMENDER_ON_MALFORMED", "raise"),
            host=env.get("RPYC_HOST", DEFAULT_HOST),
            port=_read_int(env, "RPYC_PORT", DEFAULT_PORT),
        )
