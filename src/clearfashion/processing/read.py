"""Raw record files: JSON (array or API envelope), JSON lines, CSV."""

import json
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from ..utils.logging import get_logger

logger = get_logger(__name__)

ENVELOPE_KEYS = ("products", "result", "data")
CSV_ENCODINGS = ("utf-8-sig", "utf-8", "cp1252", "latin1")


def _sanitize_column_name(name: Any) -> str:
    return str(name).replace("\ufeff", "").strip().lower()


def _unwrap(payload: Any) -> List[Dict[str, Any]]:
    """Bare list, or an API envelope such as ``{"data": {"result": [...]}}``."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ENVELOPE_KEYS:
            if key in payload:
                return _unwrap(payload[key])
    raise ValueError("no record list found in JSON payload")


def read_csv_robust(path: Path) -> pd.DataFrame:
    """Read CSV with encoding fallbacks and auto delimiter detection."""
    last_error: Exception | None = None
    for encoding in CSV_ENCODINGS:
        try:
            df = pd.read_csv(
                path,
                encoding=encoding,
                sep=None,
                engine="python",
                on_bad_lines="skip",
                dtype=str,
                keep_default_na=False,
            )
            df.columns = [_sanitize_column_name(c) for c in df.columns]
            return df
        except UnicodeDecodeError as e:
            last_error = e
    assert last_error is not None
    raise last_error


def read_records(path) -> List[Dict[str, Any]]:
    """Load raw records from ``path``; the suffix picks the format."""
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        records = _unwrap(json.loads(path.read_text(encoding="utf-8")))
    elif suffix in (".jsonl", ".ndjson"):
        records = [
            json.loads(line)
            for line in path.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]
    elif suffix == ".csv":
        df = read_csv_robust(path)
        records = df.to_dict(orient="records")
    else:
        raise ValueError(f"unsupported record file: {path.name}")

    logger.info("[OK] %s: %d raw records", path.name, len(records))
    return records
