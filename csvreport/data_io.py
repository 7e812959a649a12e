# csvreport/data_io.py
from __future__ import annotations
from typing import Any, Dict, List
import io
from pathlib import Path

import pandas as pd

from csvreport.errors import SchemaError

__all__ = [
    "read_rows",      # CSV upload -> list of row dicts (all values as strings)
    "upload_size",
]


# ============== Public API ==============

def read_rows(upload) -> List[Dict[str, str]]:
    """
    Parse a CSV (path, bytes or file-like such as a Streamlit UploadedFile)
    into rows keyed by the header line.

    Values stay strings: no NA inference, no dtype guessing, whitespace
    trimmed. Blank cells come back as "" so typing is decided downstream.
    """
    raw = _to_bytes(upload)
    if not raw.strip():
        raise SchemaError(f"'{_get_name(upload)}' is empty.")
    try:
        df = pd.read_csv(
            io.BytesIO(raw),
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skipinitialspace=True,
            encoding="utf-8-sig",
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise SchemaError(f"Could not parse '{_get_name(upload)}' as CSV: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    dupes = sorted({c for c in df.columns if list(df.columns).count(c) > 1})
    if dupes:
        raise SchemaError(f"'{_get_name(upload)}' has duplicate column names: {dupes}")
    return [
        {col: str(val).strip() for col, val in rec.items()}
        for rec in df.to_dict(orient="records")
    ]


def upload_size(upload) -> int:
    """Size in bytes, without consuming the stream."""
    if hasattr(upload, "size") and isinstance(upload.size, int):
        return upload.size
    return len(_to_bytes(upload))


# ============== Internals ==============

def _get_name(upload) -> str:
    if hasattr(upload, "name") and isinstance(upload.name, str):
        return upload.name
    if isinstance(upload, (str, Path)):
        return str(upload)
    return "uploaded"


def _to_bytes(upload: Any) -> bytes:
    if isinstance(upload, (str, Path)):
        with open(upload, "rb") as f:
            return f.read()
    if isinstance(upload, (bytes, bytearray)):
        return bytes(upload)
    if hasattr(upload, "getvalue"):
        return upload.getvalue()
    if hasattr(upload, "read"):
        pos = upload.tell() if hasattr(upload, "tell") else 0
        try:
            return upload.read()
        finally:
            if hasattr(upload, "seek"):
                upload.seek(pos or 0)
    raise TypeError("Unsupported upload type")
