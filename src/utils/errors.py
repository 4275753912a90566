"""
Result type and structured logging helpers for asset transfers.

Every network or filesystem step of the migration returns a :class:`Result`
instead of raising, so the orchestrator can decide what is fatal and what is
only recorded.  Per-asset events are additionally appended to JSON Lines
files under ``reports/migration`` so that a run can be reviewed afterwards.

Two public logging functions are provided:

``report_error``
    Record a failed step for an asset.

``report_ok``
    Record a successful step for an asset.  Additional key/value information
    can be attached to the entry via the ``extra`` parameter.

The ``ERRORS`` dictionary maps event codes to human readable messages.
Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")

# Failure kinds carried by Result.failure().
CONFIG = "CONFIG"
NETWORK = "NETWORK"
HTTP_STATUS = "HTTP_STATUS"
PARSE = "PARSE"
NOT_FOUND = "NOT_FOUND"
STAGING = "STAGING"

ERROR_KINDS = (CONFIG, NETWORK, HTTP_STATUS, PARSE, NOT_FOUND, STAGING)

ERRORS: Dict[str, str] = {
    "ASSET_DOWNLOAD": "Failed to download asset from source store",
    "ASSET_UPLOAD": "Failed to upload asset to destination store",
    "ASSET_SKIPPED": "Asset has no public URL",
    "ASSET_LIMITED": "Asset beyond the configured limit",
    "ASSET_DRY_RUN": "Asset would be migrated (dry-run)",
    "ASSET_MIGRATED": "Asset migrated successfully",
}

_REPORT_DIR = os.path.join("reports", "migration")
_ERROR_LOG = os.path.join(_REPORT_DIR, "errors.jsonl")
_OK_LOG = os.path.join(_REPORT_DIR, "success.jsonl")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of one operation: either a value or a failure kind and message."""

    ok: bool
    value: Optional[T] = None
    kind: Optional[str] = None
    message: str = ""

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: str, message: str) -> "Result[T]":
        if kind not in ERROR_KINDS:
            raise ValueError(f"Unknown failure kind: {kind}")
        return cls(ok=False, kind=kind, message=message)

    def __bool__(self) -> bool:
        return self.ok


def _write_jsonl(path: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``path``."""
    os.makedirs(_REPORT_DIR, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.write("\n")


def report_error(code: str, key: str, detail: Optional[str] = None) -> None:
    """Log an error event for the asset identified by ``key``.

    Parameters
    ----------
    code:
        A key identifying the type of error.  If ``code`` is present in
        :data:`ERRORS` its value will be used as the message.
    key:
        The asset key the error belongs to.
    detail:
        Optional failure message, usually :attr:`Result.message`.
    """
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {"code": code, "message": message, "key": key}
    if detail:
        entry["error"] = detail
    print(f"[ERROR] {message} - {key}")
    _write_jsonl(_ERROR_LOG, entry)


def report_ok(code: str, key: str, extra: Optional[Dict[str, Any]] = None) -> None:
    """Log a successful event for the asset identified by ``key``."""
    message = ERRORS.get(code, code)
    entry: Dict[str, Any] = {"code": code, "message": message, "key": key}
    if extra:
        entry.update(extra)
    print(f"[OK] {message} - {key}")
    _write_jsonl(_OK_LOG, entry)
