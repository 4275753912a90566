"""
Generation of the per-asset transfer report.

The :func:`generate_transfer_report_csv` helper writes one row per asset
processed by a run, including the staged file left behind by a failed
upload, so that orphaned files can be cleaned up or re-uploaded by hand.
"""

from __future__ import annotations

import csv
import os
from typing import Iterable


def generate_transfer_report_csv(outcomes: Iterable, *, out_path: str = "reports/asset_transfer.csv") -> str:
    """Generate a CSV describing the outcome of every asset.

    Parameters
    ----------
    outcomes:
        Iterable of objects exposing ``key``, ``status``, ``code``,
        ``message`` and ``staged_path`` attributes.
    out_path:
        Location of the CSV file to be written.  The parent directory is
        created automatically.

    Returns
    -------
    str
        The path of the generated CSV file.
    """
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["Key", "Status", "Code", "Message", "StagedFile"])
        for outcome in outcomes:
            writer.writerow([
                outcome.key,
                outcome.status,
                outcome.code or "",
                outcome.message or "",
                outcome.staged_path or "",
            ])
    return out_path
