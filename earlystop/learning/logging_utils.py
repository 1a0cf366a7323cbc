from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Optional, Tuple

_TRUE = {"1", "true", "t", "yes", "y"}
_FALSE = {"0", "false", "f", "no", "n", ""}


def append_csv_row(path: str | Path, row: Dict) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    write_header = not p.exists()
    with p.open("a", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(row.keys()))
        if write_header:
            w.writeheader()
        w.writerow(row)


def _parse_flag(value: str, line: int) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"line {line}: cannot read is_training value {value!r}")


def read_loss_log(path: str | Path) -> Tuple[List[float], Optional[List[bool]]]:
    """Read a loss log CSV with a `loss` column and optional `is_training` column.

    Returns (losses, is_training); is_training is None when the column is absent.
    """
    p = Path(path)
    with p.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        fields = reader.fieldnames or []
        if "loss" not in fields:
            raise ValueError(f"{p} has no 'loss' column (columns: {fields})")
        has_flags = "is_training" in fields
        losses: List[float] = []
        flags: List[bool] = []
        for i, row in enumerate(reader, start=2):
            losses.append(float(row["loss"]))  # float() accepts 'nan' and 'inf'
            if has_flags:
                flags.append(_parse_flag(row["is_training"] or "", i))
    return losses, (flags if has_flags else None)
