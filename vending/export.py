"""One-shot CSV export of the catalog."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable

from vending.config import CURRENCY_CODE, resolve_export_path
from vending.models import Item

logger = logging.getLogger(__name__)

CSV_HEADER = ("Item Number", "Item Name", f"Price ({CURRENCY_CODE})", "Stock Left")


def export_catalog_csv(items: Iterable[Item], path: Path | str | None = None) -> Path:
    """Write every item as a fully quoted CSV row and return the file path."""
    target = Path(path) if path is not None else resolve_export_path()
    target.parent.mkdir(parents=True, exist_ok=True)

    rows = 0
    with target.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for item in items:
            writer.writerow((item.item_id, item.name, f"{item.price:.2f}", item.stock))
            rows += 1

    logger.info("catalog exported path=%s rows=%s", target, rows)
    return target
