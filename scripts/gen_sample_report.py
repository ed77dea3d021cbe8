#!/usr/bin/env python3
"""Sample report generation for local runs of the delivery board.

Writes a synthetic report payload (``{"data": [...]}``) shaped like the
release report endpoint, including the awkward parts of the real data:
both item field spellings, free-text quantities, blank milestones and
mixed statuses.

    python scripts/gen_sample_report.py --rows 200 --output data/report.json
    python -m delivery_board.cli --input data/report.json --admin
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

CUSTOMERS = [
    ("86", "MasTec, Inc.", "P.O. Box 38, Clinton, IN 47842, USA"),
    ("112", "Acme Renewables LLC", "100 Main St, Austin, TX 78701, USA"),
    ("245", "Blue Sky Solar", "7 Harbor Rd, Portland, ME 04101, USA"),
    ("301", "Great Plains Wind Co.", "55 Prairie Ave, Salina, KS 67401, USA"),
]
MILESTONES = ["Union Ridge", "Phase 1", "Phase 2", "Substation", ""]
STATUSES = ["Done", "In Progress", "Open", "done", ""]
ITEMS = ["CMS Panel", "Fiber Spool", "Junction Box", "Cable Tray", "Ground Rod"]
QTY_TEXT = ["2 pallets", "TBD", "1 lot"]


def generate_rows(rows: int, seed: int = 42) -> list[dict[str, Any]]:
    """Generate ``rows`` synthetic report rows (reproducible for a seed)."""
    rng = np.random.default_rng(seed)
    due = pd.Timestamp("2025-08-01") + pd.to_timedelta(rng.integers(0, 120, rows), unit="D")

    out: list[dict[str, Any]] = []
    for i in range(rows):
        number, name, address = CUSTOMERS[int(rng.integers(0, len(CUSTOMERS)))]
        milestone = MILESTONES[int(rng.integers(0, len(MILESTONES)))]
        row: dict[str, Any] = {
            "Number": str(17000 + i),
            "Name": f"{name.split(',')[0]} {milestone or 'Misc'} release {i + 1}",
            "MilestoneName": milestone,
            "ProjectName": "Releases",
            "Type": "Releases",
            "Status": STATUSES[int(rng.integers(0, len(STATUSES)))],
            "DueDate": due[i].strftime("%m/%d/%Y 11:59:59 PM"),
            "CompletionDate": "",
            "ReleasesContractDate": due[i].strftime("%m/%d/%Y"),
            "CustomerName": name,
            "CustomerNumber": number,
            "CustomerAddressFullAddress": address,
            "QuoteShipToLocation": f"{name.split(',')[0]} - {milestone or 'Yard'}",
        }
        # item fields use both spellings seen in the real report
        for slot in range(1, int(rng.integers(1, 6)) + 1):
            item = ITEMS[int(rng.integers(0, len(ITEMS)))]
            if rng.random() < 0.5:
                row[f"ReleasesItemNo{slot}"] = item
                qty_field = f"ReleasesItemNo{slot}Qty"
            else:
                row[f"ReleasesItem{slot}Name"] = item
                qty_field = f"ReleasesItem{slot}Qty"
            roll = rng.random()
            if roll < 0.7:
                row[qty_field] = str(int(rng.integers(1, 50)))
            elif roll < 0.85:
                row[qty_field] = QTY_TEXT[int(rng.integers(0, len(QTY_TEXT)))]
            else:
                row[qty_field] = None
        out.append(row)
    return out


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Generate a synthetic release report JSON")
    p.add_argument("--rows", type=int, default=100, help="Number of rows")
    p.add_argument("--seed", type=int, default=42, help="Random seed")
    p.add_argument("--output", type=Path, default=Path("data/report.json"))
    args = p.parse_args(argv)

    if args.rows < 0:
        print("--rows must be >= 0", file=sys.stderr)
        return 1

    rows = generate_rows(args.rows, args.seed)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    payload = {"totalRecords": len(rows), "pageSize": 10000, "pageIndex": 0, "nextPage": None, "data": rows}
    args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"wrote {len(rows)} rows to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
