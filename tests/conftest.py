# Shared pytest fixtures
from __future__ import annotations
import json
import tempfile
from pathlib import Path
import pytest

from delivery_board.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("REPORT_API_URL", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """report_url: null
timeout_seconds: 5
max_item_slots: 5
date_fields: [DueDate, CompletionDate, ReleasesContractDate]
sort_field: DueDate
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "board.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def report_rows() -> list[dict]:
    return [
        {
            "Number": "17096",
            "Name": "MasTec Union Ridge CMS From AWD",
            "ReleasesBOLTrackingNumber": "https://parcelsapp.com/en/tracking/836689906",
            "MilestoneName": "Union Ridge",
            "Status": "Done",
            "DueDate": "08/26/2025 11:59:59 PM",
            "CompletionDate": "08/22/2025 01:12:22 PM",
            "ReleasesContractDate": "09/04/2025",
            "CustomerName": "MasTec, Inc.",
            "CustomerNumber": "86",
            "CustomerAddressFullAddress": "P.O. Box 38, Clinton, IN 47842, USA",
            "QuoteShipToLocation": "MasTec - Union Ridge",
            "ReleasesItemNo1": "CMS Panel",
            "ReleasesItem1Qty": "4",
        },
        {
            "Number": "17097",
            "Name": "MasTec Union Ridge fiber",
            "MilestoneName": "Union Ridge",
            "Status": "In Progress",
            "DueDate": "08/20/2025",
            "CustomerName": "MasTec, Inc.",
            "CustomerNumber": "86",
            "CustomerAddressFullAddress": "Other address",
            "ReleasesItem1Name": "Fiber Spool",
            "ReleasesItemNo1Qty": "2 pallets",
        },
        {
            "Number": "18001",
            "Name": "Acme phase 1",
            "MilestoneName": "Phase1",
            "Status": "Open",
            "CustomerName": "Acme Renewables LLC",
            "CustomerNumber": "112",
            "CustomerAddressFullAddress": "100 Main St, Austin, TX",
        },
        {
            "Number": "18002",
            "Name": "No milestone",
            "MilestoneName": "  ",
            "Status": "Open",
            "CustomerName": "Acme Renewables LLC",
            "CustomerNumber": "112",
        },
    ]


@pytest.fixture()
def write_report(temp_workdir: Path, report_rows: list[dict]) -> Path:
    path = temp_workdir / "data" / "report.json"
    path.write_text(json.dumps({"data": report_rows}), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()
