"""Run the irregularity sweep for one day (default: today).

Usage: python scripts/audit_day.py [YYYY-MM-DD]
Meant for cron or a manual trigger; do not run two sweeps at once.
"""

from __future__ import annotations

import importlib
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.rfid_attendance.rfid_attendance.common.datetime_utils import parse_iso_date
from src.rfid_attendance.rfid_attendance.container import build_container
from src.rfid_attendance.rfid_attendance.core.settings import EngineSettings
from src.rfid_attendance.rfid_attendance.main import configure_logging


def main(argv: list[str]) -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    audit_date = parse_iso_date(argv[1]) if len(argv) > 1 else date.today()
    container = build_container(db_config=dict(settings.DB_CONFIG), settings=EngineSettings.from_module(settings))
    try:
        found = container.auditor.audit_day(audit_date)
    finally:
        container.dispatcher.shutdown()
    print(f"OK: {found} irregularities found for {audit_date.isoformat()}")


if __name__ == "__main__":
    main(sys.argv)
