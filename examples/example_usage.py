"""Example: record a scan through the service layer (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

import importlib

from config import get_settings_module

from src.rfid_attendance.rfid_attendance.container import build_container
from src.rfid_attendance.rfid_attendance.core.exceptions import ScanRejected
from src.rfid_attendance.rfid_attendance.core.settings import EngineSettings


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=EngineSettings.from_module(settings))
    try:
        result = container.recorder.record_scan("1234567890", classroom_id=1)
        print(result.teacher.name, result.direction.value, result.status.value, result.note or "")
    except ScanRejected as e:
        print(f"rejected ({e.code}): {e}")
    finally:
        container.dispatcher.shutdown()


if __name__ == "__main__":
    main()
