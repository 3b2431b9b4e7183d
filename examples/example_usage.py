"""Example: drive the mark-attendance sheet through the service layer (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.attendance_desk.attendance_desk.container import build_container
from src.attendance_desk.attendance_desk.core.enums import LateDecision


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(api_config=settings.API_CONFIG, attendance_config=settings.ATTENDANCE_CONFIG)

    sheet = container.sheet_service
    sheet.select_day(date.today())
    sheet.load()

    if sheet.set_check_in("demo-employee", "09:12"):
        sheet.resolve_late_prompt(LateDecision.MARK_LATE)
    sheet.set_check_out("demo-employee", "17:45")

    for row in sheet.rows():
        print(row.to_dict())


if __name__ == "__main__":
    main()
