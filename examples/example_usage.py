"""Ví dụ: dùng service layer (không qua Flask).

Controllers chỉ là lớp mỏng, nghiệp vụ nằm ở Services.
"""

import importlib

from config import get_settings_module

from src.student_attendance.student_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, timezone=settings.TIMEZONE)

    for row in container.attendance_service.student_overview():
        print(row)

    print("daily fee:", container.settings_service.get_daily_fee())


if __name__ == "__main__":
    main()
