"""Example: calling the service layer directly (no Flask).

Controllers stay thin; the rules live in the services.
"""

import importlib

from config import get_settings_module

from src.timeclock.timeclock.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for department in container.department_service.list_departments():
        print(department.to_dict())

    report = container.schedule_service.check_user_conflicts(user_id=3)
    for conflict in report.conflicts:
        print(conflict.describe())


if __name__ == "__main__":
    main()
