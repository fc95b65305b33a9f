"""Example: drive the service layer directly (no Flask).

Clocks an employee in and out with explicit timestamps, then prints the
weekly aggregate.
"""

from datetime import datetime

from src.hr_timeclock.hr_timeclock.container import build_container
from src.hr_timeclock.hr_timeclock.timeclock.model import entry_to_dict, weekly_to_dict


def main():
    container = build_container(store_backend="memory")
    svc = container.time_tracking_service

    svc.clock_in(1, now=datetime(2026, 2, 2, 9, 0))
    entry = svc.clock_out(1, now=datetime(2026, 2, 2, 17, 30))
    print(entry_to_dict(entry))

    week_start = svc.week_start_for(entry.work_date)
    print(weekly_to_dict(svc.get_weekly_hours(1, week_start)))


if __name__ == "__main__":
    main()
