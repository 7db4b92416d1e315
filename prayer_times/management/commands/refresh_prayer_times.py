"""
Management command: refresh_prayer_times
----------------------------------------

Purpose:
    Drop today's cached prayer schedule and resolve it again (external APIs
    first, then stored/default times). Handy from cron shortly after midnight
    or from a shell when an API was down earlier.

Usage:
    python manage.py refresh_prayer_times
"""
from django.core.management.base import BaseCommand

from prayer_times.constants import SCHEDULE_FIELDS
from prayer_times.resolver import get_resolver


class Command(BaseCommand):
    help = "Re-fetch today's prayer times and print the resolved schedule."

    def handle(self, *args, **options):
        schedule = get_resolver().force_refresh()
        data = schedule["data"]
        for name in SCHEDULE_FIELDS:
            self.stdout.write(f"{name:>8}: {data.get(name) or '-'}")

        message = f"{schedule['date']} source={schedule['source']} jumat={schedule['jumat_source']}"
        if schedule["source"] in ("database", "default"):
            self.stdout.write(self.style.WARNING(f"External APIs unavailable; {message}"))
        else:
            self.stdout.write(self.style.SUCCESS(message))
