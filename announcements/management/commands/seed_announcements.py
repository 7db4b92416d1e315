import json
from pathlib import Path
from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_datetime
from announcements.categories import CATEGORIES, DEFAULT_CATEGORY
from announcements.models import Announcement

class Command(BaseCommand):
    help = "Seed Announcement rows from a JSON file (idempotent on title + category)."

    def add_arguments(self, parser):
        parser.add_argument("json_path", type=str, help="Path to announcements JSON")

    def handle(self, *args, **opts):
        path = Path(opts["json_path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CommandError(f"Invalid JSON in {path}: {exc}")
        items = data if isinstance(data, list) else data.get("data", [])
        created = 0
        for x in items:
            category = x.get("category") or DEFAULT_CATEGORY
            if category not in CATEGORIES:
                self.stdout.write(self.style.WARNING(f"Skipping {x.get('title')!r}: unknown category {category!r}"))
                continue
            publish_at = x.get("publish_at")
            obj, made = Announcement.objects.get_or_create(
                title=x.get("title", ""),
                category=category,
                defaults=dict(
                    content=x.get("content", ""),
                    publish_at=parse_datetime(publish_at) if publish_at else None,
                    is_active=x.get("is_active", True),
                ),
            )
            created += 1 if made else 0
        self.stdout.write(self.style.SUCCESS(f"Seeded {created} announcement(s)."))
