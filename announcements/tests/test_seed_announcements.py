import json
import tempfile
from io import StringIO
from pathlib import Path

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from announcements.models import Announcement


class SeedAnnouncementsCommandTests(TestCase):
    def _write(self, payload):
        tmp = tempfile.NamedTemporaryFile("w", suffix=".json", delete=False, encoding="utf-8")
        with tmp:
            json.dump(payload, tmp)
        self.addCleanup(Path(tmp.name).unlink)
        return tmp.name

    def test_imports_rows_once(self):
        path = self._write({"data": [
            {"title": "Kajian Subuh", "content": "Tiap Ahad", "category": "kajian"},
            {"title": "Info Umum", "content": "Tanpa kategori"},
            {"title": "Draft", "content": "x", "category": "kegiatan", "is_active": False,
             "publish_at": "2030-01-01T08:00:00+07:00"},
            {"title": "Salah", "content": "x", "category": "gosip"},
        ]})
        out = StringIO()
        call_command("seed_announcements", path, stdout=out)
        call_command("seed_announcements", path, stdout=out)

        self.assertEqual(Announcement.objects.count(), 3)
        self.assertEqual(Announcement.objects.get(title="Info Umum").category, "pengumuman")
        draft = Announcement.objects.get(title="Draft")
        self.assertFalse(draft.is_active)
        self.assertEqual(draft.publish_at.year, 2030)
        self.assertIn("unknown category 'gosip'", out.getvalue())

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            call_command("seed_announcements", "/nonexistent/announcements.json")
