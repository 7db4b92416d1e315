"""
Management command: seed_demo
-----------------------------

Purpose:
    Creates the dashboard accounts, the stored prayer-time row and a handful
    of sample announcements so that a fresh database can be quickly populated
    for demos, dev testing, or onboarding.

Behavior:
    - Idempotent: uses get_or_create so running it multiple times will not
      create duplicate rows.
    - Accounts (password123):
        admin@masjid.com   → superuser (username "admin")
        takmir@masjid.com  → staff     (username "takmir")
    - Prayer-time row: the built-in default schedule without a manual Jumat
      (so Jumat follows dzuhur), only when none exists.
    - Six published announcements across the categories.

Usage:
    python manage.py seed_demo
    python manage.py seed_demo --password s3cret

Notes:
    * Not used in CI (tests create their own data).
"""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from announcements.models import Announcement
from prayer_times.constants import OVERRIDE_FIELDS, DEFAULT_SCHEDULE
from prayer_times.models import PrayerTimeOverride
from prayer_times.timeutils import parse_hhmm


ACCOUNTS = [
    {"username": "admin", "email": "admin@masjid.com", "first_name": "Admin Masjid", "is_superuser": True},
    {"username": "takmir", "email": "takmir@masjid.com", "first_name": "Takmir Masjid", "is_superuser": False},
]

SAMPLE_ANNOUNCEMENTS = [
    {
        "title": "Jadwal Sholat Jumat",
        "category": "jadwal_sholat",
        "content": (
            "<p>Assalamu'alaikum Warahmatullahi Wabarakatuh</p>"
            "<p>Mengingatkan kepada seluruh jamaah bahwa sholat Jumat akan dilaksanakan "
            "pada pukul <strong>11:30 WIB</strong>.</p>"
            "<p><strong>Khatib:</strong> Ustadz Ahmad Maulana</p>"
        ),
    },
    {
        "title": "Kajian Rutin Ba'da Maghrib",
        "category": "kajian",
        "content": (
            "<p>Kajian rutin setiap hari <strong>Senin dan Kamis</strong> ba'da sholat Maghrib.</p>"
            "<ul><li>Fiqih Ibadah</li><li>Tafsir Al-Quran</li><li>Hadits Pilihan</li></ul>"
            "<p>Pemateri: Ustadz Abdullah Hakim</p>"
        ),
    },
    {
        "title": "Pengumuman Pembayaran Zakat Fitrah",
        "category": "zakat",
        "content": (
            "<p>Pembayaran <strong>Zakat Fitrah</strong> dapat dilakukan langsung ke Sekretariat "
            "Masjid atau transfer ke rekening masjid.</p>"
            "<p>Besaran: <strong>Rp 45.000/jiwa</strong> atau <strong>2.5 kg beras</strong></p>"
        ),
    },
    {
        "title": "Kegiatan Buka Puasa Bersama",
        "category": "ramadhan",
        "content": (
            "<p>Masjid mengadakan <strong>Buka Puasa Bersama</strong> setiap hari selama bulan Ramadhan.</p>"
            "<p>Jamaah yang ingin menjadi donatur dapat menghubungi pengurus masjid.</p>"
        ),
    },
    {
        "title": "Renovasi Tempat Wudhu",
        "category": "pengumuman",
        "content": (
            "<p>Selama <strong>renovasi tempat wudhu</strong>, jamaah dapat menggunakan tempat wudhu "
            "sementara di sebelah barat masjid.</p>"
        ),
    },
    {
        "title": "Santunan Anak Yatim",
        "category": "donasi",
        "content": (
            "<p>Kegiatan <strong>Santunan Anak Yatim</strong> di Aula Masjid, 08.00 - 11.00 WIB.</p>"
            "<p>Bantuan dapat disalurkan melalui sekretariat masjid.</p>"
        ),
    },
]


class Command(BaseCommand):
    help = "Create dashboard accounts, the stored prayer-time row and sample announcements (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="password123", help="Password for newly created accounts")

    @transaction.atomic
    def handle(self, *args, **options):
        User = get_user_model()
        admin = None

        for spec in ACCOUNTS:
            user, created = User.objects.get_or_create(
                email=spec["email"],
                defaults={
                    "username": spec["username"],
                    "first_name": spec["first_name"],
                    "is_staff": True,
                    "is_superuser": spec["is_superuser"],
                },
            )
            if created:
                user.set_password(options["password"])
                user.save()
                self.stdout.write(self.style.SUCCESS(f"Created {spec['email']} / {options['password']}"))
            else:
                self.stdout.write(f"{spec['email']} already exists.")
            admin = admin or user

        if PrayerTimeOverride.current() is None:
            PrayerTimeOverride.objects.create(
                updated_by=admin,
                # jumat stays empty so it is derived from dzuhur until an admin sets it
                **{name: parse_hhmm(DEFAULT_SCHEDULE[name]) for name in OVERRIDE_FIELDS if name != "jumat"},
            )
            self.stdout.write(self.style.SUCCESS("Seeded stored prayer times."))
        else:
            self.stdout.write("Stored prayer times already exist.")

        now = timezone.now()
        created = 0
        for item in SAMPLE_ANNOUNCEMENTS:
            _, made = Announcement.objects.get_or_create(
                title=item["title"],
                category=item["category"],
                defaults={"content": item["content"], "is_active": True, "publish_at": now},
            )
            created += 1 if made else 0

        self.stdout.write(self.style.SUCCESS(f"Seeded {created} announcement(s)."))
