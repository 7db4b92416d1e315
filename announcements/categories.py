# NOTE:
# - Keys are stored on Announcement.category; labels are shown by the frontend.
# - Order matters: the dashboard renders the filter chips in this order.
# - The model validates against CATEGORY_CHOICES; a new key needs a migration.

CATEGORIES = {
    "pengumuman": "Pengumuman Umum",
    "jadwal_sholat": "Info Waktu Sholat",
    "kajian": "Kajian & Pengajian",
    "ramadhan": "Ramadhan & Idul Fitri",
    "zakat": "Zakat & Infaq",
    "kegiatan": "Kegiatan Masjid",
    "donasi": "Donasi & Wakaf",
    "penting": "Pengumuman Penting",
}

DEFAULT_CATEGORY = "pengumuman"

CATEGORY_CHOICES = list(CATEGORIES.items())
