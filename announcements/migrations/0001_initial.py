import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Announcement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(help_text='Headline shown on the feed.', max_length=255)),
                ('content', models.TextField(help_text='Body text; basic HTML from the dashboard editor is allowed.')),
                ('category', models.CharField(choices=[('pengumuman', 'Pengumuman Umum'), ('jadwal_sholat', 'Info Waktu Sholat'), ('kajian', 'Kajian & Pengajian'), ('ramadhan', 'Ramadhan & Idul Fitri'), ('zakat', 'Zakat & Infaq'), ('kegiatan', 'Kegiatan Masjid'), ('donasi', 'Donasi & Wakaf'), ('penting', 'Pengumuman Penting')], db_index=True, default='pengumuman', max_length=32)),
                ('image', models.FileField(blank=True, null=True, upload_to='announcements/', validators=[django.core.validators.FileExtensionValidator(allowed_extensions=['jpeg', 'jpg', 'png', 'gif', 'webp'])])),
                ('video', models.FileField(blank=True, null=True, upload_to='announcements/videos/', validators=[django.core.validators.FileExtensionValidator(allowed_extensions=['mp4', 'webm', 'ogg', 'mov'])])),
                ('media_type', models.CharField(choices=[('none', 'None'), ('image', 'Image'), ('video', 'Video')], default='none', max_length=8)),
                ('publish_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
    ]
