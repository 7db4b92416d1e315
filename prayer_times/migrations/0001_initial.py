import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PrayerTimeOverride',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('subuh', models.TimeField(blank=True, null=True)),
                ('dzuhur', models.TimeField(blank=True, null=True)),
                ('ashar', models.TimeField(blank=True, null=True)),
                ('maghrib', models.TimeField(blank=True, null=True)),
                ('isya', models.TimeField(blank=True, null=True)),
                ('jumat', models.TimeField(blank=True, help_text='Leave empty to derive the Friday prayer from dzuhur (30 minutes earlier).', null=True)),
                ('imsak', models.TimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='prayer_time_updates', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Prayer time override',
                'verbose_name_plural': 'Prayer time overrides',
            },
        ),
    ]
