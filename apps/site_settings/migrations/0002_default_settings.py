# apps/site_settings/migrations/0002_default_settings.py

from django.db import migrations


DEFAULT_SETTINGS = {
    'terms_and_conditions': (
        'By booking this apartment, you agree to our terms and conditions including '
        'check-in/check-out times, cancellation policy, and property rules.'
    ),
    'cancellation_policy': (
        'Free cancellation up to 48 hours before check-in. '
        'Cancellations within 48 hours are subject to a 50% fee.'
    ),
    'check_in_time': '14:00',
    'check_out_time': '12:00',
}


def create_default_settings(apps, schema_editor):
    SiteSetting = apps.get_model('site_settings', 'SiteSetting')

    for key, value in DEFAULT_SETTINGS.items():
        SiteSetting.objects.get_or_create(key=key, defaults={'value': value})


def remove_default_settings(apps, schema_editor):
    SiteSetting = apps.get_model('site_settings', 'SiteSetting')
    SiteSetting.objects.filter(key__in=DEFAULT_SETTINGS).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('site_settings', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_default_settings, remove_default_settings),
    ]
