import decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("apartments", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("guest_name", models.CharField(max_length=255)),
                ("guest_email", models.EmailField(max_length=254)),
                ("guest_phone", models.CharField(max_length=50)),
                ("check_in", models.DateField()),
                (
                    "check_out",
                    models.DateField(help_text="Exclusive: the guest's last night is the day before."),
                ),
                ("num_guests", models.PositiveSmallIntegerField()),
                (
                    "total_amount",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        editable=False,
                        help_text="Nights × price per night, fixed when the booking was made.",
                        max_digits=12,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("confirmed", "Confirmed"), ("cancelled", "Cancelled"), ("completed", "Completed")],
                        default="confirmed",
                        max_length=20,
                    ),
                ),
                ("special_requests", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "apartment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="apartments.apartment",
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(check_out__gt=models.F("check_in")),
                        name="booking_valid_dates",
                    ),
                ],
                "indexes": [
                    models.Index(
                        fields=["apartment", "status", "check_in", "check_out"],
                        name="booking_apartment_range_idx",
                    ),
                    models.Index(fields=["status"], name="booking_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BlockedDate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "apartment",
                    models.ForeignKey(
                        blank=True,
                        help_text="Leave empty to block the date for every apartment.",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="blocked_dates",
                        to="apartments.apartment",
                    ),
                ),
            ],
            options={
                "verbose_name": "Blocked date",
                "verbose_name_plural": "Blocked dates",
                "ordering": ["date", "id"],
                "indexes": [
                    models.Index(fields=["apartment", "date"], name="blocked_date_apartment_idx"),
                ],
            },
        ),
    ]
