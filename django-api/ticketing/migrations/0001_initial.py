import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("venue", models.CharField(max_length=255)),
                ("starts_at", models.DateTimeField()),
                ("total_seats", models.PositiveIntegerField()),
                ("available_seats", models.PositiveIntegerField()),
                ("ticket_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["starts_at"],
                "indexes": [
                    models.Index(fields=["starts_at"], name="ticketing_e_starts__6b1f0d_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(available_seats__lte=models.F("total_seats")),
                        name="event_available_within_total",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(total_seats__gte=1),
                        name="event_total_seats_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("event_id", models.UUIDField(db_index=True)),
                ("user_id", models.CharField(db_index=True, max_length=64)),
                ("number_of_seats", models.PositiveIntegerField()),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "reference_code",
                    models.CharField(editable=False, max_length=64, unique=True),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("confirmed", "Confirmed"),
                            ("cancelled", "Cancelled"),
                            ("used", "Used"),
                        ],
                        default="confirmed",
                        max_length=16,
                    ),
                ),
                ("booked_at", models.DateTimeField()),
                ("checked_in_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-booked_at"],
                "indexes": [
                    models.Index(
                        fields=["user_id", "-booked_at"],
                        name="ticketing_b_user_id_3c9a2e_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(number_of_seats__gte=1),
                        name="booking_seats_positive",
                    ),
                ],
            },
        ),
    ]
