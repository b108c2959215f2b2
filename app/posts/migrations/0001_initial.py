import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

REVIEW_STATUS_CHOICES = [
    ("RECEIVED", "Received"),
    ("IN_REVIEW", "In Review"),
    ("NEED_INFO", "Need Info"),
    ("APPROVED", "Approved"),
    ("REJECTED", "Rejected"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("sites", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Post",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("HAZARD", "Hazard"),
                            ("UNSAFE_BEHAVIOR", "Unsafe Behavior"),
                            ("INCONVENIENCE", "Inconvenience"),
                            ("SUGGESTION", "Suggestion"),
                            ("BEST_PRACTICE", "Best Practice"),
                        ],
                        max_length=30,
                    ),
                ),
                (
                    "hazard_type",
                    models.CharField(blank=True, default="", max_length=100),
                ),
                (
                    "risk_level",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("HIGH", "High"),
                            ("MEDIUM", "Medium"),
                            ("LOW", "Low"),
                        ],
                        max_length=10,
                        null=True,
                    ),
                ),
                (
                    "location_floor",
                    models.CharField(blank=True, default="", max_length=50),
                ),
                (
                    "location_zone",
                    models.CharField(blank=True, default="", max_length=50),
                ),
                (
                    "location_detail",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("content", models.TextField()),
                (
                    "visibility",
                    models.CharField(
                        choices=[
                            ("WORKER_PUBLIC", "Visible to workers"),
                            ("ADMIN_ONLY", "Admins only"),
                        ],
                        default="WORKER_PUBLIC",
                        max_length=20,
                    ),
                ),
                ("is_anonymous", models.BooleanField(default=False)),
                (
                    "review_status",
                    models.CharField(
                        choices=REVIEW_STATUS_CHOICES,
                        default="RECEIVED",
                        max_length=20,
                    ),
                ),
                (
                    "action_status",
                    models.CharField(
                        choices=[
                            ("NONE", "None"),
                            ("REQUIRED", "Required"),
                            ("ASSIGNED", "Assigned"),
                            ("IN_PROGRESS", "In Progress"),
                            ("DONE", "Done"),
                            ("REOPENED", "Reopened"),
                        ],
                        default="NONE",
                        max_length=20,
                    ),
                ),
                ("is_urgent", models.BooleanField(default=False)),
                (
                    "created_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="post_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "site",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="post_set",
                        to="sites.site",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["site", "review_status"],
                        name="posts_site_review_status_idx",
                    ),
                    models.Index(
                        fields=["site", "created_at"],
                        name="posts_site_created_at_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Review",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("APPROVE", "Approve"),
                            ("REJECT", "Reject"),
                            ("REQUEST_MORE", "Request More"),
                            ("MARK_URGENT", "Mark Urgent"),
                            ("ASSIGN", "Assign"),
                            ("CLOSE", "Close"),
                        ],
                        max_length=20,
                    ),
                ),
                ("comment", models.TextField(blank=True, default="")),
                (
                    "reason_code",
                    models.CharField(blank=True, default="", max_length=50),
                ),
                (
                    "from_review_status",
                    models.CharField(
                        choices=REVIEW_STATUS_CHOICES, max_length=20
                    ),
                ),
                (
                    "to_review_status",
                    models.CharField(
                        choices=REVIEW_STATUS_CHOICES, max_length=20
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "admin",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reviews_given",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "post",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reviews",
                        to="posts.post",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
