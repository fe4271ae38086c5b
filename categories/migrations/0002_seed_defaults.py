from django.db import migrations

CATEGORIES = [
    ("News", "Latest news and updates", "announcement"),
    ("Updates", "System and service updates", "announcement"),
    ("Alerts", "Important alerts and notifications", "announcement"),
    ("Jobs", "Job opportunities and vacancies", "opportunity"),
    ("Contracts", "Contract opportunities", "opportunity"),
    ("Tenders", "Tender announcements", "opportunity"),
    ("Grants", "Grant opportunities", "opportunity"),
    ("Meetings", "Community meetings and gatherings", "event"),
    ("Workshops", "Training and skill development workshops", "event"),
    ("Ceremonies", "Official ceremonies and celebrations", "event"),
    ("Community Events", "Local community events and activities", "event"),
]

STATUSES = [
    ("Planned", "Planned or scheduled"),
    ("Ongoing", "Work in progress"),
    ("Completed", "Work completed"),
    ("On Hold", "Temporarily paused"),
    ("Cancelled", "Work cancelled"),
]


def seed(apps, schema_editor):
    Category = apps.get_model("categories", "Category")
    Status = apps.get_model("categories", "Status")
    for name, description, type_ in CATEGORIES:
        Category.objects.update_or_create(name=name, type=type_, defaults={"description": description})
    for name, description in STATUSES:
        Status.objects.update_or_create(name=name, defaults={"description": description})


def unseed(apps, schema_editor):
    Category = apps.get_model("categories", "Category")
    Status = apps.get_model("categories", "Status")
    for name, _, type_ in CATEGORIES:
        Category.objects.filter(name=name, type=type_).delete()
    Status.objects.filter(name__in=[name for name, _ in STATUSES]).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("categories", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed, unseed),
    ]
