from django.db import migrations

PERMISSIONS = {
    "edit_profile": "Can edit own profile",
    "reset_password": "Can reset password",
    "manage_users": "Can manage users and roles",
    "view_dashboard": "Can view the dashboard",
}

ROLES = {
    "admin": ["edit_profile", "reset_password", "manage_users", "view_dashboard"],
    "user": ["edit_profile", "view_dashboard"],
}


def seed_roles(apps, schema_editor):
    ContentType = apps.get_model("contenttypes", "ContentType")
    Permission = apps.get_model("auth", "Permission")
    Group = apps.get_model("auth", "Group")

    # permissions are normally created after migrate; create them now so groups can hold them
    content_type, _ = ContentType.objects.get_or_create(app_label="users", model="userprofile")
    permissions = {}
    for codename, name in PERMISSIONS.items():
        permissions[codename], _ = Permission.objects.get_or_create(
            codename=codename, content_type=content_type, defaults={"name": name}
        )
    for role, codenames in ROLES.items():
        group, _ = Group.objects.get_or_create(name=role)
        group.permissions.set([permissions[c] for c in codenames])


def unseed_roles(apps, schema_editor):
    Group = apps.get_model("auth", "Group")
    Group.objects.filter(name__in=ROLES).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("users", "0001_initial"),
        ("auth", "0012_alter_user_first_name_max_length"),
        ("contenttypes", "0002_remove_content_type_name"),
    ]

    operations = [
        migrations.RunPython(seed_roles, unseed_roles),
    ]
