"""
Role definitions.

Roles are Django auth ``Group`` rows; their permissions are the custom
permissions declared on ``UserProfile``.
"""
from django.contrib.auth.models import Group, Permission
from django.contrib.contenttypes.models import ContentType

ADMIN = "admin"
USER = "user"

ROLE_PERMISSIONS = {
    ADMIN: ["edit_profile", "reset_password", "manage_users", "view_dashboard"],
    USER: ["edit_profile", "view_dashboard"],
}


def ensure_role(name: str) -> Group:
    """Return the role ``name``, creating it with its default permissions if needed."""
    from .models import UserProfile

    group, created = Group.objects.get_or_create(name=name)
    if created and name in ROLE_PERMISSIONS:
        content_type = ContentType.objects.get_for_model(UserProfile)
        permissions = []
        for codename in ROLE_PERMISSIONS[name]:
            permission, _ = Permission.objects.get_or_create(
                codename=codename,
                content_type=content_type,
                defaults={"name": codename.replace("_", " ").capitalize()},
            )
            permissions.append(permission)
        group.permissions.set(permissions)
    return group


def ensure_default_roles() -> list[Group]:
    return [ensure_role(name) for name in ROLE_PERMISSIONS]


def role_names(user) -> list[str]:
    return list(user.groups.order_by("name").values_list("name", flat=True))


def permission_codenames(user) -> list[str]:
    return sorted({perm.split(".", 1)[-1] for perm in user.get_all_permissions()})
