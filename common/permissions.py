from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsOwnerOrStaffOrReadOnly(BasePermission):
    """
    Read for everyone (if view allows), write only for owner; staff bypass.
    Assumes the object has a `user` field.
    """
    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.is_staff or getattr(obj, "user_id", None) == user.id


class IsStaffOrReadOnly(BasePermission):
    """Authenticated users may read; only staff may write."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return request.method in SAFE_METHODS or user.is_staff


class HasAuthPermission(BasePermission):
    """
    Grants access when the user holds ``view.required_permission`` (a
    Django ``app_label.codename`` string) directly or through a role.
    """
    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        required = getattr(view, "required_permission", None)
        return user.is_superuser or (required is not None and user.has_perm(required))
