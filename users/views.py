"""
Views for the users app.

Registration, email login and the password flows live under
`/api/auth/`; the `UserViewSet` under `/api/users/` covers the profile
(`me`, partial update with avatar upload or removal), lookup by email and
role management.
"""
import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.db import transaction
from rest_framework import generics, mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.generics import get_object_or_404
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView

from common.permissions import HasAuthPermission
from notifications.models import Notification
from notifications.services import notify
from uploads.dispatch import destroy_remote_images, discard_staged_files, stage_files, submit_upload_job
from uploads.jobs import OwnerKind
from uploads.records import RecordStore

from .email_utils import send_password_changed_email, send_password_reset_email, send_welcome_email
from .serializers import (
    AccessControlSerializer,
    ChangePasswordSerializer,
    EmailTokenObtainPairSerializer,
    ForgotPasswordSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    RolesSerializer,
    UserSerializer,
    UserUpdateSerializer,
)

logger = logging.getLogger(__name__)
User = get_user_model()

MANAGE_USERS = "users.manage_users"


def _can_manage(user) -> bool:
    return user.is_staff or user.has_perm(MANAGE_USERS)


class UserViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Staff and user managers see everyone; other users only see themselves.
    """
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = (MultiPartParser, FormParser, JSONParser)
    search_fields = ["email", "profile__full_name", "profile__phone_number"]
    # checked by HasAuthPermission on the roles action
    required_permission = MANAGE_USERS

    def get_queryset(self):
        qs = User.objects.select_related("profile").prefetch_related("groups").order_by("id")
        user = self.request.user
        if _can_manage(user):
            return qs
        return qs.filter(pk=user.pk)

    # PATCH /api/users/{id}/
    def partial_update(self, request, pk=None):
        user = self.get_object()
        if user.pk != request.user.pk and not request.user.is_staff:
            raise PermissionDenied("You can only update your own profile.")
        return self._apply_update(request, user)

    @action(detail=False, methods=["get", "patch"], url_path="me")
    def me(self, request):
        if request.method == "PATCH":
            return self._apply_update(request, request.user)
        return Response(UserSerializer(request.user).data)

    # GET /api/users/by-email/{email}/
    @action(detail=False, methods=["get"], url_path=r"by-email/(?P<email>[^/]+)")
    def by_email(self, request, email=None):
        user = get_object_or_404(User.objects.select_related("profile"), email__iexact=email)
        return Response(UserSerializer(user).data)

    # PUT /api/users/{id}/roles/
    @action(
        detail=True,
        methods=["put"],
        url_path="roles",
        permission_classes=[HasAuthPermission],
    )
    def roles(self, request, pk=None):
        user = get_object_or_404(User, pk=pk)
        serializer = RolesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user.groups.set(Group.objects.filter(name__in=serializer.validated_data["roles"]))
        logger.info("Roles for user %s set to %s by %s", user.pk, serializer.validated_data["roles"], request.user.pk)
        return Response({
            "message": "User roles updated successfully.",
            "user": {"id": user.pk, "email": user.email},
            "roles": AccessControlSerializer(user).data["roles"],
        })

    # GET /api/users/{id}/access-controls/
    @action(detail=True, methods=["get"], url_path="access-controls")
    def access_controls(self, request, pk=None):
        user = get_object_or_404(User, pk=pk)
        if user.pk != request.user.pk and not _can_manage(request.user):
            raise PermissionDenied("You cannot view another user's access controls.")
        return Response(AccessControlSerializer(user).data)

    def _apply_update(self, request, user):
        serializer = UserUpdateSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        image = serializer.validated_data.get("image")

        if serializer.validated_data.get("delete_image"):
            self._delete_avatar(user)

        staged = stage_files([image], OwnerKind.USER_AVATAR) if image else []
        try:
            with transaction.atomic():
                serializer.save()
                if staged:
                    submit_upload_job(user.pk, OwnerKind.USER_AVATAR, staged)
        except Exception:
            discard_staged_files(staged)
            raise

        notify(
            user.pk,
            Notification.PROFILE_UPDATE,
            "Profile Updated",
            "Your profile information was updated successfully.",
        )
        user = User.objects.select_related("profile").get(pk=user.pk)
        return Response({**UserSerializer(user).data, "images_pending": bool(staged)})

    def _delete_avatar(self, user):
        replaced = RecordStore().replace_image(
            OwnerKind.USER_AVATAR,
            user.pk,
            None,
            before_save=lambda previous: destroy_remote_images([previous] if previous else []),
        )
        if not replaced or not replaced[0]:
            return
        logger.info("Removed avatar for user %s", user.pk)


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            user = serializer.save()

        send_welcome_email(user)

        refresh = RefreshToken.for_user(user)
        payload = serializer.data
        payload.update({
            "access": str(refresh.access_token),
            "refresh": str(refresh),
        })
        return Response(payload, status=status.HTTP_201_CREATED)


class EmailTokenObtainPairView(TokenObtainPairView):
    """
    Obtain JWT tokens using email + password.
    """
    permission_classes = [permissions.AllowAny]
    serializer_class = EmailTokenObtainPairSerializer


class ChangePasswordView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ChangePasswordSerializer

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user
        if not user.check_password(serializer.validated_data["old_password"]):
            return Response(
                {"old_password": ["Old password is incorrect."]},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user.set_password(serializer.validated_data["new_password"])
        user.save(update_fields=["password"])
        send_password_changed_email(user)
        return Response({"detail": "Password changed successfully."}, status=status.HTTP_200_OK)


class ForgotPasswordView(generics.GenericAPIView):
    """POST { "email": "user@example.com" }"""
    permission_classes = [permissions.AllowAny]
    serializer_class = ForgotPasswordSerializer

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data["user"]  # may be None (we don't leak)
        if user:
            send_password_reset_email(user)

        return Response(
            {"detail": "If that email exists, we've sent a reset link."},
            status=status.HTTP_200_OK,
        )


class ResetPasswordView(generics.GenericAPIView):
    """POST { "uid": "...", "token": "...", "new_password": "...", "confirm_new_password": "..." }"""
    permission_classes = [permissions.AllowAny]
    serializer_class = ResetPasswordSerializer

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data["user"]
        user.set_password(serializer.validated_data["new_password"])
        user.save(update_fields=["password"])
        send_password_changed_email(user)
        return Response({"detail": "Password has been reset successfully."}, status=status.HTTP_200_OK)


class LogoutView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        try:
            token = RefreshToken(request.data["refresh"])
            token.blacklist()
        except KeyError:
            return Response({"error": "Refresh token is required."}, status=status.HTTP_400_BAD_REQUEST)
        except TokenError:
            return Response({"error": "Invalid or expired token."}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"detail": "Successfully logged out."}, status=status.HTTP_205_RESET_CONTENT)
