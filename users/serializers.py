"""
Serializers for the users app.

Covers registration with name/phone/password confirmation, email-based
login returning SimpleJWT tokens, the password change/forgot/reset flow,
profile updates (including the avatar fields) and role assignment.
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.contrib.auth.password_validation import validate_password
from django.contrib.auth.tokens import PasswordResetTokenGenerator
from django.core.validators import FileExtensionValidator
from django.utils.encoding import force_str
from django.utils.http import urlsafe_base64_decode
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.validators import UniqueValidator
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from uploads.serializers import ALLOWED_IMAGE_EXTENSIONS

from .models import UserProfile
from .roles import USER, ensure_role, permission_codenames, role_names

User = get_user_model()


class UserProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserProfile
        fields = ["full_name", "phone_number", "whatsapp_number", "image_url", "updated_at"]
        read_only_fields = ["image_url", "updated_at"]


class UserSerializer(serializers.ModelSerializer):
    profile = UserProfileSerializer(read_only=True)
    roles = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "email", "is_active", "is_staff", "date_joined", "profile", "roles"]
        read_only_fields = fields

    def get_roles(self, obj) -> list[str]:
        return role_names(obj)


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(
        validators=[UniqueValidator(queryset=User.objects.all(), lookup="iexact")],
    )
    phone_number = serializers.CharField(
        max_length=32,
        validators=[UniqueValidator(queryset=UserProfile.objects.all())],
    )
    password = serializers.CharField(write_only=True, min_length=8, style={"input_type": "password"})
    confirm_password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate_email(self, value: str) -> str:
        return value.strip().lower()

    def validate(self, attrs):
        if attrs["password"] != attrs["confirm_password"]:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match."})
        # Run Django's password validators with user context so similarity checks work
        validate_password(attrs["password"], user=User(username=attrs["email"], email=attrs["email"]))
        return attrs

    def create(self, validated_data):
        user = User(username=validated_data["email"], email=validated_data["email"])
        user.set_password(validated_data["password"])
        user.save()
        # signal has created the profile
        profile = user.profile
        profile.full_name = validated_data["name"]
        profile.phone_number = validated_data["phone_number"]
        profile.save(update_fields=["full_name", "phone_number", "updated_at"])
        user.groups.add(ensure_role(USER))
        return user

    def to_representation(self, instance):
        return UserSerializer(instance, context=self.context).data


class EmailTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Login using email + password and return SimpleJWT refresh/access tokens.
    POST body: {"email": "...", "password": "..."}
    """
    email = serializers.EmailField(write_only=True)
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # the parent adds a username field; login is by email only
        self.fields.pop(self.username_field, None)

    def validate(self, attrs):
        try:
            user = User.objects.get(email__iexact=attrs.get("email"))
        except User.DoesNotExist:
            raise AuthenticationFailed("No active account found with the given credentials")

        if not user.is_active:
            raise AuthenticationFailed("User account is disabled")
        if not user.check_password(attrs.get("password")):
            raise AuthenticationFailed("No active account found with the given credentials")

        refresh = self.get_token(user)
        return {
            "refresh": str(refresh),
            "access": str(refresh.access_token),
            "user": UserSerializer(user).data,
        }


class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField(write_only=True, trim_whitespace=False)
    new_password = serializers.CharField(write_only=True, trim_whitespace=False)
    confirm_new_password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        if attrs["new_password"] != attrs["confirm_new_password"]:
            raise serializers.ValidationError({"confirm_new_password": "Passwords do not match."})
        validate_password(attrs["new_password"], self.context["request"].user)
        return attrs


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate(self, attrs):
        email = (attrs["email"] or "").strip().lower()
        # do not reveal whether the address exists
        attrs["user"] = User.objects.filter(email__iexact=email, is_active=True).first()
        return attrs


class ResetPasswordSerializer(serializers.Serializer):
    uid = serializers.CharField()
    token = serializers.CharField()
    new_password = serializers.CharField(write_only=True, trim_whitespace=False)
    confirm_new_password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        if attrs["new_password"] != attrs["confirm_new_password"]:
            raise serializers.ValidationError({"confirm_new_password": "Passwords do not match."})

        try:
            user = User.objects.get(pk=force_str(urlsafe_base64_decode(attrs["uid"])))
        except (TypeError, ValueError, OverflowError, User.DoesNotExist):
            raise serializers.ValidationError({"uid": "Invalid user id."})

        if not PasswordResetTokenGenerator().check_token(user, attrs["token"]):
            raise serializers.ValidationError({"token": "Invalid or expired token."})

        validate_password(attrs["new_password"], user)
        attrs["user"] = user
        return attrs


class UserUpdateSerializer(serializers.Serializer):
    """
    Partial profile update.  ``image`` is staged for a background upload;
    ``delete_image`` clears the current avatar first.
    """
    name = serializers.CharField(max_length=255, required=False)
    email = serializers.EmailField(required=False)
    phone_number = serializers.CharField(max_length=32, required=False)
    whatsapp_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    image = serializers.ImageField(
        required=False,
        validators=[FileExtensionValidator(ALLOWED_IMAGE_EXTENSIONS)],
    )
    delete_image = serializers.BooleanField(required=False, default=False)

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exclude(pk=self.instance.pk).exists():
            raise serializers.ValidationError("A user with that email already exists.")
        return value

    def validate_phone_number(self, value: str) -> str:
        if UserProfile.objects.filter(phone_number=value).exclude(user_id=self.instance.pk).exists():
            raise serializers.ValidationError("A user with that phone number already exists.")
        return value

    def update(self, instance, validated_data):
        if "email" in validated_data:
            instance.email = instance.username = validated_data["email"]
            instance.save(update_fields=["email", "username"])

        profile = instance.profile
        changed = []
        for field, attr in (("name", "full_name"), ("phone_number", "phone_number"),
                            ("whatsapp_number", "whatsapp_number")):
            if field in validated_data:
                setattr(profile, attr, validated_data[field])
                changed.append(attr)
        if changed:
            profile.save(update_fields=[*changed, "updated_at"])
        return instance


class RolesSerializer(serializers.Serializer):
    roles = serializers.ListField(child=serializers.CharField(), allow_empty=True)

    def validate_roles(self, value):
        names = list(dict.fromkeys(value))
        found = set(Group.objects.filter(name__in=names).values_list("name", flat=True))
        missing = [name for name in names if name not in found]
        if missing:
            raise serializers.ValidationError(f"Unknown role(s): {', '.join(missing)}")
        return names


class AccessControlSerializer(serializers.Serializer):
    roles = serializers.SerializerMethodField()
    permissions = serializers.SerializerMethodField()

    def get_roles(self, obj) -> list[str]:
        return role_names(obj)

    def get_permissions(self, obj) -> list[str]:
        return permission_codenames(obj)
