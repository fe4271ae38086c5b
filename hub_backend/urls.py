"""
URL configuration for the community hub backend.
All API endpoints are registered under the `/api/` prefix.  Content
apps register their viewsets on the shared DRF router; authentication
endpoints are nested under `/api/auth/`.
"""

from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView
from rest_framework.routers import DefaultRouter
from drf_spectacular.views import (
    SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
)
from django.conf import settings
from django.conf.urls.static import static

from announcements.views import AnnouncementViewSet
from categories.views import CategoryViewSet, StatusViewSet
from events.views import EventViewSet
from notifications.views import NotificationViewSet
from opportunities.views import OpportunityViewSet
from projects.views import ProjectViewSet
from users.views import UserViewSet
from hub_backend.views import index


router = DefaultRouter()
router.register(r"users", UserViewSet, basename="user")
router.register(r"categories", CategoryViewSet, basename="category")
router.register(r"statuses", StatusViewSet, basename="status")
router.register(r"announcements", AnnouncementViewSet, basename="announcement")
router.register(r"events", EventViewSet, basename="event")
router.register(r"opportunities", OpportunityViewSet, basename="opportunity")
router.register(r"projects", ProjectViewSet, basename="project")
router.register(r"notifications", NotificationViewSet, basename="notification")

urlpatterns = [
    path("", index, name="index"),
    path("admin/", admin.site.urls),

    path("api/", RedirectView.as_view(pattern_name="swagger-ui", permanent=False)),

    #  Swagger/Redoc
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),

    path("api/", include(router.urls)),

    # Auth endpoints
    path("api/auth/", include("users.urls")),
    path("api/uploads/", include("uploads.urls")),
]

if settings.DEBUG:
    # Only serve MEDIA_URL via Django if it's a local path
    if getattr(settings, "MEDIA_URL", "").startswith("/"):
        urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
