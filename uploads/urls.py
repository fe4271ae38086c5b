from django.urls import path

from .views import UploadProgressView

app_name = "uploads"

urlpatterns = [
    path("progress/<int:user_id>/", UploadProgressView.as_view(), name="progress"),
]
