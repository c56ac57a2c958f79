"""
URL configuration for media app.

Media - Upload:
    POST /upload/                                  - Upload a batch of files
"""

from django.urls import path

from media.views import MediaBatchUploadView

app_name = "media"

urlpatterns = [
    path("upload/", MediaBatchUploadView.as_view(), name="upload"),
]
