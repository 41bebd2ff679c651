"""URLconf for the Tentling server."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("tentling.followers.urls")),
    path("", include("tentling.oauth.urls")),
]
