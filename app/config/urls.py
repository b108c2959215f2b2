"""
URL configuration for the SafetyWallet API.
"""

from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/schema/", SpectacularAPIView.as_view(), name="api-schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="api-schema"),
        name="api-docs",
    ),
    path("api/users/", include("users.urls")),
    path("api/", include("posts.urls")),
    path("api/", include("actions.urls")),
    path("api/", include("points.urls")),
    path("api/", include("notifications.urls")),
]
