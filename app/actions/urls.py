"""
URL mappings for the actions app.
"""

from django.urls import path, include

from rest_framework.routers import DefaultRouter

from actions import views

router = DefaultRouter()
router.register("actions", views.ActionViewSet)

app_name = "actions"

urlpatterns = [
    path("", include(router.urls)),
]
