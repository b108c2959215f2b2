"""
URL mappings for the points app.
"""

from django.urls import path, include

from rest_framework.routers import DefaultRouter

from points import views

router = DefaultRouter()
router.register("points", views.PointsLedgerViewSet)

app_name = "points"

urlpatterns = [
    path("", include(router.urls)),
]
