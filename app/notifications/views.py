"""
Views for the notifications APIs.
"""

from rest_framework import viewsets, mixins
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.authentication import TokenAuthentication
from rest_framework.permissions import IsAuthenticated

from posts.views import StandardResultsSetPagination
from .models import Notification
from .serializers import NotificationSerializer
from . import services


class NotificationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """In-app notifications of the caller."""

    queryset = Notification.objects.all()
    serializer_class = NotificationSerializer
    authentication_classes = [TokenAuthentication]
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination
    filterset_fields = ["is_read", "event_type", "entity_type"]

    def get_queryset(self):
        return super().get_queryset().filter(recipient=self.request.user)

    @action(detail=True, methods=["post"], url_path="mark-read")
    def mark_read(self, request, pk=None):
        notification = services.mark_read(notification=self.get_object())
        return Response(self.get_serializer(notification).data)
