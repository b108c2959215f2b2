"""
Views for the remedial actions APIs.
"""

from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.authentication import TokenAuthentication
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from posts.views import StandardResultsSetPagination
from .models import Action
from . import serializers
from . import services
from .services import ActionTransitionError, ActionPermissionError
from .filters import ActionFilter


def _error_response(exc):
    err_status = (
        status.HTTP_403_FORBIDDEN
        if isinstance(exc, ActionPermissionError)
        else status.HTTP_409_CONFLICT
    )
    return Response({"error": str(exc)}, status=err_status)


class ActionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """View for managing remedial action APIs."""

    queryset = Action.objects.all()
    authentication_classes = [TokenAuthentication]
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination
    filterset_class = ActionFilter

    def get_queryset(self):
        """Assignees see their own actions, admins their sites' actions."""
        user = self.request.user
        queryset = (
            super()
            .get_queryset()
            .select_related("post", "post__site", "assignee", "created_by")
        )
        visibility_filter = services.get_action_visibility_filter(user)
        return queryset.filter(visibility_filter).distinct().order_by("-id")

    def get_serializer_class(self):
        """Return the serializer class for request based on action."""
        if self.action == "list":
            return serializers.ActionListSerializer
        if self.action == "create":
            return serializers.ActionAssignSerializer
        if self.action == "complete":
            return serializers.ActionCompletionSerializer
        if self.action == "reopen":
            return serializers.ActionReasonSerializer

        return serializers.ActionDetailSerializer

    def _detail_response(self, instance, response_status=status.HTTP_200_OK):
        context = self.get_serializer_context()
        context.update(
            services.get_action_context(
                action=instance, user=self.request.user
            )
        )
        return Response(
            serializers.ActionDetailSerializer(instance, context=context).data,
            status=response_status,
        )

    def retrieve(self, request, *args, **kwargs):
        """Retrieve a single action with contextual data."""
        return self._detail_response(self.get_object())

    @extend_schema(
        request=serializers.ActionAssignSerializer,
        responses=serializers.ActionDetailSerializer,
    )
    def create(self, request, *args, **kwargs):
        """
        Assign the remedial action of a post (creates it if needed).
        Permission: site admin only (enforced in services).

        Returns:
        201 Created: Action assigned, post action status ASSIGNED
        403 Forbidden: User is not an admin of the post's site
        409 Conflict: Post action status does not allow assignment
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            assigned = services.assign_action(
                user=request.user, **serializer.validated_data
            )
        except (ActionPermissionError, ActionTransitionError) as e:
            return _error_response(e)
        return self._detail_response(assigned, status.HTTP_201_CREATED)

    @extend_schema(request=None, responses=serializers.ActionDetailSerializer)
    @action(detail=True, methods=["post"])
    def start(self, request, pk=None):
        """
        Action to move ASSIGNED / REOPENED -> IN_PROGRESS.
        Permission: the assignee or a site admin.
        """
        instance = self.get_object()
        try:
            updated = services.start_action(action=instance, user=request.user)
        except (ActionPermissionError, ActionTransitionError) as e:
            return _error_response(e)
        return self._detail_response(updated)

    @extend_schema(
        request=serializers.ActionCompletionSerializer,
        responses=serializers.ActionDetailSerializer,
    )
    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):
        """
        Action to move IN_PROGRESS -> DONE. A completion note is required.
        Permission: the assignee or a site admin.
        """
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            updated = services.complete_action(
                action=instance, user=request.user, **serializer.validated_data
            )
        except (ActionPermissionError, ActionTransitionError) as e:
            return _error_response(e)
        return self._detail_response(updated)

    @extend_schema(
        request=serializers.ActionReasonSerializer,
        responses=serializers.ActionDetailSerializer,
    )
    @action(detail=True, methods=["post"])
    def reopen(self, request, pk=None):
        """
        Action to move DONE -> REOPENED. A reason is required.
        Permission: site admin only.
        """
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            updated = services.reopen_action(
                action=instance, user=request.user, **serializer.validated_data
            )
        except (ActionPermissionError, ActionTransitionError) as e:
            return _error_response(e)
        return self._detail_response(updated)
