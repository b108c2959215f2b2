"""
Views for the posts APIs.
"""

import logging

from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.authentication import TokenAuthentication
from rest_framework.permissions import IsAuthenticated
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Post
from . import serializers
from . import services
from .services import PostPermissionError, PostTransitionError
from .filters import PostFilter

logger = logging.getLogger(__name__)


class StandardResultsSetPagination(PageNumberPagination):
    """Provides pagination for output."""

    page_size = 50
    page_size_query_param = "page_size"
    max_page_size = 100


def _error_response(exc):
    """Maps a service-layer exception to an HTTP response."""
    err_status = (
        status.HTTP_403_FORBIDDEN
        if isinstance(exc, PostPermissionError)
        else status.HTTP_409_CONFLICT
    )
    return Response({"error": str(exc)}, status=err_status)


class PostViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """View for managing safety report (post) APIs."""

    queryset = Post.objects.all()
    authentication_classes = [TokenAuthentication]
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination
    filterset_class = PostFilter

    def get_queryset(self):
        """Implement data segregation based on site membership and role."""
        user = self.request.user
        queryset = (
            super()
            .get_queryset()
            .select_related("site", "created_by")
        )
        visibility_filter = services.get_post_visibility_filter(user)
        return queryset.filter(visibility_filter).distinct().order_by("-id")

    def get_serializer_class(self):
        """Return the serializer class for request based on action."""
        if self.action == "list":
            return serializers.PostListSerializer
        if self.action == "create":
            return serializers.PostCreateSerializer
        if self.action == "review":
            return serializers.ReviewActionSerializer
        if self.action == "reviews":
            return serializers.ReviewSerializer
        if self.action == "resubmit":
            return serializers.PostResubmitSerializer

        return serializers.PostDetailSerializer

    def _detail_response(self, post, response_status=status.HTTP_200_OK):
        context = self.get_serializer_context()
        context.update(
            services.get_post_context(post=post, user=self.request.user)
        )
        return Response(
            serializers.PostDetailSerializer(post, context=context).data,
            status=response_status,
        )

    def retrieve(self, request, *args, **kwargs):
        """Retrieve a single post with contextual data."""
        return self._detail_response(self.get_object())

    def create(self, request, *args, **kwargs):
        """
        Create a new post.
        Permission: ACTIVE member of the site (enforced in services).

        Returns:
        201 Created: Post created with status RECEIVED
        400 Bad Request: Invalid data
        403 Forbidden: User is not a member of the site
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            post = services.create_post(
                user=request.user, **serializer.validated_data
            )
        except (PostPermissionError, PostTransitionError) as e:
            return _error_response(e)
        except Exception:
            logger.exception("Unexpected error creating post")
            return Response(
                {"error": "An unexpected error occurred."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return self._detail_response(post, status.HTTP_201_CREATED)

    @extend_schema(
        request=serializers.ReviewActionSerializer,
        responses=serializers.ReviewResultSerializer,
    )
    @action(detail=True, methods=["post"])
    def review(self, request, pk=None):
        """
        Action to apply an admin review action (APPROVE, REJECT,
        REQUEST_MORE, MARK_URGENT, ASSIGN, CLOSE).
        403 for workers, 409 when the current status does not allow it.
        """
        post = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            review, points_awarded = services.review_post(
                post=post, user=request.user, **serializer.validated_data
            )
        except (PostPermissionError, PostTransitionError) as e:
            return _error_response(e)

        review.post.refresh_from_db()
        result = serializers.ReviewResultSerializer(
            {
                "review": review,
                "post_status": review.post.review_status,
                "action_status": review.post.action_status,
                "points_awarded": points_awarded,
            }
        )
        return Response(result.data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def reviews(self, request, pk=None):
        """Review history of a post, newest first."""
        post = self.get_object()
        queryset = post.reviews.select_related("admin")
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)

    @extend_schema(
        request=serializers.PostResubmitSerializer,
        responses=serializers.PostDetailSerializer,
    )
    @action(detail=True, methods=["post"])
    def resubmit(self, request, pk=None):
        """
        Action for the author to edit and resubmit a post that is in
        NEED_INFO or REJECTED. The post returns to RECEIVED.
        """
        post = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            updated_post = services.resubmit_post(
                post=post, user=request.user, **serializer.validated_data
            )
        except (PostPermissionError, PostTransitionError) as e:
            return _error_response(e)
        return self._detail_response(updated_post)
