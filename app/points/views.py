"""
Views for the points APIs.
"""

from django.shortcuts import get_object_or_404
from rest_framework import viewsets, mixins
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.authentication import TokenAuthentication
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter

from posts.views import StandardResultsSetPagination
from sites.models import Site
from .models import PointsLedger
from . import serializers
from . import services
from .filters import PointsLedgerFilter


class PointsLedgerViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """The caller's own points history and balance."""

    queryset = PointsLedger.objects.all()
    serializer_class = serializers.PointsLedgerSerializer
    authentication_classes = [TokenAuthentication]
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination
    filterset_class = PointsLedgerFilter

    def get_queryset(self):
        return super().get_queryset().filter(user=self.request.user)

    @extend_schema(
        parameters=[
            OpenApiParameter("site", int, required=True),
            OpenApiParameter("settle_month", str, required=False),
        ],
        responses=serializers.BalanceSerializer,
    )
    @action(detail=False, methods=["get"])
    def balance(self, request):
        """Sum of the caller's points at a site, optionally for one month."""
        query = serializers.BalanceQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        site = get_object_or_404(Site, pk=query.validated_data["site"])
        settle_month = query.validated_data.get("settle_month")

        balance = services.get_balance(
            user=request.user, site=site, settle_month=settle_month
        )
        return Response(
            serializers.BalanceSerializer(
                {
                    "site": site.pk,
                    "settle_month": settle_month,
                    "balance": balance,
                }
            ).data
        )
