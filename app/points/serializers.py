"""
Serializers for the points API.
"""

from rest_framework import serializers

from .models import PointsLedger


class PointsLedgerSerializer(serializers.ModelSerializer):
    class Meta:
        model = PointsLedger
        fields = [
            "id",
            "site",
            "post",
            "amount",
            "reason_code",
            "reason_text",
            "settle_month",
            "occurred_at",
        ]
        read_only_fields = fields


class BalanceQuerySerializer(serializers.Serializer):
    site = serializers.IntegerField()
    settle_month = serializers.RegexField(
        r"^\d{4}-(0[1-9]|1[0-2])$", required=False
    )


class BalanceSerializer(serializers.Serializer):
    site = serializers.IntegerField()
    settle_month = serializers.CharField(allow_null=True)
    balance = serializers.IntegerField()
