"""
Points balance and ledger history serializers.
"""
from rest_framework import serializers
from ..models import PointsAccount, RewardLog


class PointsBalanceSerializer(serializers.ModelSerializer):
    balance = serializers.IntegerField(source='reward_points', read_only=True)

    class Meta:
        model = PointsAccount
        fields = ['balance', 'last_login_reward_at', 'updated_at']
        read_only_fields = fields


class RewardLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = RewardLog
        fields = ['id', 'points', 'type', 'reference_id', 'order', 'created_at']
        read_only_fields = fields
