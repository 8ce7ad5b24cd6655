from rest_framework import serializers
from ..models import RewardRule


class RewardRuleSerializer(serializers.ModelSerializer):
    class Meta:
        model = RewardRule
        fields = [
            'id', 'min_purchase_amount', 'max_purchase_amount', 'reward_type',
            'points_multiplier', 'fixed_points', 'description'
        ]
        read_only_fields = fields
