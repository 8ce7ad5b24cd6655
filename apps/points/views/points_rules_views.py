"""
Reward rule listing view.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response
from ..models import RewardRule
from ..serializers import RewardRuleSerializer


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_reward_rules(request):
    """Active reward tiers, lowest first"""
    rules = RewardRule.objects.filter(is_active=True).order_by('min_purchase_amount', 'id')
    return success_response(RewardRuleSerializer(rules, many=True).data)
