"""
Points balance and history views.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response, paginated_response
from ..serializers import PointsBalanceSerializer, RewardLogSerializer
from ..services import LoyaltyLedger


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_points_balance(request):
    """Get user's current points balance"""
    account = LoyaltyLedger.get_or_create_account(request.user)
    return success_response(PointsBalanceSerializer(account).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_points_history(request):
    """Get user's ledger entries, newest first"""
    queryset = LoyaltyLedger.history(request.user, request.query_params.get('type'))

    return paginated_response(queryset, RewardLogSerializer, request)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def claim_daily_login(request):
    """Credit today's login bonus if it has not been credited yet"""
    entry = LoyaltyLedger.award_daily_login(request.user)
    balance = LoyaltyLedger.balance(request.user)
    if entry is None:
        return success_response({'awarded': 0, 'balance': balance}, "No bonus available today")
    return success_response({'awarded': entry.points, 'balance': balance}, "Daily bonus awarded",
                            status.HTTP_201_CREATED)
