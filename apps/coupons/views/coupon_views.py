"""
Coupon preview view.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response, error_response
from ..serializers import CouponValidateSerializer
from ..services import CouponService

REJECTION_MESSAGES = {
    'not_found': 'Invalid coupon code',
    'inactive': 'Invalid coupon code',
    'expired': 'Coupon has expired',
    'usage_limit_reached': 'Coupon usage limit reached',
    'min_purchase_not_met': 'Minimum purchase not met for this coupon',
}


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def validate_coupon(request):
    """Preview the discount a coupon would give on a cart total"""
    serializer = CouponValidateSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response("Invalid coupon request", serializer.errors)

    coupon, discount, reason = CouponService.preview(
        serializer.validated_data['code'],
        serializer.validated_data['cart_total'],
    )
    if reason:
        code = status.HTTP_404_NOT_FOUND if reason in ('not_found', 'inactive') else status.HTTP_400_BAD_REQUEST
        return error_response(REJECTION_MESSAGES[reason], {'error': 'invalid_coupon', 'reason': reason}, code)

    return success_response({
        'id': coupon.id,
        'code': coupon.code,
        'discount_type': coupon.discount_type,
        'discount_value': str(coupon.discount_value),
        'discount': str(discount),
    })
