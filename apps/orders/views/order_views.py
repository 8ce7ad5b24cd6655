"""
Checkout and order listing views.
"""
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.common.utils import success_response, error_response, paginated_response
from ..models import Order
from ..serializers import CheckoutSerializer, OrderSerializer
from ..services import CheckoutRequest, SettlementContext, SettlementCoordinator

logger = logging.getLogger(__name__)


class CheckoutView(APIView):
    """Turn the submitted cart, or a paid gateway session, into an order"""
    permission_classes = [IsAuthenticated]
    coordinator_class = SettlementCoordinator

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        if not serializer.is_valid():
            logger.info(f"Checkout validation failed for user {request.user.id}: {serializer.errors}")
            return error_response("Invalid checkout data", serializer.errors)

        data = serializer.validated_data
        result = self.coordinator_class().checkout(
            SettlementContext(actor=request.user),
            CheckoutRequest(
                items=data.get('items'),
                coupon_code=data.get('coupon_code'),
                reward_points_to_use=data.get('reward_points_to_use', 0),
                payment_reference=data.get('payment_reference'),
                payment_method=data.get('payment_method'),
            )
        )

        return success_response({
            'order': OrderSerializer(result.order).data,
            'points_earned': result.points_earned,
            'points_redeemed': result.points_redeemed,
            'coupon_rejection': result.coupon_rejection,
        }, "Order placed successfully", status.HTTP_201_CREATED)


class OrderListView(APIView):
    """Own orders for users, orders of owned products for tenants, everything for admins"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        user = request.user
        queryset = Order.objects.select_related('coupon').prefetch_related('lines__product')

        if user.role == user.ROLE_TENANT:
            queryset = queryset.filter(lines__product__created_by=user).distinct()
        elif user.role != user.ROLE_ADMIN:
            queryset = queryset.filter(user=user)

        status_filter = request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)

        return paginated_response(queryset, OrderSerializer, request)
