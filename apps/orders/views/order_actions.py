"""
Order status change view.
"""
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.common.utils import success_response, error_response
from ..serializers import OrderSerializer, OrderStatusSerializer
from ..services import SettlementContext, SettlementCoordinator


class UpdateOrderStatusView(APIView):
    """Users may cancel their own orders; tenants and admins move orders forward"""
    permission_classes = [IsAuthenticated]
    coordinator_class = SettlementCoordinator

    def patch(self, request, order_id):
        serializer = OrderStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid status data", serializer.errors)

        data = serializer.validated_data
        result = self.coordinator_class().change_status(
            SettlementContext(actor=request.user),
            order_id,
            data['status'],
            cancel_reason=data.get('cancel_reason'),
            cancel_remarks=data.get('cancel_remarks'),
        )

        return success_response({
            'order': OrderSerializer(result.order).data,
            'points_refunded': result.points_refunded,
            'points_reversed': result.points_reversed,
            'restocked': result.restocked,
        }, f"Order status updated to {result.new_status}")
