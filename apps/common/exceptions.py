"""
Settlement error taxonomy and the DRF exception handler that renders it.
"""
from rest_framework.views import exception_handler
from rest_framework import status
import logging

from .utils import settlement_error_response

logger = logging.getLogger(__name__)


class SettlementError(Exception):
    """Fatal checkout or status-change failure; the unit of work is rolled back"""
    code = 'settlement_error'
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Checkout failed'

    def __init__(self, message=None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def as_dict(self):
        return {'error': self.code, **self.details}


class InvalidCart(SettlementError):
    code = 'invalid_cart'
    default_message = 'No items in checkout'


class ProductNotFound(SettlementError):
    code = 'product_not_found'
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Product not found'


class InsufficientStock(SettlementError):
    code = 'insufficient_stock'
    status_code = status.HTTP_409_CONFLICT
    default_message = 'Insufficient stock'


class PaymentNotCompleted(SettlementError):
    code = 'payment_not_completed'
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_message = 'Payment not completed'


class OrderNotFound(SettlementError):
    code = 'order_not_found'
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Order not found'


class InvalidTransition(SettlementError):
    code = 'invalid_transition'
    default_message = 'Invalid status transition'


class AlreadyInStatus(SettlementError):
    code = 'already_in_status'
    default_message = 'Order is already in this status'


class TransitionNotPermitted(SettlementError):
    code = 'transition_not_permitted'
    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'Users can only cancel their own orders'


class LockTimeout(SettlementError):
    code = 'lock_timeout'
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = 'Timed out waiting for a locked record, please retry'


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent error responses
    """
    if isinstance(exc, SettlementError):
        logger.warning(f"Settlement rejected: {exc.code} {exc.message}")
        return settlement_error_response(exc)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        logger.error(f"API Exception: {exc}", exc_info=True)

        custom_response_data = {
            'code': response.status_code,
            'msg': 'An error occurred',
            'errors': response.data
        }

        if response.status_code == status.HTTP_400_BAD_REQUEST:
            custom_response_data['msg'] = 'Validation error'
        elif response.status_code == status.HTTP_401_UNAUTHORIZED:
            custom_response_data['msg'] = 'Authentication required'
        elif response.status_code == status.HTTP_403_FORBIDDEN:
            custom_response_data['msg'] = 'Permission denied'
        elif response.status_code == status.HTTP_404_NOT_FOUND:
            custom_response_data['msg'] = 'Resource not found'
        elif response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            custom_response_data['msg'] = 'Method not allowed'

        response.data = custom_response_data

    return response
