"""
Payment services module.
"""
from .payment_gateway import HttpPaymentGateway, PaymentVerdict

__all__ = [
    'HttpPaymentGateway',
    'PaymentVerdict',
]
