"""
Order services module.
"""
from .order_state_machine import OrderStateMachine, TransitionResult
from .settlement_service import (
    CheckoutRequest,
    CheckoutResult,
    SettlementContext,
    SettlementCoordinator,
)

__all__ = [
    'OrderStateMachine',
    'TransitionResult',
    'CheckoutRequest',
    'CheckoutResult',
    'SettlementContext',
    'SettlementCoordinator',
]
