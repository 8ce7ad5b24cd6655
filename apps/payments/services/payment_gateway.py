"""
Payment verification against the external card gateway.

Checkout only needs a verdict: whether the session was paid, and the cart
manifest and coupon code the session was created with.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import requests
from django.conf import settings

from apps.common.exceptions import PaymentNotCompleted

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentVerdict:
    reference: str
    paid: bool
    items: List[Dict] = field(default_factory=list)
    coupon_code: Optional[str] = None


class HttpPaymentGateway:
    """Reads checkout sessions from the gateway's REST API"""

    def __init__(self, base_url=None, api_key=None, timeout=None, session=None):
        config = settings.PAYMENT_GATEWAY
        self.base_url = (base_url or config['BASE_URL']).rstrip('/')
        self.api_key = api_key if api_key is not None else config['API_KEY']
        self.timeout = timeout or config['TIMEOUT']
        self.session = session or requests.Session()

    def verify(self, reference: str) -> PaymentVerdict:
        try:
            response = self.session.get(
                f"{self.base_url}/checkout/sessions/{reference}",
                headers={'Authorization': f'Bearer {self.api_key}'},
                timeout=self.timeout
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Payment verification failed for session {reference}: {e}")
            raise PaymentNotCompleted("Could not verify payment", reference=reference) from e

        return self.parse_session(reference, payload)

    @staticmethod
    def parse_session(reference: str, payload: Dict) -> PaymentVerdict:
        metadata = payload.get('metadata') or {}
        items = metadata.get('items') or []
        if isinstance(items, str):
            try:
                items = json.loads(items)
            except ValueError:
                logger.error(f"Session {reference} carries an unreadable items manifest")
                items = []

        return PaymentVerdict(
            reference=reference,
            paid=payload.get('payment_status') == 'paid',
            items=items,
            coupon_code=metadata.get('coupon_code') or None,
        )
