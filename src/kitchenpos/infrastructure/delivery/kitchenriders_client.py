from __future__ import annotations

import logging
import os
from decimal import Decimal

import httpx

from kitchenpos.application.ports.delivery import DeliveryDispatchClient, DeliveryDispatchError
from kitchenpos.domain.common.ids import OrderId

logger = logging.getLogger(__name__)

DELIVERIES_PATH = "/v1/deliveries"
DEFAULT_TIMEOUT_SECONDS = 2.0


def _dispatch_url() -> str:
    url = os.getenv("DELIVERY_DISPATCH_URL")
    if not url:
        raise RuntimeError("DELIVERY_DISPATCH_URL is not set")
    return url


def _dispatch_timeout() -> float:
    raw = os.getenv("DELIVERY_DISPATCH_TIMEOUT_SECONDS")
    return float(raw) if raw else DEFAULT_TIMEOUT_SECONDS


class KitchenRidersClient(DeliveryDispatchClient):
    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def request_delivery(
        self,
        order_id: OrderId,
        delivery_address: str,
        amount: Decimal,
    ) -> None:
        base_url = (self._base_url or _dispatch_url()).rstrip("/")
        timeout = self._timeout_seconds if self._timeout_seconds is not None else _dispatch_timeout()
        payload = {
            "orderId": str(order_id),
            "deliveryAddress": delivery_address,
            "amount": str(amount),
        }

        try:
            with httpx.Client(
                base_url=base_url,
                timeout=httpx.Timeout(timeout),
                transport=self._transport,
                headers={"User-Agent": "kitchenpos/0.1"},
            ) as client:
                response = client.post(DELIVERIES_PATH, json=payload)
        except httpx.HTTPError as exc:
            logger.warning(
                "delivery_dispatch_transport_error",
                extra={"order_id": str(order_id)},
                exc_info=True,
            )
            raise DeliveryDispatchError(f"delivery dispatch for order {order_id} failed: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "delivery_dispatch_rejected",
                extra={"order_id": str(order_id), "status_code": response.status_code},
            )
            raise DeliveryDispatchError(
                f"delivery dispatch for order {order_id} rejected with status {response.status_code}"
            )

        logger.info("delivery_dispatch_requested", extra={"order_id": str(order_id)})
