from __future__ import annotations

import json
import sys
from decimal import Decimal
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from kitchenpos.application.ports.delivery import DeliveryDispatchError
from kitchenpos.domain.common.ids import OrderId
from kitchenpos.infrastructure.delivery.kitchenriders_client import KitchenRidersClient


def test_request_delivery_posts_order_payload() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(202, json={"deliveryId": "dlv_001"})

    client = KitchenRidersClient(
        base_url="http://riders.test/",
        timeout_seconds=1.0,
        transport=httpx.MockTransport(handler),
    )
    client.request_delivery(OrderId("ord_001"), "서울 강남구", Decimal("50000"))

    [request] = requests
    assert request.method == "POST"
    assert str(request.url) == "http://riders.test/v1/deliveries"
    assert json.loads(request.content) == {
        "orderId": "ord_001",
        "deliveryAddress": "서울 강남구",
        "amount": "50000",
    }


def test_non_success_status_raises_dispatch_error() -> None:
    client = KitchenRidersClient(
        base_url="http://riders.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )

    with pytest.raises(DeliveryDispatchError, match="503"):
        client.request_delivery(OrderId("ord_001"), "서울", Decimal("1000"))


def test_transport_error_raises_dispatch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = KitchenRidersClient(base_url="http://riders.test", transport=httpx.MockTransport(handler))

    with pytest.raises(DeliveryDispatchError) as exc_info:
        client.request_delivery(OrderId("ord_001"), "서울", Decimal("1000"))

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_missing_dispatch_url_is_a_configuration_error(monkeypatch) -> None:
    monkeypatch.delenv("DELIVERY_DISPATCH_URL", raising=False)

    with pytest.raises(RuntimeError, match="DELIVERY_DISPATCH_URL") as exc_info:
        KitchenRidersClient().request_delivery(OrderId("ord_001"), "서울", Decimal("1000"))

    assert not isinstance(exc_info.value, DeliveryDispatchError)


def test_base_url_and_timeout_come_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("DELIVERY_DISPATCH_URL", "http://env-riders.test")
    monkeypatch.setenv("DELIVERY_DISPATCH_TIMEOUT_SECONDS", "0.5")
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    KitchenRidersClient(transport=httpx.MockTransport(handler)).request_delivery(
        OrderId("ord_001"), "서울", Decimal("1000")
    )

    assert seen[0].url.host == "env-riders.test"
    assert seen[0].extensions["timeout"]["connect"] == 0.5
