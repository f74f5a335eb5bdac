from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from kitchenpos.application.ports.publisher import ORDER_EVENTS_CHANNEL
from kitchenpos.infrastructure.messaging.redis_publisher import RedisEventPublisher


class RecordingRedis:
    def __init__(self) -> None:
        self.published: list[tuple[str, str]] = []

    def publish(self, channel: str, message: str) -> int:
        self.published.append((channel, message))
        return 1


def test_publisher_forwards_to_redis_channel() -> None:
    client = RecordingRedis()

    RedisEventPublisher(client=client).publish(ORDER_EVENTS_CHANNEL, '{"event_type":"order.created"}')

    assert client.published == [("events:orders", '{"event_type":"order.created"}')]
