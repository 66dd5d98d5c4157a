from unittest.mock import MagicMock

import pytest
from kafka import TopicPartition
from kafka.errors import KafkaConnectionError, NoBrokersAvailable

from kafka_mcp.core.deadline import Deadline
from kafka_mcp.core.exceptions import BrokerProtocolError, ConnectivityError, DeadlineExceeded
from kafka_mcp.infra.kafka.reader import PartitionReader

from tests.conftest import make_record


def _consumer(partitions=frozenset({0})):
    consumer = MagicMock()
    consumer.partitions_for_topic.return_value = set(partitions)
    consumer.poll.return_value = {}
    return consumer


def test_open_configures_groupless_reader_from_earliest(settings):
    consumer = _consumer()
    factory = MagicMock(return_value=consumer)

    with PartitionReader("b:9092", "orders", settings=settings, consumer_factory=factory):
        pass

    kwargs = factory.call_args.kwargs
    assert kwargs["bootstrap_servers"] == ["b:9092"]
    assert kwargs["group_id"] is None
    assert kwargs["enable_auto_commit"] is False
    assert kwargs["auto_offset_reset"] == "earliest"
    assert kwargs["fetch_min_bytes"] == 1
    assert kwargs["fetch_max_bytes"] == 10_000_000
    assert kwargs["fetch_max_wait_ms"] == settings.consume_max_wait_ms
    consumer.assign.assert_called_once_with([TopicPartition("orders", 0)])
    consumer.close.assert_called_once_with(autocommit=False)


def test_read_next_skips_empty_polls_until_a_record_arrives(settings, clock):
    consumer = _consumer()
    consumer.poll.side_effect = [{}, {}, {TopicPartition("orders", 0): [make_record(42, b"hi")]}]
    deadline = Deadline(5, clock=clock)

    with PartitionReader("b:9092", "orders", settings=settings,
                         consumer_factory=MagicMock(return_value=consumer)) as reader:
        msg = reader.read_next(deadline)

    assert msg.offset == 42
    assert msg.value == b"hi"
    assert consumer.poll.call_count == 3
    consumer.poll.assert_called_with(timeout_ms=settings.consume_max_wait_ms, max_records=1)


def test_read_next_raises_deadline_exceeded_when_partition_stays_idle(settings, clock):
    consumer = _consumer()

    def idle_poll(timeout_ms, max_records):
        clock.advance(timeout_ms / 1000)
        return {}

    consumer.poll.side_effect = idle_poll
    deadline = Deadline(0.625, clock=clock)

    with PartitionReader("b:9092", "orders", settings=settings,
                         consumer_factory=MagicMock(return_value=consumer)) as reader:
        with pytest.raises(DeadlineExceeded):
            reader.read_next(deadline)

    # 250ms slices, the last one trimmed to what is left
    assert [c.kwargs["timeout_ms"] for c in consumer.poll.call_args_list] == [250, 250, 125]


def test_cancelled_deadline_stops_before_polling(settings, clock):
    consumer = _consumer()
    deadline = Deadline(5, clock=clock)
    deadline.cancel()

    with PartitionReader("b:9092", "orders", settings=settings,
                         consumer_factory=MagicMock(return_value=consumer)) as reader:
        with pytest.raises(DeadlineExceeded):
            reader.read_next(deadline)
    consumer.poll.assert_not_called()


def test_poll_failure_becomes_connectivity_error(settings, clock):
    consumer = _consumer()
    consumer.poll.side_effect = KafkaConnectionError("socket disconnected")

    with PartitionReader("b:9092", "orders", settings=settings,
                         consumer_factory=MagicMock(return_value=consumer)) as reader:
        with pytest.raises(ConnectivityError, match="cannot read message"):
            reader.read_next(Deadline(5, clock=clock))


def test_missing_topic_is_a_protocol_error_and_releases_the_consumer(settings):
    consumer = _consumer(partitions=frozenset())

    with pytest.raises(BrokerProtocolError, match="does not exist"):
        with PartitionReader("b:9092", "nope", settings=settings,
                             consumer_factory=MagicMock(return_value=consumer)):
            pass
    consumer.close.assert_called_once()
    consumer.assign.assert_not_called()


def test_unreachable_broker_is_a_connectivity_error(settings):
    factory = MagicMock(side_effect=NoBrokersAvailable())

    with pytest.raises(ConnectivityError, match="cannot connect to broker b:9092"):
        PartitionReader("b:9092", "orders", settings=settings, consumer_factory=factory).open()
