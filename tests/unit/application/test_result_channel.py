"""Tests for ResultChannel and ResultAggregator."""

import pytest

from mason_gcp.application.services.result_aggregator import ResultAggregator
from mason_gcp.application.services.result_channel import (
    ChannelClosedError,
    ChannelNotClosedError,
    ResultChannel,
)
from mason_gcp.domain.resource.value_objects import CreationResult, InstanceInfo


def _vm(project, name):
    return CreationResult(project=project, vm=InstanceInfo(name=name, zone="us-b"))


def _cluster(project, name):
    return CreationResult(project=project, cluster=InstanceInfo(name=name, zone="us-a"))


@pytest.mark.unit
class TestResultChannel:
    """Bounded, closable result channel."""

    def test_drain_after_close(self):
        channel = ResultChannel(2)
        channel.send(_vm("p", "vm-1"))
        channel.send(_cluster("p", "c-1"))
        channel.close()

        assert channel.closed
        assert [r.project for r in channel] == ["p", "p"]

    def test_drain_requires_close(self):
        channel = ResultChannel(1)
        with pytest.raises(ChannelNotClosedError):
            list(channel)

    def test_send_after_close_rejected(self):
        channel = ResultChannel(1)
        channel.close()
        with pytest.raises(ChannelClosedError):
            channel.send(_vm("p", "vm-1"))

    def test_zero_capacity_channel(self):
        channel = ResultChannel(0)
        channel.close()
        assert channel.capacity == 0
        assert list(channel) == []

    def test_negative_capacity_rejected(self):
        with pytest.raises(ValueError):
            ResultChannel(-1)


@pytest.mark.unit
class TestResultAggregator:
    """Folding drained results into the inventory."""

    def test_every_result_appears_once(self):
        results = [
            _cluster("p1", "c-1"),
            _vm("p1", "vm-1"),
            _vm("p2", "vm-2"),
            _vm("p1", "vm-3"),
        ]
        channel = ResultChannel(len(results))
        for result in results:
            channel.send(result)
        channel.close()

        inventory = ResultAggregator().aggregate(channel)

        assert inventory.instance_count == len(results)
        assert [c.name for c in inventory["p1"].clusters] == ["c-1"]
        assert [v.name for v in inventory["p1"].vms] == ["vm-1", "vm-3"]
        assert [v.name for v in inventory["p2"].vms] == ["vm-2"]
        assert inventory["p2"].clusters == []

    def test_refuses_open_channel(self):
        with pytest.raises(ChannelNotClosedError):
            ResultAggregator().aggregate(ResultChannel(1))
