"""In-memory creators standing in for the GKE and Compute Engine APIs."""

import threading
import time
from typing import Optional

from mason_gcp.domain.base.operation_context import OperationContext
from mason_gcp.domain.base.ports import (
    ClusterCreatorPort,
    ProvisioningClient,
    VirtualMachineCreatorPort,
)
from mason_gcp.domain.resource.value_objects import (
    ClusterSpec,
    InstanceInfo,
    VirtualMachineSpec,
)


class _FakeCreator:
    """Records every call; failures and waits are configured per test.

    A stalled creator sleeps without looking at the context, like a slow API
    call that only reports back after the deadline.
    """

    prefix = "fake"

    def __init__(
        self,
        fail_with: Optional[BaseException] = None,
        delay: float = 0.0,
        block_until_cancelled: bool = False,
        stall: float = 0.0,
    ) -> None:
        self.fail_with = fail_with
        self.delay = delay
        self.block_until_cancelled = block_until_cancelled
        self.stall = stall
        self.calls: list[tuple[str, Optional[str]]] = []
        self.started = threading.Event()
        self._lock = threading.Lock()
        self._counter = 0

    @property
    def call_count(self) -> int:
        with self._lock:
            return len(self.calls)

    def _create(self, ctx: OperationContext, project: str, zone: Optional[str]) -> InstanceInfo:
        with self._lock:
            self.calls.append((project, zone))
            self._counter += 1
            number = self._counter
        self.started.set()

        if self.stall:
            time.sleep(self.stall)
        elif self.block_until_cancelled:
            while not ctx.wait(0.01):
                pass
            ctx.check()
        elif self.delay and ctx.wait(self.delay):
            ctx.check()

        if self.fail_with is not None:
            raise self.fail_with
        return InstanceInfo(name=f"{self.prefix}-{number}", zone=zone)


class FakeClusterCreator(_FakeCreator, ClusterCreatorPort):
    prefix = "gke"

    def create(self, ctx: OperationContext, project: str, spec: ClusterSpec) -> InstanceInfo:
        return self._create(ctx, project, spec.zone)


class FakeVMCreator(_FakeCreator, VirtualMachineCreatorPort):
    prefix = "gce"

    def __init__(
        self,
        zones: Optional[dict[str, list[str]]] = None,
        default_zones: Optional[list[str]] = None,
        zone_error: Optional[BaseException] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.zones = zones or {}
        self.default_zones = default_zones if default_zones is not None else ["us-a", "us-b"]
        self.zone_error = zone_error
        self.zone_calls: list[str] = []

    def list_zones(self, project: str) -> list[str]:
        self.zone_calls.append(project)
        if self.zone_error is not None:
            raise self.zone_error
        return list(self.zones.get(project, self.default_zones))

    def create(self, ctx: OperationContext, project: str, spec: VirtualMachineSpec) -> InstanceInfo:
        return self._create(ctx, project, spec.zone)


def make_client(
    cluster_creator: Optional[FakeClusterCreator] = None,
    vm_creator: Optional[FakeVMCreator] = None,
    operation_timeout: float = 30,
) -> ProvisioningClient:
    """Client wired with fakes; defaults succeed immediately."""
    return ProvisioningClient(
        cluster_creator or FakeClusterCreator(),
        vm_creator or FakeVMCreator(),
        operation_timeout=operation_timeout,
    )
