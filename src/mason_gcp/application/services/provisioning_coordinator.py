"""Turns a resource request group into created clusters and VMs.

Planning is single threaded: projects are popped from the pool, zones are
listed once per project and every spec without a pinned zone draws from that
project's ring. Only when the whole request has been planned are the
creation tasks fanned out on a fail-fast task group that shares one
deadline-bound context. Results travel over a bounded channel and are
folded into the inventory once every task has settled.
"""

import time
from typing import Optional

from mason_gcp.application.services.project_pool import ProjectPool
from mason_gcp.application.services.result_aggregator import ResultAggregator
from mason_gcp.application.services.result_channel import ResultChannel
from mason_gcp.application.services.task_group import TaskGroup
from mason_gcp.application.services.zone_ring import ZoneRing
from mason_gcp.domain.base.exceptions import DomainException
from mason_gcp.domain.base.operation_context import OperationContext
from mason_gcp.domain.base.ports import LoggingPort, ProvisioningClient
from mason_gcp.domain.resource.exceptions import (
    ClientNotConfiguredError,
    PoolExhaustedError,
    ResourceCreationError,
    ZoneEnumerationError,
)
from mason_gcp.domain.resource.value_objects import (
    CreationResult,
    CreationTask,
    ProjectHandle,
    ProjectResourceSpec,
    ResourceInventory,
    ResourceKind,
    ResourceRequestGroup,
)
from mason_gcp.infrastructure.adapters.logging_adapter import LoggingAdapter


class ProvisioningCoordinator:
    """Provisions a request group into a ``ResourceInventory`` or fails as a whole."""

    def __init__(
        self,
        client: Optional[ProvisioningClient],
        logger: Optional[LoggingPort] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        """
        Initialize the coordinator.

        Args:
            client: Creators and operation timeout; None leaves the
                coordinator unconfigured and every run fails
            logger: Logging port; a package logger is used when omitted
            max_workers: Upper bound on concurrent creation calls; by default
                every task gets its own worker
        """
        self._client = client
        self._logger = logger or LoggingAdapter(__name__)
        self._max_workers = max_workers
        self._aggregator = ResultAggregator()

    def provision(
        self,
        request_group: ResourceRequestGroup,
        pool: ProjectPool,
        timeout: Optional[float] = None,
    ) -> ResourceInventory:
        """
        Create everything ``request_group`` asks for.

        Args:
            request_group: Resource kind to per-project specs
            pool: Projects available to this run
            timeout: Deadline for the whole run in seconds; defaults to the
                client's operation timeout

        Returns:
            Inventory of every created cluster and VM, per project

        Raises:
            ClientNotConfiguredError: If no client was configured
            PoolExhaustedError: If a kind has fewer projects than specs
            ZoneEnumerationError: If the zones of a project cannot be listed
            ResourceCreationError: If any creation fails
            OperationTimeoutError: If the deadline expires first
        """
        if self._client is None:
            error = ClientNotConfiguredError()
            self._logger.error("client not set; a GCP client must be configured")
            raise error

        started = time.monotonic()
        ctx = OperationContext(timeout if timeout is not None else self._client.operation_timeout)

        tasks = self._plan(request_group, pool)
        channel = ResultChannel(len(tasks))
        group = TaskGroup(ctx, max_workers=self._max_workers or max(len(tasks), 1))

        self._logger.info("Dispatching %d creation tasks", len(tasks))
        for task in tasks:
            group.go(self._execute, ctx, task, channel)

        try:
            group.wait()
        except DomainException as e:
            self._logger.error(
                "Failed to construct resources: %s",
                e,
                extra={"error_code": e.error_code},
            )
            raise
        finally:
            channel.close()

        inventory = self._aggregator.aggregate(channel)
        self._logger.info(
            "Created %d instances across %d projects in %.1fs",
            inventory.instance_count,
            len(inventory),
            time.monotonic() - started,
        )
        return inventory

    def _plan(self, request_group: ResourceRequestGroup, pool: ProjectPool) -> list[CreationTask]:
        tasks: list[CreationTask] = []
        for resource_kind, project_specs in request_group.items():
            for project_spec in project_specs:
                try:
                    project = pool.pop(resource_kind)
                except PoolExhaustedError as e:
                    self._logger.error("unable to create resources: %s", e)
                    raise
                handle = ProjectHandle(project=project.name, zones=self._list_zones(project.name))
                tasks.extend(self._plan_project(handle, project_spec))
        return tasks

    def _plan_project(self, handle: ProjectHandle, spec: ProjectResourceSpec) -> list[CreationTask]:
        project = handle.project

        ring: Optional[ZoneRing] = None
        needs_ring = any(c.zone is None for c in spec.clusters) or any(
            v.zone is None for v in spec.vms
        )
        if needs_ring:
            ring = ZoneRing(handle.zones, project)

        tasks: list[CreationTask] = []
        for cluster in spec.clusters:
            if cluster.zone is None:
                cluster = cluster.model_copy(update={"zone": ring.next()})
            tasks.append(CreationTask(project=project, kind=ResourceKind.CLUSTER, spec=cluster))
        for vm in spec.vms:
            if vm.zone is None:
                vm = vm.model_copy(update={"zone": ring.next()})
            tasks.append(CreationTask(project=project, kind=ResourceKind.VM, spec=vm))
        return tasks

    def _list_zones(self, project: str) -> list[str]:
        try:
            return self._client.vm_creator.list_zones(project)
        except ZoneEnumerationError:
            raise
        except Exception as e:
            self._logger.error("unable to list zones for project %s: %s", project, e)
            raise ZoneEnumerationError(project, f"unable to list zones for project {project}: {e}") from e

    def _execute(self, ctx: OperationContext, task: CreationTask, channel: ResultChannel) -> None:
        try:
            if task.kind is ResourceKind.CLUSTER:
                info = self._client.cluster_creator.create(ctx, task.project, task.spec)
                result = CreationResult(project=task.project, cluster=info)
            else:
                info = self._client.vm_creator.create(ctx, task.project, task.spec)
                result = CreationResult(project=task.project, vm=info)
        except DomainException as e:
            self._logger.error(
                "unable to create %s on project %s: %s", task.kind.value, task.project, e
            )
            raise
        except Exception as e:
            self._logger.error(
                "unable to create %s on project %s: %s", task.kind.value, task.project, e
            )
            raise ResourceCreationError(
                f"GCP.{task.kind.value}",
                f"unable to create {task.kind.value} on project {task.project}: {e}",
                task.project,
            ) from e
        ctx.check()
        channel.send(result)
