"""Value objects describing requested and created GCP resources."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator

DEFAULT_CLUSTER_MACHINE_TYPE = "n1-standard-2"
DEFAULT_VM_MACHINE_TYPE = "n1-standard-1"
DEFAULT_SOURCE_IMAGE = "projects/debian-cloud/global/images/family/debian-12"
DEFAULT_NETWORK = "global/networks/default"
DEFAULT_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


class ClusterSpec(BaseModel):
    """Desired shape of one GKE cluster."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    zone: Optional[str] = None
    machine_type: str = DEFAULT_CLUSTER_MACHINE_TYPE
    num_nodes: int = Field(3, ge=1)
    version: Optional[str] = None
    enable_kubernetes_alpha: bool = False
    network: Optional[str] = None
    scopes: list[str] = Field(default_factory=lambda: list(DEFAULT_SCOPES))


class VirtualMachineSpec(BaseModel):
    """Desired shape of one GCE instance."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    zone: Optional[str] = None
    machine_type: str = DEFAULT_VM_MACHINE_TYPE
    source_image: str = DEFAULT_SOURCE_IMAGE
    disk_size_gb: int = Field(10, ge=10)
    network: str = DEFAULT_NETWORK
    tags: list[str] = Field(default_factory=list)
    scopes: list[str] = Field(default_factory=lambda: list(DEFAULT_SCOPES))


class ProjectResourceSpec(BaseModel):
    """Clusters and VMs to create inside a single project."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    clusters: list[ClusterSpec] = Field(default_factory=list)
    vms: list[VirtualMachineSpec] = Field(default_factory=list)

    @property
    def task_count(self) -> int:
        return len(self.clusters) + len(self.vms)


class ResourceRequestGroup(RootModel[dict[str, list[ProjectResourceSpec]]]):
    """Resource kind label mapped to the ordered project specs it must satisfy.

    Each ``ProjectResourceSpec`` consumes exactly one project from the pool
    of its kind.
    """

    def items(self) -> Iterator[tuple[str, list[ProjectResourceSpec]]]:
        return iter(self.root.items())

    def __len__(self) -> int:
        return len(self.root)

    @property
    def task_count(self) -> int:
        return sum(spec.task_count for specs in self.root.values() for spec in specs)


class ProjectHandle(BaseModel):
    """A project popped for one run, with the zones listed for it."""

    model_config = ConfigDict(frozen=True)

    project: str
    zones: list[str] = Field(default_factory=list)


class ResourceKind(str, Enum):
    """Kind of instance a creation task produces."""

    CLUSTER = "cluster"
    VM = "vm"


class CreationTask(BaseModel):
    """One (project, spec) pair that becomes exactly one concurrent creation."""

    model_config = ConfigDict(frozen=True)

    project: str
    kind: ResourceKind
    spec: Union[ClusterSpec, VirtualMachineSpec]

    @property
    def zone(self) -> Optional[str]:
        return self.spec.zone


class InstanceInfo(BaseModel):
    """Name and zone of a created cluster or VM."""

    model_config = ConfigDict(frozen=True)

    name: str
    zone: str


class CreationResult(BaseModel):
    """Outcome of one creation task, tagged with its project.

    Exactly one of ``cluster`` and ``vm`` is populated.
    """

    model_config = ConfigDict(frozen=True)

    project: str
    cluster: Optional[InstanceInfo] = None
    vm: Optional[InstanceInfo] = None

    @model_validator(mode="after")
    def _exactly_one_variant(self) -> "CreationResult":
        if (self.cluster is None) == (self.vm is None):
            raise ValueError("exactly one of cluster or vm must be set")
        return self


class ProjectInfo(BaseModel):
    """Clusters and VMs created in one project."""

    clusters: list[InstanceInfo] = Field(default_factory=list)
    vms: list[InstanceInfo] = Field(default_factory=list)

    def add(self, result: CreationResult) -> None:
        if result.cluster is not None:
            self.clusters.append(result.cluster)
        else:
            self.vms.append(result.vm)


class ResourceInventory(RootModel):
    """Project name mapped to everything a run created in it."""

    root: dict[str, ProjectInfo] = Field(default_factory=dict)

    def __getitem__(self, project: str) -> ProjectInfo:
        return self.root[project]

    def __contains__(self, project: object) -> bool:
        return project in self.root

    def __len__(self) -> int:
        return len(self.root)

    def items(self) -> Iterator[tuple[str, ProjectInfo]]:
        return iter(self.root.items())

    def record(self, result: CreationResult) -> None:
        """Fold one creation result into its project's entry."""
        info = self.root.get(result.project)
        if info is None:
            info = ProjectInfo()
            self.root[result.project] = info
        info.add(result)

    @property
    def instance_count(self) -> int:
        return sum(len(p.clusters) + len(p.vms) for p in self.root.values())

    def to_dict(self) -> dict[str, Any]:
        """Broker representation; empty cluster or VM lists are omitted."""
        result: dict[str, Any] = {}
        for project, info in self.root.items():
            entry: dict[str, Any] = {}
            if info.clusters:
                entry["clusters"] = [c.model_dump() for c in info.clusters]
            if info.vms:
                entry["vms"] = [v.model_dump() for v in info.vms]
            result[project] = entry
        return result
