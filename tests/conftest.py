"""Global test configuration and fixtures."""

import logging
from unittest.mock import Mock

import pytest
from fixtures.fake_creators import FakeClusterCreator, FakeVMCreator, make_client

from mason_gcp.domain.base.ports import LoggingPort
from mason_gcp.domain.resource.broker import Resource
from mason_gcp.domain.resource.value_objects import ResourceRequestGroup
from mason_gcp.infrastructure.factories.config_converter_registry import (
    reset_config_converter_registry,
)
from mason_gcp.infrastructure.logging.logger import ROOT_LOGGER_NAME


@pytest.fixture
def mock_logger():
    """Mock logging port."""
    return Mock(spec=LoggingPort)


@pytest.fixture
def cluster_creator():
    return FakeClusterCreator()


@pytest.fixture
def vm_creator():
    return FakeVMCreator()


@pytest.fixture
def client(cluster_creator, vm_creator):
    """Provisioning client backed by the fake creators."""
    return make_client(cluster_creator, vm_creator)


@pytest.fixture
def project_types():
    """Two free projects of kind ``pool-X``; ``proj-1`` is popped first."""
    return {
        "pool-X": [
            Resource(name="proj-2", type="pool-X"),
            Resource(name="proj-1", type="pool-X"),
        ]
    }


@pytest.fixture
def single_project_request():
    """One project with one cluster and one VM, no zones pinned."""
    return ResourceRequestGroup.model_validate({"pool-X": [{"clusters": [{}], "vms": [{}]}]})


@pytest.fixture(autouse=True)
def _reset_registry():
    yield
    reset_config_converter_registry()


@pytest.fixture
def restore_package_logger():
    """Restore handlers, level and propagation of the package logger."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    root.propagate = propagate
