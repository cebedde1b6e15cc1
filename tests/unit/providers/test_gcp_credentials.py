"""Tests for kubeconfig materialization, service-account activation and client wiring."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from mason_gcp.domain.base.exceptions import ConfigurationError
from mason_gcp.domain.resource.exceptions import CredentialMaterializationError
from mason_gcp.domain.resource.value_objects import (
    CreationResult,
    InstanceInfo,
    ResourceInventory,
)
from mason_gcp.providers.gcp.infrastructure import (
    GCPClient,
    KubeconfigMaterializer,
    activate_service_account,
)
from mason_gcp.providers.gcp.infrastructure.handlers import GCEInstanceCreator, GKEClusterCreator

KUBECONFIG_MODULE = "mason_gcp.providers.gcp.infrastructure.kubeconfig"
CLIENT_MODULE = "mason_gcp.providers.gcp.infrastructure.gcp_client"


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def inventory():
    inventory = ResourceInventory()
    inventory.record(CreationResult(project="p1", cluster=InstanceInfo(name="c1", zone="us-a")))
    inventory.record(CreationResult(project="p1", vm=InstanceInfo(name="vm1", zone="us-b")))
    inventory.record(CreationResult(project="p2", cluster=InstanceInfo(name="c2", zone="us-c")))
    return inventory


@pytest.mark.unit
class TestKubeconfigMaterializer:
    """gcloud get-credentials per cluster."""

    def test_one_call_per_cluster(self, inventory, tmp_path):
        destination = str(tmp_path / "kubeconfig")
        with patch(f"{KUBECONFIG_MODULE}.subprocess.run", return_value=_completed()) as run:
            KubeconfigMaterializer().install(inventory, destination)

        assert run.call_count == 2
        first_args = run.call_args_list[0].args[0]
        assert first_args[:4] == ["gcloud", "container", "clusters", "get-credentials"]
        assert "c1" in first_args
        assert "--project=p1" in first_args
        assert "--zone=us-a" in first_args
        for call in run.call_args_list:
            assert call.kwargs["env"]["KUBECONFIG"] == destination

    def test_no_clusters_no_calls(self, tmp_path):
        inventory = ResourceInventory()
        inventory.record(CreationResult(project="p", vm=InstanceInfo(name="vm", zone="us-b")))

        with patch(f"{KUBECONFIG_MODULE}.subprocess.run") as run:
            KubeconfigMaterializer().install(inventory, str(tmp_path / "kubeconfig"))
        run.assert_not_called()

    def test_failure_carries_inventory(self, inventory, tmp_path):
        with patch(
            f"{KUBECONFIG_MODULE}.subprocess.run",
            return_value=_completed(returncode=1, stderr="permission denied"),
        ):
            with pytest.raises(CredentialMaterializationError) as exc_info:
                KubeconfigMaterializer().install(inventory, str(tmp_path / "kubeconfig"))

        error = exc_info.value
        assert error.inventory is inventory
        assert isinstance(error.__cause__, subprocess.CalledProcessError)
        assert set(error.details["inventory"]) == {"p1", "p2"}

    def test_missing_gcloud(self, inventory, tmp_path):
        with patch(f"{KUBECONFIG_MODULE}.subprocess.run", side_effect=FileNotFoundError("gcloud")):
            with pytest.raises(CredentialMaterializationError):
                KubeconfigMaterializer().install(inventory, str(tmp_path / "kubeconfig"))


@pytest.mark.unit
class TestActivateServiceAccount:
    """gcloud auth activate-service-account."""

    def test_runs_gcloud(self):
        with patch(f"{KUBECONFIG_MODULE}.subprocess.run", return_value=_completed()) as run:
            activate_service_account("/keys/sa.json")

        assert run.call_args.args[0] == [
            "gcloud",
            "auth",
            "activate-service-account",
            "--key-file=/keys/sa.json",
        ]

    def test_failure(self):
        with patch(
            f"{KUBECONFIG_MODULE}.subprocess.run",
            return_value=_completed(returncode=1, stderr="invalid key"),
        ):
            with pytest.raises(ConfigurationError) as exc_info:
                activate_service_account("/keys/sa.json")

        assert exc_info.value.error_code == "SERVICE_ACCOUNT_ACTIVATION_FAILED"
        assert "invalid key" in exc_info.value.message


@pytest.mark.unit
class TestGCPClient:
    """Client construction."""

    def test_create_with_default_credentials(self):
        with (
            patch(f"{CLIENT_MODULE}.container_v1.ClusterManagerClient") as cluster_manager,
            patch(f"{CLIENT_MODULE}.compute_v1.InstancesClient") as instances,
            patch(f"{CLIENT_MODULE}.compute_v1.ZonesClient") as zones,
        ):
            client = GCPClient.create(operation_timeout=60, poll_interval=1)

        cluster_manager.assert_called_once_with(credentials=None)
        instances.assert_called_once_with(credentials=None)
        zones.assert_called_once_with(credentials=None)
        assert isinstance(client.gke, GKEClusterCreator)
        assert isinstance(client.gce, GCEInstanceCreator)
        assert client.cluster_creator is client.gke
        assert client.vm_creator is client.gce
        assert client.operation_timeout == 60
        assert client.gke.poll_interval == 1

    def test_create_with_service_account(self):
        credentials = MagicMock()
        with (
            patch(
                f"{CLIENT_MODULE}.service_account.Credentials.from_service_account_file",
                return_value=credentials,
            ) as from_file,
            patch(f"{CLIENT_MODULE}.container_v1.ClusterManagerClient") as cluster_manager,
            patch(f"{CLIENT_MODULE}.compute_v1.InstancesClient"),
            patch(f"{CLIENT_MODULE}.compute_v1.ZonesClient"),
        ):
            GCPClient.create(service_account_file="/keys/sa.json")

        assert from_file.call_args.args[0] == "/keys/sa.json"
        cluster_manager.assert_called_once_with(credentials=credentials)

    def test_unreadable_service_account(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            GCPClient.create(service_account_file=str(tmp_path / "missing.json"))
        assert exc_info.value.error_code == "INVALID_SERVICE_ACCOUNT"
