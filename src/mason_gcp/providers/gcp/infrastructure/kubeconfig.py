"""Credential materialization through the gcloud command line.

``gcloud container clusters get-credentials`` writes (or merges) a context
into the file named by ``KUBECONFIG``; running it once per cluster against
the same destination produces one kubeconfig holding every context.
"""

import os
import subprocess
from typing import Optional, Sequence

from mason_gcp.domain.base.exceptions import ConfigurationError
from mason_gcp.domain.base.ports import CredentialMaterializerPort
from mason_gcp.domain.resource.exceptions import CredentialMaterializationError
from mason_gcp.domain.resource.value_objects import ResourceInventory
from mason_gcp.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

GCLOUD = "gcloud"


def _run(args: Sequence[str], env: Optional[dict[str, str]] = None) -> str:
    logger.debug("Running %s", " ".join(args))
    completed = subprocess.run(  # nosec B603
        list(args),
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )
    if completed.returncode != 0:
        raise subprocess.CalledProcessError(
            completed.returncode, list(args), completed.stdout, completed.stderr
        )
    return completed.stdout


def set_kubeconfig(project: str, zone: str, cluster: str, kubeconfig: str) -> None:
    """Merge the context of one GKE cluster into ``kubeconfig``."""
    env = dict(os.environ)
    env["KUBECONFIG"] = kubeconfig
    _run(
        [
            GCLOUD,
            "container",
            "clusters",
            "get-credentials",
            cluster,
            f"--project={project}",
            f"--zone={zone}",
        ],
        env=env,
    )


def activate_service_account(key_file: str) -> None:
    """
    Make ``key_file`` the active gcloud account.

    Raises:
        ConfigurationError: If gcloud rejects the key or is not installed
    """
    try:
        _run([GCLOUD, "auth", "activate-service-account", f"--key-file={key_file}"])
    except (OSError, subprocess.CalledProcessError) as e:
        stderr = getattr(e, "stderr", "") or ""
        raise ConfigurationError(
            f"cannot activate service account {key_file}: {e} {stderr}".strip(),
            error_code="SERVICE_ACCOUNT_ACTIVATION_FAILED",
            details={"key_file": key_file},
        ) from e


class KubeconfigMaterializer(CredentialMaterializerPort):
    """Writes one kubeconfig context per cluster of an inventory."""

    def install(self, inventory: ResourceInventory, destination: str) -> None:
        for project, info in inventory.items():
            for cluster in info.clusters:
                try:
                    set_kubeconfig(project, cluster.zone, cluster.name, destination)
                except (OSError, subprocess.CalledProcessError) as e:
                    stderr = getattr(e, "stderr", "") or ""
                    logger.error(
                        "failed to set kubeconfig for %s/%s: %s %s",
                        project,
                        cluster.name,
                        e,
                        stderr,
                    )
                    raise CredentialMaterializationError(
                        f"failed to set kubeconfig for cluster {cluster.name} in {project}: {e}",
                        inventory,
                    ) from e
                logger.info("Installed kubeconfig context for %s/%s", project, cluster.name)
