"""YAML converter for the GCP resource config."""

from typing import TYPE_CHECKING

import yaml
from pydantic import ValidationError as PydanticValidationError

from mason_gcp.application.services.resource_constructor import RESOURCE_CONFIG_TYPE
from mason_gcp.domain.resource.exceptions import ResourceConfigError
from mason_gcp.domain.resource.value_objects import ResourceRequestGroup
from mason_gcp.infrastructure.logging.logger import get_logger

if TYPE_CHECKING:
    from mason_gcp.infrastructure.factories.config_converter_registry import (
        ConfigConverterRegistry,
    )

logger = get_logger(__name__)


def convert_resource_config(content: str) -> ResourceRequestGroup:
    """
    Parse a resource config document.

    The document maps a resource kind to a list of project entries, each with
    optional ``clusters`` and ``vms`` lists::

        gke-e2e-test:
        - clusters:
          - machine_type: n1-standard-4
            num_nodes: 4
          vms:
          - zone: us-central1-f

    Raises:
        ResourceConfigError: If the document is not valid YAML or does not
            match the expected shape
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.error("unable to parse %s", content)
        raise ResourceConfigError(f"invalid YAML in resource config: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ResourceConfigError(
            "resource config must map resource kinds to project lists",
            details={"type": type(data).__name__},
        )

    try:
        return ResourceRequestGroup.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            {"field": " -> ".join(str(x) for x in error["loc"]), "message": error["msg"]}
            for error in e.errors()
        ]
        logger.error("invalid resource config: %s", errors)
        raise ResourceConfigError("invalid resource config", details={"errors": errors}) from e


def register_gcp_converter(registry: "ConfigConverterRegistry") -> None:
    """Register the GCP converter under its config type."""
    registry.register(RESOURCE_CONFIG_TYPE, convert_resource_config)
