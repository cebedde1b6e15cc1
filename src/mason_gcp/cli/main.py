"""Command-line entry point: run one resource construction outside the daemon."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

from mason_gcp._package import __version__
from mason_gcp.application.services.provisioning_coordinator import ProvisioningCoordinator
from mason_gcp.application.services.resource_constructor import (
    KUBECONFIG_KEY,
    RESOURCE_CONFIG_TYPE,
    ResourceConstructor,
)
from mason_gcp.cli.console import print_error, print_info, print_result, print_success
from mason_gcp.config.manager import ConfigurationManager
from mason_gcp.domain.base.exceptions import DomainException
from mason_gcp.domain.resource.broker import Resource, TypeToResources
from mason_gcp.domain.resource.exceptions import ResourceConfigError
from mason_gcp.infrastructure.adapters.logging_adapter import LoggingAdapter
from mason_gcp.infrastructure.factories.config_converter_registry import (
    get_config_converter_registry,
)
from mason_gcp.infrastructure.logging.logger import get_logger, setup_logging
from mason_gcp.providers.gcp.infrastructure import (
    GCPClient,
    KubeconfigMaterializer,
    activate_service_account,
)

DEFAULT_RESOURCE_NAME = "mason-gcp"

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mason-gcp",
        description="Provision GKE clusters and GCE instances for a broker resource",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    construct_parser = subparsers.add_parser(
        "construct", help="Create the resources of a request and print the user data"
    )
    construct_parser.add_argument(
        "--request", required=True, help="YAML file mapping resource kinds to project specs"
    )
    construct_parser.add_argument(
        "--pool", required=True, help="YAML or JSON file mapping resource kinds to free projects"
    )
    construct_parser.add_argument(
        "--resource", default=DEFAULT_RESOURCE_NAME, help="Name of the resource being constructed"
    )
    construct_parser.add_argument("--kubeconfig", help="Write the merged kubeconfig to this path")
    construct_parser.add_argument("--output", help="Write the user data JSON here instead of stdout")
    construct_parser.add_argument("--config", help="Settings file (JSON, YAML or TOML)")
    construct_parser.add_argument(
        "--timeout", type=float, help="Deadline in seconds overriding gcp.operation_timeout"
    )
    construct_parser.add_argument(
        "--service-account", help="Service-account key file overriding gcp.service_account"
    )
    construct_parser.set_defaults(handler=construct)
    return parser


def _read_text(path: str) -> str:
    try:
        return Path(path).read_text()
    except OSError as e:
        raise ResourceConfigError(
            f"cannot read {path}: {e}", details={"path": path}
        ) from e


def _pool_entry(kind: str, entry: Any) -> Resource:
    if isinstance(entry, str):
        return Resource(name=entry, type=kind)
    if isinstance(entry, dict):
        return Resource(**{"type": kind, **entry})
    raise ResourceConfigError(
        f"pool entry for {kind} must be a project name or mapping, got {type(entry).__name__}",
        details={"kind": kind},
    )


def load_pool(content: str) -> TypeToResources:
    """
    Parse a pool document.

    Each kind maps to a list of project names, or of mappings with at least
    a ``name`` key.

    Raises:
        ResourceConfigError: If the document is not such a mapping
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ResourceConfigError(f"invalid pool document: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ResourceConfigError("pool document must map resource kinds to project lists")

    types: TypeToResources = {}
    for kind, entries in data.items():
        if not isinstance(entries, list):
            raise ResourceConfigError(
                f"projects of {kind} must be a list", details={"kind": kind}
            )
        try:
            types[str(kind)] = [_pool_entry(str(kind), entry) for entry in entries]
        except (TypeError, ValueError) as e:
            raise ResourceConfigError(
                f"invalid project in pool for {kind}: {e}", details={"kind": kind}
            ) from e
    return types


def construct(args: argparse.Namespace) -> int:
    app_config = ConfigurationManager(args.config).load()
    setup_logging(app_config.logging)
    gcp = app_config.gcp

    service_account = args.service_account or gcp.service_account
    if service_account and gcp.activate_service_account:
        activate_service_account(service_account)

    registry = get_config_converter_registry()
    request_group = registry.convert(RESOURCE_CONFIG_TYPE, _read_text(args.request))
    types = load_pool(_read_text(args.pool))

    client = GCPClient.create(
        service_account_file=service_account,
        operation_timeout=gcp.operation_timeout,
        poll_interval=gcp.poll_interval,
    )
    logger = LoggingAdapter("cli", resource=args.resource)
    coordinator = ProvisioningCoordinator(client, logger=logger, max_workers=gcp.max_workers)
    constructor = ResourceConstructor(request_group, coordinator, KubeconfigMaterializer(), logger)

    resource = Resource(name=args.resource, type=RESOURCE_CONFIG_TYPE)
    print_info(f"Constructing {request_group.task_count} resources for {resource.name}")
    user_data = constructor.construct(resource, types, timeout=args.timeout)

    if args.kubeconfig:
        Path(args.kubeconfig).write_text(user_data.extract(KUBECONFIG_KEY) or "")
        print_info(f"Kubeconfig written to {args.kubeconfig}")

    document = json.dumps(dict(user_data), indent=2, sort_keys=True)
    if args.output:
        Path(args.output).write_text(document + "\n")
    else:
        print_result(document)
    print_success(f"Constructed {resource.name}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return args.handler(args)
    except DomainException as e:
        print_error(f"{e.error_code}: {e.message}")
        if e.details:
            print_error(json.dumps(e.details, indent=2, sort_keys=True, default=str))
        return 1
    except Exception as e:
        logger.error("An error occurred: %s", e, exc_info=True)
        print_error(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
