"""vaultmount CLI: run single lifecycle operations from the command line.

State goes in and comes out as JSON, so the CLI can be driven by scripts::

    vaultmount create vault_secret_backend --attrs '{"type": "ssh", "path": "ssh-test"}'
    vaultmount read vault_secret_backend --id ssh-test
    vaultmount update vault_secret_backend --state "$(cat state.json)" \\
        --attrs '{"type": "ssh", "path": "ssh-test", "max_lease_ttl_seconds": 43200}'
    vaultmount import vault_secret_backend --id ssh-test
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from vaultmount.base import ResourceData
from vaultmount.base.exceptions import VaultMountError
from vaultmount.base.logger import vm_logger
from vaultmount.factory import universal_factory

OPERATIONS = ["create", "read", "update", "delete", "exists", "import", "plan"]


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``vaultmount`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="vaultmount",
        description="Manage Vault secret backend mounts",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON provider config (e.g. \'{"address":"http://127.0.0.1:8200"}\')',
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log threshold for the JSON logs written to stderr",
    )
    parser.add_argument(
        "operation",
        choices=OPERATIONS,
        help="Lifecycle operation to perform",
    )
    parser.add_argument(
        "resource_type",
        help="Resource type (e.g. vault_secret_backend)",
    )
    parser.add_argument(
        "--attrs", "-a",
        type=str,
        default=None,
        help="JSON resource attributes (create, update, plan)",
    )
    parser.add_argument(
        "--state", "-s",
        type=str,
        default=None,
        help='JSON prior state, {"id": ..., "attributes": {...}}',
    )
    parser.add_argument(
        "--id",
        dest="resource_id",
        default=None,
        help="Resource id; shorthand for a state with no attributes",
    )
    return parser


def _load_json(value: str, flag: str) -> Any:
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        print(f"Invalid {flag} JSON: {e}", file=sys.stderr)
        sys.exit(1)


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _run(resource: Any, ns: argparse.Namespace) -> Any:
    """Dispatch *ns.operation* against *resource* and return a JSON-able result."""
    attrs = _load_json(ns.attrs, "--attrs") if ns.attrs is not None else None
    if ns.state is not None:
        data = ResourceData.from_dict(_load_json(ns.state, "--state"))
    elif ns.resource_id is not None:
        data = ResourceData(id=ns.resource_id)
    else:
        data = None

    if ns.operation in ("create", "update", "plan") and attrs is None:
        _fail(f"'{ns.operation}' requires --attrs")
    if ns.operation in ("read", "update", "delete", "exists", "import") and data is None:
        _fail(f"'{ns.operation}' requires --state or --id")
    # An empty id marks a resource that no longer exists.
    if ns.operation in ("update", "delete", "exists", "import") and not data.id:
        _fail(f"'{ns.operation}' requires a non-empty resource id")

    if ns.operation == "plan":
        return resource.plan(data, attrs).to_dict()

    if ns.operation == "create":
        return resource.create(resource.planned_data(None, attrs)).to_dict()

    if ns.operation == "update":
        diff = resource.plan(data, attrs)
        if diff.requires_replace:
            _fail(
                "cannot update in place, changed attributes force a new resource: "
                + ", ".join(diff.replace_reasons)
            )
        return resource.update(resource.planned_data(data, attrs)).to_dict()

    if ns.operation == "read":
        return resource.read(data).to_dict()

    if ns.operation == "delete":
        resource.delete(data)
        return None

    if ns.operation == "exists":
        return {"exists": resource.exists(data)}

    return resource.import_state(data.id).to_dict()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, creates a resource handler via the universal factory,
    and runs the requested operation.  Results are printed as JSON.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    config: dict[str, Any] = _load_json(ns.config, "--config")

    vm_logger.set_level(ns.log_level)

    try:
        resource = universal_factory(ns.resource_type, config)
    except ValueError as e:
        _fail(str(e))

    try:
        result = _run(resource, ns)
    except VaultMountError as e:
        print(f"Operation failed: {e}", file=sys.stderr)
        sys.exit(1)

    if result is None:
        print("OK")
    else:
        print(json.dumps(result, indent=2, default=str))


if __name__ == "__main__":
    main()
