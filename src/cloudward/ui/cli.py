# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from cloudward.app import (
    associate_signature,
    dissociate_signature,
    fetch_image_triggers,
    set_alert_rule_status,
    show_alert_rule,
    show_signature_association,
)
from cloudward.common import configure_logging
from cloudward.config import ConfigurationError, get_huaweicloud_config
from cloudward.domain.errors import CloudAPIError
from cloudward.domain.model import AlertRuleStatus, ImageTriggerFilter
from cloudward.domain.reconciler import ReconcileError, ReconcileTimeoutError
from cloudward.domain.signature_association import DEFAULT_TIMEOUT_SECONDS, Timeouts

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_USAGE = 2
EXIT_FAILURE = 1
# Distinct from hard failures: the change may still land remotely.
EXIT_TIMEOUT = 3


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in {"true", "1", "yes"}:
        return True
    if normalized in {"false", "0", "no"}:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {value!r}")
    return number


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage Huawei Cloud resources")
    parser.add_argument(
        "--region",
        type=str,
        help="Region to operate in (defaults to HW_REGION_NAME)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    associate = subparsers.add_parser(
        "signature-associate",
        help="Bind a signature to exactly the given published APIs",
    )
    associate.add_argument("--instance-id", required=True, help="Dedicated gateway instance ID")
    associate.add_argument("--signature-id", required=True, help="Signature key ID")
    associate.add_argument(
        "--publish-id",
        dest="publish_ids",
        action="append",
        required=True,
        help="Publish ID of an API to bind (repeatable)",
    )
    associate.add_argument(
        "--timeout",
        type=_positive_float,
        default=DEFAULT_TIMEOUT_SECONDS,
        help="Seconds to wait for the bindings to become visible (default: %(default)s)",
    )

    show = subparsers.add_parser("signature-show", help="Show the APIs bound to a signature")
    show.add_argument("--instance-id", required=True)
    show.add_argument("--signature-id", required=True)

    dissociate = subparsers.add_parser(
        "signature-dissociate",
        help="Unbind every API from a signature",
    )
    dissociate.add_argument("--instance-id", required=True)
    dissociate.add_argument("--signature-id", required=True)
    dissociate.add_argument(
        "--timeout",
        type=_positive_float,
        default=DEFAULT_TIMEOUT_SECONDS,
        help="Seconds to wait for each unbinding (default: %(default)s)",
    )

    rule_show = subparsers.add_parser("alert-rule-show", help="Show a SecMaster alert rule")
    rule_show.add_argument("--workspace-id", required=True)
    rule_show.add_argument("--rule-id", required=True)

    rule_status = subparsers.add_parser("alert-rule-status", help="Enable or disable an alert rule")
    rule_status.add_argument("--workspace-id", required=True)
    rule_status.add_argument("--rule-id", required=True)
    rule_status.add_argument(
        "--status",
        required=True,
        type=str.upper,
        choices=[status.value for status in AlertRuleStatus],
    )

    triggers = subparsers.add_parser("image-triggers", help="List SWR image triggers")
    triggers.add_argument("--organization", required=True)
    triggers.add_argument("--repository", required=True)
    triggers.add_argument("--name", help="Only triggers with this name")
    triggers.add_argument(
        "--enabled",
        type=_parse_bool,
        help="Only enabled (true) or disabled (false) triggers",
    )
    triggers.add_argument("--condition-type", choices=["all", "tag", "regular"])
    triggers.add_argument("--cluster-name", help="Only triggers deploying to this cluster")

    return parser.parse_args(list(argv))


def _json_default(value: object) -> object:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, frozenset | set):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _emit(value: object) -> None:
    print(json.dumps(value, default=_json_default, indent=2, sort_keys=True))


def _run_command(args: argparse.Namespace) -> None:  # noqa: C901
    config = None
    if args.region:
        config = get_huaweicloud_config(region=args.region)

    if args.command == "signature-associate":
        timeouts = Timeouts(create=args.timeout, update=args.timeout, delete=args.timeout)
        association = associate_signature(
            instance_id=args.instance_id,
            signature_id=args.signature_id,
            publish_ids=args.publish_ids,
            config=config,
            timeouts=timeouts,
        )
        _emit(asdict(association))
    elif args.command == "signature-show":
        association = show_signature_association(
            instance_id=args.instance_id,
            signature_id=args.signature_id,
            config=config,
        )
        if association is None:
            log.warning("No APIs are bound to signature %s", args.signature_id)
            return
        _emit(asdict(association))
    elif args.command == "signature-dissociate":
        removed = dissociate_signature(
            instance_id=args.instance_id,
            signature_id=args.signature_id,
            config=config,
            timeouts=Timeouts(delete=args.timeout),
        )
        log.info("Signature %s %s", args.signature_id, "unbound" if removed else "was not bound")
    elif args.command == "alert-rule-show":
        rule = show_alert_rule(workspace_id=args.workspace_id, rule_id=args.rule_id, config=config)
        if rule is None:
            log.warning("Alert rule %s not found", args.rule_id)
            return
        _emit(asdict(rule))
    elif args.command == "alert-rule-status":
        rule = set_alert_rule_status(
            workspace_id=args.workspace_id,
            rule_id=args.rule_id,
            status=AlertRuleStatus(args.status),
            config=config,
        )
        log.info("Alert rule %s is now %s", rule.id, rule.status)
    elif args.command == "image-triggers":
        matched = fetch_image_triggers(
            organization=args.organization,
            repository=args.repository,
            trigger_filter=ImageTriggerFilter(
                name=args.name,
                enabled=args.enabled,
                condition_type=args.condition_type,
                cluster_name=args.cluster_name,
            ),
            config=config,
        )
        _emit([asdict(trigger) for trigger in matched])
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        _run_command(parsed_args)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(EXIT_USAGE)
    except ReconcileTimeoutError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(EXIT_TIMEOUT)
    except (ReconcileError, CloudAPIError, ValueError):
        log.exception("Command %s failed", parsed_args.command)
        sys.exit(EXIT_FAILURE)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
