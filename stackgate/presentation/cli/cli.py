"""
CLI Module

Architectural Intent:
- Command-line interface for stackgate
- Entry point for all user interactions
- Delegates to the check-for-changes use case via the composition root
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
import traceback

from stackgate.application.dtos.check_dtos import CheckForChangesRequest
from stackgate.composition_root import create_container
from stackgate.domain.errors import (
    MetadataFetchFailed,
    ServiceDefinitionError,
    StoreNotFound,
    SubscriptionDeleteFailed,
)
from stackgate.domain.events.check_events import SubscriptionFilterDeletedEvent
from stackgate.domain.value_objects.evaluation_result import SkipBlocker
from stackgate.infrastructure.config import load_config
from stackgate.infrastructure.logging import configure_logging, level_from_name
from stackgate.infrastructure.service_loader import load_service_definition

EXIT_DEPLOYMENT_REQUIRED = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="stackgate: skip unchanged serverless deployments safely"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit structured JSON logs"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser(
        "check",
        help="Decide whether a deployment is necessary and clear stale log subscriptions",
    )
    check_parser.add_argument(
        "--config", "-c", default=None, help="Path to stackgate.json"
    )
    check_parser.add_argument(
        "--service-path", "-p", default=None, help="Service directory"
    )
    check_parser.add_argument(
        "--state-file", default=None, help="Packaging state file, relative to the service path"
    )
    check_parser.add_argument("--stage", "-s", default=None, help="Deployment stage")
    check_parser.add_argument("--region", "-r", default=None, help="AWS region")
    check_parser.add_argument("--bucket", "-b", default=None, help="Deployment bucket")
    check_parser.add_argument(
        "--force", "-f", action="store_true",
        help="Skip change detection; stale subscription filters are still removed",
    )
    check_parser.add_argument(
        "--exit-code", action="store_true",
        help=f"Exit with {EXIT_DEPLOYMENT_REQUIRED} when a deployment is required",
    )
    check_parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    return parser


def _apply_overrides(config, args):
    deployment = config.deployment
    overrides = {
        "service_path": args.service_path,
        "state_file": args.state_file,
        "stage": args.stage,
        "bucket": args.bucket,
    }
    overrides = {k: v for k, v in overrides.items() if v}
    if overrides:
        deployment = dataclasses.replace(deployment, **overrides)

    aws = config.aws
    if args.region:
        aws = dataclasses.replace(aws, region=args.region)

    return dataclasses.replace(config, deployment=deployment, aws=aws)


async def run_check(args, config, verbose: bool) -> int:
    config = _apply_overrides(config, args)

    try:
        service = load_service_definition(
            config.state_file_path,
            service_path=config.deployment.service_path,
            stage=config.deployment.stage or None,
            region=config.aws.region or None,
            bucket=config.deployment.bucket or None,
        )
    except ServiceDefinitionError as e:
        print(f"[-] {e}")
        return 1

    container = create_container(config, service)

    async def report_deletion(event: SubscriptionFilterDeletedEvent) -> None:
        print(
            f"[*] Removed subscription filter {event.filter_name} from "
            f"{event.log_group_name} (function {event.function_name})"
        )

    container.event_bus.subscribe(SubscriptionFilterDeletedEvent, report_deletion)

    try:
        response = await container.check_for_changes.execute(
            CheckForChangesRequest(force=args.force)
        )
    except StoreNotFound as e:
        print(f"[-] {e}")
        return 1
    except MetadataFetchFailed as e:
        print(f"[-] Cannot assess deployment state: {e}")
        if verbose:
            traceback.print_exc()
        return 1
    except SubscriptionDeleteFailed as e:
        print(f"[-] {e}")
        print("[-] The deployment would fail with a subscription filter limit error.")
        if verbose:
            traceback.print_exc()
        return 1
    except Exception as e:
        print(f"[-] Deployment check failed: {e}")
        if verbose:
            traceback.print_exc()
        return 1

    if args.json:
        print(json.dumps(response.to_dict()))
    elif response.skipped:
        print("[+] Service files not changed. Deployment can be skipped.")
    else:
        evaluation = response.evaluation
        if evaluation.access_denied:
            print(
                "[!] Not authorized to read at least one function; "
                "deployment will not be skipped even if service files did not change."
            )
        print(f"[*] Deployment required: {'; '.join(evaluation.reasons)}")
        if SkipBlocker.HASH_MISMATCH in evaluation.blockers:
            print(f"    Remote hashes: {','.join(sorted(evaluation.remote_hashes))}")
            print(f"    Local hashes: {','.join(sorted(evaluation.local_hashes))}")

    if not response.skipped and args.exit_code:
        return EXIT_DEPLOYMENT_REQUIRED
    return 0


async def async_main():
    parser = build_parser()
    args = parser.parse_args()

    config = load_config(getattr(args, "config", None))
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = level_from_name(config.log_level)
    configure_logging(level=level, json_format=args.json_logs)

    verbose = args.verbose or args.debug

    if args.command == "check":
        exit_code = await run_check(args, config, verbose)
        if exit_code:
            sys.exit(exit_code)
        return

    parser.print_help()


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
