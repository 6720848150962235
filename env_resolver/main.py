"""
Environment Provider Resolver - CLI Entry Point.

Usage:
    env-resolver resolve awsenvironment:Test-Environment \\
        --identity user:default/jane --token "$BACKSTAGE_TOKEN"

Prints the action output as JSON on success. On failure the error message is
logged and the command exits with status 1.
"""

import argparse
import json
import os
import sys
from typing import List, Optional

from env_resolver.core.context import ResolutionContext
from env_resolver.core.exceptions import ResolutionError
from env_resolver.core.factory import create_resolver
from env_resolver.logger import logger, print_stack_trace, set_debug_mode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="env-resolver",
        description="Resolve AWS environment providers from the entity catalog.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser("resolve", help="Resolve the providers of an environment.")
    resolve.add_argument("environment_ref", help="Environment entity ref, e.g. awsenvironment:dev")
    resolve.add_argument(
        "--identity",
        default=os.environ.get("ENV_RESOLVER_IDENTITY"),
        help="Calling user's entity ref (default: $ENV_RESOLVER_IDENTITY).",
    )
    resolve.add_argument(
        "--token",
        default=os.environ.get("BACKSTAGE_TOKEN"),
        help="Catalog token (default: $BACKSTAGE_TOKEN).",
    )
    return parser


def run_resolve(args) -> int:
    context = ResolutionContext(args.environment_ref, identity=args.identity, token=args.token)
    resolver = create_resolver()
    try:
        resolved = resolver.resolve(context)
    finally:
        resolver.catalog.close()

    if resolved is None:
        return 0
    print(json.dumps(resolved.to_output(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.debug:
        set_debug_mode(True)

    try:
        return run_resolve(args)
    except ResolutionError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        print_stack_trace()
        logger.error(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
