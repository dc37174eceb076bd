"""
Command line: one subcommand per operation, options generated from its parameter model.

    ghbridge create_issue --owner octocat --repo hello --title "Bug"
    ghbridge --dry-run merge_pull_request --owner o --repo r --pr-number 7 --method squash
    ghbridge operations
"""

import argparse
import shlex
import sys
from typing import Any, Dict, List, Optional, Tuple

from .config import load_settings
from .operations import Catalog, UnknownOperation, describe_error, get_operation, list_operations
from .render import render_catalog
from .schema import Operation, field_type

LIST_COMMAND = "operations"


def _key_value(text: str) -> Tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    return key, value


def _add_operation(sub: Any, op: Operation) -> None:
    p = sub.add_parser(op.name, help=op.description, description=op.description)
    for name, field in op.params.model_fields.items():
        flag = "--" + name.replace("_", "-")
        kind = field_type(field.annotation)
        # default=None everywhere: only options actually given reach the parameter model
        if kind is bool:
            p.add_argument(flag, dest=name, action="store_true", default=None)
        elif kind is int:
            p.add_argument(flag, dest=name, type=int, default=None)
        elif kind is dict:
            p.add_argument(
                "--input", dest=name, action="append", type=_key_value, default=None,
                metavar="KEY=VALUE", help="Workflow input (repeatable)",
            )
        else:
            p.add_argument(flag, dest=name, default=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghbridge",
        description="Run GitHub operations through the gh command-line client",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Seconds before gh is killed (default: 30)")
    parser.add_argument("--default-branch", default=None, help="Branch used when none is given (default: main)")
    parser.add_argument("--gh", dest="gh_binary", default=None, help="gh executable (default: gh)")
    parser.add_argument("--dry-run", action="store_true", help="Print the gh command instead of running it")
    sub = parser.add_subparsers(dest="operation", metavar="OPERATION")
    sub.required = True
    sub.add_parser(LIST_COMMAND, help="List available operations and their parameters")
    for op in list_operations():
        _add_operation(sub, op)
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def operation_params(args: argparse.Namespace) -> Dict[str, Any]:
    """Parameters given on the command line for the selected operation."""
    params: Dict[str, Any] = {}
    for name in get_operation(args.operation).params.model_fields:
        value = getattr(args, name, None)
        if value is None:
            continue
        if isinstance(value, list):
            value = dict(value)
        params[name] = value
    return params


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.operation == LIST_COMMAND:
        print(render_catalog(list_operations()))
        return 0

    settings = load_settings(
        timeout=args.timeout,
        default_branch=args.default_branch,
        gh_binary=args.gh_binary,
    )
    catalog = Catalog(settings)
    params = operation_params(args)

    if args.dry_run:
        try:
            tokens = catalog.build(args.operation, **params)
        except (UnknownOperation, ValueError) as exc:
            print(f"Error: {describe_error(exc)}", file=sys.stderr)
            return 1
        print(shlex.join([settings.gh_binary, *tokens]))
        return 0

    out = catalog.call(args.operation, **params)
    if out.startswith("Error:"):
        print(out, file=sys.stderr)
        return 1
    print(out)
    return 0
