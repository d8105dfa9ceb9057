"""CLI entry point for provider params sync."""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .core.routing import apply_draft, make_draft, resolve_capabilities
from .errors import ParamsSyncError, decode_json_object
from .models.controls import GenerationControls
from .models.providers import ProviderType


def _read_json(path: Optional[str], source: str) -> Dict[str, Any]:
    """Read a JSON object from a file, or stdin when no path is given."""
    if path is None:
        return decode_json_object(sys.stdin.read(), source="stdin")
    try:
        with open(path, 'r') as f:
            text = f.read()
    except OSError as e:
        raise ParamsSyncError(f"Cannot read {source} file {path}: {e}") from e
    return decode_json_object(text, source=path)


def _load_controls(data: Dict[str, Any]) -> GenerationControls:
    try:
        return GenerationControls.model_validate(data)
    except ValidationError as e:
        raise ParamsSyncError(f"Invalid controls: {e.error_count()} validation error(s)") from e


def _dump(value: Any) -> None:
    print(json.dumps(value, indent=2, sort_keys=True))


def draft_command(args: argparse.Namespace) -> None:
    controls = _load_controls(_read_json(args.controls, "controls"))
    _dump(make_draft(args.provider, args.model, controls))


def apply_command(args: argparse.Namespace) -> None:
    if args.draft is None and args.controls is None:
        draft = _read_json(None, "draft")
        controls = None
    else:
        draft = _read_json(args.draft, "draft")
        controls = _load_controls(_read_json(args.controls, "controls")) if args.controls else None

    result = apply_draft(args.provider, args.model, draft, controls)
    _dump({
        "controls": result.controls.model_dump(mode="json", exclude_none=True),
        "remainder": result.remainder,
    })


def capabilities_command(args: argparse.Namespace) -> None:
    provider = ProviderType.parse(args.provider)
    _dump(resolve_capabilities(provider, args.model).model_dump(mode="json"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="params-sync",
        description="Translate between canonical generation controls and provider drafts",
    )
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    draft_parser = subparsers.add_parser('draft', help='Build a provider draft from controls JSON')
    draft_parser.add_argument('provider', help='Provider family (e.g., "openai", "gemini")')
    draft_parser.add_argument('model', help='Model identifier')
    draft_parser.add_argument('--controls', help='Controls JSON file (stdin when omitted)')
    draft_parser.set_defaults(handler=draft_command)

    apply_parser = subparsers.add_parser('apply', help='Apply an edited draft to controls')
    apply_parser.add_argument('provider', help='Provider family')
    apply_parser.add_argument('model', help='Model identifier')
    apply_parser.add_argument('--draft', help='Draft JSON file (stdin when omitted)')
    apply_parser.add_argument('--controls', help='Current controls JSON file')
    apply_parser.set_defaults(handler=apply_command)

    caps_parser = subparsers.add_parser('capabilities', help='Show the capability set for a model')
    caps_parser.add_argument('provider', help='Provider family')
    caps_parser.add_argument('model', help='Model identifier')
    caps_parser.set_defaults(handler=capabilities_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, 'handler', None):
        parser.print_help()
        return 1

    try:
        args.handler(args)
    except ParamsSyncError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
