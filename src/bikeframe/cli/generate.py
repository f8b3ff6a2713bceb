"""
Command-line interface for bicycle frame geometry generation.
"""

import argparse
import json
import sys
from pathlib import Path

from ..errors import GeometryError
from ..io.loaders import parse_parameters, read_parameters_json, save_parameters_json
from ..calculator.chain import calculate_chain_path, chain_link_counts
from ..calculator.constants import PRESETS, get_preset
from ..calculator.core import calculate_geometry
from ..calculator.output import to_json, to_markdown, to_summary
from ..calculator.validation import Severity, validate_parameters


def parse_override(text: str):
    """
    Split a ``KEY=VALUE`` override.

    The value is read as JSON so numbers and booleans keep their type;
    anything that is not valid JSON is kept as a string.
    """
    if '=' not in text:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {text!r}")
    key, raw = text.split('=', 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError(f"Empty parameter name in {text!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key, value


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Solve bicycle frame geometry from a parameter file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a parameter file and write the geometry record
  bikeframe-geometry frame.json -o geometry.json

  # Start from the editor defaults
  bikeframe-geometry --preset default

  # Override individual parameters
  bikeframe-geometry --preset default --set S_length=40 --set isRHD=true

  # Markdown report plus the chain path
  bikeframe-geometry frame.json --markdown frame.md --chain -o geometry.json

  # Check parameters without solving
  bikeframe-geometry frame.json --validate-only
        """
    )

    parser.add_argument(
        'params_file',
        type=str,
        nargs='?',
        default=None,
        help='JSON parameter file (flat or grouped by editor folder)'
    )

    parser.add_argument(
        '--preset',
        type=str,
        choices=sorted(PRESETS),
        default=None,
        help='Start from a named preset; the parameter file and --set override it'
    )

    parser.add_argument(
        '--set',
        dest='overrides',
        metavar='KEY=VALUE',
        type=parse_override,
        action='append',
        default=[],
        help='Override one parameter (repeatable); VALUE is parsed as JSON'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Write the geometry record as JSON to this file'
    )

    parser.add_argument(
        '--markdown',
        type=str,
        default=None,
        help='Write a markdown report to this file'
    )

    parser.add_argument(
        '--chain',
        action='store_true',
        help='Include the chain path in the JSON output'
    )

    parser.add_argument(
        '--save-params',
        type=str,
        default=None,
        help='Save the fully resolved parameters (defaults filled in) as JSON'
    )

    parser.add_argument(
        '--validate-only',
        action='store_true',
        help='Run validation and print messages without solving'
    )

    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Only print errors'
    )

    args = parser.parse_args(argv)

    if args.params_file is None and args.preset is None:
        parser.error("a parameter file or --preset is required")

    def say(message=""):
        if not args.quiet:
            print(message)

    # Build parameters: preset, then file, then --set overrides
    raw = get_preset(args.preset) if args.preset else {}
    try:
        if args.params_file:
            say(f"Loading parameters from {args.params_file}...")
            raw.update(read_parameters_json(args.params_file))
        raw.update(dict(args.overrides))
        params = parse_parameters(raw)
    except (OSError, ValueError) as e:
        print(f"Error loading parameters: {e}", file=sys.stderr)
        return 1

    validation = validate_parameters(params)
    for msg in validation.messages:
        line = f"  [{msg.severity.value}] {msg.code}: {msg.message}"
        if msg.severity == Severity.ERROR:
            print(line, file=sys.stderr)
        else:
            say(line)
        if msg.suggestion and not args.quiet:
            print(f"      Suggestion: {msg.suggestion}")

    if not validation.valid:
        print("\n❌ Parameters describe an impossible frame", file=sys.stderr)
        return 1

    if args.validate_only:
        say("\n✓ Parameters are valid")
        return 0

    try:
        geometry = calculate_geometry(params)
    except GeometryError as e:
        print(f"Error calculating geometry: {e}", file=sys.stderr)
        if e.fields:
            print(f"  Check: {', '.join(e.fields)}", file=sys.stderr)
        return 1

    chain = calculate_chain_path(geometry) if args.chain else None

    say("")
    say(to_summary(geometry))
    if chain:
        counts = chain_link_counts(chain)
        say(f"Chain: {sum(counts.values())} links ({', '.join(f'{k}={v}' for k, v in counts.items())})")

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(to_json(geometry, validation, chain=chain))
        say(f"\nSaved geometry: {output_path}")

    if args.markdown:
        markdown_path = Path(args.markdown)
        markdown_path.write_text(to_markdown(geometry, validation))
        say(f"Saved report: {markdown_path}")

    if args.save_params:
        save_parameters_json(params, args.save_params)
        say(f"Saved parameters: {args.save_params}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
