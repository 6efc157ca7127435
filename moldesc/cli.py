#!/usr/bin/env python3
"""Command-line interface for MolDesc.

This module provides a command-line interface for the MolDesc library,
allowing users to append descriptor columns to a table of molecules and to
list the available descriptors.
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .core.config import Config
from .core.exceptions import MolDescError, DescriptorNotFoundError, ConfigurationError
from .core.registry import MolDescriptor
from .descriptors.whim import WhimScheme
from .nodes import NODES, NodeModel


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def read_table(path: str, column: Optional[str] = None) -> pd.DataFrame:
    """
    Read the input molecules.

    A ``.csv`` file is read as a table; anything else is read as one SMILES
    per line. ``-`` reads SMILES lines from stdin.
    """
    if path != '-' and Path(path).suffix.lower() == '.csv':
        return pd.read_csv(path)

    if path == '-':
        lines = [line.strip() for line in sys.stdin]
    else:
        with open(path, 'r') as f:
            lines = [line.strip() for line in f]
    return pd.DataFrame({column or 'smiles': [line for line in lines if line]})


def write_table(table: pd.DataFrame, output: str, fmt: str) -> None:
    if fmt == 'json':
        text = table.to_json(orient='records', indent=2)
    else:
        text = table.to_csv(index=False)

    if output == '-':
        sys.stdout.write(text)
        if not text.endswith('\n'):
            sys.stdout.write('\n')
    else:
        with open(output, 'w') as f:
            f.write(text)


def _load_options(args: argparse.Namespace) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if args.preset:
        options.update(Config.from_preset(args.preset).to_dict())
    if args.config:
        options.update(Config.from_file(args.config).to_dict())
    if args.descriptor:
        options['descriptor_name'] = args.descriptor
    if args.errors:
        options['handle_errors'] = args.errors
    return options


def build_node(options: Dict[str, Any], column: Optional[str] = None) -> NodeModel:
    """
    Create the table node for a descriptor configuration.

    Args:
        options: Configuration with at least 'descriptor_name'
        column: Molecule column name; auto-detected when None

    Returns:
        Configured node instance
    """
    name = options.get('descriptor_name')
    if not name:
        raise ConfigurationError("no descriptor given; pass a name, --preset or --config")
    if name not in NODES:
        raise DescriptorNotFoundError(name, sorted(NODES))

    node = NODES[name]()
    node.settings.mol_column_name = column
    node.settings.handle_errors = options.get('handle_errors', 'warn')
    if 'random_seed' in options:
        node.settings.random_seed = int(options['random_seed'])

    schemes = options.get('scheme')
    if schemes is not None and hasattr(node.settings, 'schemes'):
        if isinstance(schemes, str):
            schemes = [schemes]
        try:
            selected = {WhimScheme.from_key(key) for key in schemes}
        except ValueError as e:
            raise ConfigurationError(str(e), 'scheme')
        for scheme in WhimScheme:
            node.settings.set_enabled(scheme, scheme in selected)

    return node


def calculate_command(args: argparse.Namespace) -> int:
    """Handle the calculate command."""
    try:
        options = _load_options(args)
        node = build_node(options, args.column)
        table = read_table(args.input, args.column)
        if table.empty:
            print("Error: No molecules found in input", file=sys.stderr)
            return 1

        logger.info(f"Calculating {options['descriptor_name']} for {len(table)} molecules")
        result = node.execute(table)
        write_table(result, args.output, args.format)
        return 0

    except MolDescError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def list_descriptors_command(args: argparse.Namespace) -> int:
    """Handle the list-descriptors command."""
    names: List[str] = MolDescriptor.list_descriptors()
    print("Available descriptors:")
    for name in names:
        print(f"  - {name}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description='MolDesc - molecular descriptors for molecule tables',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Count hydrogen bond acceptors for SMILES in a text file
  moldesc calculate hbond_acceptors -i molecules.smi -o counts.csv

  # WHIM descriptors with atomic mass weights from a CSV table
  moldesc calculate --preset whim_mass -i table.csv --column smiles --format json
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    calc_parser = subparsers.add_parser(
        'calculate',
        help='Append descriptor columns to a table of molecules'
    )
    calc_parser.add_argument('descriptor', nargs='?',
                             help='Descriptor name (e.g., hbond_acceptors, whim)')
    calc_parser.add_argument('--input', '-i', required=True,
                             help='Input .csv table or SMILES file (- for stdin)')
    calc_parser.add_argument('--output', '-o', default='-', help='Output file (- for stdout)')
    calc_parser.add_argument('--column', '-c', help='Molecule column name')
    calc_parser.add_argument('--format', '-f', choices=['csv', 'json'], default='csv',
                             help='Output format')
    calc_parser.add_argument('--preset', '-p', choices=Config.list_presets(),
                             help='Use a preset configuration')
    calc_parser.add_argument('--config', help='YAML or JSON configuration file')
    calc_parser.add_argument('--errors', choices=['raise', 'skip', 'warn'],
                             help='How to handle molecules that fail')

    subparsers.add_parser('list-descriptors', help='List available descriptors')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == 'calculate':
            return calculate_command(args)
        elif args.command == 'list-descriptors':
            return list_descriptors_command(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
