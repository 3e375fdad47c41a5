#!/usr/bin/env python3
# Path: ixbrl_instance/main.py
"""
ixbrl_instance - Main Entry Point

Generates XBRL instance documents from an Inline XBRL document set,
one document per target.

Data Flow:
    INPUT:   Inline XBRL (XHTML) files forming one document set
    PROCESS: Indexing, namespace curation, resource pruning, fact emission
    OUTPUT:  <name><target>.xbrl files in the output directory

Usage:
    ixbrl-instance report.xhtml
    ixbrl-instance part1.xhtml part2.xhtml --name report --output-dir out/
    ixbrl-instance report.xhtml --target fr --target de --parallel
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .core.config_loader import ConfigLoader
from .core.logger import setup_ipo_logging, get_input_logger
from .ixbrl.document_set import IXBRLDocumentSet
from .instance.generator import InstanceGenerator
from .output.instance_writer import InstanceWriter
from .models.error import StructuralError
from .constants import (
    STATUS_OK,
    STATUS_FAIL,
    STATUS_WARN,
    STATUS_INFO,
    MENU_HEADER,
    MENU_SEPARATOR,
)


def build_parser() -> argparse.ArgumentParser:
    """Command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='ixbrl-instance',
        description='Generate XBRL instance documents from Inline XBRL',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ixbrl-instance report.xhtml                       All targets of one document
  ixbrl-instance a.xhtml b.xhtml --name report      One document set, two files
  ixbrl-instance report.xhtml --target fr           Only the 'fr' target
        """
    )

    parser.add_argument(
        'files',
        nargs='+',
        type=Path,
        help='Inline XBRL files forming one document set'
    )

    parser.add_argument(
        '--target', '-t',
        action='append',
        dest='targets',
        help="Target to generate (repeatable; '' is the default target). Default: all"
    )

    parser.add_argument(
        '--name', '-n',
        help='Document-name seed (default: stem of the first file)'
    )

    parser.add_argument(
        '--output-dir', '-o',
        type=Path,
        help='Output directory (default: IXBRL_INSTANCE_OUTPUT_DIR or current directory)'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (default: IXBRL_INSTANCE_LOG_LEVEL)'
    )

    parser.add_argument(
        '--parallel', '-p',
        action='store_true',
        help='Generate targets in parallel'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress summary output'
    )

    return parser


def print_summary(documents, paths: list[Path]) -> None:
    """Print per-target results."""
    print()
    print(MENU_HEADER)
    print("  XBRL INSTANCE GENERATION")
    print(MENU_HEADER)
    print(f"  {'Target':<12} {'Facts':>6} {'Tuples':>7} {'Contexts':>9} {'Units':>6}  Status")
    print(f"  {MENU_SEPARATOR}")

    for document in documents:
        if not document.succeeded:
            status = STATUS_FAIL
        elif document.errors:
            status = STATUS_WARN
        else:
            status = STATUS_OK
        print(
            f"  {repr(document.target):<12} {document.fact_count:>6} {document.tuple_count:>7} "
            f"{document.context_count:>9} {document.unit_count:>6}  {status}"
        )

    print()
    for path in paths:
        print(f"  {STATUS_INFO} {path}")
    print()


def run(args: argparse.Namespace, config: ConfigLoader) -> int:
    """
    Generate and write the requested targets.

    Returns:
        Exit code (0 for success)
    """
    logger = get_input_logger('main')

    document_set = IXBRLDocumentSet.from_files(args.files, config)
    indices = document_set.build_indices()

    targets = args.targets if args.targets is not None else indices.targets()
    name = args.name or args.files[0].stem
    logger.info(f"Generating {len(targets)} target(s) for '{name}'")

    documents = InstanceGenerator(indices, config=config).generate_all(targets, name)

    output_dir = args.output_dir or config.get('output_dir') or Path.cwd()
    paths = InstanceWriter(config).write_all(documents, Path(output_dir))

    if not args.quiet:
        print_summary(documents, paths)

    return 0 if all(document.succeeded for document in documents) else 1


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for structural failure or missing input)
    """
    args = build_parser().parse_args(argv)

    config = ConfigLoader()
    config.override('log_level', args.log_level)
    if args.parallel:
        config.override('enable_parallel', True)

    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=config.get('log_level', 'INFO'),
        console_output=config.get('log_console', True)
    )

    try:
        return run(args, config)

    except StructuralError as e:
        print(f"\n{STATUS_FAIL} {e}")
        return 1

    except KeyboardInterrupt:
        print("\n[Interrupted]")
        return 130


if __name__ == '__main__':
    sys.exit(main())
