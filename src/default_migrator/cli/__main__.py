"""
Main Entry Point for default-migrator CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `default_migrator.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from default_migrator import __version__
from default_migrator.cli import commands
from default_migrator.config import parse_cli_key_values


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="default-migrator: Typed default value migration for Java trees")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: MIGRATE ---
  cmd_mig = subparsers.add_parser("migrate", help="Migrate JSON tree documents (files or directories)")
  cmd_mig.add_argument("paths", type=Path, nargs="+", help="Input tree files or directories of *.json trees")
  cmd_mig.add_argument("--out", type=Path, default=None, help="Output directory (default: print to stdout)")
  cmd_mig.add_argument(
    "--render",
    action="store_true",
    help="Write Java-like source text instead of JSON trees",
  )
  cmd_mig.add_argument(
    "--config",
    nargs="*",
    help="Configuration overrides in key=value format (e.g. inline_container_literals=false)",
  )
  cmd_mig.add_argument(
    "--json-trace", type=Path, default=None, help="Dump full execution trace (phases, entries, mutations) to a JSON file."
  )
  cmd_mig.add_argument("--workers", type=int, default=None, help="Thread pool size (default: from toml, else 1)")

  # --- Command: SCHEMA ---
  cmd_schema = subparsers.add_parser("schema", help="Print the Java source of the value holder annotations")
  cmd_schema.add_argument("--holder", default=None, help="Fully qualified holder type (default: from toml)")

  args = parser.parse_args(argv)

  if args.command == "migrate":
    settings = parse_cli_key_values(args.config)
    return commands.handle_migrate(
      args.paths,
      args.out,
      render=args.render,
      settings=settings,
      json_trace_path=args.json_trace,
      workers=args.workers,
    )

  elif args.command == "schema":
    return commands.handle_schema(args.holder)

  return 0


if __name__ == "__main__":
  sys.exit(main())
