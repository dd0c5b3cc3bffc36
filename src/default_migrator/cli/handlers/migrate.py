"""
Migrate Command Handler.

This module implements the logic for the `default-migrator migrate` command.
It orchestrates:
1. Input discovery (tree files and directories of ``*.json`` trees).
2. Configuration loading (TOML + CLI overrides).
3. The two-phase migration over the whole batch via the Engine.
4. Output writing (JSON trees or rendered source) and trace logging.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError
from rich.table import Table

from default_migrator.config import MigrationConfig
from default_migrator.core.conversion_result import FileResult, MigrationResult
from default_migrator.core.engine import MigrationEngine
from default_migrator.core.errors import TreeFormatError
from default_migrator.tree.io import dumps, read_unit, write_unit
from default_migrator.tree.printer import print_unit
from default_migrator.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)


def _collect_inputs(paths: List[Path]) -> List[Tuple[Path, Path]]:
  """
  Expands inputs into (source file, output-relative path) pairs.

  Files map to their own name; directories contribute every ``*.json`` below
  them, relative to the directory.

  Args:
      paths: Files or directories given on the command line.

  Returns:
      List[Tuple[Path, Path]]: Sorted within each directory.
  """
  found = []
  for path in paths:
    if path.is_dir():
      found.extend((f, f.relative_to(path)) for f in sorted(path.rglob("*.json")))
    else:
      found.append((path, Path(path.name)))
  return found


def handle_migrate(
  paths: List[Path],
  output_dir: Optional[Path],
  render: bool = False,
  settings: Optional[Dict[str, Any]] = None,
  json_trace_path: Optional[Path] = None,
  workers: Optional[int] = None,
) -> int:
  """
  Handles the 'migrate' command execution.

  All inputs form one run: the scan phase sees every file before any file is
  rewritten.

  Args:
      paths: Tree documents or directories of them.
      output_dir: Where migrated documents are written. Printed if None.
      render: If True, emit Java-like source text instead of JSON.
      settings: ``key=value`` configuration overrides.
      json_trace_path: Optional path to dump execution trace JSON.
      workers: Override for the thread pool size.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  missing = [p for p in paths if not p.exists()]
  if missing:
    log_error(f"Input not found: {', '.join(str(p) for p in missing)}")
    return 1

  first = paths[0]
  try:
    config = MigrationConfig.load(
      workers=workers,
      settings=settings,
      search_path=first if first.is_dir() else first.parent,
    )
  except ValidationError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  inputs = _collect_inputs(paths)
  if not inputs:
    log_warning("No tree documents found.")
    return 0

  units = []
  for src_file, _ in inputs:
    try:
      units.append(read_unit(src_file))
    except (OSError, TreeFormatError) as e:
      log_error(f"Failed to load [path]{src_file}[/path]: {e}")
      return 1

  log_info(f"Migrating {len(units)} files...")
  result = MigrationEngine(config=config).run(units)

  if json_trace_path:
    try:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      with open(json_trace_path, "wt", encoding="utf-8") as f:
        json.dump(result.trace_events, f, indent=2)
      log_info(f"Trace saved to [path]{json_trace_path}[/path]")
    except OSError as e:
      log_error(f"Failed to write trace: {e}")

  # failed files carry their input unit, so the output stays a full mirror
  for (src_file, rel_path), file_result in zip(inputs, result.files):
    if not output_dir:
      print(print_unit(file_result.unit) if render else dumps(file_result.unit))
      continue
    if render:
      dest = output_dir / rel_path.with_suffix(".java")
      dest.parent.mkdir(parents=True, exist_ok=True)
      with open(dest, "wt", encoding="utf-8") as f:
        f.write(print_unit(file_result.unit))
    else:
      dest = output_dir / rel_path
      write_unit(file_result.unit, dest)
    if file_result.changed:
      log_success(f"Migrated: [path]{src_file}[/path] -> [path]{dest}[/path]")

  _print_batch_summary(result)
  return 0 if result.success else 1


def _status(res: FileResult) -> str:
  if not res.success:
    return "❌ Failed"
  return "✏️ Changed" if res.changed else "Unchanged"


def _print_batch_summary(result: MigrationResult) -> None:
  """
  Renders a summary table of migration results to the console.

  Args:
      result: The engine result for the batch.
  """
  table = Table(title="Migration Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Fields", justify="right")
  table.add_column("Rewritten", justify="right")
  table.add_column("Skipped", justify="right")
  table.add_column("Issues", style="red")

  for res in result.files:
    table.add_row(
      res.source_path,
      _status(res),
      str(res.fields_added),
      str(res.occurrences_rewritten),
      str(res.occurrences_skipped),
      "; ".join(res.errors),
    )

  console.print(table)

  failures = sum(1 for r in result.files if not r.success)
  if failures == 0:
    log_success(f"Batch Complete: {len(result.files)} files, {result.entries} synthesized entries.")
  else:
    log_error(f"{failures}/{len(result.files)} files left unmodified due to errors.")
