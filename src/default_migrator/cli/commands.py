"""
CLI Command Handlers Facade.

Re-exports handlers from `default_migrator.cli.handlers` so the dispatcher and
tests have a single import point.
"""

from default_migrator.cli.handlers.migrate import (
  handle_migrate,
  _collect_inputs,
  _print_batch_summary,
)
from default_migrator.cli.handlers.schema import handle_schema

__all__ = [
  "_collect_inputs",
  "_print_batch_summary",
  "handle_migrate",
  "handle_schema",
]
