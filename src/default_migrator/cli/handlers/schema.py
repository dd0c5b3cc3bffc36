"""
Schema Command Handler.

Prints the Java source of the typed value holder annotation family so it can be
added to the project being migrated.
"""

from typing import Optional

from pydantic import ValidationError

from default_migrator.config import MigrationConfig
from default_migrator.core.holders import render_schema
from default_migrator.utils.console import log_error


def handle_schema(holder: Optional[str] = None) -> int:
  """
  Handles the 'schema' command execution.

  Args:
      holder: Fully qualified holder type; the configured one if None.

  Returns:
      int: Exit code (0 for success, 1 for an invalid holder name).
  """
  try:
    config = MigrationConfig.load(value_holder=holder)
  except ValidationError as e:
    log_error(f"Invalid holder type: {e}")
    return 1

  print(render_schema(config.value_holder), end="")
  return 0
