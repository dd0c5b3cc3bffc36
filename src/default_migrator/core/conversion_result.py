"""
Data structures representing the output of a migration run.

This module defines the `FileResult` and `MigrationResult` Pydantic models,
which encapsulate the migrated trees, per-file errors, and the execution trace logs.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class FileResult(BaseModel):
  """
  Outcome of migrating one compilation unit.
  """

  model_config = ConfigDict(arbitrary_types_allowed=True)

  source_path: str = Field(description="Stable per-file key of the unit.")
  unit: Any = Field(default=None, description="The migrated CompilationUnit (the input unit on failure).")
  changed: bool = Field(default=False, description="True if the unit differs from its input.")
  fields_added: int = Field(default=0, description="Synthesized field declarations.")
  occurrences_rewritten: int = Field(default=0, description="Attributes removed from holder annotations.")
  occurrences_skipped: int = Field(default=0, description="Occurrences left as written.")
  errors: List[str] = Field(default_factory=list, description="Failures that aborted this file.")

  @property
  def success(self) -> bool:
    return not self.errors


class MigrationResult(BaseModel):
  """
  Container for the results of a migration job.
  """

  model_config = ConfigDict(arbitrary_types_allowed=True)

  files: List[FileResult] = Field(default_factory=list, description="Per-file outcomes in input order.")
  entries: int = Field(default=0, description="Accumulator entries recorded during scan.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def units(self) -> List[Any]:
    """Migrated compilation units in input order."""
    return [f.unit for f in self.files]

  @property
  def errors(self) -> List[str]:
    return [f"{f.source_path}: {e}" for f in self.files for e in f.errors]

  @property
  def success(self) -> bool:
    return all(f.success for f in self.files)

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
