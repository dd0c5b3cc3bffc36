"""
Exception types for default-migrator.

Skipped occurrences are not errors; they are reported through
``OccurrenceState.SKIPPED``. The exceptions below cover the cases where a file
as a whole cannot be processed.
"""


class MigrationError(Exception):
  """Base class for all migration failures."""


class TemplateError(MigrationError):
  """
  Raised when a field template cannot be built or instantiated during apply.

  The engine aborts the current file only and returns it unmodified.
  """


class TreeFormatError(MigrationError):
  """Raised when an interchange document does not describe a valid tree."""
