"""
Enumerations for default-migrator.

This module defines the closed vocabularies shared by the scan and apply phases:
how a declared type materializes, how a synthesized field may reference its
anchor, and where an individual annotation occurrence ended up.
"""

from enum import Enum


class MaterializationKind(str, Enum):
  """
  Target runtime representation derived from a member's declared type.

  Determines the conversion applied to the default value, the suffix used for
  synthesized field names, and the typed holder annotation that replaces the
  migrated attribute.
  """

  PASS_THROUGH_STRING = "pass_through_string"
  BOOLEAN = "boolean"
  BYTE = "byte"
  CHAR = "char"
  SHORT = "short"
  INT = "int"
  LONG = "long"
  FLOAT = "float"
  DOUBLE = "double"
  LIST = "list"
  ARRAY = "array"
  SET = "set"
  UNSUPPORTED = "unsupported"

  @property
  def is_container(self) -> bool:
    """True for kinds backed by a comma-split ``String[]``."""
    return self in (MaterializationKind.LIST, MaterializationKind.ARRAY, MaterializationKind.SET)

  @property
  def is_scalar(self) -> bool:
    """True for primitive-like kinds that parse a single value."""
    return self not in (
      MaterializationKind.PASS_THROUGH_STRING,
      MaterializationKind.UNSUPPORTED,
    ) and not self.is_container

  @property
  def is_materializable(self) -> bool:
    """True if the kind can yield an accumulator entry."""
    return self.is_scalar or self.is_container

  @property
  def storage_kind(self) -> "MaterializationKind":
    """
    Kind used when keying symbol entries.

    All container kinds share the same ``String[]`` field, so they collapse to ARRAY.
    """
    return MaterializationKind.ARRAY if self.is_container else self


class ContextSensitivity(str, Enum):
  """
  Whether a synthesized initializer may reference its anchor as written.
  """

  RESOLVED_LOCALLY = "resolved_locally"  # anchor declared in the same or an enclosing type
  REQUIRES_SCOPED_TEMPLATE = "requires_scoped_template"  # anchor must be re-qualified


class OccurrenceState(str, Enum):
  """
  Lifecycle of a single annotation occurrence.

  UNCLASSIFIED -> CLASSIFIED -> (SKIPPED | KEY_ASSIGNED) -> REWRITTEN
  """

  UNCLASSIFIED = "unclassified"
  CLASSIFIED = "classified"
  SKIPPED = "skipped"
  KEY_ASSIGNED = "key_assigned"
  REWRITTEN = "rewritten"


class SkipReason(str, Enum):
  """
  Why an occurrence was left exactly as the author wrote it.
  """

  UNSUPPORTED_KIND = "unsupported_kind"
  UNSUPPORTED_ANCHOR = "unsupported_anchor"
  UNRESOLVED_SYMBOL = "unresolved_symbol"
  INVALID_LITERAL = "invalid_literal"
  MISSING_ENTRY = "missing_entry"
