"""
Field Name Generator.

Produces identifiers for synthesized fields:

    someField              + BOOLEAN -> someFieldAsBoolean
    Constants.SOME_BOOLEAN + BOOLEAN -> constants__some_booleanAsBoolean
    (3rd literal in file)  + LIST    -> literalArg2AsArray

Collisions with names already visible in the target scope, or with names
generated earlier in the same run for the same file, are resolved by appending
1, 2, ... to the candidate.
"""

import threading
from typing import Dict, Iterable, Set

from default_migrator.enums import MaterializationKind

LITERAL_BASE = "literalArg"

_SUFFIXES = {
  MaterializationKind.BOOLEAN: "Boolean",
  MaterializationKind.BYTE: "Byte",
  MaterializationKind.CHAR: "Char",
  MaterializationKind.SHORT: "Short",
  MaterializationKind.INT: "Int",
  MaterializationKind.LONG: "Long",
  MaterializationKind.FLOAT: "Float",
  MaterializationKind.DOUBLE: "Double",
  MaterializationKind.LIST: "Array",
  MaterializationKind.ARRAY: "Array",
  MaterializationKind.SET: "Array",
}


def kind_suffix(kind: MaterializationKind) -> str:
  """
  Returns the ``As<Kind>`` suffix for a materializable kind.

  Raises:
      ValueError: For PASS_THROUGH_STRING and UNSUPPORTED.
  """
  try:
    return "As" + _SUFFIXES[kind]
  except KeyError:
    raise ValueError(f"Kind '{kind.value}' does not synthesize fields")


def symbol_base(anchor_text: str) -> str:
  """
  Flattens an anchor's source text into a name base.

  Qualified text is lower-cased with separators replaced by ``__``; bare
  names are kept verbatim.

  Args:
      anchor_text: Source text such as ``Constants.Nested.INNER_CHAR``.

  Returns:
      str: The base (``constants__nested__inner_char``).
  """
  if "." in anchor_text:
    return anchor_text.replace(".", "__").lower()
  return anchor_text


def literal_base(index: int) -> str:
  return f"{LITERAL_BASE}{index}"


class NameGenerator:
  """
  Run-scoped registry of generated field names.

  One instance lives for one scan phase. Names are tracked per file, which is
  at least as strict as per target scope since a scope never spans files.
  """

  def __init__(self) -> None:
    self._generated: Dict[str, Set[str]] = {}
    self._lock = threading.Lock()

  def generate(self, file: str, base: str, kind: MaterializationKind, taken: Iterable[str] = ()) -> str:
    """
    Returns a fresh identifier and reserves it for ``file``.

    Args:
        file: Source path of the compilation unit.
        base: Name base from ``symbol_base`` or ``literal_base``.
        kind: Materialization kind providing the suffix.
        taken: Names visible in the target scope or declared in classes nested in it.

    Returns:
        str: The unique name.
    """
    candidate = base + kind_suffix(kind)
    with self._lock:
      reserved = self._generated.setdefault(file, set())
      used = reserved | set(taken)
      name = candidate
      counter = 1
      while name in used:
        name = f"{candidate}{counter}"
        counter += 1
      reserved.add(name)
      return name

  def generated(self, file: str) -> Set[str]:
    with self._lock:
      return set(self._generated.get(file, ()))
