"""
Field Templates and Inline Conversions.

Two ways of materializing a default value for a typed holder annotation:

1.  **Field templates** synthesize a private field whose initializer converts
    the anchor at runtime::

        private boolean flagAsBoolean = Boolean.parseBoolean(#{anchor});
        private char letterAsChar = #{anchor}.charAt(0);
        private String[] namesAsArray = #{anchor}.split(",");

2.  **Inline conversions** turn a string literal into the target literal at
    transform time (``"3"`` -> ``3``, ``"a"`` -> ``'a'``,
    ``"a,b"`` -> ``{"a", "b"}``).
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from default_migrator.core.errors import TemplateError
from default_migrator.enums import MaterializationKind
from default_migrator.tree.nodes import (
  ArrayInitializer,
  FieldAccess,
  FieldDeclaration,
  Identifier,
  LiteralExpr,
  MethodInvocation,
)
from default_migrator.tree.printer import print_type
from default_migrator.tree.types import (
  BOOLEAN,
  BYTE,
  CHAR,
  DOUBLE,
  FLOAT,
  INT,
  LONG,
  SHORT,
  STRING_ARRAY,
  ClassType,
  JavaType,
  Primitive,
)

ANCHOR_PLACEHOLDER = "#{anchor}"


@dataclass(frozen=True)
class Conversion:
  """
  Runtime conversion of a String anchor.

  Static conversions call ``static_owner.method(anchor)``; receiver conversions
  call ``anchor.method(arguments)``.
  """

  method: str
  static_owner: Optional[str] = None
  arguments: Tuple[str, ...] = ()

  def render(self, anchor_text: str) -> str:
    if self.static_owner:
      return f"{self.static_owner}.{self.method}({anchor_text})"
    return f"{anchor_text}.{self.method}({', '.join(self.arguments)})"

  def build(self, anchor) -> MethodInvocation:
    if self.static_owner:
      owner = ClassType(f"java.lang.{self.static_owner}")
      return MethodInvocation(self.method, Identifier(self.static_owner, type=owner), (anchor,))
    return MethodInvocation(self.method, anchor, tuple(LiteralExpr(a) for a in self.arguments))


_SPLIT = Conversion("split", arguments=('","',))

_CONVERSIONS = {
  MaterializationKind.BOOLEAN: (BOOLEAN, Conversion("parseBoolean", "Boolean")),
  MaterializationKind.BYTE: (BYTE, Conversion("parseByte", "Byte")),
  MaterializationKind.CHAR: (CHAR, Conversion("charAt", arguments=("0",))),
  MaterializationKind.SHORT: (SHORT, Conversion("parseShort", "Short")),
  MaterializationKind.INT: (INT, Conversion("parseInt", "Integer")),
  MaterializationKind.LONG: (LONG, Conversion("parseLong", "Long")),
  MaterializationKind.FLOAT: (FLOAT, Conversion("parseFloat", "Float")),
  MaterializationKind.DOUBLE: (DOUBLE, Conversion("parseDouble", "Double")),
  MaterializationKind.LIST: (STRING_ARRAY, _SPLIT),
  MaterializationKind.ARRAY: (STRING_ARRAY, _SPLIT),
  MaterializationKind.SET: (STRING_ARRAY, _SPLIT),
}

_EXPRESSION_TYPES = (LiteralExpr, Identifier, FieldAccess, MethodInvocation)


@dataclass(frozen=True)
class FieldTemplate:
  """
  Declaration template of a synthesized field, parameterized by its anchor.
  """

  field_name: str
  field_type: JavaType
  conversion: Conversion

  @property
  def source(self) -> str:
    """Template text with the anchor placeholder, for tracing."""
    initializer = self.conversion.render(ANCHOR_PLACEHOLDER)
    return f"private {print_type(self.field_type)} {self.field_name} = {initializer};"

  def instantiate(self, anchor) -> FieldDeclaration:
    """
    Builds the field declaration for a concrete anchor expression.

    Args:
        anchor: The (possibly re-qualified) anchor expression.

    Returns:
        FieldDeclaration: ``private <type> <name> = <conversion>;``.

    Raises:
        TemplateError: If the anchor is not a value expression.
    """
    if not isinstance(anchor, _EXPRESSION_TYPES):
      raise TemplateError(f"Template '{self.field_name}' cannot take anchor {anchor!r}")
    return FieldDeclaration(
      name=self.field_name,
      type=self.field_type,
      modifiers=("private",),
      initializer=self.conversion.build(anchor),
    )


def build_field_template(field_name: str, kind: MaterializationKind) -> FieldTemplate:
  """
  Selects the field type and conversion for ``kind``.

  Raises:
      TemplateError: If the kind never synthesizes fields.
  """
  try:
    field_type, conversion = _CONVERSIONS[kind]
  except KeyError:
    raise TemplateError(f"No field template for kind '{kind.value}'")
  return FieldTemplate(field_name, field_type, conversion)


# --- Inline conversions ---

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?[fFdD]?$")
_DECIMAL_PARTS_RE = re.compile(r"^(-?)(\d*)(.*)$")

_INTEGER_RANGES = {
  MaterializationKind.BYTE: (-(2**7), 2**7 - 1),
  MaterializationKind.SHORT: (-(2**15), 2**15 - 1),
  MaterializationKind.INT: (-(2**31), 2**31 - 1),
  MaterializationKind.LONG: (-(2**63), 2**63 - 1),
}

_LITERAL_TYPES = {
  MaterializationKind.BOOLEAN: BOOLEAN,
  MaterializationKind.BYTE: BYTE,
  MaterializationKind.CHAR: CHAR,
  MaterializationKind.SHORT: SHORT,
  MaterializationKind.INT: INT,
  MaterializationKind.LONG: LONG,
  MaterializationKind.FLOAT: FLOAT,
  MaterializationKind.DOUBLE: DOUBLE,
}


def unquote(value_source: str) -> str:
  """Strips surrounding double quotes from a string token."""
  if len(value_source) >= 2 and value_source[0] == '"' and value_source[-1] == '"':
    return value_source[1:-1]
  return value_source


def _char_literal(text: str) -> Optional[str]:
  if not text:
    return None
  if text.startswith("\\"):
    # escape sequences such as \n or \t count as one character
    first = text[:6] if text.startswith("\\u") else text[:2]
  else:
    first = text[0]
  if first == "'":
    first = "\\'"
  return f"'{first}'"


def _decimal_literal(text: str, kind: MaterializationKind) -> str:
  sign, digits, rest = _DECIMAL_PARTS_RE.match(text).groups()
  if digits:
    digits = digits.lstrip("0") or "0"
  if kind == MaterializationKind.FLOAT:
    return f"{sign}{digits}{rest}f"
  if not any(c in rest for c in ".eE"):
    # a bare integer token would be an int literal (octal with a leading zero)
    rest += ".0"
  return f"{sign}{digits}{rest}"


def convert_literal(kind: MaterializationKind, literal: LiteralExpr) -> Optional[LiteralExpr]:
  """
  Converts a literal default value to a literal of the target primitive type.

  ``Boolean.parseBoolean`` semantics apply to BOOLEAN (anything but "true",
  ignoring case, is false). Numbers must be valid and within range and are
  re-emitted in plain decimal form, so leading zeros never read as octal. FLOAT
  values gain an ``f`` suffix and integral DOUBLE values a ``.0``. CHAR keeps the first character, as ``charAt(0)`` would.

  Args:
      kind: A scalar materialization kind.
      literal: The original literal.

  Returns:
      Optional[LiteralExpr]: The converted literal, or None if the text cannot be
      converted (the occurrence is then skipped).
  """
  text = unquote(literal.value_source)
  target_type: Optional[Primitive] = _LITERAL_TYPES.get(kind)
  if target_type is None:
    return None

  if kind == MaterializationKind.BOOLEAN:
    source = "true" if text.lower() == "true" else "false"
  elif kind == MaterializationKind.CHAR:
    source = _char_literal(text)
  elif kind in _INTEGER_RANGES:
    low, high = _INTEGER_RANGES[kind]
    if not _INTEGER_RE.match(text) or not (low <= int(text) <= high):
      return None
    source = str(int(text))
    if kind == MaterializationKind.LONG and not (-(2**31) <= int(text) <= 2**31 - 1):
      source += "L"
  else:
    if not _DECIMAL_RE.match(text):
      return None
    source = _decimal_literal(text.lstrip("+").rstrip("fFdD"), kind)

  if source is None:
    return None
  return LiteralExpr(source, type=target_type)


def java_split(text: str, separator: str = ",") -> List[str]:
  """
  Splits like ``String.split`` with a literal separator: trailing empty strings
  are dropped, but an input without separators yields itself.

  Args:
      text: The string to split.
      separator: Literal separator.

  Returns:
      List[str]: The parts.
  """
  parts = text.split(separator)
  if len(parts) == 1:
    return parts
  while parts and parts[-1] == "":
    parts.pop()
  return parts


def split_container_literal(literal: LiteralExpr) -> ArrayInitializer:
  """
  Parses ``"a,b"`` into the annotation array ``{"a", "b"}``.

  Args:
      literal: The original string literal.

  Returns:
      ArrayInitializer: One string literal per element.
  """
  return ArrayInitializer(tuple(LiteralExpr(f'"{part}"') for part in java_split(unquote(literal.value_source))))
