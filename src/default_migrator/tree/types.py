"""
Java Type Model.

Declared types and symbols as supplied by the external type-resolving front end.
All classes are frozen dataclasses so they can be used as dictionary keys and
shared freely between the scan and apply phases.

Every class carries a ``node`` tag which drives the discriminated unions used by
the JSON interchange codec (see ``default_migrator.tree.io``).
"""

from dataclasses import dataclass, field
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import Field


@dataclass(frozen=True)
class Primitive:
  """
  A primitive keyword type (``boolean``, ``int``, ...).
  """

  keyword: str
  node: Literal["primitive"] = "primitive"


@dataclass(frozen=True)
class ClassType:
  """
  A fully qualified class, interface or enum type.

  Nested types carry their immediately enclosing type in ``owner``, which is
  what scope navigation walks.
  """

  fqn: str
  """Dotted fully qualified name (e.g. ``x.y.z.Constants.Nested``)."""

  owner: Optional["ClassType"] = None
  """Immediately enclosing type for nested declarations."""

  node: Literal["class"] = "class"

  @property
  def simple_name(self) -> str:
    return self.fqn.rsplit(".", 1)[-1]

  def enclosing_chain(self) -> List["ClassType"]:
    """
    Returns this type followed by its enclosing types, innermost first.

    Returns:
        List[ClassType]: ``[self, owner, owner.owner, ...]``.
    """
    chain = []
    current: Optional[ClassType] = self
    while current is not None:
      chain.append(current)
      current = current.owner
    return chain

  @property
  def canonical_name(self) -> str:
    """
    Source-level name reachable from any scope of the compilation unit.

    Example: ``Constants.Nested`` for ``x.y.z.Constants.Nested``.
    """
    return ".".join(t.simple_name for t in reversed(self.enclosing_chain()))


@dataclass(frozen=True)
class Parameterized:
  """
  A generic type application such as ``List<String>``.
  """

  base: ClassType
  parameters: Tuple["JavaType", ...] = ()
  node: Literal["parameterized"] = "parameterized"


@dataclass(frozen=True)
class ArrayType:
  """
  An array of ``element``.
  """

  element: "JavaType"
  node: Literal["array"] = "array"


JavaType = Annotated[
  Union[Primitive, ClassType, Parameterized, ArrayType],
  Field(discriminator="node"),
]


@dataclass(frozen=True)
class Variable:
  """
  Resolved identity of a field or variable.

  Two references to the same member compare equal regardless of where they
  appear, since only ``owner`` and ``name`` take part in equality.
  """

  owner: Optional[ClassType]
  """Declaring type. None for locals or when the front end could not tell."""

  name: str

  type: Optional[JavaType] = field(default=None, compare=False)

  node: Literal["variable"] = "variable"


STRING = ClassType("java.lang.String")
LIST = ClassType("java.util.List")
SET = ClassType("java.util.Set")

BOOLEAN = Primitive("boolean")
BYTE = Primitive("byte")
CHAR = Primitive("char")
SHORT = Primitive("short")
INT = Primitive("int")
LONG = Primitive("long")
FLOAT = Primitive("float")
DOUBLE = Primitive("double")

STRING_ARRAY = ArrayType(STRING)


def list_of(element: JavaType) -> Parameterized:
  return Parameterized(LIST, (element,))


def set_of(element: JavaType) -> Parameterized:
  return Parameterized(SET, (element,))
