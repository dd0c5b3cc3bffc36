"""
Typed Tree Nodes.

The immutable, type-attributed tree the migration engine reads and rewrites.
It covers exactly the surface the engine touches: compilation units, imports,
class declarations, field and method members, annotations and the handful of
expression shapes that can appear as annotation values or synthesized
initializers. Method bodies are opaque statement text.

Nodes are frozen dataclasses. Rewriting never mutates a node in place; callers
derive new nodes with ``with_changes`` so the original tree stays valid.
"""

import dataclasses
from dataclasses import dataclass
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import Field

from default_migrator.tree.types import ClassType, JavaType, Variable


class _Node:
  """Shared helpers for tree nodes."""

  def with_changes(self, **changes):
    """
    Returns a copy of the node with the given fields replaced.

    Args:
        **changes: Field values to override.

    Returns:
        A new node of the same type.
    """
    return dataclasses.replace(self, **changes)


# --- Expressions ---


@dataclass(frozen=True)
class LiteralExpr(_Node):
  """
  A literal token. ``value_source`` is the token exactly as written
  (``"a,b"``, ``3``, ``true``, ``'c'``).
  """

  value_source: str
  type: Optional[JavaType] = None
  node: Literal["literal"] = "literal"

  @property
  def is_string(self) -> bool:
    return len(self.value_source) >= 2 and self.value_source[0] == '"' and self.value_source[-1] == '"'


@dataclass(frozen=True)
class Identifier(_Node):
  """
  A bare name. ``field_type`` is the resolved symbol when the name refers to
  a field or variable; ``type`` is the expression type (for type names used as
  qualifiers it is the referenced ``ClassType``).
  """

  name: str
  field_type: Optional[Variable] = None
  type: Optional[JavaType] = None
  node: Literal["identifier"] = "identifier"


@dataclass(frozen=True)
class FieldAccess(_Node):
  """
  A qualified member access ``target.name``.
  """

  target: "Expression"
  name: Identifier
  type: Optional[JavaType] = None
  node: Literal["field_access"] = "field_access"


@dataclass(frozen=True)
class MethodInvocation(_Node):
  """
  ``select.name(arguments)``, or a static call when ``select`` names a type.
  """

  name: str
  select: Optional["Expression"] = None
  arguments: Tuple["Expression", ...] = ()
  type: Optional[JavaType] = None
  node: Literal["method_invocation"] = "method_invocation"


@dataclass(frozen=True)
class ArrayInitializer(_Node):
  """
  An annotation array value ``{e1, e2}``.
  """

  elements: Tuple["Expression", ...] = ()
  node: Literal["array_initializer"] = "array_initializer"


@dataclass(frozen=True)
class Assignment(_Node):
  """
  A named annotation argument ``variable = value``.
  """

  variable: Identifier
  value: "Expression"
  node: Literal["assignment"] = "assignment"


Expression = Annotated[
  Union[LiteralExpr, Identifier, FieldAccess, MethodInvocation, ArrayInitializer, Assignment],
  Field(discriminator="node"),
]


# --- Declarations ---


@dataclass(frozen=True)
class Annotation(_Node):
  """
  A leading annotation.

  ``name`` is the annotation type as written (``Property``,
  ``DefaultValue.Boolean``). ``arguments`` is None when written without
  parentheses.
  """

  annotation_type: ClassType
  name: str
  arguments: Optional[Tuple[Expression, ...]] = None
  node: Literal["annotation"] = "annotation"


@dataclass(frozen=True)
class FieldDeclaration(_Node):
  """
  A single-variable field declaration.
  """

  name: str
  type: Optional[JavaType] = None
  modifiers: Tuple[str, ...] = ()
  leading_annotations: Tuple[Annotation, ...] = ()
  initializer: Optional[Expression] = None
  node: Literal["field"] = "field"

  @property
  def declared_type(self) -> Optional[JavaType]:
    return self.type


@dataclass(frozen=True)
class MethodDeclaration(_Node):
  """
  A method declaration. ``parameters`` and ``body`` are source text, one entry
  per parameter or statement line.
  """

  name: str
  return_type: Optional[JavaType] = None
  modifiers: Tuple[str, ...] = ()
  leading_annotations: Tuple[Annotation, ...] = ()
  parameters: Tuple[str, ...] = ()
  body: Optional[Tuple[str, ...]] = ()
  node: Literal["method"] = "method"

  @property
  def declared_type(self) -> Optional[JavaType]:
    return self.return_type


@dataclass(frozen=True)
class ClassDeclaration(_Node):
  """
  A class declaration. ``body`` holds members in source order, including
  nested classes.
  """

  name: str
  type: ClassType
  modifiers: Tuple[str, ...] = ()
  leading_annotations: Tuple[Annotation, ...] = ()
  body: Tuple["Member", ...] = ()
  node: Literal["class_declaration"] = "class_declaration"


Member = Annotated[
  Union[FieldDeclaration, MethodDeclaration, ClassDeclaration],
  Field(discriminator="node"),
]

AnnotatedMember = Union[FieldDeclaration, MethodDeclaration]


@dataclass(frozen=True)
class Import(_Node):
  fqn: str
  static: bool = False
  node: Literal["import"] = "import"


@dataclass(frozen=True)
class CompilationUnit(_Node):
  """
  One source file. ``source_path`` is the stable per-file key used by the
  accumulator.
  """

  source_path: str
  package: Optional[str] = None
  imports: Tuple[Import, ...] = ()
  classes: Tuple[ClassDeclaration, ...] = ()
  node: Literal["compilation_unit"] = "compilation_unit"
