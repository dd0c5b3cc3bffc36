"""
Occurrence Analysis.

An occurrence is one member annotated with the attribute holder annotation
whose argument list assigns the migrated attribute::

    @Property(defaultValue = Constants.SOME_BOOLEAN)
    boolean flag();

Both phases derive everything they know about an occurrence through
``analyse``, so the key the scanner records is exactly the key the rewriter
looks up.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from default_migrator.config import MigrationConfig
from default_migrator.core.accumulator import Accumulator, AccumulatorKey
from default_migrator.core.anchors import LiteralAnchor, ResolvedAnchor, resolve_anchor
from default_migrator.core.classifier import classify
from default_migrator.core.templates import convert_literal, split_container_literal
from default_migrator.enums import MaterializationKind, OccurrenceState, SkipReason
from default_migrator.tree.navigation import ClassChain, iter_classes
from default_migrator.tree.nodes import (
  Annotation,
  Assignment,
  ClassDeclaration,
  CompilationUnit,
  FieldAccess,
  FieldDeclaration,
  Identifier,
  MethodDeclaration,
)
from default_migrator.tree.types import ClassType


@dataclass
class Occurrence:
  """
  Working record of a single occurrence as it moves through its states.
  """

  file: str
  chain: ClassChain
  member: object
  annotation_index: int
  attribute_index: int
  expression: object

  kind: MaterializationKind = MaterializationKind.UNSUPPORTED
  resolved: Optional[ResolvedAnchor] = None
  state: OccurrenceState = OccurrenceState.UNCLASSIFIED
  skip_reason: Optional[SkipReason] = None
  key: Optional[AccumulatorKey] = None
  inline_value: Optional[object] = None
  """Converted literal or array initializer when no field is involved."""

  @property
  def scope(self) -> ClassType:
    return self.chain[-1].type

  @property
  def annotation(self) -> Annotation:
    return self.member.leading_annotations[self.annotation_index]

  @property
  def location(self) -> str:
    return f"{self.scope.canonical_name}.{self.member.name}"

  def skip(self, reason: SkipReason) -> "Occurrence":
    self.state = OccurrenceState.SKIPPED
    self.skip_reason = reason
    return self


def find_attribute(annotation: Annotation, attribute_name: str) -> Optional[Tuple[int, Assignment]]:
  """
  Locates ``attribute_name = <value>`` among the annotation arguments.

  Args:
      annotation: The annotation to inspect.
      attribute_name: Name of the attribute.

  Returns:
      Optional[Tuple[int, Assignment]]: Argument index and assignment, or None.
  """
  for index, arg in enumerate(annotation.arguments or ()):
    if isinstance(arg, Assignment) and arg.variable.name == attribute_name:
      return index, arg
  return None


def member_occurrences(
  file: str,
  chain: ClassChain,
  member: object,
  config: MigrationConfig,
) -> Iterator[Occurrence]:
  """
  Yields the occurrences carried by one member.

  Args:
      file: Source path of the compilation unit.
      chain: Enclosing class declarations, outermost first.
      member: A field or method declaration.
      config: Names of the annotation and attribute.

  Yields:
      Occurrence: In annotation order, still UNCLASSIFIED.
  """
  if not isinstance(member, (FieldDeclaration, MethodDeclaration)):
    return
  for a_index, annotation in enumerate(member.leading_annotations):
    if annotation.annotation_type.fqn != config.attribute_holder:
      continue
    found = find_attribute(annotation, config.attribute_name)
    if found is None:
      continue
    arg_index, assignment = found
    yield Occurrence(file, chain, member, a_index, arg_index, assignment.value)


def class_occurrences(
  file: str, cls: ClassDeclaration, chain: ClassChain, config: MigrationConfig
) -> Iterator[Occurrence]:
  for member in cls.body:
    yield from member_occurrences(file, chain, member, config)


def iter_occurrences(unit: CompilationUnit, config: MigrationConfig) -> Iterator[Occurrence]:
  """
  Yields every occurrence of the unit in source order, outer classes first.

  Args:
      unit: The compilation unit.
      config: Names of the annotation and attribute.

  Yields:
      Occurrence: Unanalysed occurrences.
  """
  for cls, chain in iter_classes(unit):
    yield from class_occurrences(unit.source_path, cls, chain, config)


def analyse(occ: Occurrence, config: MigrationConfig) -> Occurrence:
  """
  Classifies an occurrence and derives its key or inline value.

  Outcomes:
  - SKIPPED with a reason when the kind, anchor or literal is unusable.
  - CLASSIFIED with no key for PASS_THROUGH_STRING (attribute is dropped).
  - CLASSIFIED with ``inline_value`` for scalar literals and, in inline
    mode, container literals.
  - KEY_ASSIGNED for symbol anchors and, in field mode, container literals.

  Args:
      occ: An UNCLASSIFIED occurrence; updated in place.
      config: Active configuration.

  Returns:
      Occurrence: The same occurrence, for chaining.
  """
  occ.kind = classify(occ.member.declared_type)
  occ.state = OccurrenceState.CLASSIFIED

  if occ.kind == MaterializationKind.UNSUPPORTED:
    return occ.skip(SkipReason.UNSUPPORTED_KIND)
  if occ.kind == MaterializationKind.PASS_THROUGH_STRING:
    return occ

  resolved = resolve_anchor(occ.expression, occ.scope)
  if resolved is None:
    if isinstance(occ.expression, (Identifier, FieldAccess)):
      return occ.skip(SkipReason.UNRESOLVED_SYMBOL)
    return occ.skip(SkipReason.UNSUPPORTED_ANCHOR)
  occ.resolved = resolved

  if isinstance(resolved.anchor, LiteralAnchor):
    literal = resolved.anchor.expression
    if occ.kind.is_scalar:
      converted = convert_literal(occ.kind, literal)
      if converted is None:
        return occ.skip(SkipReason.INVALID_LITERAL)
      occ.inline_value = converted
      return occ
    if config.inline_container_literals:
      occ.inline_value = split_container_literal(literal)
      return occ
    occ.key = Accumulator.literal_key(occ.file, literal.value_source)
  else:
    occ.key = Accumulator.symbol_key(occ.file, resolved.symbol, occ.kind)

  occ.state = OccurrenceState.KEY_ASSIGNED
  return occ
