"""
Annotation Rewriter.

Apply-phase counterpart of the scanner. For each occurrence it removes the
migrated attribute from the holder annotation and attaches the typed companion
annotation::

    @Property(defaultValue = Constants.SOME_BOOLEAN)
    boolean flag();

becomes::

    @DefaultValue.Boolean(constants__some_booleanAsBoolean)
    @Property()
    boolean flag();

Skipped occurrences are returned exactly as written.
"""

from dataclasses import dataclass
from typing import List, Tuple

from default_migrator.config import MigrationConfig
from default_migrator.core.accumulator import Accumulator
from default_migrator.core.holders import holder_name
from default_migrator.core.occurrences import Occurrence, analyse, member_occurrences
from default_migrator.core.tracer import TraceLogger
from default_migrator.enums import MaterializationKind, OccurrenceState, SkipReason
from default_migrator.tree.navigation import ClassChain
from default_migrator.tree.nodes import Annotation, ClassDeclaration
from default_migrator.tree.printer import print_annotation
from default_migrator.tree.types import ClassType


@dataclass
class RewriteStats:
  rewritten: int = 0
  companions: int = 0
  skipped: int = 0


def strip_attribute(annotation: Annotation, index: int) -> Annotation:
  """
  Removes the argument at ``index``. An emptied list stays an empty list.
  """
  arguments = tuple(a for i, a in enumerate(annotation.arguments or ()) if i != index)
  return annotation.with_changes(arguments=arguments)


def insert_sorted(annotations: Tuple[Annotation, ...], new: Annotation) -> Tuple[Annotation, ...]:
  """
  Inserts ``new`` before the first annotation whose written type sorts after it.
  """
  for index, existing in enumerate(annotations):
    if existing.name > new.name:
      return annotations[:index] + (new,) + annotations[index:]
  return annotations + (new,)


class AnnotationRewriter:
  def __init__(self, accumulator: Accumulator, config: MigrationConfig, tracer: TraceLogger):
    self.accumulator = accumulator
    self.config = config
    self.tracer = tracer
    self._holder_type = ClassType(config.value_holder)

  def companion(self, kind: MaterializationKind, value) -> Annotation:
    """
    Builds ``@DefaultValue.<Holder>(value)`` for ``kind``.
    """
    name = holder_name(kind)
    return Annotation(
      annotation_type=ClassType(f"{self.config.value_holder}.{name}", owner=self._holder_type),
      name=f"{self.config.value_holder_simple_name}.{name}",
      arguments=(value,),
    )

  def _companion_value(self, occ: Occurrence):
    """
    Works out the companion's argument, or None when no companion is due.

    Marks the occurrence SKIPPED when its accumulator entry is missing.
    """
    if occ.kind == MaterializationKind.PASS_THROUGH_STRING:
      return occ.expression if self.config.emit_string_holder else None
    if occ.state != OccurrenceState.KEY_ASSIGNED:
      return occ.inline_value
    produced = self.accumulator.get(occ.key)
    if produced is None:
      occ.skip(SkipReason.MISSING_ENTRY)
      self.tracer.log_warning(f"No accumulator entry for '{occ.location}'")
      return None
    return produced.reference_from(occ.scope)

  def rewrite_member(self, file: str, chain: ClassChain, member, stats: RewriteStats):
    """
    Rewrites every occurrence carried by ``member``.

    Args:
        file: Source path of the compilation unit.
        chain: Enclosing class declarations, outermost first.
        member: A field or method declaration.
        stats: Counters updated in place.

    Returns:
        The rewritten member, or ``member`` itself when nothing changed.
    """
    annotations = tuple(member.leading_annotations)
    companions: List[Annotation] = []
    changed = False

    for occ in member_occurrences(file, chain, member, self.config):
      analyse(occ, self.config)
      if occ.state == OccurrenceState.SKIPPED:
        stats.skipped += 1
        continue
      value = self._companion_value(occ)
      if occ.state == OccurrenceState.SKIPPED:
        stats.skipped += 1
        continue

      before = print_annotation(occ.annotation)
      stripped = strip_attribute(occ.annotation, occ.attribute_index)
      annotations = annotations[: occ.annotation_index] + (stripped,) + annotations[occ.annotation_index + 1 :]
      self.tracer.log_mutation("Annotation", before, print_annotation(stripped))
      if value is not None:
        companions.append(self.companion(occ.kind, value))
      occ.state = OccurrenceState.REWRITTEN
      stats.rewritten += 1
      changed = True

    for companion in companions:
      if any(a.annotation_type.fqn == companion.annotation_type.fqn for a in annotations):
        continue
      annotations = insert_sorted(annotations, companion)
      self.tracer.log_mutation("Annotation", "", print_annotation(companion))
      stats.companions += 1

    if not changed:
      return member
    return member.with_changes(leading_annotations=annotations)

  def rewrite_class(self, file: str, cls: ClassDeclaration, chain: ClassChain, stats: RewriteStats) -> ClassDeclaration:
    """
    Rewrites the direct members of ``cls``; nested classes are left to their own pass.
    """
    new_body = []
    changed = False
    for member in cls.body:
      if isinstance(member, ClassDeclaration):
        new_body.append(member)
        continue
      new_member = self.rewrite_member(file, chain, member, stats)
      changed = changed or new_member is not member
      new_body.append(new_member)
    if not changed:
      return cls
    return cls.with_changes(body=tuple(new_body))
