"""
Accumulator Store.

The single piece of run-wide mutable state. The scan phase records one
``Produced`` entry per key; the apply phase only reads. Inserts are atomic
compute-if-absent operations, so files may be scanned concurrently: when two
scans race on the same key exactly one factory result is stored and every
caller gets that same object back.

Keys:
- ``SymbolKey(file, symbol, kind)`` for symbol anchors. Container kinds share
  the ARRAY storage kind since they materialize the same ``String[]`` field.
- ``LiteralKey(file, literal_text)`` for container literals that synthesize
  fields. Identical text in two files yields two independent entries.
"""

import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from default_migrator.core.anchors import type_reference
from default_migrator.core.templates import FieldTemplate
from default_migrator.enums import ContextSensitivity, MaterializationKind
from default_migrator.tree.navigation import is_same_or_ancestor
from default_migrator.tree.nodes import FieldAccess, Identifier
from default_migrator.tree.types import ClassType, Variable


@dataclass(frozen=True)
class SymbolKey:
  file: str
  symbol: Variable
  kind: MaterializationKind


@dataclass(frozen=True)
class LiteralKey:
  file: str
  literal_text: str


AccumulatorKey = Union[SymbolKey, LiteralKey]


@dataclass(frozen=True)
class Produced:
  """
  Everything the apply phase needs to synthesize one field and reference it.
  """

  field_name: str
  kind: MaterializationKind
  field_template: Optional[FieldTemplate]
  context_sensitivity: ContextSensitivity
  anchor_expr: object
  """The anchor expression as seen at the first scan occurrence."""

  target_scope: ClassType
  """The class that receives the synthesized field."""

  def reference_from(self, scope: Optional[ClassType]):
    """
    Builds the expression a companion annotation in ``scope`` uses to refer
    to the synthesized field.

    Args:
        scope: The type enclosing the annotated member.

    Returns:
        Identifier or FieldAccess: ``name`` when the field is visible by simple
        name, ``Outer.Inner.name`` otherwise.
    """
    field_type = self.field_template.field_type if self.field_template else None
    ident = Identifier(
      self.field_name,
      field_type=Variable(self.target_scope, self.field_name, field_type),
      type=field_type,
    )
    if is_same_or_ancestor(self.target_scope, scope):
      return ident
    return FieldAccess(type_reference(self.target_scope), ident, type=field_type)


ProducedFactory = Callable[[], Produced]


class Accumulator:
  """
  Insert-only map from accumulator keys to produced entries.

  Lifecycle is one engine run: created at scan start, read during apply,
  discarded afterwards.
  """

  def __init__(self) -> None:
    self._entries: Dict[AccumulatorKey, Produced] = {}
    self._literal_counts: Dict[str, int] = {}
    # Factories may read literal_count, hence re-entrant
    self._lock = threading.RLock()

  @staticmethod
  def symbol_key(file: str, symbol: Variable, kind: MaterializationKind) -> SymbolKey:
    if not kind.is_materializable:
      raise ValueError(f"Kind '{kind.value}' never yields an accumulator key")
    return SymbolKey(file, symbol, kind.storage_kind)

  @staticmethod
  def literal_key(file: str, literal_text: str) -> LiteralKey:
    return LiteralKey(file, literal_text)

  def _insert_if_absent(self, key: AccumulatorKey, factory: ProducedFactory) -> Produced:
    with self._lock:
      existing = self._entries.get(key)
      if existing is not None:
        return existing
      produced = factory()
      if isinstance(key, LiteralKey):
        if not produced.kind.is_container:
          raise ValueError(f"Literal entries are restricted to container kinds, got '{produced.kind.value}'")
        self._literal_counts[key.file] = self._literal_counts.get(key.file, 0) + 1
      self._entries[key] = produced
      return produced

  def record_symbol(
    self,
    file: str,
    symbol: Variable,
    kind: MaterializationKind,
    produced_factory: ProducedFactory,
  ) -> Produced:
    """
    Records the entry for a symbol anchor unless one already exists.

    Args:
        file: Source path of the compilation unit.
        symbol: Resolved identity of the anchor.
        kind: Materialization kind of the occurrence.
        produced_factory: Called only when the key is absent.

    Returns:
        Produced: The stored entry, pre-existing or new.
    """
    return self._insert_if_absent(self.symbol_key(file, symbol, kind), produced_factory)

  def record_literal(self, file: str, literal_text: str, produced_factory: ProducedFactory) -> Produced:
    """
    Records the entry for a container literal unless one already exists.

    Args:
        file: Source path of the compilation unit.
        literal_text: The literal token as written.
        produced_factory: Called only when the key is absent.

    Returns:
        Produced: The stored entry, pre-existing or new.
    """
    return self._insert_if_absent(self.literal_key(file, literal_text), produced_factory)

  def get(self, key: AccumulatorKey) -> Optional[Produced]:
    with self._lock:
      return self._entries.get(key)

  def literal_count(self, file: str) -> int:
    with self._lock:
      return self._literal_counts.get(file, 0)

  def entries_for_file(self, file: str) -> List[Produced]:
    with self._lock:
      return [p for k, p in self._entries.items() if k.file == file]

  def produced_for_scope(self, file: str, scope: ClassType) -> List[Produced]:
    """
    Entries whose field belongs in ``scope``, sorted by field name.

    Args:
        file: Source path of the compilation unit.
        scope: The class receiving fields.

    Returns:
        List[Produced]: Deterministically ordered entries.
    """
    matching = [p for p in self.entries_for_file(file) if p.target_scope.fqn == scope.fqn]
    return sorted(matching, key=lambda p: p.field_name)

  def files(self) -> List[str]:
    with self._lock:
      return sorted({k.file for k in self._entries})

  def __contains__(self, key: AccumulatorKey) -> bool:
    with self._lock:
      return key in self._entries

  def __len__(self) -> int:
    with self._lock:
      return len(self._entries)
