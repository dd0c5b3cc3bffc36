"""
Scan Phase.

Walks one compilation unit and records an accumulator entry for every keyed
occurrence. The first occurrence of a key decides the field name, the template
and the class that will receive the field; later occurrences reuse it.
"""

from typing import List

from default_migrator.config import MigrationConfig
from default_migrator.core.accumulator import Accumulator, LiteralKey, Produced
from default_migrator.core.anchors import LiteralAnchor
from default_migrator.core.naming import NameGenerator, literal_base, symbol_base
from default_migrator.core.occurrences import Occurrence, analyse, iter_occurrences
from default_migrator.core.templates import build_field_template
from default_migrator.core.tracer import TraceLogger
from default_migrator.enums import MaterializationKind, OccurrenceState
from default_migrator.tree.navigation import nested_member_names, visible_member_names
from default_migrator.tree.nodes import CompilationUnit


class DefaultValueScanner:
  """
  Populates the accumulator from compilation units.

  One scanner serves one engine run; its name generator remembers the names
  handed out per file so two keys never share a field name.
  """

  def __init__(
    self,
    accumulator: Accumulator,
    config: MigrationConfig,
    tracer: TraceLogger,
    names: NameGenerator = None,
  ):
    self.accumulator = accumulator
    self.config = config
    self.tracer = tracer
    self.names = names or NameGenerator()

  def scan(self, unit: CompilationUnit) -> List[Occurrence]:
    """
    Records entries for every keyed occurrence of the unit.

    Args:
        unit: The compilation unit.

    Returns:
        List[Occurrence]: All occurrences, analysed.
    """
    found = []
    for occ in iter_occurrences(unit, self.config):
      analyse(occ, self.config)
      if occ.state == OccurrenceState.SKIPPED:
        self.tracer.log_skip(occ.location, occ.skip_reason.value)
      elif occ.state == OccurrenceState.KEY_ASSIGNED:
        self._record(occ)
      found.append(occ)
    return found

  def _record(self, occ: Occurrence) -> Produced:
    created = []

    def factory() -> Produced:
      produced = self._produce(occ)
      created.append(produced)
      return produced

    if isinstance(occ.key, LiteralKey):
      produced = self.accumulator.record_literal(occ.file, occ.key.literal_text, factory)
    else:
      produced = self.accumulator.record_symbol(occ.file, occ.resolved.symbol, occ.kind, factory)

    reused = not created or created[0] is not produced
    template = produced.field_template.source if produced.field_template else ""
    self.tracer.log_entry(repr(occ.key), produced.field_name, template, reused)
    return produced

  def _produce(self, occ: Occurrence) -> Produced:
    resolved = occ.resolved
    if isinstance(resolved.anchor, LiteralAnchor):
      base = literal_base(self.accumulator.literal_count(occ.file))
      kind = MaterializationKind.ARRAY
    else:
      base = symbol_base(resolved.text)
      kind = occ.kind.storage_kind

    # names declared in nested classes would shadow the field at their reuse sites
    taken = visible_member_names(occ.chain) | nested_member_names(occ.chain[-1])
    name = self.names.generate(occ.file, base, kind, taken=taken)
    return Produced(
      field_name=name,
      kind=occ.kind,
      field_template=build_field_template(name, kind),
      context_sensitivity=resolved.context_sensitivity,
      anchor_expr=resolved.anchor.expression,
      target_scope=occ.scope,
    )
