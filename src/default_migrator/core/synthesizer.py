"""
Field Synthesizer.

Emits the fields recorded during scan into the class declarations that own
them. Fields go after the last existing field declaration, or first in the body
when the class declares none, in field-name order.
"""

from typing import Iterable, List

from default_migrator.core.accumulator import Accumulator, Produced
from default_migrator.core.anchors import scoped_anchor_expression
from default_migrator.core.errors import TemplateError
from default_migrator.core.tracer import TraceLogger
from default_migrator.enums import ContextSensitivity
from default_migrator.tree.navigation import member_names
from default_migrator.tree.nodes import ClassDeclaration, FieldDeclaration, Import
from default_migrator.tree.printer import print_field


class FieldSynthesizer:
  def __init__(self, accumulator: Accumulator, tracer: TraceLogger, imports: Iterable[Import] = ()):
    self.accumulator = accumulator
    self.tracer = tracer
    self.imports = tuple(imports)

  def declaration_for(self, produced: Produced) -> FieldDeclaration:
    """
    Instantiates the field template of an entry.

    Raises:
        TemplateError: If the entry carries no template or its anchor cannot be
            re-emitted for the insertion scope.
    """
    if produced.field_template is None:
      raise TemplateError(f"Entry '{produced.field_name}' has no field template")
    anchor = produced.anchor_expr
    if produced.context_sensitivity == ContextSensitivity.REQUIRES_SCOPED_TEMPLATE:
      anchor = scoped_anchor_expression(anchor, self.imports)
    return produced.field_template.instantiate(anchor)

  def synthesize(self, file: str, cls: ClassDeclaration) -> ClassDeclaration:
    """
    Adds the missing synthesized fields owned by ``cls``.

    Args:
        file: Source path of the compilation unit.
        cls: The class declaration (nested classes already processed).

    Returns:
        ClassDeclaration: The class with new fields, or ``cls`` if none were due.

    Raises:
        TemplateError: Propagated from template instantiation.
    """
    existing = member_names(cls)
    new_fields: List[FieldDeclaration] = []
    for produced in self.accumulator.produced_for_scope(file, cls.type):
      if produced.field_name in existing:
        continue
      declaration = self.declaration_for(produced)
      self.tracer.log_mutation("FieldDeclaration", "", "\n".join(print_field(declaration)))
      new_fields.append(declaration)

    if not new_fields:
      return cls

    body = list(cls.body)
    last_field = max((i for i, m in enumerate(body) if isinstance(m, FieldDeclaration)), default=-1)
    body[last_field + 1 : last_field + 1] = new_fields
    return cls.with_changes(body=tuple(body))
