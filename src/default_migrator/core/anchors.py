"""
Anchor Resolver.

Classifies the expression assigned to the migrated attribute into one of three
anchor shapes and works out where its symbol lives relative to the scope being
transformed.

- ``"a,b"``, ``3``, ``true``             -> LiteralAnchor
- ``someField``                          -> LocalSymbolRef
- ``Constants.SOME_BOOLEAN``,
  ``Constants.Nested.INNER_CHAR``        -> QualifiedSymbolRef

Any other shape (method calls, concatenations, unresolved names) yields no
anchor and the occurrence is skipped.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from default_migrator.core.errors import TemplateError
from default_migrator.enums import ContextSensitivity
from default_migrator.tree.navigation import is_same_or_ancestor
from default_migrator.tree.nodes import FieldAccess, Identifier, Import, LiteralExpr
from default_migrator.tree.printer import print_expression
from default_migrator.tree.types import ClassType, Variable


@dataclass(frozen=True)
class LiteralAnchor:
  expression: LiteralExpr

  @property
  def text(self) -> str:
    return self.expression.value_source


@dataclass(frozen=True)
class LocalSymbolRef:
  expression: Identifier
  symbol: Variable


@dataclass(frozen=True)
class QualifiedSymbolRef:
  expression: FieldAccess
  symbol: Variable
  owner_type: Optional[ClassType]


Anchor = Union[LiteralAnchor, LocalSymbolRef, QualifiedSymbolRef]


@dataclass(frozen=True)
class ResolvedAnchor:
  """
  An anchor plus the scope facts needed to build its accumulator entry.
  """

  anchor: Anchor
  declaring_scope: Optional[ClassType]
  context_sensitivity: ContextSensitivity

  @property
  def symbol(self) -> Optional[Variable]:
    if isinstance(self.anchor, LiteralAnchor):
      return None
    return self.anchor.symbol

  @property
  def text(self) -> str:
    """Source text of the anchor expression (``Constants.SOME_BOOLEAN``)."""
    return print_expression(self.anchor.expression)


def _qualifier_type(expr) -> Optional[ClassType]:
  declared = getattr(expr, "type", None)
  return declared if isinstance(declared, ClassType) else None


def classify_anchor(expr) -> Optional[Anchor]:
  """
  Determines the anchor shape of an expression.

  Args:
      expr: The attribute value.

  Returns:
      Optional[Anchor]: None for unsupported shapes or unresolved symbols.
  """
  if isinstance(expr, LiteralExpr):
    return LiteralAnchor(expr)

  if isinstance(expr, Identifier):
    if expr.field_type is None:
      return None
    return LocalSymbolRef(expr, expr.field_type)

  if isinstance(expr, FieldAccess):
    symbol = expr.name.field_type
    if symbol is None:
      return None
    owner = symbol.owner or _qualifier_type(expr.target)
    return QualifiedSymbolRef(expr, symbol, owner)

  return None


def declaring_scope_of(anchor: Anchor) -> Optional[ClassType]:
  if isinstance(anchor, LiteralAnchor):
    return None
  if isinstance(anchor, QualifiedSymbolRef):
    return anchor.owner_type
  return anchor.symbol.owner


def context_sensitivity_for(
  declaring_scope: Optional[ClassType], current_scope: Optional[ClassType]
) -> ContextSensitivity:
  """
  Decides whether an initializer may reference its anchor as written.

  The anchor resolves locally when it is declared in the current scope or one
  of its enclosing types. Unknown relationships fall back to scoped templates.

  Args:
      declaring_scope: Where the anchor's symbol is declared.
      current_scope: The type being transformed.

  Returns:
      ContextSensitivity: The classification.
  """
  if is_same_or_ancestor(declaring_scope, current_scope):
    return ContextSensitivity.RESOLVED_LOCALLY
  return ContextSensitivity.REQUIRES_SCOPED_TEMPLATE


def resolve_anchor(expr, current_scope: Optional[ClassType]) -> Optional[ResolvedAnchor]:
  """
  Classifies ``expr`` and attaches its declaring scope and context sensitivity.

  Literal anchors have no declaring scope and always resolve locally.

  Args:
      expr: The attribute value.
      current_scope: The type enclosing the annotated member.

  Returns:
      Optional[ResolvedAnchor]: None if the expression cannot anchor a field.
  """
  anchor = classify_anchor(expr)
  if anchor is None:
    return None
  if isinstance(anchor, LiteralAnchor):
    return ResolvedAnchor(anchor, None, ContextSensitivity.RESOLVED_LOCALLY)
  scope = declaring_scope_of(anchor)
  return ResolvedAnchor(anchor, scope, context_sensitivity_for(scope, current_scope))


def type_reference(scope: ClassType):
  """
  Builds the expression naming ``scope`` from any position in its compilation
  unit (``A.B`` for a class ``B`` nested in ``A``).

  Args:
      scope: The type to reference.

  Returns:
      Identifier or FieldAccess: The qualifier expression.
  """
  chain = list(reversed(scope.enclosing_chain()))
  expr = Identifier(chain[0].simple_name, type=chain[0])
  for t in chain[1:]:
    expr = FieldAccess(expr, Identifier(t.simple_name, type=t), type=t)
  return expr


def _written_path(expr) -> Optional[List[str]]:
  if isinstance(expr, Identifier):
    return [expr.name]
  if isinstance(expr, FieldAccess):
    head = _written_path(expr.target)
    return head + [expr.name.name] if head is not None else None
  return None


def _is_imported(t: ClassType, imports: Iterable[Import]) -> bool:
  wildcard = t.fqn.rsplit(".", 1)[0] + ".*"
  return any(not imp.static and imp.fqn in (t.fqn, wildcard) for imp in imports)


def _qualifier_is_portable(written: Optional[List[str]], owner: ClassType, imports: Iterable[Import]) -> bool:
  """
  True if the written qualifier names ``owner`` from anywhere in the unit:
  fully qualified, spelled from the outermost type, or starting at an
  imported type.
  """
  if written is None:
    return False
  if ".".join(written) == owner.fqn:
    return True
  chain = list(reversed(owner.enclosing_chain()))
  if len(written) > len(chain) or written != [t.simple_name for t in chain[-len(written) :]]:
    return False
  head = chain[-len(written)]
  return head.owner is None or _is_imported(head, imports)


def scoped_anchor_expression(expr, imports: Iterable[Import] = ()):
  """
  Re-emits an anchor so it resolves independently of the insertion scope.

  Qualifiers written relative to an enclosing class are rebuilt from the
  symbol's owner chain (``B.anotherField`` -> ``A.B.anotherField``).
  Fully qualified (``com.acme.Constants.FLAG``), outermost-first and imported
  qualifiers are kept as written, as are literals and bare identifiers.

  Args:
      expr: The anchor expression recorded during scan.
      imports: Imports of the compilation unit receiving the field.

  Returns:
      The expression to splice into the field initializer.

  Raises:
      TemplateError: If a qualified anchor lost its resolved symbol.
  """
  if not isinstance(expr, FieldAccess):
    return expr
  symbol = expr.name.field_type
  if symbol is None:
    raise TemplateError(f"Cannot re-qualify unresolved anchor '{print_expression(expr)}'")
  owner = symbol.owner or _qualifier_type(expr.target)
  if owner is None or _qualifier_is_portable(_written_path(expr.target), owner, list(imports)):
    return expr
  return FieldAccess(type_reference(owner), expr.name, type=expr.type)
