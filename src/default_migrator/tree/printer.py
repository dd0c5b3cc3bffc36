"""
Compact Java Printer.

Renders the typed tree as Java-like source text. This is not a formatter: it
uses a fixed four-space layout and exists so that migrated trees can be read
in diagnostics, CLI output and tests.

Layout rules:
- Each leading annotation sits on its own line above its declaration.
- Consecutive field declarations are printed without blank lines between them;
  any other pair of members is separated by one blank line.
"""

from typing import List, Optional

from default_migrator.tree.nodes import (
  Annotation,
  ArrayInitializer,
  Assignment,
  ClassDeclaration,
  CompilationUnit,
  FieldAccess,
  FieldDeclaration,
  Identifier,
  LiteralExpr,
  MethodDeclaration,
  MethodInvocation,
)
from default_migrator.tree.types import ArrayType, ClassType, Parameterized, Primitive

INDENT = "    "


def print_type(java_type) -> str:
  """
  Renders a type as written in source (simple names, generics, array brackets).

  Args:
      java_type: The type to render.

  Returns:
      str: Source text, or ``var`` if the type is unknown.
  """
  if java_type is None:
    return "var"
  if isinstance(java_type, Primitive):
    return java_type.keyword
  if isinstance(java_type, ClassType):
    return java_type.canonical_name
  if isinstance(java_type, Parameterized):
    params = ", ".join(print_type(p) for p in java_type.parameters)
    return f"{java_type.base.canonical_name}<{params}>"
  if isinstance(java_type, ArrayType):
    return f"{print_type(java_type.element)}[]"
  raise TypeError(f"Unknown type node: {java_type!r}")


def print_expression(expr) -> str:
  """
  Renders an expression. This text doubles as the expression's identity for
  naming purposes (``Constants.SOME_BOOLEAN``).

  Args:
      expr: The expression node.

  Returns:
      str: Source text.
  """
  if isinstance(expr, LiteralExpr):
    return expr.value_source
  if isinstance(expr, Identifier):
    return expr.name
  if isinstance(expr, FieldAccess):
    return f"{print_expression(expr.target)}.{expr.name.name}"
  if isinstance(expr, MethodInvocation):
    args = ", ".join(print_expression(a) for a in expr.arguments)
    prefix = f"{print_expression(expr.select)}." if expr.select is not None else ""
    return f"{prefix}{expr.name}({args})"
  if isinstance(expr, ArrayInitializer):
    return "{" + ", ".join(print_expression(e) for e in expr.elements) + "}"
  if isinstance(expr, Assignment):
    return f"{expr.variable.name} = {print_expression(expr.value)}"
  raise TypeError(f"Unknown expression node: {expr!r}")


def print_annotation(annotation: Annotation) -> str:
  if annotation.arguments is None:
    return f"@{annotation.name}"
  args = ", ".join(print_expression(a) for a in annotation.arguments)
  return f"@{annotation.name}({args})"


def _prefix(modifiers) -> str:
  return " ".join(modifiers) + " " if modifiers else ""


def _annotation_lines(annotations, depth: int) -> List[str]:
  return [INDENT * depth + print_annotation(a) for a in annotations]


def print_field(decl: FieldDeclaration, depth: int = 0) -> List[str]:
  lines = _annotation_lines(decl.leading_annotations, depth)
  text = f"{_prefix(decl.modifiers)}{print_type(decl.type)} {decl.name}"
  if decl.initializer is not None:
    text += f" = {print_expression(decl.initializer)}"
  lines.append(INDENT * depth + text + ";")
  return lines


def print_method(decl: MethodDeclaration, depth: int = 0) -> List[str]:
  lines = _annotation_lines(decl.leading_annotations, depth)
  params = ", ".join(decl.parameters)
  signature = f"{_prefix(decl.modifiers)}{print_type(decl.return_type)} {decl.name}({params})"
  if decl.body is None:
    lines.append(INDENT * depth + signature + ";")
    return lines
  lines.append(INDENT * depth + signature + " {")
  lines.extend(INDENT * (depth + 1) + stmt for stmt in decl.body)
  lines.append(INDENT * depth + "}")
  return lines


def print_class(decl: ClassDeclaration, depth: int = 0) -> List[str]:
  lines = _annotation_lines(decl.leading_annotations, depth)
  lines.append(INDENT * depth + f"{_prefix(decl.modifiers)}class {decl.name} {{")
  previous: Optional[object] = None
  for member in decl.body:
    if previous is not None and not (
      isinstance(previous, FieldDeclaration) and isinstance(member, FieldDeclaration)
    ):
      lines.append("")
    lines.extend(print_member(member, depth + 1))
    previous = member
  lines.append(INDENT * depth + "}")
  return lines


def print_member(member, depth: int = 0) -> List[str]:
  if isinstance(member, FieldDeclaration):
    return print_field(member, depth)
  if isinstance(member, MethodDeclaration):
    return print_method(member, depth)
  if isinstance(member, ClassDeclaration):
    return print_class(member, depth)
  raise TypeError(f"Unknown member node: {member!r}")


def print_unit(unit: CompilationUnit) -> str:
  """
  Renders a whole compilation unit.

  Args:
      unit: The unit to print.

  Returns:
      str: Source text terminated by a newline.
  """
  sections: List[List[str]] = []
  if unit.package:
    sections.append([f"package {unit.package};"])
  if unit.imports:
    sections.append([f"import {'static ' if imp.static else ''}{imp.fqn};" for imp in unit.imports])
  for cls in unit.classes:
    sections.append(print_class(cls))
  return "\n\n".join("\n".join(section) for section in sections) + "\n"
