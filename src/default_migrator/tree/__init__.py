"""
Typed Tree Package.

The input/output contract of the migration engine: Java types and symbols
(``types``), declaration and expression nodes (``nodes``), scope-aware traversal
(``navigation``), JSON interchange (``io``) and a compact printer (``printer``).
"""

from default_migrator.tree.nodes import (
  Annotation,
  ArrayInitializer,
  Assignment,
  ClassDeclaration,
  CompilationUnit,
  FieldAccess,
  FieldDeclaration,
  Identifier,
  Import,
  LiteralExpr,
  MethodDeclaration,
  MethodInvocation,
)
from default_migrator.tree.types import ArrayType, ClassType, Parameterized, Primitive, Variable

__all__ = [
  "Annotation",
  "ArrayInitializer",
  "ArrayType",
  "Assignment",
  "ClassDeclaration",
  "ClassType",
  "CompilationUnit",
  "FieldAccess",
  "FieldDeclaration",
  "Identifier",
  "Import",
  "LiteralExpr",
  "MethodDeclaration",
  "MethodInvocation",
  "Parameterized",
  "Primitive",
  "Variable",
]
