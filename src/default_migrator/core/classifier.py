"""
Type Classifier.

Maps the declared type of an annotated member to the ``MaterializationKind``
that governs how its default value is converted.
"""

from typing import Optional

from default_migrator.enums import MaterializationKind
from default_migrator.tree.types import ArrayType, ClassType, JavaType, Parameterized, Primitive

STRING_FQN = "java.lang.String"

_PRIMITIVES = {
  "boolean": MaterializationKind.BOOLEAN,
  "byte": MaterializationKind.BYTE,
  "char": MaterializationKind.CHAR,
  "short": MaterializationKind.SHORT,
  "int": MaterializationKind.INT,
  "long": MaterializationKind.LONG,
  "float": MaterializationKind.FLOAT,
  "double": MaterializationKind.DOUBLE,
  # Some front ends model String as a primitive keyword
  "String": MaterializationKind.PASS_THROUGH_STRING,
}

_BOXED = {
  "java.lang.Boolean": MaterializationKind.BOOLEAN,
  "java.lang.Byte": MaterializationKind.BYTE,
  "java.lang.Character": MaterializationKind.CHAR,
  "java.lang.Short": MaterializationKind.SHORT,
  "java.lang.Integer": MaterializationKind.INT,
  "java.lang.Long": MaterializationKind.LONG,
  "java.lang.Float": MaterializationKind.FLOAT,
  "java.lang.Double": MaterializationKind.DOUBLE,
  STRING_FQN: MaterializationKind.PASS_THROUGH_STRING,
}

_CONTAINERS = {
  "java.util.List": MaterializationKind.LIST,
  "java.util.Set": MaterializationKind.SET,
}


def is_string_type(java_type: Optional[JavaType]) -> bool:
  if isinstance(java_type, ClassType):
    return java_type.fqn == STRING_FQN
  if isinstance(java_type, Primitive):
    return java_type.keyword == "String"
  return False


def classify(declared: Optional[JavaType]) -> MaterializationKind:
  """
  Derives the materialization kind of a declared type.

  Rules:
  - Primitive keywords and their boxed forms map one-to-one.
  - ``String[]`` maps to ARRAY, ``List<String>`` to LIST, ``Set<String>`` to SET.
  - ``String`` maps to PASS_THROUGH_STRING.
  - Everything else, enums included, is UNSUPPORTED.

  Args:
      declared: The member's declared (return or field) type.

  Returns:
      MaterializationKind: The derived kind.
  """
  if isinstance(declared, Primitive):
    return _PRIMITIVES.get(declared.keyword, MaterializationKind.UNSUPPORTED)

  if isinstance(declared, ClassType):
    return _BOXED.get(declared.fqn, MaterializationKind.UNSUPPORTED)

  if isinstance(declared, ArrayType):
    return MaterializationKind.ARRAY if is_string_type(declared.element) else MaterializationKind.UNSUPPORTED

  if isinstance(declared, Parameterized):
    if len(declared.parameters) == 1 and is_string_type(declared.parameters[0]):
      return _CONTAINERS.get(declared.base.fqn, MaterializationKind.UNSUPPORTED)
    return MaterializationKind.UNSUPPORTED

  return MaterializationKind.UNSUPPORTED
