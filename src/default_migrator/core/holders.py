"""
Typed Value Holder Schema.

The companion annotations written by the rewriter are members of one annotation
family, nested inside the value holder type::

    @DefaultValue.Boolean(flagAsBoolean)
    @DefaultValue.DefaultByte(3)
    @DefaultValue.List({"a", "b"})

This module names the holder used for each materialization kind and renders
the Java source of the whole family so it can be added to a build.
"""

from typing import List, Optional, Tuple

from default_migrator.enums import MaterializationKind

# (holder name, value type) in declaration order
HOLDER_MEMBERS: Tuple[Tuple[str, str], ...] = (
  ("String", "java.lang.String"),
  ("Class", "java.lang.Class<?>"),
  ("Boolean", "boolean"),
  ("DefaultByte", "byte"),
  ("DefaultChar", "char"),
  ("DefaultShort", "short"),
  ("Int", "int"),
  ("Long", "long"),
  ("Float", "float"),
  ("Double", "double"),
  ("List", "java.lang.String[]"),
  ("Array", "java.lang.String[]"),
  ("Enum", "java.lang.String"),
  ("Set", "java.lang.String[]"),
)

_HOLDER_NAMES = {
  MaterializationKind.PASS_THROUGH_STRING: "String",
  MaterializationKind.BOOLEAN: "Boolean",
  MaterializationKind.BYTE: "DefaultByte",
  MaterializationKind.CHAR: "DefaultChar",
  MaterializationKind.SHORT: "DefaultShort",
  MaterializationKind.INT: "Int",
  MaterializationKind.LONG: "Long",
  MaterializationKind.FLOAT: "Float",
  MaterializationKind.DOUBLE: "Double",
  MaterializationKind.LIST: "List",
  MaterializationKind.ARRAY: "Array",
  MaterializationKind.SET: "Set",
}


def holder_name(kind: MaterializationKind) -> Optional[str]:
  """
  Returns the nested holder used for ``kind`` (``DefaultByte`` for BYTE).

  Args:
      kind: The occurrence's materialization kind.

  Returns:
      Optional[str]: None for UNSUPPORTED.
  """
  return _HOLDER_NAMES.get(kind)


def render_schema(value_holder: str = "x.y.z.DefaultValue") -> str:
  """
  Renders the Java source declaring the holder annotation family.

  Args:
      value_holder: Fully qualified name of the outer holder annotation.

  Returns:
      str: A complete compilation unit, newline terminated.
  """
  package, _, simple = value_holder.rpartition(".")
  member_meta = (
    f"  @{simple} @Target({{ElementType.METHOD, ElementType.FIELD}}) @Retention(RetentionPolicy.RUNTIME)"
  )

  lines: List[str] = []
  if package:
    lines += [f"package {package};", ""]
  lines += [
    "import java.lang.annotation.*;",
    "",
    "@Target(ElementType.ANNOTATION_TYPE) @Retention(RetentionPolicy.RUNTIME)",
    f"public @interface {simple} {{",
  ]
  for name, value_type in HOLDER_MEMBERS:
    lines.append(member_meta)
    lines.append(f"  public @interface {name} {{{value_type} value();}}")
  lines.append("}")
  return "\n".join(lines) + "\n"
