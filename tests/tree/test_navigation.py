"""
Tests for scope-aware tree navigation.
"""

from default_migrator.tree.navigation import (
  add_import,
  is_same_or_ancestor,
  iter_classes,
  member_names,
  nested_member_names,
  transform_classes,
  uses_type,
  visible_member_names,
)
from default_migrator.tree.nodes import Import
from default_migrator.tree.types import BOOLEAN, INT
from tests.java_tree import CONSTANTS, NESTED, class_type, field, klass, lit, method, prop, unit

A = class_type("A")
B = class_type("B", owner=A)
C = class_type("C", owner=B)


def nested_unit(imports=("x.y.z.Property",)):
  return unit(
    "A.java",
    klass(
      A,
      field("a", INT),
      method("getA", INT),
      klass(B, field("b", INT), klass(C, method("c", BOOLEAN))),
    ),
    imports=imports,
  )


def test_iter_classes_is_pre_order_with_chains():
  walked = [(cls.name, [c.name for c in chain]) for cls, chain in iter_classes(nested_unit())]
  assert walked == [("A", ["A"]), ("B", ["A", "B"]), ("C", ["A", "B", "C"])]


def test_visible_member_names_include_enclosing_classes():
  chain = [chain for cls, chain in iter_classes(nested_unit()) if cls.name == "C"][0]
  assert visible_member_names(chain) == {"a", "getA", "b", "c"}
  assert member_names(chain[1]) == {"b"}


def test_nested_member_names_cover_every_depth():
  outer = nested_unit().classes[0]
  assert nested_member_names(outer) == {"b", "c"}
  assert nested_member_names(outer.body[2].body[1]) == set()


def test_is_same_or_ancestor():
  assert is_same_or_ancestor(A, C) is True
  assert is_same_or_ancestor(C, C) is True
  assert is_same_or_ancestor(C, A) is False
  assert is_same_or_ancestor(CONSTANTS, NESTED) is True
  assert is_same_or_ancestor(None, A) is None


def test_transform_classes_is_post_order():
  seen = []

  def visit(cls, chain):
    seen.append(cls.name)
    return cls

  u = nested_unit()
  assert transform_classes(u, visit) is u
  assert seen == ["C", "B", "A"]


def test_transform_classes_rebuilds_parents_of_changed_classes():
  def rename(cls, chain):
    if cls.name == "C":
      return cls.with_changes(modifiers=("static",))
    return cls

  u = nested_unit()
  new = transform_classes(u, rename)
  assert new is not u
  outer = new.classes[0]
  assert outer.body[2].body[1].modifiers == ("static",)
  assert outer.body[0] is u.classes[0].body[0]


def test_uses_type():
  assert uses_type(nested_unit(), "x.y.z.Property")
  assert uses_type(nested_unit(imports=("x.y.z.*",)), "x.y.z.Property")
  assert not uses_type(nested_unit(imports=("java.util.List",)), "x.y.z.Property")
  annotated = unit("A.java", klass(A, method("f", INT, prop(lit("1")))), imports=())
  assert uses_type(annotated, "x.y.z.Property")


def test_add_import_sorted_position():
  imports = (Import("a.b.C"), Import("x.y.z.Property"), Import("org.Foo.bar", static=True))
  result = add_import(imports, "x.y.z.DefaultValue")
  assert [i.fqn for i in result] == ["a.b.C", "x.y.z.DefaultValue", "x.y.z.Property", "org.Foo.bar"]


def test_add_import_appends_before_static_imports():
  imports = (Import("a.b.C"), Import("org.Foo.bar", static=True))
  result = add_import(imports, "x.y.z.DefaultValue")
  assert [i.fqn for i in result] == ["a.b.C", "x.y.z.DefaultValue", "org.Foo.bar"]


def test_add_import_is_idempotent():
  imports = (Import("x.y.z.DefaultValue"),)
  assert add_import(imports, "x.y.z.DefaultValue") == imports
  assert add_import((Import("x.y.z.*"),), "x.y.z.DefaultValue") == (Import("x.y.z.*"),)
