"""
Tests for Occurrence discovery and analysis.

Verifies the state each occurrence reaches and the key or inline value it derives.
"""

import pytest

from default_migrator.config import MigrationConfig
from default_migrator.core.accumulator import LiteralKey, SymbolKey
from default_migrator.core.occurrences import analyse, find_attribute, iter_occurrences
from default_migrator.enums import MaterializationKind as K, OccurrenceState, SkipReason
from default_migrator.tree.nodes import Annotation, Identifier, LiteralExpr, MethodInvocation
from default_migrator.tree.printer import print_expression
from default_migrator.tree.types import BOOLEAN, BYTE, INT, STRING, ClassType, list_of
from tests.java_tree import CONSTANTS, PROPERTY, access, class_type, field, ident, klass, lit, method, named, prop, unit

A = class_type("A")
B = class_type("B", owner=A)


def only(u, config=None):
  config = config or MigrationConfig()
  occs = [analyse(o, config) for o in iter_occurrences(u, config)]
  assert len(occs) == 1
  return occs[0]


def test_find_attribute_among_other_arguments():
  annotation = prop(lit('"3"'), named("propertyName", "a"))
  index, assignment = find_attribute(annotation, "defaultValue")
  assert index == 1
  assert assignment.value == lit('"3"')
  assert find_attribute(annotation, "other") is None
  assert find_attribute(Annotation(PROPERTY, "Property"), "defaultValue") is None


def test_discovers_methods_and_fields_in_nested_order():
  u = unit(
    "A.java",
    klass(
      A,
      method("a", BOOLEAN, prop(lit('"true"'))),
      klass(B, field("b", INT, None, prop(lit('"1"')))),
      method("c", BOOLEAN, prop(lit('"false"'))),
    ),
  )
  config = MigrationConfig()
  assert [o.member.name for o in iter_occurrences(u, config)] == ["a", "c", "b"]


def test_ignores_other_annotations_and_attributes():
  other = Annotation(ClassType("x.y.z.Other"), "Other", (named("defaultValue", "1"),))
  u = unit(
    "A.java",
    klass(
      A,
      method("a", INT, other),
      method("b", INT, Annotation(PROPERTY, "Property", (named("propertyName", "b"),))),
    ),
  )
  assert list(iter_occurrences(u, MigrationConfig())) == []


def test_unsupported_kind_is_skipped():
  occ = only(unit("A.java", klass(A, method("color", ClassType("x.y.z.Color"), prop(lit('"RED"'))))))
  assert occ.state == OccurrenceState.SKIPPED
  assert occ.skip_reason == SkipReason.UNSUPPORTED_KIND


def test_string_target_has_no_key():
  occ = only(unit("A.java", klass(A, method("name", STRING, prop(ident("someField", A))))))
  assert occ.kind == K.PASS_THROUGH_STRING
  assert occ.state == OccurrenceState.CLASSIFIED
  assert occ.key is None


def test_scalar_literal_converts_inline():
  occ = only(unit("A.java", klass(A, method("b", BYTE, prop(lit('"3"'))))))
  assert occ.state == OccurrenceState.CLASSIFIED
  assert occ.key is None
  assert occ.inline_value == LiteralExpr("3", type=BYTE)


@pytest.mark.parametrize("text", ['"abc"', '"300"', '""'])
def test_invalid_scalar_literal_is_skipped(text):
  occ = only(unit("A.java", klass(A, method("b", BYTE, prop(lit(text))))))
  assert occ.skip_reason == SkipReason.INVALID_LITERAL


def test_container_literal_inline_mode():
  occ = only(unit("A.java", klass(A, method("names", list_of(STRING), prop(lit('"a,b"'))))))
  assert occ.key is None
  assert print_expression(occ.inline_value) == '{"a", "b"}'


def test_container_literal_field_mode():
  config = MigrationConfig(inline_container_literals=False)
  occ = only(unit("A.java", klass(A, method("names", list_of(STRING), prop(lit('"a,b"'))))), config)
  assert occ.state == OccurrenceState.KEY_ASSIGNED
  assert occ.key == LiteralKey("A.java", '"a,b"')


def test_symbol_anchor_gets_symbol_key():
  occ = only(unit("A.java", klass(A, method("flag", BOOLEAN, prop(access(CONSTANTS, "SOME_BOOLEAN"))))))
  assert occ.state == OccurrenceState.KEY_ASSIGNED
  assert occ.key == SymbolKey("A.java", access(CONSTANTS, "SOME_BOOLEAN").name.field_type, K.BOOLEAN)
  assert occ.location == "A.flag"


def test_container_symbol_key_uses_storage_kind():
  occ = only(unit("A.java", klass(A, method("names", list_of(STRING), prop(ident("someField", A))))))
  assert occ.kind == K.LIST
  assert occ.key.kind == K.ARRAY


def test_unresolved_symbol_and_unsupported_shape():
  u1 = unit("A.java", klass(A, method("flag", BOOLEAN, prop(Identifier("mystery")))))
  assert only(u1).skip_reason == SkipReason.UNRESOLVED_SYMBOL

  call = MethodInvocation("compute", Identifier("Constants", type=CONSTANTS))
  u2 = unit("A.java", klass(A, method("flag", BOOLEAN, prop(call))))
  assert only(u2).skip_reason == SkipReason.UNSUPPORTED_ANCHOR


def test_custom_attribute_name():
  config = MigrationConfig(attribute_name="fallback")
  u = unit("A.java", klass(A, method("n", INT, prop(lit('"1"'), attribute="fallback"))))
  assert only(u, config).inline_value == LiteralExpr("1", type=INT)
