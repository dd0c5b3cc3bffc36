"""
Tests for the Field Synthesizer.

Verifies placement, ordering, scoped anchors and failure on broken entries.
"""

import pytest

from default_migrator.core.accumulator import Accumulator, Produced
from default_migrator.core.errors import TemplateError
from default_migrator.core.synthesizer import FieldSynthesizer
from default_migrator.core.templates import build_field_template
from default_migrator.core.tracer import TraceEventType, TraceLogger
from default_migrator.enums import ContextSensitivity, MaterializationKind as K
from default_migrator.tree.nodes import FieldDeclaration, Identifier
from default_migrator.tree.printer import print_class, print_field
from default_migrator.tree.types import BOOLEAN, STRING, Variable
from tests.java_tree import CONSTANTS, access, class_type, field, ident, klass, lit, method, prop

A = class_type("A")
B = class_type("B", owner=A)


def record(acc, name, kind, anchor, sensitivity=ContextSensitivity.RESOLVED_LOCALLY, scope=A, template=True):
  entry = Produced(
    field_name=name,
    kind=kind,
    field_template=build_field_template(name, kind) if template else None,
    context_sensitivity=sensitivity,
    anchor_expr=anchor,
    target_scope=scope,
  )
  return acc.record_symbol("A.java", Variable(scope, name), kind, lambda: entry)


def test_fields_follow_last_field_in_name_order():
  acc = Accumulator()
  record(acc, "someFieldAsBoolean", K.BOOLEAN, ident("someField", A))
  record(
    acc,
    "constants__some_booleanAsBoolean",
    K.BOOLEAN,
    access(CONSTANTS, "SOME_BOOLEAN"),
    ContextSensitivity.REQUIRES_SCOPED_TEMPLATE,
  )
  cls = klass(
    A,
    field("someField", STRING, lit('"false"')),
    method("flag", BOOLEAN, prop(ident("someField", A))),
  )

  out = FieldSynthesizer(acc, TraceLogger()).synthesize("A.java", cls)

  assert print_class(out) == [
    "class A {",
    '    private String someField = "false";',
    "    private boolean constants__some_booleanAsBoolean = Boolean.parseBoolean(Constants.SOME_BOOLEAN);",
    "    private boolean someFieldAsBoolean = Boolean.parseBoolean(someField);",
    "",
    "    @Property(defaultValue = someField)",
    "    boolean flag();",
    "}",
  ]


def test_fields_go_first_without_existing_fields():
  acc = Accumulator()
  record(acc, "xAsBoolean", K.BOOLEAN, ident("x", A))
  cls = klass(A, method("flag", BOOLEAN))
  out = FieldSynthesizer(acc, TraceLogger()).synthesize("A.java", cls)
  assert isinstance(out.body[0], FieldDeclaration)
  assert out.body[0].name == "xAsBoolean"


def test_only_entries_of_this_scope():
  acc = Accumulator()
  record(acc, "inBAsBoolean", K.BOOLEAN, ident("x", B), scope=B)
  cls = klass(A, field("x"))
  synthesizer = FieldSynthesizer(acc, TraceLogger())
  assert synthesizer.synthesize("A.java", cls) is cls
  assert synthesizer.synthesize("Other.java", klass(B)) == klass(B)


def test_existing_member_is_not_duplicated():
  acc = Accumulator()
  record(acc, "xAsBoolean", K.BOOLEAN, ident("x", A))
  cls = klass(A, field("xAsBoolean", BOOLEAN))
  assert FieldSynthesizer(acc, TraceLogger()).synthesize("A.java", cls) is cls


def test_scoped_template_requalifies_nested_anchor():
  acc = Accumulator()
  written = access(B, "anotherField", qualifier=Identifier("B", type=B))
  record(acc, "b__anotherfieldAsBoolean", K.BOOLEAN, written, ContextSensitivity.REQUIRES_SCOPED_TEMPLATE)
  out = FieldSynthesizer(acc, TraceLogger()).synthesize("A.java", klass(A))
  assert print_field(out.body[0]) == [
    "private boolean b__anotherfieldAsBoolean = Boolean.parseBoolean(A.B.anotherField);"
  ]


def test_locally_resolved_anchor_is_kept_as_written():
  acc = Accumulator()
  written = access(B, "anotherField", qualifier=Identifier("B", type=B))
  record(acc, "b__anotherfieldAsBoolean", K.BOOLEAN, written)
  out = FieldSynthesizer(acc, TraceLogger()).synthesize("A.java", klass(A))
  assert "Boolean.parseBoolean(B.anotherField)" in print_field(out.body[0])[0]


def test_missing_template_raises():
  acc = Accumulator()
  record(acc, "xAsBoolean", K.BOOLEAN, ident("x", A), template=False)
  with pytest.raises(TemplateError):
    FieldSynthesizer(acc, TraceLogger()).synthesize("A.java", klass(A))


def test_mutations_are_traced():
  acc = Accumulator()
  tracer = TraceLogger()
  record(acc, "xAsBoolean", K.BOOLEAN, ident("x", A))
  FieldSynthesizer(acc, tracer).synthesize("A.java", klass(A))
  (event,) = tracer.events(TraceEventType.TREE_MUTATION)
  assert event.metadata["after"] == "private boolean xAsBoolean = Boolean.parseBoolean(x);"
