"""
Tests for the JSON interchange of typed trees.
"""

import json

import pytest

from default_migrator.core.errors import TreeFormatError
from default_migrator.tree.io import dumps, loads, read_unit, write_unit
from default_migrator.tree.nodes import ArrayInitializer, CompilationUnit, FieldAccess, MethodInvocation
from default_migrator.tree.types import BOOLEAN, STRING, list_of
from tests.java_tree import NESTED, access, class_type, field, ident, klass, lit, method, named, prop, unit

A = class_type("A")
B = class_type("B", owner=A)


def sample_unit() -> CompilationUnit:
  return unit(
    "src/A.java",
    klass(
      A,
      field("someField", STRING, lit('"a,b"')),
      method("flag", BOOLEAN, prop(access(NESTED, "INNER"), named("propertyName", "flag"))),
      method("names", list_of(STRING), prop(ident("someField", A)), body=("return null;",)),
      klass(B, field("inner", STRING, MethodInvocation("trim", lit('" x "'), ()))),
      modifiers=("public",),
    ),
    imports=("x.y.z.Property", "java.util.List"),
  )


def test_round_trip_preserves_tree():
  original = sample_unit()
  assert loads(dumps(original)) == original


def test_nested_types_keep_their_owner():
  restored = loads(dumps(sample_unit()))
  inner = restored.classes[0].body[3]
  assert inner.type.owner.fqn == "x.y.z.A"
  anchor = restored.classes[0].body[1].leading_annotations[0].arguments[1].value
  assert isinstance(anchor, FieldAccess)
  assert anchor.name.field_type.owner.owner.fqn == "x.y.z.Constants"


def test_documents_are_tagged():
  doc = json.loads(dumps(sample_unit()))
  assert doc["node"] == "compilation_unit"
  assert doc["classes"][0]["body"][0]["node"] == "field"
  assert doc["imports"][0] == {"fqn": "x.y.z.Property", "static": False, "node": "import"}


def test_minimal_document():
  restored = loads('{"source_path": "Empty.java"}')
  assert restored == CompilationUnit(source_path="Empty.java")


def test_array_initializer_round_trip():
  value = ArrayInitializer((lit('"a"'), lit('"b"')))
  u = unit("A.java", klass(A, method("names", list_of(STRING), prop(value))))
  assert loads(dumps(u)) == u


@pytest.mark.parametrize(
  "text",
  [
    "not json",
    '{"node": "compilation_unit"}',
    '{"source_path": "A.java", "classes": [{"node": "field", "name": "x"}]}',
    '{"source_path": "A.java", "classes": [{"name": "A", "type": {"fqn": "A", "node": "bogus"}}]}',
  ],
)
def test_invalid_documents_raise(text):
  with pytest.raises(TreeFormatError):
    loads(text)


def test_file_helpers(tmp_path):
  path = tmp_path / "nested" / "A.json"
  write_unit(sample_unit(), path)
  assert path.exists()
  assert read_unit(path) == sample_unit()
