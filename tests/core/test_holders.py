"""
Tests for the typed value holder schema.
"""

import pytest

from default_migrator.core.holders import HOLDER_MEMBERS, holder_name, render_schema
from default_migrator.enums import MaterializationKind as K


@pytest.mark.parametrize(
  "kind, expected",
  [
    (K.BOOLEAN, "Boolean"),
    (K.BYTE, "DefaultByte"),
    (K.CHAR, "DefaultChar"),
    (K.SHORT, "DefaultShort"),
    (K.INT, "Int"),
    (K.LIST, "List"),
    (K.ARRAY, "Array"),
    (K.SET, "Set"),
    (K.PASS_THROUGH_STRING, "String"),
    (K.UNSUPPORTED, None),
  ],
)
def test_holder_names(kind, expected):
  assert holder_name(kind) == expected


def test_every_holder_is_declared_in_schema():
  declared = {name for name, _ in HOLDER_MEMBERS}
  for kind in K:
    name = holder_name(kind)
    if name is not None:
      assert name in declared


def test_render_default_schema():
  text = render_schema()
  lines = text.splitlines()
  assert lines[0] == "package x.y.z;"
  assert "import java.lang.annotation.*;" in lines
  assert "public @interface DefaultValue {" in lines
  assert "  public @interface DefaultByte {byte value();}" in lines
  assert "  public @interface List {java.lang.String[] value();}" in lines
  assert lines.count("  @DefaultValue @Target({ElementType.METHOD, ElementType.FIELD}) @Retention(RetentionPolicy.RUNTIME)") == len(
    HOLDER_MEMBERS
  )
  assert text.endswith("}\n")


def test_render_custom_holder():
  text = render_schema("com.acme.Defaults")
  assert text.startswith("package com.acme;\n")
  assert "public @interface Defaults {" in text
  assert "  @Defaults @Target(" in text
