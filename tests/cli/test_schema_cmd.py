"""
Tests for the CLI 'schema' Command.
"""

from default_migrator.cli.__main__ import main


def test_schema_default_holder(capsys, recorded_console, monkeypatch, tmp_path):
  monkeypatch.chdir(tmp_path)
  assert main(["schema"]) == 0
  out = capsys.readouterr().out
  assert out.startswith("package x.y.z;\n")
  assert "public @interface DefaultValue {" in out
  assert "  public @interface Boolean {boolean value();}" in out


def test_schema_custom_holder(capsys, recorded_console, monkeypatch, tmp_path):
  monkeypatch.chdir(tmp_path)
  assert main(["schema", "--holder", "com.acme.Defaults"]) == 0
  out = capsys.readouterr().out
  assert out.startswith("package com.acme;\n")
  assert "public @interface Defaults {" in out


def test_schema_holder_from_toml(capsys, recorded_console, monkeypatch, tmp_path):
  (tmp_path / "pyproject.toml").write_text('[tool.default_migrator]\nvalue_holder = "org.example.Holder"\n')
  monkeypatch.chdir(tmp_path)
  assert main(["schema"]) == 0
  assert "public @interface Holder {" in capsys.readouterr().out


def test_schema_invalid_holder(recorded_console, monkeypatch, tmp_path):
  monkeypatch.chdir(tmp_path)
  assert main(["schema", "--holder", "Defaults"]) == 1
  assert "Invalid holder type" in recorded_console.export_text()
