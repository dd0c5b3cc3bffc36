"""
Tests for Configuration validation and CLI Parameter Passing.
"""

import pytest
from pydantic import ValidationError

from default_migrator.config import MigrationConfig, parse_cli_key_values


def test_defaults():
  cfg = MigrationConfig()
  assert cfg.attribute_holder == "x.y.z.Property"
  assert cfg.attribute_name == "defaultValue"
  assert cfg.value_holder == "x.y.z.DefaultValue"
  assert cfg.value_holder_simple_name == "DefaultValue"
  assert cfg.inline_container_literals is True
  assert cfg.emit_string_holder is False
  assert cfg.add_imports is True
  assert cfg.require_holder_usage is True
  assert cfg.workers == 1


def test_names_are_stripped():
  cfg = MigrationConfig(value_holder="  com.acme.Defaults ", attribute_name=" fallback ")
  assert cfg.value_holder == "com.acme.Defaults"
  assert cfg.value_holder_simple_name == "Defaults"
  assert cfg.attribute_name == "fallback"


@pytest.mark.parametrize(
  "overrides",
  [
    {"attribute_holder": "Property"},
    {"value_holder": "x.y..DefaultValue"},
    {"value_holder": "x.y.1DefaultValue"},
    {"attribute_name": "default-value"},
    {"workers": 0},
  ],
)
def test_invalid_values_are_rejected(overrides):
  with pytest.raises(ValidationError):
    MigrationConfig(**overrides)


def test_cli_parsing_creates_valid_pydantic_model():
  """Verify flow from CLI strings -> Dict -> Pydantic Model."""
  parsed = parse_cli_key_values(["inline_container_literals=false", "workers=3", "value_holder=com.acme.Defaults"])
  assert parsed == {"inline_container_literals": False, "workers": 3, "value_holder": "com.acme.Defaults"}

  cfg = MigrationConfig(**parsed)
  assert cfg.inline_container_literals is False
  assert cfg.workers == 3


def test_cli_parsing_type_inference():
  parsed = parse_cli_key_values(["ratio=0.5", "flag=TRUE", "name=defaultValue", "count=10"])
  assert parsed == {"ratio": 0.5, "flag": True, "name": "defaultValue", "count": 10}


def test_cli_parsing_ignores_malformed_items(recorded_console):
  assert parse_cli_key_values(["novalue", "=3"]) == {}
  assert parse_cli_key_values(None) == {}
  assert "Ignoring config override 'novalue'" in recorded_console.export_text()
