"""
Migration Configuration.

Names the annotation types the migration works on and switches the optional
behaviours. Settings are read from ``[tool.default_migrator]`` in the nearest
``pyproject.toml`` and can be overridden programmatically or from the CLI.
"""

import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from default_migrator.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

_FQN_RE = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)+$")


class MigrationConfig(BaseModel):
  """
  Global configuration container for the migration engine.
  """

  attribute_holder: str = Field(
    "x.y.z.Property",
    description="Fully qualified annotation whose attribute is migrated.",
  )
  attribute_name: str = Field("defaultValue", description="Name of the migrated attribute.")
  value_holder: str = Field(
    "x.y.z.DefaultValue",
    description="Fully qualified typed value holder annotation family.",
  )
  inline_container_literals: bool = Field(
    True,
    description="If True, container literals become array initializers instead of synthesized fields.",
  )
  emit_string_holder: bool = Field(
    False,
    description="If True, String targets keep their value in a DefaultValue.String companion.",
  )
  add_imports: bool = Field(True, description="Import the value holder where companions are added.")
  require_holder_usage: bool = Field(
    True,
    description="Skip compilation units that never reference the attribute holder.",
  )
  workers: int = Field(1, ge=1, description="Thread pool size for per-file work.")

  @field_validator("attribute_holder", "value_holder")
  @classmethod
  def validate_fqn(cls, v: str) -> str:
    """
    Ensures annotation types are fully qualified.

    Args:
        v (str): The configured type name.

    Returns:
        str: The stripped name.

    Raises:
        ValueError: If the name is not a dotted Java identifier path.
    """
    v_clean = v.strip()
    if not _FQN_RE.match(v_clean):
      raise ValueError(f"Expected a fully qualified type name, got '{v}'")
    return v_clean

  @field_validator("attribute_name")
  @classmethod
  def validate_attribute(cls, v: str) -> str:
    v_clean = v.strip()
    if not v_clean.isidentifier():
      raise ValueError(f"Invalid attribute name: '{v}'")
    return v_clean

  @property
  def value_holder_simple_name(self) -> str:
    """Holder type as written in companions (``DefaultValue``)."""
    return self.value_holder.rsplit(".", 1)[-1]

  @classmethod
  def load(
    cls,
    attribute_holder: Optional[str] = None,
    attribute_name: Optional[str] = None,
    value_holder: Optional[str] = None,
    workers: Optional[int] = None,
    settings: Optional[Dict[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "MigrationConfig":
    """
    Loads configuration from pyproject.toml and overrides with explicit arguments.

    Precedence: explicit arguments, then ``settings`` (CLI key=value flags),
    then the TOML section, then defaults.

    Args:
        attribute_holder (Optional[str]): Override for the attribute holder type.
        attribute_name (Optional[str]): Override for the attribute name.
        value_holder (Optional[str]): Override for the value holder type.
        workers (Optional[int]): Override for the worker count.
        settings (Optional[Dict]): Additional key/value overrides.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        MigrationConfig: The fully resolved configuration object.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())
    merged: Dict[str, Any] = {**toml_config, **(settings or {})}

    explicit = {
      "attribute_holder": attribute_holder,
      "attribute_name": attribute_name,
      "value_holder": value_holder,
      "workers": workers,
    }
    merged.update({k: v for k, v in explicit.items() if v is not None})

    known = {k: v for k, v in merged.items() if k in cls.model_fields}
    return cls(**known)


def _find_pyproject(start_path: Path) -> Optional[Path]:
  here = start_path.resolve()
  return next((d / "pyproject.toml" for d in (here, *here.parents) if (d / "pyproject.toml").is_file()), None)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Reads ``[tool.default_migrator]`` from the nearest ``pyproject.toml``.

  The search walks from ``start_path`` up to the filesystem root and stops at
  the first file found, even if it has no such section. An unreadable file is
  treated as empty.

  Args:
      start_path (Path): Directory to start from.

  Returns:
      Tuple[Dict, Optional[Path]]: The section and the directory holding the
      file, or ``({}, None)``.
  """
  toml_path = _find_pyproject(start_path)
  if toml_path is None:
    return {}, None
  try:
    document = tomllib.loads(toml_path.read_text(encoding="utf-8"))
  except (OSError, tomllib.TOMLDecodeError) as e:
    log_warning(f"Ignoring unreadable [path]{toml_path}[/path]: {e}")
    return {}, None
  return document.get("tool", {}).get("default_migrator", {}), toml_path.parent


def _coerce(raw: str) -> Any:
  lowered = raw.lower()
  if lowered in ("true", "false"):
    return lowered == "true"
  for convert in (int, float):
    try:
      return convert(raw)
    except ValueError:
      continue
  return raw


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Turns ``--config key=value`` flags into settings for ``MigrationConfig.load``.

  Values become bool (``true``/``false``, any case), int or float where they
  parse as such, and stay strings otherwise. Items without ``=`` are reported
  and dropped.

  Args:
      items (Optional[List[str]]): Raw flag values from argparse.

  Returns:
      Dict[str, Any]: Settings keyed by field name.
  """
  settings: Dict[str, Any] = {}
  for item in items or ():
    key, sep, raw = item.partition("=")
    if not sep or not key.strip():
      log_warning(f"Ignoring config override '{item}', expected key=value")
      continue
    settings[key.strip()] = _coerce(raw.strip())
  return settings
