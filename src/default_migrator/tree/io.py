"""
JSON Interchange for Typed Trees.

An external parser/type-resolver hands compilation units to the engine as JSON
documents. The schema is the dataclass model itself: every node carries a
``node`` tag and pydantic validates the document into frozen dataclasses.

Example document::

    {
      "node": "compilation_unit",
      "source_path": "src/A.java",
      "imports": [{"node": "import", "fqn": "x.y.z.Property"}],
      "classes": [...]
    }
"""

from pathlib import Path
from typing import Union

from pydantic import TypeAdapter, ValidationError

from default_migrator.core.errors import TreeFormatError
from default_migrator.tree.nodes import CompilationUnit

_UNIT_ADAPTER = TypeAdapter(CompilationUnit)


def loads(text: Union[str, bytes]) -> CompilationUnit:
  """
  Parses a JSON document into a compilation unit.

  Args:
      text: The JSON text.

  Returns:
      CompilationUnit: The validated tree.

  Raises:
      TreeFormatError: If the document does not match the tree schema.
  """
  try:
    return _UNIT_ADAPTER.validate_json(text)
  except ValidationError as e:
    raise TreeFormatError(f"Invalid tree document: {e}") from e


def dumps(unit: CompilationUnit, indent: int = 2) -> str:
  """
  Serializes a compilation unit to JSON.

  Args:
      unit: The tree to serialize.
      indent: JSON indentation.

  Returns:
      str: The JSON text.
  """
  return _UNIT_ADAPTER.dump_json(unit, indent=indent).decode("utf-8")


def read_unit(path: Path) -> CompilationUnit:
  with open(path, "rt", encoding="utf-8") as f:
    return loads(f.read())


def write_unit(unit: CompilationUnit, path: Path) -> None:
  path.parent.mkdir(parents=True, exist_ok=True)
  with open(path, "wt", encoding="utf-8") as f:
    f.write(dumps(unit))
