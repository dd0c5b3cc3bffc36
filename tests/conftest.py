"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Console capture so tests can assert on logged output.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'default_migrator' without installing it
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src"))
sys.path.insert(0, str(root_path))

from default_migrator.config import MigrationConfig  # noqa: E402
from default_migrator.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture
def config():
  """Default configuration, independent of any pyproject.toml on disk."""
  return MigrationConfig()


@pytest.fixture
def recorded_console():
  """
  Routes console and logging output to an in-memory recorder for the test.
  """
  rec = Console(file=io.StringIO(), record=True, width=200, force_terminal=False)
  set_console(rec)
  yield rec
  reset_console()
