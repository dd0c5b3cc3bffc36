"""
Tests for the console proxy and logging helpers.

Verifies:
1. Attribute access falls through to the active backend.
2. Injected consoles receive log records and tables.
3. The SUCCESS level sits between INFO and WARNING.
"""

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from default_migrator.utils.console import (
  LOGGER_NAME,
  SUCCESS_LEVEL_NUM,
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
  reset_console,
  set_console,
)


@pytest.fixture(autouse=True)
def cleanup_console():
  reset_console()
  yield
  reset_console()


def recorder() -> Console:
  return Console(file=io.StringIO(), record=True, width=200)


def test_proxy_delegates_to_backend():
  rec = recorder()
  set_console(rec)
  assert console.backend is rec
  assert console.width == 200
  console.print("Migration Report")
  assert "Migration Report" in rec.export_text()


def test_log_helpers_reach_injected_console():
  rec = recorder()
  set_console(rec)

  log_info("Migrating 2 files...")
  log_success("Migrated: A.json")
  log_warning("Leaving [path]B.java[/path] unmodified")
  log_error("Input not found")

  output = rec.export_text()
  assert "ℹ️  Migrating 2 files..." in output
  assert "✅ Migrated: A.json" in output
  assert "Leaving B.java unmodified" in output
  assert "❌ Input not found" in output


def test_reset_creates_fresh_backend():
  temp = recorder()
  set_console(temp)
  reset_console()
  assert console.backend is not temp
  assert isinstance(console.backend, Console)


def test_single_rich_handler_follows_backend():
  rec = recorder()
  set_console(rec)
  set_console(recorder())
  handlers = [h for h in logging.getLogger(LOGGER_NAME).handlers if isinstance(h, RichHandler)]
  assert len(handlers) == 1
  assert handlers[0] is console.handler
  assert handlers[0].console is console.backend


def test_success_level():
  assert logging.INFO < SUCCESS_LEVEL_NUM < logging.WARNING
  assert logging.getLevelName(SUCCESS_LEVEL_NUM) == "SUCCESS"
