"""
Console and Logging.

User-facing output of the package goes through the ``default_migrator`` logger,
rendered by a single ``RichHandler`` bound to the active rich ``Console``.

The module-level ``console`` is a stable handle: modules import it once, and
``set_console`` re-binds it (and the log handler) to another console, such as a
``Console(record=True)`` whose output a test or an embedding tool inspects.

Attributes:
    logger (logging.Logger): The package logger.
    console (_ConsoleProxy): Handle on the active console.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "default_migrator"

# Between INFO and WARNING
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
    "field": "bold magenta",
    "kind": "cyan",
  }
)

logger = logging.getLogger(LOGGER_NAME)


def _fresh_console() -> Console:
  return Console(theme=THEME)


class _ConsoleProxy:
  """
  Forwards to the bound rich ``Console`` and keeps the package log handler
  pointed at it.
  """

  def __init__(self) -> None:
    self._bound: Console = _fresh_console()
    self._handler: Optional[RichHandler] = None
    self._attach_handler()

  @property
  def backend(self) -> Console:
    return self._bound

  def bind(self, target: Optional[Console] = None) -> None:
    """
    Re-binds the proxy.

    Args:
        target: Console to use from now on. A fresh stdout console if None.
    """
    self._bound = target if target is not None else _fresh_console()
    self._attach_handler()

  def _attach_handler(self) -> None:
    if self._handler is not None:
      logger.removeHandler(self._handler)
    self._handler = RichHandler(
      console=self._bound,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    logger.addHandler(self._handler)
    if logger.level == logging.NOTSET:
      logger.setLevel(logging.INFO)

  @property
  def handler(self) -> Optional[RichHandler]:
    return self._handler

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._bound.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._bound, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Routes console output and package log records to ``new_console``.

  Args:
      new_console (Console): The rich console to use.
  """
  console.bind(new_console)


def reset_console() -> None:
  console.bind(None)


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): Message text, may contain rich markup such as ``[path]``.
  """
  logger.info(f"ℹ️  {msg}")


def log_success(msg: str) -> None:
  logger.log(SUCCESS_LEVEL_NUM, f"✅ {msg}")


def log_warning(msg: str) -> None:
  logger.warning(f"⚠️  {msg}")


def log_error(msg: str) -> None:
  logger.error(f"❌ {msg}")
