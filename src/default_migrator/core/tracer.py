"""
Migration Trace.

Structured record of what a run did, exported into
``MigrationResult.trace_events`` and optionally dumped by the CLI
(``--json-trace``):

- phases (``Scan``, ``Apply`` and one per file), nested through ``parent_id``;
- accumulator decisions (entry recorded, entry reused);
- skipped occurrences with their ``SkipReason``;
- tree mutations (field synthesized, attribute stripped, companion added,
  import added) and analysis warnings.

Per-file work may run on worker threads, so every thread tracks its own open
phases. Outside of those, events nest under the phase the main thread has open.
"""

import threading
import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  ENTRY_RECORDED = "entry_recorded"
  ENTRY_REUSED = "entry_reused"
  OCCURRENCE_SKIPPED = "occurrence_skipped"
  TREE_MUTATION = "tree_mutation"
  ANALYSIS_WARNING = "analysis_warning"
  IMPORT_ACTION = "import_action"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


def _new_id() -> str:
  return str(uuid.uuid4())


class TraceLogger:
  """
  Thread-safe, append-only event log for one engine run.
  """

  def __init__(self) -> None:
    self._log: List[TraceEvent] = []
    self._guard = threading.Lock()
    self._per_thread = threading.local()
    self._main_open: Optional[str] = None

  def _open_phases(self) -> List[str]:
    phases = getattr(self._per_thread, "open", None)
    if phases is None:
      phases = self._per_thread.open = []
    return phases

  def _current_phase(self) -> Optional[str]:
    phases = self._open_phases()
    return phases[-1] if phases else self._main_open

  def _record(self, kind: TraceEventType, description: str, parent: Optional[str] = None, **metadata: Any) -> str:
    if parent is None:
      parent = self._current_phase()
    event = TraceEvent(_new_id(), kind, time.time(), description, parent, metadata)
    with self._guard:
      self._log.append(event)
    return event.id

  def _sync_main(self, phases: List[str]) -> None:
    if threading.current_thread() is threading.main_thread():
      self._main_open = phases[-1] if phases else None

  def start_phase(self, name: str, description: str = "") -> str:
    """
    Opens a phase nested under the current one.

    Args:
        name: Phase label (``Scan``, ``Apply A.java``).
        description: Free-form detail stored as ``metadata["detail"]``.

    Returns:
        str: The phase id, parent of the events logged until it ends.
    """
    phase_id = self._record(TraceEventType.PHASE_START, name, detail=description)
    phases = self._open_phases()
    phases.append(phase_id)
    self._sync_main(phases)
    return phase_id

  def end_phase(self) -> None:
    """Closes the innermost open phase of this thread, if any."""
    phases = self._open_phases()
    if not phases:
      return
    phase_id = phases.pop()
    self._sync_main(phases)
    self._record(TraceEventType.PHASE_END, "End Phase", parent=phase_id)

  def log_entry(self, key: str, field_name: str, template: str, reused: bool) -> None:
    kind = TraceEventType.ENTRY_REUSED if reused else TraceEventType.ENTRY_RECORDED
    verb = "Reused" if reused else "Recorded"
    self._record(kind, f"{verb} {field_name}", key=key, field=field_name, template=template)

  def log_skip(self, location: str, reason: str, detail: str = "") -> None:
    self._record(TraceEventType.OCCURRENCE_SKIPPED, f"Skipped '{location}'", reason=reason, detail=detail)

  def log_mutation(self, node_type: str, before: str, after: str) -> None:
    self._record(TraceEventType.TREE_MUTATION, f"Transformed {node_type}", before=before, after=after)

  def log_import(self, fqn: str, file: str) -> None:
    self._record(TraceEventType.IMPORT_ACTION, f"Import {fqn}", file=file)

  def log_warning(self, message: str) -> None:
    self._record(TraceEventType.ANALYSIS_WARNING, message, level="warning")

  def events(self, evt_type: Optional[TraceEventType] = None) -> List[TraceEvent]:
    with self._guard:
      return [e for e in self._log if evt_type is None or e.type == evt_type]

  def export(self) -> List[Dict[str, Any]]:
    """
    Returns the events as plain dicts, ready for ``json.dump``.
    """
    with self._guard:
      return [asdict(e) for e in self._log]
