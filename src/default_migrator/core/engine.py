"""
Orchestration Engine for the default-value migration.

This module provides the `MigrationEngine`, the primary driver of a run over a
set of compilation units.

The pipeline consists of two strictly ordered phases:

1.  **Scan Phase**:
    - Every unit is analysed by the `DefaultValueScanner`.
    - Keyed occurrences record their `Produced` entry in the shared
      `Accumulator` (first occurrence wins; later ones reuse).
    - The phase completes for all units before apply begins.

2.  **Apply Phase**:
    - Per class, the `FieldSynthesizer` emits the fields owned by that class.
    - The `AnnotationRewriter` strips the migrated attribute and attaches the
      typed companion annotation.
    - The value holder import is added where companions were attached.

Units are immutable, so a `TemplateError` while applying one file simply returns
that file's input unit and records the error; other files are unaffected.

Units that never reference the attribute holder are skipped in both phases when
`MigrationConfig.require_holder_usage` is set. With `workers > 1` per-file work
runs on a thread pool; results are always reported in input order.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, TypeVar

from default_migrator.config import MigrationConfig
from default_migrator.core.accumulator import Accumulator
from default_migrator.core.conversion_result import FileResult, MigrationResult
from default_migrator.core.errors import TemplateError
from default_migrator.core.naming import NameGenerator
from default_migrator.core.rewriter import AnnotationRewriter, RewriteStats
from default_migrator.core.scanner import DefaultValueScanner
from default_migrator.core.synthesizer import FieldSynthesizer
from default_migrator.core.tracer import TraceLogger
from default_migrator.tree.navigation import add_import, transform_classes, uses_type
from default_migrator.tree.nodes import CompilationUnit
from default_migrator.utils.console import log_warning

T = TypeVar("T")
R = TypeVar("R")


class MigrationEngine:
  """
  Runs the two-phase migration over a batch of compilation units.
  """

  def __init__(self, config: Optional[MigrationConfig] = None, tracer: Optional[TraceLogger] = None):
    """
    Initializes the Engine.

    Args:
        config (MigrationConfig, optional): Runtime configuration. Loads defaults
            (including any ``[tool.default_migrator]`` section) if None.
        tracer (TraceLogger, optional): Event sink. A fresh logger is created if None.
    """
    self.config = config or MigrationConfig.load()
    self.tracer = tracer or TraceLogger()

  def _map(self, fn: Callable[[T], R], items: Sequence[T]) -> List[R]:
    if self.config.workers <= 1 or len(items) <= 1:
      return [fn(item) for item in items]
    with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
      return list(pool.map(fn, items))

  def is_candidate(self, unit: CompilationUnit) -> bool:
    """
    Checks the precondition for touching a unit at all.

    Args:
        unit: The compilation unit.

    Returns:
        bool: True if the unit should be scanned and rewritten.
    """
    if not self.config.require_holder_usage:
      return True
    return uses_type(unit, self.config.attribute_holder)

  def scan(self, units: Sequence[CompilationUnit], accumulator: Optional[Accumulator] = None) -> Accumulator:
    """
    Runs the scan phase over all units.

    Args:
        units: The batch of compilation units.
        accumulator: Store to populate. A new one is created if None.

    Returns:
        Accumulator: The populated store.
    """
    accumulator = accumulator if accumulator is not None else Accumulator()
    scanner = DefaultValueScanner(accumulator, self.config, self.tracer, NameGenerator())

    def _scan_one(unit: CompilationUnit) -> None:
      if not self.is_candidate(unit):
        return
      self.tracer.start_phase(f"Scan {unit.source_path}")
      try:
        scanner.scan(unit)
      finally:
        self.tracer.end_phase()

    self.tracer.start_phase("Scan", f"{len(units)} units")
    try:
      self._map(_scan_one, list(units))
    finally:
      self.tracer.end_phase()
    return accumulator

  def apply_unit(self, unit: CompilationUnit, accumulator: Accumulator) -> FileResult:
    """
    Rewrites one unit against a complete accumulator.

    The unit is returned unchanged, with the failure recorded, if any template
    cannot be instantiated.

    Args:
        unit: The compilation unit.
        accumulator: Store populated by the scan phase.

    Returns:
        FileResult: The per-file outcome.
    """
    file = unit.source_path
    if not self.is_candidate(unit):
      return FileResult(source_path=file, unit=unit)

    synthesizer = FieldSynthesizer(accumulator, self.tracer, unit.imports)
    rewriter = AnnotationRewriter(accumulator, self.config, self.tracer)
    stats = RewriteStats()
    added = []

    def _apply_class(cls, chain):
      with_fields = synthesizer.synthesize(file, cls)
      added.append(len(with_fields.body) - len(cls.body))
      return rewriter.rewrite_class(file, with_fields, chain, stats)

    self.tracer.start_phase(f"Apply {file}")
    try:
      new_unit = transform_classes(unit, _apply_class)
      if stats.companions and self.config.add_imports:
        imports = add_import(new_unit.imports, self.config.value_holder)
        if imports != new_unit.imports:
          new_unit = new_unit.with_changes(imports=imports)
          self.tracer.log_import(self.config.value_holder, file)
    except TemplateError as e:
      self.tracer.log_warning(f"Template failure in {file}: {e}")
      log_warning(f"Leaving [path]{file}[/path] unmodified: {e}")
      return FileResult(source_path=file, unit=unit, errors=[str(e)])
    finally:
      self.tracer.end_phase()

    return FileResult(
      source_path=file,
      unit=new_unit,
      changed=new_unit is not unit,
      fields_added=sum(added),
      occurrences_rewritten=stats.rewritten,
      occurrences_skipped=stats.skipped,
    )

  def apply(self, units: Sequence[CompilationUnit], accumulator: Accumulator) -> List[FileResult]:
    """
    Runs the apply phase over all units.

    Args:
        units: The batch of compilation units (as scanned).
        accumulator: Store populated by ``scan``.

    Returns:
        List[FileResult]: Outcomes in input order.
    """
    self.tracer.start_phase("Apply", f"{len(units)} units")
    try:
      return self._map(lambda unit: self.apply_unit(unit, accumulator), list(units))
    finally:
      self.tracer.end_phase()

  def run(self, units: Sequence[CompilationUnit]) -> MigrationResult:
    """
    Executes scan then apply over the batch.

    Args:
        units: The batch of compilation units.

    Returns:
        MigrationResult: Migrated units, per-file outcomes and the trace.
    """
    units = list(units)
    accumulator = self.scan(units)
    files = self.apply(units, accumulator)
    return MigrationResult(files=files, entries=len(accumulator), trace_events=self.tracer.export())
