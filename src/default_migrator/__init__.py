"""
default-migrator Package.

A two-phase transformation engine that migrates annotation-encoded default
values (``@Property(defaultValue = X)``) on typed Java trees into synthesized,
strongly-typed fields referenced through typed companion annotations
(``@DefaultValue.<Kind>(...)``).

Usage
-----

.. code-block:: python

    import default_migrator as dm
    from default_migrator.tree.io import read_unit

    units = [read_unit(p) for p in paths]
    migrated = dm.migrate(units)

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from default_migrator import MigrationConfig, MigrationEngine

    config = MigrationConfig(inline_container_literals=False, workers=4)
    result = MigrationEngine(config=config).run(units)

    if result.success:
        print(result.units)
    else:
        print(f"Errors: {result.errors}")
"""

from typing import List, Optional, Sequence

from default_migrator.config import MigrationConfig
from default_migrator.core.conversion_result import MigrationResult
from default_migrator.core.engine import MigrationEngine
from default_migrator.tree.nodes import CompilationUnit

__version__ = "0.1.0"


def migrate(units: Sequence[CompilationUnit], config: Optional[MigrationConfig] = None) -> List[CompilationUnit]:
  """
  Migrates a batch of compilation units.

  Convenience wrapper around `MigrationEngine`. Files whose templates fail are
  returned unmodified; use the engine directly to inspect per-file errors.

  Args:
      units: Typed compilation units, all files of one run.
      config (MigrationConfig, optional): Defaults to ``MigrationConfig()``.

  Returns:
      List[CompilationUnit]: Migrated units in input order.
  """
  engine = MigrationEngine(config=config or MigrationConfig())
  return engine.run(units).units


__all__ = [
  "CompilationUnit",
  "MigrationConfig",
  "MigrationEngine",
  "MigrationResult",
  "migrate",
  "__version__",
]
