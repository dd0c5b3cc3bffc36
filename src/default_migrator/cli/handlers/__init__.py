from .migrate import handle_migrate, _collect_inputs, _print_batch_summary
from .schema import handle_schema

__all__ = [
  "_collect_inputs",
  "_print_batch_summary",
  "handle_migrate",
  "handle_schema",
]
