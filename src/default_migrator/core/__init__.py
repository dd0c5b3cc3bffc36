"""
Core migration components.

Leaf modules (classifier, anchors, naming, templates, accumulator) are used by
the scan phase (``scanner``) and the apply phase (``synthesizer``, ``rewriter``),
which ``engine.MigrationEngine`` runs in order.
"""
