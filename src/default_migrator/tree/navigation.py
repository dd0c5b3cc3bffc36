"""
Tree Navigation Helpers.

Scope-aware traversal over compilation units. Traversal yields each class
declaration together with its chain of enclosing declarations so callers can
answer "which type am I in" and "which names are visible here" without parent
pointers in the tree.
"""

from typing import Callable, Iterable, Iterator, Optional, Set, Tuple

from default_migrator.tree.nodes import (
  Annotation,
  ClassDeclaration,
  CompilationUnit,
  FieldDeclaration,
  Import,
  MethodDeclaration,
)
from default_migrator.tree.types import ClassType

ClassChain = Tuple[ClassDeclaration, ...]


def iter_classes(unit: CompilationUnit) -> Iterator[Tuple[ClassDeclaration, ClassChain]]:
  """
  Yields every class declaration in source order (pre-order).

  Args:
      unit: The compilation unit to walk.

  Yields:
      Tuple of the class and its chain, outermost first, ending with the class itself.
  """

  def _walk(cls: ClassDeclaration, parents: ClassChain) -> Iterator[Tuple[ClassDeclaration, ClassChain]]:
    chain = parents + (cls,)
    yield cls, chain
    for member in cls.body:
      if isinstance(member, ClassDeclaration):
        yield from _walk(member, chain)

  for top in unit.classes:
    yield from _walk(top, ())


def transform_classes(
  unit: CompilationUnit,
  fn: Callable[[ClassDeclaration, ClassChain], ClassDeclaration],
) -> CompilationUnit:
  """
  Rebuilds the unit by applying ``fn`` to every class declaration.

  Nested classes are transformed first, so ``fn`` sees a body whose nested
  classes are already rewritten. The chain passed to ``fn`` holds the original
  enclosing declarations.

  Args:
      unit: The compilation unit.
      fn: Callback returning the replacement declaration.

  Returns:
      CompilationUnit: The rebuilt unit (the same object if nothing changed).
  """

  def _rebuild(cls: ClassDeclaration, parents: ClassChain) -> ClassDeclaration:
    chain = parents + (cls,)
    new_body = []
    changed = False
    for member in cls.body:
      if isinstance(member, ClassDeclaration):
        new_member = _rebuild(member, chain)
        changed = changed or new_member is not member
        new_body.append(new_member)
      else:
        new_body.append(member)
    current = cls.with_changes(body=tuple(new_body)) if changed else cls
    return fn(current, chain)

  new_classes = tuple(_rebuild(cls, ()) for cls in unit.classes)
  if all(new is old for new, old in zip(new_classes, unit.classes)):
    return unit
  return unit.with_changes(classes=new_classes)


def field_names(cls: ClassDeclaration) -> Set[str]:
  return {m.name for m in cls.body if isinstance(m, FieldDeclaration)}


def member_names(cls: ClassDeclaration) -> Set[str]:
  return {m.name for m in cls.body if isinstance(m, (FieldDeclaration, MethodDeclaration))}


def visible_member_names(chain: ClassChain) -> Set[str]:
  """
  Names of fields and methods declared in the innermost class of ``chain`` or
  any class enclosing it.

  Args:
      chain: Enclosing declarations, outermost first.

  Returns:
      Set[str]: Member names visible by simple name.
  """
  names: Set[str] = set()
  for cls in chain:
    names |= member_names(cls)
  return names


def nested_member_names(cls: ClassDeclaration) -> Set[str]:
  """
  Names of fields and methods declared in any class nested inside ``cls``, at
  any depth. A field added to ``cls`` under one of these names would be
  shadowed inside that nested class.
  """
  names: Set[str] = set()
  for member in cls.body:
    if isinstance(member, ClassDeclaration):
      names |= member_names(member) | nested_member_names(member)
  return names


def is_same_or_ancestor(candidate: Optional[ClassType], scope: Optional[ClassType]) -> Optional[bool]:
  """
  Checks whether ``candidate`` is ``scope`` or one of its enclosing types.

  Args:
      candidate: The type whose position is in question.
      scope: The type the check is made from.

  Returns:
      Optional[bool]: None when either side is unknown.
  """
  if candidate is None or scope is None:
    return None
  return any(t.fqn == candidate.fqn for t in scope.enclosing_chain())


def iter_annotations(unit: CompilationUnit) -> Iterator[Annotation]:
  for cls, _ in iter_classes(unit):
    yield from cls.leading_annotations
    for member in cls.body:
      if isinstance(member, (FieldDeclaration, MethodDeclaration)):
        yield from member.leading_annotations


def uses_type(unit: CompilationUnit, fqn: str) -> bool:
  """
  Returns True if the unit imports or is annotated with ``fqn``.

  Args:
      unit: The compilation unit.
      fqn: Fully qualified type name.

  Returns:
      bool: Whether the type is referenced.
  """
  package = fqn.rsplit(".", 1)[0]
  for imp in unit.imports:
    if imp.fqn == fqn or (not imp.static and imp.fqn == f"{package}.*"):
      return True
  return any(a.annotation_type.fqn == fqn for a in iter_annotations(unit))


def add_import(imports: Iterable[Import], fqn: str) -> Tuple[Import, ...]:
  """
  Inserts a single-type import in sorted position unless already covered.

  Args:
      imports: Existing imports of the unit.
      fqn: Fully qualified type to import.

  Returns:
      Tuple[Import, ...]: The resulting imports (unchanged if already present).
  """
  current = tuple(imports)
  package = fqn.rsplit(".", 1)[0]
  for imp in current:
    if not imp.static and imp.fqn in (fqn, f"{package}.*"):
      return current

  new_import = Import(fqn)
  for index, imp in enumerate(current):
    if not imp.static and imp.fqn > fqn:
      return current[:index] + (new_import,) + current[index:]
  # place after the last regular import so static imports stay grouped at the end
  last_regular = max((i for i, imp in enumerate(current) if not imp.static), default=-1)
  return current[: last_regular + 1] + (new_import,) + current[last_regular + 1 :]
