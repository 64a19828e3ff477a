"""Context-name collision handling during an import pass."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence


class ContextRenamer[TResource](Protocol):
    def rename_context_in_importable_resources(
        self,
        resources: Sequence[TResource],
        old_name: str,
        new_name: str,
    ) -> None: ...


def next_available_name(name: str, taken: Collection[str]) -> str:
    """Return ``name`` or the first ``name<N>`` (N >= 1) not in ``taken``."""

    if name not in taken:
        return name
    suffix = 1
    while f"{name}{suffix}" in taken:
        suffix += 1
    return f"{name}{suffix}"


def plan_context_renames(
    incoming_names: Iterable[str],
    existing_names: Iterable[str],
) -> list[tuple[str, str]]:
    """Rename incoming contexts that clash with existing (or earlier incoming) ones.

    Renames come out in manifest order and never target a name used by any
    incoming context, so applying them one after another cannot rename a
    resource twice.
    """

    incoming = list(incoming_names)
    existing = set(existing_names)
    reserved = existing | set(incoming)
    assigned: set[str] = set()
    renames: list[tuple[str, str]] = []
    for name in incoming:
        if name not in existing and name not in assigned:
            assigned.add(name)
            continue
        new_name = next_available_name(name, reserved | assigned)
        assigned.add(new_name)
        renames.append((name, new_name))
    return renames


def rename_contexts[TResource](
    renamer: ContextRenamer[TResource],
    resources: Sequence[TResource],
    renames: Iterable[tuple[str, str]],
) -> None:
    """Apply ``renames`` to ``resources`` strictly in the given order."""

    for old_name, new_name in renames:
        renamer.rename_context_in_importable_resources(resources, old_name, new_name)
