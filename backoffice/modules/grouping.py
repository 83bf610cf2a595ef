"""
Display ordering for hierarchical lists.

Property types: roots alphabetically, each followed by its own children, then any
orphans (children whose parent is not a root in the list). A search term flattens
everything into one alphabetical list.

Units: grouped per development, groups by development title, units by natural
unit number ("2" before "10").
"""

import re
from dataclasses import dataclass, field
from typing import Iterable

from backoffice.models.development import Development, DevelopmentUnit
from backoffice.models.property_type import PropertyType

_DIGITS = re.compile(r"(\d+)")


def name_key(item: PropertyType) -> tuple:
    # id breaks ties between equal names so any input permutation gives the same order
    return (item.name.casefold(), str(item.id))


def natural_key(text: str) -> tuple:
    """Split digits out so numeric runs compare as numbers: A2 < A10."""
    parts = _DIGITS.split(text.casefold())
    return tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in parts if p != "")


def filter_property_types(types: Iterable[PropertyType], term: str) -> list[PropertyType]:
    needle = term.strip().casefold()
    if not needle:
        return list(types)
    return [
        t for t in types
        if needle in t.name.casefold()
        or (t.description and needle in t.description.casefold())
        or (t.parent_name and needle in t.parent_name.casefold())
    ]


def group_property_types(types: Iterable[PropertyType], search: str = "") -> list[PropertyType]:
    types = list(types)

    if search.strip():
        return sorted(filter_property_types(types, search), key=name_key)

    roots = sorted((t for t in types if t.parent_id is None), key=name_key)
    root_ids = {str(r.id) for r in roots}

    children: dict[str, list[PropertyType]] = {}
    orphans: list[PropertyType] = []
    for t in types:
        if t.parent_id is None:
            continue
        parent_key = str(t.parent_id)
        if parent_key in root_ids:
            children.setdefault(parent_key, []).append(t)
        else:
            orphans.append(t)

    result: list[PropertyType] = []
    for root in roots:
        result.append(root)
        result.extend(sorted(children.get(str(root.id), []), key=name_key))
    result.extend(sorted(orphans, key=name_key))
    return result


@dataclass
class UnitGroup:
    development_id: str
    title: str
    units: list[DevelopmentUnit]
    expanded: bool = False

    @property
    def count(self) -> int:
        return len(self.units)


@dataclass
class ExpansionState:
    """Which development groups are open. Everything starts collapsed."""

    expanded: set[str] = field(default_factory=set)

    def is_expanded(self, development_id) -> bool:
        return str(development_id) in self.expanded

    def toggle(self, development_id) -> bool:
        key = str(development_id)
        if key in self.expanded:
            self.expanded.discard(key)
        else:
            self.expanded.add(key)
        return key in self.expanded

    def expand(self, development_id) -> None:
        self.expanded.add(str(development_id))

    def collapse(self, development_id) -> None:
        self.expanded.discard(str(development_id))

    def expand_all(self, development_ids: Iterable) -> None:
        self.expanded.update(str(d) for d in development_ids)

    def collapse_all(self) -> None:
        self.expanded.clear()


def group_units_by_development(
    units: Iterable[DevelopmentUnit],
    developments: Iterable[Development],
    state: ExpansionState | None = None,
) -> list[UnitGroup]:
    state = state or ExpansionState()
    titles = {str(d.id): d.title for d in developments}

    buckets: dict[str, list[DevelopmentUnit]] = {}
    for unit in units:
        buckets.setdefault(str(unit.development_id), []).append(unit)

    groups = [
        UnitGroup(
            development_id=dev_id,
            title=titles.get(dev_id, f"Desarrollo {dev_id}"),
            units=sorted(members, key=lambda u: (natural_key(u.unit_number), str(u.id))),
            expanded=state.is_expanded(dev_id),
        )
        for dev_id, members in buckets.items()
    ]
    groups.sort(key=lambda g: (g.title.casefold(), g.development_id))
    return groups
