"""
Recherche, filtres, tri et réordonnancement de listes déjà chargées.

Les éléments peuvent être des lignes ORM, des schémas Pydantic ou des dicts.
"""
from typing import Any, Iterable, Sequence


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def matches_search(item: Any, term: str | None, fields: Iterable[str]) -> bool:
    """Recherche insensible à la casse dans la concaténation des champs affichés."""
    term = (term or "").strip().lower()
    if not term:
        return True
    haystack = " ".join(
        str(value) for value in (_field(item, name) for name in fields) if value is not None
    ).lower()
    return term in haystack


def filter_items(
    items: Iterable[Any],
    search: str | None = None,
    search_fields: Iterable[str] = (),
    **equals: Any,
) -> list:
    """
    Filtres exacts (ignorés quand la valeur vaut None) combinés en ET avec la recherche.
    """
    search_fields = tuple(search_fields)
    active = {name: value for name, value in equals.items() if value is not None}
    return [
        item
        for item in items
        if all(_field(item, name) == value for name, value in active.items())
        and matches_search(item, search, search_fields)
    ]


def sort_by_order_index(items: Iterable[Any], descending: bool = False) -> list:
    # sorted() est stable : à order_index égal, l'ordre d'insertion est conservé
    return sorted(
        items,
        key=lambda item: _field(item, "order_index") or 0,
        reverse=descending,
    )


def move_item(items: Sequence[Any], from_index: int, to_index: int) -> list:
    """Déplace l'élément from_index à la position to_index (glisser-déposer)."""
    if not 0 <= from_index < len(items):
        raise IndexError(f"Position de départ hors limites : {from_index}")
    if not 0 <= to_index < len(items):
        raise IndexError(f"Position d'arrivée hors limites : {to_index}")
    result = list(items)
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return result


def renumber(items: Sequence[Any]) -> list[tuple[Any, int]]:
    """Associe à chaque élément son nouvel order_index, de 1 à N."""
    return [(item, position) for position, item in enumerate(items, start=1)]
