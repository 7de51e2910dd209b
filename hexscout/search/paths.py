"""
Gotowe operacje na ścieżkach zbudowane na Traverserze.

Traverser jest niskopoziomowy (find/backtrace). Te funkcje pokrywają
typowe pytania AI:

    find_path            - cała najkrótsza ścieżka start -> goal
    find_path_next_step  - tylko następny krok (ruch tick po ticku)
    find_nearest         - najbliższy cel spełniający predykat
    reachable_within     - zasięg ruchu (np. podświetlenie pól)

Koszt ruchu:
    Każdy ruch na sąsiedni hex kosztuje 1 (BFS, bez wag).

Edge cases:
    - Start == Goal: find_path zwraca [start]
    - Brak ścieżki: find_path zwraca pustą listę []
    - Cel nieprzechodni (np. wróg): ścieżka KOŃCZY SIĘ na celu,
      bo Traverser zgłasza cele niezależnie od can_pass

Przykład użycia:
    >>> path = find_path(terrain.can_pass, HexCoord(0, 0), HexCoord(2, 2))
    >>> step = find_path_next_step(terrain.can_pass, unit_pos, enemy_pos)
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from ..core.types import CanPass, IsDest, P
from .bfs import Traverser


def find_path(can_pass: CanPass, start: P, goal: P) -> List[P]:
    """
    Znajduje najkrótszą ścieżkę między dwoma hexami.

    Args:
        can_pass: Czy przez pole można przejść
        start: Pozycja startowa
        goal: Pozycja docelowa

    Returns:
        List[P]: Ścieżka od start do goal (włącznie z oboma).
                 Pusta lista jeśli ścieżka nie istnieje.

    Note:
        Przy otwartej, nieograniczonej mapie i nieosiągalnym celu
        przeszukiwanie się nie kończy - can_pass musi ograniczać obszar
        (np. TerrainMap.can_pass zwraca False poza mapą).
    """
    if start == goal:
        return [start]

    traverser = Traverser(can_pass, lambda pos: pos == goal, start)
    if traverser.find() is None:
        return []

    return traverser.path_to(goal)


def find_path_next_step(can_pass: CanPass, start: P, goal: P) -> Optional[P]:
    """
    Znajduje tylko następny krok na ścieżce do celu.

    Przydatne gdy jednostka porusza się tick po ticku
    i nie potrzebujemy całej ścieżki.

    Returns:
        Optional[P]: Sąsiad startu lub None jeśli brak ścieżki/jesteśmy w celu

    Example:
        >>> next_pos = find_path_next_step(terrain.can_pass, unit_pos, target_pos)
        >>> if next_pos:
        ...     unit_pos = next_pos
    """
    if start == goal:
        return None

    traverser = Traverser(can_pass, lambda pos: pos == goal, start)
    if traverser.find() is None:
        return None

    return traverser.backtrace_last(goal)


def find_nearest(
    can_pass: CanPass,
    is_dest: IsDest,
    start: P,
) -> Optional[Tuple[P, int]]:
    """
    Znajduje najbliższe pole spełniające `is_dest`.

    Returns:
        Optional[Tuple[P, int]]: (cel, odległość) lub None
    """
    traverser = Traverser(can_pass, is_dest, start)
    found = traverser.find()
    if found is None:
        return None
    return found, traverser.distance(found)


def reachable_within(can_pass: CanPass, start: P, max_steps: int) -> Dict[P, int]:
    """
    Zwraca pola przechodnie osiągalne w co najwyżej `max_steps` krokach.

    Rozwijanie jest ucinane na głębokości `max_steps`, więc funkcja kończy
    się także na nieograniczonej mapie.

    Args:
        can_pass: Czy przez pole można przejść
        start: Pozycja startowa (zawsze w wyniku z odległością 0)
        max_steps: Maksymalna liczba kroków

    Returns:
        Dict[P, int]: pozycja -> odległość BFS
    """
    traverser: Optional[Traverser] = None

    def bounded(pos: P) -> bool:
        return can_pass(pos) and traverser.distance(pos) < max_steps

    traverser = Traverser(bounded, lambda pos: False, start)
    traverser.find()

    return {
        pos: traverser.distance(pos)
        for pos in traverser.visited()
        if pos == start or (can_pass(pos) and traverser.distance(pos) <= max_steps)
    }
