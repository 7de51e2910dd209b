"""
Hybrydowy LOS: sprawdzanie linii prostej + zalewanie kierunkowe.

Zamiast decydować o widoczności samym rozgałęzianiem promieni
(jak shadow casting), każde pole osiągnięte przez zalewanie jest
sprawdzane prawdziwą linią prostą od obserwatora. Dokładniejsze
geometrycznie, kosztem O(odległość) pracy na pole.

Linia z dwoma kandydatami:
═══════════════════════════════════════════════════════════════════

    Prosta na siatce hex bywa niejednoznaczna - biegnie dokładnie
    po krawędzi dwóch komórek. line_to_with_edge_detection zwraca
    dla każdego kroku parę kandydatów i sumujemy nieprzezroczystość
    NIEZALEŻNIE wzdłuż obu linii:

        linia 1: c1[0], c1[1], ..., pos
        linia 2: c2[0], c2[1], ..., pos

    Linia "dociera" do pos, jeśli jej suma nie osiągnęła `light`
    przed pos. Pole jest widoczne, jeśli dociera KTÓRAKOLWIEK linia
    (interpretacja optymistyczna). Pozostałe światło liczymy od
    mniejszej sumy.

Zalewanie:
═══════════════════════════════════════════════════════════════════

    Dla każdego kierunku dir osobny zbiór odwiedzonych:
    1. Pole już odwiedzone w tym przeglądaniu -> pomiń
    2. Linia origin -> pos widoczna:
       - visible(pos, light)
       - zalewaj dalej: pos+dir, pos+(dir+LEFT), pos+(dir+RIGHT)
    3. Linia niewidoczna:
       - sprawdź dwóch ukośnych sąsiadów pos: kierunek obserwator -> pos
         obrócony o LEFT i RIGHT; jeśli któryś ma czystą linię, pos
         jest widoczne ze światłem jaśniejszego z nich (wygładza
         poszarpane krawędzie cienia wynikające z niejednoznaczności
         linii)
       - NIE zalewaj dalej - pola za pos są jeszcze gorzej widoczne

Zasięg:
    Widoczne pole jest dodatkowo sprawdzane tą samą linią z kosztami
    reach_cost(opaqueness) (patrz reach.py). Pole poza zasięgiem jest
    pomijane, więc zalewanie kończy się nawet przy opaqueness == 0.
    Przy opaqueness >= MIN_REACH_COST zasięg równa się światłu.

Przykład użycia:
    >>> lit = {}
    >>> los(terrain.opaqueness, lit.__setitem__, 8, me, Direction.all())
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Set, TYPE_CHECKING

from ..core.hex_coord import Angle, Direction
from ..core.types import Light, LineCheck, Opaqueness, P, Visible
from .reach import reach_opaqueness

if TYPE_CHECKING:
    from ..events.trace_logger import TraceLogger


def los_check_line(
    opaqueness: Opaqueness,
    light: Light,
    start: P,
    pos: P,
) -> LineCheck:
    """
    Sprawdza czy z `start` widać `pos` i ile światła do niego dociera.

    Args:
        opaqueness: Koszt światła pola
        light: Początkowy budżet światła
        start: Obserwator
        pos: Sprawdzane pole

    Returns:
        Tuple[bool, Light]: (czy widoczne, pozostałe światło)
            - obie linie docierają: light - min(sum1, sum2)
            - jedna linia dociera: light - jej suma
            - żadna: light - light (światło wyczerpane)

    Example:
        >>> los_check_line(lambda c: 1, 3, HexCoord(0, 0), HexCoord(2, 0))
        (True, 1)
    """
    opaq1 = opaq2 = light - light
    reached1 = reached2 = False

    for c1, c2 in start.line_to_with_edge_detection(pos):
        cost = None

        if not reached1 and opaq1 < light:
            if c1 == pos:
                reached1 = True
            else:
                cost = opaqueness(c1)
                opaq1 += cost

        if not reached2 and opaq2 < light:
            if c2 == pos:
                reached2 = True
            else:
                opaq2 += cost if c2 == c1 and cost is not None else opaqueness(c2)

    if reached1 and reached2:
        return True, light - min(opaq1, opaq2)
    if reached1:
        return True, light - opaq1
    if reached2:
        return True, light - opaq2
    return False, light - light


def los(
    opaqueness: Opaqueness,
    visible: Visible,
    light: Light,
    origin: P,
    dirs: Iterable[Direction],
    *,
    trace: Optional["TraceLogger"] = None,
) -> None:
    """
    Startując z `origin`, woła `visible(pos, light)` dla każdego widocznego pola.

    Args:
        opaqueness: Koszt światła pola (1 = przezroczyste)
        visible: Callback visible(pos, light)
        light: Początkowy budżet światła
        origin: Pozycja obserwatora
        dirs: Kierunki zalewania (zwykle Direction.all())
        trace: Opcjonalny logger przebiegu

    Note:
        Zbiór odwiedzonych jest osobny dla każdego kierunku, więc pola
        z nakładających się stożków mogą być zgłoszone więcej niż raz.
    """
    for dir in dirs:
        if trace is not None:
            trace.log_sweep_start(dir, light)
        reported = _flood(opaqueness, visible, light, origin, dir, trace)
        if trace is not None:
            trace.log_sweep_end(dir, reported)


def _flood(
    opaqueness: Opaqueness,
    visible: Visible,
    light: Light,
    origin: P,
    dir: Direction,
    trace: Optional["TraceLogger"],
) -> int:
    """Zalewanie jednego kierunku. Zwraca liczbę zgłoszonych pól."""
    reported = 0
    if not light > 0:
        return reported

    visited: Set[P] = set()
    stack: List[P] = [origin]
    reach = reach_opaqueness(opaqueness)

    def report(pos: P, remaining: Light) -> None:
        if trace is not None:
            trace.log_visible(pos, remaining)
        visible(pos, remaining)

    while stack:
        pos = stack.pop()
        if pos in visited:
            continue
        visited.add(pos)

        seen, remaining = los_check_line(opaqueness, light, origin, pos)
        if seen:
            in_reach, _ = los_check_line(reach, light, origin, pos)
            if not in_reach:
                continue
            report(pos, remaining)
            reported += 1
            # Forward, Left, Right - w tej kolejności zdejmowane ze stosu
            stack.extend(reversed([
                pos + dir,
                pos + (dir + Angle.LEFT),
                pos + (dir + Angle.RIGHT),
            ]))
            continue

        best = None
        outward = origin.direction_to(pos)
        for side in (outward + Angle.LEFT, outward + Angle.RIGHT):
            seen, remaining = los_check_line(opaqueness, light, origin, pos + side)
            if seen and (best is None or remaining > best):
                best = remaining
        if best is not None:
            report(pos, best)
            reported += 1

    return reported
