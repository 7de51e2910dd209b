"""
Rekurencyjny LOS po kątach (shadow casting) z budżetem światła.

Dla każdego kierunku z `dirs` wykonywane jest niezależne przeglądanie
startujące w `origin`. Promień niesie pozostałe światło; każde pole
odejmuje od niego swoją nieprzezroczystość (opaqueness). Gdy światło
spadnie do zera lub poniżej, promień się kończy.

Rozgałęzianie promieni:
═══════════════════════════════════════════════════════════════════

    origin (brak dir)
    ─────────────────────────────────────────────────────────────
    Wachlarz 3 kierunków: main, main+LEFT, main+RIGHT.

    drugi krok, dir == main
    ─────────────────────────────────────────────────────────────
    Znowu wachlarz 3 kierunków + boczne pola (main±60°)
    zgłaszane od razu jako widoczne - poszerza stożek przy osi.

    drugi krok, dir != main
    ─────────────────────────────────────────────────────────────
    dir + main (promień zbiega z powrotem do osi),
    pole pos+main zgłaszane od razu.

    kolejne kroki
    ─────────────────────────────────────────────────────────────
    Od drugiego kroku każdy promień-dziecko przyjmuje swój kierunek
    jako main. Dwa identyczne kroki z rzędu -> jeden kierunek (prosty
    promień). Różne -> oba (pole na granicy dwóch wachlarzy).

Polityki raportowania:
═══════════════════════════════════════════════════════════════════

    ShadowReport.BEFORE_OPACITY
        visible(pos, light) wywoływane PRZED odjęciem opaqueness(pos);
        light = światło docierające do pola.

    ShadowReport.AFTER_OPACITY
        visible(pos, light) wywoływane PO odjęciu; light = światło
        pozostałe za polem (obcięte do 0 dla pól blokujących).
        Pole boczne też odejmuje własne opaqueness.

    widen_sides
        Czy zgłaszać boczne pola jako dodatkowe poszerzenie stożka.

Zasięg:
    Promień niesie obok światła budżet zasięgu, pomniejszany o
    reach_cost(opaqueness) każdego pola (patrz reach.py). Gdy zasięg
    spadnie do zera, pole nie jest rozwijane. Przy opaqueness >=
    MIN_REACH_COST zasięg równa się światłu; przy opaqueness == 0
    gwarantuje zakończenie.

Rekurencja jest zamieniona na jawny stos (DFS, dzieci wkładane
w odwrotnej kolejności), więc kolejność wywołań `visible` jest taka sama
jak w wersji rekurencyjnej, a duże promienie nie trafiają w limit
rekurencji Pythona.

Przykład użycia:
    >>> seen = {}
    >>> los(terrain.opaqueness, seen.__setitem__, 8, me, Direction.all())
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, TYPE_CHECKING

from ..core.hex_coord import Angle, Direction
from ..core.types import Light, Opaqueness, P, Visible
from .reach import reach_cost

if TYPE_CHECKING:
    from ..events.trace_logger import TraceLogger


class ShadowReport(Enum):
    """Moment zgłoszenia pola względem odjęcia jego nieprzezroczystości."""

    BEFORE_OPACITY = "before_opacity"
    AFTER_OPACITY = "after_opacity"


@dataclass(frozen=True)
class _Ray:
    """Stan jednego kroku promienia (ramka stosu)."""
    pos: object
    light: Light
    reach: Light
    main_dir: Direction
    dir: Optional[Direction]
    pdir: Optional[Direction]


def los(
    opaqueness: Opaqueness,
    visible: Visible,
    light: Light,
    origin: P,
    dirs: Iterable[Direction],
    *,
    report: ShadowReport = ShadowReport.BEFORE_OPACITY,
    widen_sides: bool = True,
    trace: Optional["TraceLogger"] = None,
) -> None:
    """
    Startując z `origin`, woła `visible` dla każdego widocznego pola.

    `light` to początkowy zasięg LOS. Dla każdego widocznego pola wartość
    `opaqueness` jest odejmowana od światła. `opaqueness` powinno zwracać
    1 dla pól przezroczystych i coś >= `light` dla pól całkowicie
    nieprzezroczystych.

    Args:
        opaqueness: Koszt światła pola
        visible: Callback visible(pos, light)
        light: Początkowy budżet światła
        origin: Pozycja obserwatora
        dirs: Kierunki przeglądania (zwykle Direction.all())
        report: Polityka raportowania (przed/po odjęciu opaqueness)
        widen_sides: Czy zgłaszać boczne pola
        trace: Opcjonalny logger przebiegu

    Note:
        Pola NIE są deduplikowane - to samo pole może zostać zgłoszone
        wiele razy (z różnych promieni i kierunków).
    """
    report = ShadowReport(report)

    for main_dir in dirs:
        if trace is not None:
            trace.log_sweep_start(main_dir, light)
            reported = _sweep(
                opaqueness, _traced(visible, trace), light, origin,
                main_dir, report, widen_sides,
            )
            trace.log_sweep_end(main_dir, reported)
        else:
            _sweep(opaqueness, visible, light, origin, main_dir, report, widen_sides)


def _traced(visible: Visible, trace: "TraceLogger") -> Visible:
    def wrapper(pos, light):
        trace.log_visible(pos, light)
        visible(pos, light)
    return wrapper


def _sweep(
    opaqueness: Opaqueness,
    visible: Visible,
    light: Light,
    origin: P,
    main_dir: Direction,
    report: ShadowReport,
    widen_sides: bool,
) -> int:
    """Jedno przeglądanie w kierunku `main_dir`. Zwraca liczbę zgłoszeń."""
    reported = 0
    stack: List[_Ray] = [_Ray(origin, light, light, main_dir, None, None)]

    while stack:
        ray = stack.pop()
        opacity = opaqueness(ray.pos)
        remaining = ray.light - opacity

        if report is ShadowReport.BEFORE_OPACITY:
            visible(ray.pos, ray.light)
        else:
            visible(ray.pos, remaining if remaining > 0 else 0)
        reported += 1

        if remaining <= 0:
            continue

        # Zasięg: dzieci i pola boczne leżą o krok dalej
        reach = ray.reach - reach_cost(opacity)
        if reach <= 0:
            continue

        sides, branches = _branches(ray)

        if widen_sides:
            for d in sides:
                side = ray.pos + d
                if report is ShadowReport.BEFORE_OPACITY:
                    visible(side, remaining)
                else:
                    left = remaining - opaqueness(side)
                    visible(side, left if left > 0 else 0)
                reported += 1

        children = []
        for d in branches:
            if ray.dir is not None:
                children.append(_Ray(ray.pos + d, remaining, reach, d, d, ray.dir))
            else:
                children.append(_Ray(ray.pos + d, remaining, reach, ray.main_dir, d, None))

        stack.extend(reversed(children))

    return reported


def _branches(ray: _Ray):
    """Zwraca (pola boczne, kierunki rozgałęzień) dla danego kroku."""
    main = ray.main_dir

    if ray.dir is None:
        fan = [main, main + Angle.LEFT, main + Angle.RIGHT]
        return fan, fan

    if ray.pdir is None:
        if ray.dir == main:
            sides = [main + Angle.RIGHT, main + Angle.LEFT]
            return sides, [ray.dir, ray.dir + Angle.LEFT, ray.dir + Angle.RIGHT]
        return [main], [ray.dir, main]

    sides = []
    if ray.dir == main:
        sides = [main + Angle.RIGHT, main + Angle.LEFT]

    if ray.dir == ray.pdir:
        return sides, [ray.dir]
    return sides, [ray.dir, ray.pdir]
