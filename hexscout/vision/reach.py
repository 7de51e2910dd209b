"""
Koszt zasięgu pola dla algorytmów LOS.

Budżet światła zatrzymuje promień, gdy pola pochłaniają światło.
Pola prawie przezroczyste (opaqueness bliskie 0) nie pochłaniają
prawie nic, więc sam budżet nie kończy przeglądania. Zasięg liczymy
osobno: każde pole kosztuje swoje opaqueness, ale nie mniej niż
MIN_REACH_COST.

    reach_cost(3)    -> 3
    reach_cost(0.5)  -> 0.5
    reach_cost(0)    -> MIN_REACH_COST

Dla opaqueness >= MIN_REACH_COST zasięg pokrywa się z budżetem
światła. Koszt jest niemalejący względem opaqueness, więc bardziej
nieprzezroczyste pole nigdy nie wydłuża zasięgu.
"""

from __future__ import annotations

from ..core.types import Light, Opaqueness


# Potęga dwójki, żeby sumy kosztów były dokładne we float
MIN_REACH_COST = 0.125


def reach_cost(opacity: Light) -> Light:
    """Koszt zasięgu pola o danej nieprzezroczystości."""
    return opacity if opacity > MIN_REACH_COST else MIN_REACH_COST


def reach_opaqueness(opaqueness: Opaqueness) -> Opaqueness:
    """Predykat opaqueness przeliczony na koszty zasięgu."""
    return lambda pos: reach_cost(opaqueness(pos))
