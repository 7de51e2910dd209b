"""
Kontrakty typów używane przez algorytmy wyszukiwania i widoczności.

Algorytmy nie zależą od konkretnej klasy współrzędnych - wystarczy,
że pozycja spełnia protokół HexPosition. HexCoord spełnia go
bezpośrednio, ale gra może podać własny typ (np. z warstwą mapy).

Światło (Light) to dowolna liczba: int dla klasycznych roguelike'ów,
float gdy nieprzezroczystość terenu jest ułamkowa.
"""

from __future__ import annotations
from typing import Callable, Protocol, Tuple, TypeVar, Union

from .hex_coord import Direction


Light = Union[int, float]


class HexPosition(Protocol):
    """
    Minimalny zestaw operacji wymagany od współrzędnej.

    Wymagania:
        - równość i hash (klucz w słownikach odwiedzonych)
        - krok w kierunku: pos + Direction
        - 6 sąsiadów, odległość w krokach
        - linia z detekcją krawędzi (pary kandydatów)
        - najbliższy kierunek do innego punktu
    """

    def __eq__(self, other: object) -> bool: ...
    def __hash__(self) -> int: ...
    def __add__(self, direction: Direction): ...
    def neighbors(self) -> list: ...
    def distance(self, other) -> int: ...
    def line_to_with_edge_detection(self, other) -> list: ...
    def direction_to(self, other) -> Direction: ...


P = TypeVar("P", bound=HexPosition)

# Callable'e dostarczane przez wywołującego
CanPass = Callable[[P], bool]
IsDest = Callable[[P], bool]
Opaqueness = Callable[[P], Light]
Visible = Callable[[P, Light], None]

LineCheck = Tuple[bool, Light]