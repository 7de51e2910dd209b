"""
Mapa terenu (TerrainMap) na siatce hexagonalnej.

TerrainMap dostarcza algorytmom dwa predykaty:
- can_pass(pos): czy po polu można przejść (BFS)
- opaqueness(pos): ile światła pochłania pole (LOS)

Układ siatki:
    Używamy układu "odd-r" (offset coordinates) do mapowania
    na regularną siatkę width x height:

    r=0:  (0,0) (1,0) (2,0) (3,0) ...
    r=1:   (0,1) (1,1) (2,1) (3,1) ...  <- przesunięte o 0.5 wizualnie
    r=2:  (0,2) (1,2) (2,2) (3,2) ...

Konwersja offset <-> axial:
    axial.q = offset.x - (offset.y // 2)
    axial.r = offset.y

    offset.x = axial.q + (axial.r // 2)
    offset.y = axial.r

Teren poza mapą jest nieprzechodni i całkowicie nieprzezroczysty,
dzięki czemu algorytmy nigdy nie "wyciekają" poza granice.

Przykład użycia:
    >>> types = {"floor": TerrainType("floor", ".", True, 1),
    ...          "wall": TerrainType("wall", "#", False, 100)}
    >>> terrain = TerrainMap.from_rows(["..#", "..."], types)
    >>> terrain.can_pass(HexCoord(2, 0))
    False
    >>> terrain.opaqueness(HexCoord(0, 0))
    1
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .hex_coord import HexCoord
from .types import Light


# Nieprzezroczystość pól poza mapą
OUTSIDE_OPACITY = float("inf")


@dataclass(frozen=True)
class TerrainType:
    """
    Typ terenu.

    Attributes:
        name (str): Identyfikator (klucz w terrain.yaml)
        symbol (str): Znak używany w mapach ASCII
        passable (bool): Czy można po nim przejść
        opaqueness (Light): Koszt światła (1 = przezroczysty)
    """
    name: str
    symbol: str
    passable: bool = True
    opaqueness: Light = 1

    @classmethod
    def from_dict(cls, name: str, data: Dict) -> TerrainType:
        """Tworzy typ terenu z definicji YAML (po merge z defaults)."""
        return cls(
            name=name,
            symbol=str(data["symbol"]),
            passable=bool(data.get("passable", True)),
            opaqueness=data.get("opaqueness", 1),
        )


@dataclass
class TerrainMap:
    """
    Prostokątna mapa terenu z predykatami dla algorytmów.

    Attributes:
        width (int): Szerokość mapy w hexach
        height (int): Wysokość mapy w hexach
        terrain_types (Dict[str, TerrainType]): Dostępne typy terenu
        default_terrain (str): Teren pól, którym nic nie ustawiono
        _cells (Dict[HexCoord, str]): Mapa pozycja -> nazwa terenu

    Note:
        - Pozycje są w układzie axial (q, r)
        - Granice są sprawdzane po konwersji do offset
    """
    width: int
    height: int
    terrain_types: Dict[str, TerrainType]
    default_terrain: str = "floor"
    _cells: Dict[HexCoord, str] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.default_terrain not in self.terrain_types:
            raise KeyError(f"Unknown default terrain '{self.default_terrain}'")

    # ─────────────────────────────────────────────────────────────────────────
    # TWORZENIE Z ASCII
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_rows(
        cls,
        rows: List[str],
        terrain_types: Dict[str, TerrainType],
        default_terrain: str = "floor",
    ) -> TerrainMap:
        """
        Buduje mapę z wierszy ASCII (jeden znak = jeden hex, offset odd-r).

        Spacje są ignorowane, więc wiersze można wcinać tak,
        jak wyglądają na ekranie.

        Args:
            rows: Wiersze mapy, od r=0
            terrain_types: Typy terenu (symbol -> teren)
            default_terrain: Teren domyślny

        Returns:
            TerrainMap: Nowa mapa

        Raises:
            ValueError: Jeśli mapa zawiera nieznany symbol
        """
        by_symbol = {t.symbol: t.name for t in terrain_types.values()}
        cleaned = [row.replace(" ", "") for row in rows]
        width = max((len(row) for row in cleaned), default=0)

        terrain = cls(width, len(cleaned), terrain_types, default_terrain)
        for y, row in enumerate(cleaned):
            for x, symbol in enumerate(row):
                if symbol not in by_symbol:
                    raise ValueError(
                        f"Unknown terrain symbol '{symbol}' at offset ({x}, {y})"
                    )
                terrain.set_terrain(cls._offset_to_axial(x, y), by_symbol[symbol])

        return terrain

    # ─────────────────────────────────────────────────────────────────────────
    # WALIDACJA POZYCJI
    # ─────────────────────────────────────────────────────────────────────────

    def is_valid(self, pos: HexCoord) -> bool:
        """
        Sprawdza czy pozycja jest w granicach mapy.

        Example:
            >>> terrain.is_valid(HexCoord(-1, 0))
            False
        """
        offset_x, offset_y = self._axial_to_offset(pos)
        return 0 <= offset_x < self.width and 0 <= offset_y < self.height

    # ─────────────────────────────────────────────────────────────────────────
    # TEREN
    # ─────────────────────────────────────────────────────────────────────────

    def terrain_at(self, pos: HexCoord) -> Optional[TerrainType]:
        """Zwraca teren na pozycji lub None poza mapą."""
        if not self.is_valid(pos):
            return None
        return self.terrain_types[self._cells.get(pos, self.default_terrain)]

    def set_terrain(self, pos: HexCoord, name: str) -> None:
        """
        Ustawia teren na pozycji.

        Raises:
            ValueError: Jeśli pozycja jest poza mapą
            KeyError: Jeśli typ terenu nie istnieje
        """
        if not self.is_valid(pos):
            raise ValueError(f"Position {pos} is outside map bounds")
        if name not in self.terrain_types:
            raise KeyError(f"Unknown terrain '{name}'")
        self._cells[pos] = name

    # ─────────────────────────────────────────────────────────────────────────
    # PREDYKATY DLA ALGORYTMÓW
    # ─────────────────────────────────────────────────────────────────────────

    def can_pass(self, pos: HexCoord) -> bool:
        """True jeśli pole jest w granicach i teren jest przechodni."""
        terrain = self.terrain_at(pos)
        return terrain is not None and terrain.passable

    def opaqueness(self, pos: HexCoord) -> Light:
        """Koszt światła pola; poza mapą OUTSIDE_OPACITY."""
        terrain = self.terrain_at(pos)
        if terrain is None:
            return OUTSIDE_OPACITY
        return terrain.opaqueness

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def all_positions(self) -> List[HexCoord]:
        """Wszystkie pozycje mapy, wierszami."""
        return [
            self._offset_to_axial(x, y)
            for y in range(self.height)
            for x in range(self.width)
        ]

    def positions_of(self, name: str) -> List[HexCoord]:
        """Pozycje z danym terenem."""
        return [
            pos for pos in self.all_positions()
            if self._cells.get(pos, self.default_terrain) == name
        ]

    # ─────────────────────────────────────────────────────────────────────────
    # KONWERSJA WSPÓŁRZĘDNYCH
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _axial_to_offset(pos: HexCoord) -> tuple[int, int]:
        """Konwertuje axial (q, r) na offset (x, y) - układ odd-r."""
        x = pos.q + (pos.r // 2)
        y = pos.r
        return (x, y)

    @staticmethod
    def _offset_to_axial(x: int, y: int) -> HexCoord:
        """Konwertuje offset (x, y) na axial (q, r) - układ odd-r."""
        q = x - (y // 2)
        r = y
        return HexCoord(q, r)

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG / WIZUALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def render(self, marks: Optional[Dict[HexCoord, str]] = None) -> str:
        """
        Zwraca tekstową reprezentację mapy.

        Każde pole to symbol terenu, chyba że `marks` podaje
        dla niego inny znak (np. '@' dla obserwatora, '*' dla ścieżki).

        Args:
            marks: Opcjonalne nakładki pozycja -> znak

        Returns:
            str: Tekstowa wizualizacja mapy
        """
        overlay = marks or {}
        lines = []
        for y in range(self.height):
            indent = " " if y % 2 == 1 else ""
            row = []
            for x in range(self.width):
                pos = self._offset_to_axial(x, y)
                if pos in overlay:
                    row.append(overlay[pos])
                else:
                    row.append(self.terrain_at(pos).symbol)
            lines.append(indent + " ".join(row))
        return "\n".join(lines)


def fog_marks(
    terrain: TerrainMap,
    visible: Iterable[HexCoord],
    hidden: str = " ",
) -> Dict[HexCoord, str]:
    """Nakładka dla render(): pola spoza `visible` zastąpione znakiem `hidden`."""
    seen = set(visible)
    return {pos: hidden for pos in terrain.all_positions() if pos not in seen}
