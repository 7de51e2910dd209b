"""
System współrzędnych hexagonalnych (Axial Coordinates) z kierunkami i kątami.

Używamy Axial Coordinates (q, r) gdzie:
- q = kolumna (oś pozioma)
- r = wiersz (oś ukośna)

Konwersja do Cube Coordinates:
    s = -q - r
    Cube: (q, r, s) gdzie q + r + s = 0

Kierunki (pointy-top hexagons, zgodnie z zegarem od E):
    Direction   (dq, dr)
    ─────────────────────
    E  (→)     (+1,  0)
    SE (↘)     ( 0, +1)
    SW (↙)     (-1, +1)
    W  (←)     (-1,  0)
    NW (↖)     ( 0, -1)
    NE (↗)     (+1, -1)

Kąty (Angle) to obroty o wielokrotność 60°:
    FORWARD    = 0°
    RIGHT      = +60°  (zgodnie z zegarem)
    RIGHT_BACK = +120°
    BACK       = 180°
    LEFT_BACK  = -120°
    LEFT       = -60°  (przeciwnie do zegara)

    >>> Direction.E + Angle.RIGHT
    <Direction.SE: 1>
    >>> Direction.E + Angle.LEFT
    <Direction.NE: 5>

Linia z detekcją krawędzi:
    Prosta między dwoma hexami może biec dokładnie po wspólnej krawędzi
    dwóch komórek. `line_to_with_edge_detection` zwraca więc dla każdego
    kroku PARĘ kandydatów - raz przesuniętą o +epsilon, raz o -epsilon.
    Gdy linia nie trafia w krawędź, oba elementy pary są identyczne.

Przykład użycia:
    >>> a = HexCoord(0, 0)
    >>> a + Direction.SE
    HexCoord(q=0, r=1)
    >>> a.line_to_with_edge_detection(HexCoord(2, -1))
    [(HexCoord(q=0, r=0), HexCoord(q=0, r=0)),
     (HexCoord(q=1, r=0), HexCoord(q=1, r=-1)),
     (HexCoord(q=2, r=-1), HexCoord(q=2, r=-1))]
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Iterator, Union


# Przesunięcia kierunków w układzie axial (pointy-top)
# Kolejność: E, SE, SW, W, NW, NE
HEX_DIRECTIONS: List[Tuple[int, int]] = [
    (+1, 0),   # E
    (0, +1),   # SE
    (-1, +1),  # SW
    (-1, 0),   # W
    (0, -1),   # NW
    (+1, -1),  # NE
]

# Przesunięcie używane do rozbicia remisów na krawędziach hexów
EDGE_EPSILON = 1e-6


# ═══════════════════════════════════════════════════════════════════════════
# KĄTY I KIERUNKI
# ═══════════════════════════════════════════════════════════════════════════

class Angle(Enum):
    """Obrót względny o wielokrotność 60° (dodatni = zgodnie z zegarem)."""

    FORWARD = 0
    RIGHT = 1
    RIGHT_BACK = 2
    BACK = 3
    LEFT_BACK = 4
    LEFT = 5


class Direction(Enum):
    """
    Jeden z 6 kierunków jednostkowych na siatce hex.

    Wartość to indeks w HEX_DIRECTIONS. Kierunki można obracać
    dodając Angle, a różnica dwóch kierunków daje Angle.

    Example:
        >>> Direction.W + Angle.BACK
        <Direction.E: 0>
        >>> Direction.SE - Direction.E
        <Angle.RIGHT: 1>
    """

    E = 0
    SE = 1
    SW = 2
    W = 3
    NW = 4
    NE = 5

    @property
    def offset(self) -> Tuple[int, int]:
        """Przesunięcie (dq, dr) odpowiadające kierunkowi."""
        return HEX_DIRECTIONS[self.value]

    def __add__(self, angle: Angle) -> Direction:
        if not isinstance(angle, Angle):
            return NotImplemented
        return Direction((self.value + angle.value) % 6)

    def __sub__(self, other: Direction) -> Angle:
        if not isinstance(other, Direction):
            return NotImplemented
        return Angle((self.value - other.value) % 6)

    def __mul__(self, scalar: int) -> HexCoord:
        """Wektor kierunku przeskalowany (np. NW * 3)."""
        dq, dr = self.offset
        return HexCoord(dq * scalar, dr * scalar)

    @classmethod
    def all(cls) -> List[Direction]:
        """Wszystkie 6 kierunków w kolejności zgodnej z zegarem od E."""
        return list(cls)


# ═══════════════════════════════════════════════════════════════════════════
# WSPÓŁRZĘDNA
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class HexCoord:
    """
    Współrzędna hexagonalna w systemie axial (q, r).

    Klasa jest niemutowalna (frozen=True).
    Może być używana jako klucz w słowniku lub element zbioru.

    Attributes:
        q (int): Współrzędna kolumny (oś pozioma)
        r (int): Współrzędna wiersza (oś ukośna)

    Note:
        Współrzędna s w systemie cube jest wyliczana jako: s = -q - r
    """
    q: int
    r: int

    # ─────────────────────────────────────────────────────────────────────────
    # WŁAŚCIWOŚCI
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def s(self) -> int:
        """Trzecia współrzędna w systemie cube (q + r + s = 0)."""
        return -self.q - self.r

    @property
    def axial(self) -> Tuple[int, int]:
        """Współrzędne axial jako krotka."""
        return (self.q, self.r)

    # ─────────────────────────────────────────────────────────────────────────
    # ODLEGŁOŚĆ
    # ─────────────────────────────────────────────────────────────────────────

    def distance(self, other: HexCoord) -> int:
        """
        Oblicza odległość w krokach między dwoma hexami.

        Wzór (cube distance):
            distance = (|dq| + |dr| + |ds|) / 2

        Args:
            other: Druga współrzędna hexagonalna

        Returns:
            int: Odległość w liczbie kroków (hexów)

        Example:
            >>> HexCoord(0, 0).distance(HexCoord(2, 1))
            3
        """
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs(self.s - other.s)
        return (dq + dr + ds) // 2

    # ─────────────────────────────────────────────────────────────────────────
    # SĄSIEDZI I KIERUNKI
    # ─────────────────────────────────────────────────────────────────────────

    def neighbors(self) -> List[HexCoord]:
        """
        Zwraca listę 6 sąsiednich hexów.

        Kolejność sąsiadów (zgodnie z zegarem od E):
            E, SE, SW, W, NW, NE
        """
        return [
            HexCoord(self.q + dq, self.r + dr)
            for dq, dr in HEX_DIRECTIONS
        ]

    def neighbor(self, direction: Direction) -> HexCoord:
        """Zwraca sąsiada w określonym kierunku."""
        dq, dr = direction.offset
        return HexCoord(self.q + dq, self.r + dr)

    def direction_to(self, other: HexCoord) -> Direction:
        """
        Zwraca kierunek najlepiej przybliżający wektor self -> other.

        Porównuje iloczyny skalarne w przestrzeni kartezjańskiej
        (przeskalowane tak, żeby liczyć na intach). Przy remisie
        wygrywa kierunek wcześniejszy w kolejności E, SE, SW, W, NW, NE.

        Args:
            other: Punkt docelowy

        Returns:
            Direction: Najbliższy z 6 kierunków

        Raises:
            ValueError: Jeśli other == self (kierunek nieokreślony)

        Example:
            >>> HexCoord(0, 0).direction_to(HexCoord(3, -1))
            <Direction.E: 0>
        """
        dq = other.q - self.q
        dr = other.r - self.r
        if dq == 0 and dr == 0:
            raise ValueError(f"Direction from {self} to itself is undefined")

        best = Direction.E
        best_dot = None
        for direction in Direction:
            uq, ur = direction.offset
            # x ~ 2q + r, y ~ r * sqrt(3) -> dot * 4/3 w liczbach całkowitych
            dot = (2 * dq + dr) * (2 * uq + ur) + 3 * dr * ur
            if best_dot is None or dot > best_dot:
                best, best_dot = direction, dot
        return best

    # ─────────────────────────────────────────────────────────────────────────
    # LINIA DO CELU
    # ─────────────────────────────────────────────────────────────────────────

    def line_to_with_edge_detection(
        self,
        other: HexCoord
    ) -> List[Tuple[HexCoord, HexCoord]]:
        """
        Zwraca linię do celu jako listę par kandydatów na każdy krok.

        Każdy punkt interpolacji jest zaokrąglany dwukrotnie: z przesunięciem
        +epsilon i -epsilon. Jeśli punkt leży na krawędzi między hexami,
        oba zaokrąglenia dają różne komórki - linia jest niejednoznaczna
        i wywołujący może sprawdzić obie ścieżki.

        Args:
            other: Cel linii

        Returns:
            List[Tuple[HexCoord, HexCoord]]: distance + 1 par, pierwsza
            to (self, self), ostatnia to (other, other)

        Example:
            >>> HexCoord(0, 0).line_to_with_edge_detection(HexCoord(2, 0))
            [(HexCoord(q=0, r=0), HexCoord(q=0, r=0)), (HexCoord(q=1, r=0), HexCoord(q=1, r=0)), (HexCoord(q=2, r=0), HexCoord(q=2, r=0))]
        """
        epsilon = EDGE_EPSILON
        n = self.distance(other)
        if n == 0:
            return [(self, self)]

        results: List[Tuple[HexCoord, HexCoord]] = []
        for i in range(n + 1):
            t = i / n
            q = self.q + (other.q - self.q) * t
            r = self.r + (other.r - self.r) * t
            s = self.s + (other.s - self.s) * t
            # Przesunięcie zachowuje q + r + s = 0
            results.append((
                _cube_round(q + epsilon, r + epsilon, s - 2 * epsilon),
                _cube_round(q - epsilon, r - epsilon, s + 2 * epsilon),
            ))

        return results

    # ─────────────────────────────────────────────────────────────────────────
    # RING I SPIRAL
    # ─────────────────────────────────────────────────────────────────────────

    def ring(self, radius: int) -> List[HexCoord]:
        """
        Zwraca wszystkie hexy w pierścieniu o danym promieniu.

        Note:
            - radius=0 zwraca [self]
            - radius=n zwraca 6*n hexów (dla n > 0)
        """
        if radius == 0:
            return [self]

        results: List[HexCoord] = []
        current = self + Direction.NW * radius

        for direction in Direction:
            for _ in range(radius):
                results.append(current)
                current = current.neighbor(direction)

        return results

    def spiral(self, radius: int) -> Iterator[HexCoord]:
        """Generator hexów warstwami: centrum, potem ring(1), ring(2), ..."""
        for r in range(radius + 1):
            for hex_coord in self.ring(r):
                yield hex_coord

    # ─────────────────────────────────────────────────────────────────────────
    # OPERATORY ARYTMETYCZNE
    # ─────────────────────────────────────────────────────────────────────────

    def __add__(self, other: Union[HexCoord, Direction]) -> HexCoord:
        """Dodawanie współrzędnych lub krok w kierunku."""
        if isinstance(other, Direction):
            return self.neighbor(other)
        if isinstance(other, HexCoord):
            return HexCoord(self.q + other.q, self.r + other.r)
        return NotImplemented

    def __sub__(self, other: HexCoord) -> HexCoord:
        """Odejmowanie współrzędnych."""
        return HexCoord(self.q - other.q, self.r - other.r)

    def __mul__(self, scalar: int) -> HexCoord:
        """Mnożenie przez skalar."""
        return HexCoord(self.q * scalar, self.r * scalar)

    # ─────────────────────────────────────────────────────────────────────────
    # REPREZENTACJA
    # ─────────────────────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"HexCoord(q={self.q}, r={self.r})"

    def __str__(self) -> str:
        return f"({self.q}, {self.r})"


# ─────────────────────────────────────────────────────────────────────────────
# FUNKCJE POMOCNICZE
# ─────────────────────────────────────────────────────────────────────────────

def _cube_round(q: float, r: float, s: float) -> HexCoord:
    """
    Zaokrągla współrzędne cube do najbliższego hexa.

    Algorytm:
    1. Zaokrąglij każdą współrzędną do najbliższej int
    2. Znajdź współrzędną z największym błędem zaokrąglenia
    3. Skoryguj ją tak, żeby q + r + s = 0
    """
    rq = round(q)
    rr = round(r)
    rs = round(s)

    dq = abs(rq - q)
    dr = abs(rr - r)
    ds = abs(rs - s)

    if dq > dr and dq > ds:
        rq = -rr - rs
    elif dr > ds:
        rr = -rq - rs

    return HexCoord(int(rq), int(rr))
