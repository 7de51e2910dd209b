"""
Testy dla współrzędnych hex, kierunków i kątów.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexscout.core.hex_coord import HexCoord, Direction, Angle


# ═══════════════════════════════════════════════════════════════════════════
# TEST: KIERUNKI I KĄTY
# ═══════════════════════════════════════════════════════════════════════════

def test_directions_are_clockwise_from_east():
    """Kolejność kierunków: E, SE, SW, W, NW, NE."""
    assert [d.name for d in Direction.all()] == ["E", "SE", "SW", "W", "NW", "NE"]


def test_direction_plus_angle_rotates():
    """RIGHT obraca zgodnie z zegarem, LEFT przeciwnie."""
    assert Direction.E + Angle.RIGHT == Direction.SE
    assert Direction.E + Angle.LEFT == Direction.NE
    assert Direction.W + Angle.LEFT == Direction.SW
    assert Direction.NE + Angle.RIGHT == Direction.E
    assert Direction.W + Angle.BACK == Direction.E
    assert Direction.SE + Angle.FORWARD == Direction.SE


def test_direction_difference_is_angle():
    """Różnica kierunków daje kąt, który odtwarza kierunek."""
    assert Direction.SE - Direction.E == Angle.RIGHT
    assert Direction.E - Direction.SE == Angle.LEFT
    for a in Direction:
        for b in Direction:
            assert b + (a - b) == a


def test_direction_scaled():
    """Kierunek razy skalar daje wektor."""
    assert Direction.NW * 3 == HexCoord(0, -3)
    assert Direction.E * 2 == HexCoord(2, 0)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PODSTAWOWE OPERACJE
# ═══════════════════════════════════════════════════════════════════════════

def test_cube_coordinates():
    """s = -q - r."""
    pos = HexCoord(2, -5)
    assert pos.s == 3
    assert pos.axial == (2, -5)


def test_distance():
    """Odległość cube."""
    assert HexCoord(0, 0).distance(HexCoord(2, 1)) == 3
    assert HexCoord(0, 0).distance(HexCoord(0, 0)) == 0
    assert HexCoord(1, -1).distance(HexCoord(-1, 1)) == 2


def test_neighbors_order_matches_directions():
    """neighbors() w kolejności kierunków."""
    center = HexCoord(3, 2)
    assert center.neighbors() == [center + d for d in Direction.all()]
    assert all(center.distance(n) == 1 for n in center.neighbors())


def test_add_direction_and_coord():
    """Dodawanie kierunku i współrzędnej."""
    assert HexCoord(0, 0) + Direction.SE == HexCoord(0, 1)
    assert HexCoord(1, 2) + HexCoord(3, -1) == HexCoord(4, 1)
    assert HexCoord(1, 2) - HexCoord(3, -1) == HexCoord(-2, 3)


def test_hashable_as_dict_key():
    """Frozen dataclass działa jako klucz słownika."""
    seen = {HexCoord(1, 1): "a"}
    assert seen[HexCoord(1, 1)] == "a"


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DIRECTION_TO
# ═══════════════════════════════════════════════════════════════════════════

def test_direction_to_neighbors():
    """Dla sąsiadów kierunek jest dokładny."""
    origin = HexCoord(0, 0)
    for d in Direction:
        assert origin.direction_to(origin + d) == d


def test_direction_to_far_target():
    """Daleki cel - najbliższy z 6 kierunków."""
    assert HexCoord(0, 0).direction_to(HexCoord(3, -1)) == Direction.E
    assert HexCoord(0, 0).direction_to(HexCoord(-4, 1)) == Direction.W


def test_direction_to_tie_prefers_earlier():
    """Remis (cel dokładnie między E i SE) - wygrywa E."""
    assert HexCoord(0, 0).direction_to(HexCoord(1, 1)) == Direction.E


def test_direction_to_self_raises():
    """Kierunek do samego siebie jest nieokreślony."""
    with pytest.raises(ValueError):
        HexCoord(2, 2).direction_to(HexCoord(2, 2))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: LINIE
# ═══════════════════════════════════════════════════════════════════════════

def test_edge_detection_unambiguous_line():
    """Na osi oba kandydaty są identyczne."""
    pairs = HexCoord(0, 0).line_to_with_edge_detection(HexCoord(0, 3))
    assert len(pairs) == 4
    assert all(a == b for a, b in pairs)


def test_edge_detection_ambiguous_line():
    """Linia po krawędzi daje dwa różne kandydaty w środku."""
    pairs = HexCoord(0, 0).line_to_with_edge_detection(HexCoord(2, -1))
    assert pairs == [
        (HexCoord(0, 0), HexCoord(0, 0)),
        (HexCoord(1, 0), HexCoord(1, -1)),
        (HexCoord(2, -1), HexCoord(2, -1)),
    ]


def test_edge_detection_endpoints():
    """Pierwsza para to start, ostatnia to cel."""
    start, goal = HexCoord(-2, 3), HexCoord(4, -1)
    pairs = start.line_to_with_edge_detection(goal)
    assert len(pairs) == start.distance(goal) + 1
    assert pairs[0] == (start, start)
    assert pairs[-1] == (goal, goal)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: RING I SPIRAL
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("radius", [1, 2, 3])
def test_ring_size_and_distance(radius):
    """Pierścień ma 6*r pól, wszystkie w odległości r."""
    center = HexCoord(1, -1)
    ring = center.ring(radius)
    assert len(ring) == 6 * radius
    assert len(set(ring)) == 6 * radius
    assert all(center.distance(pos) == radius for pos in ring)


def test_ring_zero_is_center():
    assert HexCoord(5, 5).ring(0) == [HexCoord(5, 5)]


def test_spiral_covers_disc():
    """Spiral o promieniu 2 to 19 pól."""
    cells = list(HexCoord(0, 0).spiral(2))
    assert len(cells) == 19
    assert cells[0] == HexCoord(0, 0)
