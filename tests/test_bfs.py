"""
Testy dla Traversera (BFS).

Sprawdza najkrótsze odległości, kolejność celów, odtwarzanie ścieżek
i zachowanie dla celów nieprzechodnich.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexscout.core.hex_coord import HexCoord
from hexscout.events.trace_logger import TraceEventType, TraceLogger
from hexscout.search.bfs import Traverser, VisitRecord


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def origin():
    return HexCoord(0, 0)


def within(center: HexCoord, radius: int):
    """can_pass ograniczony do dysku - przeszukiwanie zawsze się kończy."""
    return lambda pos: center.distance(pos) <= radius


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PODSTAWOWE WYSZUKIWANIE
# ═══════════════════════════════════════════════════════════════════════════

def test_open_grid_finds_destination_at_distance_3(origin):
    """Otwarta siatka: cel w odległości 3 ma zapisane distance == 3."""
    goal = HexCoord(2, 1)
    traverser = Traverser(lambda pos: True, lambda pos: pos == goal, origin)

    assert traverser.find() == goal
    assert traverser.distance(goal) == 3


def test_obstacle_forces_longer_path(origin):
    """Przeszkoda na jedynej krótkiej ścieżce wydłuża dystans."""
    goal = HexCoord(2, 0)
    blocked = HexCoord(1, 0)
    bounded = within(origin, 4)
    traverser = Traverser(
        lambda pos: pos != blocked and bounded(pos),
        lambda pos: pos == goal,
        origin,
    )

    assert traverser.find() == goal
    assert traverser.distance(goal) > origin.distance(goal)
    assert traverser.distance(goal) == 3


def test_start_can_be_destination(origin):
    """Start spełniający is_dest jest zwracany jako pierwszy."""
    traverser = Traverser(lambda pos: True, lambda pos: pos == origin, origin)
    assert traverser.find() == origin
    assert traverser.distance(origin) == 0


def test_exhaustion_returns_none(origin):
    """Brak celu w ograniczonej przestrzeni -> None."""
    traverser = Traverser(within(origin, 2), lambda pos: False, origin)
    assert traverser.find() is None
    assert traverser.find() is None


def test_impassable_start_is_not_expanded(origin):
    """Nieprzechodni start nie rozlewa się na sąsiadów."""
    traverser = Traverser(lambda pos: False, lambda pos: False, origin)
    assert traverser.find() is None
    assert len(traverser) == 1


def test_impassable_destination_reported_but_not_expanded(origin):
    """Cel nieprzechodni jest zwracany, ale przez niego nie idziemy."""
    enemy = HexCoord(1, 0)
    bounded = within(origin, 3)
    traverser = Traverser(
        lambda pos: pos != enemy and bounded(pos),
        lambda pos: pos == enemy,
        origin,
    )

    assert traverser.find() == enemy
    assert traverser.distance(enemy) == 1

    # (2, 0) jest odkryty przez innych sąsiadów, nie przez wroga
    traverser.find()
    assert traverser.backtrace(HexCoord(2, 0)) != enemy


# ═══════════════════════════════════════════════════════════════════════════
# TEST: WŁAŚCIWOŚCI BFS
# ═══════════════════════════════════════════════════════════════════════════

def test_distances_equal_hex_distance_on_open_grid(origin):
    """Bez przeszkód distance BFS == odległość hex."""
    traverser = Traverser(within(origin, 4), lambda pos: False, origin)
    traverser.find()

    for pos in traverser.visited():
        assert traverser.distance(pos) == origin.distance(pos)


def test_destinations_in_non_decreasing_distance(origin):
    """Kolejne find() zwracają cele w niemalejącej odległości."""
    traverser = Traverser(within(origin, 2), lambda pos: True, origin)
    distances = [traverser.distance(pos) for pos in traverser]

    assert distances == sorted(distances)
    # dysk r=2 plus pierścień r=3 odkryty z jego brzegu
    assert len(distances) == 1 + 6 + 12 + 18


def test_first_discovery_wins(origin):
    """Każde pole ma dokładnie jeden zapis, który się nie zmienia."""
    traverser = Traverser(within(origin, 3), lambda pos: True, origin)
    first = traverser.find()
    snapshot = {pos: traverser.visit_record(pos) for pos in traverser.visited()}

    list(traverser)

    assert first == origin
    for pos, record in snapshot.items():
        assert traverser.visit_record(pos) is record


def test_visit_record_of_start(origin):
    """Start: poprzednik = start, distance = 0."""
    traverser = Traverser(lambda pos: True, lambda pos: True, origin)
    assert traverser.visit_record(origin) == VisitRecord(origin, 0)


def test_membership_and_len(origin):
    traverser = Traverser(within(origin, 1), lambda pos: False, origin)
    assert origin in traverser
    assert HexCoord(1, 0) not in traverser

    traverser.find()
    assert HexCoord(1, 0) in traverser
    assert len(traverser) == 1 + 6 + 12


# ═══════════════════════════════════════════════════════════════════════════
# TEST: BACKTRACE
# ═══════════════════════════════════════════════════════════════════════════

def test_backtrace(origin):
    """backtrace zwraca poprzednika o krok bliżej startu."""
    goal = HexCoord(3, 0)
    traverser = Traverser(lambda pos: True, lambda pos: pos == goal, origin)
    traverser.find()

    prev = traverser.backtrace(goal)
    assert prev.distance(goal) == 1
    assert traverser.distance(prev) == 2
    assert traverser.backtrace(origin) == origin
    assert traverser.backtrace(HexCoord(50, 50)) is None


def test_backtrace_last_is_neighbor_of_start(origin):
    """backtrace_last to pierwszy krok ze startu."""
    goal = HexCoord(-2, 3)
    traverser = Traverser(lambda pos: True, lambda pos: pos == goal, origin)
    traverser.find()

    step = traverser.backtrace_last(goal)
    assert step in origin.neighbors()
    assert step.distance(goal) == origin.distance(goal) - 1
    assert traverser.backtrace_last(origin) == origin
    assert traverser.backtrace_last(HexCoord(50, 50)) is None


def test_path_to_has_distance_plus_one_cells(origin):
    """Ścieżka ma distance + 1 pól, kolejne pola są sąsiadami."""
    goal = HexCoord(2, 2)
    blocked = {HexCoord(1, 1), HexCoord(2, 1)}
    bounded = within(origin, 6)
    traverser = Traverser(
        lambda pos: pos not in blocked and bounded(pos),
        lambda pos: pos == goal,
        origin,
    )
    traverser.find()

    path = traverser.path_to(goal)
    assert path[0] == origin
    assert path[-1] == goal
    assert len(path) == traverser.distance(goal) + 1
    for a, b in zip(path, path[1:]):
        assert a.distance(b) == 1
    assert not blocked & set(path)


def test_path_to_unvisited_is_empty(origin):
    traverser = Traverser(lambda pos: True, lambda pos: True, origin)
    assert traverser.path_to(HexCoord(9, 9)) == []


# ═══════════════════════════════════════════════════════════════════════════
# TEST: BŁĘDY I TRACE
# ═══════════════════════════════════════════════════════════════════════════

def test_missing_visit_record_raises(origin):
    """Pole w kolejce bez zapisu to naruszenie niezmiennika."""
    traverser = Traverser(lambda pos: True, lambda pos: False, origin)
    traverser._visited.clear()

    with pytest.raises(RuntimeError):
        traverser.find()


def test_predicate_exception_propagates(origin):
    """Wyjątki z predykatów przechodzą bez zmian."""
    def broken(pos):
        raise ZeroDivisionError("boom")

    traverser = Traverser(broken, lambda pos: False, origin)
    with pytest.raises(ZeroDivisionError):
        traverser.find()


def test_trace_records_search(origin):
    """Trace zapisuje start, rozwinięcia i znaleziony cel."""
    goal = HexCoord(2, 0)
    trace = TraceLogger("bfs")
    traverser = Traverser(lambda pos: True, lambda pos: pos == goal, origin, trace=trace)
    traverser.find()

    assert trace.events[0].event_type == TraceEventType.SEARCH_START
    assert trace.events[-1].event_type == TraceEventType.DESTINATION_FOUND
    assert trace.events[-1].data["distance"] == 2

    expands = trace.events_of(TraceEventType.NODE_EXPAND)
    assert expands[0].position == origin
    assert expands[0].data["discovered"] == 6


def test_trace_records_exhaustion(origin):
    trace = TraceLogger("bfs")
    traverser = Traverser(within(origin, 1), lambda pos: False, origin, trace=trace)
    traverser.find()

    exhausted = trace.events_of(TraceEventType.SEARCH_EXHAUSTED)
    assert len(exhausted) == 1
    assert exhausted[0].data["visited"] == len(traverser)
