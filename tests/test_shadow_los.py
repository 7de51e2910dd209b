"""
Testy dla shadow casting LOS (rekurencyjny po kątach).

Testuje zasięg światła, blokowanie przez nieprzezroczyste pola
i obie polityki raportowania.
"""

import pytest
import random
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexscout.core.hex_coord import HexCoord, Direction
from hexscout.events.trace_logger import TraceEventType, TraceLogger
from hexscout.vision.registry import compute_fov
from hexscout.vision.shadow import los, ShadowReport


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

ORIGIN = HexCoord(0, 0)
PILLAR = HexCoord(1, 0)


def run(opaqueness, light, dirs=None, **options):
    """Zbiera wszystkie wywołania visible(pos, light) w kolejności."""
    calls = []
    los(
        opaqueness,
        lambda pos, value: calls.append((pos, value)),
        light,
        ORIGIN,
        Direction.all() if dirs is None else dirs,
        **options,
    )
    return calls


def uniform(pos):
    return 1


def pillar(pos):
    return 100 if pos == PILLAR else 1


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZASIĘG
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("widen_sides", [True, False])
def test_light_3_reaches_distance_2(widen_sides):
    """Światło 3 przy opaqueness 1: widać pola 0..2, nic w odległości 3."""
    calls = run(uniform, 3, [Direction.E], widen_sides=widen_sides)
    seen = {pos for pos, _ in calls}

    assert ORIGIN in seen
    assert HexCoord(1, 0) in seen
    assert HexCoord(2, 0) in seen
    assert max(ORIGIN.distance(pos) for pos in seen) == 2


def test_light_3_all_directions_stay_in_range():
    seen = {pos for pos, _ in run(uniform, 3)}
    assert all(ORIGIN.distance(pos) <= 2 for pos in seen)
    for d in Direction:
        assert ORIGIN + d in seen


def test_zero_opaqueness_terminates():
    """Przezroczysty świat: zasięg liczony po MIN_REACH_COST za pole."""
    seen = {pos for pos, _ in run(lambda pos: 0, 1)}
    assert seen
    # 1 / 0.125 = 8 kroków zasięgu: pola 0..7
    assert max(ORIGIN.distance(pos) for pos in seen) == 7


def test_fractional_opacity_reaches_beyond_light():
    """opaqueness 0.5, light 2: promień dochodzi do pola 3, a nie tylko 1."""
    calls = run(lambda pos: 0.5, 2, [Direction.E], widen_sides=False)
    seen = {pos for pos, _ in calls}

    assert (HexCoord(2, 0), 1.0) in calls
    assert (HexCoord(3, 0), 0.5) in calls
    assert HexCoord(4, 0) not in seen


def test_zero_light_reports_only_origin():
    """light == 0: origin zgłoszony, nic dalej."""
    assert run(uniform, 0, [Direction.E]) == [(ORIGIN, 0)]


def test_long_ray_uses_no_recursion():
    """Bardzo długi promień nie trafia w limit rekurencji."""
    light = 3000
    corridor = lambda pos: 1 if pos.r == 0 else float("inf")
    calls = run(corridor, light, [Direction.E], widen_sides=False)
    seen = {pos for pos, _ in calls}

    assert HexCoord(light - 1, 0) in seen
    assert HexCoord(light, 0) not in seen


# ═══════════════════════════════════════════════════════════════════════════
# TEST: BLOKOWANIE
# ═══════════════════════════════════════════════════════════════════════════

def test_pillar_blocks_cells_behind_it():
    """Nieprzezroczyste pole na osi zasłania pola za nim."""
    seen = {pos for pos, _ in run(pillar, 8, widen_sides=False)}

    assert PILLAR in seen
    for k in range(2, 8):
        assert HexCoord(k, 0) not in seen

    # boczne pola wachlarza pozostają widoczne
    for pos in (HexCoord(1, -1), HexCoord(0, 1), HexCoord(2, -1), HexCoord(1, 1)):
        assert pos in seen


def test_blocking_cell_is_reported_with_arriving_light():
    """BEFORE_OPACITY: pole blokujące dostaje światło, które do niego dotarło."""
    calls = run(pillar, 8, [Direction.E], widen_sides=False)
    assert (PILLAR, 7) in calls


# ═══════════════════════════════════════════════════════════════════════════
# TEST: POLITYKI RAPORTOWANIA
# ═══════════════════════════════════════════════════════════════════════════

def test_before_opacity_reports_full_light_at_origin():
    calls = run(uniform, 5, [Direction.E])
    assert calls[0] == (ORIGIN, 5)


def test_after_opacity_reports_remaining_light():
    calls = run(uniform, 5, [Direction.E], report=ShadowReport.AFTER_OPACITY)
    assert calls[0] == (ORIGIN, 4)


def test_after_opacity_clamps_blocking_cell_to_zero():
    calls = run(
        pillar, 8, [Direction.E],
        report=ShadowReport.AFTER_OPACITY, widen_sides=False,
    )
    assert (PILLAR, 0) in calls
    assert all(value >= 0 for _, value in calls)


def test_after_opacity_side_cells_subtract_own_opacity():
    """AFTER_OPACITY + widen_sides: pole boczne też odejmuje swoje opaqueness."""
    calls = run(
        pillar, 8, [Direction.E],
        report=ShadowReport.AFTER_OPACITY, widen_sides=True,
    )
    # PILLAR jest polem bocznym wachlarza z origin
    assert [value for pos, value in calls if pos == PILLAR] == [0, 0]

    # (1, -1): origin zostawia 7, pole odejmuje swoje 1
    assert {value for pos, value in calls if pos == HexCoord(1, -1)} == {6}


def test_report_accepts_string_value():
    """Polityka może przyjść jako string z YAML."""
    calls = run(uniform, 5, [Direction.E], report="after_opacity")
    assert calls[0] == (ORIGIN, 4)


def test_widen_sides_reports_more_cells():
    widened = run(uniform, 5, [Direction.E], widen_sides=True)
    narrow = run(uniform, 5, [Direction.E], widen_sides=False)
    assert len(widened) > len(narrow)
    assert {pos for pos, _ in narrow} <= {pos for pos, _ in widened}


def test_light_never_increases_along_ray():
    """Zgłaszane światło nigdy nie rośnie z odległością."""
    calls = run(uniform, 6, [Direction.SE], widen_sides=False)
    for pos, value in calls:
        assert value == 6 - ORIGIN.distance(pos)


def test_reports_are_not_deduplicated():
    """To samo pole może zostać zgłoszone wielokrotnie."""
    calls = run(uniform, 4)
    positions = [pos for pos, _ in calls]
    assert len(positions) > len(set(positions))


def test_opaqueness_exception_propagates():
    def broken(pos):
        raise LookupError(pos)

    with pytest.raises(LookupError):
        run(broken, 3)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: MONOTONICZNOŚĆ
# ═══════════════════════════════════════════════════════════════════════════

AREA = list(ORIGIN.spiral(6))


def random_opacities(rng):
    """Losowe opaqueness w obrębie AREA; poza nią pola nieprzezroczyste."""
    return {pos: rng.choice([0, 0.5, 1, 2, 3]) for pos in AREA}


def lookup(cells):
    return lambda pos: cells.get(pos, float("inf"))


@pytest.mark.parametrize("algorithm", ["shadow", "shadow_lit"])
@pytest.mark.parametrize("seed", range(40))
def test_raising_opacity_never_reveals_or_brightens(algorithm, seed):
    """Większe opaqueness jednego pola: żadnych nowych pól, nigdzie jaśniej."""
    rng = random.Random(seed)
    cells = random_opacities(rng)
    before = compute_fov(lookup(cells), ORIGIN, 6, algorithm)

    changed = dict(cells)
    target = rng.choice(AREA)
    changed[target] += rng.choice([0.25, 1, 2, 100])
    after = compute_fov(lookup(changed), ORIGIN, 6, algorithm)

    assert set(after) <= set(before)
    for pos, value in after.items():
        assert value <= before[pos], f"{pos} jaśniejsze po zmianie {target}"


# ═══════════════════════════════════════════════════════════════════════════
# TEST: TRACE
# ═══════════════════════════════════════════════════════════════════════════

def test_trace_logs_every_report():
    trace = TraceLogger("shadow")
    calls = []
    los(uniform, lambda pos, value: calls.append(pos), 4, ORIGIN, Direction.all(), trace=trace)

    assert len(trace.events_of(TraceEventType.SWEEP_START)) == 6
    ends = trace.events_of(TraceEventType.SWEEP_END)
    assert sum(e.data["reported"] for e in ends) == len(calls)
    assert len(trace.events_of(TraceEventType.CELL_VISIBLE)) == len(calls)
