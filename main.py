#!/usr/bin/env python3
"""
hex-scout - Entry Point
═══════════════════════════════════════════════════════════════════════════

Liczy pole widzenia (i opcjonalnie ścieżkę) na mapie z data/maps.yaml
i rysuje wynik w konsoli.

Użycie:
    python main.py                              # Domyślna mapa i ustawienia
    python main.py --map forest_edge            # Konkretna mapa
    python main.py --origin 2 4 --light 5       # Własny obserwator i zasięg
    python main.py --algorithm hybrid           # Inny algorytm LOS
    python main.py --goal 4 0                   # Dodatkowo ścieżka BFS do celu
    python main.py --trace output/fov.json      # Zapis przebiegu do JSON

Legenda:
    @ = obserwator    * = ścieżka    (spacja) = niewidoczne
    pozostałe znaki = symbole terenu z data/terrain.yaml
"""

import argparse
import sys
from pathlib import Path

# Dodaj katalog projektu do path
sys.path.insert(0, str(Path(__file__).parent))

from hexscout.core.config_loader import ConfigLoader
from hexscout.core.hex_coord import HexCoord
from hexscout.core.terrain import fog_marks
from hexscout.events.trace_logger import TraceEventType, TraceLogger
from hexscout.search.bfs import Traverser
from hexscout.vision.registry import compute_fov, get_los


def main():
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="hex-scout: pole widzenia i ścieżki na siatce hex",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--data",
        default="data/",
        help="Folder z plikami YAML (domyślnie: data/)"
    )
    parser.add_argument(
        "--map",
        default="crossroads",
        help="ID mapy z maps.yaml (domyślnie: crossroads)"
    )
    parser.add_argument(
        "--origin",
        type=int,
        nargs=2,
        metavar=("Q", "R"),
        help="Pozycja obserwatora (domyślnie: origin z mapy)"
    )
    parser.add_argument(
        "--goal",
        type=int,
        nargs=2,
        metavar=("Q", "R"),
        help="Cel ścieżki BFS"
    )
    parser.add_argument(
        "--light",
        type=int,
        help="Budżet światła (domyślnie: z defaults.yaml)"
    )
    parser.add_argument(
        "--algorithm",
        help="Algorytm LOS: shadow | shadow_lit | hybrid"
    )
    parser.add_argument(
        "--trace",
        help="Zapisz przebieg LOS do pliku JSON"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Szczegółowy output"
    )

    args = parser.parse_args()

    loader = ConfigLoader(args.data)
    fov_config = loader.get_fov_config()

    try:
        definition = loader.load_map_definition(args.map)
    except KeyError as e:
        print(f"Błąd: {e}. Dostępne mapy: {', '.join(loader.get_map_ids())}")
        return 1

    terrain = definition.terrain
    if args.origin:
        origin = HexCoord(*args.origin)
    elif definition.origin is not None:
        origin = definition.origin
    else:
        origin = terrain.all_positions()[0]

    if not terrain.is_valid(origin):
        print(f"Błąd: obserwator {origin} poza mapą {terrain.width}x{terrain.height}")
        return 1

    light = args.light if args.light is not None else fov_config.light
    if args.algorithm:
        strategy = get_los(args.algorithm)
    else:
        strategy = get_los(fov_config.algorithm, **fov_config.los_options())

    print("=" * 60)
    print(f"MAPA: {definition.id} ({terrain.width}x{terrain.height})")
    if definition.description:
        print(definition.description)
    print("=" * 60)
    print(f"Obserwator: {origin}  światło: {light}  algorytm: {strategy.name}")
    print()

    # ─────────────────────────────────────────────────────────────────────────
    # POLE WIDZENIA
    # ─────────────────────────────────────────────────────────────────────────
    trace = TraceLogger(strategy.name, map_id=definition.id) if args.trace else None
    fov = compute_fov(
        terrain.opaqueness,
        origin,
        light,
        strategy,
        dirs=fov_config.directions,
        trace=trace,
    )
    visible = [pos for pos in fov if terrain.is_valid(pos)]

    marks = fog_marks(terrain, visible)
    marks[origin] = "@"

    # ─────────────────────────────────────────────────────────────────────────
    # ŚCIEŻKA
    # ─────────────────────────────────────────────────────────────────────────
    path = []
    if args.goal:
        goal = HexCoord(*args.goal)
        traverser = Traverser(terrain.can_pass, lambda pos: pos == goal, origin)
        if traverser.find() is None:
            print(f"Brak ścieżki do {goal}")
        else:
            path = traverser.path_to(goal)
            for pos in path[1:]:
                marks[pos] = "*"

    print(terrain.render(marks))
    print()
    print(f"Widoczne pola: {len(visible)} / {len(terrain.all_positions())}")
    if len(path) > 1:
        print(f"Ścieżka: {len(path) - 1} kroków, pierwszy krok: {path[1]}")

    if trace is not None:
        trace.save(args.trace)
        print(f"📄 Przebieg zapisany: {args.trace}")

        if args.verbose:
            print()
            print("-" * 60)
            print("STATYSTYKI ZDARZEŃ")
            print("-" * 60)
            for event_type in TraceEventType:
                count = len(trace.events_of(event_type))
                if count > 0:
                    print(f"  {event_type.name}: {count}")

    if args.verbose:
        print()
        for pos in sorted(visible, key=lambda p: (origin.distance(p), p.r, p.q)):
            print(f"  {pos}: światło {fov[pos]}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
