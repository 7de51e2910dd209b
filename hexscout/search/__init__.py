"""
Search module - przeszukiwanie wszerz (BFS) na siatce hex.

Zawiera:
- Traverser: BFS z przyrostowym find() i odtwarzaniem ścieżki
- VisitRecord: Zapis odwiedzenia (poprzednik, odległość)
- find_path, find_path_next_step, find_nearest, reachable_within
"""

from .bfs import Traverser, VisitRecord
from .paths import find_path, find_path_next_step, find_nearest, reachable_within

__all__ = [
    "Traverser", "VisitRecord",
    "find_path", "find_path_next_step", "find_nearest", "reachable_within",
]
