"""
Search router - ścieżki BFS na mapach.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List, Dict, Any, Optional

from hexscout.search.bfs import Traverser
from .maps import load_definition, parse_position


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class PathRequest(BaseModel):
    """Request o ścieżkę."""
    map_id: str
    start: List[int]  # [q, r]
    goal: List[int]   # [q, r]


class PathResponse(BaseModel):
    """Wynik wyszukiwania ścieżki."""
    found: bool
    distance: Optional[int] = None
    path: List[List[int]] = []
    next_step: Optional[List[int]] = None
    visited: int = 0


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.post("/path")
async def find_path(request: PathRequest) -> Dict[str, Any]:
    """
    Szuka najkrótszej ścieżki BFS między dwoma polami mapy.

    Args:
        request: Mapa, start i cel

    Returns:
        Ścieżka (lista [q, r]), odległość i pierwszy krok
    """
    definition = load_definition(request.map_id)
    start = parse_position(definition, request.start, "start")
    goal = parse_position(definition, request.goal, "goal")

    traverser = Traverser(definition.terrain.can_pass, lambda pos: pos == goal, start)
    found = traverser.find()

    if found is None:
        return PathResponse(found=False, visited=len(traverser)).model_dump()

    step = traverser.backtrace_last(goal)
    return PathResponse(
        found=True,
        distance=traverser.distance(goal),
        path=[list(pos.axial) for pos in traverser.path_to(goal)],
        next_step=list(step.axial) if step != start else None,
        visited=len(traverser),
    ).model_dump()
