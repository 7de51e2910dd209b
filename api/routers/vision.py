"""
Vision router - pole widzenia na mapach.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional

from hexscout.core.hex_coord import Direction
from hexscout.events.trace_logger import TraceLogger
from hexscout.vision.registry import compute_fov, get_los
from .maps import get_loader, load_definition, parse_position


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST MODELS
# ═══════════════════════════════════════════════════════════════════════════

class FovRequest(BaseModel):
    """Request o pole widzenia."""
    map_id: str
    origin: Optional[List[int]] = None      # [q, r]; domyślnie origin mapy
    light: Optional[float] = Field(None, allow_inf_nan=False)  # domyślnie z defaults.yaml
    algorithm: Optional[str] = None         # shadow | shadow_lit | hybrid
    report: Optional[str] = None            # before_opacity | after_opacity
    widen_sides: Optional[bool] = None
    directions: Optional[List[str]] = None  # np. ["e", "ne"]
    trace: bool = False


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.post("/fov")
async def field_of_view(request: FovRequest) -> Dict[str, Any]:
    """
    Liczy pole widzenia obserwatora.

    Args:
        request: Mapa, obserwator i parametry LOS

    Returns:
        Widoczne pola z docierającym światłem (opcjonalnie przebieg)
    """
    definition = load_definition(request.map_id)
    config = get_loader().get_fov_config()

    if request.origin is not None:
        origin = parse_position(definition, request.origin, "origin")
    elif definition.origin is not None:
        origin = definition.origin
    else:
        raise HTTPException(status_code=422, detail="origin is required for this map")

    light = request.light if request.light is not None else config.light
    if light == int(light):
        light = int(light)

    algorithm = request.algorithm or config.algorithm
    options = {} if request.algorithm else config.los_options()
    if request.report is not None:
        options["report"] = request.report
    if request.widen_sides is not None:
        options["widen_sides"] = request.widen_sides

    try:
        strategy = get_los(algorithm, **options)
        if request.directions is None:
            dirs = config.directions
        else:
            dirs = [Direction[name.upper()] for name in request.directions]
    except (ValueError, KeyError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    trace = TraceLogger(strategy.name, map_id=definition.id) if request.trace else None
    fov = compute_fov(
        definition.terrain.opaqueness, origin, light, strategy, dirs=dirs, trace=trace,
    )

    visible = [
        {"position": list(pos.axial), "light": value}
        for pos, value in fov.items()
        if definition.terrain.is_valid(pos)
    ]

    result: Dict[str, Any] = {
        "map_id": definition.id,
        "origin": list(origin.axial),
        "light": light,
        "algorithm": strategy.name,
        "visible": visible,
    }
    if trace is not None:
        result["trace"] = trace.to_dict()

    return result
