"""
Maps router - lista map i ich szczegóły.
"""

from fastapi import APIRouter, HTTPException
from typing import List, Dict, Any
from pathlib import Path

from hexscout.core.config_loader import ConfigLoader, MapDefinition
from hexscout.core.hex_coord import HexCoord


router = APIRouter()

# Initialize config loader
DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


def get_loader() -> ConfigLoader:
    """Wspólny loader dla wszystkich routerów."""
    return _loader


def load_definition(map_id: str) -> MapDefinition:
    """
    Wczytuje mapę albo zgłasza 404.

    Raises:
        HTTPException: 404 gdy mapa nie istnieje
    """
    try:
        return _loader.load_map_definition(map_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Map '{map_id}' not found")


def parse_position(definition: MapDefinition, position: List[int], field: str) -> HexCoord:
    """
    Zamienia [q, r] na HexCoord i sprawdza granice mapy.

    Raises:
        HTTPException: 422 gdy pozycja jest niepoprawna lub poza mapą
    """
    if len(position) != 2:
        raise HTTPException(status_code=422, detail=f"{field} must be [q, r]")

    pos = HexCoord(position[0], position[1])
    if not definition.terrain.is_valid(pos):
        raise HTTPException(
            status_code=422,
            detail=f"{field} {list(pos.axial)} is outside map '{definition.id}'",
        )
    return pos


@router.get("/maps")
async def get_maps() -> List[Dict[str, Any]]:
    """
    Zwraca listę wszystkich dostępnych map.

    Returns:
        Lista map z wymiarami i domyślnym obserwatorem.
    """
    result = []
    for map_id in _loader.get_map_ids():
        definition = _loader.load_map_definition(map_id)
        result.append({
            "id": map_id,
            "description": definition.description,
            "width": definition.terrain.width,
            "height": definition.terrain.height,
            "origin": list(definition.origin.axial) if definition.origin else None,
        })

    return result


@router.get("/maps/{map_id}")
async def get_map(map_id: str) -> Dict[str, Any]:
    """
    Zwraca szczegóły mapy.

    Args:
        map_id: ID mapy

    Returns:
        Wymiary, teren każdego pola i legenda.
    """
    definition = load_definition(map_id)
    terrain = definition.terrain

    return {
        "id": map_id,
        "description": definition.description,
        "width": terrain.width,
        "height": terrain.height,
        "origin": list(definition.origin.axial) if definition.origin else None,
        "cells": [
            {"position": list(pos.axial), "terrain": terrain.terrain_at(pos).name}
            for pos in terrain.all_positions()
        ],
        "legend": {
            t.name: {"symbol": t.symbol, "passable": t.passable, "opaqueness": t.opaqueness}
            for t in terrain.terrain_types.values()
        },
    }
