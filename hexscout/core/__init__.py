"""
Core module - podstawowe komponenty.

Zawiera:
- HexCoord, Direction, Angle: Algebra współrzędnych hexagonalnych
- HexPosition: Kontrakt współrzędnej dla algorytmów
- TerrainMap: Mapa terenu z predykatami can_pass/opaqueness
- ConfigLoader: Wczytywanie konfiguracji z defaults
"""

from .hex_coord import HexCoord, Direction, Angle
from .types import HexPosition, Light
from .terrain import TerrainMap, TerrainType, OUTSIDE_OPACITY
from .config_loader import ConfigLoader, FovConfig, MapDefinition

__all__ = [
    "HexCoord", "Direction", "Angle", "HexPosition", "Light",
    "TerrainMap", "TerrainType", "OUTSIDE_OPACITY",
    "ConfigLoader", "FovConfig", "MapDefinition",
]
