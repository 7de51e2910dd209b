"""
Vision module - linia wzroku (LOS) z tłumieniem światła.

Zawiera:
- shadow: Rekurencyjny shadow casting po kątach
- hybrid: Linia prosta z dwoma kandydatami + zalewanie
- LOS_REGISTRY / get_los: Wybór algorytmu nazwą
- compute_fov: Pole widzenia jako słownik pozycja -> światło
"""

from .shadow import ShadowReport
from .hybrid import los_check_line
from .registry import (
    LosStrategy,
    ShadowLos,
    LitShadowLos,
    HybridLos,
    LOS_REGISTRY,
    get_los,
    parse_los_config,
    compute_fov,
)

__all__ = [
    "ShadowReport", "los_check_line",
    "LosStrategy", "ShadowLos", "LitShadowLos", "HybridLos",
    "LOS_REGISTRY", "get_los", "parse_los_config", "compute_fov",
]
