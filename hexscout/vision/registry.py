"""
Rejestr algorytmów LOS i wygodne liczenie pola widzenia (FOV).

Algorytmy mają wspólną sygnaturę:
    los(opaqueness, visible, light, origin, dirs) -> None

Strategie opakowują je z ustalonymi opcjami, dzięki czemu algorytm
można wybrać nazwą z kodu lub z YAML.

UŻYCIE:
═══════════════════════════════════════════════════════════════════

    # Z kodu
    strategy = get_los("hybrid")
    strategy.run(terrain.opaqueness, visible, 8, me, Direction.all())

    # Z YAML (defaults.yaml)
    fov:
      algorithm: "shadow"                   # prosty string
    fov:                                    # rozszerzony format
      algorithm: "shadow"
      report: "after_opacity"
      widen_sides: false

ALGORYTMY:
═══════════════════════════════════════════════════════════════════

    shadow      - shadow casting, raport przed odjęciem opaqueness,
                  z poszerzaniem bocznych pól (domyślny)
    shadow_lit  - shadow casting, raport po odjęciu opaqueness,
                  bez poszerzania
    hybrid      - linia prosta z dwoma kandydatami + zalewanie
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, TYPE_CHECKING

from ..core.hex_coord import Direction
from ..core.types import Light, Opaqueness, P, Visible
from . import hybrid, shadow
from .shadow import ShadowReport

if TYPE_CHECKING:
    from ..events.trace_logger import TraceLogger


# ═══════════════════════════════════════════════════════════════════════════
# BAZA STRATEGII
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class LosStrategy(ABC):
    """Bazowa klasa dla algorytmów LOS."""

    name = "base"

    @abstractmethod
    def run(
        self,
        opaqueness: Opaqueness,
        visible: Visible,
        light: Light,
        origin: P,
        dirs: Iterable[Direction],
        trace: Optional["TraceLogger"] = None,
    ) -> None:
        """
        Uruchamia algorytm.

        Args:
            opaqueness: Koszt światła pola
            visible: Callback visible(pos, light)
            light: Początkowy budżet światła
            origin: Pozycja obserwatora
            dirs: Kierunki przeglądania
            trace: Opcjonalny logger przebiegu
        """
        pass


@dataclass
class ShadowLos(LosStrategy):
    """
    Shadow casting z wybieraną polityką raportowania.

    Attributes:
        report: Kiedy zgłaszać pole względem odjęcia opaqueness
        widen_sides: Czy zgłaszać boczne pola
    """
    report: ShadowReport = ShadowReport.BEFORE_OPACITY
    widen_sides: bool = True

    name = "shadow"

    def __post_init__(self) -> None:
        self.report = ShadowReport(self.report)

    def run(self, opaqueness, visible, light, origin, dirs, trace=None) -> None:
        shadow.los(
            opaqueness, visible, light, origin, dirs,
            report=self.report,
            widen_sides=self.widen_sides,
            trace=trace,
        )


@dataclass
class LitShadowLos(ShadowLos):
    """Shadow casting raportujący światło pozostałe za polem."""
    report: ShadowReport = ShadowReport.AFTER_OPACITY
    widen_sides: bool = False

    name = "shadow_lit"


@dataclass
class HybridLos(LosStrategy):
    """Linia prosta z dwoma kandydatami + zalewanie kierunkowe."""

    name = "hybrid"

    def run(self, opaqueness, visible, light, origin, dirs, trace=None) -> None:
        hybrid.los(opaqueness, visible, light, origin, dirs, trace=trace)


# ═══════════════════════════════════════════════════════════════════════════
# FACTORY
# ═══════════════════════════════════════════════════════════════════════════

LOS_REGISTRY: Dict[str, type] = {
    "shadow": ShadowLos,
    "shadow_lit": LitShadowLos,
    "hybrid": HybridLos,
}


def get_los(algorithm: str, **kwargs: Any) -> LosStrategy:
    """
    Tworzy strategię LOS na podstawie nazwy.

    Args:
        algorithm: Nazwa algorytmu (z registry)
        **kwargs: Opcje (report, widen_sides - tylko shadow)

    Returns:
        LosStrategy: Instancja strategii

    Raises:
        ValueError: Jeśli nieznany algorytm lub niepoprawna opcja

    Example:
        >>> get_los("shadow", report="after_opacity")
        ShadowLos(report=<ShadowReport.AFTER_OPACITY: 'after_opacity'>, widen_sides=True)
    """
    strategy_class = LOS_REGISTRY.get(algorithm.lower())

    if strategy_class is None:
        raise ValueError(f"Unknown LOS algorithm: {algorithm}. "
                         f"Available: {list(LOS_REGISTRY.keys())}")

    try:
        return strategy_class(**kwargs)
    except TypeError as e:
        raise ValueError(f"Invalid options for LOS algorithm '{algorithm}': {e}") from e


def parse_los_config(config: Any) -> LosStrategy:
    """
    Parsuje konfigurację algorytmu z YAML.

    Obsługuje dwa formaty:
    1. String: "hybrid"
    2. Dict: {algorithm: "shadow", report: "after_opacity"}

    Example:
        >>> parse_los_config("hybrid")
        HybridLos()
    """
    if isinstance(config, str):
        return get_los(config)

    if isinstance(config, dict):
        algorithm = config.get("algorithm", "shadow")
        options = {k: v for k, v in config.items() if k != "algorithm"}
        return get_los(algorithm, **options)

    # Fallback
    return ShadowLos()


# ═══════════════════════════════════════════════════════════════════════════
# POLE WIDZENIA
# ═══════════════════════════════════════════════════════════════════════════

def compute_fov(
    opaqueness: Opaqueness,
    origin: P,
    light: Light,
    algorithm: Any = "shadow",
    dirs: Optional[Iterable[Direction]] = None,
    trace: Optional["TraceLogger"] = None,
) -> Dict[P, Light]:
    """
    Liczy pole widzenia jako słownik pozycja -> najwyższe zgłoszone światło.

    Algorytmy mogą zgłosić to samo pole wielokrotnie (różne promienie,
    różne kierunki) - tutaj zostaje maksimum.

    Args:
        opaqueness: Koszt światła pola
        origin: Pozycja obserwatora
        light: Początkowy budżet światła
        algorithm: Nazwa, konfiguracja (str/dict) lub gotowa LosStrategy
        dirs: Kierunki (domyślnie wszystkie 6)
        trace: Opcjonalny logger przebiegu

    Returns:
        Dict[P, Light]: Widoczne pola i światło do nich docierające

    Example:
        >>> fov = compute_fov(terrain.opaqueness, me, 8, "hybrid")
        >>> enemy_pos in fov
        True
    """
    if isinstance(algorithm, LosStrategy):
        strategy = algorithm
    else:
        strategy = parse_los_config(algorithm)

    seen: Dict[P, Light] = {}

    def visible(pos: P, value: Light) -> None:
        if pos not in seen or value > seen[pos]:
            seen[pos] = value

    strategy.run(
        opaqueness, visible, light, origin,
        Direction.all() if dirs is None else dirs,
        trace,
    )
    return seen
