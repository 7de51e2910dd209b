"""
Logowanie przebiegu wyszukiwania i widoczności do formatu JSON.

Każdy krok algorytmu (rozwinięcie węzła BFS, znalezienie celu,
zgłoszenie widocznego pola) może być zapisany z pełnym kontekstem.
Log służy do odtworzenia przebiegu w wizualizacji i do debugowania
predykatów terenu.

Logger jest opcjonalny - algorytmy przyjmują `trace=None` i wtedy
nie robią nic poza samymi obliczeniami.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    SEARCH_START
    ─────────────────────────────────────────────────────────────
    Utworzenie Traversera.
    Data: start [q, r]

    NODE_EXPAND
    ─────────────────────────────────────────────────────────────
    Rozwinięcie przechodniego pola BFS.
    Data: distance, discovered (liczba nowych sąsiadów)

    DESTINATION_FOUND
    ─────────────────────────────────────────────────────────────
    find() zwróciło cel.
    Data: distance

    SEARCH_EXHAUSTED
    ─────────────────────────────────────────────────────────────
    Kolejka BFS pusta.
    Data: visited (liczba odwiedzonych pól)

    SWEEP_START / SWEEP_END
    ─────────────────────────────────────────────────────────────
    Początek i koniec przeglądania jednego kierunku LOS.
    Data: direction, light

    CELL_VISIBLE
    ─────────────────────────────────────────────────────────────
    Pole zgłoszone jako widoczne.
    Data: light

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "algorithm": "shadow",
        "timestamp": "2024-01-01T12:00:00"
    },
    "events": [
        {"seq": 0, "type": "SWEEP_START", "data": {"direction": "E", "light": 8}},
        {"seq": 1, "type": "CELL_VISIBLE", "position": [0, 0], "data": {"light": 8}},
        ...
    ]
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from collections import Counter
from datetime import datetime
import json
from pathlib import Path

if TYPE_CHECKING:
    from ..core.hex_coord import Direction


class TraceEventType(Enum):
    """Typ zdarzenia w przebiegu algorytmu."""

    # BFS
    SEARCH_START = auto()
    NODE_EXPAND = auto()
    DESTINATION_FOUND = auto()
    SEARCH_EXHAUSTED = auto()

    # LOS
    SWEEP_START = auto()
    CELL_VISIBLE = auto()
    SWEEP_END = auto()


def _position_to_list(position: Any) -> Optional[List[int]]:
    """Pozycja jako [q, r]; obce typy współrzędnych jako repr."""
    if position is None:
        return None
    if hasattr(position, "q") and hasattr(position, "r"):
        return [position.q, position.r]
    return repr(position)


@dataclass
class TraceEvent:
    """
    Pojedyncze zdarzenie w przebiegu algorytmu.

    Attributes:
        seq (int): Numer kolejny zdarzenia w logu
        event_type (TraceEventType): Typ zdarzenia
        position: Pozycja której dotyczy zdarzenie (jeśli dotyczy)
        data (Dict): Dodatkowe dane specyficzne dla typu zdarzenia
    """
    seq: int
    event_type: TraceEventType
    position: Any = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result: Dict[str, Any] = {
            "seq": self.seq,
            "type": self.event_type.name,
        }

        if self.position is not None:
            result["position"] = _position_to_list(self.position)
        if self.data:
            result["data"] = self.data

        return result


class TraceLogger:
    """
    Logger przebiegu algorytmów.

    Zbiera zdarzenia i może je zapisać do pliku JSON.

    Attributes:
        events (List[TraceEvent]): Lista wszystkich zdarzeń
        metadata (Dict): Metadane (algorytm, czas, parametry)

    Example:
        >>> trace = TraceLogger("bfs", map_id="crossroads")
        >>> traverser = Traverser(terrain.can_pass, is_goal, start, trace=trace)
        >>> traverser.find()
        >>> trace.save("output/bfs_crossroads.json")
    """

    def __init__(self, algorithm: str, **metadata: Any):
        """
        Inicjalizuje logger.

        Args:
            algorithm: Nazwa algorytmu (bfs, shadow, hybrid, ...)
            **metadata: Dodatkowe metadane zapisywane w nagłówku
        """
        self.events: List[TraceEvent] = []
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "algorithm": algorithm,
            "timestamp": datetime.now().isoformat(),
            **metadata,
        }

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log_event(
        self,
        event_type: TraceEventType,
        position: Any = None,
        **data: Any,
    ) -> TraceEvent:
        """
        Tworzy i loguje zdarzenie.

        Args:
            event_type: Typ zdarzenia
            position: Pozycja (opcjonalnie)
            **data: Dodatkowe dane

        Returns:
            TraceEvent: Utworzone zdarzenie
        """
        event = TraceEvent(
            seq=len(self.events),
            event_type=event_type,
            position=position,
            data=dict(data),
        )
        self.events.append(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # POMOCNICZE METODY LOGOWANIA
    # ─────────────────────────────────────────────────────────────────────────

    def log_search_start(self, start: Any) -> None:
        """Loguje utworzenie Traversera."""
        self.log_event(TraceEventType.SEARCH_START, start)

    def log_expand(self, position: Any, distance: int, discovered: int) -> None:
        """Loguje rozwinięcie pola BFS."""
        self.log_event(
            TraceEventType.NODE_EXPAND,
            position,
            distance=distance,
            discovered=discovered,
        )

    def log_destination(self, position: Any, distance: int) -> None:
        """Loguje znaleziony cel."""
        self.log_event(TraceEventType.DESTINATION_FOUND, position, distance=distance)

    def log_exhausted(self, visited: int) -> None:
        """Loguje wyczerpanie kolejki BFS."""
        self.log_event(TraceEventType.SEARCH_EXHAUSTED, visited=visited)

    def log_sweep_start(self, direction: "Direction", light: Any) -> None:
        """Loguje początek przeglądania kierunku."""
        self.log_event(TraceEventType.SWEEP_START, direction=direction.name, light=light)

    def log_sweep_end(self, direction: "Direction", reported: int) -> None:
        """Loguje koniec przeglądania kierunku."""
        self.log_event(TraceEventType.SWEEP_END, direction=direction.name, reported=reported)

    def log_visible(self, position: Any, light: Any) -> None:
        """Loguje widoczne pole."""
        self.log_event(TraceEventType.CELL_VISIBLE, position, light=light)

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def events_of(self, event_type: TraceEventType) -> List[TraceEvent]:
        """Zwraca zdarzenia danego typu w kolejności logowania."""
        return [e for e in self.events if e.event_type == event_type]

    def summary(self) -> Dict[str, int]:
        """Liczba zdarzeń per typ (nazwa typu -> liczba)."""
        counts = Counter(e.event_type.name for e in self.events)
        return dict(counts)

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializuje cały log do słownika.

        Returns:
            Dict: Pełny log w formacie dla JSON
        """
        return {
            "metadata": self.metadata,
            "events": [e.to_dict() for e in self.events],
        }

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON.

        Args:
            filepath: Ścieżka do pliku
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """
        Zwraca log jako string JSON.

        Args:
            indent: Wcięcie (None = compact)
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
