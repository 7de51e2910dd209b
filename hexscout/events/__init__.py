"""
Events module - logowanie przebiegu algorytmów do formatu JSON.

Zawiera:
- TraceEvent: Dataclass reprezentująca zdarzenie
- TraceEventType: Enum typów zdarzeń
- TraceLogger: Klasa logująca zdarzenia
"""

from .trace_logger import TraceEvent, TraceEventType, TraceLogger

__all__ = ["TraceEvent", "TraceEventType", "TraceLogger"]
