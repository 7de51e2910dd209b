"""
Przeszukiwanie wszerz (BFS) z przyrostowym zwracaniem celów.

Traverser znajduje najbliższe (w krokach) pola spełniające `is_dest`,
do których da się dojść przez pola, dla których `can_pass` zwraca True.

Jak działa:
    1. Start trafia do kolejki FIFO i do mapy odwiedzonych (distance=0)
    2. find() zdejmuje pole z kolejki:
       - jeśli pole jest przechodnie, dodaje nieodwiedzonych sąsiadów
         (distance + 1, poprzednik = zdjęte pole)
       - jeśli pole jest celem, zwraca je NIE czyszcząc kolejki
    3. Kolejne wywołanie find() kontynuuje od miejsca, w którym
       poprzednie skończyło - zwraca następny najbliższy cel

Pierwsze odkrycie wygrywa:
    Każde pole dostaje dokładnie jeden VisitRecord na całe życie
    Traversera. Ponieważ kolejka jest FIFO, pierwszy zapis ma zawsze
    najkrótszą możliwą odległość.

Cele nieprzechodnie:
    Sprawdzenie celu dotyczy KAŻDEGO zdjętego pola. Cel, na który nie
    można wejść (np. wróg, skrzynia), jest zwracany, ale przez niego
    przeszukiwanie się nie rozlewa.

Przykład użycia:
    >>> traverser = Traverser(terrain.can_pass, lambda c: c in enemies, me)
    >>> target = traverser.find()
    >>> step = traverser.backtrace_last(target)   # pierwszy krok w stronę celu
    >>> second = traverser.find()                  # następny najbliższy wróg

Determinizm:
    Zakładamy, że predykaty są deterministyczne. Wywoływane są
    synchronicznie, dowolną liczbę razy i w dowolnej kolejności pól.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Generic, Iterator, List, Optional, TYPE_CHECKING

from ..core.types import CanPass, IsDest, P

if TYPE_CHECKING:
    from ..events.trace_logger import TraceLogger


@dataclass(frozen=True)
class VisitRecord(Generic[P]):
    """
    Zapis odwiedzenia pola.

    Attributes:
        predecessor: Pole, z którego to pole odkryto (start dla startu)
        distance: Liczba kroków od startu
    """
    predecessor: P
    distance: int


class Traverser(Generic[P]):
    """
    Breadth First Search z możliwością wielokrotnego find().

    Attributes:
        start: Pozycja startowa
        _visited (Dict): pozycja -> VisitRecord
        _to_traverse (Deque): kolejka FIFO pól do rozwinięcia

    Example:
        >>> traverser = Traverser(lambda c: True, lambda c: c == goal, HexCoord(0, 0))
        >>> traverser.find() == goal
        True
        >>> traverser.distance(goal)
        3
    """

    def __init__(
        self,
        can_pass: CanPass,
        is_dest: IsDest,
        start: P,
        trace: Optional["TraceLogger"] = None,
    ):
        """
        Tworzy Traverser z warunkami początkowymi.

        Args:
            can_pass: Czy przez pole można przejść
            is_dest: Czy pole jest celem
            start: Pozycja startowa
            trace: Opcjonalny logger przebiegu
        """
        self.start = start
        self._can_pass = can_pass
        self._is_dest = is_dest
        self._trace = trace

        self._visited: Dict[P, VisitRecord[P]] = {start: VisitRecord(start, 0)}
        self._to_traverse: Deque[P] = deque([start])

        if trace is not None:
            trace.log_search_start(start)

    # ─────────────────────────────────────────────────────────────────────────
    # WYSZUKIWANIE
    # ─────────────────────────────────────────────────────────────────────────

    def find(self) -> Optional[P]:
        """
        Znajduje następne najbliższe pole-cel.

        Można wywoływać wielokrotnie - każde wywołanie zwraca kolejny cel
        w niemalejącej odległości od startu.

        Returns:
            Optional[P]: Cel lub None gdy przestrzeń przeszukiwania wyczerpana

        Raises:
            RuntimeError: Jeśli pole z kolejki nie ma zapisu odwiedzenia
                          (naruszenie niezmiennika - błąd programisty)
        """
        while self._to_traverse:
            pos = self._to_traverse.popleft()

            # Rozwijamy przed zwróceniem, żeby kolejne find() mogło kontynuować
            if self._can_pass(pos):
                self._expand(pos)

            if self._is_dest(pos):
                if self._trace is not None:
                    self._trace.log_destination(pos, self._visited[pos].distance)
                return pos

        if self._trace is not None:
            self._trace.log_exhausted(len(self._visited))
        return None

    def _expand(self, pos: P) -> None:
        record = self._visited.get(pos)
        if record is None:
            raise RuntimeError(f"BFS: {pos!r} should have been visited already")

        dist = record.distance + 1
        discovered = 0

        for npos in pos.neighbors():
            if npos in self._visited:
                continue
            self._visited[npos] = VisitRecord(pos, dist)
            self._to_traverse.append(npos)
            discovered += 1

        if self._trace is not None:
            self._trace.log_expand(pos, record.distance, discovered)

    def __iter__(self) -> Iterator[P]:
        """Iteruje po kolejnych celach aż do wyczerpania przestrzeni."""
        while True:
            pos = self.find()
            if pos is None:
                return
            yield pos

    # ─────────────────────────────────────────────────────────────────────────
    # ODTWARZANIE ŚCIEŻKI
    # ─────────────────────────────────────────────────────────────────────────

    def backtrace(self, pos: P) -> Optional[P]:
        """
        Zwraca sąsiada `pos`, który jest o krok bliżej startu.

        Przydatne do odtworzenia całej ścieżki do pola zwróconego przez find().

        Returns:
            Optional[P]: Poprzednik; None dla pól jeszcze nieodwiedzonych;
                         start dla startu
        """
        record = self._visited.get(pos)
        if record is None:
            return None
        return record.predecessor

    def backtrace_last(self, pos: P) -> Optional[P]:
        """
        Idzie po poprzednikach aż do sąsiada startu, który prowadzi do `pos`.

        Czyli: pierwszy krok ze startu w stronę `pos`.

        Returns:
            Optional[P]: Sąsiad startu; None dla pól nieodwiedzonych;
                         start dla startu
        """
        while True:
            record = self._visited.get(pos)
            if record is None:
                return None
            if record.predecessor == self.start:
                return pos
            pos = record.predecessor

    def path_to(self, pos: P) -> List[P]:
        """
        Zwraca pełną ścieżkę od startu do `pos` (włącznie z oboma).

        Returns:
            List[P]: Ścieżka; pusta lista jeśli `pos` nie był odwiedzony
        """
        if pos not in self._visited:
            return []

        path = [pos]
        current = pos
        while current != self.start:
            current = self._visited[current].predecessor
            path.append(current)

        path.reverse()
        return path

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def distance(self, pos: P) -> Optional[int]:
        """Odległość BFS od startu lub None dla pól nieodwiedzonych."""
        record = self._visited.get(pos)
        return record.distance if record is not None else None

    def visit_record(self, pos: P) -> Optional[VisitRecord[P]]:
        """Pełny zapis odwiedzenia lub None."""
        return self._visited.get(pos)

    def visited(self) -> Iterator[P]:
        """Wszystkie odwiedzone (odkryte) pola w kolejności odkrycia."""
        return iter(self._visited)

    def __contains__(self, pos: object) -> bool:
        return pos in self._visited

    def __len__(self) -> int:
        return len(self._visited)
