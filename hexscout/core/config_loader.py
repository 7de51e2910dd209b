"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Dane są trzymane w plikach YAML:
- defaults.yaml: wartości bazowe (teren, FOV, wyszukiwanie)
- terrain.yaml: definicje typów terenu
- maps.yaml: nazwane mapy ASCII

Logika merge (uzupełniania defaults):
    1. Wczytaj defaults.yaml - zawiera wartości bazowe
    2. Wczytaj konkretną definicję (np. teren "forest")
    3. Dla każdego klucza w defaults, którego brak w definicji:
       - Użyj wartości z defaults
    4. Definicja może nadpisać defaults

Przykład:
    defaults.yaml:
        terrain_defaults:
            passable: true
            opaqueness: 1

    terrain.yaml:
        terrain:
            forest:
                symbol: "T"
                opaqueness: 3   # nadpisuje default
                # passable nie podane -> true z defaults

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> loader.load_terrain("forest").opaqueness
    3
    >>> terrain = loader.load_map("crossroads")
    >>> fov = loader.get_fov_config()
    >>> fov.light
    8
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, List, Optional
import yaml
import copy

from .hex_coord import Direction, HexCoord
from .terrain import TerrainMap, TerrainType
from .types import Light


# Algorytmy przyjmujące report / widen_sides
SHADOW_ALGORITHMS = ("shadow", "shadow_lit")


@dataclass
class FovConfig:
    """
    Ustawienia pola widzenia z sekcji `fov` w defaults.yaml.

    Attributes:
        light: Początkowy budżet światła
        algorithm: Nazwa algorytmu LOS (klucz w LOS_REGISTRY)
        report: "before_opacity" lub "after_opacity" (tylko shadow)
        widen_sides: Czy raportować boczne pola (tylko shadow)
        directions: Kierunki przeglądania
    """
    light: Light = 8
    algorithm: str = "shadow"
    report: Optional[str] = None
    widen_sides: Optional[bool] = None
    directions: List[Direction] = field(default_factory=Direction.all)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FovConfig:
        """Tworzy konfigurację z słownika YAML."""
        directions = data.get("directions", "all")
        if directions == "all":
            dirs = Direction.all()
        else:
            dirs = [Direction[name.upper()] for name in directions]

        return cls(
            light=data.get("light", 8),
            algorithm=data.get("algorithm", "shadow"),
            report=data.get("report"),
            widen_sides=data.get("widen_sides"),
            directions=dirs,
        )

    def los_options(self) -> Dict[str, Any]:
        """
        Parametry przekazywane do get_los() - tylko te ustawione.

        report i widen_sides trafiają wyłącznie do wariantów shadow;
        hybrid nie przyjmuje żadnych parametrów.
        """
        options: Dict[str, Any] = {}
        if self.algorithm.lower() not in SHADOW_ALGORITHMS:
            return options
        if self.report is not None:
            options["report"] = self.report
        if self.widen_sides is not None:
            options["widen_sides"] = self.widen_sides
        return options


@dataclass
class MapDefinition:
    """Nazwana mapa z maps.yaml razem z domyślnym obserwatorem."""
    id: str
    terrain: TerrainMap
    origin: Optional[HexCoord] = None
    description: str = ""


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
        _defaults (Dict): Cache wczytanych defaults
        _terrain (Dict): Cache surowych definicji terenu
        _maps (Dict): Cache surowych definicji map

    Example:
        >>> loader = ConfigLoader("data/")
        >>> loader.load_terrain("wall").passable
        False
    """

    def __init__(self, data_path: str = "data/"):
        """
        Inicjalizuje loader z ścieżką do danych.

        Args:
            data_path: Ścieżka do folderu z plikami YAML
        """
        self.data_path = Path(data_path)
        self._defaults: Optional[Dict] = None
        self._terrain: Optional[Dict] = None
        self._maps: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        filepath = self.data_path / filename
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """
        Zwraca słownik z wartościami domyślnymi.

        Cache'uje wczytany plik - kolejne wywołania są szybkie.
        """
        if self._defaults is None:
            self._defaults = self._load_yaml("defaults.yaml")
        return self._defaults

    def get_terrain_defaults(self) -> Dict:
        """Sekcja terrain_defaults z defaults.yaml."""
        return self.get_defaults().get("terrain_defaults", {})

    def get_search_config(self) -> Dict:
        """Sekcja search z defaults.yaml (np. max_steps)."""
        return self.get_defaults().get("search", {})

    def get_fov_config(self) -> FovConfig:
        """
        Zwraca konfigurację pola widzenia.

        Returns:
            FovConfig: Ustawienia z sekcji `fov`
        """
        return FovConfig.from_dict(self.get_defaults().get("fov", {}))

    # ─────────────────────────────────────────────────────────────────────────
    # ŁADOWANIE TERENU
    # ─────────────────────────────────────────────────────────────────────────

    def _get_all_terrain_raw(self) -> Dict:
        """Zwraca wszystkie surowe definicje terenu."""
        if self._terrain is None:
            data = self._load_yaml("terrain.yaml")
            self._terrain = data.get("terrain", {})
        return self._terrain

    def load_terrain(self, terrain_id: str) -> TerrainType:
        """
        Wczytuje typ terenu z uzupełnionymi defaults.

        Args:
            terrain_id: ID terenu (klucz w terrain.yaml)

        Returns:
            TerrainType: Pełna definicja terenu

        Raises:
            KeyError: Jeśli teren nie istnieje
        """
        terrain = self._get_all_terrain_raw()

        if terrain_id not in terrain:
            raise KeyError(f"Terrain '{terrain_id}' not found in terrain.yaml")

        result = self._deep_merge(self.get_terrain_defaults(), terrain[terrain_id])
        return TerrainType.from_dict(terrain_id, result)

    def load_all_terrain(self) -> Dict[str, TerrainType]:
        """Wczytuje wszystkie typy terenu: terrain_id -> TerrainType."""
        return {tid: self.load_terrain(tid) for tid in self._get_all_terrain_raw()}

    # ─────────────────────────────────────────────────────────────────────────
    # ŁADOWANIE MAP
    # ─────────────────────────────────────────────────────────────────────────

    def _get_all_maps_raw(self) -> Dict:
        """Zwraca wszystkie surowe definicje map."""
        if self._maps is None:
            data = self._load_yaml("maps.yaml")
            self._maps = data.get("maps", {})
        return self._maps

    def get_map_ids(self) -> list[str]:
        """Zwraca listę wszystkich ID map."""
        return list(self._get_all_maps_raw().keys())

    def load_map_definition(self, map_id: str) -> MapDefinition:
        """
        Wczytuje mapę razem z metadanymi (origin, opis).

        Raises:
            KeyError: Jeśli mapa nie istnieje
            ValueError: Jeśli mapa zawiera nieznany symbol
                        lub origin leży poza mapą
        """
        maps = self._get_all_maps_raw()

        if map_id not in maps:
            raise KeyError(f"Map '{map_id}' not found in maps.yaml")

        data = maps[map_id]
        terrain = TerrainMap.from_rows(
            list(data["rows"]),
            self.load_all_terrain(),
            default_terrain=data.get("default_terrain", "floor"),
        )

        origin = None
        if "origin" in data:
            q, r = data["origin"]
            origin = HexCoord(int(q), int(r))
            if not terrain.is_valid(origin):
                raise ValueError(f"Origin {origin} of map '{map_id}' is outside the map")

        return MapDefinition(
            id=map_id,
            terrain=terrain,
            origin=origin,
            description=data.get("description", ""),
        )

    def load_map(self, map_id: str) -> TerrainMap:
        """Wczytuje samą mapę terenu."""
        return self.load_map_definition(map_id).terrain

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """
        Czyści cache i wymusza ponowne wczytanie plików.

        Przydatne podczas edycji plików YAML w runtime.
        """
        self._defaults = None
        self._terrain = None
        self._maps = None
