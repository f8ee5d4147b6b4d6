"""Read the parts of an LDtk project file the cart conversion needs.

Only the first level is used. Layers are read in LDtk's visual order (the
first layer is drawn on top). See https://ldtk.io/json/ for the schema.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from .constants import (
    CELL_SIZE,
    LDTK_PALT_FIELD,
    MAP_HEIGHT_CELLS,
    MAP_HEIGHT_PX,
    MAP_WIDTH_CELLS,
    MAP_WIDTH_PX,
)
from .diagnostics import Diagnostics
from .errors import ConfigurationError, ResourceLoadError

TILES = "Tiles"
INT_GRID = "IntGrid"
AUTO_LAYER = "AutoLayer"
ENTITIES = "Entities"

GRID_LAYER_TYPES = (TILES, INT_GRID, AUTO_LAYER)
LAYER_TYPES = GRID_LAYER_TYPES + (ENTITIES,)


@dataclass(frozen=True)
class TilePlacement:
    """A tile drawn at pixel ``px`` using the tileset pixel ``src``."""

    px: Tuple[int, int]
    src: Tuple[int, int]
    tileset_uid: Optional[int] = None
    flip: int = 0


@dataclass(frozen=True)
class Layer:
    identifier: str
    type: str
    uid: Optional[int] = None
    visible: bool = True
    placements: Tuple[TilePlacement, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Layer":
        layer_type = data.get("__type", "")
        tileset_uid = data.get("__tilesetDefUid")
        placements: List[TilePlacement] = []

        if layer_type in GRID_LAYER_TYPES:
            key = "gridTiles" if layer_type == TILES else "autoLayerTiles"
            for tile in data.get(key) or []:
                placements.append(
                    TilePlacement(
                        px=_pair(tile["px"]),
                        src=_pair(tile["src"]),
                        tileset_uid=tileset_uid,
                        flip=int(tile.get("f", 0)),
                    )
                )
        elif layer_type == ENTITIES:
            for entity in data.get("entityInstances") or []:
                tile = entity.get("__tile")
                if not tile:
                    continue
                placements.append(
                    TilePlacement(
                        px=_pair(entity["px"]),
                        src=(int(tile["x"]), int(tile["y"])),
                        tileset_uid=tile.get("tilesetUid"),
                    )
                )

        return cls(
            identifier=data.get("__identifier", ""),
            type=layer_type,
            uid=data.get("layerDefUid"),
            visible=bool(data.get("visible", True)),
            placements=tuple(placements),
        )


@dataclass(frozen=True)
class Level:
    identifier: str
    px_wid: int
    px_hei: int
    layers: Tuple[Layer, ...] = ()
    fields: Mapping[str, Tuple[str, Any]] = field(default_factory=dict)

    @property
    def c_wid(self) -> int:
        return -(-self.px_wid // CELL_SIZE)

    @property
    def c_hei(self) -> int:
        return -(-self.px_hei // CELL_SIZE)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Level":
        fields = {
            f["__identifier"]: (f.get("__type"), f.get("__value"))
            for f in data.get("fieldInstances") or []
        }
        return cls(
            identifier=data.get("identifier", ""),
            px_wid=int(data.get("pxWid", 0)),
            px_hei=int(data.get("pxHei", 0)),
            layers=tuple(Layer.from_dict(layer) for layer in data.get("layerInstances") or []),
            fields=fields,
        )


@dataclass(frozen=True)
class EnumTag:
    name: str
    tile_ids: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Tileset:
    uid: int
    identifier: str = ""
    rel_path: Optional[str] = None
    grid_size: int = 8
    c_wid: int = 0
    c_hei: int = 0
    enum_tags: Tuple[EnumTag, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Tileset":
        return cls(
            uid=int(data["uid"]),
            identifier=data.get("identifier", ""),
            rel_path=data.get("relPath"),
            grid_size=int(data.get("tileGridSize", 0)),
            c_wid=int(data.get("__cWid", 0)),
            c_hei=int(data.get("__cHei", 0)),
            enum_tags=tuple(
                EnumTag(name=tag.get("enumValueId", ""), tile_ids=tuple(tag.get("tileIds") or []))
                for tag in data.get("enumTags") or []
            ),
        )


@dataclass(frozen=True)
class LdtkProject:
    path: Path
    levels: Tuple[Level, ...] = ()
    tilesets: Mapping[int, Tileset] = field(default_factory=dict)

    @property
    def base_dir(self) -> Path:
        return self.path.parent

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: str | Path) -> "LdtkProject":
        try:
            tilesets = [Tileset.from_dict(t) for t in (data.get("defs") or {}).get("tilesets") or []]
            levels = tuple(Level.from_dict(level) for level in data.get("levels") or [])
        except (KeyError, TypeError, ValueError) as exc:
            raise ResourceLoadError(path, f"Malformed LDtk project {path}: {exc}") from exc
        return cls(
            path=Path(path),
            levels=levels,
            tilesets={t.uid: t for t in tilesets},
        )


def _pair(value: Any) -> Tuple[int, int]:
    x, y = value
    return int(x), int(y)


def load_ldtk_project(path: str | Path) -> LdtkProject:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ResourceLoadError(path, f"Cannot load file {path}") from exc
    except OSError as exc:
        raise ResourceLoadError(path, f"Failed to read {path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ResourceLoadError(path, f"File is not valid JSON: {path}") from exc
    if not isinstance(data, dict):
        raise ResourceLoadError(path, f"File is not an LDtk project: {path}")

    return LdtkProject.from_dict(data, path)


# ---------------------------------------------------------------------------
# Level selection
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LevelSelection:
    level: Level
    layers: Tuple[Layer, ...]
    diagnostics: Diagnostics


def select_level(project: LdtkProject) -> LevelSelection:
    """Pick the first level and its usable layers."""
    if not project.levels:
        raise ConfigurationError(f"Project {project.path} has no levels")

    diagnostics = Diagnostics()
    if len(project.levels) > 1:
        diagnostics.warn("Detected more than one level. Only the first level will be processed.")

    level = project.levels[0]
    if level.px_wid > MAP_WIDTH_PX or level.px_hei > MAP_HEIGHT_PX:
        diagnostics.warn(
            f"Level ({level.c_wid}x{level.c_hei}) will be clipped to the PICO-8 map "
            f"({MAP_WIDTH_CELLS}x{MAP_HEIGHT_CELLS})."
        )

    return LevelSelection(
        level=level,
        layers=visible_layers(level, diagnostics),
        diagnostics=diagnostics,
    )


def visible_layers(level: Level, diagnostics: Diagnostics) -> Tuple[Layer, ...]:
    """Visible layers that place at least one tile, in LDtk's visual order."""
    layers = []
    for layer in level.layers:
        if not layer.visible:
            continue
        if layer.type not in LAYER_TYPES:
            diagnostics.warn(f'Unexpected layer type "{layer.type}", skipping. [uid {layer.uid}]')
            continue
        if layer.placements:
            layers.append(layer)
    return tuple(layers)


def extract_palt(level: Level) -> Optional[int]:
    """The transparent color from the level's ``pico8_palt`` Int field."""
    field_type, value = level.fields.get(LDTK_PALT_FIELD, (None, None))
    if field_type != "Int" or value is None:
        return None
    return int(value)
