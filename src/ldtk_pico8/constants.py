"""PICO-8 cartridge capacities and section layouts."""

# Reference: PICO-8 memory (https://pico-8.fandom.com/wiki/Memory)
# Usage                 | Address Range  | Notes
# ----------------------|----------------|-------------------------------------------
# Sprite sheet (gfx)    | 0x0000-0x0FFF  | sprites 0-127, 4bpp, 128x64 px
# Shared gfx / map      | 0x1000-0x1FFF  | sprites 128-255 == map rows 32-63
# Map                   | 0x2000-0x2FFF  | map rows 0-31, 1 byte per cell
# Sprite flags (gff)    | 0x3000-0x30FF  | 1 byte per sprite

from __future__ import annotations

CELL_SIZE = 8

MAP_WIDTH_CELLS = 128
MAP_HEIGHT_CELLS = 64
MAP_WIDTH_PX = MAP_WIDTH_CELLS * CELL_SIZE
MAP_HEIGHT_PX = MAP_HEIGHT_CELLS * CELL_SIZE
MAP_NIBBLES = 2
MAP_ROW_CHARS = MAP_WIDTH_CELLS * MAP_NIBBLES

# Map rows from this index onward live in the lower half of the sprite sheet.
MAP_SHARED_ROWS_FROM = 32

SPRITE_WIDTH_CELLS = 16
SPRITE_HEIGHT_CELLS = 16
SPRITE_WIDTH_PX = SPRITE_WIDTH_CELLS * CELL_SIZE
SPRITE_HEIGHT_PX = SPRITE_HEIGHT_CELLS * CELL_SIZE
GFX_NIBBLES = 1
GFX_ROW_CHARS = SPRITE_WIDTH_PX * GFX_NIBBLES
GFX_MAX_CHARS = SPRITE_WIDTH_PX * SPRITE_HEIGHT_PX * GFX_NIBBLES

# Sprite sheet pixel rows from this index onward alias the shared map rows.
GFX_SHARED_ROWS_FROM = 64

# Sprite flags are stored as 2 rows of 128 flags, 2 digits each.
FLAGS_WIDTH = 128
FLAGS_NIBBLES = 2
FLAGS_ROW_CHARS = FLAGS_WIDTH * FLAGS_NIBBLES
MAX_SPRITE_FLAGS = 8

PALETTE_SIZE = 16

CART_HEADER = "pico-8 cartridge // http://www.pico-8.com"
CART_VERSION = 41

LDTK_PALT_FIELD = "pico8_palt"
