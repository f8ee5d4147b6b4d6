import pytest

from ldtk_pico8.converter import flat_tiles_to_map_lines
from ldtk_pico8.errors import ConfigurationError, OverlapConflictError
from ldtk_pico8.merge import OverlapPolicy, map_lines_as_gfx, merge_shared_map_into_gfx
from ldtk_pico8.tiles import FlatTiles

GFX_ROW = "1" * 128
MAP_ROW = "01" * 128
SHARED_MAP_ROW = "ab" + "0" * 254


def gfx(rows):
    return [GFX_ROW] * rows


def map_with_shared(shared_rows=1):
    return [MAP_ROW] * 32 + [SHARED_MAP_ROW] * shared_rows


def test_policy_parse():
    assert OverlapPolicy.parse("error") is OverlapPolicy.ERROR
    assert OverlapPolicy.parse("MAP") is OverlapPolicy.MAP
    assert OverlapPolicy.parse(OverlapPolicy.SPRITE) is OverlapPolicy.SPRITE
    with pytest.raises(ConfigurationError):
        OverlapPolicy.parse("both")


def test_map_row_becomes_two_swapped_gfx_rows():
    assert map_lines_as_gfx([SHARED_MAP_ROW]) == ["ba" + "0" * 126, "0" * 128]


@pytest.mark.parametrize("policy", ["error", "map", "sprite"])
def test_no_shared_map_rows_leaves_inputs_unchanged(policy):
    gfx_lines = gfx(100)
    map_lines = [MAP_ROW] * 5 + ["00" * 128]

    result = merge_shared_map_into_gfx(gfx_lines, map_lines, policy)

    assert result.gfx_lines == gfx_lines
    assert result.map_lines == map_lines
    assert len(result.diagnostics) == 0


def test_trailing_empty_map_rows_do_not_count_as_overlap():
    map_lines = [MAP_ROW] * 32 + ["0" * 256] * 4

    result = merge_shared_map_into_gfx(gfx(100), map_lines, "error")

    assert len(result.gfx_lines) == 100
    assert result.map_lines == [MAP_ROW] * 32
    assert len(result.diagnostics) == 0


def test_zero_tile_on_first_shared_row_stays_out_of_the_map_section():
    # sprite 1 at the end of row 31, sprite 0 early on row 32
    flat = FlatTiles(cells={31 * 128 + 127: 1, 32 * 128 + 5: 0})
    map_lines = flat_tiles_to_map_lines(flat)
    assert len(map_lines) == 33

    result = merge_shared_map_into_gfx(gfx(128), map_lines, "error")

    assert len(result.map_lines) == 32
    assert result.map_lines[31].endswith("01")
    assert result.gfx_lines == gfx(128)


def test_error_policy_reports_row_counts():
    with pytest.raises(OverlapConflictError) as excinfo:
        merge_shared_map_into_gfx(gfx(70), map_with_shared(3), "error")

    assert excinfo.value.gfx_rows == 6
    assert excinfo.value.map_rows == 3
    assert "6 rows of shared pixel space" in str(excinfo.value)
    assert "3 rows of shared map space" in str(excinfo.value)


def test_error_policy_merges_when_sprites_leave_shared_space_free():
    result = merge_shared_map_into_gfx(gfx(10), map_with_shared(), "error")

    assert len(result.gfx_lines) == 65
    assert result.gfx_lines[:10] == gfx(10)
    assert result.gfx_lines[10:64] == ["0" * 128] * 54
    assert result.gfx_lines[64] == "ba" + "0" * 126
    assert result.map_lines == [MAP_ROW] * 32


def test_map_policy_overwrites_shared_sprite_rows():
    result = merge_shared_map_into_gfx(gfx(70), map_with_shared(), OverlapPolicy.MAP)

    assert len(result.gfx_lines) == 70
    assert result.gfx_lines[63] == GFX_ROW
    assert result.gfx_lines[64] == "ba" + "0" * 126
    assert result.gfx_lines[65] == "0" * 128
    assert result.gfx_lines[66:] == gfx(4)
    assert result.map_lines == [MAP_ROW] * 32
    assert result.diagnostics.messages("info")


def test_sprite_policy_keeps_sprite_rows():
    result = merge_shared_map_into_gfx(gfx(70), map_with_shared(4), OverlapPolicy.SPRITE)

    # map rows 32-34 sit under sprite rows 64-69; row 35 lands on 70-71
    assert result.gfx_lines[:70] == gfx(70)
    assert result.gfx_lines[70] == "ba" + "0" * 126
    assert len(result.gfx_lines) == 71
    assert result.map_lines == [MAP_ROW] * 32


def test_sprite_policy_pads_short_sprite_sheet():
    result = merge_shared_map_into_gfx(gfx(10), map_with_shared(), "sprite")

    assert len(result.gfx_lines) == 65
    assert result.gfx_lines[64] == "ba" + "0" * 126


def test_merged_map_is_trimmed():
    map_lines = ["0" * 256] * 32 + [SHARED_MAP_ROW]

    result = merge_shared_map_into_gfx([], map_lines, "map")

    assert result.map_lines == []
    assert len(result.gfx_lines) == 65


@pytest.mark.parametrize("policy", ["map", "sprite"])
def test_non_error_policies_never_fail(policy):
    result = merge_shared_map_into_gfx(gfx(128), map_with_shared(32), policy)

    assert 0 < len(result.gfx_lines) <= 128
