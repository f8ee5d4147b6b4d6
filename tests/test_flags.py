from ldtk_pico8.flags import encode_enum_flags, flags_to_lines
from ldtk_pico8.geometry import Rect
from ldtk_pico8.ldtk import EnumTag


def tags(*entries):
    return [EnumTag(name, tuple(ids)) for name, ids in entries]


def test_no_tags_gives_all_zero_flags():
    result = encode_enum_flags([], 16, 16)

    assert result.values == (0,) * 256
    assert flags_to_lines(result.values) == []


def test_bits_are_combined_per_tile():
    result = encode_enum_flags(
        tags(("Ground", [1, 2]), ("Spikes", []), ("Grass", [2, 4]), ("Player", [5])),
        16,
        16,
    )

    assert result.values[:7] == (0, 1, 5, 0, 4, 8, 0)


def test_bits_zero_and_three_give_nine():
    result = encode_enum_flags(
        tags(("Solid", [7]), ("A", []), ("B", []), ("Ladder", [7])), 16, 16
    )

    assert result.values[7] == 9


def test_only_first_eight_tags_are_used():
    entries = [(f"Tag{i}", [0]) for i in range(10)]

    result = encode_enum_flags(tags(*entries), 16, 16)

    assert result.values[0] == 0xFF
    assert len(result.diagnostics.warnings) == 1
    assert "Tag8, Tag9" in result.diagnostics.warnings[0]


def test_wide_tileset_is_clipped_to_sprite_sheet():
    result = encode_enum_flags(tags(("Solid", [20, 33])), 32, 16)

    assert result.width == 16
    assert result.values[17] == 1
    assert sum(result.values) == 1


def test_small_tileset_uses_its_own_width():
    result = encode_enum_flags(tags(("Solid", [5])), 4, 2)

    assert (result.width, result.height) == (4, 2)
    assert result.values == (0, 0, 0, 0, 0, 1, 0, 0)


def test_clip_only_checks_far_edges():
    result = encode_enum_flags(tags(("Solid", [0, 5])), 4, 4, Rect(x=1, y=1, width=3, height=3))

    # tile 5 is (1, 1), the clip origin
    assert result.values[0] == 1
    assert (result.width, result.height) == (3, 3)


def test_flags_to_lines_uses_full_sheet_width():
    values = [0] * 256
    values[0] = 1
    values[200] = 0x81

    lines = flags_to_lines(values)

    assert len(lines) == 2
    assert all(len(line) == 256 for line in lines)
    assert lines[0].startswith("01")
    assert lines[1][(200 - 128) * 2 : (200 - 128) * 2 + 2] == "81"


def test_flags_from_narrow_tileset_pack_into_one_row():
    lines = flags_to_lines(encode_enum_flags(tags(("Solid", [5])), 4, 2).values)

    assert lines == ["00" * 5 + "01" + "0" * 244]
