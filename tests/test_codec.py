import pytest

from ldtk_pico8.codec import (
    decode_values,
    encode_values,
    join_lines,
    split_lines,
    swap_nibble_pairs,
    to_hex,
    trim_data,
    trim_lines,
)


def test_to_hex_pads_and_wraps():
    assert to_hex(5, 2) == "05"
    assert to_hex(255, 2) == "ff"
    assert to_hex(256, 2) == "00"
    assert to_hex(0x1AB, 2) == "ab"
    assert to_hex(17, 1) == "1"


def test_encode_values_replaces_missing_and_negative():
    assert encode_values([1, None, -3, 15], 1) == "100f"
    assert encode_values([None, -1, 4], 2, default=2) == "020204"
    assert encode_values([None], 1, default=-5) == "0"
    assert encode_values([], 2) == ""


def test_decode_values():
    assert decode_values("0a1f", 2) == [10, 31]
    assert decode_values("f0", 1) == [15, 0]


def test_decode_rejects_bad_input():
    with pytest.raises(ValueError):
        decode_values("abc", 2)
    with pytest.raises(ValueError):
        decode_values("zz", 1)


def test_encode_decode_round_trip():
    values = [0, 1, 0x7F, 0xFF, 0x10]
    assert decode_values(encode_values(values, 2), 2) == values


def test_split_pads_partial_final_row():
    assert split_lines("abcde", 2) == ["ab", "cd", "e0"]
    assert split_lines("", 4) == []


def test_split_join_round_trip():
    rows = ["1234", "5678", "0000"]
    assert split_lines(join_lines(rows), 4) == rows


def test_trim_removes_only_whole_trailing_runs():
    assert trim_data("12" + "0" * 8, 4) == "12"
    assert trim_data("1000", 4) == "1000"
    assert trim_data("100000", 4) == "10"
    assert trim_data("0" * 8, 4) == ""


def test_trim_lines_keeps_inner_zero_rows():
    assert trim_lines(["1000", "0000", "0000"], 4) == ["1000"]
    assert trim_lines(["0000", "1000", "0000"], 4) == ["0000", "1000"]
    assert trim_lines(["0000"], 4) == []


def test_trim_is_idempotent():
    rows = ["0000", "00a0", "0000"]
    once = trim_lines(rows, 4)
    assert trim_lines(once, 4) == once


def test_swap_nibble_pairs():
    assert swap_nibble_pairs("12ab") == "21ba"
    assert swap_nibble_pairs("") == ""
    assert swap_nibble_pairs(swap_nibble_pairs("0f1e2d")) == "0f1e2d"
