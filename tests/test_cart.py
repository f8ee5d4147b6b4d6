from ldtk_pico8.cart import build_viewer_script, write_p8_cart

HEADER = "pico-8 cartridge // http://www.pico-8.com\nversion 41"


def test_sections_in_fixed_order():
    cart = write_p8_cart(gfx=["a"], gff=["c"], map=["b"], lua=["x", "y"])

    assert cart == HEADER + "\n__lua__\nx\ny\n__gfx__\na\n__gff__\nc\n__map__\nb"


def test_empty_sections_are_omitted():
    assert write_p8_cart(gfx=[], gff=None, map=["b"]) == HEADER + "\n__map__\nb"
    assert write_p8_cart() == HEADER


def test_viewer_script_default_transparency():
    script = build_viewer_script(0)

    assert " cls(0)" in script
    assert not any("palt" in line for line in script)
    assert script[-1] == "end"


def test_viewer_script_custom_transparency():
    script = build_viewer_script(5)

    draw = script[script.index("function _draw()") :]
    assert draw == [
        "function _draw()",
        " cls(5)",
        " palt(0,false)",
        " palt(5,true)",
        " camera(cx,cy)",
        " map(0,0,0,0,128,64)",
        " palt(0)",
        "end",
    ]
