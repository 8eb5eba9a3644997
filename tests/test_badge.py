import html
import re

import pytest

from badgify.badge import (
    FOR_THE_BADGE_FONT_SIZE,
    FOR_THE_BADGE_PADDING,
    BadgeDimensions,
    BadgeOptions,
    BadgeStyle,
    _num,
    calculate_dimensions,
    escape_xml,
    estimate_text_width,
    generate_badge,
    generate_flat_badge,
    generate_flat_square_badge,
    generate_for_the_badge,
    generate_plastic_badge,
    resolve_dimensions,
    shade_color,
)

HEX6 = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _declared_size(svg: str) -> tuple[str, str]:
    match = re.match(r'<svg xmlns="http://www.w3.org/2000/svg" width="([^"]+)" height="([^"]+)">', svg)
    assert match is not None
    return match.group(1), match.group(2)


class TestEstimateTextWidth:
    def test_empty_string(self):
        assert estimate_text_width("", 12) == 0
        assert estimate_text_width("", 24) == 0

    def test_linear_in_length(self):
        assert estimate_text_width("abcd", 12) == pytest.approx(4 * 12 * 0.55)

    def test_linear_in_font_size(self):
        assert estimate_text_width("Build", 24) == pytest.approx(2 * estimate_text_width("Build", 12))

    def test_monotone_in_length(self):
        widths = [estimate_text_width("x" * n, 11) for n in range(20)]
        assert widths == sorted(widths)

    def test_ignores_glyph_shapes(self):
        assert estimate_text_width("iiii", 12) == estimate_text_width("WWWW", 12)


class TestCalculateDimensions:
    def test_defaults(self):
        dims = calculate_dimensions("Build", "Passing")
        assert dims.height == 24
        assert dims.padding == 6
        assert dims.label_width == pytest.approx(5 * 12 * 0.55 + 12)
        assert dims.value_width == pytest.approx(7 * 12 * 0.55 + 12)

    def test_empty_strings_reserve_padding(self):
        dims = calculate_dimensions("", "", 12, 6)
        assert dims.label_width == 12
        assert dims.value_width == 12

    def test_total_width(self):
        dims = calculate_dimensions("a", "bb", 10, 4)
        assert dims.total_width == dims.label_width + dims.value_width

    def test_zero_padding(self):
        dims = calculate_dimensions("", "", 12, 0)
        assert dims.label_width == 0
        assert dims.height == 12

    def test_negative_padding_does_not_raise(self):
        dims = calculate_dimensions("ab", "cd", 10, -3)
        assert dims.height == 4

    def test_is_frozen(self):
        dims = calculate_dimensions("a", "b")
        assert isinstance(dims, BadgeDimensions)
        with pytest.raises(AttributeError):
            dims.height = 99


class TestShadeColor:
    def test_darken_known_value(self):
        assert shade_color("#4CAF50", -10) == "#339637"

    def test_darken_never_raises_channels(self):
        result = shade_color("#4CAF50", -10)
        assert HEX6.match(result)
        original = [int("4CAF50"[i:i + 2], 16) for i in (0, 2, 4)]
        shaded = [int(result[1 + i:3 + i], 16) for i in (0, 2, 4)]
        assert all(s <= o for s, o in zip(shaded, original))

    def test_lighten(self):
        assert shade_color("#555555", 10) == "#6f6f6f"

    def test_clamps_high(self):
        assert shade_color("#FFFFFF", 50) == "#ffffff"

    def test_clamps_low(self):
        assert shade_color("#101010", -100) == "#000000"

    def test_half_rounds_up(self):
        # 2.55 * -10 = -25.5 rounds to -25
        assert shade_color("#646464", -10) == "#4b4b4b"

    def test_without_hash(self):
        assert shade_color("555555", -10) == "#3c3c3c"

    def test_short_hex_parsed_as_integer(self):
        assert shade_color("#555", -10) == "#00003c"

    @pytest.mark.parametrize("percent", [-100, -20, -15, 0, 15, 100])
    def test_always_valid_hex(self, percent):
        assert HEX6.match(shade_color("#2196F3", percent))

    def test_empty_string_shades_from_black(self):
        assert shade_color("", -10) == "#000000"
        assert shade_color("", 10) == "#1a1a1a"

    def test_named_color_shades_from_black(self):
        assert shade_color("red", -10) == "#000000"

    def test_non_hex_digits_shade_from_black(self):
        assert shade_color("#GGGGGG", -10) == "#000000"

    def test_reads_leading_hex_digits_only(self):
        # "12zz" parses as 0x12
        assert shade_color("12zz", 10) == "#1a1a2c"
        assert shade_color("#4CAF50zz", -10) == "#339637"

    def test_wide_value_wraps_to_32_bits(self):
        # 0xffffffff is -1 as a signed 32-bit integer
        assert shade_color("#ffffffff", -10) == "#00e6e6"


class TestEscapeXml:
    def test_all_reserved_characters(self):
        assert escape_xml("&<>\"'") == "&amp;&lt;&gt;&quot;&apos;"

    def test_build_and_test(self):
        escaped = escape_xml("Build & Test <v1>")
        assert escaped == "Build &amp; Test &lt;v1&gt;"
        assert "<" not in escaped and ">" not in escaped
        assert "& " not in escaped
        assert html.unescape(escaped) == "Build & Test <v1>"

    def test_ampersand_escaped_first(self):
        assert escape_xml("<") == "&lt;"
        assert escape_xml("&lt;") == "&amp;lt;"

    def test_plain_text_unchanged(self):
        assert escape_xml("passing") == "passing"


class TestBadgeStyle:
    def test_canonical_names(self):
        assert BadgeStyle.parse("flat") is BadgeStyle.FLAT
        assert BadgeStyle.parse("flat-square") is BadgeStyle.FLAT_SQUARE
        assert BadgeStyle.parse("plastic") is BadgeStyle.PLASTIC
        assert BadgeStyle.parse("for-the-badge") is BadgeStyle.FOR_THE_BADGE

    def test_aliases(self):
        assert BadgeStyle.parse("plain") is BadgeStyle.FLAT
        assert BadgeStyle.parse("square") is BadgeStyle.FLAT_SQUARE
        assert BadgeStyle.parse("rounded") is BadgeStyle.PLASTIC
        assert BadgeStyle.parse("large-bold") is BadgeStyle.FOR_THE_BADGE

    def test_unknown_falls_back_to_flat(self):
        assert BadgeStyle.parse("unknown-style") is BadgeStyle.FLAT
        assert BadgeStyle.parse(None) is BadgeStyle.FLAT
        assert BadgeStyle.parse(42) is BadgeStyle.FLAT

    def test_enum_member_passthrough(self):
        assert BadgeStyle.parse(BadgeStyle.PLASTIC) is BadgeStyle.PLASTIC

    def test_case_and_whitespace_are_significant(self):
        assert BadgeStyle.parse("Plastic") is BadgeStyle.FLAT
        assert BadgeStyle.parse(" flat-square") is BadgeStyle.FLAT
        assert BadgeStyle.parse("FOR-THE-BADGE") is BadgeStyle.FLAT
        assert BadgeStyle.parse("Rounded") is BadgeStyle.FLAT


class TestBadgeOptions:
    def test_defaults(self):
        opts = BadgeOptions(label="a", value="b")
        assert opts.color == "#4CAF50"
        assert opts.label_color == "#555555"
        assert opts.style == "flat"
        assert opts.font_size == 12
        assert opts.padding == 6
        assert opts.border_radius == 0

    def test_from_dict_camel_case(self):
        opts = BadgeOptions.from_dict({
            "label": "a", "value": "b", "labelColor": "#111111",
            "fontSize": 14, "borderRadius": 4,
        })
        assert opts.label_color == "#111111"
        assert opts.font_size == 14
        assert opts.border_radius == 4

    def test_from_dict_none_uses_default(self):
        opts = BadgeOptions.from_dict({"label": "a", "value": "b", "color": None, "padding": None})
        assert opts.color == "#4CAF50"
        assert opts.padding == 6


class TestNumberFormatting:
    def test_integral_float(self):
        assert _num(33.0) == "33"

    def test_fraction(self):
        assert _num(16.5) == "16.5"

    def test_int(self):
        assert _num(24) == "24"


class TestStyleRenderers:
    def test_flat_has_gradients(self):
        svg = generate_flat_badge("Build", "Passing", "#555555", "#4CAF50", 12, 6)
        assert 'id="grad1"' in svg
        assert 'id="grad2"' in svg
        assert "stop-color:#339637" in svg
        assert 'font-weight="bold"' in svg
        assert 'opacity="0.9"' in svg

    def test_flat_square_has_no_gradient(self):
        svg = generate_flat_square_badge("Build", "Passing", "#555555", "#4CAF50", 12, 6)
        assert "linearGradient" not in svg
        assert 'fill="#555555"' in svg
        assert 'fill="#4CAF50"' in svg
        assert "rx=" not in svg

    def test_plastic_default_radius(self):
        svg = generate_plastic_badge("Build", "Passing", "#555555", "#4CAF50", 12, 6)
        assert svg.count('rx="3"') == 2
        assert 'id="grad1p"' in svg
        assert f"stop-color:{shade_color('#4CAF50', -15)}" in svg

    def test_plastic_custom_radius(self):
        svg = generate_plastic_badge("Build", "Passing", "#555555", "#4CAF50", 12, 6, 7)
        assert svg.count('rx="7"') == 2

    def test_for_the_badge(self):
        svg = generate_for_the_badge("Build", "Passing", "#555555", "#4CAF50")
        assert "feDropShadow" in svg
        assert svg.count('filter="url(#shadow)"') == 2
        assert svg.count('rx="3"') == 2
        assert 'font-weight="900"' in svg
        assert 'font-size="18"' in svg
        assert f"stop-color:{shade_color('#4CAF50', -20)}" in svg

    def test_text_positions(self):
        svg = generate_flat_square_badge("ab", "cd", "#555555", "#4CAF50", 12, 6)
        dims = calculate_dimensions("ab", "cd", 12, 6)
        assert f'x="{_num(dims.label_width / 2)}"' in svg
        assert f'x="{_num(dims.label_width + dims.value_width / 2)}"' in svg
        assert f'y="{_num(dims.height / 2 + 12 / 3)}"' in svg

    def test_well_formed_document(self):
        svg = generate_flat_badge("a", "b", "#555555", "#4CAF50", 12, 6)
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")


class TestGenerateBadge:
    def test_plain_geometry(self):
        svg = generate_badge({"label": "Build", "value": "Passing", "style": "flat"})
        dims = calculate_dimensions("Build", "Passing", 12, 6)
        width, height = _declared_size(svg)
        assert width == _num(dims.label_width + dims.value_width)
        assert height == "24"

    def test_custom_size_geometry(self):
        svg = generate_badge({"label": "x", "value": "yz", "fontSize": 20, "padding": 3})
        dims = calculate_dimensions("x", "yz", 20, 3)
        assert _declared_size(svg) == (_num(dims.total_width), "26")

    def test_deterministic(self):
        opts = {"label": "Build", "value": "Passing", "style": "flat"}
        assert generate_badge(opts) == generate_badge(opts)

    def test_unknown_style_matches_plain(self):
        base = {"label": "Build", "value": "Passing", "color": "#f44336"}
        assert generate_badge({**base, "style": "unknown-style"}) == generate_badge({**base, "style": "plain"})
        assert generate_badge({**base, "style": "unknown-style"}) == generate_badge({**base, "style": "flat"})

    def test_for_the_badge_ignores_size_options(self):
        svg = generate_badge({
            "label": "Build", "value": "Passing", "style": "for-the-badge",
            "fontSize": 8, "padding": 0,
        })
        dims = calculate_dimensions("Build", "Passing", 18, 12)
        assert _declared_size(svg) == (_num(dims.total_width), "42")

    def test_plastic_uses_option_radius(self):
        svg = generate_badge({"label": "a", "value": "b", "style": "plastic", "borderRadius": 5})
        assert svg.count('rx="5"') == 2

    def test_plastic_unset_radius_is_square(self):
        svg = generate_badge(BadgeOptions(label="a", value="b", style="plastic"))
        assert svg.count('rx="0"') == 2

    def test_accepts_options_object(self):
        opts = BadgeOptions(label="a", value="b", style="flat-square", color="#123456")
        assert 'fill="#123456"' in generate_badge(opts)

    def test_escapes_text(self):
        svg = generate_badge({"label": "<script>", "value": "a & b"})
        assert "<script>" not in svg
        assert "&lt;script&gt;" in svg
        assert "a &amp; b" in svg

    def test_empty_strings(self):
        svg = generate_badge({"label": "", "value": ""})
        assert _declared_size(svg) == ("24", "24")

    def test_degenerate_numbers_do_not_raise(self):
        for style in BadgeStyle:
            svg = generate_badge({
                "label": "a", "value": "b", "style": style.value, "fontSize": 0, "padding": -5,
            })
            assert svg.startswith("<svg")

    def test_label_color_applied(self):
        svg = generate_badge({"label": "a", "value": "b", "labelColor": "#123456"})
        assert "stop-color:#123456" in svg

    def test_non_string_label_raises(self):
        with pytest.raises(TypeError):
            generate_badge({"label": None, "value": "b"})

    @pytest.mark.parametrize("color", ["red", "", "#GGGGGG", "#555"])
    def test_malformed_colors_render(self, color):
        for style in BadgeStyle:
            svg = generate_badge({
                "label": "a", "value": "b", "style": style.value,
                "color": color, "labelColor": color,
            })
            assert svg.startswith("<svg")
            assert svg.endswith("</svg>")


class TestResolveDimensions:
    def test_for_the_badge_constants(self):
        assert FOR_THE_BADGE_FONT_SIZE == 18
        assert FOR_THE_BADGE_PADDING == 12

    def test_for_the_badge_overrides_size(self):
        opts = BadgeOptions(label="Build", value="Passing", style="for-the-badge", font_size=8, padding=0)
        dims = resolve_dimensions(opts)
        assert dims == calculate_dimensions("Build", "Passing", FOR_THE_BADGE_FONT_SIZE, FOR_THE_BADGE_PADDING)

    def test_other_styles_use_options(self):
        opts = BadgeOptions(label="Build", value="Passing", style="plastic", font_size=20, padding=3)
        assert resolve_dimensions(opts) == calculate_dimensions("Build", "Passing", 20, 3)

    @pytest.mark.parametrize("style", ["flat", "flat-square", "plastic", "for-the-badge", "Plastic"])
    def test_matches_rendered_size(self, style):
        opts = BadgeOptions(label="Coverage", value="87%", style=style, font_size=14, padding=4)
        dims = resolve_dimensions(opts)
        width, _ = _declared_size(generate_badge(opts))
        assert width == _num(dims.total_width)
