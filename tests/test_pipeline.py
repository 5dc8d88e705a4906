"""End-to-end tests for convert() and the formatter."""

import pytest

from twcss_to_sass.core.formatter import fix_apply_directives, fix_region_markers, format_sass
from twcss_to_sass.core.pipeline import ConversionPipeline, convert
from twcss_to_sass.utils.config import ConversionConfig


RAW = {"format_output": False, "print_comments": False}


# ---------------------------------------------------------------------------
# Empty results
# ---------------------------------------------------------------------------


class TestNoResult:
    @pytest.mark.parametrize("html", [None, "", "   \n  "])
    def test_empty_input(self, html):
        assert convert(html) is None

    def test_no_styling(self):
        html = "<div><p>Hello <b>world</b></p><!-- note --></div>"
        assert convert(html) is None

    def test_plain_text(self):
        assert convert("just some text") is None


# ---------------------------------------------------------------------------
# Raw output
# ---------------------------------------------------------------------------


class TestRawOutput:
    def test_apply(self):
        assert convert('<div class="flex items-center"></div>', RAW) == (
            ".class-div-0{@apply flex items-center;}"
        )

    def test_inline_style_gets_semicolon(self):
        result = convert('<p style="color:red">x</p>', RAW)
        assert result == "p{\ncolor:red;\n}"

    def test_button_type_selector(self):
        result = convert('<div class="a"><button class="btn">Go</button></div>', RAW)
        assert result == ".class-div-1{@apply a;button{@apply btn;}}"

    def test_nesting_skips_unstyled_leaves(self):
        html = (
            '<section class="a">\n'
            '  <div>\n'
            '    <p class="b">text</p>\n'
            '    <span>plain</span>\n'
            '  </div>\n'
            '</section>'
        )
        assert convert(html, RAW) == "section{@apply a;.class-div-2{p{@apply b;}}}"

    def test_comment_as_class_name(self):
        options = dict(RAW, use_comment_blocks_as_class_name=True)
        result = convert('<!-- Card Title --><div class="p-4"></div>', options)
        assert result == ".card-title{@apply p-4;}"

    def test_comment_header(self):
        result = convert('<!-- Card Title --><div class="p-4"></div>', {"format_output": False})
        assert result == "/* Card Title -> 1 */.class-div-0{@apply p-4;}"

    def test_style_block(self):
        result = convert('<style>color: red</style><div class="p-4"></div>', RAW)
        assert result.startswith("// #region STYLE #1\n\ncolor: red\n// #endregion\n\n")
        assert result.endswith(".class-div-0{@apply p-4;}")

    def test_nested_style_is_hoisted_out_of_selectors(self):
        result = convert('<div class="a"><style>color: red</style><p class="b"></p></div>', RAW)
        assert result == (
            "// #region STYLE #1\n\ncolor: red\n// #endregion\n\n"
            ".class-div-1{@apply a;p{@apply b;}}"
        )

    def test_full_document_keeps_body_classes(self):
        html = '<html><body class="bg-gray-100"><div class="p-4"></div></body></html>'
        assert convert(html, RAW) == "html{body{@apply bg-gray-100;.class-div-2{@apply p-4;}}}"

    def test_full_document_with_head_style(self):
        html = (
            '<!DOCTYPE html><html class="h-full"><head><style>p{color:red}</style></head>'
            '<body><main class="p-4"></main></body></html>'
        )
        result = convert(html, RAW)
        assert result.startswith("// #region STYLE #1\n\np{color:red}\n")
        assert result.endswith("html{@apply h-full;body{main{@apply p-4;}}}")

    def test_whitespace_in_attributes_is_collapsed(self):
        result = convert('<div class="\n  flex\n  gap-2 "></div>', RAW)
        assert result == ".class-div-0{@apply flex gap-2;}"


# ---------------------------------------------------------------------------
# Configuration does not persist between calls
# ---------------------------------------------------------------------------


class TestConfigIsolation:
    def test_overrides_do_not_leak(self):
        html = '<div class="p-4"></div>'
        assert convert(html, RAW) == ".class-div-0{@apply p-4;}"
        # defaults again: comments printed, output formatted
        result = convert(html)
        assert "/* div -> 1 */" in result
        assert "\n" in result

    def test_pipeline_with_config(self):
        pipeline = ConversionPipeline(ConversionConfig(format_output=False, print_comments=False))
        assert pipeline.convert('<i class="x"></i>') == "i{@apply x;}"


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFixApplyDirectives:
    def test_removes_space_after_variant(self):
        assert fix_apply_directives("    @apply hover: bg-blue-500 md: p-4;") == (
            "    @apply hover:bg-blue-500 md:p-4;"
        )

    def test_collapses_whitespace(self):
        assert fix_apply_directives("@apply flex   items-center ;") == "@apply flex items-center;"

    def test_leaves_declarations_alone(self):
        text = "a {\n    color: red;\n    @apply hover: underline;\n}"
        assert fix_apply_directives(text) == "a {\n    color: red;\n    @apply hover:underline;\n}"


class TestFixRegionMarkers:
    def test_moves_endregion_to_its_own_line(self):
        assert fix_region_markers("    color: red // #endregion") == "    color: red\n    // #endregion"

    def test_moves_both_markers(self):
        text = "a {} // #region STYLE #2 // #endregion"
        assert fix_region_markers(text) == "a {}\n// #region STYLE #2\n// #endregion"

    def test_leaves_marker_lines_alone(self):
        text = "// #region STYLE #1\n\ncolor: red\n// #endregion\n"
        assert fix_region_markers(text) == text


class TestFormatted:
    def test_apply_body(self):
        result = convert('<div class="flex items-center"></div>', {"print_comments": False})
        assert result.startswith(".class-div-0 {")
        assert "    @apply flex items-center;" in result
        assert result.rstrip().endswith("}")

    def test_variant_classes_survive_formatting(self):
        result = convert('<a class="hover:bg-blue-500 p-4"></a>', {"print_comments": False})
        assert "@apply hover:bg-blue-500 p-4;" in result

    def test_nested_blocks_are_indented(self):
        result = convert('<div class="a"><button class="btn"></button></div>', {"print_comments": False})
        assert "\n    button {" in result
        assert "\n        @apply btn;" in result

    def test_indent_size(self):
        options = {"print_comments": False, "formatter_options": {"indent_size": 2}}
        result = convert('<div class="a"></div>', options)
        assert "\n  @apply a;" in result

    def test_formatting_twice_is_stable(self):
        raw = convert('<div class="a"><button class="btn" style="color:red"></button></div>', RAW)
        once = format_sass(raw)
        assert format_sass(once) == once

    def test_region_markers_stay_on_their_own_lines(self):
        html = '<style>color: red</style><div class="p-4"></div>'
        lines = convert(html, {"print_comments": False}).splitlines()
        assert "// #region STYLE #1" in [line.strip() for line in lines]
        assert "// #endregion" in [line.strip() for line in lines]
        assert "@apply p-4;" in [line.strip() for line in lines]
