"""Tests for the CSS, SCSS, JS and JSON serializers."""

from __future__ import annotations

import json

import pytest

from tokenweave.core.errors import SerializationError
from tokenweave.core.ir import ResolvedGraph, ResolvedToken, TokenCategory, TokenLayer
from tokenweave.core.store import TokenStore
from tokenweave.core.themes import ThemeEngine
from tokenweave.formats import (
    OutputFormat,
    available_formats,
    file_extension,
    generate_css,
    generate_js,
    generate_json,
    generate_scss,
    kebab_case,
    serialize,
)


@pytest.fixture
def graphs(example_store: TokenStore) -> dict[str, ResolvedGraph]:
    return ThemeEngine(example_store).resolve_all()


def _graph(*entries: tuple[str, object], theme: str = "default", category: str = "other"):
    return ResolvedGraph(
        theme=theme,
        entries=tuple(
            ResolvedToken(
                name=name,
                category=TokenCategory(category),
                layer=TokenLayer.GLOBAL,
                value=value,
            )
            for name, value in entries
        ),
    )


class TestKebabCase:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("colorBlue500", "color-blue-500"),
            ("colorPrimary", "color-primary"),
            ("spacing4", "spacing-4"),
            ("button.bg", "button-bg"),
            ("already-kebab", "already-kebab"),
        ],
    )
    def test_conversion(self, name, expected):
        assert kebab_case(name) == expected


class TestCss:
    def test_root_and_theme_blocks(self, graphs):
        assert generate_css(graphs) == (
            "/* Generated by tokenweave - do not edit */\n"
            "\n"
            ":root {\n"
            "  --color-blue-500: #3b82f6;\n"
            "  --color-primary: #3b82f6;\n"
            "  --button-bg: #3b82f6;\n"
            "  --spacing-4: 16px;\n"
            "}\n"
            "\n"
            '[data-theme="dark"] {\n'
            "  --color-blue-500: #3b82f6;\n"
            "  --color-primary: #60a5fa;\n"
            "  --button-bg: #60a5fa;\n"
            "  --spacing-4: 16px;\n"
            "}\n"
        )

    def test_base_block_first_regardless_of_input_order(self, graphs):
        reversed_graphs = {"dark": graphs["dark"], "default": graphs["default"]}
        assert generate_css(reversed_graphs) == generate_css(graphs)

    def test_prefix(self, graphs):
        css = generate_css(graphs["default"], prefix="tw-")
        assert "  --tw-color-primary: #3b82f6;" in css

    def test_changed_only(self, graphs):
        css = generate_css(graphs, changed_only=True)
        dark_block = css.split('[data-theme="dark"]')[1]
        assert "--color-primary: #60a5fa;" in dark_block
        assert "--spacing-4" not in dark_block

    def test_idempotent(self, graphs):
        assert generate_css(graphs) == generate_css(graphs)

    def test_numbers_written_canonically(self):
        css = generate_css(_graph(("lineHeight", 1.0), ("weight", 600), ("ratio", 1.5)))
        assert "  --line-height: 1;" in css
        assert "  --weight: 600;" in css
        assert "  --ratio: 1.5;" in css

    def test_function_values_allowed(self):
        css = generate_css(
            _graph(
                ("shadow", "0 1px 2px rgba(0, 0, 0, 0.1)"),
                ("font", '"Inter", sans-serif'),
                ("url", "url(data:image/png;base64,AAA)"),
            )
        )
        assert '  --font: "Inter", sans-serif;' in css
        assert "  --url: url(data:image/png;base64,AAA);" in css

    @pytest.mark.parametrize(
        "value",
        [
            "red; } body { color: blue",
            "red\nblue",
            "rgba(0, 0, 0",
            "a)",
            '"unterminated',
            "red /* x */",
            "a\\",
        ],
    )
    def test_malformed_literal_rejected(self, value):
        with pytest.raises(SerializationError) as exc_info:
            generate_css(_graph(("bad", value)))
        assert exc_info.value.token == "bad"
        assert exc_info.value.fmt == "css"

    def test_identifier_collision(self):
        with pytest.raises(SerializationError, match="both map to"):
            generate_css(_graph(("buttonBg", "#fff"), ("button.bg", "#000")))

    def test_invalid_identifier(self):
        with pytest.raises(SerializationError):
            generate_css(_graph(("größe", "4px")))

    def test_theme_name_quoted(self):
        graph = _graph(("a", "1px"), theme='we"ird')
        assert '[data-theme="we\\"ird"] {' in generate_css(graph)


class TestScss:
    def test_base_variables_and_theme_map(self, graphs):
        assert generate_scss(graphs) == (
            "// Generated by tokenweave - do not edit\n"
            "\n"
            "$color-blue-500: #3b82f6;\n"
            "$color-primary: #3b82f6;\n"
            "$button-bg: #3b82f6;\n"
            "$spacing-4: 16px;\n"
            "\n"
            "// Theme 'dark': SCSS variables cannot be scoped per theme; "
            "values below are reference only\n"
            "// $theme-dark: (\n"
            "//   color-blue-500: #3b82f6,\n"
            "//   color-primary: #60a5fa,\n"
            "//   button-bg: #60a5fa,\n"
            "//   spacing-4: 16px,\n"
            "// );\n"
        )

    def test_skipped_themes_are_listed(self, graphs):
        scss = generate_scss(graphs, include_themes=False)
        assert scss.endswith("\n// Named themes not emitted: dark\n")
        assert "#60a5fa" not in scss

    def test_base_only(self, graphs):
        scss = generate_scss(graphs["default"])
        assert "Theme" not in scss
        assert scss.endswith("$spacing-4: 16px;\n")

    def test_requires_base_theme(self, graphs):
        with pytest.raises(SerializationError, match="base"):
            generate_scss({"dark": graphs["dark"]})

    def test_leading_digit_rejected(self):
        with pytest.raises(SerializationError, match="digit"):
            generate_scss(_graph(("2xl", "24px")))

    def test_line_comment_rejected(self):
        with pytest.raises(SerializationError):
            generate_scss(_graph(("a", "1px // note")))

    @pytest.mark.parametrize("value", ["red !default", "1px !important", "0 !global"])
    def test_flag_marker_rejected(self, value):
        with pytest.raises(SerializationError, match="flag") as exc_info:
            generate_scss(_graph(("a", value)))
        assert exc_info.value.fmt == "scss"

    def test_flag_marker_in_named_theme_rejected(self, graphs):
        dark = _graph(("colorBlue500", "#3b82f6 !default"), theme="dark")
        with pytest.raises(SerializationError):
            generate_scss({"default": graphs["default"], "dark": dark})

    def test_bang_inside_string_allowed(self):
        scss = generate_scss(_graph(("label", '"hello!"')))
        assert '$label: "hello!";' in scss

    def test_css_keeps_bang(self):
        css = generate_css(_graph(("a", "red !important")))
        assert "  --a: red !important;" in css

    def test_url_with_slashes_allowed(self):
        scss = generate_scss(_graph(("icon", "url(https://example.com/i.svg)")))
        assert "$icon: url(https://example.com/i.svg);" in scss


class TestJs:
    def test_module_layout(self, graphs):
        assert generate_js(graphs) == (
            "// Generated by tokenweave - do not edit\n"
            "\n"
            "export const tokens = {\n"
            "  default: {\n"
            "    color: {\n"
            '      colorBlue500: "#3b82f6",\n'
            '      colorPrimary: "#3b82f6",\n'
            '      buttonBg: "#3b82f6",\n'
            "    },\n"
            "    spacing: {\n"
            '      spacing4: "16px",\n'
            "    },\n"
            "  },\n"
            "  dark: {\n"
            "    color: {\n"
            '      colorBlue500: "#3b82f6",\n'
            '      colorPrimary: "#60a5fa",\n'
            '      buttonBg: "#60a5fa",\n'
            "    },\n"
            "    spacing: {\n"
            '      spacing4: "16px",\n'
            "    },\n"
            "  },\n"
            "};\n"
            "\n"
            "export default tokens;\n"
        )

    def test_non_identifier_keys_quoted(self):
        js = generate_js(_graph(("button.bg", "x"), ("z-index", 10), theme="brand-acme"))
        assert '  "brand-acme": {' in js
        assert '      "button.bg": "x",' in js
        assert '      "z-index": 10,' in js

    def test_proto_key_is_computed(self):
        js = generate_js(_graph(("__proto__", "x"), ("plain", "y")))
        assert '      ["__proto__"]: "x",' in js
        assert "      __proto__:" not in js
        assert '      plain: "y",' in js

    def test_strings_escaped(self):
        js = generate_js(_graph(("font", '"Inter", sans-serif')))
        assert '      font: "\\"Inter\\", sans-serif",' in js

    def test_export_name(self, graphs):
        js = generate_js(graphs, export_name="designTokens")
        assert "\nexport const designTokens = {\n" in js
        assert js.endswith("export default designTokens;\n")

    def test_invalid_export_name(self, graphs):
        with pytest.raises(ValueError):
            generate_js(graphs, export_name="not-valid")


class TestJson:
    def test_tree(self, graphs):
        data = json.loads(generate_json(graphs))
        assert list(data) == ["default", "dark"]
        assert data["default"]["color"]["colorPrimary"] == {
            "type": "color",
            "value": "#3b82f6",
            "description": "Primary brand color",
        }
        assert data["dark"]["color"]["buttonBg"] == {"type": "color", "value": "#60a5fa"}
        assert data["default"]["spacing"]["spacing4"] == {"type": "dimension", "value": "16px"}

    def test_dtcg_keys(self, graphs):
        data = json.loads(generate_json(graphs, dtcg=True))
        assert data["dark"]["color"]["colorPrimary"] == {
            "$type": "color",
            "$value": "#60a5fa",
            "$description": "Primary brand color",
        }

    def test_numbers_stay_numbers(self):
        data = json.loads(generate_json(_graph(("weight", 600), category="typography")))
        assert data["default"]["typography"]["weight"] == {"type": "typography", "value": 600}

    def test_trailing_newline_and_idempotent(self, graphs):
        first = generate_json(graphs)
        assert first.endswith("}\n")
        assert first == generate_json(graphs)

    def test_unicode_kept(self):
        text = generate_json(_graph(("quote", "“hi”")))
        assert "“hi”" in text


class TestDispatch:
    def test_available_formats(self):
        assert available_formats() == ["css", "scss", "js", "json"]

    @pytest.mark.parametrize("fmt", list(OutputFormat))
    def test_every_format_ends_with_newline(self, graphs, fmt):
        assert serialize(graphs, fmt).endswith("\n")

    @pytest.mark.parametrize("fmt", list(OutputFormat))
    def test_every_format_idempotent(self, graphs, fmt):
        assert serialize(graphs, fmt) == serialize(graphs, fmt)

    def test_serialize_passes_options(self, graphs):
        assert serialize(graphs, "css", prefix="x-") == generate_css(graphs, prefix="x-")

    def test_unknown_format(self, graphs):
        with pytest.raises(ValueError, match="Unknown format"):
            serialize(graphs, "yaml")

    def test_extensions(self):
        assert file_extension("scss") == ".scss"
        assert file_extension(OutputFormat.JS) == ".js"

    def test_duplicate_theme_rejected(self, graphs):
        with pytest.raises(SerializationError):
            serialize({"a": graphs["dark"], "b": graphs["dark"]}, "css")
