"""End-to-end tests for the generation pipeline."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest


def _options(tokens_dir: Path, tmp_path: Path, **flags):
    from tokensmith.core.ir import GenerateOptions

    return GenerateOptions(
        tokens_dir=tokens_dir, output_file=tmp_path / "out" / "tokens.css", **flags
    )


class TestThreeTier:
    """Test generation from a three-tier token root."""

    def test_semantic_and_component_emitted(self, three_tier_tokens: Path, tmp_path: Path):
        from tokensmith.core.ir import TokenFormat
        from tokensmith.core.pipeline import generate_stylesheet

        result = generate_stylesheet(_options(three_tier_tokens, tmp_path))

        assert result.format == TokenFormat.THREE_TIER
        assert result.css.count("--radius-20: 8px;") == 1
        assert "  --color-accent-primary: #3B82F6;" in result.css
        assert "  --button-background: #3B82F6;" in result.css
        assert "  --button-padding: 16px;" in result.css
        assert "--color-blue-500" not in result.css
        assert not result.diagnostics

    def test_semantic_shadow_aliases_primitive_composite(
        self, three_tier_tokens: Path, tmp_path: Path, write_json
    ):
        from tokensmith.core.pipeline import generate_stylesheet

        write_json(
            three_tier_tokens / "primitives" / "shadow.tokens.json",
            {
                "shadow": {
                    "$type": "shadow",
                    "md": {
                        "$value": {
                            "offsetX": 0,
                            "offsetY": 4,
                            "blur": 8,
                            "spread": 0,
                            "color": "#000000",
                        }
                    },
                }
            },
        )
        write_json(
            three_tier_tokens / "semantic" / "elevation.tokens.json",
            {"shadow": {"$type": "shadow", "raised": {"$value": "{shadow.md}"}}},
        )

        result = generate_stylesheet(_options(three_tier_tokens, tmp_path))

        assert "  --shadow-raised: 0 4px 8px 0 #000000;" in result.css
        assert "--shadow-md" not in result.css
        assert not result.diagnostics

    def test_stats(self, three_tier_tokens: Path, tmp_path: Path):
        from tokensmith.core.pipeline import generate_stylesheet

        stats = generate_stylesheet(_options(three_tier_tokens, tmp_path, oklch=True)).stats

        assert stats.tier_counts == {"primitives": 5, "semantic": 4, "component": 2}
        assert stats.shared_properties == 3
        assert stats.dark_properties == 2
        assert stats.light_properties == 1
        assert stats.total_properties == 5
        assert stats.converted_colors == 4

    def test_accent_only_in_dark_gets_two_states(self, three_tier_tokens: Path, tmp_path: Path):
        from tokensmith.core.pipeline import generate_stylesheet

        css = generate_stylesheet(
            _options(three_tier_tokens, tmp_path, oklch=True, modern_css=True)
        ).css

        assert css.count("color-mix(in oklch, var(--") == 2
        assert "  .dark {\n    --color-accent-primary-hover:" in css
        assert "--color-surface: light-dark(#FFFFFF, #000000);" in css
        assert "--color-accent-primary: light-dark(" not in css

    def test_deterministic(self, three_tier_tokens: Path, tmp_path: Path):
        from tokensmith.core.pipeline import generate_stylesheet

        options = _options(three_tier_tokens, tmp_path, oklch=True, modern_css=True)

        assert generate_stylesheet(options).css == generate_stylesheet(options).css


class TestFlatAlias:
    """Test generation from a flat-alias token root."""

    def test_values(self, flat_tokens: Path, tmp_path: Path):
        from tokensmith.core.pipeline import generate_stylesheet

        css = generate_stylesheet(_options(flat_tokens, tmp_path)).css

        assert "  --color-link: #FF5500;" in css
        assert "  --duration-fast: 150ms;" in css
        assert "  --easing-standard: cubic-bezier(0.4, 0, 0.2, 1);" in css

    def test_unresolved_alias_kept(self, flat_tokens: Path, tmp_path: Path, write_json):
        from tokensmith.core.diagnostics import DiagnosticKind
        from tokensmith.core.pipeline import generate_stylesheet

        write_json(flat_tokens / "extra.tokens.json", {"color": {"ghost": {"$value": "{color.nope}"}}})

        result = generate_stylesheet(_options(flat_tokens, tmp_path))

        assert "  --color-ghost: {color.nope};" in result.css
        [diagnostic] = result.diagnostics.of_kind(DiagnosticKind.UNRESOLVED_REFERENCE)
        assert diagnostic.path == "color.nope"


class TestLegacy:
    """Test generation from the legacy fixed-file layout."""

    def test_values(self, legacy_tokens: Path, tmp_path: Path):
        from tokensmith.core.ir import TokenFormat
        from tokensmith.core.pipeline import generate_stylesheet

        result = generate_stylesheet(_options(legacy_tokens, tmp_path))
        css = result.css

        assert result.format == TokenFormat.LEGACY
        for line in (
            "  --color-modeless-brand: #FF5500;",
            "  --size-4: 16px;",
            "  --space-2: 8px;",
            "  --font-family-sans: Inter, sans-serif;",
            "  --font-weight-body: 400;",
            "  --radius-20: 8px;",
            "  --shadow-small: 0 4px 8px 0 rgba(0, 0, 0, 0.5);",
            "  --blur-sm: 4px;",
            "  --border-width-thin: 1px;",
            "  --border-style-solid: solid;",
            "  --opacity-50: 0.5;",
            "  --z-modal: 100;",
            "  --duration-fast: 150ms;",
            "  --easing-standard: cubic-bezier(0.4, 0, 0.2, 1);",
        ):
            assert line in css

    def test_unparseable_colors_reported_only_with_color_features(
        self, legacy_tokens: Path, tmp_path: Path
    ):
        from tokensmith.core.diagnostics import DiagnosticKind
        from tokensmith.core.pipeline import generate_stylesheet

        plain = generate_stylesheet(_options(legacy_tokens, tmp_path))
        checked = generate_stylesheet(_options(legacy_tokens, tmp_path, modern_css=True))

        assert not plain.diagnostics
        [diagnostic] = checked.diagnostics.of_kind(DiagnosticKind.UNPARSEABLE_COLOR)
        assert diagnostic.path == "color-overlay"
        assert "  --color-overlay: rgba(0, 0, 0, 0.5);" in checked.css


class TestBuild:
    """Test writing the stylesheet."""

    def test_writes_output(self, three_tier_tokens: Path, tmp_path: Path):
        from tokensmith.core.pipeline import build

        options = _options(three_tier_tokens, tmp_path)
        result = build(options)

        assert options.output_file.read_text(encoding="utf-8") == result.css
        assert [p.name for p in options.output_file.parent.iterdir()] == ["tokens.css"]

    def test_cycle_writes_nothing(self, tmp_path: Path, write_json):
        from tokensmith.core.errors import CyclicReferenceError
        from tokensmith.core.pipeline import build

        root = tmp_path / "tokens"
        write_json(
            root / "color.tokens.json",
            {"color": {"a": {"$value": "{color.b}"}, "b": {"$value": "{color.a}"}}},
        )
        options = _options(root, tmp_path)

        with pytest.raises(CyclicReferenceError):
            build(options)

        assert not options.output_file.exists()

    def test_failure_keeps_previous_output(self, legacy_tokens: Path, tmp_path: Path):
        from tokensmith.core.errors import MissingInputError
        from tokensmith.core.pipeline import build

        options = _options(legacy_tokens, tmp_path)
        options.output_file.parent.mkdir(parents=True)
        options.output_file.write_text("/* previous */\n", encoding="utf-8")
        (legacy_tokens / "colors.json").unlink()

        with pytest.raises(MissingInputError):
            build(options)

        assert options.output_file.read_text(encoding="utf-8") == "/* previous */\n"

    def test_missing_token_root(self, tmp_path: Path):
        from tokensmith.core.errors import MissingInputError
        from tokensmith.core.pipeline import build

        with pytest.raises(MissingInputError):
            build(_options(tmp_path / "absent", tmp_path))

    @pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
    def test_new_file_mode_follows_umask(self, three_tier_tokens: Path, tmp_path: Path):
        from tokensmith.core.pipeline import build

        options = _options(three_tier_tokens, tmp_path)
        previous = os.umask(0o022)
        try:
            build(options)
        finally:
            os.umask(previous)

        assert stat.S_IMODE(options.output_file.stat().st_mode) == 0o644

    @pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
    def test_existing_file_mode_kept(self, three_tier_tokens: Path, tmp_path: Path):
        from tokensmith.core.pipeline import build

        options = _options(three_tier_tokens, tmp_path)
        options.output_file.parent.mkdir(parents=True)
        options.output_file.write_text("/* previous */\n", encoding="utf-8")
        options.output_file.chmod(0o640)

        build(options)

        assert stat.S_IMODE(options.output_file.stat().st_mode) == 0o640
        assert options.output_file.read_text(encoding="utf-8") != "/* previous */\n"
