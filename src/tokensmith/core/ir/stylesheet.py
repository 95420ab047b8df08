"""
Stylesheet IR types.

Emission produces Declarations grouped into sections per theme bucket.
Enhancement generators and the assembler work from these records rather
than from raw tokens.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .tokens import Bucket, TokenFormat


class Declaration(BaseModel):
    """One custom-property declaration line."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Property name without the leading --")
    value: str
    bucket: Bucket = Bucket.ROOT
    section: str = ""
    unparseable_color: bool = Field(
        default=False,
        description="Color-typed value that is neither hex nor oklch()",
    )

    def css_line(self, indent: int = 2) -> str:
        return f"{' ' * indent}--{self.name}: {self.value};"


class ColorDerivation(BaseModel):
    """A color declaration paired with its OKLCH conversion."""

    model_config = ConfigDict(frozen=True)

    property_name: str
    source_color: str
    converted: str
    bucket: Bucket


class EmittedSection(BaseModel):
    """Declarations of one category section, split by bucket."""

    model_config = ConfigDict(frozen=True)

    label: str
    root: tuple[Declaration, ...] = ()
    dark: tuple[Declaration, ...] = ()
    light: tuple[Declaration, ...] = ()

    def bucket(self, bucket: Bucket) -> tuple[Declaration, ...]:
        return getattr(self, bucket.value)


class GenerateOptions(BaseModel):
    """Inputs and feature flags for one generation pass."""

    model_config = ConfigDict(frozen=True)

    tokens_dir: Path = Field(default=Path("tokens"), description="Token source root")
    output_file: Path = Field(
        default=Path("generated/tokens.css"), description="Stylesheet to write"
    )
    oklch: bool = Field(default=False, description="Emit the OKLCH @supports block")
    modern_css: bool = Field(
        default=False, description="Emit the progressive-enhancement block"
    )


class GenerationStats(BaseModel):
    """Counts reported after a generation pass."""

    model_config = ConfigDict(frozen=True)

    tier_counts: dict[str, int] = Field(default_factory=dict)
    shared_properties: int = 0
    dark_properties: int = 0
    light_properties: int = 0
    converted_colors: int = 0

    @property
    def total_properties(self) -> int:
        return self.shared_properties + max(self.dark_properties, self.light_properties)
