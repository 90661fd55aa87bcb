#  Copyright (c) 2025 Tom Villani, Ph.D.
# inkreflow/options.py
"""Configuration options for the rendering pipeline.

This module defines the frozen dataclass that carries every knob of the
markup-to-text pipeline. Instances are immutable; use
:meth:`CloneFrozenMixin.create_updated` to derive a modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from inkreflow.constants import (
    DEFAULT_IMAGE_LABEL,
    DEFAULT_INDENT_SIZE,
    DEFAULT_JUSTIFY,
    DEFAULT_JUSTIFY_THRESHOLD,
    DEFAULT_LIST_INDENT,
    DEFAULT_MAX_WIDTH,
    DEFAULT_PARAGRAPH_SPACING,
    DEFAULT_RULE_MAX_WIDTH,
    DEFAULT_TAB_WIDTH,
)
from inkreflow.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class RenderOptions(CloneFrozenMixin):
    """Configuration options for markup-to-text rendering.

    Parameters
    ----------
    max_width : int, default 80
        Maximum line width in display columns. Values below 1 are clamped to 1
        at render time rather than rejected.
    justify : bool, default False
        Redistribute inter-word whitespace on eligible lines so they reach
        exactly ``max_width`` columns.
    justify_threshold : float, default 0.90
        Fraction of ``max_width`` a line must already fill to be justified.
    indent_size : int, default 4
        Indent of definition descriptions, and total width of the blockquote
        gutter (bar plus padding).
    list_indent : int, default 2
        Spaces of indentation per list nesting level.
    paragraph_spacing : int, default 1
        Blank lines inserted between block-level elements.
    tab_width : int, default 4
        Tab stop width used when expanding tabs in preformatted blocks.
    image_label : str, default "[image]"
        Placeholder text written on the line reserved for an image.
    rule_max_width : int, default 60
        Maximum width of a horizontal rule.

    Examples
    --------
    Justified output at 72 columns:

        >>> from inkreflow import RenderOptions, render_html
        >>> options = RenderOptions(max_width=72, justify=True)
        >>> result = render_html("<p>Some text</p>", options)

    """

    max_width: int = field(
        default=DEFAULT_MAX_WIDTH,
        metadata={"help": "Maximum line width in display columns", "type": int, "importance": "core"},
    )
    justify: bool = field(
        default=DEFAULT_JUSTIFY,
        metadata={"help": "Justify lines that nearly fill the width", "importance": "core"},
    )
    justify_threshold: float = field(
        default=DEFAULT_JUSTIFY_THRESHOLD,
        metadata={
            "help": "Minimum fill ratio (of max_width) for a line to be justified",
            "type": float,
            "importance": "advanced",
        },
    )
    indent_size: int = field(
        default=DEFAULT_INDENT_SIZE,
        metadata={"help": "Indent for definitions and blockquote gutters", "type": int, "importance": "advanced"},
    )
    list_indent: int = field(
        default=DEFAULT_LIST_INDENT,
        metadata={"help": "Indent per list nesting level", "type": int, "importance": "advanced"},
    )
    paragraph_spacing: int = field(
        default=DEFAULT_PARAGRAPH_SPACING,
        metadata={"help": "Blank lines between block elements", "type": int, "importance": "advanced"},
    )
    tab_width: int = field(
        default=DEFAULT_TAB_WIDTH,
        metadata={"help": "Tab width inside preformatted blocks", "type": int, "importance": "advanced"},
    )
    image_label: str = field(
        default=DEFAULT_IMAGE_LABEL,
        metadata={"help": "Placeholder text for images", "type": str, "importance": "advanced"},
    )
    rule_max_width: int = field(
        default=DEFAULT_RULE_MAX_WIDTH,
        metadata={"help": "Maximum width of horizontal rules", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option types and ranges.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        for name in ("max_width", "indent_size", "list_indent", "paragraph_spacing", "tab_width", "rule_max_width"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"{name} must be an integer, got {type(value).__name__}",
                    parameter_name=name,
                    parameter_value=value,
                )

        if not isinstance(self.justify, bool):
            raise ValidationError(
                f"justify must be a boolean, got {type(self.justify).__name__}",
                parameter_name="justify",
                parameter_value=self.justify,
            )
        if isinstance(self.justify_threshold, bool) or not isinstance(self.justify_threshold, (int, float)):
            raise ValidationError(
                f"justify_threshold must be a number, got {type(self.justify_threshold).__name__}",
                parameter_name="justify_threshold",
                parameter_value=self.justify_threshold,
            )
        if not isinstance(self.image_label, str):
            raise ValidationError(
                f"image_label must be a string, got {type(self.image_label).__name__}",
                parameter_name="image_label",
                parameter_value=self.image_label,
            )

        if not 0 < self.justify_threshold <= 1:
            raise ValidationError(
                f"justify_threshold must be in (0, 1], got {self.justify_threshold}",
                parameter_name="justify_threshold",
                parameter_value=self.justify_threshold,
            )
        if self.indent_size < 2:
            raise ValidationError(
                f"indent_size must be at least 2, got {self.indent_size}",
                parameter_name="indent_size",
                parameter_value=self.indent_size,
            )
        for name in ("list_indent", "paragraph_spacing"):
            if getattr(self, name) < 0:
                raise ValidationError(
                    f"{name} must be non-negative, got {getattr(self, name)}",
                    parameter_name=name,
                    parameter_value=getattr(self, name),
                )
        if self.tab_width < 1:
            raise ValidationError(
                f"tab_width must be positive, got {self.tab_width}",
                parameter_name="tab_width",
                parameter_value=self.tab_width,
            )

    @property
    def effective_width(self) -> int:
        """Return ``max_width`` clamped to at least one column."""
        return max(1, self.max_width)

    @classmethod
    def field_names(cls) -> list[str]:
        """Return the names of all configurable fields."""
        return [f.name for f in fields(cls)]


__all__ = ["CloneFrozenMixin", "RenderOptions"]
