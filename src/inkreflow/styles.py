#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/styles.py
"""Style descriptors and style-stack frames.

A stylesheet resolver outside this package turns CSS classes into
:class:`StyleDescriptor` objects; the renderer only consumes the resulting
``class name -> descriptor`` mapping. While walking markup the renderer keeps
a stack of active styles whose entries are either :class:`TagStyle` (pushed
for an element) or :class:`ClassStyle` (pushed for each style contributed by
that element's ``class`` attribute, and popped together with it).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from inkreflow.constants import STYLE_BOLD, STYLE_ITALIC, STYLE_STRIKETHROUGH, STYLE_UNDERLINE


@dataclass(frozen=True)
class StyleDescriptor:
    """Flat style information resolved for a single CSS class.

    Parameters
    ----------
    bold, italic, underline, strikethrough : bool
        Font effects applied by the class
    is_title : bool
        Whether elements with this class are chapter titles (centered)
    custom_style_id : str or None
        Extra style id (for example a color group) to emit for the class

    """

    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    is_title: bool = False
    custom_style_id: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StyleDescriptor":
        """Build a descriptor from a plain mapping, ignoring unknown keys."""
        custom = data.get("custom_style_id")
        return cls(
            bold=bool(data.get("bold", False)),
            italic=bool(data.get("italic", False)),
            underline=bool(data.get("underline", False)),
            strikethrough=bool(data.get("strikethrough", False)),
            is_title=bool(data.get("is_title", False)),
            custom_style_id=str(custom) if custom else None,
        )

    def style_ids(self) -> list[str]:
        """Return the style ids contributed by this descriptor, in stack order."""
        ids = []
        if self.bold:
            ids.append(STYLE_BOLD)
        if self.italic:
            ids.append(STYLE_ITALIC)
        if self.underline:
            ids.append(STYLE_UNDERLINE)
        if self.strikethrough:
            ids.append(STYLE_STRIKETHROUGH)
        if self.custom_style_id:
            ids.append(self.custom_style_id)
        return ids


ClassStyleLookup = Mapping[str, Union[StyleDescriptor, Mapping[str, Any]]]


@dataclass(frozen=True)
class TagStyle:
    """Style-stack frame pushed for an opening element."""

    tag: str
    href: Optional[str] = None


@dataclass(frozen=True)
class ClassStyle:
    """Style-stack frame contributed by a CSS class of the element below it."""

    style_id: str
    owner: str


StyleFrame = Union[TagStyle, ClassStyle]


def lookup_class_style(lookup: Optional[ClassStyleLookup], class_name: str) -> Optional[StyleDescriptor]:
    """Return the descriptor for ``class_name`` or ``None`` when it is unstyled."""
    if not lookup:
        return None
    style = lookup.get(class_name)
    if style is None:
        return None
    if isinstance(style, StyleDescriptor):
        return style
    return StyleDescriptor.from_mapping(style)


def pop_tag_style(stack: list[StyleFrame], tag: str) -> bool:
    """Remove the most recent frame for ``tag`` and the class frames layered on it.

    Returns
    -------
    bool
        True if a matching frame was found.

    """
    for index in range(len(stack) - 1, -1, -1):
        frame = stack[index]
        if isinstance(frame, TagStyle) and frame.tag == tag:
            del stack[index]
            while index < len(stack) and isinstance(stack[index], ClassStyle):
                del stack[index]
            return True
    return False


__all__ = [
    "StyleDescriptor",
    "ClassStyleLookup",
    "TagStyle",
    "ClassStyle",
    "StyleFrame",
    "lookup_class_style",
    "pop_tag_style",
]
