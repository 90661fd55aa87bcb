"""Utility helpers for inkreflow."""

from inkreflow.utils.entities import decode_entities
from inkreflow.utils.text import char_width, display_width, pad_to_width

__all__ = ["decode_entities", "char_width", "display_width", "pad_to_width"]
