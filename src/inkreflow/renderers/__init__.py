"""Line and table renderers."""

from inkreflow.renderers.table import TableState, render_table
from inkreflow.renderers.text import TextRenderer, render_markup

__all__ = ["TableState", "TextRenderer", "render_markup", "render_table"]
