# Presentation tokens, kept apart from the graph model

from infragraph.visual.visual_style import DEFAULT_STYLE, NODE_STYLE, style_for

__all__ = [
    "DEFAULT_STYLE",
    "NODE_STYLE",
    "style_for",
]
