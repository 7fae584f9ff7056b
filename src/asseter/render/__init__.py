"""
Markup output helpers (tag builders and asset rendering).
"""

from .html import attributes_to_string, css, img, script, tag
from .assets import RenderReport, render_asset, render_manifest

__all__ = [
    "attributes_to_string",
    "css",
    "img",
    "script",
    "tag",
    "RenderReport",
    "render_asset",
    "render_manifest",
]
