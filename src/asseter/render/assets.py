"""
Render manifest asset entries through the tag builders.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List

from ..config import AssetConfig, ManifestConfig
from . import html

logger = logging.getLogger(__name__)


@dataclass
class RenderReport:
    markup: str
    tags: List[str] = field(default_factory=list)
    counts: Counter = field(default_factory=Counter)
    manifest_hash: str = ""

    def summary_rows(self) -> List[tuple[str, str]]:
        rows = [("Tags rendered", str(len(self.tags)))]
        for kind in sorted(self.counts):
            rows.append((f"{kind} assets", str(self.counts[kind])))
        if self.manifest_hash:
            rows.append(("Manifest hash", self.manifest_hash))
        return rows


def render_asset(asset: AssetConfig, xhtml_style: bool = False) -> str:
    """
    Render one manifest entry with the builder matching its kind.
    """
    attrs = asset.attribute_set()
    if asset.kind == "css":
        return html.css(asset.src, attrs, inline=asset.inline)
    if asset.kind == "script":
        return html.script(asset.src, attrs, inline=asset.inline)
    if asset.kind == "img":
        return html.img(asset.src, attrs, inline=asset.inline, xhtml_style=xhtml_style)
    return html.tag(asset.name or "", attrs, asset.content, xhtml_style=xhtml_style)


def render_manifest(config: ManifestConfig) -> RenderReport:
    """
    Render every asset in manifest order.
    """
    tags = [render_asset(asset, xhtml_style=config.xhtml_style) for asset in config.assets]
    counts = Counter(asset.kind for asset in config.assets)
    logger.info("Rendered %d asset tag(s)", len(tags))
    return RenderReport(
        markup=config.separator.join(tags),
        tags=tags,
        counts=counts,
        manifest_hash=config.hash,
    )
