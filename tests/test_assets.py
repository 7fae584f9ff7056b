from pathlib import Path

from asseter.config import AssetConfig, ManifestConfig, load_config
from asseter.render import render_asset, render_manifest


def test_render_manifest(sample_manifest: Path) -> None:
    report = render_manifest(load_config(sample_manifest))

    assert report.tags == [
        '<link type="text/css" rel="stylesheet" href="assets/css/styles.css">',
        '<script defer type="text/javascript" src="assets/js/app.js"></script>',
        '<img id="logo" src="assets/img/logo.png" alt="logo">',
    ]
    assert report.markup == "\n".join(report.tags)
    assert report.counts == {"css": 1, "script": 1, "img": 1}
    assert ("Tags rendered", "3") in report.summary_rows()


def test_flags_follow_named_attributes() -> None:
    asset = AssetConfig(kind="script", src="app.js", attributes={"id": "app"}, flags=["async", "defer"])

    assert render_asset(asset) == '<script id="app" async defer type="text/javascript" src="app.js"></script>'


def test_tag_assets_and_xhtml_manifest() -> None:
    manifest = ManifestConfig(
        xhtml_style=True,
        separator="",
        assets=[
            AssetConfig(kind="tag", name="meta", attributes={"charset": "utf-8"}),
            AssetConfig(kind="tag", name="title", content="Home"),
            AssetConfig(kind="img", src="a/b.gif", flags=["ismap"]),
        ],
    )

    report = render_manifest(manifest)

    assert report.markup == (
        '<meta charset="utf-8" />'
        "<title>Home</title>"
        '<img ismap="ismap" src="a/b.gif" alt="b" />'
    )


def test_inline_assets() -> None:
    style = AssetConfig(kind="css", src="p{margin:0}", inline=True)
    image = AssetConfig(kind="img", src="R0lGOD", inline=True, attributes={"mime-type": "image/gif"})

    assert render_asset(style) == '<style type="text/css">\np{margin:0}\n</style>'
    assert render_asset(image) == '<img src="data:image/gif;base64,R0lGOD">'
