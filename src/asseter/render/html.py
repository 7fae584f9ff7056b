"""
HTML tag and attribute string builders.

None of these functions escape their input; callers are expected to pass
trusted strings. Output follows HTML5 rules unless ``xhtml_style`` is set.
"""

from __future__ import annotations

import base64
from pathlib import PurePosixPath
from typing import Any, Iterable, Mapping, Optional, Union

AttributeSet = Union[Mapping[Any, Any], Iterable[Any], str, None]

NEWLINE = "\n"

# Key for a pre-rendered attribute string carried through the tag helpers.
_RAW = object()


def attributes_to_string(attrs: AttributeSet, xhtml_style: bool = False) -> str:
    """
    Convert an attribute set to an HTML attribute string.

    Entries with a ``None``/``False`` value are dropped. Integer keys (and
    ``True`` values) mark boolean attributes, rendered bare in HTML mode and
    as ``name="name"`` in XHTML mode. Nothing is validated or escaped.

    Args:
        attrs: Mapping of attribute names to values, an iterable of flags and
            ``(name, value)`` pairs, or an already rendered string.
        xhtml_style: Render boolean attributes the XHTML way.

    Returns:
        The attributes joined by single spaces, without surrounding whitespace.
    """
    literal = _literal(attrs)
    if literal is not None:
        return literal

    parts = []
    for name, value in _iter_entries(attrs):
        if value is None or value is False:
            continue

        if name is _RAW:
            parts.append(str(value))
            continue

        if _is_flag_key(name):
            name, value = value, True

        if value is True:
            parts.append(f'{name}="{name}"' if xhtml_style else str(name))
        else:
            parts.append(f'{name}="{value}"')

    return " ".join(parts).strip()


def tag(
    name: str,
    attrs: AttributeSet = None,
    content: Optional[str] = None,
    xhtml_style: bool = False,
) -> str:
    """
    Build an HTML tag with the given attributes and content.

    ``content`` counts as present unless it is ``None`` or ``False``; an empty
    string still produces a closing tag. Content-less tags self-close only
    when ``xhtml_style`` is requested.
    """
    has_content = content is not None and content is not False
    rendered = attributes_to_string(attrs, xhtml_style) if attrs else ""

    html = f"<{name}"
    if rendered:
        html += f" {rendered}"

    if has_content:
        return f"{html}>{content}</{name}>"
    return f"{html} />" if xhtml_style else f"{html}>"


def css(src: str, attrs: AttributeSet = None, inline: bool = False) -> str:
    """
    Create a stylesheet tag.

    Inline mode wraps ``src`` in a ``<style>`` tag, otherwise ``src`` becomes
    the ``href`` of a ``<link>`` tag.
    """
    attributes = _copy_attributes(attrs)
    _set_default(attributes, "type", "text/css")

    if inline:
        return tag("style", attributes, f"{NEWLINE}{src}{NEWLINE}")

    _set_default(attributes, "rel", "stylesheet")
    attributes["href"] = src
    return tag("link", attributes)


def script(src: str, attrs: AttributeSet = None, inline: bool = False) -> str:
    """
    Create a script tag.

    Inline mode uses ``src`` as the tag body. Otherwise ``src`` is the ``src``
    attribute and the body is empty, so the tag never self-closes.
    """
    attributes = _copy_attributes(attrs)
    _set_default(attributes, "type", "text/javascript")

    if inline:
        return tag("script", attributes, f"{NEWLINE}{src}{NEWLINE}")

    attributes["src"] = src
    return tag("script", attributes, "")


def img(
    src: Union[str, bytes],
    attrs: AttributeSet = None,
    inline: bool = False,
    xhtml_style: bool = False,
) -> str:
    """
    Create an img tag.

    With ``inline`` the image is embedded as a data URI
    (http://en.wikipedia.org/wiki/Data_URI_scheme). The media type is taken
    from the ``mime-type`` attribute and the optional charset from
    ``charset``; both are removed before rendering. ``src`` is expected to be
    base64 already, unless it is ``bytes``, which are encoded here.

    Without ``inline``, ``alt`` defaults to the file name of ``src`` minus its
    extension.
    """
    attributes = _copy_attributes(attrs)

    if inline:
        # Empty mime-type or charset values count as unset.
        mime_type = attributes.pop("mime-type", None) or "image"
        charset = attributes.pop("charset", None)
        payload = base64.b64encode(src).decode("ascii") if isinstance(src, bytes) else src
        charset_part = f";{charset}" if charset else ""
        attributes["src"] = f"data:{mime_type}{charset_part};base64,{payload}"
    else:
        attributes["src"] = src
        _set_default(attributes, "alt", _file_stem(str(src)))

    return tag("img", attributes, xhtml_style=xhtml_style)


def _iter_entries(attrs: AttributeSet) -> Iterable[tuple[Any, Any]]:
    if not attrs:
        return []
    if isinstance(attrs, Mapping):
        return list(attrs.items())

    entries = []
    for index, item in enumerate(attrs):
        if isinstance(item, tuple) and len(item) == 2:
            entries.append(item)
        else:
            entries.append((index, item))
    return entries


def _literal(attrs: AttributeSet) -> Optional[str]:
    """Attribute input that is neither a mapping nor a collection, as text."""
    if attrs is None or isinstance(attrs, Mapping):
        return None
    if isinstance(attrs, str):
        return attrs
    if isinstance(attrs, Iterable):
        return None
    return str(attrs)


def _is_flag_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def _copy_attributes(attrs: AttributeSet) -> dict[Any, Any]:
    """Return a mutable copy so callers never see their mapping change."""
    literal = _literal(attrs)
    if literal is not None:
        return {_RAW: literal} if literal else {}
    return dict(_iter_entries(attrs))


def _set_default(attributes: dict[Any, Any], key: str, value: str) -> None:
    if attributes.get(key) is None:
        attributes[key] = value


def _file_stem(src: str) -> str:
    path = src.split("?", 1)[0].split("#", 1)[0]
    return PurePosixPath(path).stem
