"""Framed XML comments and pretty-printing for effective documents."""

from __future__ import annotations

import codecs
import re
from typing import TYPE_CHECKING
from xml.dom import minidom
from xml.parsers.expat import ExpatError

import structlog

from pluginhelp.lib.reflow import DEFAULT_LINE_LENGTH, reflow

if TYPE_CHECKING:
    from pathlib import Path

logger = structlog.get_logger(__name__)

_OPEN = "<!-- "
_CLOSE = "-->"
_MIN_COLUMNS = 10
_DECLARED_ENCODING_RE = re.compile(
    rb"^(?:\xef\xbb\xbf)?<\?xml[^>]*?\sencoding\s*=\s*[\"']([A-Za-z0-9._-]+)[\"']"
)


def _columns(width: int) -> int:
    return width if width >= _MIN_COLUMNS else DEFAULT_LINE_LENGTH


def comment_line_break(width: int = DEFAULT_LINE_LENGTH) -> str:
    """``<!-- ===...=== -->`` rule sized to ``width``."""

    return f"{_OPEN}{'=' * (_columns(width) - 10)} {_CLOSE}"


def comment(text: str, width: int = DEFAULT_LINE_LENGTH) -> list[str]:
    """Wrap ``text`` into comment lines whose closing markers line up.

    >>> comment("hello", 20)
    ['<!-- hello      -->']
    """

    columns = _columns(width)
    close_column = columns - len(_CLOSE) - 1
    lines: list[str] = []
    for chunk in reflow(text, 0, 0, columns - 10):
        body = f"{_OPEN}{chunk} "
        lines.append(f"{body.ljust(close_column)}{_CLOSE}")
    return lines


def section_comment(text: str, width: int = DEFAULT_LINE_LENGTH) -> list[str]:
    rule = comment_line_break(width)
    return [rule, *comment(" ", width), *comment(text, width), *comment(" ", width), rule]


def header_lines(
    title: str, url: str | None = None, width: int = DEFAULT_LINE_LENGTH
) -> list[str]:
    """Header block written at the top of an effective document."""

    rule = comment_line_break(width)
    lines = [rule, *comment(" ", width), *comment(title, width)]
    if url:
        lines += comment(f"See: {url}", width)
    lines += [*comment(" ", width), rule]
    return lines


def _is_text(node: minidom.Node) -> bool:
    return node.nodeType in (node.TEXT_NODE, node.CDATA_SECTION_NODE)


def _is_mixed(node: minidom.Node) -> bool:
    """Element holding both child elements and non-blank text."""

    children = node.childNodes
    has_text = any(_is_text(child) and child.data.strip() for child in children)
    return has_text and any(child.nodeType == child.ELEMENT_NODE for child in children)


def _drop_blank_text(node: minidom.Node) -> None:
    # Whitespace inside mixed content is part of the text.
    if _is_mixed(node):
        return
    for child in list(node.childNodes):
        if child.nodeType == child.TEXT_NODE and not child.data.strip():
            node.removeChild(child)
        elif child.hasChildNodes():
            _drop_blank_text(child)


def _element_lines(element: minidom.Element, depth: int, indent: str = "  ") -> list[str]:
    pad = indent * depth
    children = element.childNodes
    if not children or _is_mixed(element) or all(_is_text(child) for child in children):
        return [pad + element.toxml()]

    close = f"</{element.tagName}>"
    shell = element.cloneNode(False)
    shell.appendChild(element.ownerDocument.createTextNode(""))
    lines = [pad + shell.toxml()[: -len(close)]]
    for child in children:
        if child.nodeType == child.ELEMENT_NODE:
            lines += _element_lines(child, depth + 1, indent)
        else:
            lines.append(indent * (depth + 1) + child.toxml())
    lines.append(pad + close)
    return lines


def read_document(path: Path) -> str:
    """Read an XML file, decoding it with the encoding its declaration names."""

    data = path.read_bytes()
    match = _DECLARED_ENCODING_RE.match(data)
    encoding = match.group(1).decode("ascii") if match else "utf-8"
    try:
        codec = codecs.lookup(encoding).name
    except LookupError as error:
        raise ValueError(f"Unknown encoding '{encoding}' declared in: {path}") from error
    return data.decode("utf-8-sig" if codec == "utf-8" else codec)


def pretty_format(
    document: str,
    encoding: str | None = None,
    omit_declaration: bool = False,
    *,
    line_separator: str = "\n",
) -> str:
    """Re-indent an XML document with two spaces per level.

    Elements that mix text with child elements are kept on one line. Returns
    ``document`` unchanged when it cannot be parsed.
    """

    try:
        dom = minidom.parseString(document)
    except ExpatError as error:
        logger.debug("XML document could not be parsed; leaving it as is.", error=str(error))
        return document

    try:
        _drop_blank_text(dom)
        lines: list[str] = []
        if not omit_declaration:
            lines.append(f'<?xml version="1.0" encoding="{encoding or "UTF-8"}"?>')
        for node in dom.childNodes:
            if node.nodeType == node.ELEMENT_NODE:
                lines += _element_lines(node, 0)
            else:
                lines.append(node.toxml())
    finally:
        dom.unlink()
    return line_separator.join(lines) + line_separator


def render_effective(
    document: str,
    *,
    title: str,
    url: str | None = None,
    comment_text: str | None = None,
    encoding: str | None = None,
    omit_declaration: bool = False,
    width: int = DEFAULT_LINE_LENGTH,
    line_separator: str = "\n",
) -> str:
    """Pretty-print ``document`` with the header placed after the declaration."""

    pretty = pretty_format(
        document, encoding, omit_declaration, line_separator=line_separator
    ).rstrip(line_separator)
    body = pretty.split(line_separator) if pretty else []

    framed = header_lines(title, url, width)
    if comment_text:
        framed += [""] + section_comment(comment_text, width)
    framed.append("")

    if body and body[0].startswith("<?xml"):
        lines = [body[0], *framed, *body[1:]]
    else:
        lines = [*framed, *body]
    return line_separator.join(lines) + line_separator
