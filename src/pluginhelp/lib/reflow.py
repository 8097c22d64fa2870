"""Fixed-width text reflow for help output.

Wraps free text into indented display lines and renders the key/value and
paragraph entries used by the describe report. Every function here is pure;
lines are returned without separators so callers pick their own convention.
"""

from __future__ import annotations

from dataclasses import dataclass

from pluginhelp.lib.errors import IndentOverflowError, InvalidArgumentError

UNKNOWN = "Unknown"
DEFAULT_INDENT_SIZE = 2
DEFAULT_LINE_LENGTH = 80

# Indentation is sized with the host's signed 32-bit int; wider prefixes used to
# surface as a negative array size.
_MAX_INDENT_WIDTH = 2**31 - 1


def _require_dimension(name: str, value: object, *, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(
            f"{name} must be an int, got {type(value).__name__} ({value!r})."
        )
    if value < minimum:
        raise InvalidArgumentError(f"{name} must be >= {minimum}, got {value}.")
    return value


def indent_width(indent_level: int, indent_size: int) -> int:
    """Return the prefix width for one nesting level, validating the product."""

    level = _require_dimension("indent_level", indent_level, minimum=0)
    size = _require_dimension("indent_size", indent_size, minimum=0)
    width = level * size
    if width < 0 or width > _MAX_INDENT_WIDTH:
        raise IndentOverflowError(
            f"Indentation width {level} * {size} is outside the supported range "
            f"0..{_MAX_INDENT_WIDTH}."
        )
    return width


def reflow(text: str, indent_level: int, indent_size: int, line_length: int) -> list[str]:
    """Wrap ``text`` into lines of at most ``line_length`` characters.

    Words are packed greedily after a prefix of ``indent_level * indent_size``
    spaces. A word that does not fit on an empty line is kept whole on its own
    line, so that line may be longer than ``line_length``. Empty text yields a
    single line holding only the prefix.

    >>> reflow("alpha beta gamma", 1, 2, 12)
    ['  alpha beta', '  gamma']
    """

    if text is None:
        raise InvalidArgumentError("Text is required.")
    if not isinstance(text, str):
        raise InvalidArgumentError(f"Text must be a str, got {type(text).__name__}.")
    width = indent_width(indent_level, indent_size)
    limit = _require_dimension("line_length", line_length, minimum=1)

    prefix = " " * width
    lines: list[str] = []
    current = prefix
    has_words = False
    for word in text.split():
        if not has_words:
            current = prefix + word
            has_words = True
        elif len(current) + 1 + len(word) <= limit:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = prefix + word
    lines.append(current)
    return lines


def render_plain(
    description: str | None, indent_level: int, indent_size: int, line_length: int
) -> list[str]:
    """Reflow a bare description; a missing one renders as ``Unknown``."""

    if not description:
        return [UNKNOWN]
    return reflow(description, indent_level, indent_size, line_length)


def render_key_value(
    key: str,
    value: str | None,
    indent_level: int,
    indent_size: int,
    line_length: int,
) -> list[str]:
    """Reflow ``"key: value"``, substituting ``Unknown`` for a missing value."""

    if not key:
        raise InvalidArgumentError("Key is required!")
    return reflow(f"{key}: {value or UNKNOWN}", indent_level, indent_size, line_length)


def render_paragraph(
    key: str | None,
    value: str | None,
    indent_level: int,
    indent_size: int,
    line_length: int,
) -> list[str]:
    """Reflow an entry as a paragraph.

    The first line is wrapped at ``line_length - indent_size`` and stays at
    ``indent_level``; the remaining lines come from a full-width pass one level
    deeper. Line 0 of the full pass is always replaced by line 0 of the narrow
    pass, even when the two passes break the text differently.
    """

    size = _require_dimension("indent_size", indent_size, minimum=0)
    length = _require_dimension("line_length", line_length, minimum=1)
    if length <= size:
        raise InvalidArgumentError(
            f"line_length must be greater than indent_size for paragraphs, "
            f"got line_length={length} and indent_size={size}."
        )

    value = value or UNKNOWN
    description = value if key is None else f"{key}: {value}"

    narrow = reflow(description, indent_level, indent_size, line_length - indent_size)
    lines = reflow(description, indent_level + 1, indent_size, line_length)
    lines[0] = narrow[0]
    return lines


@dataclass(frozen=True, slots=True)
class TextReflowFormatter:
    """Formatter bound to one indent size and line length."""

    indent_size: int = DEFAULT_INDENT_SIZE
    line_length: int = DEFAULT_LINE_LENGTH

    def reflow(self, text: str, indent_level: int = 0) -> list[str]:
        return reflow(text, indent_level, self.indent_size, self.line_length)

    def plain(self, description: str | None, indent_level: int = 0) -> list[str]:
        return render_plain(description, indent_level, self.indent_size, self.line_length)

    def key_value(self, key: str, value: str | None, indent_level: int = 0) -> list[str]:
        return render_key_value(key, value, indent_level, self.indent_size, self.line_length)

    def paragraph(self, key: str | None, value: str | None, indent_level: int = 0) -> list[str]:
        return render_paragraph(key, value, indent_level, self.indent_size, self.line_length)
