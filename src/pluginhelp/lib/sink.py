"""Write rendered help text to a file."""

from __future__ import annotations

from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


def write_text_output(
    text: str,
    output: Path,
    *,
    line_separator: str = "\n",
    encoding: str = "utf-8",
    errors: str = "strict",
) -> Path:
    """Write ``text`` to ``output``, creating parent directories.

    A trailing line separator is always present in the written file. ``errors``
    is passed to the codec; XML output uses ``xmlcharrefreplace`` so characters
    the target encoding lacks survive as character references.
    """

    destination = output.expanduser()
    destination.parent.mkdir(parents=True, exist_ok=True)
    if not text.endswith(line_separator):
        text += line_separator
    try:
        destination.write_text(text, encoding=encoding, errors=errors, newline="")
    except OSError as error:
        raise OSError(f"Cannot write output to: {destination} ({error.strerror})") from error
    logger.info("Wrote output.", path=destination.as_posix(), chars=len(text), encoding=encoding)
    return destination
