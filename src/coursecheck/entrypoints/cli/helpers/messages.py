"""Terminal message helpers for the COURSECHECK CLI.

Small helpers for rendering per-test result lines and notices with emoji→ASCII
fallbacks. Result lines go to stdout; notices (warnings, errors) go to stderr.
"""

import click

from coursecheck.runner import Status, UnitResult

GLYPHS = {
    "caution": ("⚠️", "[!]"),  # pragma: no mutate
    "success": ("✅", "[OK]"),  # pragma: no mutate
    "failure": ("❌", "[X]"),  # pragma: no mutate
    "error": ("💥", "[E]"),  # pragma: no mutate
}

STATUS_STYLE = {
    Status.PASSED: ("success", "green"),
    Status.FAILED: ("failure", "red"),
    Status.ERROR: ("error", "magenta"),
}


def _supports_character(character: str, stream_name: str = "stderr") -> bool:
    """Return True if *character* can be encoded on the named Click stream.

    Decides whether to emit emojis or fall back to ASCII so terminals without
    UTF-8 don't raise `UnicodeEncodeError`. The stream is looked up on every
    call.
    """
    stream = click.get_text_stream(stream_name)  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(name: str, stream_name: str = "stderr") -> str:
    """Return the emoji for *name*, or its ASCII fallback if it can't be encoded.

    Args:
        name: One of the keys of `GLYPHS` (``caution``, ``success``, ...).
        stream_name: The Click text stream the glyph will be written to.
    """
    emoji, fallback = GLYPHS[name]
    if _supports_character(emoji, stream_name):
        return emoji
    return fallback


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr**."""
    click.secho(f"{glyph('caution')}  {msg}", fg="yellow", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to **stderr**."""
    click.secho(f"{glyph('failure')}  {msg}", fg="red", bold=True, err=True)


def result_line(result: UnitResult) -> None:
    """Emit one styled line for a test result to **stdout**.

    Example:
        ``✅  test_courses::test_unknown_id``
        ``❌  test_courses::test_bad  expected type KeyError, got type ValueError ...``
    """
    name, color = STATUS_STYLE[result.status]
    line = f"{glyph(name, 'stdout')}  {result.unit_name}"
    if result.reason:
        line = f"{line}  {result.reason}"
    click.secho(line, fg=color)


def summary_line(text: str, ok: bool) -> None:
    """Emit the bold run summary to **stdout**, green if the run is ok, else red."""
    click.secho(text, fg="green" if ok else "red", bold=True)
