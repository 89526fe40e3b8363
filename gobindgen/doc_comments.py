import re

_COMMENT_OPEN_RE = re.compile(r"^\s*/\*[*!]?<?")
_COMMENT_CLOSE_RE = re.compile(r"\*/\s*$")
_LINE_PREFIX_RE = re.compile(r"^\s*(///?<?|//!|\*(?!/))?\s?")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_doxygen_comment(raw: str | None) -> str:
    """Turn a raw doxygen comment into a single Go line comment.

    Doxygen commands such as ``\\param`` are kept, only comment markup and
    line breaks go away. Returns "" when there is nothing left.
    """
    if not raw:
        return ""
    lines = []
    for line in raw.splitlines():
        line = _COMMENT_OPEN_RE.sub("", line)
        line = _COMMENT_CLOSE_RE.sub("", line)
        line = _LINE_PREFIX_RE.sub("", line, count=1)
        lines.append(line.strip())
    text = _WHITESPACE_RE.sub(" ", " ".join(lines)).strip()
    if not text:
        return ""
    return "// " + text
