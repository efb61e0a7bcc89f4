from __future__ import annotations

import re

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_REASON_RE = re.compile(r"^auto-approve reason:\s*(.+)$", re.IGNORECASE)


def extract_reason(body: str | None) -> str | None:
    """Return the text after the first "auto-approve reason:" line in a PR description.

    Lines are scanned top to bottom; a matching line whose remainder is blank
    is skipped. Returns None when no line yields a reason.
    """
    for line in _LINE_SPLIT_RE.split(body or ""):
        match = _REASON_RE.match(line)
        if match:
            reason = match.group(1).strip()
            if reason:
                return reason
    return None
