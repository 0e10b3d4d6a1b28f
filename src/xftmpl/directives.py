"""``#pragma xftmpl name|size <identifier>`` directive lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Pragma names and file names pass through to the header text unchanged.
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


@dataclass(slots=True)
class DirectiveState:
    """Output metadata collected from directives. First occurrence wins."""

    var_name: str | None = None
    size_name: str | None = None

    def set_var_name(self, value: str) -> bool:
        if self.var_name is not None:
            return False
        self.var_name = value
        return True

    def set_size_name(self, value: str) -> bool:
        if self.size_name is not None:
            return False
        self.size_name = value
        return True


def apply_directive(line: bytes | str, state: DirectiveState) -> bool:
    """Apply one directive line (the text after '#') to ``state``.

    Returns True when a field was set. Lines of any other shape are ignored.
    """
    if isinstance(line, bytes):
        line = line.decode(TEXT_ENCODING, TEXT_ERRORS)
    words = line.rstrip("\r").replace("\t", " ").split(" ")
    words = [word for word in words if word]

    if len(words) < 3 or words[0] != "pragma" or words[1] != "xftmpl":
        return False

    key = words[2]
    value = words[3] if len(words) > 3 else None
    if value is None:
        return False

    if key == "name":
        applied = state.set_var_name(value)
    elif key == "size":
        applied = state.set_size_name(value)
    else:
        logger.debug("ignoring unknown xftmpl directive %r", key)
        return False

    if not applied:
        logger.debug("xftmpl %s already set, ignoring %r", key, value)
    return applied
