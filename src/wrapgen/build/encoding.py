"""Version and channel-config encoders for generated headers."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^[+-]?\d+")


def _tokens(text: str, separators: str) -> list[str]:
    """Split on any of the separator characters, dropping empty tokens."""
    pattern = "[" + re.escape(separators) + "]"
    return [t.strip() for t in re.split(pattern, text) if t.strip()]


def parse_int(token: str) -> int:
    """Leading integer of a token; 0 when there is none."""
    match = _LEADING_INT.match(token.strip())
    return int(match.group()) if match else 0


def version_code(version: str) -> int:
    """Encode "A.B.C[.D]" as (A<<16)|(B<<8)|C, shifted once more when D exists."""
    parts = _tokens(version, ",.")

    def component(i: int) -> int:
        return parse_int(parts[i]) if i < len(parts) else 0

    value = (component(0) << 16) + (component(1) << 8) + component(2)
    if len(parts) >= 4:
        value = (value << 8) + component(3)
    return value


def format_version_code(value: int) -> str:
    return f"0x{value & 0xFFFFFFFF:x}"


def max_channels(config: str, is_input: bool) -> int:
    """Largest input (even tokens) or output (odd tokens) count in "{in, out}, ..."."""
    tokens = _tokens(config, ", {}")
    if len(tokens) % 2:
        logger.warning("Odd number of channel tokens in %r; check the channel config syntax", config)

    max_val = 0
    for token in tokens[0 if is_input else 1::2]:
        max_val = max(max_val, parse_int(token))
    return max_val


def path_hash(path: str) -> int:
    """32-bit string hash (h = 31*h + c) used for stable header guards."""
    h = 0
    for ch in path:
        h = (31 * h + ord(ch)) & 0xFFFFFFFF
    return h


def header_guard(prefix: str, path: str) -> str:
    return f"__{prefix}_{path_hash(path):X}__"
