# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Change Description: token list string helpers (bytes32 decoding, name/symbol
# sanitizing) and address normalization.

import unicodedata
from typing import Optional

from constants.constants import ZERO_ADDRESS
from utils.logger_utils import get_logger

logger = get_logger("Formatter Utils")

BYTES32_HEX_LENGTH = 64


def to_normalized_address(address: Optional[str]) -> Optional[str]:
    """
    Convert address to lowercase.
    Safe-guards against None or invalid types.
    """
    if address is None or not isinstance(address, str):
        return None
    return address.strip().lower()


def is_zero_address(address: Optional[str]) -> bool:
    """An unresolved lookup comes back either empty or as the zero address."""
    if not address:
        return True
    return to_normalized_address(address) == ZERO_ADDRESS


def is_bytes32_hex_string(value: str) -> bool:
    if len(value) != BYTES32_HEX_LENGTH:
        return False
    try:
        bytes.fromhex(value)
    except ValueError:
        return False
    return True


def parse_bytes32_string(hex_string: str) -> str:
    """
    Decodes a legacy fixed-width bytes32 string (64 hex characters, no 0x prefix)
    up to its first null byte.
    """
    raw = bytes.fromhex(hex_string.removeprefix("0x"))
    if len(raw) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(raw)}")
    end = raw.find(b"\x00")
    if end != -1:
        raw = raw[:end]
    return raw.decode("utf-8", errors="replace")


def sanitize_string(value: str) -> str:
    """
    Drops control and format characters (NUL padding, zero-width joiners, bidi
    marks) and trims surrounding whitespace.
    """
    cleaned = "".join(ch for ch in value if unicodedata.category(ch) not in ("Cc", "Cf"))
    return cleaned.strip()
