"""Small string predicates used when interpreting option tokens."""

from typing import Optional


def cmpstrval(s: str, prefix: str) -> Optional[int]:
    """
    Check whether a string starts with a prefix.

    Args:
        s: The string to check
        prefix: The expected prefix, e.g. "banner="

    Returns:
        The offset just past the prefix, or None if s does not start with it
    """
    if not s.startswith(prefix):
        return None
    return len(prefix)


def strisallzero(s: str) -> bool:
    """Check if a non-empty string consists only of '0' characters."""
    if not s:
        return False
    return s.strip("0") == ""


def scan_int(s: str) -> int:
    """
    Scan an unsigned decimal integer.

    Only ASCII digits are accepted; no sign, whitespace or base prefix.

    Args:
        s: The string to scan

    Returns:
        The integer value, or -1 if the string is empty or not all digits
    """
    if not s:
        return -1

    value = 0
    for c in s:
        if c < "0" or c > "9":
            return -1
        value = value * 10 + (ord(c) - ord("0"))

    return value
