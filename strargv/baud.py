"""Baud rate lookups between numeric rates, termios constants and Cisco codes."""

import termios
from dataclasses import dataclass
from typing import Optional

UNKNOWN_SPEED = "unknown speed"


@dataclass(frozen=True)
class BaudRate:
    """A supported serial line rate."""

    real_rate: int
    val: int
    text: str


# Rates every platform provides. 14400 and 28800 are not supported.
_STANDARD_RATES = [
    50,
    75,
    110,
    134,
    150,
    200,
    300,
    600,
    1200,
    1800,
    2400,
    4800,
    9600,
    19200,
    38400,
    57600,
    115200,
]

# High rates are only available where termios defines B<rate>.
_EXTENDED_RATES = [
    230400,
    460800,
    500000,
    576000,
    921600,
    1000000,
    1152000,
    1500000,
    2000000,
    2500000,
    3000000,
    3500000,
    4000000,
]


def _build_table() -> list[BaudRate]:
    table = []
    for rate in _STANDARD_RATES + _EXTENDED_RATES:
        val = getattr(termios, f"B{rate}", None)
        if val is None:
            continue
        table.append(BaudRate(real_rate=rate, val=val, text=str(rate)))
    return table


BAUD_RATES = _build_table()

# (real rate, Cisco IOS console speed code)
CISCO_BAUD_RATES = [
    (300, 3),
    (600, 4),
    (1200, 5),
    (2400, 6),
    (4800, 7),
    (9600, 8),
    (19200, 10),
    (38400, 12),
    (57600, 13),
    (115200, 14),
    (230400, 15),
]


def get_baud_rate(rate: int) -> Optional[int]:
    """
    Look up the termios constant for a numeric rate.

    Args:
        rate: The line rate, e.g. 9600

    Returns:
        The termios speed constant, or None if the rate is not supported
    """
    for entry in BAUD_RATES:
        if entry.real_rate == rate:
            return entry.val
    return None


def get_baud_rate_str(val: int) -> str:
    """Return the display string for a termios speed constant."""
    for entry in BAUD_RATES:
        if entry.val == val:
            return entry.text
    return UNKNOWN_SPEED


def get_rate_from_baud_rate(val: int) -> int:
    """Return the numeric rate for a termios speed constant, or 0."""
    for entry in BAUD_RATES:
        if entry.val == val:
            return entry.real_rate
    return 0


def cisco_baud_to_baud(cisco_val: int) -> int:
    """Convert a Cisco IOS console speed code to a rate, or 0."""
    for rate, code in CISCO_BAUD_RATES:
        if code == cisco_val:
            return rate
    return 0


def baud_to_cisco_baud(rate: int) -> int:
    """Convert a rate to its Cisco IOS console speed code, or 0."""
    for real_rate, code in CISCO_BAUD_RATES:
        if real_rate == rate:
            return code
    return 0
