"""Shell-like tokenizer for splitting option strings into argument vectors."""

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Iterator, Optional, Union

DEFAULT_SEPARATORS = " \f\n\r\t\v"

# The vector keeps two trailing slots free: one for the terminator and one
# for the back-reference to the owned buffer.
INITIAL_CAPACITY = 10
CAPACITY_INCREMENT = 10
RESERVED_SLOTS = 2

_NAMED_ESCAPES = {
    ord("a"): 0x07,
    ord("b"): 0x08,
    ord("f"): 0x0C,
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("t"): 0x09,
    ord("v"): 0x0B,
}

_OCTAL_DIGITS = frozenset(b"01234567")
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_QUOTES = frozenset(b"'\"")
_BACKSLASH = ord("\\")


# Custom exceptions
class TokenizerException(Exception):
    """Base exception for tokenizer errors."""

    pass


class MalformedInput(TokenizerException):
    """Raised when a quote or escape sequence is left incomplete."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset


class AllocationFailure(TokenizerException):
    """Raised when the input buffer or the token vector cannot be allocated."""

    pass


class AlreadyReleased(TokenizerException):
    """Raised when a released argument vector is used or released again."""

    pass


@dataclass(frozen=True)
class Token:
    """A view into the owned input buffer."""

    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


class EscapeMode(enum.Enum):
    """Stage of the escape decoder."""

    NONE = 0
    START = 1
    OCTAL = 2
    HEX = 3


@dataclass
class EscapeState:
    """
    Decoder state for a single backslash escape sequence.

    The decoder is fed one byte at a time by the scanner. Each call to
    ``feed`` returns the decoded byte, if one is complete, and whether the
    byte that was fed must be processed again as an ordinary character.
    """

    mode: EscapeMode = EscapeMode.NONE
    value: int = 0
    digits: int = 0

    @property
    def active(self) -> bool:
        return self.mode is not EscapeMode.NONE

    def begin(self) -> None:
        self.mode = EscapeMode.START
        self.value = 0
        self.digits = 0

    def _finish(self) -> int:
        # Octal escapes can overflow a byte (\777); keep the low 8 bits.
        value = self.value & 0xFF
        self.mode = EscapeMode.NONE
        self.value = 0
        self.digits = 0
        return value

    def feed(self, c: int, offset: int) -> tuple[Optional[int], bool]:
        """
        Advance the decoder by one byte.

        Args:
            c: The byte following the backslash (or a later escape byte)
            offset: Position of ``c`` in the buffer, used for error reporting

        Returns:
            A ``(decoded, reprocess)`` pair. ``decoded`` is None while the
            sequence is still incomplete.

        Raises:
            MalformedInput: If a hex escape ends before any digit
        """
        if self.mode is EscapeMode.START:
            if c in _OCTAL_DIGITS:
                self.mode = EscapeMode.OCTAL
                self.value = c - ord("0")
                self.digits = 1
                return None, False
            if c == ord("x"):
                self.mode = EscapeMode.HEX
                return None, False
            self._finish()
            return _NAMED_ESCAPES.get(c, c), False

        if self.mode is EscapeMode.OCTAL:
            if c not in _OCTAL_DIGITS:
                return self._finish(), True
            self.value = self.value * 8 + (c - ord("0"))
            self.digits += 1
            if self.digits == 3:
                return self._finish(), False
            return None, False

        if self.mode is EscapeMode.HEX:
            if c not in _HEX_DIGITS:
                if self.digits == 0:
                    raise MalformedInput("hex escape without digits", offset)
                return self._finish(), True
            self.value = self.value * 16 + int(chr(c), 16)
            self.digits += 1
            if self.digits == 2:
                return self._finish(), False
            return None, False

        raise RuntimeError("escape decoder fed while inactive")

    def flush(self, offset: int) -> int:
        """
        Complete a numeric escape that was cut short by the end of input.

        Raises:
            MalformedInput: If the sequence cannot produce a byte
        """
        if self.mode is EscapeMode.OCTAL or (
            self.mode is EscapeMode.HEX and self.digits > 0
        ):
            return self._finish()
        raise MalformedInput("unterminated escape", offset)


class Scanner:
    """
    Walks an owned buffer and delimits one token per call.

    Decoded bytes are written back into the buffer at a write cursor that
    never passes the read cursor, since no escape sequence decodes to more
    bytes than it occupies.
    """

    def __init__(self, buffer: bytearray, separators: bytes):
        self.buffer = buffer
        self.separators = frozenset(separators)
        self.pos = 0

    def _skip_separators(self) -> None:
        while self.pos < len(self.buffer) and self.buffer[self.pos] in self.separators:
            self.pos += 1

    def next_token(self) -> Optional[Token]:
        """
        Decode the next token in place and advance past it.

        Returns:
            The token view, or None if only separators remain

        Raises:
            MalformedInput: If a quote or escape is unterminated
        """
        buf = self.buffer
        end = len(buf)

        self._skip_separators()
        if self.pos >= end:
            return None

        start = out = p = self.pos
        quote: Optional[int] = None
        escape = EscapeState()

        while p < end:
            c = buf[p]

            if escape.active:
                decoded, reprocess = escape.feed(c, p)
                if decoded is not None:
                    buf[out] = decoded
                    out += 1
                if not reprocess:
                    p += 1
                    continue

            if c == quote:
                quote = None
            elif quote is None and c in _QUOTES:
                quote = c
            elif c == _BACKSLASH:
                escape.begin()
            elif quote is None and c in self.separators:
                p += 1
                break
            else:
                buf[out] = c
                out += 1
            p += 1

        self.pos = p

        if escape.active:
            buf[out] = escape.flush(p)
            out += 1

        if quote is not None:
            raise MalformedInput("unterminated quote", p)

        return Token(start, out - start)


class ArgumentVector(Sequence):
    """
    Ordered tokens of one input string together with the buffer they view.

    Items are returned as ``str``; ``as_bytes`` gives the raw decoded bytes.
    The tokens and the buffer are released together by ``release``.
    """

    def __init__(self, buffer: bytearray, tokens: list[Token], capacity: int):
        self.buffer = buffer
        self.tokens = tokens
        self.capacity = capacity
        self.released = False

    def _check(self) -> None:
        if self.released:
            raise AlreadyReleased("argument vector has been released")

    def token_bytes(self, index: int) -> bytes:
        self._check()
        token = self.tokens[index]
        return bytes(self.buffer[token.start : token.end])

    def as_bytes(self) -> list[bytes]:
        """Return all tokens as raw bytes."""
        return [self.token_bytes(i) for i in range(len(self))]

    def __len__(self) -> int:
        self._check()
        return len(self.tokens)

    def __getitem__(self, index):
        self._check()
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self.tokens)))]
        return self.token_bytes(index).decode("utf-8", "surrogateescape")

    def __iter__(self) -> Iterator[str]:
        for i in range(len(self)):
            yield self[i]

    def __eq__(self, other) -> bool:
        if isinstance(other, (ArgumentVector, list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        if self.released:
            return "ArgumentVector(<released>)"
        return f"ArgumentVector({list(self)!r})"

    def release(self) -> None:
        """
        Free the tokens and the owned buffer.

        Raises:
            AlreadyReleased: If the vector was already released
        """
        self._check()
        self.tokens.clear()
        del self.buffer[:]
        self.released = True

    def __enter__(self) -> "ArgumentVector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.released:
            self.release()


def _to_bytes(value: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8", "surrogateescape")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise TypeError(f"expected str or bytes, got {type(value).__name__}")


def _separator_bytes(separators: Union[str, bytes]) -> bytes:
    # Separators are matched one byte at a time, so text separators must be ASCII
    if isinstance(separators, str) and not separators.isascii():
        raise ValueError(f"separators must be ASCII characters: {separators!r}")
    return _to_bytes(separators)


def tokenize(
    line: Union[str, bytes, bytearray],
    separators: Optional[Union[str, bytes]] = None,
) -> ArgumentVector:
    """
    Split a line into tokens, handling quotes and escapes.

    Rules:
    - Separators (ASCII whitespace by default) delimit tokens
    - Single (') and double (") quotes group tokens and are removed
    - Backslash starts an escape, inside quotes too: \\a \\b \\f \\n \\r \\t \\v,
      up to three octal digits, or \\x followed by up to two hex digits
    - Any other escaped character stands for itself

    Args:
        line: The line to split
        separators: Characters that delimit tokens when not quoted

    Returns:
        The argument vector; empty if the line holds only separators

    Raises:
        MalformedInput: If a quote or escape is unterminated
        AllocationFailure: If memory runs out while building the vector
        ValueError: If a text separator is not an ASCII character
    """
    if separators is None:
        separators = DEFAULT_SEPARATORS
    separator_bytes = _separator_bytes(separators)

    try:
        buffer = bytearray(_to_bytes(line))
    except MemoryError as e:
        raise AllocationFailure("cannot duplicate input") from e

    scanner = Scanner(buffer, separator_bytes)
    tokens: list[Token] = []
    capacity = INITIAL_CAPACITY

    try:
        token = scanner.next_token()
        while token is not None:
            if len(tokens) >= capacity - RESERVED_SLOTS:
                capacity += CAPACITY_INCREMENT
            tokens.append(token)
            token = scanner.next_token()
    except MemoryError as e:
        tokens.clear()
        del buffer[:]
        raise AllocationFailure("cannot grow argument vector") from e
    except TokenizerException:
        # Nothing partial is handed back to the caller
        tokens.clear()
        del buffer[:]
        raise

    return ArgumentVector(buffer, tokens, capacity)


def release(argv: Optional[ArgumentVector]) -> None:
    """Release an argument vector returned by tokenize; None is ignored."""
    if argv is None:
        return
    argv.release()


def split(
    line: Union[str, bytes, bytearray],
    separators: Optional[Union[str, bytes]] = None,
) -> list[str]:
    """Tokenize a line and return the tokens as a plain list."""
    with tokenize(line, separators) as argv:
        return list(argv)
