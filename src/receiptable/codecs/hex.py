"""Tolerant hex text decoder.

Accepts:
    - Undelimited hex:       "AABBCC"
    - Mixed delimiters:      "AA BB-CC_DD|EE,FF:00"
    - 0x-prefixed tokens:    "0xAA 0xbb 0X0C"
    - Any casing

Examples:
    decode_hex("AABBCC")                            # b"\\xaa\\xbb\\xcc"
    decode_hex("AA BB-CC_DD")                       # b"\\xaa\\xbb\\xcc\\xdd"
    decode_hex("0xAA 0xbb")                         # b"\\xaa\\xbb"
    decode_hex("ABC", odd_nibble_policy="pad-left")  # b"\\x0a\\xbc"
"""

from collections.abc import Iterable
from typing import Any

from receiptable.codecs.errors import MalformedInput
from receiptable.models.options import HexDecodeOptions, OddNibblePolicy

_NIBBLES = {c: int(c, 16) for c in "0123456789abcdefABCDEF"}


def decode_hex(text: str, options: HexDecodeOptions | None = None, **overrides: Any) -> bytes:
    """Decode loosely delimited hex text into bytes.

    Args:
        text: Hex text, optionally delimited and 0x-prefixed.
        options: Decoding options. Defaults to HexDecodeOptions().
        **overrides: Individual option values applied on top of options.

    Returns:
        The decoded bytes (empty for empty or delimiter-only text).

    Raises:
        TypeError: If text is not a string.
        MalformedInput: On an illegal character in strict mode, or a lone
            trailing nibble under the reject policy.
    """
    if not isinstance(text, str):
        raise TypeError("decode_hex: text must be a string")
    if options is None:
        options = HexDecodeOptions(**overrides)
    elif overrides:
        options = HexDecodeOptions.model_validate({**options.model_dump(), **overrides})

    out = bytearray()
    have_high = False
    high = 0
    i = 0
    length = len(text)

    while i < length:
        ch = text[i]

        # "0x" only counts as a prefix when a hex digit follows it
        if (
            options.allow_0x_prefix
            and ch == "0"
            and i + 2 < length
            and text[i + 1] in "xX"
            and text[i + 2] in _NIBBLES
        ):
            i += 2
            continue

        nibble = _NIBBLES.get(ch)
        if nibble is not None:
            if have_high:
                out.append((high << 4) | nibble)
                have_high = False
            else:
                high = nibble
                have_high = True
        elif options.is_delimiter(ch):
            pass
        elif options.strict:
            raise MalformedInput(
                f"Invalid character {ch!r} (0x{ord(ch):x}) in hex string",
                text=text,
                index=i,
                found=ch,
                expected="hex digit or delimiter",
            )
        i += 1

    if have_high:
        policy = options.odd_nibble_policy
        if policy == OddNibblePolicy.PAD_RIGHT:
            out.append(high << 4)
        elif policy == OddNibblePolicy.PAD_LEFT:
            out = _shift_in_leading_zero(out, high)
        else:
            raise MalformedInput(
                "Odd number of hex digits (nibbles)",
                text=text,
                index=length - 1,
                found=None,
                expected="an even number of hex digits",
            )

    return bytes(out)


def _shift_in_leading_zero(data: bytes | bytearray, last: int) -> bytearray:
    """Shift a nibble stream right by one nibble, appending the lone last nibble.

    Equivalent to decoding with a virtual "0" prepended: AB + C -> 0A BC.
    """
    shifted = bytearray()
    carry = 0
    for byte in data:
        shifted.append((carry << 4) | (byte >> 4))
        carry = byte & 0x0F
    shifted.append((carry << 4) | last)
    return shifted


def bytes_to_hex(data: Iterable[int], sep: str = " ") -> str:
    """Format bytes as lowercase two-digit hex joined by sep."""
    parts = []
    for n in data:
        if not 0 <= n <= 255:
            raise ValueError(f"not a uint8: n = {n}")
        parts.append(f"{n:02x}")
    return sep.join(parts)
