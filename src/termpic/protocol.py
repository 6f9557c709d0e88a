"""Framing for kitty graphics commands and the cursor sequences around them.

Every write is followed by a flush so a command reaches the terminal whole.
Streams are binary.
"""

import base64
from typing import BinaryIO

PROTOCOL_START = b"\x1b_G"
PROTOCOL_END = b"\x1b\\"

SAVE_CURSOR = b"\x1b[s"
RESTORE_CURSOR = b"\x1b[u"


def control_data(**keys) -> str:
    """Join keys into a ``k=v,k=v`` control string, skipping None values."""
    return ",".join(f"{key}={value}" for key, value in keys.items() if value is not None)


def format_graphics_command(control: str, payload: str | bytes | None = None) -> bytes:
    if payload is None:
        payload = b""
    elif isinstance(payload, str):
        payload = payload.encode("utf-8")
    data = base64.standard_b64encode(payload)
    return PROTOCOL_START + control.encode("ascii") + b";" + data + PROTOCOL_END


def send_graphics_command(stream: BinaryIO, control: str, payload: str | bytes | None = None) -> None:
    stream.write(format_graphics_command(control, payload))
    stream.flush()


def _write(stream: BinaryIO, data: bytes) -> None:
    stream.write(data)
    stream.flush()


def save_cursor(stream: BinaryIO) -> None:
    _write(stream, SAVE_CURSOR)


def restore_cursor(stream: BinaryIO) -> None:
    _write(stream, RESTORE_CURSOR)


def move_cursor(stream: BinaryIO, x: int, y: int) -> None:
    """Move to zero-based column x, row y."""
    _write(stream, f"\x1b[{y + 1};{x + 1}H".encode("ascii"))
