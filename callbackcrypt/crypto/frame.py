"""
Plaintext frame codec.

Frame layout (the cipher's actual plaintext):

    random(16) || msg_len (u32, big-endian) || msg || receiver_id

There is no delimiter between message and receiver id; the length prefix
is the only thing that marks the boundary.
"""

import struct
from typing import Callable, Tuple

from callbackcrypt.common.exceptions import TruncatedFrameError
from callbackcrypt.common.utils import generate_random_prefix

RANDOM_PREFIX_SIZE = 16
LENGTH_SIZE = 4
HEADER_SIZE = RANDOM_PREFIX_SIZE + LENGTH_SIZE
MAX_MESSAGE_SIZE = 0xFFFFFFFF

_LENGTH = struct.Struct(">I")


def build_frame(
    message: str,
    receiver_id: str,
    random_source: Callable[[], bytes] = generate_random_prefix
) -> bytes:
    """
    Build a plaintext frame.

    Args:
        message: Message body
        receiver_id: Tenant (corp/receiver) id appended after the message
        random_source: Callable returning 16 random bytes; tests may
            inject a fixed sequence

    Returns:
        Frame bytes ready for encryption

    Raises:
        ValueError: If ``random_source`` does not return 16 bytes or the
            message is too long for the length prefix
    """
    prefix = random_source()
    if len(prefix) != RANDOM_PREFIX_SIZE:
        raise ValueError(
            f"Random prefix must be {RANDOM_PREFIX_SIZE} bytes, got {len(prefix)} bytes"
        )

    message_bytes = message.encode('utf-8')
    if len(message_bytes) > MAX_MESSAGE_SIZE:
        raise ValueError(f"Message too long for frame: {len(message_bytes)} bytes")

    return (
        bytes(prefix)
        + _LENGTH.pack(len(message_bytes))
        + message_bytes
        + receiver_id.encode('utf-8')
    )


def parse_frame(plaintext: bytes) -> Tuple[str, str]:
    """
    Split a decrypted frame into message and receiver id.

    Invalid UTF-8 is replaced rather than raised on; the buffer may come
    from a forged ciphertext that decrypted to garbage.

    Args:
        plaintext: Decrypted, unpadded frame

    Returns:
        Tuple of (message, receiver_id)

    Raises:
        TruncatedFrameError: If the buffer is shorter than the header or
            the length prefix points past its end
    """
    if len(plaintext) < HEADER_SIZE:
        raise TruncatedFrameError(
            f"Frame shorter than {HEADER_SIZE}-byte header: {len(plaintext)} bytes"
        )

    (msg_len,) = _LENGTH.unpack_from(plaintext, RANDOM_PREFIX_SIZE)
    msg_end = HEADER_SIZE + msg_len
    if msg_end > len(plaintext):
        raise TruncatedFrameError(
            f"Frame declares {msg_len}-byte message but only "
            f"{len(plaintext) - HEADER_SIZE} bytes follow the header"
        )

    message = plaintext[HEADER_SIZE:msg_end].decode('utf-8', errors='replace')
    receiver_id = plaintext[msg_end:].decode('utf-8', errors='replace')
    return message, receiver_id
