"""
Utility functions for callbackcrypt.
"""

import base64
import binascii
import hmac
import secrets
import time
from typing import Optional

from .exceptions import Base64Error, ReplayError


def now_s() -> int:
    """
    Get current Unix timestamp in seconds.

    The platform sends callback timestamps in seconds, not milliseconds.
    """
    return int(time.time())


def b64encode(data: bytes) -> str:
    """
    Base64 encode bytes to string (standard alphabet, padded).

    Args:
        data: Bytes to encode

    Returns:
        Base64-encoded string
    """
    return base64.b64encode(data).decode('ascii')


def b64decode(data: str) -> bytes:
    """
    Strictly base64 decode a transport string.

    Characters outside the standard alphabet are rejected instead of
    being silently discarded.

    Args:
        data: Base64-encoded string

    Returns:
        Decoded bytes

    Raises:
        Base64Error: If the string is not valid padded base64
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise Base64Error(f"Invalid base64 payload: {e}") from e


def generate_random_prefix(length: int = 16) -> bytes:
    """
    Generate the random bytes that open every plaintext frame.

    Args:
        length: Length in bytes (default: 16)

    Returns:
        Random bytes from a CSPRNG
    """
    return secrets.token_bytes(length)


def generate_nonce() -> str:
    """Generate a decimal nonce for outgoing replies."""
    return str(secrets.randbelow(10 ** 10))


def constant_time_compare(a: str, b: str) -> bool:
    """
    Constant-time string comparison.

    Args:
        a: First string
        b: Second string

    Returns:
        True if equal, False otherwise
    """
    return hmac.compare_digest(a.encode('utf-8'), b.encode('utf-8'))


def ensure_fresh(timestamp: int, tolerance: int, now: Optional[int] = None) -> None:
    """
    Reject a request whose timestamp is too far from the local clock.

    Args:
        timestamp: Request timestamp (Unix seconds)
        tolerance: Maximum accepted skew in seconds, either direction
        now: Current time override, defaults to the system clock

    Raises:
        ReplayError: If ``|now - timestamp| > tolerance``
    """
    if now is None:
        now = now_s()
    if abs(now - timestamp) > tolerance:
        raise ReplayError(
            f"Timestamp {timestamp} outside {tolerance}s window (now={now})"
        )
