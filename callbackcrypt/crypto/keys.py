"""
EncodingAESKey handling.

The platform hands out the 32-byte AES key as 43 characters of base64
with the trailing ``=`` stripped.
"""

import base64
import binascii
import secrets

from callbackcrypt.common.exceptions import KeyDecodeError

AES_KEY_SIZE = 32
ENCODED_KEY_LENGTH = 43


def decode_key(encoded_key: str) -> bytes:
    """
    Decode an EncodingAESKey into raw key bytes.

    One ``=`` is appended before decoding. The last base64 group of a
    43-character key carries two unused low bits; those are ignored
    rather than rejected.

    Args:
        encoded_key: 43-character unpadded base64 key

    Returns:
        32-byte AES key

    Raises:
        KeyDecodeError: If the key is not base64 or does not decode to 32 bytes
    """
    try:
        key = base64.b64decode(encoded_key + "=", validate=True)
    except (binascii.Error, ValueError) as e:
        raise KeyDecodeError(f"EncodingAESKey is not valid base64: {e}") from e

    if len(key) != AES_KEY_SIZE:
        raise KeyDecodeError(
            f"EncodingAESKey must decode to {AES_KEY_SIZE} bytes, got {len(key)} bytes"
        )

    return key


def encode_key(key: bytes) -> str:
    """Encode raw key bytes into the platform's 43-character form."""
    if len(key) != AES_KEY_SIZE:
        raise KeyDecodeError(f"AES key must be {AES_KEY_SIZE} bytes, got {len(key)} bytes")
    return base64.b64encode(key).decode('ascii').rstrip("=")


def generate_encoded_key() -> str:
    """
    Generate a fresh EncodingAESKey.

    Returns:
        43-character key accepted by ``decode_key``
    """
    return encode_key(secrets.token_bytes(AES_KEY_SIZE))
