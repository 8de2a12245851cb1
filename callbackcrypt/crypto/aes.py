"""
AES-256-CBC Encryption/Decryption with PKCS#7 Padding

The IV is the first 16 bytes of the 32-byte key; the platform defines it
that way, so key and IV always rotate together.
"""

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from callbackcrypt.common.exceptions import BadPaddingError, InvalidLengthError, KeyDecodeError
from callbackcrypt.crypto.keys import AES_KEY_SIZE

BLOCK_SIZE = 16

# The platform's own encoder pads to a 32-byte boundary, so pad lengths
# up to 32 occur in genuine traffic.
MAX_PAD_LENGTH = 32


def pkcs7_pad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """
    Apply PKCS#7 padding to data.

    Args:
        data: Data to pad
        block_size: Block size in bytes (default: 16 for AES)

    Returns:
        Padded data
    """
    padding_length = block_size - (len(data) % block_size)
    padding = bytes([padding_length] * padding_length)
    return data + padding


def pkcs7_unpad(data: bytes, max_pad: int = MAX_PAD_LENGTH) -> bytes:
    """
    Remove PKCS#7 padding from data.

    Args:
        data: Padded data
        max_pad: Largest pad length accepted

    Returns:
        Unpadded data

    Raises:
        BadPaddingError: If padding is invalid
    """
    if not data:
        raise BadPaddingError("Cannot unpad empty data")

    padding_length = data[-1]

    if padding_length < 1 or padding_length > max_pad:
        raise BadPaddingError(f"Invalid padding length: {padding_length}")
    if padding_length > len(data):
        raise BadPaddingError(
            f"Padding length {padding_length} exceeds data length {len(data)}"
        )

    # Verify all padding bytes are correct
    if data[-padding_length:] != bytes([padding_length]) * padding_length:
        raise BadPaddingError("Invalid PKCS#7 padding")

    return data[:-padding_length]


def _cipher(key: bytes) -> Cipher:
    if len(key) != AES_KEY_SIZE:
        raise KeyDecodeError(f"AES-256 requires {AES_KEY_SIZE}-byte key, got {len(key)} bytes")
    return Cipher(algorithms.AES(key), modes.CBC(key[:BLOCK_SIZE]))


def encrypt(key: bytes, plaintext: bytes) -> bytes:
    """
    Encrypt a plaintext frame using AES-256 CBC mode with PKCS#7 padding.

    Args:
        key: 32-byte AES key (its first 16 bytes double as the IV)
        plaintext: Frame bytes

    Returns:
        Ciphertext, a multiple of 16 bytes long

    Raises:
        KeyDecodeError: If key length is not 32 bytes
    """
    encryptor = _cipher(key).encryptor()
    return encryptor.update(pkcs7_pad(plaintext)) + encryptor.finalize()


def decrypt(key: bytes, ciphertext: bytes) -> bytes:
    """
    Decrypt ciphertext using AES-256 CBC mode and strip PKCS#7 padding.

    Args:
        key: 32-byte AES key
        ciphertext: Raw ciphertext bytes

    Returns:
        Unpadded plaintext frame

    Raises:
        KeyDecodeError: If key length is not 32 bytes
        InvalidLengthError: If ciphertext is not a whole number of blocks
        BadPaddingError: If the decrypted padding is malformed
    """
    if len(ciphertext) % BLOCK_SIZE != 0:
        raise InvalidLengthError(
            f"Ciphertext length {len(ciphertext)} is not a multiple of {BLOCK_SIZE}"
        )

    decryptor = _cipher(key).decryptor()
    padded_plaintext = decryptor.update(ciphertext) + decryptor.finalize()

    return pkcs7_unpad(padded_plaintext)
