"""
Custom exceptions for callbackcrypt.

Every failure carries a short, stable ``code`` so callers can log or
branch on the kind of failure without matching message text.
"""


class CallbackCryptError(Exception):
    """Base exception for callbackcrypt errors."""
    code = "ERROR"


class ConfigurationError(CallbackCryptError):
    """Configuration is missing or invalid."""
    code = "BAD_CONFIG"


class KeyDecodeError(CallbackCryptError):
    """Encoded AES key is not valid base64 or not 32 bytes long."""
    code = "BAD_KEY"


class ProtocolError(CallbackCryptError):
    """A callback request failed verification or decryption."""
    code = "PROTOCOL"


class SignatureMismatchError(ProtocolError):
    """Request signature does not match the computed one."""
    code = "SIG_FAIL"


class Base64Error(ProtocolError):
    """Encrypted payload is not valid base64."""
    code = "BAD_BASE64"


class CipherError(ProtocolError):
    """Block cipher decryption failed."""
    code = "CIPHER"


class InvalidLengthError(CipherError):
    """Ciphertext length is not a multiple of the block size."""
    code = "BAD_LENGTH"


class BadPaddingError(CipherError):
    """PKCS#7 padding is malformed."""
    code = "BAD_PADDING"


class FrameError(ProtocolError):
    """Decrypted plaintext does not hold a valid frame."""
    code = "FRAME"


class TruncatedFrameError(FrameError):
    """Frame length prefix points past the end of the buffer."""
    code = "TRUNCATED"


class TenantMismatchError(ProtocolError):
    """Decrypted receiver id differs from the configured one."""
    code = "TENANT_MISMATCH"


class EnvelopeError(ProtocolError):
    """Callback envelope could not be parsed."""
    code = "BAD_ENVELOPE"


class ReplayError(ProtocolError):
    """Request timestamp is outside the accepted window."""
    code = "REPLAY"


PUBLIC_ERROR_BODY = "error"


def public_error_body() -> str:
    """
    Response body a router sends back for any failed callback.

    The body is identical for every failure kind so that a caller
    probing the endpoint learns nothing about which check failed.
    """
    return PUBLIC_ERROR_BODY
