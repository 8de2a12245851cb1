"""
callbackcrypt

Signature verification and payload encryption for enterprise messaging
platform callbacks:
- SHA-1 request signatures over sorted fields
- AES-256-CBC encryption of a framed plaintext
- URL verification handshake and per-message decryption
- Encrypted passive replies
"""

from .callback import CallbackCrypt, decrypt_message, encrypt_message, verify_url
from .common.protocol import VerificationRequest

__version__ = "1.0.0"

__all__ = [
    'CallbackCrypt',
    'VerificationRequest',
    'decrypt_message',
    'encrypt_message',
    'verify_url',
]
