"""
Cryptographic primitives for callbackcrypt.

This package provides implementations of:
- SHA-1 callback signatures over sorted fields
- EncodingAESKey decoding and generation
- Plaintext frame encoding/decoding
- AES-256-CBC encryption/decryption with PKCS#7 padding
"""

from .aes import encrypt, decrypt
from .frame import build_frame, parse_frame
from .keys import decode_key, encode_key, generate_encoded_key
from .sign import calc_signature, check_signature, verify_request

__all__ = [
    'encrypt',
    'decrypt',
    'build_frame',
    'parse_frame',
    'decode_key',
    'encode_key',
    'generate_encoded_key',
    'calc_signature',
    'check_signature',
    'verify_request',
]
