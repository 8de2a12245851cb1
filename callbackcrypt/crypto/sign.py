"""
Callback Request Signatures

The platform signs every callback with SHA-1 over the lexicographically
sorted concatenation of (token, timestamp, nonce, payload).
"""

import hashlib
from typing import Union

from callbackcrypt.common.utils import constant_time_compare


def calc_signature(token: str, timestamp: str, nonce: str, payload: str) -> str:
    """
    Compute the platform signature for one callback.

    The four fields are sorted as strings (code point order, which
    matches byte order of their UTF-8 encoding) and joined with no
    separator, so the result does not depend on argument position.

    Args:
        token: Shared secret configured on both sides
        timestamp: Decimal timestamp string
        nonce: Decimal nonce string
        payload: Echo string or encrypted message field

    Returns:
        Lowercase hex SHA-1 digest (40 characters)
    """
    data = "".join(sorted([token, timestamp, nonce, payload]))
    return hashlib.sha1(data.encode('utf-8')).hexdigest()


def check_signature(
    token: str,
    timestamp: Union[int, str],
    nonce: Union[int, str],
    payload: str,
    signature: str
) -> bool:
    """
    Verify a callback signature.

    Integer timestamp/nonce values are rendered in plain decimal before
    signing, which is how they appear on the wire.

    Returns:
        True if the signature matches, False otherwise
    """
    expected = calc_signature(token, str(timestamp), str(nonce), payload)
    return constant_time_compare(expected, signature)


def verify_request(token: str, req, payload: str) -> bool:
    """
    Verify the signature carried by a ``VerificationRequest``.

    Args:
        token: Shared secret
        req: Request holding ``signature``, ``timestamp`` and ``nonce``
        payload: The signed payload string

    Returns:
        True if the signature is valid, False otherwise
    """
    return check_signature(token, req.timestamp, req.nonce, payload, req.signature)
