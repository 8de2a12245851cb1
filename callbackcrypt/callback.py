"""
Callback verification flows.

Two inbound flows compose the primitives:
1. URL verification: check the signature over ``echostr``, decrypt it
   and return the echo token.
2. Message decryption: check the signature over the ``Encrypt`` field,
   decrypt it and return the message plus its receiver id.

Replies travel the other way: frame, encrypt, base64, then sign the
ciphertext.
"""

import logging
from typing import Callable, Optional, Tuple

from callbackcrypt.common.envelope import parse_callback_message, parse_envelope, render_reply
from callbackcrypt.common.exceptions import (
    CallbackCryptError,
    SignatureMismatchError,
    TenantMismatchError,
)
from callbackcrypt.common.protocol import CallbackMessage, EncryptedReply, VerificationRequest
from callbackcrypt.common.utils import (
    b64decode,
    b64encode,
    ensure_fresh,
    generate_nonce,
    generate_random_prefix,
    now_s,
)
from callbackcrypt.config import CallbackConfig, load_config
from callbackcrypt.crypto import aes
from callbackcrypt.crypto.frame import build_frame, parse_frame
from callbackcrypt.crypto.keys import decode_key
from callbackcrypt.crypto.sign import calc_signature, verify_request

logger = logging.getLogger(__name__)


def _open(key: bytes, receiver_id: str, ciphertext_b64: str) -> Tuple[str, str]:
    plaintext = aes.decrypt(key, b64decode(ciphertext_b64))
    message, decoded_receiver_id = parse_frame(plaintext)
    if decoded_receiver_id != receiver_id:
        raise TenantMismatchError(
            f"receiver_id={decoded_receiver_id!r} does not match configured receiver id"
        )
    return message, decoded_receiver_id


def verify_url(
    token: str,
    req: VerificationRequest,
    echo_str: str,
    key: bytes,
    receiver_id: str
) -> str:
    """
    Complete the one-time callback URL verification.

    Timestamp freshness is not checked here; see ``ensure_fresh``.

    Args:
        token: Shared secret
        req: Signature parameters from the query string
        echo_str: Base64 ``echostr`` query parameter
        key: 32-byte AES key
        receiver_id: Expected corp/receiver id

    Returns:
        Decrypted echo token, to be sent back verbatim as the response body

    Raises:
        SignatureMismatchError, Base64Error, CipherError, FrameError,
        TenantMismatchError
    """
    if not verify_request(token, req, echo_str):
        raise SignatureMismatchError("URL verification signature mismatch")

    echo, _ = _open(key, receiver_id, echo_str)
    return echo


def decrypt_message(
    token: str,
    key: bytes,
    receiver_id: str,
    req: VerificationRequest,
    ciphertext: str
) -> Tuple[str, str]:
    """
    Authenticate and decrypt one inbound callback message.

    The signature covers the ciphertext, so forged requests are rejected
    before any decryption work.

    Args:
        token: Shared secret
        key: 32-byte AES key
        receiver_id: Expected corp/receiver id
        req: Signature parameters from the query string
        ciphertext: ``Encrypt`` field of the envelope

    Returns:
        Tuple of (message plaintext, receiver_id)

    Raises:
        SignatureMismatchError, Base64Error, CipherError, FrameError,
        TenantMismatchError
    """
    if not verify_request(token, req, ciphertext):
        raise SignatureMismatchError("Message signature mismatch")

    return _open(key, receiver_id, ciphertext)


def encrypt_message(
    token: str,
    key: bytes,
    receiver_id: str,
    reply: str,
    nonce: str,
    timestamp: Optional[int] = None,
    random_source: Callable[[], bytes] = generate_random_prefix
) -> EncryptedReply:
    """
    Encrypt and sign a reply message for the platform.

    Args:
        token: Shared secret
        key: 32-byte AES key
        receiver_id: Corp/receiver id written into the frame
        reply: Reply message (usually an XML document)
        nonce: Nonce to sign with
        timestamp: Unix seconds, defaults to now
        random_source: Source of the frame's 16-byte random prefix

    Returns:
        Encrypted reply with its signature
    """
    if timestamp is None:
        timestamp = now_s()

    frame = build_frame(reply, receiver_id, random_source)

    encrypted = b64encode(aes.encrypt(key, frame))
    signature = calc_signature(token, str(timestamp), nonce, encrypted)
    return EncryptedReply(
        encrypt=encrypted,
        msg_signature=signature,
        timestamp=timestamp,
        nonce=nonce,
    )


class CallbackCrypt:
    """
    Callback crypto bound to one tenant's configuration.

    The decoded key is held for the object's lifetime and never mutated,
    so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        token: str,
        encoding_aes_key: str,
        receiver_id: str,
        timestamp_tolerance: Optional[int] = None
    ):
        self.token = token
        self.key = decode_key(encoding_aes_key)
        self.receiver_id = receiver_id
        self.timestamp_tolerance = timestamp_tolerance

    @classmethod
    def from_config(cls, config: CallbackConfig) -> "CallbackCrypt":
        return cls(
            config.token,
            config.encoding_aes_key,
            config.receiver_id,
            config.timestamp_tolerance,
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "CallbackCrypt":
        return cls.from_config(load_config(env_file))

    def __repr__(self) -> str:
        return f"CallbackCrypt(receiver_id={self.receiver_id!r})"

    def _check_freshness(self, req: VerificationRequest) -> None:
        if self.timestamp_tolerance is not None:
            ensure_fresh(req.timestamp, self.timestamp_tolerance)

    def verify_url(self, req: VerificationRequest, echo_str: str) -> str:
        """Run URL verification and return the echo token."""
        try:
            self._check_freshness(req)
            echo = verify_url(self.token, req, echo_str, self.key, self.receiver_id)
        except CallbackCryptError as e:
            logger.warning("URL verification failed for %s: %s", self.receiver_id, e.code)
            raise
        logger.debug("URL verification succeeded for %s", self.receiver_id)
        return echo

    def decrypt_message(self, req: VerificationRequest, ciphertext: str) -> Tuple[str, str]:
        """Authenticate and decrypt an already-extracted ``Encrypt`` field."""
        try:
            self._check_freshness(req)
            result = decrypt_message(self.token, self.key, self.receiver_id, req, ciphertext)
        except CallbackCryptError as e:
            logger.warning("Callback decryption failed for %s: %s", self.receiver_id, e.code)
            raise
        logger.debug("Callback decrypted for %s", self.receiver_id)
        return result

    def decrypt_envelope(self, req: VerificationRequest, xml_body: str) -> CallbackMessage:
        """
        Parse a raw callback body, decrypt it and decode the typed message.

        Raises:
            EnvelopeError: If the body or the decrypted message is not valid XML
            ProtocolError: Any failure from ``decrypt_message``
        """
        try:
            envelope = parse_envelope(xml_body)
        except CallbackCryptError as e:
            logger.warning("Callback envelope rejected for %s: %s", self.receiver_id, e.code)
            raise
        message, _ = self.decrypt_message(req, envelope.encrypt)
        return parse_callback_message(message)

    def encrypt_message(
        self,
        reply: str,
        nonce: Optional[str] = None,
        timestamp: Optional[int] = None
    ) -> EncryptedReply:
        """Encrypt and sign a reply; a nonce is generated when none is given."""
        if nonce is None:
            nonce = generate_nonce()
        return encrypt_message(self.token, self.key, self.receiver_id, reply, nonce, timestamp)

    def encrypt_reply_xml(
        self,
        reply: str,
        nonce: Optional[str] = None,
        timestamp: Optional[int] = None
    ) -> str:
        """Encrypt a reply and render the XML response body."""
        return render_reply(self.encrypt_message(reply, nonce, timestamp))
