from itertools import permutations

from callbackcrypt.common.protocol import VerificationRequest
from callbackcrypt.crypto.sign import calc_signature, check_signature, verify_request

from vectors import (
    HANDSHAKE_ECHO_STR,
    HANDSHAKE_NONCE,
    HANDSHAKE_SIGNATURE,
    HANDSHAKE_TIMESTAMP,
    HANDSHAKE_TOKEN,
    PLATFORM_ENCRYPT,
    PLATFORM_NONCE,
    PLATFORM_SIGNATURE,
    PLATFORM_TIMESTAMP,
)


def test_calc_signature_handshake_vector() -> None:
    sig = calc_signature(
        HANDSHAKE_TOKEN, str(HANDSHAKE_TIMESTAMP), str(HANDSHAKE_NONCE), HANDSHAKE_ECHO_STR
    )
    assert sig == HANDSHAKE_SIGNATURE
    assert len(sig) == 40


def test_calc_signature_message_vector() -> None:
    sig = calc_signature(
        HANDSHAKE_TOKEN, str(PLATFORM_TIMESTAMP), str(PLATFORM_NONCE), PLATFORM_ENCRYPT
    )
    assert sig == PLATFORM_SIGNATURE


def test_calc_signature_short_fields() -> None:
    assert calc_signature("test", "123456", "test", "rust") == "d6056f2bb3ad3e30f4afa5ef90cc9ddcdc7b7b27"


def test_calc_signature_ignores_argument_position() -> None:
    fields = ("QDG6eK", "1409659589", "263014780", HANDSHAKE_ECHO_STR)
    for perm in permutations(fields):
        assert calc_signature(*perm) == HANDSHAKE_SIGNATURE


def test_calc_signature_sorts_as_strings_not_numbers() -> None:
    # Numerically 9 < 10, but "10" < "9" as strings.
    assert calc_signature("t", "9", "10", "p") == calc_signature("t", "10", "9", "p")
    assert calc_signature("t", "9", "10", "p") != calc_signature("t", "9", "100", "p")


def test_check_signature_accepts_int_fields() -> None:
    assert check_signature(
        HANDSHAKE_TOKEN, HANDSHAKE_TIMESTAMP, HANDSHAKE_NONCE, HANDSHAKE_ECHO_STR, HANDSHAKE_SIGNATURE
    )


def test_verify_request_rejects_wrong_token() -> None:
    req = VerificationRequest(
        signature=HANDSHAKE_SIGNATURE, timestamp=HANDSHAKE_TIMESTAMP, nonce=HANDSHAKE_NONCE
    )
    assert verify_request(HANDSHAKE_TOKEN, req, HANDSHAKE_ECHO_STR)
    assert not verify_request("other", req, HANDSHAKE_ECHO_STR)
    assert not verify_request(HANDSHAKE_TOKEN, req, HANDSHAKE_ECHO_STR + "x")
