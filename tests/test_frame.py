import struct

import pytest

from callbackcrypt.common.exceptions import FrameError, TruncatedFrameError
from callbackcrypt.crypto.frame import build_frame, parse_frame

from vectors import FIXED_RANDOM


def fixed_random() -> bytes:
    return FIXED_RANDOM


def test_build_frame_layout() -> None:
    frame = build_frame("test", "rust", fixed_random)
    assert frame == b"1234567890123456" + b"\x00\x00\x00\x04" + b"test" + b"rust"


def test_build_frame_counts_utf8_bytes() -> None:
    frame = build_frame("héllo", "corp", fixed_random)
    assert struct.unpack(">I", frame[16:20])[0] == len("héllo".encode("utf-8"))
    assert parse_frame(frame) == ("héllo", "corp")


def test_build_frame_uses_fresh_random_prefix() -> None:
    assert build_frame("m", "r")[:16] != build_frame("m", "r")[:16]


def test_build_frame_rejects_bad_random_source() -> None:
    with pytest.raises(ValueError):
        build_frame("m", "r", lambda: b"short")


def test_parse_frame_empty_message_and_receiver() -> None:
    assert parse_frame(build_frame("", "", fixed_random)) == ("", "")


def test_parse_frame_truncated() -> None:
    frame = FIXED_RANDOM + struct.pack(">I", 100) + b"only a little"
    with pytest.raises(TruncatedFrameError):
        parse_frame(frame)


@pytest.mark.parametrize("size", [0, 1, 16, 19])
def test_parse_frame_shorter_than_header(size: int) -> None:
    with pytest.raises(FrameError):
        parse_frame(b"\x00" * size)


def test_parse_frame_replaces_invalid_utf8() -> None:
    frame = FIXED_RANDOM + struct.pack(">I", 2) + b"\xff\xfe" + b"\xc3"
    message, receiver_id = parse_frame(frame)
    assert message == "\ufffd\ufffd"
    assert receiver_id == "\ufffd"
