#!/usr/bin/env python3
"""
Offline Callback Verification Tool

Replays a captured callback against the configured token, key and
receiver id, reporting which check fails:
1. URL verification (``--echostr``)
2. Message decryption (``--body`` pointing at the raw XML body, or
   ``--encrypt`` with a bare ciphertext value)

Configuration is read from the environment / .env (see callbackcrypt.config).

Usage:
    python scripts/verify_callback.py --signature 5c45... --timestamp 1409659589 \
        --nonce 263014780 --echostr P9nAzCzy...
    python scripts/verify_callback.py --signature 74d9... --timestamp 1411525903 \
        --nonce 461056294 --body callback.xml
    python scripts/verify_callback.py --signature 74d9... --timestamp 1411525903 \
        --nonce 461056294 --encrypt RgqEoJj5...
"""

import argparse
import sys

from callbackcrypt.callback import CallbackCrypt
from callbackcrypt.common.envelope import render_envelope
from callbackcrypt.common.exceptions import CallbackCryptError
from callbackcrypt.common.protocol import CallbackEnvelope, VerificationRequest


def load_body(body_path, encrypt, receiver_id):
    """
    Return the XML callback body to check.

    A bare ``Encrypt`` value (as copied from logs) is wrapped in an
    envelope addressed to the configured receiver id.
    """
    if encrypt is not None:
        return render_envelope(CallbackEnvelope(to_user_name=receiver_id, encrypt=encrypt))
    with open(body_path, "r", encoding="utf-8") as f:
        return f.read()


def main():
    parser = argparse.ArgumentParser(
        description="Check a captured callback against local configuration"
    )
    parser.add_argument("--signature", required=True, help="msg_signature query parameter")
    parser.add_argument("--timestamp", required=True, type=int, help="timestamp query parameter")
    parser.add_argument("--nonce", required=True, type=int, help="nonce query parameter")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--echostr", help="echostr query parameter (URL verification)")
    group.add_argument("--body", help="Path to the raw XML request body")
    group.add_argument("--encrypt", help="Encrypt field value, without its envelope")
    parser.add_argument("--env-file", help="Path to a .env file")

    args = parser.parse_args()

    try:
        crypt = CallbackCrypt.from_env(args.env_file)
    except CallbackCryptError as e:
        print(f"[!] Configuration error ({e.code}): {e}")
        sys.exit(2)

    print(f"[*] Loaded configuration for receiver id: {crypt.receiver_id}")

    req = VerificationRequest(
        signature=args.signature,
        timestamp=args.timestamp,
        nonce=args.nonce,
    )

    try:
        if args.echostr is not None:
            print("\n[*] Running URL verification...")
            echo = crypt.verify_url(req, args.echostr)
            print(f"[✓] Echo token: {echo}")
        else:
            body = load_body(args.body, args.encrypt, crypt.receiver_id)
            print(f"\n[*] Decrypting callback body: {args.body or '--encrypt'}")
            message = crypt.decrypt_envelope(req, body)
            print(f"[✓] Decrypted {type(message).__name__}:")
            print(f"    {message.model_dump_json(indent=2)}")
    except CallbackCryptError as e:
        print(f"[✗] Verification failed ({e.code}): {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
