#!/usr/bin/env python3
"""
Generate an EncodingAESKey

Prints a fresh 43-character key suitable for CALLBACK_ENCODING_AES_KEY
and for pasting into the platform's callback settings.

Usage:
    python scripts/gen_key.py
    python scripts/gen_key.py --env .env
"""

import argparse

from callbackcrypt.crypto.keys import decode_key, generate_encoded_key


def main():
    parser = argparse.ArgumentParser(
        description="Generate a callback EncodingAESKey"
    )
    parser.add_argument(
        "--env",
        help="Append CALLBACK_ENCODING_AES_KEY=<key> to this .env file"
    )

    args = parser.parse_args()

    print("[*] Generating 32-byte AES key...")
    encoded_key = generate_encoded_key()
    key = decode_key(encoded_key)

    print(f"\n[✓] EncodingAESKey: {encoded_key}")
    print(f"    IV (first 16 bytes): {key[:16].hex()}")

    if args.env:
        with open(args.env, "a") as f:
            f.write(f"CALLBACK_ENCODING_AES_KEY={encoded_key}\n")
        print(f"    Written to: {args.env}")
        print("\n[!] Update the platform's callback settings with the same key;")
        print("    messages encrypted under the old key will no longer decrypt.")


if __name__ == "__main__":
    main()
