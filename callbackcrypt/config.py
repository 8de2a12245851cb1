"""
Configuration loading.

Settings come from the process environment, optionally seeded from a
``.env`` file:

    CALLBACK_TOKEN                 shared secret used for signatures
    CALLBACK_ENCODING_AES_KEY      43-character EncodingAESKey
    CALLBACK_RECEIVER_ID           expected corp/receiver id
    CALLBACK_TIMESTAMP_TOLERANCE   optional, seconds of accepted clock skew
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from callbackcrypt.common.exceptions import ConfigurationError


class CallbackConfig(BaseModel):
    """Per-tenant callback settings."""
    token: str = Field(..., min_length=1)
    encoding_aes_key: str = Field(..., min_length=1)
    receiver_id: str = Field(..., min_length=1)
    timestamp_tolerance: Optional[int] = Field(default=None, ge=0)

    def __repr__(self) -> str:
        return f"CallbackConfig(receiver_id={self.receiver_id!r}, timestamp_tolerance={self.timestamp_tolerance!r})"

    __str__ = __repr__


def load_config(env_file: Optional[str] = None) -> CallbackConfig:
    """
    Load callback configuration from the environment.

    Args:
        env_file: Optional path to a ``.env`` file; values already in the
            environment take precedence

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If a required variable is missing or invalid
    """
    load_dotenv(env_file)

    values = {
        'token': os.getenv('CALLBACK_TOKEN'),
        'encoding_aes_key': os.getenv('CALLBACK_ENCODING_AES_KEY'),
        'receiver_id': os.getenv('CALLBACK_RECEIVER_ID'),
        'timestamp_tolerance': os.getenv('CALLBACK_TIMESTAMP_TOLERANCE') or None,
    }

    try:
        return CallbackConfig(**values)
    except ValidationError as e:
        fields = ", ".join(str(err['loc'][0]) for err in e.errors())
        raise ConfigurationError(f"Invalid callback configuration: {fields}") from e
