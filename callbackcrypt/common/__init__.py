"""
Common utilities and protocol definitions for callbackcrypt.
"""

from .protocol import *
from .utils import now_s, b64encode, b64decode, ensure_fresh
from .exceptions import *

__all__ = [
    'now_s',
    'b64encode',
    'b64decode',
    'ensure_fresh',
]
