"""
Global configuration for the fixture generator.

Settings read from the environment apply to every run in the process.
"""

import os

_SUPPORTED_SELF_VERIFY_MODES: list[str] = ["all", "n24"]

LMS_SELF_VERIFY = os.environ.get("LMS_SELF_VERIFY", "all").lower()
"""
Which generated signatures are re-verified before they are emitted.

- 'all': every signature, for both key sizes (default).
- 'n24': only N=24 signatures, matching the legacy generator.
"""

if LMS_SELF_VERIFY not in _SUPPORTED_SELF_VERIFY_MODES:
    raise ValueError(
        f"Invalid LMS_SELF_VERIFY environment variable: '{LMS_SELF_VERIFY}'. "
        f"Supported values: {_SUPPORTED_SELF_VERIFY_MODES}"
    )

MIN_TESTS: int = 1
"""Smallest number of test vectors a fixture may hold."""

MAX_TESTS: int = 16
"""Largest number of test vectors a fixture may hold."""

DEFAULT_MESSAGE: bytes = b"this is the message I want signed"
"""The message signed under every sampled leaf unless overridden."""
