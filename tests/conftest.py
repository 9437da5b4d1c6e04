"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

if "LMS_SELF_VERIFY" not in os.environ:
    os.environ["LMS_SELF_VERIFY"] = "all"

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")
