"""Cryptographic services consumed by the fixture generator."""
