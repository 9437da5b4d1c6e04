"""
This package provides the LMS signing and verification service used to
produce fixture signatures.

Keys and signatures travel as RFC 8554 wire bytes; `codec` converts them to
and from the containers.
"""

from .codec import (
    deserialize_public_key,
    deserialize_signature,
    serialize_public_key,
    serialize_signature,
)
from .constants import (
    LMOTS_PARAMETERS,
    LMS_PARAMETERS,
    LmotsAlgorithmType,
    LmotsParameters,
    LmsAlgorithmType,
    LmsParameters,
)
from .containers import LmotsPrivateKey, LmotsSignature, PublicKey, Signature
from .exceptions import LmsError
from .interface import DEFAULT_SIGNING_SERVICE, KeyTree, LmsScheme, SigningService

__all__ = [
    "DEFAULT_SIGNING_SERVICE",
    "KeyTree",
    "LMOTS_PARAMETERS",
    "LMS_PARAMETERS",
    "LmotsAlgorithmType",
    "LmotsParameters",
    "LmotsPrivateKey",
    "LmotsSignature",
    "LmsAlgorithmType",
    "LmsError",
    "LmsParameters",
    "LmsScheme",
    "PublicKey",
    "Signature",
    "SigningService",
    "deserialize_public_key",
    "deserialize_signature",
    "serialize_public_key",
    "serialize_signature",
]
