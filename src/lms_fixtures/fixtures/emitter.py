"""
Renders a fixture as a standalone Rust test program for the target verifier.

The program embeds the message, the public key and every signature as byte
arrays, reinterprets them in place as `LmsPublicKey` / `LmsSignature`, runs
the target's verifier on each vector and asserts the expected outcome.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path

from .errors import OutputError
from .models import OutputFixture

logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Permission bits for `path`: kept if it exists, the umask default otherwise."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

PROGRAM_HEADER = r"""/*++

Licensed under the Apache-2.0 license.

Abstract:

    File contains test cases for LMS signature verification. This file is machine generated.

--*/

#![no_std]
#![no_main]

use caliptra_drivers::{Lms, LmsResult, Sha256};
use caliptra_lms_types::{LmsPublicKey, LmsSignature};
use caliptra_registers::sha256::Sha256Reg;
use caliptra_test_harness::test_suite;

struct LmsTest<'a> {
    test_passed: bool,
    signature: &'a [u8],
}

fn test_lms_random_suite() {
    let mut sha256 = unsafe { Sha256::new(Sha256Reg::new()) };
"""
"""Fixed text up to the start of the generated constants."""

PROGRAM_FOOTER = r"""
        assert!(head.is_empty());
        let lms_sig = thing2[0];
        let verify_result = Lms::default().verify_lms_signature_generic(
            &mut sha256,
            &MESSAGE,
            &lms_public_key,
            &lms_sig,
        );
        if t.test_passed {
            // if the test is supposed to pass then we better have no errors and a successful verification
            let result = verify_result.unwrap();
            assert_eq!(result, LmsResult::Success)
        } else {
            // if the test is supposed to fail it could be for a number of reasons that could raise a variety of errors
            // if the verification didn't error, then extract the LMS result and ensure it is a failed verification
            if verify_result.is_ok() {
                let result = verify_result.unwrap();
                assert_eq!(result, LmsResult::SigVerifyFailed)
            }
        }
    }
}

test_suite! {
    test_lms_random_suite,
}
"""
"""Fixed text after the per-vector reinterpretation."""

PUBLIC_KEY_TYPE = "LmsPublicKey<LMS_N_WORDS>"
SIGNATURE_TYPE = "LmsSignature<LMS_N_WORDS, LMOTS_P, LMS_HEIGHT>"


def rust_bytes(data: bytes) -> str:
    """Format bytes the way Rust's `{:?}` formats a `&[u8]`."""
    return "[" + ", ".join(str(b) for b in data) + "]"


def _structural_lines(fixture: OutputFixture) -> Iterable[str]:
    params = fixture.structural_params
    yield f"\t// LMS structure layout version {params.layout_version}.\n"
    yield f"\tconst LMS_N_WORDS: usize = {params.n_words};\n"
    yield f"\tconst LMOTS_P: usize = {params.p};\n"
    yield f"\tconst LMS_HEIGHT: usize = {params.height};\n"


def _public_key_lines(fixture: OutputFixture) -> Iterable[str]:
    message, public_key = fixture.message, fixture.public_key_bytes
    yield f"\tconst MESSAGE: [u8; {len(message)}] = {rust_bytes(message)};\n"
    yield f"\tconst PUBLIC_KEY_BYTES: [u8; {len(public_key)}] = {rust_bytes(public_key)};\n"
    yield (
        "\tassert_eq!(PUBLIC_KEY_BYTES.len(), "
        f"core::mem::size_of::<{PUBLIC_KEY_TYPE}>());\n"
    )
    yield (
        f"\tlet (head, thing1, _tail): (&[u8], &[{PUBLIC_KEY_TYPE}], &[u8]) = "
        f"unsafe {{ PUBLIC_KEY_BYTES.align_to::<{PUBLIC_KEY_TYPE}>() }};\n"
    )
    yield "\tassert!(head.is_empty());\n"
    yield "\tlet lms_public_key = thing1[0];\n"


def _test_vector_lines(fixture: OutputFixture) -> Iterable[str]:
    yield f"\tconst TESTS: [LmsTest; {len(fixture.test_vectors)}] = [\n"
    for vector in fixture.test_vectors:
        passed = "true" if vector.expect_success else "false"
        yield (
            f"\t\tLmsTest{{ test_passed: {passed}, "
            f"signature: &{rust_bytes(vector.signature_bytes)}}},\n"
        )
    yield "\t];\n"


def _reinterpret_signature_lines() -> Iterable[str]:
    yield "\tfor t in TESTS {\n"
    yield (
        "        assert_eq!(t.signature.len(), "
        f"core::mem::size_of::<{SIGNATURE_TYPE}>());\n"
    )
    yield f"        let (head, thing2, _tail): (&[u8], &[{SIGNATURE_TYPE}], &[u8]) =\n"
    yield f"            unsafe {{ t.signature.align_to::<{SIGNATURE_TYPE}>() }};"


def render_fixture(fixture: OutputFixture) -> str:
    """
    Render the complete test program for a fixture.

    Args:
        fixture: The encoded fixture.

    Returns:
        The program text.
    """
    parts = [PROGRAM_HEADER]
    parts.extend(_structural_lines(fixture))
    parts.extend(_public_key_lines(fixture))
    parts.extend(_test_vector_lines(fixture))
    parts.extend(_reinterpret_signature_lines())
    parts.append(PROGRAM_FOOTER)
    return "".join(parts)


def write_fixture(fixture: OutputFixture, path: Path) -> Path:
    """
    Write the rendered program to `path`, replacing any existing file.

    The text is written to a temporary file next to `path` and moved into
    place, so `path` either holds the complete program or is left untouched.
    A new file gets the permissions the umask allows; a replaced file keeps
    its own.

    Args:
        fixture: The encoded fixture.
        path: Destination file.

    Returns:
        The path written.

    Raises:
        OutputError: If the file cannot be created or written.
    """
    text = render_fixture(fixture)
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp_file:
            tmp_name = tmp_file.name
            tmp_file.write(text)
        # Temporary files are private to the owner.
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputError(f"Cannot write fixture file {path}: {e}") from e

    logger.info("Wrote %d test vectors to %s", len(fixture.test_vectors), path)
    return path
