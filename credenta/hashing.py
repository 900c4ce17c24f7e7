"""Creating and checking stored password verifications."""

from __future__ import annotations

import hashlib
import hmac
from enum import Enum

import nacl.exceptions
import nacl.pwhash.argon2id as _argon2id

_ARGON_OPSLIMIT = 1
_ARGON_MEMLIMIT = 64 * 1024 * 1024


class VerificationMethod(str, Enum):
    """How a user's password is stored."""

    PLAIN = "PLAIN"
    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"
    ARGON = "ARGON"


_DIGESTS = {
    VerificationMethod.MD5: hashlib.md5,
    VerificationMethod.SHA1: hashlib.sha1,
    VerificationMethod.SHA256: hashlib.sha256,
    VerificationMethod.SHA512: hashlib.sha512,
}


def _as_method(method: VerificationMethod | str) -> VerificationMethod | None:
    try:
        return VerificationMethod(method)
    except ValueError:
        return None


def _digest_form(method: VerificationMethod, password: str) -> str:
    if not password:
        raise ValueError("password too short")
    # Stored form: the password bytes followed by the digest of empty input, hex-encoded.
    empty_digest = _DIGESTS[method]().digest()
    return (password.encode("utf-8") + empty_digest).hex()


def make_verification(method: VerificationMethod | str, password: str) -> str:
    """Return the stored verification of ``password`` under ``method``."""
    resolved = _as_method(method)
    if resolved is None:
        raise ValueError("unknown verification method")
    if resolved is VerificationMethod.PLAIN:
        if not password:
            raise ValueError("password too short")
        return password
    if resolved is VerificationMethod.ARGON:
        hashed = _argon2id.str(
            password.encode("utf-8"),
            opslimit=_ARGON_OPSLIMIT,
            memlimit=_ARGON_MEMLIMIT,
        )
        return hashed.decode("ascii")
    return _digest_form(resolved, password)


def match_verification(method: VerificationMethod | str, password: str, hashed: str) -> bool:
    """Tell whether ``password`` matches the stored verification ``hashed``."""
    resolved = _as_method(method)
    if resolved is None:
        return False
    if resolved is VerificationMethod.PLAIN:
        return password == hashed
    if resolved is VerificationMethod.ARGON:
        try:
            return _argon2id.verify(hashed.encode("ascii"), password.encode("utf-8"))
        except (nacl.exceptions.InvalidkeyError, nacl.exceptions.CryptoError, ValueError, UnicodeError):
            return False
    try:
        expected = _digest_form(resolved, password)
    except ValueError:
        return False
    return hmac.compare_digest(expected, hashed)