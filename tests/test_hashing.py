import pytest

from credenta.hashing import VerificationMethod, make_verification, match_verification

PASSWORD = "password"
OTHER_PASSWORD = "secret"


@pytest.mark.parametrize("method", list(VerificationMethod))
def test_make_then_match(method):
    hashed = make_verification(method, PASSWORD)
    assert match_verification(method, PASSWORD, hashed) is True


@pytest.mark.parametrize("method", list(VerificationMethod))
def test_wrong_password_does_not_match(method):
    hashed = make_verification(method, PASSWORD)
    assert match_verification(method, OTHER_PASSWORD, hashed) is False


def test_plain_stores_password_as_is():
    assert make_verification(VerificationMethod.PLAIN, PASSWORD) == PASSWORD


def test_md5_stored_form():
    assert make_verification(VerificationMethod.MD5, "a") == "61d41d8cd98f00b204e9800998ecf8427e"


def test_sha256_stored_form():
    assert make_verification(VerificationMethod.SHA256, "a") == (
        "61e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_method_given_as_string():
    hashed = make_verification("SHA1", PASSWORD)
    assert match_verification(VerificationMethod.SHA1, PASSWORD, hashed) is True


def test_argon_hash_format_and_salting():
    first = make_verification(VerificationMethod.ARGON, PASSWORD)
    second = make_verification(VerificationMethod.ARGON, PASSWORD)
    assert first.startswith("$argon2id$")
    assert first != second


@pytest.mark.parametrize(
    "method",
    [
        VerificationMethod.PLAIN,
        VerificationMethod.MD5,
        VerificationMethod.SHA1,
        VerificationMethod.SHA256,
        VerificationMethod.SHA512,
    ],
)
def test_empty_password_rejected(method):
    with pytest.raises(ValueError, match="password too short"):
        make_verification(method, "")


def test_unknown_method_rejected():
    with pytest.raises(ValueError, match="unknown verification method"):
        make_verification("ROT13", PASSWORD)


def test_unknown_method_never_matches():
    assert match_verification("ROT13", PASSWORD, PASSWORD) is False


def test_garbage_argon_hash_does_not_match():
    assert match_verification(VerificationMethod.ARGON, PASSWORD, "not a hash") is False