import pytest

from credenta.policy import (
    PassphrasePolicy,
    PolicyViolation,
    classic_password_policy,
    simple_password_policy,
    strong_password_policy,
)


def test_simple_accepts_source_example():
    policy = simple_password_policy()
    assert policy.is_password_valid("Testing1pa$$word") is True
    policy.validate("Testing1pa$$word")


def test_simple_policy_values():
    assert simple_password_policy() == PassphrasePolicy(1, 8, 8, False, False, False)


def test_strong_policy_values():
    assert strong_password_policy() == PassphrasePolicy(3, 5, 12, False, False, False)


def test_classic_policy_values():
    assert classic_password_policy() == PassphrasePolicy(1, 8, 8, True, True, True)


def test_leading_space_rejected():
    with pytest.raises(PolicyViolation, match="leading and trailing"):
        simple_password_policy().validate(" password")


def test_word_count_mismatch():
    with pytest.raises(PolicyViolation, match=r"different word count \(2 != 1\)"):
        simple_password_policy().validate("password password")


def test_short_word_rejected():
    with pytest.raises(PolicyViolation, match="need more letter"):
        simple_password_policy().validate("short")


def test_strong_accepts_three_words():
    assert strong_password_policy().is_password_valid("apple grape melon") is True


def test_strong_rejects_double_space():
    assert strong_password_policy().is_password_valid("apple  grape melon") is False


def test_minimum_total_enforced():
    policy = PassphrasePolicy(word_count=1, letter_count_per_word=1, letter_count_minimum_total=10)
    with pytest.raises(PolicyViolation, match="minimum 10 letters"):
        policy.validate("abcdef")


@pytest.mark.parametrize(
    "candidate, message",
    [
        ("lowercase1$", "upper alphabet"),
        ("Uppercase$$", "requires number"),
        ("Uppercase11", "requires symbol"),
    ],
)
def test_classic_character_classes(candidate, message):
    with pytest.raises(PolicyViolation, match=message):
        classic_password_policy().validate(candidate)


def test_classic_accepts_complete_password():
    assert classic_password_policy().is_password_valid("Testing1pa$$word") is True


def test_violation_is_value_error():
    with pytest.raises(ValueError):
        simple_password_policy().validate("tiny")