"""Passphrase policies and their validation."""

from __future__ import annotations

from dataclasses import dataclass

_UPPER = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset("0123456789")
_SYMBOLS = frozenset("`'\"\\[]{},./;':!@#$%^&*()_+-=")


class PolicyViolation(ValueError):
    """Raised when a passphrase breaks a policy rule."""


@dataclass(frozen=True)
class PassphrasePolicy:
    """The rules a passphrase must satisfy."""

    word_count: int
    letter_count_per_word: int
    letter_count_minimum_total: int
    must_have_upper_alphabet: bool = False
    must_have_numeric: bool = False
    must_have_symbol: bool = False

    def validate(self, password: str) -> None:
        """Raise PolicyViolation if ``password`` breaks any rule."""
        stripped = password.strip()
        if len(stripped) != len(password):
            raise PolicyViolation("contain leading and trailing spaces")
        words = stripped.split(" ")
        if len(words) != self.word_count:
            raise PolicyViolation(f"different word count ({len(words)} != {self.word_count})")
        if any(len(word) < self.letter_count_per_word for word in words):
            raise PolicyViolation("need more letter in passphrase word")
        if self.letter_count_minimum_total > len(stripped):
            raise PolicyViolation(f"passphrase needs minimum {self.letter_count_minimum_total} letters")
        chars = set(password)
        if self.must_have_upper_alphabet and not chars & _UPPER:
            raise PolicyViolation("passphrase requires upper alphabet")
        if self.must_have_numeric and not chars & _DIGITS:
            raise PolicyViolation("passphrase requires number")
        if self.must_have_symbol and not chars & _SYMBOLS:
            raise PolicyViolation("passphrase requires symbol")

    def is_password_valid(self, password: str) -> bool:
        """Tell whether ``password`` satisfies every rule."""
        try:
            self.validate(password)
        except PolicyViolation:
            return False
        return True


def simple_password_policy() -> PassphrasePolicy:
    """One word of at least 8 characters, no character class requirements."""
    return PassphrasePolicy(
        word_count=1,
        letter_count_per_word=8,
        letter_count_minimum_total=8,
    )


def strong_password_policy() -> PassphrasePolicy:
    """Three space-separated words of at least 5 characters, 12 characters in total."""
    return PassphrasePolicy(
        word_count=3,
        letter_count_per_word=5,
        letter_count_minimum_total=12,
    )


def classic_password_policy() -> PassphrasePolicy:
    """One word of at least 8 characters with an upper-case letter, a digit and a symbol."""
    return PassphrasePolicy(
        word_count=1,
        letter_count_per_word=8,
        letter_count_minimum_total=8,
        must_have_upper_alphabet=True,
        must_have_numeric=True,
        must_have_symbol=True,
    )