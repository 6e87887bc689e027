import random

import pytest

from config.settings import PASSWORD_DIGITS, PASSWORD_LOWER, PASSWORD_UPPER
from protouch.core.errors import ValidationError
from protouch.password.generator import (
    ALPHABET, PasswordGenerator, generate_password, mask_password,
)

AMBIGUOUS = set("lIO01")


def test_character_classes_exclude_ambiguous_glyphs():
    assert not AMBIGUOUS & set(ALPHABET)
    assert not set(PASSWORD_LOWER) & set(PASSWORD_UPPER)
    assert not set(PASSWORD_UPPER) & set(PASSWORD_DIGITS)


def test_generate_default_length_covers_every_class():
    for _ in range(500):
        password = generate_password()

        assert len(password) == 16
        assert any(c in PASSWORD_LOWER for c in password)
        assert any(c in PASSWORD_UPPER for c in password)
        assert any(c in PASSWORD_DIGITS for c in password)
        assert not AMBIGUOUS & set(password)


@pytest.mark.parametrize("length", [3, 4, 8, 24, 64])
def test_generate_respects_length(length):
    password = generate_password(length)

    assert len(password) == length
    assert set(password) <= set(ALPHABET)


@pytest.mark.parametrize("length", [-1, 0, 2])
def test_generate_rejects_too_short(length):
    with pytest.raises(ValidationError):
        generate_password(length)


@pytest.mark.parametrize("length", [3.5, 16.0, "16", True, None])
def test_generate_rejects_non_integer_length(length):
    with pytest.raises(ValidationError):
        generate_password(length)


def test_generate_does_not_repeat():
    # Probabilistic: 1000 draws from a ~57^16 space
    passwords = {generate_password() for _ in range(1000)}

    assert len(passwords) == 1000


def test_generate_with_seeded_rng_is_reproducible():
    assert generate_password(rng=random.Random(7)) == generate_password(rng=random.Random(7))


def test_guaranteed_characters_are_not_pinned_to_the_front():
    rng = random.Random(1234)
    first_chars = {generate_password(3, rng=rng)[0] for _ in range(300)}

    assert first_chars & set(PASSWORD_LOWER)
    assert first_chars & set(PASSWORD_UPPER)
    assert first_chars & set(PASSWORD_DIGITS)


def test_mask_password():
    assert mask_password("") == "*** • *** • *** • ***"
    assert mask_password("abc") == "•" * 8
    assert mask_password("a" * 16) == "•" * 16
    assert mask_password("a" * 40) == "•" * 24


def test_password_generator_hides_by_default():
    generator = PasswordGenerator(hide_by_default=True, rng=random.Random(3))
    assert generator.display() == "*** • *** • *** • ***"

    password = generator.generate()

    assert generator.display() == "•" * 16
    assert generator.toggle_visibility() is True
    assert generator.display() == password


def test_password_generator_shown_when_not_hiding():
    generator = PasswordGenerator(hide_by_default=False)
    generator.toggle_visibility()

    password = generator.generate(12)

    assert generator.visible is True
    assert generator.display() == password
