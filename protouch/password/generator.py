"""
Throwaway password suggestions.

Passwords are drawn from the `random` module (Mersenne Twister), which is not
a cryptographic source. The app only offers these as suggestions; real secrets
belong in the user's password manager. Pass `rng=random.SystemRandom()` where a
CSPRNG is wanted.
"""

import random
from typing import Optional

from config.logging_config import get_logger
from config.settings import (
    PASSWORD_LOWER, PASSWORD_UPPER, PASSWORD_DIGITS,
    PASSWORD_DEFAULT_LENGTH, PASSWORD_MIN_LENGTH,
    PASSWORD_MASK_CHAR, PASSWORD_MASK_MIN, PASSWORD_MASK_MAX,
    PASSWORD_MASK_PLACEHOLDER,
)
from protouch.core.errors import ValidationError

logger = get_logger(__name__)

CHARACTER_CLASSES = (PASSWORD_LOWER, PASSWORD_UPPER, PASSWORD_DIGITS)
ALPHABET = "".join(CHARACTER_CLASSES)


def generate_password(length: int = PASSWORD_DEFAULT_LENGTH,
                      rng: Optional[random.Random] = None) -> str:
    """
    Generate a password with at least one lowercase, uppercase and digit.

    Args:
        length: Number of characters (>= 3)
        rng: Random source (module-level `random` by default)

    Returns:
        Password of exactly `length` characters

    Raises:
        ValidationError: If length is not an integer or is below 3
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise ValidationError(f"Password length must be an integer, got {length!r}")
    if length < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Password length must be at least {PASSWORD_MIN_LENGTH}, got {length}"
        )

    rng = rng or random
    chars = [rng.choice(cls) for cls in CHARACTER_CLASSES]
    while len(chars) < length:
        chars.append(rng.choice(ALPHABET))

    # Fisher-Yates, so the per-class characters are not stuck at the front
    for i in range(len(chars) - 1, 0, -1):
        j = rng.randrange(i + 1)
        chars[i], chars[j] = chars[j], chars[i]

    return "".join(chars)


def mask_password(password: str) -> str:
    """Hidden-state rendering of a password."""
    if not password:
        return PASSWORD_MASK_PLACEHOLDER
    size = max(PASSWORD_MASK_MIN, min(PASSWORD_MASK_MAX, len(password)))
    return PASSWORD_MASK_CHAR * size


class PasswordGenerator:
    """
    Holds the last suggestion and whether it is currently shown.
    """

    def __init__(self, hide_by_default: bool = True,
                 rng: Optional[random.Random] = None):
        """
        Args:
            hide_by_default: Start every new password masked
            rng: Random source passed through to generate_password
        """
        self.hide_by_default = hide_by_default
        self.rng = rng
        self.password = ""
        self.visible = not hide_by_default

    def generate(self, length: int = PASSWORD_DEFAULT_LENGTH) -> str:
        """Generate a new password and reset visibility to the preference."""
        self.password = generate_password(length, rng=self.rng)
        self.visible = not self.hide_by_default
        logger.debug(f"Generated {length}-character password")
        return self.password

    def toggle_visibility(self) -> bool:
        """Flip between shown and masked; returns the new state."""
        self.visible = not self.visible
        return self.visible

    def display(self) -> str:
        """Text the password screen shows right now."""
        if self.password and self.visible:
            return self.password
        return mask_password(self.password)
