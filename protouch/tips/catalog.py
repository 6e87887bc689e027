"""
Static catalog of security tips. Compiled in, never persisted.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Tip:
    """One catalog entry."""
    id: str
    title: str
    text: str


_RAW_TIPS = (
    "Use different passwords for each account.",
    "Enable two-factor authentication wherever possible.",
    "Avoid clicking on unknown email links.",
    "Update your software and apps regularly.",
    "Don’t reuse old passwords.",
    "Use a password manager or iCloud Keychain.",
    "Lock your phone and computer when not in use.",
    "Avoid using public Wi-Fi for sensitive actions.",
    "Watch out for phishing messages and fake websites.",
    "Don’t share your passwords with anyone.",
    "Use biometric authentication if available.",
    "Monitor your accounts for suspicious activity.",
    "Avoid using birthdays or names in passwords.",
    "Back up your data securely and regularly.",
    "Log out from services you no longer use.",
)

TIP_CATALOG: Tuple[Tip, ...] = tuple(
    Tip(id=str(n), title=f"Tip #{n}", text=text)
    for n, text in enumerate(_RAW_TIPS, start=1)
)

_TIPS_BY_ID = {tip.id: tip for tip in TIP_CATALOG}


def get_tip(tip_id: str) -> Optional[Tip]:
    """Look up a tip by id; None if the id is not in the catalog."""
    return _TIPS_BY_ID.get(tip_id)


def is_known_tip(tip_id: str) -> bool:
    return tip_id in _TIPS_BY_ID


def share_text(tip: Tip) -> str:
    """Message handed to the share sheet."""
    return f"{tip.title}\n{tip.text}"
