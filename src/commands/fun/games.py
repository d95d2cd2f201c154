"""
HarborBot - Fun Command Logic
=============================

Pure helpers behind the fun commands. Anything deterministic (/howgay,
/ship) derives only from user IDs so the same pair always gets the same
answer.
"""

import random
from typing import Optional, Tuple

import pyfiglet

from src.core.constants import ASCII_MAX_OUTPUT
from src.core.config import EmbedColors


# =============================================================================
# 8-Ball / Q
# =============================================================================

EIGHT_BALL_ANSWERS = [
    "It is certain.",
    "It is decidedly so.",
    "Without a doubt.",
    "Yes – definitely.",
    "You may rely on it.",
    "As I see it, yes.",
    "Most likely.",
    "Outlook good.",
    "Yes.",
    "Signs point to yes.",
    "Reply hazy, try again.",
    "Ask again later.",
    "Better not tell you now.",
    "Cannot predict now.",
    "Concentrate and ask again.",
    "Don't count on it.",
    "My reply is no.",
    "My sources say no.",
    "Outlook not so good.",
    "Very doubtful.",
]

FALLBACK_ANSWERS = [
    "YES!", "NO!", "ABSOLUTELY!", "DEFINITELY NOT!", "MAYBE...",
    "ASK AGAIN LATER", "WITHOUT A DOUBT", "I DOUBT IT",
    "OUTLOOK GOOD", "OUTLOOK NOT SO GOOD", "SIGNS POINT TO YES",
    "UNLIKELY", "VERY LIKELY", "I HAVE NO IDEA",
]


def as_question(text: str) -> str:
    text = text.strip()
    return text if text.endswith("?") else f"{text}?"


# =============================================================================
# Meters
# =============================================================================

def progress_bar(percentage: int, filled: str, empty: str, length: int = 20) -> str:
    count = round(percentage / 100 * length)
    return filled * count + empty * (length - count)


def gay_percentage(user_id: int) -> int:
    """0-100 from the last eight digits of the user ID."""
    return int(str(user_id)[-8:]) % 101


def gay_colour(percentage: int) -> int:
    if percentage < 30:
        return EmbedColors.SUCCESS
    if percentage < 70:
        return EmbedColors.WARNING
    return EmbedColors.ERROR


def ship_percentage(first_id: int, second_id: int) -> int:
    """Character-code sum of both IDs, mod 101."""
    return sum(ord(c) for c in f"{first_id}{second_id}") % 101


def ship_name(first: str, second: str) -> str:
    """First half (rounded up) of one name plus the second half of the other."""
    return first[:(len(first) + 1) // 2] + second[len(second) // 2:]


def ship_verdict(percentage: int) -> str:
    if percentage < 10:
        return "Yikes! There's almost nothing here..."
    if percentage < 30:
        return "Not great... maybe just stay friends?"
    if percentage < 50:
        return "There's potential, but it'll take work!"
    if percentage < 70:
        return "Pretty good match! You two should hang out more."
    if percentage < 90:
        return "Great match! You two are meant for each other!"
    return "Perfect match! When's the wedding?"


def ship_colour(percentage: int) -> int:
    if percentage < 30:
        return EmbedColors.ERROR
    if percentage < 70:
        return EmbedColors.WARNING
    return EmbedColors.SUCCESS


# =============================================================================
# Text
# =============================================================================

def mock_text(text: str, rng: Optional[random.Random] = None) -> str:
    """Randomly upper-case about 40% of the characters."""
    rng = rng or random
    return "".join(c.upper() if rng.random() <= 0.4 else c.lower() for c in text)


FONTS = {
    "Standard": "standard",
    "ANSI Shadow": "ansi_shadow",
    "Small": "small",
    "Big": "big",
    "3D": "3-d",
    "Doom": "doom",
    "Graffiti": "graffiti",
    "Star Wars": "starwars",
}


class AsciiTooLarge(ValueError):
    """Rendered art would not fit in one message."""


def render_ascii(text: str, font: str = "standard") -> str:
    """
    Render text with a figlet font.

    Raises:
        pyfiglet.FontNotFound: Unknown font.
        AsciiTooLarge: Output longer than fits in a code block.
    """
    art = pyfiglet.figlet_format(text, font=font).rstrip()
    if len(art) > ASCII_MAX_OUTPUT:
        raise AsciiTooLarge(len(art))
    return art


# =============================================================================
# Rock Paper Scissors
# =============================================================================

RPS_CHOICES = {
    "rock": "🪨",
    "paper": "📄",
    "scissors": "✂️",
}

_BEATS = {"rock": "scissors", "paper": "rock", "scissors": "paper"}


def rps_outcome(player: str, bot: str) -> Tuple[str, str]:
    """(result text, embed kind) from the player's point of view."""
    if player == bot:
        return "It's a tie!", "warning"
    if _BEATS[player] == bot:
        return "You win!", "success"
    return "I win!", "error"


__all__ = [
    "EIGHT_BALL_ANSWERS",
    "FALLBACK_ANSWERS",
    "as_question",
    "progress_bar",
    "gay_percentage",
    "gay_colour",
    "ship_percentage",
    "ship_name",
    "ship_verdict",
    "ship_colour",
    "mock_text",
    "FONTS",
    "AsciiTooLarge",
    "render_ascii",
    "RPS_CHOICES",
    "rps_outcome",
]
