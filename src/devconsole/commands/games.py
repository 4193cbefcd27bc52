"""Small games and text toys."""

from __future__ import annotations

import random
import re

from devconsole.core.registry import Command, command

CATEGORY = "Games & Entertainment"
DEFAULT_SIDES = 6
NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def game_commands(*, rng: random.Random | None = None) -> list[Command]:
    chooser = rng or random.Random()

    @command("flip", "Flip a coin (heads or tails)", category=CATEGORY)
    def flip(_args: list[str]) -> str:
        return f"Coin flip: {'Heads' if chooser.random() < 0.5 else 'Tails'}"

    @command("dice", "Roll a dice (1-6 or custom sides)", category=CATEGORY)
    def dice(args: list[str]) -> str:
        try:
            sides = int(args[0]) if args else DEFAULT_SIDES
        except ValueError:
            sides = DEFAULT_SIDES
        if sides < 1:
            sides = DEFAULT_SIDES
        return f"Rolled a {sides}-sided dice: {chooser.randint(1, sides)}"

    @command("reverse", "Reverse any text", category=CATEGORY)
    def reverse(args: list[str]) -> str:
        text = " ".join(args)
        if not text:
            return "Usage: reverse <text>"
        return text[::-1]

    @command("palindrome", "Check if a word or phrase is a palindrome", category=CATEGORY)
    def palindrome(args: list[str]) -> str:
        text = NON_ALNUM_RE.sub("", " ".join(args)).lower()
        if not text:
            return "Usage: palindrome <text>"
        return "Yes, it's a palindrome!" if text == text[::-1] else "No, not a palindrome."

    return [flip, dice, reverse, palindrome]
