"""Tiny interactive prompts built on ``input()``."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

InputFunc = Callable[[str], str]

YES_ANSWERS = {"y", "yes"}
NO_ANSWERS = {"n", "no"}


def ask_text(message: str, input_func: InputFunc = input) -> str:
    """Asks until a non-empty answer is given."""

    while True:
        answer = input_func(f"{message} ").strip()
        if answer:
            return answer


def parse_positive_int(value: str) -> Optional[int]:
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number > 0 else None


def ask_positive_int(message: str, label: str = "ID", input_func: InputFunc = input) -> int:
    while True:
        number = parse_positive_int(input_func(f"{message} "))
        if number is not None:
            return number
        print(f"{label} must be a positive integer")


def ask_confirm(message: str, default: bool = True, input_func: InputFunc = input) -> bool:
    """Yes/no question; an empty answer picks ``default``."""

    suffix = "(Y/n)" if default else "(y/N)"
    while True:
        answer = input_func(f"{message} {suffix} ").strip().lower()
        if not answer:
            return default
        if answer in YES_ANSWERS:
            return True
        if answer in NO_ANSWERS:
            return False


def ask_choice(message: str, choices: Sequence[str], default: str, input_func: InputFunc = input) -> str:
    """Picks one of ``choices`` by name or 1-based number."""

    listing = ", ".join(f"{index} for {choice}" for index, choice in enumerate(choices, start=1))
    while True:
        answer = input_func(f"{message} ({listing}) [{default}] ").strip().lower()
        if not answer:
            return default
        if answer in choices:
            return answer
        number = parse_positive_int(answer)
        if number is not None and number <= len(choices):
            return choices[number - 1]
        print(f"Please answer one of: {', '.join(choices)}")
