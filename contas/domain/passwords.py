"""Password strength policy.

Rules are evaluated in declared order and evaluation stops at the first
failing rule, so callers always get a single, actionable message.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

MIN_PASSWORD_LENGTH = 8
SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"\d")
_SPECIAL = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: str = ""

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True, "")

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(False, message)

    def __bool__(self) -> bool:
        return self.valid


@dataclass(frozen=True)
class PasswordRule:
    name: str
    message: str
    predicate: Callable[[str], bool]


class PasswordPolicy:
    """Ordered, short-circuiting list of password rules."""

    def __init__(self, rules: list[PasswordRule]):
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[PasswordRule, ...]:
        return self._rules

    def check(self, raw: str | None) -> ValidationResult:
        value = raw or ""
        for rule in self._rules:
            if not rule.predicate(value):
                return ValidationResult.fail(rule.message)
        return ValidationResult.ok()


DEFAULT_POLICY = PasswordPolicy(
    [
        PasswordRule(
            "min_length",
            f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres.",
            lambda value: len(value) >= MIN_PASSWORD_LENGTH,
        ),
        PasswordRule(
            "uppercase",
            "A senha deve conter pelo menos uma letra maiúscula.",
            lambda value: bool(_UPPER.search(value)),
        ),
        PasswordRule(
            "lowercase",
            "A senha deve conter pelo menos uma letra minúscula.",
            lambda value: bool(_LOWER.search(value)),
        ),
        PasswordRule(
            "digit",
            "A senha deve conter pelo menos um número.",
            lambda value: bool(_DIGIT.search(value)),
        ),
        PasswordRule(
            "special",
            "A senha deve conter pelo menos um caractere especial.",
            lambda value: bool(_SPECIAL.search(value)),
        ),
    ]
)


def check_password(raw: str | None) -> ValidationResult:
    """Validate ``raw`` against the default policy."""
    return DEFAULT_POLICY.check(raw)
