"""Brazilian taxpayer identifiers (CPF for individuals, CNPJ for legal entities).

Both use two modulo-11 check digits appended to the base number. Weights are
assigned right-to-left starting at 2; the CNPJ weights wrap back to 2 after 9.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .passwords import ValidationResult

_NON_DIGIT = re.compile(r"\D")


class DocumentKind(str, Enum):
    INDIVIDUAL = "cpf"
    LEGAL_ENTITY = "cnpj"

    @property
    def label(self) -> str:
        return self.value.upper()


def only_digits(raw: str | None) -> str:
    return _NON_DIGIT.sub("", raw or "")


def _check_digit(digits: str, weight_cycle: Optional[int]) -> int:
    total = 0
    for offset, char in enumerate(reversed(digits)):
        step = offset if weight_cycle is None else offset % weight_cycle
        total += int(char) * (step + 2)
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


@dataclass(frozen=True)
class ChecksumScheme:
    """Two-stage weighted modulo-11 scheme."""

    kind: DocumentKind
    base_length: int
    # None means weights keep growing; 8 makes them cycle 2..9.
    weight_cycle: Optional[int] = None

    @property
    def total_length(self) -> int:
        return self.base_length + 2

    def check(self, raw: str | None) -> bool:
        digits = only_digits(raw)
        if len(digits) != self.total_length:
            return False
        if digits == digits[0] * len(digits):
            return False
        base = digits[: self.base_length]
        first = _check_digit(base, self.weight_cycle)
        if first != int(digits[self.base_length]):
            return False
        second = _check_digit(base + str(first), self.weight_cycle)
        return second == int(digits[-1])


SCHEMES: dict[DocumentKind, ChecksumScheme] = {
    DocumentKind.INDIVIDUAL: ChecksumScheme(DocumentKind.INDIVIDUAL, base_length=9),
    DocumentKind.LEGAL_ENTITY: ChecksumScheme(DocumentKind.LEGAL_ENTITY, base_length=12, weight_cycle=8),
}


def check_individual_id(raw: str | None) -> bool:
    """Return True when ``raw`` is a valid CPF (formatting characters ignored)."""
    return SCHEMES[DocumentKind.INDIVIDUAL].check(raw)


def check_legal_entity_id(raw: str | None) -> bool:
    """Return True when ``raw`` is a valid CNPJ (formatting characters ignored)."""
    return SCHEMES[DocumentKind.LEGAL_ENTITY].check(raw)


def validate_document(kind: DocumentKind, raw: str | None) -> ValidationResult:
    scheme = SCHEMES[DocumentKind(kind)]
    if not (raw or "").strip() or not scheme.check(raw):
        return ValidationResult.fail(f"{scheme.kind.label} inválido.")
    return ValidationResult.ok()


def format_document(kind: DocumentKind, raw: str | None) -> str:
    """Mask a valid-length identifier for display; other input is returned stripped."""
    digits = only_digits(raw)
    scheme = SCHEMES[DocumentKind(kind)]
    if len(digits) != scheme.total_length:
        return (raw or "").strip()
    if scheme.kind is DocumentKind.INDIVIDUAL:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"
