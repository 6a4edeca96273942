"""Tests for the password strength policy."""
import pytest

from contas.domain.passwords import DEFAULT_POLICY, PasswordPolicy, PasswordRule, check_password

LENGTH_MESSAGE = "A senha deve ter pelo menos 8 caracteres."


@pytest.mark.parametrize("raw", ["", "A", "Ab1!", "Abc12!@", "aaaaaaa"])
def test_short_passwords_fail_on_length_first(raw):
    result = check_password(raw)
    assert result.valid is False
    assert result.message == LENGTH_MESSAGE


def test_strong_password_is_valid():
    result = check_password("Abc123!@")
    assert result.valid is True
    assert result.message == ""
    assert bool(result) is True


@pytest.mark.parametrize(
    "raw, fragment",
    [
        ("abc12345", "maiúscula"),
        ("ABC12345", "minúscula"),
        ("Abcdefgh", "número"),
        ("Abcdefg1", "caractere especial"),
    ],
)
def test_first_failing_rule_wins(raw, fragment):
    result = check_password(raw)
    assert result.valid is False
    assert fragment in result.message


def test_none_is_treated_as_empty():
    assert check_password(None).message == LENGTH_MESSAGE


@pytest.mark.parametrize("special", list('!@#$%^&*(),.?":{}|<>'))
def test_every_listed_special_character_counts(special):
    assert check_password(f"Abcdef1{special}").valid


def test_unlisted_symbol_is_not_special():
    result = check_password("Abcdef1_")
    assert not result.valid
    assert "caractere especial" in result.message


def test_default_policy_order():
    assert [rule.name for rule in DEFAULT_POLICY.rules] == ["min_length", "uppercase", "lowercase", "digit", "special"]


def test_custom_policy_reports_its_own_message():
    policy = PasswordPolicy([PasswordRule("no_spaces", "Sem espacos.", lambda value: " " not in value)])
    assert policy.check("a b").message == "Sem espacos."
    assert policy.check("ab").valid
