"""Check-digit algorithms: Luhn (card numbers), CPF and CNPJ (Brazilian
personal and business identifiers).

All functions are pure and total: malformed input returns False rather
than raising.
"""

from __future__ import annotations

_CNPJ_FIRST_WEIGHTS: tuple[int, ...] = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
_CNPJ_SECOND_WEIGHTS: tuple[int, ...] = (6, *_CNPJ_FIRST_WEIGHTS)


def _is_ascii_digits(s: str) -> bool:
    # str.isdigit() accepts things like "²"; only 0-9 count here.
    return bool(s) and all("0" <= c <= "9" for c in s)


def all_same_digit(s: str) -> bool:
    """True for strings like '00000000000' (a classic fake identifier)."""
    return bool(s) and s == s[0] * len(s)


def _luhn_sum(digits: list[int]) -> int:
    total = 0
    for i, d in enumerate(reversed(digits)):
        if i % 2 == 1:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total


def luhn_valid(number: str) -> bool:
    """Standard Luhn check over a string of decimal digits."""
    if not _is_ascii_digits(number):
        return False
    return _luhn_sum([int(c) for c in number]) % 10 == 0


def luhn_check_digit(partial: str) -> int:
    """Digit d such that ``partial + str(d)`` passes luhn_valid.

    Raises ValueError for non-digit input (generation helper, not a validator).
    """
    if not _is_ascii_digits(partial):
        raise ValueError(f"luhn_check_digit requires digits, got {partial!r}")
    total = _luhn_sum([int(c) for c in partial + "0"])
    return (10 - total % 10) % 10


def _cpf_digit(digits: list[int], count: int) -> int:
    # Weights run from count+1 down to 2 over the first `count` digits.
    total = sum(d * (count + 1 - i) for i, d in enumerate(digits[:count]))
    dv = 11 - total % 11
    return 0 if dv >= 10 else dv


def personal_id_valid(cpf: str) -> bool:
    """CPF check: 11 digits, not all identical, both check digits match."""
    if len(cpf) != 11 or not _is_ascii_digits(cpf):
        return False
    if all_same_digit(cpf):
        return False
    digits = [int(c) for c in cpf]
    return digits[9] == _cpf_digit(digits, 9) and digits[10] == _cpf_digit(digits, 10)


def _cnpj_digit(digits: list[int], weights: tuple[int, ...]) -> int:
    remainder = sum(d * w for d, w in zip(digits, weights, strict=False)) % 11
    return 0 if remainder < 2 else 11 - remainder


def business_id_valid(cnpj: str) -> bool:
    """CNPJ check: 14 digits, not all identical, both weighted check digits match."""
    if len(cnpj) != 14 or not _is_ascii_digits(cnpj):
        return False
    if all_same_digit(cnpj):
        return False
    digits = [int(c) for c in cnpj]
    return (
        digits[12] == _cnpj_digit(digits[:12], _CNPJ_FIRST_WEIGHTS)
        and digits[13] == _cnpj_digit(digits[:13], _CNPJ_SECOND_WEIGHTS)
    )


def personal_id_check_digits(base: str) -> str:
    """The two CPF check digits for a 9-digit base (generation helper)."""
    if len(base) != 9 or not _is_ascii_digits(base):
        raise ValueError(f"CPF base must be 9 digits, got {base!r}")
    digits = [int(c) for c in base]
    first = _cpf_digit(digits + [0, 0], 9)
    second = _cpf_digit(digits + [first, 0], 10)
    return f"{first}{second}"


def business_id_check_digits(base: str) -> str:
    """The two CNPJ check digits for a 12-digit base (generation helper)."""
    if len(base) != 12 or not _is_ascii_digits(base):
        raise ValueError(f"CNPJ base must be 12 digits, got {base!r}")
    digits = [int(c) for c in base]
    first = _cnpj_digit(digits, _CNPJ_FIRST_WEIGHTS)
    second = _cnpj_digit(digits + [first], _CNPJ_SECOND_WEIGHTS)
    return f"{first}{second}"
