"""
CPF/CNPJ helpers.

Validation follows the Receita Federal check-digit algorithms. Formatting is
cosmetic: it re-renders whatever digits were typed so far with the CPF or
CNPJ punctuation and never rejects input.
"""
import re

CNPJ_WEIGHTS_1 = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
CNPJ_WEIGHTS_2 = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]


def strip_non_digits(value: str) -> str:
    return re.sub(r"[^0-9]", "", value or "")


def _all_same(digits: str) -> bool:
    return digits == digits[0] * len(digits)


def _cpf_digit(digits: str, length: int) -> int:
    total = sum(int(digits[i]) * (length + 1 - i) for i in range(length))
    remainder = (total * 10) % 11
    return 0 if remainder in (10, 11) else remainder


def _cnpj_digit(digits: str, weights) -> int:
    total = sum(int(d) * w for d, w in zip(digits, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(cpf: str) -> bool:
    digits = strip_non_digits(cpf)
    if len(digits) != 11 or _all_same(digits):
        return False

    if _cpf_digit(digits, 9) != int(digits[9]):
        return False
    return _cpf_digit(digits, 10) == int(digits[10])


def is_valid_cnpj(cnpj: str) -> bool:
    digits = strip_non_digits(cnpj)
    if len(digits) != 14 or _all_same(digits):
        return False

    if _cnpj_digit(digits[:12], CNPJ_WEIGHTS_1) != int(digits[12]):
        return False
    return _cnpj_digit(digits[:13], CNPJ_WEIGHTS_2) == int(digits[13])


def is_valid_document(document: str) -> bool:
    """True for a CPF (11 digits) or CNPJ (14 digits) with valid check digits."""
    digits = strip_non_digits(document)
    if len(digits) == 11:
        return is_valid_cpf(digits)
    if len(digits) == 14:
        return is_valid_cnpj(digits)
    return False


def document_type(document: str):
    digits = strip_non_digits(document)
    if len(digits) == 11:
        return "cpf"
    if len(digits) == 14:
        return "cnpj"
    return None


def format_document(value: str) -> str:
    """
    Applies the CPF mask (000.000.000-00) up to 11 digits and the CNPJ mask
    (00.000.000/0000-00) beyond that. Partial input gets partial punctuation.
    """
    numbers = strip_non_digits(value)

    if len(numbers) <= 11:
        numbers = re.sub(r"([0-9]{3})([0-9])", r"\1.\2", numbers, count=1)
        numbers = re.sub(r"([0-9]{3})([0-9])", r"\1.\2", numbers, count=1)
        return re.sub(r"([0-9]{3})([0-9]{1,2})$", r"\1-\2", numbers, count=1)

    numbers = re.sub(r"([0-9]{2})([0-9])", r"\1.\2", numbers, count=1)
    numbers = re.sub(r"([0-9]{3})([0-9])", r"\1.\2", numbers, count=1)
    numbers = re.sub(r"([0-9]{3})([0-9])", r"\1/\2", numbers, count=1)
    return re.sub(r"([0-9]{4})([0-9]{1,2})$", r"\1-\2", numbers, count=1)


def mask_document(document: str) -> str:
    # Only the last two digits are kept in logs
    digits = strip_non_digits(document)
    if len(digits) <= 2:
        return "*" * len(digits)
    return "*" * (len(digits) - 2) + digits[-2:]
