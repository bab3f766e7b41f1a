import pytest

from services.documents import (
    document_type,
    format_document,
    is_valid_cnpj,
    is_valid_cpf,
    is_valid_document,
    mask_document,
    strip_non_digits,
)

VALID_CPFS = ["529.982.247-25", "12345678909", "111.444.777-35"]
INVALID_CPFS = ["529.982.247-24", "12345678900", "111.444.777-53"]
VALID_CNPJS = ["11.222.333/0001-81", "12345678000195"]
INVALID_CNPJS = ["11.222.333/0001-80", "12.345.678/0001-59"]


@pytest.mark.parametrize("cpf", VALID_CPFS)
def test_valid_cpf_reference_vectors(cpf):
    assert is_valid_cpf(cpf)
    assert is_valid_document(cpf)


@pytest.mark.parametrize("cpf", INVALID_CPFS)
def test_invalid_cpf_reference_vectors(cpf):
    assert not is_valid_cpf(cpf)
    assert not is_valid_document(cpf)


@pytest.mark.parametrize("cnpj", VALID_CNPJS)
def test_valid_cnpj_reference_vectors(cnpj):
    assert is_valid_cnpj(cnpj)
    assert is_valid_document(cnpj)


@pytest.mark.parametrize("cnpj", INVALID_CNPJS)
def test_invalid_cnpj_reference_vectors(cnpj):
    assert not is_valid_cnpj(cnpj)
    assert not is_valid_document(cnpj)


@pytest.mark.parametrize("digit", "0123456789")
def test_repeated_digits_are_rejected_for_any_length(digit):
    for length in (1, 11, 12, 14, 20):
        assert not is_valid_document(digit * length)


@pytest.mark.parametrize("raw", ["", "abc", "123", "5299822472", "529982247251", "1122233300018", "112223330001811"])
def test_lengths_other_than_11_or_14_are_rejected(raw):
    assert not is_valid_document(raw)


def test_validation_ignores_punctuation_and_letters():
    assert is_valid_document("CPF: 529 982 247 25")
    assert is_valid_document("cnpj 11/222/333/0001/81")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("", ""),
        ("1", "1"),
        ("1234", "123.4"),
        ("1234567", "123.456.7"),
        ("123456789", "123.456.789"),
        ("1234567890", "123.456.789-0"),
        ("12345678909", "123.456.789-09"),
        ("123.456.789-09", "123.456.789-09"),
        ("112223330001", "11.222.333/0001"),
        ("1122233300018", "11.222.333/0001-8"),
        ("11222333000181", "11.222.333/0001-81"),
    ],
)
def test_format_document_masks_progressively(raw, expected):
    assert format_document(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["", "abc", "12a34", "529.982.247-25", "11222333000181", "1122233300018199", "  98-7/6.5 "],
)
def test_format_document_keeps_the_typed_digits(raw):
    assert strip_non_digits(format_document(raw)) == strip_non_digits(raw)


def test_format_document_is_stable_when_reapplied():
    once = format_document("11222333000181")
    assert format_document(once) == once


def test_document_type_and_mask():
    assert document_type("529.982.247-25") == "cpf"
    assert document_type("11.222.333/0001-81") == "cnpj"
    assert document_type("123") is None
    assert mask_document("529.982.247-25") == "*********25"


def test_only_ascii_digits_count_as_document_digits():
    fullwidth_cpf = "５２９９８２２４７２５"
    arabic_indic_cpf = "٥٢٩٩٨٢٢٤٧٢٥"

    assert strip_non_digits(fullwidth_cpf) == ""
    assert not is_valid_document(fullwidth_cpf)
    assert not is_valid_cpf(fullwidth_cpf)
    assert format_document(arabic_indic_cpf) == ""
    assert strip_non_digits("529.982.247-2５") == "5299822472"
