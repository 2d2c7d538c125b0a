"""Tests for the extractor and its generic fallback."""
import pytest

from rupeeradar.models.transaction import TransactionType
from rupeeradar.parsing.extractor import (
    classify_type,
    extract_generic_transaction,
    extract_transaction,
    normalize_sms,
)
from rupeeradar.utils.dates import today_string
from tests.conftest import HDFC_DEBIT_SMS, OTP_SMS


def test_unlisted_variant_uses_generic_extractor():
    """Test a UPI message from an unknown template still extracts."""
    tx = extract_transaction(
        "Dear customer A/C X4963 debited by 60.0 on date 18Feb25 trf to Jamal Store "
        "Refno 541567581752"
    )

    assert tx is not None
    assert tx.amount == 60
    assert tx.type == TransactionType.DEBIT
    assert tx.date == "18-02-25"
    assert "Jamal Store" in tx.description
    assert tx.description == "Payment to Jamal Store"


def test_otp_is_not_a_transaction():
    """Test OTP messages yield nothing."""
    assert extract_transaction(OTP_SMS) is None


@pytest.mark.parametrize("value", [None, "", "   \n\t", 42])
def test_empty_or_non_text_input(value):
    """Test non-text and blank input yield nothing."""
    assert extract_transaction(value) is None


def test_whitespace_is_normalized():
    """Test line breaks and repeated spaces do not defeat templates."""
    messy = HDFC_DEBIT_SMS.replace(" debited", "\n  debited").replace("AMAZON.", "AMAZON.\n")
    tx = extract_transaction(messy)

    assert tx.bank == "HDFC"
    assert tx.original_sms == HDFC_DEBIT_SMS


def test_generic_credit_with_rupee_sign():
    """Test rupee-sign amounts and credit keywords."""
    tx = extract_transaction("₹1,250.50 credited to your account by NEFT")

    assert tx.amount == 1250.5
    assert tx.type == TransactionType.CREDIT


def test_generic_numeric_date():
    """Test numeric dates are reduced to dd-mm-yy."""
    tx = extract_transaction("Rs 500 received from John on 03/05/2023")

    assert tx.date == "03-05-23"
    assert tx.type == TransactionType.CREDIT
    assert tx.description == "Rs 500 received from John on 03/05/2023"


def test_generic_without_date_uses_today():
    """Test a missing date falls back to today."""
    tx = extract_transaction("Rs.250 paid to Ravi")

    assert tx.date == today_string()
    assert tx.description == "Payment to Ravi"


def test_unknown_month_falls_back():
    """Test an unknown month name does not produce a template match."""
    tx = extract_transaction(
        "Tranx of Rs.100 done on 05Xyz25 to a/c no XX4321 of Ramesh is complete. from SBI A/c XX9876"
    )

    assert tx is not None
    assert tx.amount == 100
    assert tx.date == today_string()
    assert tx.bank == "SBI"


def test_long_description_is_truncated():
    """Test the fallback description keeps the first 50 characters."""
    text = "INR 999 charged towards your monthly premium plan renewal for policy 88812"
    tx = extract_generic_transaction(text)

    assert tx.description == text[:50] + "..."


def test_generic_bank_from_text():
    """Test the bank name is read from the body when present."""
    tx = extract_transaction("Your Kotak account has been debited with INR 300.00")
    assert tx.bank == "Kotak"
    assert tx.type == TransactionType.DEBIT


def test_generic_without_bank():
    """Test the bank stays unset when nothing names it."""
    tx = extract_transaction("Rs.250 paid to Ravi")
    assert tx.bank is None


def test_currency_marker_needs_word_boundary():
    """Test INR inside another word is not an amount marker."""
    assert extract_generic_transaction("Meet at the PRINR 500 building") is None


def test_classify_type_debit_wins():
    """Test debit keywords take precedence over credit keywords."""
    assert classify_type("Rs 200 debited, refund will be credited later") == TransactionType.DEBIT
    assert classify_type("Cashback credited") == TransactionType.CREDIT
    assert classify_type("Rs 200 for your order") == TransactionType.DEBIT


@pytest.mark.parametrize("sms", [
    HDFC_DEBIT_SMS,
    "Rs 500 received from John on 03/05/2023",
])
def test_extraction_is_repeatable(sms):
    """Test two runs over one message differ only in the generated id."""
    first = extract_transaction(sms)
    second = extract_transaction(sms)

    assert first.id != second.id
    assert first.model_dump(exclude={"id"}) == second.model_dump(exclude={"id"})


def test_type_defaults_to_debit():
    """Test a message without debit or credit keywords is a debit."""
    tx = extract_transaction("INR 450 transaction at POS 1234")

    assert tx.amount == 450
    assert tx.type == TransactionType.DEBIT


def test_type_keywords_match_whole_words():
    """Test keywords buried inside longer words do not decide the type."""
    assert classify_type("Sentinel Traders credited Rs 500") == TransactionType.CREDIT
    assert classify_type("Refund of Rs 90 received for this sentence") == TransactionType.CREDIT
    assert classify_type("Rs 2000 withdrawn at ATM") == TransactionType.DEBIT


def test_normalize_sms():
    """Test whitespace collapsing."""
    assert normalize_sms("  a\n\nb\tc  ") == "a b c"
    assert normalize_sms(None) == ""
