"""
Unit tests for redirect and webhook signature verification.
"""
import hashlib
import hmac

import pytest

from core.domain.errors import SignatureMismatch
from core.infrastructure.security.signature_verifier import SignatureVerifier

from tests.support import KEY_SECRET, WEBHOOK_SECRET


def _hex(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def _flip_last(signature: str) -> str:
    return signature[:-1] + ("0" if signature[-1] != "0" else "1")


def test_payment_signature_is_hmac_of_order_and_payment(verifier):
    expected = _hex(KEY_SECRET, b"order_ABC|pay_XYZ")
    assert verifier.payment_signature("order_ABC", "pay_XYZ") == expected


def test_valid_payment_signature_passes(verifier):
    signature = _hex(KEY_SECRET, b"order_ABC|pay_XYZ")
    verifier.verify_payment("order_ABC", "pay_XYZ", signature)


@pytest.mark.parametrize(
    "signature",
    [
        None,
        "",
        "deadbeef",
        _hex(KEY_SECRET, b"order_ABC|pay_OTHER"),
        _hex(WEBHOOK_SECRET, b"order_ABC|pay_XYZ"),
        _flip_last(_hex(KEY_SECRET, b"order_ABC|pay_XYZ")),
    ],
    ids=["missing", "empty", "garbage", "other-payment", "wrong-secret", "one-char-flipped"],
)
def test_bad_payment_signature_rejected(verifier, signature):
    with pytest.raises(SignatureMismatch):
        verifier.verify_payment("order_ABC", "pay_XYZ", signature)


def test_valid_webhook_signature_passes(verifier):
    body = b'{"event":"payment.captured"}'
    verifier.verify_webhook(body, _hex(WEBHOOK_SECRET, body))


def test_webhook_signature_with_one_char_flipped_rejected(verifier):
    body = b'{"event":"payment.captured"}'

    with pytest.raises(SignatureMismatch):
        verifier.verify_webhook(body, _flip_last(_hex(WEBHOOK_SECRET, body)))


def test_webhook_signature_covers_raw_bytes(verifier):
    body = b'{"event":"payment.captured"}'
    reformatted = b'{"event": "payment.captured"}'

    with pytest.raises(SignatureMismatch):
        verifier.verify_webhook(reformatted, _hex(WEBHOOK_SECRET, body))


def test_webhook_signed_with_key_secret_rejected(verifier):
    body = b"{}"
    with pytest.raises(SignatureMismatch):
        verifier.verify_webhook(body, _hex(KEY_SECRET, body))


def test_missing_webhook_header_rejected(verifier):
    with pytest.raises(SignatureMismatch):
        verifier.verify_webhook(b"{}", None)


def test_non_ascii_signature_rejected(verifier):
    with pytest.raises(SignatureMismatch):
        verifier.verify_payment("order_ABC", "pay_XYZ", "é" * 64)


@pytest.mark.parametrize("key_secret, webhook_secret", [("", "w"), ("k", "")])
def test_secrets_required(key_secret, webhook_secret):
    with pytest.raises(ValueError):
        SignatureVerifier(key_secret=key_secret, webhook_secret=webhook_secret)
