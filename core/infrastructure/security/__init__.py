"""Security helpers."""

from .signature_verifier import SignatureVerifier

__all__ = ["SignatureVerifier"]
