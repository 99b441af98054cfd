"""
PATH: cards/services/crypto.py

CARD NUMBER ENCRYPTION

AES-256-CBC with PKCS7 padding.
- Key: 32 bytes, hex-encoded in settings.CARD_ENCRYPTION_KEY.
- A fresh random 16-byte IV per encryption.
- Stored form: "<iv_hex>:<ciphertext_hex>".
"""

from __future__ import annotations

import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .exceptions import CardDecryptionError

IV_SIZE = 16


def _key() -> bytes:
    raw = (getattr(settings, "CARD_ENCRYPTION_KEY", "") or "").strip()
    try:
        key = bytes.fromhex(raw)
    except ValueError as exc:
        raise ImproperlyConfigured("CARD_ENCRYPTION_KEY must be hex encoded") from exc
    if len(key) != 32:
        raise ImproperlyConfigured("CARD_ENCRYPTION_KEY must decode to 32 bytes")
    return key


def encrypt_card_number(card_number: str) -> str:
    iv = os.urandom(IV_SIZE)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(card_number.encode("utf-8")) + padder.finalize()

    encryptor = Cipher(algorithms.AES(_key()), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    return f"{iv.hex()}:{ciphertext.hex()}"


def decrypt_card_number(stored: str) -> str:
    try:
        iv_hex, ct_hex = (stored or "").split(":", 1)
        iv = bytes.fromhex(iv_hex)
        ciphertext = bytes.fromhex(ct_hex)

        decryptor = Cipher(algorithms.AES(_key()), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        plain = unpadder.update(padded) + unpadder.finalize()
        return plain.decode("utf-8")
    except ValueError as exc:
        raise CardDecryptionError("Stored card number could not be decrypted") from exc
