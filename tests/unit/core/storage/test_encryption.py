"""Tests for the FieldEncryptor (Fernet encryption of daily record values)."""

from __future__ import annotations

import pytest
from cryptography.fernet import Fernet

from lifetrack.core.storage.encryption import EncryptionError, FieldEncryptor


@pytest.fixture
def encryptor() -> FieldEncryptor:
    return FieldEncryptor(Fernet.generate_key().decode())


class TestRoundTrip:
    def test_record_values_round_trip(self, encryptor: FieldEncryptor):
        values = {"sleeping": 7.5, "gym": 1, "software": 0}
        token = encryptor.encrypt(values)
        assert isinstance(token, str)
        assert token != ""
        assert encryptor.decrypt(token) == values

    def test_empty_values_round_trip(self, encryptor: FieldEncryptor):
        assert encryptor.decrypt(encryptor.encrypt({})) == {}

    def test_none_encrypts_to_empty(self, encryptor: FieldEncryptor):
        assert encryptor.encrypt(None) == ""
        assert encryptor.decrypt("") is None

    def test_unserializable_raises(self, encryptor: FieldEncryptor):
        with pytest.raises(EncryptionError, match="Encryption failed"):
            encryptor.encrypt({"when": object()})


class TestKeyValidation:
    def test_empty_key_raises(self):
        with pytest.raises(EncryptionError, match="must not be empty"):
            FieldEncryptor("")

    def test_whitespace_key_raises(self):
        with pytest.raises(EncryptionError, match="must not be empty"):
            FieldEncryptor("   ")

    def test_invalid_key_raises(self):
        with pytest.raises(EncryptionError, match="Invalid encryption key"):
            FieldEncryptor("not-a-valid-fernet-key")


class TestCorruptData:
    def test_wrong_key_cannot_decrypt(self, encryptor: FieldEncryptor):
        token = encryptor.encrypt({"reading": 1})
        other = FieldEncryptor(FieldEncryptor.generate_key())
        with pytest.raises(EncryptionError, match="invalid token"):
            other.decrypt(token)

    def test_tampered_token_raises(self, encryptor: FieldEncryptor):
        token = encryptor.encrypt({"piano": 1})
        with pytest.raises(EncryptionError):
            encryptor.decrypt(token[:-5] + "XXXXX")

    def test_garbage_token_raises(self, encryptor: FieldEncryptor):
        with pytest.raises(EncryptionError):
            encryptor.decrypt("not-a-valid-token")


class TestGenerateKey:
    def test_generated_key_works(self):
        enc = FieldEncryptor(FieldEncryptor.generate_key())
        assert enc.decrypt(enc.encrypt({"gym": 1})) == {"gym": 1}

    def test_each_key_is_unique(self):
        keys = {FieldEncryptor.generate_key() for _ in range(10)}
        assert len(keys) == 10
