"""Tests for cryptographic utilities."""

import tempfile
from pathlib import Path

import pytest

from stakechain_core.crypto import (
    DIGEST_SIZE,
    ZERO_HASH,
    Ed25519CryptoProvider,
    ValidatorKey,
    default_provider,
    sha3_256,
    verify_with_public_key,
)
from stakechain_core.crypto.hashing import (
    block_payload,
    encode_u64,
    transaction_payload,
)


class TestValidatorKey:
    def test_generate(self) -> None:
        key = ValidatorKey.generate()
        assert len(key.public_key) == 32
        assert len(key.identity_hex) == 64

    def test_sign_and_verify(self) -> None:
        key = ValidatorKey.generate()
        data = b"test message"
        signature = key.sign(data)
        assert len(signature) == 64
        assert key.verify(signature, data)

    def test_verify_wrong_data(self) -> None:
        key = ValidatorKey.generate()
        signature = key.sign(b"correct data")
        assert not key.verify(signature, b"wrong data")

    def test_verify_with_other_key_fails(self) -> None:
        k1 = ValidatorKey.generate()
        k2 = ValidatorKey.generate()
        signature = k1.sign(b"data")
        assert not verify_with_public_key(k2.public_key, signature, b"data")

    def test_verify_malformed_public_key(self) -> None:
        key = ValidatorKey.generate()
        signature = key.sign(b"data")
        assert not verify_with_public_key(b"short", signature, b"data")

    def test_save_and_load(self) -> None:
        key = ValidatorKey.generate()
        with tempfile.TemporaryDirectory() as tmpdir:
            key_path = Path(tmpdir) / "validator.pem"
            key.save(key_path)
            loaded = ValidatorKey.from_file(key_path)
            assert loaded.public_key == key.public_key

    def test_from_private_bytes_is_deterministic(self) -> None:
        seed = bytes(range(32))
        assert (
            ValidatorKey.from_private_bytes(seed).public_key
            == ValidatorKey.from_private_bytes(seed).public_key
        )

    def test_unique_keys(self) -> None:
        assert ValidatorKey.generate().public_key != ValidatorKey.generate().public_key


class TestKeyPersistence:
    def test_load_or_generate_creates_file(self, tmp_path):
        key_file = tmp_path / "deep" / "validator.pem"
        key = ValidatorKey.load_or_generate(key_file)
        assert key_file.exists()
        assert len(key.public_key) == 32

    def test_load_existing(self, tmp_path):
        key_file = tmp_path / "validator.pem"
        k1 = ValidatorKey.load_or_generate(key_file)
        k2 = ValidatorKey.load_or_generate(key_file)
        assert k1.public_key == k2.public_key

    def test_file_permissions(self, tmp_path):
        key_file = tmp_path / "validator.pem"
        ValidatorKey.load_or_generate(key_file)
        assert oct(key_file.stat().st_mode & 0o777) == "0o600"

    def test_non_ed25519_key_rejected(self, tmp_path):
        from cryptography.hazmat.primitives import serialization
        from cryptography.hazmat.primitives.asymmetric import ec

        key_file = tmp_path / "ec.pem"
        ec_key = ec.generate_private_key(ec.SECP256R1())
        key_file.write_bytes(ec_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ))
        with pytest.raises(TypeError):
            ValidatorKey.from_file(key_file)


class TestHashing:
    def test_zero_hash(self) -> None:
        assert ZERO_HASH == b"\x00" * 32
        assert DIGEST_SIZE == 32

    def test_sha3_256_size(self) -> None:
        assert len(sha3_256(b"")) == 32
        assert sha3_256(b"a") != sha3_256(b"b")

    def test_encode_u64_big_endian(self) -> None:
        assert encode_u64(1) == b"\x00" * 7 + b"\x01"
        assert encode_u64(256) == b"\x00" * 6 + b"\x01\x00"

    def test_encode_u64_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            encode_u64(-1)
        with pytest.raises(ValueError):
            encode_u64(1 << 64)

    def test_transaction_payload_layout(self) -> None:
        sender = b"\x01" * 32
        recipient = b"\x02" * 32
        payload = transaction_payload(sender, recipient, 50, 1_700_000_000)
        assert len(payload) == 32 + 32 + 8 + 8
        assert payload[:32] == sender
        assert payload[32:64] == recipient
        assert payload[64:72] == encode_u64(50)
        assert payload[72:] == encode_u64(1_700_000_000)

    def test_block_payload_rejects_bad_previous_hash(self) -> None:
        with pytest.raises(ValueError):
            block_payload(b"\x00" * 31, [])

    def test_block_payload_order_matters(self) -> None:
        a, b = b"\xaa" * 32, b"\xbb" * 32
        assert block_payload(ZERO_HASH, [a, b]) != block_payload(ZERO_HASH, [b, a])


class TestProvider:
    def test_default_provider_is_ed25519(self) -> None:
        assert isinstance(default_provider(), Ed25519CryptoProvider)

    def test_roundtrip(self) -> None:
        provider = Ed25519CryptoProvider()
        key = ValidatorKey.generate()
        digest = provider.digest(b"payload")
        signature = provider.sign(key, digest)
        assert provider.verify(key.public_key, digest, signature)
        assert not provider.verify(key.public_key, provider.digest(b"other"), signature)

    def test_digest_matches_sha3(self) -> None:
        assert Ed25519CryptoProvider().digest(b"x") == sha3_256(b"x")
