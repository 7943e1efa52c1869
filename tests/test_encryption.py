import json

import pytest

from infra.encryption import EncryptionError, SecretCipher
from tests.conftest import TEST_ENCRYPTION_KEY


def test_encrypt_produces_three_hex_parts(cipher):
    token = cipher.encrypt("sk-live-abc")

    iv, ciphertext, tag = token.split(":")
    assert len(bytes.fromhex(iv)) == 12
    assert len(bytes.fromhex(tag)) == 16
    assert len(bytes.fromhex(ciphertext)) == len("sk-live-abc")
    assert cipher.decrypt(token) == "sk-live-abc"


def test_encrypt_uses_fresh_iv(cipher):
    assert cipher.encrypt("same") != cipher.encrypt("same")


def test_decrypt_rejects_tampered_ciphertext(cipher):
    iv, ciphertext, tag = cipher.encrypt("secret").split(":")
    flipped = format(int(ciphertext[:2], 16) ^ 0xFF, "02x") + ciphertext[2:]

    with pytest.raises(EncryptionError, match="authentication failed"):
        cipher.decrypt(f"{iv}:{flipped}:{tag}")


def test_decrypt_rejects_wrong_key(cipher):
    token = cipher.encrypt("secret")
    other = SecretCipher("00" * 32)

    with pytest.raises(EncryptionError):
        other.decrypt(token)


@pytest.mark.parametrize("token", ["", "abc", "aa:bb", "aa:bb:cc:dd"])
def test_decrypt_rejects_bad_format(cipher, token):
    with pytest.raises(EncryptionError, match="format"):
        cipher.decrypt(token)


def test_decrypt_rejects_non_hex(cipher):
    with pytest.raises(EncryptionError, match="encoding"):
        cipher.decrypt("zz:yy:xx")


@pytest.mark.parametrize("key", ["", "abcd", TEST_ENCRYPTION_KEY[:-2], "g" * 64])
def test_invalid_key_is_reported_on_use(key):
    cipher = SecretCipher(key)

    with pytest.raises(EncryptionError, match="openssl rand -hex 32"):
        cipher.encrypt("secret")


def test_decrypt_extra_headers(cipher):
    token = cipher.encrypt(json.dumps({"X-Org": "acme"}))

    assert cipher.decrypt_extra_headers(token) == {"X-Org": "acme"}
    assert cipher.decrypt_extra_headers(None) is None
    assert cipher.decrypt_extra_headers("") is None


@pytest.mark.parametrize("payload", ["not json", '["a"]', '{"X-Retries": 3}'])
def test_decrypt_extra_headers_rejects_bad_payload(cipher, payload):
    with pytest.raises(EncryptionError):
        cipher.decrypt_extra_headers(cipher.encrypt(payload))
