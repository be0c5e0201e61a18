import hmac
from concurrent.futures import ThreadPoolExecutor

import pytest

from libotp.hashmode import HashMode
from libotp.keys import InMemoryKey, KeyProvider, ProtectedKey

SECRET = b"12345678901234567890"
PROVIDERS = [InMemoryKey, ProtectedKey]


@pytest.mark.parametrize("provider", PROVIDERS)
@pytest.mark.parametrize("mode", list(HashMode))
def test_hmac(provider, mode: HashMode) -> None:
    key = provider(SECRET)
    message = b"\x00\x00\x00\x00\x00\x00\x00\x01"
    assert key.hmac(mode, message) == hmac.digest(SECRET, message, mode.hashlib_name)


@pytest.mark.parametrize("provider", PROVIDERS)
def test_is_key_provider(provider) -> None:
    assert isinstance(provider(SECRET), KeyProvider)


def test_protocol_structural_check() -> None:
    class Custom:
        def hmac(self, mode: HashMode, message: bytes) -> bytes:
            return b""

    assert isinstance(Custom(), KeyProvider)
    assert not isinstance(SECRET, KeyProvider)


@pytest.mark.parametrize("provider", PROVIDERS)
def test_empty_key(provider) -> None:
    with pytest.raises(ValueError, match="key must not be empty"):
        provider(b"")


@pytest.mark.parametrize("provider", PROVIDERS)
@pytest.mark.parametrize("key", ["secret", None, 42])
def test_bad_key_type(provider, key: object) -> None:
    with pytest.raises(TypeError, match="key must be bytes"):
        provider(key)


@pytest.mark.parametrize("provider", PROVIDERS)
def test_repr_hides_key(provider) -> None:
    text = repr(provider(SECRET))
    assert SECRET.decode() not in text
    assert "length=20" in text


@pytest.mark.parametrize("provider", PROVIDERS)
def test_bytearray_copied(provider) -> None:
    source = bytearray(SECRET)
    key = provider(source)
    source[:] = bytes(len(source))
    assert key.hmac(HashMode.SHA1, b"msg") == hmac.digest(SECRET, b"msg", "sha1")


def test_protected_key_not_stored_in_plaintext() -> None:
    key = ProtectedKey(SECRET)
    assert SECRET not in key._ciphertext
    before = key._ciphertext
    key.hmac(HashMode.SHA1, b"msg")
    assert key._ciphertext != before
    assert len(key._ciphertext) == len(SECRET)


def test_protected_key_repeated_use() -> None:
    key = ProtectedKey(SECRET)
    expected = hmac.digest(SECRET, b"msg", "sha256")
    for _ in range(100):
        assert key.hmac(HashMode.SHA256, b"msg") == expected


def test_protected_key_concurrent_use() -> None:
    key = ProtectedKey(SECRET)
    messages = [i.to_bytes(8, "big") for i in range(200)]
    expected = [hmac.digest(SECRET, m, "sha1") for m in messages]

    def compute(message: bytes) -> bytes:
        return key.hmac(HashMode.SHA1, message)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(compute, messages))
    assert results == expected
