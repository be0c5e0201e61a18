import pytest

from libotp.hashmode import HashMode
from libotp.hotp import Hotp
from libotp.keys import InMemoryKey, KeyProvider, ProtectedKey
from libotp.window import RFC_NETWORK_DELAY, VerificationWindow
from tests.vectors import RFC4226_HOTP, RFC4226_SECRET


class CountingKey(KeyProvider):
    def __init__(self, key: bytes) -> None:
        self._inner = InMemoryKey(key)
        self.messages: list[bytes] = []

    def hmac(self, mode: HashMode, message: bytes) -> bytes:
        self.messages.append(message)
        return self._inner.hmac(mode, message)


@pytest.mark.parametrize(("counter", "decimal", "code"), RFC4226_HOTP)
def test_rfc4226_vectors(counter: int, decimal: int, code: str) -> None:
    hotp = Hotp(RFC4226_SECRET)
    assert hotp.compute(counter) == code
    assert hotp.compute_decimal(counter) == decimal


@pytest.mark.parametrize(("counter", "decimal", "code"), RFC4226_HOTP)
def test_rfc4226_vectors_protected_key(counter: int, decimal: int, code: str) -> None:
    hotp = Hotp(ProtectedKey(RFC4226_SECRET))
    assert hotp.compute(counter) == code


def test_defaults_to_sha1() -> None:
    assert Hotp(RFC4226_SECRET).mode is HashMode.SHA1


def test_accepts_mode_name() -> None:
    assert Hotp(RFC4226_SECRET, "sha256").mode is HashMode.SHA256


@pytest.mark.parametrize("mode", list(HashMode))
def test_compute_is_six_digits(mode: HashMode) -> None:
    hotp = Hotp(RFC4226_SECRET, mode)
    for counter in range(50):
        code = hotp.compute(counter)
        assert len(code) == 6
        assert code.isdigit()


def test_compute_is_deterministic() -> None:
    hotp = Hotp(RFC4226_SECRET, HashMode.SHA512)
    assert [hotp.compute(c) for c in range(20)] == [hotp.compute(c) for c in range(20)]


def test_empty_key_rejected() -> None:
    with pytest.raises(ValueError, match="key must not be empty"):
        Hotp(b"")


@pytest.mark.parametrize("key", [None, "12345678901234567890"])
def test_bad_key_type_rejected(key: object) -> None:
    with pytest.raises(TypeError):
        Hotp(key)  # type: ignore[arg-type]


def test_unknown_mode_rejected() -> None:
    with pytest.raises(ValueError, match="unknown hash mode"):
        Hotp(RFC4226_SECRET, "md5")


def test_key_copied_on_construction() -> None:
    key = bytearray(RFC4226_SECRET)
    hotp = Hotp(key)
    key[:] = b"\x00" * len(key)
    assert hotp.compute(0) == "755224"


def test_key_provider_used_by_reference() -> None:
    key = CountingKey(RFC4226_SECRET)
    hotp = Hotp(key)
    hotp.compute(3)
    assert key.messages == [b"\x00\x00\x00\x00\x00\x00\x00\x03"]


def test_verify_exact() -> None:
    hotp = Hotp(RFC4226_SECRET)
    assert hotp.verify(4, "338314") == 4
    assert hotp.verify(4, "254676") is None


def test_verify_no_match_is_none() -> None:
    hotp = Hotp(RFC4226_SECRET)
    assert hotp.verify(0, "000000", RFC_NETWORK_DELAY) is None


def test_verify_match_at_zero_is_not_none() -> None:
    hotp = Hotp(RFC4226_SECRET)
    assert hotp.verify(1, "755224", RFC_NETWORK_DELAY) == 0


@pytest.mark.parametrize(
    ("initial", "code", "window", "expected"),
    [
        (5, "287922", VerificationWindow(future=1), 6),
        (5, "287922", VerificationWindow(previous=1), None),
        (5, "338314", VerificationWindow(previous=1), 4),
        (5, "969429", VerificationWindow(previous=1), None),
        (5, "969429", VerificationWindow(previous=2), 3),
        (5, "520489", VerificationWindow(future=4), 9),
        (5, "520489", VerificationWindow(future=3), None),
        (1, "755224", VerificationWindow(previous=5), 0),
    ],
)
def test_verify_window(
    initial: int, code: str, window: VerificationWindow, expected: "int | None"
) -> None:
    assert Hotp(RFC4226_SECRET).verify(initial, code, window) == expected


def test_verify_initial_wins_over_wider_window() -> None:
    key = CountingKey(RFC4226_SECRET)
    hotp = Hotp(key)
    code = hotp.compute(7)
    key.messages.clear()
    assert hotp.verify(7, code, VerificationWindow(previous=5, future=5)) == 7
    assert len(key.messages) == 1


def test_verify_candidate_order() -> None:
    key = CountingKey(RFC4226_SECRET)
    hotp = Hotp(key)
    assert hotp.verify(1, "000000", VerificationWindow(previous=2, future=1)) is None
    assert [int.from_bytes(m, "big") for m in key.messages] == [1, 0, 2]
