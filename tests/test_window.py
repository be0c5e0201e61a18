import dataclasses

import pytest

from libotp.window import RFC_NETWORK_DELAY, VerificationWindow


@pytest.mark.parametrize(
    ("window", "initial", "expected"),
    [
        (VerificationWindow(), 5, [5]),
        (VerificationWindow(previous=2, future=1), 1, [1, 0, 2]),
        (VerificationWindow(previous=2, future=2), 10, [10, 9, 8, 11, 12]),
        (VerificationWindow(previous=3), 0, [0]),
        (VerificationWindow(future=3), 0, [0, 1, 2, 3]),
        (VerificationWindow(previous=5), 2, [2, 1, 0]),
        (RFC_NETWORK_DELAY, 100, [100, 99, 101]),
    ],
)
def test_candidates(window: VerificationWindow, initial: int, expected: list) -> None:
    assert list(window.candidates(initial)) == expected


def test_candidates_restartable() -> None:
    window = VerificationWindow(previous=2, future=2)
    assert list(window.candidates(7)) == list(window.candidates(7))


def test_candidates_lazy() -> None:
    candidates = VerificationWindow(previous=1, future=1).candidates(3)
    assert next(candidates) == 3
    assert next(candidates) == 2


def test_rfc_network_delay() -> None:
    assert RFC_NETWORK_DELAY == VerificationWindow(previous=1, future=1)


def test_default_is_exact() -> None:
    assert VerificationWindow() == VerificationWindow(previous=0, future=0)


@pytest.mark.parametrize("kwargs", [{"previous": -1}, {"future": -1}])
def test_negative_bounds_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError, match="must be >= 0"):
        VerificationWindow(**kwargs)


@pytest.mark.parametrize("kwargs", [{"previous": 1.5}, {"future": "1"}, {"future": None}])
def test_bad_bound_types_rejected(kwargs: dict) -> None:
    with pytest.raises(TypeError):
        VerificationWindow(**kwargs)


def test_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        RFC_NETWORK_DELAY.previous = 5  # type: ignore[misc]
