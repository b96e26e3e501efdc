import pytest

from soundtype.music import DEFAULT_CATALOG, AudioDeviceUnavailable


class FakeOutput:
    """Records what the scheduler hands to a live device."""

    def __init__(self, fail_opens: int = 0) -> None:
        self.fail_opens = fail_opens
        self.opens = 0
        self.closed = False
        self.played = []

    def open(self) -> None:
        self.opens += 1
        if self.opens <= self.fail_opens:
            raise AudioDeviceUnavailable("no device")

    def play(self, samples, sample_rate) -> None:
        self.played.append((samples, sample_rate))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_output():
    return FakeOutput


@pytest.fixture
def piano():
    return DEFAULT_CATALOG.get("piano")
