"""
Pytest configuration and shared fixtures for SplashWalls tests.

The fakes here stand in for the collaborators the core never implements:
the random source, the background runner, the media store and the
shell's event sources.
"""

from collections import deque

import pytest
from PIL import Image

from splashwalls.types import ImageRecord


class ScriptedRandom:
    """Random source that replays a fixed list of draws."""

    def __init__(self, draws):
        self.draws = deque(draws)
        self.calls = []

    def randrange(self, start, stop):
        self.calls.append((start, stop))
        value = self.draws.popleft()
        assert start <= value < stop
        return value


class ManualRunner:
    """Runner that holds submissions until the test settles them."""

    def __init__(self):
        self.submitted = []
        self.ui_events = deque()
        self.shut_down = False

    def submit(self, func, arg, priority, callback):
        self.submitted.append((func, arg, priority, callback))

    def run(self, i=0):
        """Execute submission `i` inline, queueing its completion."""
        func, arg, priority, callback = self.submitted.pop(i)
        try:
            result, error = func(arg), None
        except Exception as e:
            result, error = None, e
        self.ui_events.append((callback, (arg, result, error)))

    def settle(self, i=0, result=None, error=None):
        """Complete submission `i` with a chosen result or error."""
        func, arg, priority, callback = self.submitted.pop(i)
        self.ui_events.append((callback, (arg, result, error)))

    def poll_ui_events(self, max_events=100):
        count = 0
        while self.ui_events and count < max_events:
            callback, args = self.ui_events.popleft()
            callback(*args)
            count += 1
        return count

    def shutdown(self):
        self.shut_down = True


class RecordingStore:
    """Media store that records identifiers instead of writing files."""

    def __init__(self):
        self.saved = []

    def save(self, identifier):
        self.saved.append(identifier)
        return f"/media/{len(self.saved)}.jpg"


class FakeSource:
    """Event source with the subscribe/unsubscribe contract of the shell."""

    def __init__(self):
        self.callbacks = []

    def subscribe(self, callback):
        self.callbacks.append(callback)
        return lambda: self.callbacks.remove(callback)

    def fire(self, *args):
        for callback in list(self.callbacks):
            callback(*args)


class StaticProvider:
    def __init__(self, records):
        self.records = records
        self.fetches = 0

    def fetch(self):
        self.fetches += 1
        return list(self.records)


@pytest.fixture
def runner():
    return ManualRunner()


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def records():
    """Twenty remote-style records with distinct ids."""
    return [
        ImageRecord(id=100 + i, width=1080, height=1920, author=f"Author {i}")
        for i in range(20)
    ]


@pytest.fixture
def image_dir(tmp_path):
    """
    Folder with three readable images and one file Pillow cannot open.

    Returns:
        Path to the folder
    """
    folder = tmp_path / "walls"
    folder.mkdir()
    Image.new("RGB", (40, 30), (255, 0, 0)).save(folder / "a.jpg")
    Image.new("RGBA", (20, 10), (0, 255, 0, 128)).save(folder / "b.png")

    exif = Image.Exif()
    exif[0x013B] = "Jane Doe"  # Artist
    Image.new("RGB", (64, 48), (0, 0, 255)).save(folder / "c.jpg", exif=exif)

    (folder / "broken.png").write_bytes(b"not an image")
    (folder / "notes.txt").write_text("ignored")
    return folder
