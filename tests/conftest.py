# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the spamdetector test suite. Every fixture writes into a
# temporary directory so the working directory is never touched.
# =============================================================================

import tempfile
from pathlib import Path

import pytest

from spamdetector.config import SpamDetectorSettings
from spamdetector.console import MLConsole
from spamdetector.schemas import EmailSample

HEADER = "Sender\tSubject\tBody\tIsSpam"

SPAM_SUBJECTS = [
    "Win a free prize",
    "Free money now",
    "Claim your free gift",
    "Free vacation winner",
    "Exclusive free offer",
]
SPAM_BODIES = [
    "Click here for your free prize today",
    "Free cash waiting, click now",
    "You are a winner, free reward inside",
    "Act now to get free money",
    "Limited time free bonus, click the link",
]
HAM_SUBJECTS = [
    "Team meeting tomorrow",
    "Project meeting notes",
    "Lunch meeting on Friday",
    "Quarterly report meeting",
    "Meeting agenda update",
]
HAM_BODIES = [
    "Please review the agenda before the meeting",
    "Attached are the notes from our project sync",
    "Can we move lunch to noon on Friday",
    "The quarterly report draft is ready for review",
    "I updated the agenda with the budget discussion",
]


def write_dataset(path: Path, samples, *, header: bool = True) -> Path:
    lines = [HEADER] if header else []
    lines.extend(f"{s.sender}\t{s.subject}\t{s.body}\t{s.is_spam}" for s in samples)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def separable_samples(per_class: int = 20):
    """Spam always talks about free stuff, ham always about meetings; senders overlap."""
    rows = []
    for i in range(per_class):
        sender = f"user{i}@mail.com"
        rows.append(EmailSample(sender, SPAM_SUBJECTS[i % 5], SPAM_BODIES[i % 5], True))
        rows.append(EmailSample(sender, HAM_SUBJECTS[i % 5], HAM_BODIES[i % 5], False))
    return rows


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings(temp_dir):
    """Settings pointing at the temporary directory with a pinned seed."""
    return SpamDetectorSettings.in_directory(temp_dir, seed=7)


@pytest.fixture
def console():
    """A console that prints nothing."""
    return MLConsole(enabled=False)


@pytest.fixture
def base_dataset(settings):
    """A separable base dataset written to the configured data path."""
    return write_dataset(settings.data_path, separable_samples())


@pytest.fixture
def tiny_dataset(settings):
    """The two-row base dataset."""
    return write_dataset(
        settings.data_path,
        [
            EmailSample("a@x.com", "Win now", "Click here", True),
            EmailSample("b@x.com", "Hi", "Let's meet", False),
        ],
    )
