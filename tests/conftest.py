import pytest

from vault_notes.utils.http_client import HttpClient

NOW = 1_700_000_000


class FakeClock:
    def __init__(self, now: float = NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def http_client():
    client = HttpClient(timeout=5)
    yield client
    client.close()


class ScriptedInput:
    """Feeds canned answers to the prompt helpers and records the questions."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.questions = []

    def __call__(self, question: str) -> str:
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {question}")
        return self.answers.pop(0)


@pytest.fixture
def scripted_input():
    return ScriptedInput
