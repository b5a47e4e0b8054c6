from types import SimpleNamespace

import pytest

from estate_chat.llm_client import PropertyAssistantLLM
from estate_chat.schemas import Property


class FakeCompletions:
    """Stands in for client.chat.completions; replays canned responses in order."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _function_call_completion(arguments, name="filterProperties"):
    message = SimpleNamespace(
        content=None,
        function_call=SimpleNamespace(name=name, arguments=arguments),
    )
    return SimpleNamespace(choices=[SimpleNamespace(finish_reason="function_call", message=message)])


def _text_completion(text):
    message = SimpleNamespace(content=text, function_call=None)
    return SimpleNamespace(choices=[SimpleNamespace(finish_reason="stop", message=message)])


@pytest.fixture
def text_completion():
    return _text_completion


@pytest.fixture
def function_call_completion():
    return _function_call_completion


@pytest.fixture
def fake_llm():
    """Build a PropertyAssistantLLM backed by canned responses; returns (llm, completions)."""

    def _make(*responses):
        fake = FakeCompletions(responses)
        client = SimpleNamespace(chat=SimpleNamespace(completions=fake))
        return PropertyAssistantLLM(client=client, model="test-model"), fake

    return _make


@pytest.fixture
def gurugram_2bhk():
    return Property(type="2BHK Apartment", size="1200 sqft", price=4500000, location="Gurugram")


@pytest.fixture
def small_catalog(gurugram_2bhk):
    return (
        gurugram_2bhk,
        Property(type="3BHK Apartment", size="1650 sqft", price=8500000, location="Gurugram"),
        Property(type="1BHK Apartment", size="650 sqft", price=2800000, location="Noida"),
        Property(type="Villa", size="2400 sqft", price=5000000, location="Gurugram"),
        Property(type="2BHK Apartment", size="980 sqft", price=4200000, location="Pune"),
    )
