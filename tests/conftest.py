import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


class FakeGenerator:
    """Stands in for TextGenerator: canned replies, records prompts."""

    def __init__(self, reply='', error=None, provider='gemini', configured=True):
        self.reply = reply
        self.error = error
        self.provider = provider
        self.configured = configured
        self.prompts = []

    def generate(self, prompt, json_output=True):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def unconfigured():
    return FakeGenerator(configured=False, provider='none')
