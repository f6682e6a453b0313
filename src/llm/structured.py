"""
Structured-output helpers: turn raw model text into validated documents.
"""

import json
import re
from typing import Any, NamedTuple, Optional

from pydantic import ValidationError

# Outcome.reason values
MISSING_CREDENTIAL = 'missing-credential'
EMPTY_INPUT = 'empty-input'
REQUEST_FAILED = 'request-failed'
UNPARSEABLE = 'unparseable'
INVALID_SHAPE = 'invalid-shape'

_BRACED = re.compile(r'\{[\s\S]*\}')


class Outcome(NamedTuple):
    """Result of an AI call: the value to show, and why it is a fallback if it is one."""
    value: Any
    degraded: bool = False
    reason: Optional[str] = None

    @classmethod
    def ok(cls, value: Any) -> 'Outcome':
        return cls(value)

    @classmethod
    def fallback(cls, value: Any, reason: str) -> 'Outcome':
        return cls(value, True, reason)


def strip_code_fence(text: str) -> str:
    """Strip a markdown code block (```json ... ```) if the model wrapped its answer in one."""
    text = text.strip()
    if text.startswith('```'):
        text = text.split('```')[1]
        if text.startswith('json'):
            text = text[4:]
    return text.strip()


def parse_json(text: str) -> Any:
    return json.loads(strip_code_fence(text))


def extract_braced(text: str) -> Optional[str]:
    """First '{' through last '}' of the text, or None when there is no such span."""
    match = _BRACED.search(text or '')
    return match.group(0) if match else None


def failure_reason(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return INVALID_SHAPE
    if isinstance(error, ValueError):
        # json.JSONDecodeError is a ValueError
        return UNPARSEABLE
    return REQUEST_FAILED
