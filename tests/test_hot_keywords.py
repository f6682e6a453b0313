import json

from discovery.hot_keywords import extract_hot_keywords, extract_hot_keywords_outcome
from llm.structured import EMPTY_INPUT, INVALID_SHAPE, MISSING_CREDENTIAL, REQUEST_FAILED, UNPARSEABLE

from conftest import FakeGenerator

VIDEOS = [
    {'title': 'NewJeans comeback stage'},
    {'title': 'NewJeans dance practice'},
    {'title': 'ChatGPT tips for students'},
]

KEYWORDS = [
    {"term": "NewJeans", "growth": "+150%", "description": "Comeback week.", "trend": [10, 20, 35, 50, 70, 95]},
    {"term": "ChatGPT", "growth": "+40%", "description": "Exam season.", "trend": [30, 32, 35.5, 40, 44, 50]},
]


def test_empty_input_returns_empty_without_request():
    gen = FakeGenerator(reply=json.dumps(KEYWORDS))
    outcome = extract_hot_keywords_outcome(gen, [])
    assert outcome.value == []
    assert outcome.reason == EMPTY_INPUT
    assert gen.prompts == []


def test_no_credential_returns_empty(unconfigured):
    outcome = extract_hot_keywords_outcome(unconfigured, VIDEOS)
    assert outcome.value == []
    assert outcome.reason == MISSING_CREDENTIAL
    assert unconfigured.prompts == []


def test_titles_are_newline_joined_into_prompt():
    gen = FakeGenerator(reply=json.dumps(KEYWORDS))
    extract_hot_keywords(gen, VIDEOS)
    assert 'NewJeans comeback stage\nNewJeans dance practice\nChatGPT tips for students' in gen.prompts[0]


def test_keywords_kept_in_model_order():
    reversed_reply = list(reversed(KEYWORDS))
    gen = FakeGenerator(reply=json.dumps(reversed_reply))
    keywords = extract_hot_keywords(gen, VIDEOS)
    assert [k.term for k in keywords] == ['ChatGPT', 'NewJeans']
    assert keywords[0].trend[2] == 35.5


def test_no_dedup_or_truncation():
    reply = KEYWORDS * 4
    gen = FakeGenerator(reply=json.dumps(reply))
    assert len(extract_hot_keywords(gen, VIDEOS)) == 8


def test_unparseable_reply_discards_everything():
    gen = FakeGenerator(reply='Here are the keywords: ' + json.dumps(KEYWORDS))
    outcome = extract_hot_keywords_outcome(gen, VIDEOS)
    assert outcome.value == []
    assert outcome.reason == UNPARSEABLE


def test_one_bad_entry_discards_the_batch():
    reply = KEYWORDS + [{"term": "Broken", "growth": 12, "description": "x", "trend": []}]
    gen = FakeGenerator(reply=json.dumps(reply))
    outcome = extract_hot_keywords_outcome(gen, VIDEOS)
    assert outcome.value == []
    assert outcome.reason == INVALID_SHAPE


def test_object_instead_of_array_is_rejected():
    gen = FakeGenerator(reply=json.dumps({"keywords": KEYWORDS}))
    assert extract_hot_keywords(gen, VIDEOS) == []


def test_request_error_returns_empty():
    gen = FakeGenerator(error=TimeoutError("slow"))
    outcome = extract_hot_keywords_outcome(gen, VIDEOS)
    assert outcome.value == []
    assert outcome.reason == REQUEST_FAILED
