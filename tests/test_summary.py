import json

from content.summary import VideoSummary, parse_summary, summarize_video, summarize_video_outcome
from llm.structured import INVALID_SHAPE, MISSING_CREDENTIAL, REQUEST_FAILED, UNPARSEABLE

from conftest import FakeGenerator

SUMMARY = {
    "oneLiner": "The comeback everyone was waiting for",
    "popularFactor": ["Catchy hook", "Fandom push", "Perfect timing"],
}


def test_direct_json():
    gen = FakeGenerator(reply=json.dumps(SUMMARY))
    summary = summarize_video(gen, 'title', 'desc')
    assert isinstance(summary, VideoSummary)
    assert summary.one_liner == SUMMARY['oneLiner']
    assert summary.popular_factor == SUMMARY['popularFactor']


def test_json_wrapped_in_prose_is_recovered():
    reply = "Sure! Here is the analysis:\n" + json.dumps(SUMMARY) + "\nHope this helps."
    gen = FakeGenerator(reply=reply)
    outcome = summarize_video_outcome(gen, 'title', 'desc')
    assert not outcome.degraded
    assert outcome.value.popular_factor[1] == 'Fandom push'


def test_no_braces_returns_none():
    gen = FakeGenerator(reply="I could not analyse this video.")
    outcome = summarize_video_outcome(gen, 'title', 'desc')
    assert outcome.value is None
    assert outcome.reason == UNPARSEABLE


def test_broken_braced_span_returns_none():
    gen = FakeGenerator(reply="result: {oneLiner: nope}")
    assert summarize_video(gen, 'title', 'desc') is None


def test_wrong_factor_count_returns_none():
    doc = dict(SUMMARY, popularFactor=["only one"])
    gen = FakeGenerator(reply=json.dumps(doc))
    outcome = summarize_video_outcome(gen, 'title', 'desc')
    assert outcome.value is None
    assert outcome.reason == INVALID_SHAPE


def test_missing_credential(unconfigured):
    outcome = summarize_video_outcome(unconfigured, 'title', 'desc')
    assert outcome.value is None
    assert outcome.reason == MISSING_CREDENTIAL
    assert unconfigured.prompts == []


def test_transport_error():
    gen = FakeGenerator(error=ConnectionError("reset"))
    outcome = summarize_video_outcome(gen, 'title', 'desc')
    assert outcome.value is None
    assert outcome.reason == REQUEST_FAILED


def test_full_description_goes_into_prompt():
    gen = FakeGenerator(reply=json.dumps(SUMMARY))
    description = 'x' * 2000
    summarize_video(gen, 'My title', description)
    assert description in gen.prompts[0]
    assert 'My title' in gen.prompts[0]


def test_parse_summary_accepts_code_fence():
    text = "```json\n" + json.dumps(SUMMARY) + "\n```"
    assert parse_summary(text).one_liner == SUMMARY['oneLiner']
