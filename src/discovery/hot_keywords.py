"""
Hot keyword discovery
Reads the titles of the current trending videos and asks the LLM which
people, brands, events or memes keep coming up.
"""

from typing import Dict, List, Union

from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr, TypeAdapter, ValidationError

from llm.structured import (
    EMPTY_INPUT,
    MISSING_CREDENTIAL,
    REQUEST_FAILED,
    Outcome,
    failure_reason,
    parse_json,
)

KEYWORD_COUNT = 5
KEYWORD_SAMPLE = 30  # titles sent per request

KEYWORD_PROMPT = """Below are the titles of the videos currently trending on YouTube.
Analyse the list and pick the {count} keywords (people, brands, events, catchphrases, ...)
that are generating the most buzz right now.

Trending videos:
{titles}

For each keyword return:
1. term: the keyword itself (e.g. "NewJeans", "ChatGPT")
2. growth: estimated rise as a signed percentage (e.g. "+150%")
3. description: one sentence on why this keyword is taking off
4. trend: 6 numbers between 0 and 100 sketching its trend, rising towards the most recent

Return ONLY a JSON array, no other text:
[
  {{"term": "keyword", "growth": "+00%", "description": "...", "trend": [10, 20, 30, 40, 50, 60]}}
]"""


class HotKeyword(BaseModel):
    term: StrictStr
    growth: StrictStr
    description: StrictStr
    trend: List[Union[StrictInt, StrictFloat]]


_KEYWORD_LIST = TypeAdapter(List[HotKeyword])


def build_prompt(videos: List[Dict]) -> str:
    titles = '\n'.join(v.get('title', '') for v in videos)
    return KEYWORD_PROMPT.format(count=KEYWORD_COUNT, titles=titles)


def extract_hot_keywords_outcome(generator, videos: List[Dict]) -> Outcome:
    if not videos:
        return Outcome.fallback([], EMPTY_INPUT)
    if generator is None or not generator.configured:
        return Outcome.fallback([], MISSING_CREDENTIAL)

    print(f"  🤖 Extracting hot keywords from {len(videos)} titles via {generator.provider}...")
    try:
        text = generator.generate(build_prompt(videos))
    except Exception as e:
        print(f"⚠️ Failed to fetch hot keywords from {generator.provider}: {e}")
        return Outcome.fallback([], REQUEST_FAILED)

    try:
        keywords = _KEYWORD_LIST.validate_python(parse_json(text))
    except (ValueError, ValidationError) as e:
        print(f"⚠️ Failed to parse keywords JSON: {e}")
        return Outcome.fallback([], failure_reason(e))

    print(f"  ✅ Got {len(keywords)} hot keywords")
    return Outcome.ok(keywords)


def extract_hot_keywords(generator, videos: List[Dict]) -> List[HotKeyword]:
    """Hot keywords in the order the model ranked them; empty when unavailable."""
    return extract_hot_keywords_outcome(generator, videos).value
