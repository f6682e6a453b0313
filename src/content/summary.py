"""
AI video summary: one catchy tagline + three reasons the video is popular.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from llm.structured import (
    MISSING_CREDENTIAL,
    REQUEST_FAILED,
    Outcome,
    extract_braced,
    failure_reason,
    parse_json,
)

SUMMARY_PROMPT = """Run a trend analysis of the YouTube video below, based on its title and description.

Video title: {title}
Video description: {description}

Requirements:
1. Write an intuitive, punchy one-line summary that would catch a viewer's eye.
2. Give exactly 3 sentences, each one a concrete reason why this video is popular right now.

JSON response format:
{{
  "oneLiner": "one-line summary",
  "popularFactor": ["reason 1", "reason 2", "reason 3"]
}}"""


class VideoSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    one_liner: StrictStr = Field(..., alias='oneLiner')
    popular_factor: List[StrictStr] = Field(..., alias='popularFactor', min_length=3, max_length=3)


def build_prompt(title: str, description: str) -> str:
    return SUMMARY_PROMPT.format(title=title, description=description or '')


def parse_summary(text: str) -> VideoSummary:
    """
    Parse the model's answer. When the JSON is wrapped in prose, retry once
    on the first brace-delimited span of the text.
    """
    try:
        data = parse_json(text)
    except ValueError as e:
        print(f"⚠️ JSON parsing failed, attempting fallback extraction: {e}")
        braced = extract_braced(text)
        if braced is None:
            raise
        data = parse_json(braced)
    return VideoSummary.model_validate(data)


def summarize_video_outcome(generator, title: str, description: str) -> Outcome:
    if generator is None or not generator.configured:
        print("⚠️ LLM API key is missing, skipping AI summary")
        return Outcome.fallback(None, MISSING_CREDENTIAL)

    try:
        text = generator.generate(build_prompt(title, description))
    except Exception as e:
        print(f"⚠️ AI summary analysis failed: {e}")
        return Outcome.fallback(None, REQUEST_FAILED)

    try:
        return Outcome.ok(parse_summary(text))
    except (ValueError, ValidationError) as e:
        print(f"⚠️ AI summary unusable: {e}")
        return Outcome.fallback(None, failure_reason(e))


def summarize_video(generator, title: str, description: str) -> Optional[VideoSummary]:
    """Tagline + popularity factors, or None when the summary is unavailable."""
    return summarize_video_outcome(generator, title, description).value
