"""
AI-refined audience prediction
Asks the LLM to estimate the audience from title + description, falling back
to the category heuristic whenever the answer can't be had or can't be trusted.
"""

import json

from pydantic import ValidationError

from analytics.demographics import Demographics, predict_audience
from llm.structured import (
    MISSING_CREDENTIAL,
    REQUEST_FAILED,
    Outcome,
    failure_reason,
    parse_json,
)

DESCRIPTION_LIMIT = 500

AUDIENCE_PROMPT = """Based on the title and description of the YouTube video below,
estimate its core audience (gender and age group).

Video title: "{title}"
Video description: "{description}..."

Respond with JSON in exactly this shape:
{example}

* The gender values must add up to 100, and so must the age values.
* Keep categoryName as "{category_name}" or replace it with a more fitting category label."""


def _example_document(category_name: str) -> str:
    example = {
        "gender": [
            {"name": "Male", "value": 0, "color": "#3B82F6"},
            {"name": "Female", "value": 0, "color": "#FF4B2B"},
        ],
        "age": [{"name": name, "value": 0} for name in ('Teens', '20s', '30s', '40s', '50s+')],
        "categoryName": category_name,
    }
    return json.dumps(example, indent=2)


def build_prompt(title: str, description: str, category_name: str) -> str:
    return AUDIENCE_PROMPT.format(
        title=title,
        description=(description or '')[:DESCRIPTION_LIMIT],
        example=_example_document(category_name),
        category_name=category_name,
    )


def refine_audience_outcome(generator, title: str, description: str, category_id) -> Outcome:
    baseline = predict_audience(category_id)

    if generator is None or not generator.configured:
        return Outcome.fallback(baseline, MISSING_CREDENTIAL)

    prompt = build_prompt(title, description, baseline.category_name)
    try:
        text = generator.generate(prompt)
    except Exception as e:
        print(f"⚠️ AI demographic prediction failed: {e}")
        return Outcome.fallback(baseline, REQUEST_FAILED)

    try:
        refined = Demographics.model_validate(parse_json(text))
    except (ValueError, ValidationError) as e:
        print(f"⚠️ AI demographic prediction returned an unusable document: {e}")
        return Outcome.fallback(baseline, failure_reason(e))

    return Outcome.ok(refined)


def refine_audience(generator, title: str, description: str, category_id) -> Demographics:
    """Audience estimate for one video. Never raises; the heuristic baseline is the fallback."""
    return refine_audience_outcome(generator, title, description, category_id).value
