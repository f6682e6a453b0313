"""
Audience demographics: data model and the category-based heuristic table.

Other channels' viewer statistics are not available through the public API,
so the audience is estimated from the video's category. The estimate is
available synchronously, before any network call, and may later be replaced
by an AI-refined one (see audience_ai.py).
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from analytics.categories import category_name

Share = Union[StrictInt, StrictFloat]

MALE_COLOR = '#3B82F6'
FEMALE_COLOR = '#FF4B2B'

AGE_BRACKETS = ['Teens', '20s', '30s', '40s', '50s', '60+']
KIDS_AGE_BRACKETS = ['Under 10', 'Teens', '20s', '30s (parents)', '40s (parents)', '50+']


class GenderShare(BaseModel):
    name: StrictStr
    value: Share
    color: Optional[StrictStr] = None


class AgeShare(BaseModel):
    name: StrictStr
    value: Share


class Demographics(BaseModel):
    """Gender split, age distribution and category label for one video."""

    model_config = ConfigDict(populate_by_name=True)

    gender: List[GenderShare] = Field(..., min_length=2, max_length=2)
    age: List[AgeShare] = Field(..., min_length=1)
    category_name: StrictStr = Field(..., alias='categoryName', min_length=1)

    def to_document(self) -> dict:
        """camelCase dict, the same shape the model is asked to produce."""
        return self.model_dump(by_alias=True)


# (male, female), age values in bracket order
DEFAULT_PROFILE = ((50, 50), AGE_BRACKETS, (15, 25, 25, 15, 12, 8))

CATEGORY_PROFILES = {
    '20': ((78, 22), AGE_BRACKETS, (35, 40, 15, 6, 3, 1)),        # Gaming
    '28': ((85, 15), AGE_BRACKETS, (10, 45, 30, 10, 4, 1)),       # Science & Technology
    '26': ((12, 88), AGE_BRACKETS, (30, 45, 15, 7, 2, 1)),        # Beauty & Style
    '1': ((45, 55), KIDS_AGE_BRACKETS, (40, 10, 5, 25, 15, 5)),   # Kids / Animation, parents watch too
    '25': ((65, 35), AGE_BRACKETS, (2, 8, 15, 25, 30, 20)),       # News & Politics
}


def predict_audience(category_id) -> Demographics:
    """Heuristic audience estimate for a category id. Unknown ids get the default split."""
    key = '' if category_id is None else str(category_id).strip()
    (male, female), brackets, ages = CATEGORY_PROFILES.get(key, DEFAULT_PROFILE)

    return Demographics(
        gender=[
            GenderShare(name='Male', value=male, color=MALE_COLOR),
            GenderShare(name='Female', value=female, color=FEMALE_COLOR),
        ],
        age=[AgeShare(name=name, value=value) for name, value in zip(brackets, ages)],
        category_name=category_name(category_id),
    )
