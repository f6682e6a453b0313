"""
YouTube video category ids → display names
"""

UNKNOWN_CATEGORY = 'Unknown'

CATEGORY_MAP = {
    '1': 'Film & Animation',
    '2': 'Autos & Vehicles',
    '10': 'Music',
    '15': 'Pets & Animals',
    '17': 'Sports',
    '18': 'Short Movies',
    '19': 'Travel & Events',
    '20': 'Gaming',
    '22': 'People & Blogs',
    '23': 'Comedy',
    '24': 'Entertainment',
    '25': 'News & Politics',
    '26': 'Howto & Style',  # beauty / fashion
    '27': 'Education',
    '28': 'Science & Technology',
    '29': 'Nonprofits & Activism',
}


def category_name(category_id) -> str:
    if category_id is None:
        return UNKNOWN_CATEGORY
    return CATEGORY_MAP.get(str(category_id).strip(), UNKNOWN_CATEGORY)
