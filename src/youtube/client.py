"""
YouTube Data API v3 client — trending chart and single-video details
"""

import math
from typing import Dict, List, Optional

import requests

BASE_URL = "https://www.googleapis.com/youtube/v3"
VIDEOS_URL = f"{BASE_URL}/videos"

MAX_RESULTS_PER_PAGE = 50  # API maximum for videos.list
REQUEST_TIMEOUT = 20


class YouTubeClient:
    """
    Thin wrapper over videos.list.

    Without an API key every call short-circuits to an empty result and no
    request is made. Network and HTTP errors are reported and degraded the
    same way, so the views only ever see "no data".
    """

    def __init__(self, api_key: str = '', session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get(self, params: Dict) -> Dict:
        resp = self.session.get(
            VIDEOS_URL,
            params={**params, "key": self.api_key},
            timeout=REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
        return resp.json()

    def get_trending_videos(self, region_code: str = 'KR', limit: int = 100) -> List[Dict]:
        """
        Fetch the most-popular chart for a region.

        Pages through results 50 at a time until `limit` videos are collected
        or the API stops returning a nextPageToken, and never requests more
        than ceil(limit / 50) pages.

        Returns:
            List of video dicts, ranked from 1
        """
        if not self.configured:
            print("⚠️ YouTube API key is missing. Set YOUTUBE_API_KEY in your .env file.")
            return []

        print(f"🔍 Fetching trending videos ({region_code}, top {limit})...")
        videos: List[Dict] = []
        page_token = None
        max_pages = math.ceil(limit / MAX_RESULTS_PER_PAGE)

        try:
            for _ in range(max_pages):
                if len(videos) >= limit:
                    break
                params = {
                    "part": "snippet,statistics",
                    "chart": "mostPopular",
                    "regionCode": region_code,
                    "maxResults": min(MAX_RESULTS_PER_PAGE, limit - len(videos)),
                }
                if page_token:
                    params["pageToken"] = page_token

                data = self._get(params)
                videos.extend(_parse_video(item) for item in data.get("items") or [])

                page_token = data.get("nextPageToken")
                if not page_token:
                    break
        except (requests.RequestException, ValueError) as e:
            print(f"⚠️ Failed to fetch trending videos: {e}")
            return []

        for rank, video in enumerate(videos, start=1):
            video['rank'] = rank

        print(f"✅ Found {len(videos)} trending videos")
        return videos

    def get_video_details(self, video_id: str) -> Optional[Dict]:
        """Fetch one video including its description. None when not found or unavailable."""
        if not self.configured or not video_id:
            return None

        try:
            data = self._get({"part": "snippet,statistics", "id": video_id.strip()})
        except (requests.RequestException, ValueError) as e:
            print(f"⚠️ Failed to fetch video details for {video_id}: {e}")
            return None

        items = data.get("items") or []
        if not items:
            return None
        return _parse_video(items[0])


def _thumbnail_url(thumbnails: Dict) -> str:
    for size in ('high', 'default'):
        url = (thumbnails.get(size) or {}).get('url')
        if url:
            return url
    return ''


def _parse_video(item: Dict) -> Dict:
    snippet = item.get('snippet') or {}
    stats = item.get('statistics') or {}

    return {
        'id': item.get('id', ''),
        'title': snippet.get('title', ''),
        'channel_title': snippet.get('channelTitle', ''),
        'thumbnail': _thumbnail_url(snippet.get('thumbnails') or {}),
        'view_count': stats.get('viewCount', '0'),
        'published_at': snippet.get('publishedAt', ''),
        'category_id': snippet.get('categoryId', ''),
        'description': snippet.get('description', ''),
    }
