"""
Dashboard orchestration: who fetches what, and in which order.

Blocking client calls run in worker threads via asyncio.to_thread; results
are applied to the view state on the event loop only, through the state's
token guard.
"""

import asyncio
from typing import Callable, Optional

from analytics.audience_ai import refine_audience
from content.summary import summarize_video
from dashboard.state import READY, FeedState, InsightsState
from discovery.hot_keywords import KEYWORD_SAMPLE, extract_hot_keywords


class DashboardController:

    def __init__(self, youtube, generator, region_code: str = 'KR'):
        self.youtube = youtube
        self.generator = generator
        self.region_code = region_code
        self.feed = FeedState()
        self.insights = InsightsState()

    # ------------------------------------------------------------------
    # Home / Trends
    # ------------------------------------------------------------------

    async def load_feed(self, limit: int = 100) -> int:
        """Fetch the trending list. Returns the feed token for load_keywords()."""
        token = self.feed.begin()
        try:
            videos = await asyncio.to_thread(
                self.youtube.get_trending_videos, self.region_code, limit
            )
        except Exception as e:
            print(f"⚠️ Trending feed failed: {e}")
            self.feed.fail(token)
            return token
        self.feed.resolve_videos(token, videos)
        return token

    async def load_keywords(self, token: int) -> bool:
        """Hot keywords for the list loaded under `token`. Independent of the list itself."""
        if not self.feed.is_current(token) or self.feed.status != READY:
            return False
        sample = self.feed.videos[:KEYWORD_SAMPLE]
        keywords = await asyncio.to_thread(extract_hot_keywords, self.generator, sample)
        return self.feed.resolve_keywords(token, keywords)

    async def refresh_feed(self, limit: int = 100) -> int:
        token = await self.load_feed(limit)
        await self.load_keywords(token)
        return token

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------

    async def analyze(self, video_id: str, on_update: Optional[Callable[[InsightsState], None]] = None) -> int:
        """
        Run one analysis session for a video.

        The heuristic demographics are applied (and `on_update` called) as soon
        as the details arrive; the AI refinement and summary then run
        concurrently and each replaces its own slot when it resolves.
        """
        notify = on_update or (lambda state: None)
        token = self.insights.begin(video_id)
        notify(self.insights)

        try:
            video = await asyncio.to_thread(self.youtube.get_video_details, video_id)
        except Exception as e:
            print(f"⚠️ Analysis failed: {e}")
            if self.insights.fail(token, str(e)):
                notify(self.insights)
            return token

        if not self.insights.resolve_video(token, video):
            return token
        notify(self.insights)
        if video is None:
            return token

        title = video.get('title', '')
        description = video.get('description') or ''
        category_id = video.get('category_id') or '0'

        async def refine():
            demographics = await asyncio.to_thread(
                refine_audience, self.generator, title, description, category_id
            )
            if self.insights.apply_demographics(token, demographics):
                notify(self.insights)

        async def summarize():
            summary = await asyncio.to_thread(
                summarize_video, self.generator, title, description
            )
            if self.insights.apply_summary(token, summary):
                notify(self.insights)

        await asyncio.gather(refine(), summarize())
        return token

    def clear_selection(self):
        self.insights.reset()
