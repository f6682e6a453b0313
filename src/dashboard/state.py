"""
View state for the dashboard.

Each fetch captures a token when it starts and hands it back with its result.
A result is only applied while its token is still the active one, so a late
answer for a video the user has already left never lands on the new video.
"""

from typing import Dict, List, Optional

from analytics.demographics import Demographics, predict_audience

IDLE = 'idle'
LOADING = 'loading'
READY = 'ready'
FAILED = 'failed'

NO_DATA_MESSAGE = "Couldn't load trending data."
VIDEO_NOT_FOUND_MESSAGE = "Video not found. Check the video ID and try again."


class FeedState:
    """Trending list + hot keywords shown on Home and Trends."""

    def __init__(self):
        self.status = IDLE
        self.videos: List[Dict] = []
        self.keywords: list = []
        self.error: Optional[str] = None
        self.generation = 0

    def begin(self) -> int:
        self.generation += 1
        self.status = LOADING
        self.error = None
        return self.generation

    def is_current(self, token: int) -> bool:
        return token == self.generation

    def resolve_videos(self, token: int, videos: List[Dict]) -> bool:
        if not self.is_current(token):
            return False
        if not videos:
            self.status = FAILED
            self.error = NO_DATA_MESSAGE
            self.videos = []
            self.keywords = []
            return True
        self.status = READY
        self.videos = videos
        # keywords belong to the previous list
        self.keywords = []
        return True

    def fail(self, token: int, message: str = NO_DATA_MESSAGE) -> bool:
        if not self.is_current(token):
            return False
        self.status = FAILED
        self.error = message
        self.videos = []
        self.keywords = []
        return True

    def resolve_keywords(self, token: int, keywords: list) -> bool:
        if not self.is_current(token):
            return False
        self.keywords = list(keywords)
        return True


class InsightsState:
    """One video-analysis session at a time: details, demographics, AI summary."""

    def __init__(self):
        self.session = 0
        self._clear()

    def _clear(self):
        self.status = IDLE
        self.video_id: Optional[str] = None
        self.video: Optional[Dict] = None
        self.demographics: Optional[Demographics] = None
        self.summary = None
        self.ai_refining = False
        self.summary_pending = False
        self.error: Optional[str] = None

    def is_current(self, token: int) -> bool:
        return token == self.session

    def begin(self, video_id: str) -> int:
        self.session += 1
        self.status = LOADING
        self.video_id = video_id
        self.summary = None
        self.summary_pending = False
        self.ai_refining = False
        self.error = None
        return self.session

    def resolve_video(self, token: int, video: Optional[Dict]) -> bool:
        """Details arrived: show the heuristic baseline straight away."""
        if not self.is_current(token):
            return False
        if not video:
            self.status = FAILED
            self.video = None
            self.demographics = None
            self.error = VIDEO_NOT_FOUND_MESSAGE
            return True
        self.status = READY
        self.video = video
        self.demographics = predict_audience(video.get('category_id') or '0')
        self.ai_refining = True
        self.summary_pending = True
        return True

    def fail(self, token: int, message: str) -> bool:
        if not self.is_current(token):
            return False
        self.status = FAILED
        self.error = message
        self.ai_refining = False
        self.summary_pending = False
        return True

    def apply_demographics(self, token: int, demographics: Demographics) -> bool:
        if not self.is_current(token) or self.status != READY:
            return False
        self.demographics = demographics
        self.ai_refining = False
        return True

    def apply_summary(self, token: int, summary) -> bool:
        if not self.is_current(token) or self.status != READY:
            return False
        self.summary = summary
        self.summary_pending = False
        return True

    def reset(self):
        """No video selected: drop all derived state and orphan in-flight work."""
        self.session += 1
        self._clear()
