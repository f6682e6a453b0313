"""
Display metrics and formatting for trending video lists
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional


def _to_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _parse_published(value: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        published = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return published


def format_number(n: int) -> str:
    """Format large numbers: 1500000 → 1.5M"""
    if n >= 1_000_000_000:
        return f"{n / 1_000_000_000:.1f}B"
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.0f}K"
    return str(n)


def format_view_count(view_count) -> str:
    """Upstream view counts arrive as strings: '1534000' → '1.5M views'"""
    return f"{format_number(_to_int(view_count))} views"


def format_relative_time(published_at: str, now: Optional[datetime] = None) -> str:
    """'2 hours ago' style age of an ISO timestamp; absolute date after 30 days."""
    published = _parse_published(published_at)
    if published is None:
        return ''

    now = now or datetime.now(timezone.utc)
    hours = int((now - published).total_seconds() // 3600)

    if hours < 1:
        return 'just now'
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 30:
        return f"{days}d ago"
    return published.strftime('%Y-%m-%d')


def sort_by_metric(videos: List[Dict], sort_by: str) -> List[Dict]:
    """Sort videos by the specified metric. 'rank' keeps chart order."""
    key_map = {
        'views': lambda v: _to_int(v.get('view_count')),
        'recent': lambda v: _parse_published(v.get('published_at', '')) or datetime.min.replace(tzinfo=timezone.utc),
    }
    if sort_by not in key_map:
        return sorted(videos, key=lambda v: v.get('rank', 0))
    return sorted(videos, key=key_map[sort_by], reverse=True)


def feed_stats(videos: List[Dict]) -> Dict:
    """Headline numbers for the overview cards."""
    views = [_to_int(v.get('view_count')) for v in videos]
    channels = {v.get('channel_title', '') for v in videos if v.get('channel_title')}
    return {
        'video_count': len(videos),
        'total_views': sum(views),
        'avg_views': sum(views) / len(views) if views else 0.0,
        'channel_count': len(channels),
    }
