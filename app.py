"""
YouTube Trend Insights - Main Streamlit App
Trending videos, AI hot keywords and predicted audience demographics
"""

import asyncio
import os
import sys
from datetime import datetime

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from config.settings import Settings, export_streamlit_secrets
from llm.text_generator import TextGenerator
from youtube.client import YouTubeClient
from dashboard.controller import DashboardController
from dashboard.state import IDLE, LOADING, READY, FAILED
from analytics.metrics import (
    feed_stats,
    format_number,
    format_relative_time,
    format_view_count,
    sort_by_metric,
)

# Streamlit Cloud: copy secrets to os.environ so Settings.from_env() sees them
export_streamlit_secrets(st.secrets)

FEED_LIMIT = 100
FEED_TTL_SECS = 3600
HOME_PREVIEW = 5
REGIONS = ["KR", "US", "JP", "GB", "DE", "FR", "BR", "IN"]

NAV_HOME = "🏠 Home"
NAV_TRENDS = "📈 Trends"
NAV_INSIGHTS = "👥 Insights"
NAV_SETTINGS = "⚙️ Settings"

# Page configuration
st.set_page_config(
    page_title="YouTube Trend Insights",
    page_icon="📺",
    layout="wide"
)


# Initialize services
@st.cache_resource
def get_settings():
    return Settings.from_env()


@st.cache_resource
def get_youtube():
    return YouTubeClient(get_settings().youtube_api_key)


@st.cache_resource
def get_generator():
    return TextGenerator.from_settings(get_settings())


def init_session_state():
    """Initialize session state variables"""
    if 'controller' not in st.session_state:
        st.session_state.controller = DashboardController(
            get_youtube(), get_generator(), get_settings().region_code
        )
    if 'nav' not in st.session_state:
        st.session_state.nav = NAV_HOME
    if 'selected_video_id' not in st.session_state:
        st.session_state.selected_video_id = None
    if 'feed_loaded_at' not in st.session_state:
        st.session_state.feed_loaded_at = None
    if 'feed_token' not in st.session_state:
        st.session_state.feed_token = None
    if 'keywords_loaded_for' not in st.session_state:
        st.session_state.keywords_loaded_for = None
    if 'render_seq' not in st.session_state:
        st.session_state.render_seq = 0


def _select_video(video_id: str):
    """Button callback: open a video in the Insights view."""
    st.session_state.selected_video_id = video_id
    st.session_state.nav = NAV_INSIGHTS


def _clear_video():
    st.session_state.selected_video_id = None
    st.session_state.video_query = ""
    st.session_state.controller.clear_selection()


def _analyze_query():
    query = st.session_state.get('video_query', '').strip()
    if query:
        # re-running the same id starts a fresh session
        st.session_state.controller.clear_selection()
        st.session_state.selected_video_id = query


def _next_key(prefix: str) -> str:
    st.session_state.render_seq += 1
    return f"{prefix}_{st.session_state.render_seq}"


# ─────────────────────────────────────────────────────────────────────────── #
#  Feed loading                                                               #
# ─────────────────────────────────────────────────────────────────────────── #

def ensure_feed(force: bool = False):
    """Load the trending list when missing, stale, or on demand."""
    controller = st.session_state.controller
    loaded_at = st.session_state.feed_loaded_at
    stale = loaded_at is None or (datetime.now() - loaded_at).total_seconds() > FEED_TTL_SECS

    if force or stale or controller.feed.status in (IDLE, LOADING):
        with st.spinner("🔍 Fetching trending videos..."):
            token = asyncio.run(controller.load_feed(FEED_LIMIT))
        st.session_state.feed_token = token
        st.session_state.feed_loaded_at = datetime.now()
        st.session_state.keywords_loaded_for = None


def ensure_keywords(placeholder):
    """Keywords load after the list is on screen and never block it."""
    controller = st.session_state.controller
    token = st.session_state.feed_token
    if controller.feed.status != READY or st.session_state.keywords_loaded_for == token:
        return

    with placeholder.container():
        with st.spinner("🤖 Extracting hot keywords..."):
            asyncio.run(controller.load_keywords(token))
    st.session_state.keywords_loaded_for = token


# ─────────────────────────────────────────────────────────────────────────── #
#  Home                                                                       #
# ─────────────────────────────────────────────────────────────────────────── #

def display_home():
    st.title("Overview")
    st.markdown("*Today's YouTube trends at a glance: latest video stats and hot keywords.*")

    ensure_feed()
    feed = st.session_state.controller.feed
    stats = feed_stats(feed.videos)

    m1, m2, m3, m4 = st.columns(4)
    with m1:
        st.metric("Trending Videos", stats['video_count'])
    with m2:
        st.metric("Avg Views", format_number(int(stats['avg_views'])))
    with m3:
        st.metric("Total Views", format_number(stats['total_views']))
    with m4:
        st.metric("Channels", stats['channel_count'])

    st.divider()
    col_videos, col_keywords = st.columns([2, 1])

    with col_videos:
        st.subheader(f"🔥 Top {HOME_PREVIEW} Trending")
        if feed.status == FAILED:
            st.warning(f"⚠️ {feed.error}")
        else:
            for video in feed.videos[:HOME_PREVIEW]:
                display_video_row(video, key_prefix="home")

    with col_keywords:
        st.subheader("🔍 Rising Keywords")
        keyword_slot = st.empty()
        ensure_keywords(keyword_slot)
        with keyword_slot.container():
            display_keyword_list(feed.keywords)

        if feed.keywords:
            st.info(
                f"**AI INSIGHT** · '{feed.keywords[0].term}' is the keyword with the largest "
                "share among the current trending videos."
            )
        else:
            st.caption("Keywords are extracted from trending video titles when an LLM key is configured.")


def display_video_row(video: dict, key_prefix: str):
    """One trending video: rank, thumbnail, title, stats and an Analyze button"""
    col_rank, col_thumb, col_info, col_action = st.columns([0.5, 1.5, 5, 1.2])

    with col_rank:
        st.markdown(f"### {video.get('rank', '')}")
    with col_thumb:
        if video.get('thumbnail'):
            st.image(video['thumbnail'], use_container_width=True)
    with col_info:
        st.markdown(f"**{video.get('title', '')}**")
        st.caption(
            f"{video.get('channel_title', '')} · {format_view_count(video.get('view_count'))}"
            f" · {format_relative_time(video.get('published_at', ''))}"
        )
    with col_action:
        st.button(
            "Analyze",
            key=f"{key_prefix}_analyze_{video.get('rank', '')}_{video.get('id', '')}",
            on_click=_select_video,
            args=(video.get('id', ''),),
            use_container_width=True,
        )


def display_keyword_list(keywords: list):
    if not keywords:
        st.caption("No keywords yet.")
        return
    for kw in keywords:
        col_term, col_growth = st.columns([3, 1])
        with col_term:
            st.markdown(f"• **{kw.term}**")
        with col_growth:
            st.markdown(f":green[{kw.growth}]")


# ─────────────────────────────────────────────────────────────────────────── #
#  Trends                                                                     #
# ─────────────────────────────────────────────────────────────────────────── #

def display_trends():
    col_title, col_refresh = st.columns([5, 1])
    with col_title:
        st.title("Trend Report")
        st.markdown("*Live popular videos and search trends, analysed in depth.*")
    with col_refresh:
        refresh = st.button("🔄 Refresh", use_container_width=True)

    ensure_feed(force=refresh)
    feed = st.session_state.controller.feed

    tab_popular, tab_keywords = st.tabs([f"🔥 Top {FEED_LIMIT}", "🔍 Rising Keywords"])

    with tab_popular:
        if feed.status == FAILED:
            st.warning(f"⚠️ {feed.error}")
        else:
            sort_label = st.selectbox("🎯 Sort by", ["Chart rank", "Views", "Most recent"])
            sort_by = {"Chart rank": "rank", "Views": "views", "Most recent": "recent"}[sort_label]
            for video in sort_by_metric(feed.videos, sort_by):
                display_video_row(video, key_prefix="trends")
                st.markdown("---")

    with tab_keywords:
        keyword_slot = st.empty()
        ensure_keywords(keyword_slot)
        with keyword_slot.container():
            display_keyword_cards(feed.keywords)


def display_keyword_cards(keywords: list):
    """Keyword cards with growth, rationale and a sparkline of the trend"""
    if not keywords:
        st.info("No rising keywords available. Configure an LLM API key in Settings to enable them.")
        return

    cols = st.columns(2)
    for idx, kw in enumerate(keywords):
        with cols[idx % 2]:
            with st.container(border=True):
                head, growth = st.columns([3, 1])
                with head:
                    st.markdown(f"### #{idx + 1} {kw.term}")
                with growth:
                    st.metric("Growth", kw.growth)
                st.caption(kw.description)
                if kw.trend:
                    fig = px.line(y=kw.trend, markers=True, height=140)
                    fig.update_layout(
                        margin=dict(l=0, r=0, t=0, b=0),
                        xaxis=dict(visible=False),
                        yaxis=dict(visible=False, range=[0, 100]),
                    )
                    st.plotly_chart(fig, use_container_width=True, key=_next_key(f"spark_{idx}"))


# ─────────────────────────────────────────────────────────────────────────── #
#  Insights                                                                   #
# ─────────────────────────────────────────────────────────────────────────── #

def display_insights():
    st.title("Audience Insights")
    st.markdown(
        "*Predicts viewer statistics and demographics from the video's category "
        "and content.*"
    )

    col_input, col_btn = st.columns([4, 1])
    with col_input:
        st.text_input(
            "Video ID",
            placeholder="Enter a YouTube video ID to analyse...",
            key="video_query",
            label_visibility="collapsed",
        )
    with col_btn:
        st.button("Analyze", type="primary", use_container_width=True, on_click=_analyze_query)

    controller = st.session_state.controller
    state = controller.insights
    selected = st.session_state.selected_video_id

    if not selected:
        if state.video_id is not None:
            controller.clear_selection()
        st.info("👆 Enter a video ID, or pick a video from Home / Trends")
        return

    st.button("← Back", key="insights_back", on_click=_clear_video)

    slot = st.empty()

    def render(current):
        with slot.container():
            display_analysis(current)

    needs_run = (
        state.video_id != selected
        or state.status == LOADING
        or state.ai_refining
        or state.summary_pending
    )
    if needs_run:
        asyncio.run(controller.analyze(selected, on_update=render))
    else:
        render(state)


def display_analysis(state):
    if state.status == LOADING:
        st.markdown("#### ⏳ Analyzing data...")
        return
    if state.status == FAILED:
        st.error(f"❌ {state.error}")
        return
    if state.status != READY or state.video is None:
        return

    video = state.video
    demographics = state.demographics

    col_thumb, col_info = st.columns([1, 3])
    with col_thumb:
        if video.get('thumbnail'):
            st.image(video['thumbnail'], use_container_width=True)
    with col_info:
        st.caption(demographics.category_name if demographics else '')
        st.subheader(video.get('title', ''))
        st.caption(
            f"{video.get('channel_title', '')} · {format_view_count(video.get('view_count'))}"
            f" · {format_relative_time(video.get('published_at', ''))}"
        )

    # --- AI summary ---
    with st.container(border=True):
        st.markdown("**✨ AI Trend Summary**")
        if state.summary is not None:
            st.markdown(f"> \"{state.summary.one_liner}\"")
            for i, factor in enumerate(state.summary.popular_factor, 1):
                st.markdown(f"{i}. {factor}")
        elif state.summary_pending:
            st.caption("🤖 Generating summary...")
        else:
            st.caption("AI summary unavailable for this video.")

    if state.ai_refining:
        st.caption("🤖 AI is refining the audience estimate...")

    if demographics is None:
        return

    col_gender, col_age = st.columns(2)

    with col_gender:
        st.markdown("**Gender Split**")
        gender = demographics.gender
        fig = go.Figure(go.Pie(
            labels=[g.name for g in gender],
            values=[g.value for g in gender],
            hole=0.65,
            marker=dict(colors=[g.color for g in gender]) if all(g.color for g in gender) else None,
        ))
        fig.update_layout(margin=dict(l=0, r=0, t=10, b=0), height=300)
        st.plotly_chart(fig, use_container_width=True, key=_next_key("gender"))
        st.caption(f"{gender[0].name} {gender[0].value} : {gender[1].value} {gender[1].name}")

    with col_age:
        st.markdown("**Age Distribution**")
        fig = px.bar(
            x=[a.name for a in demographics.age],
            y=[a.value for a in demographics.age],
            labels={'x': 'Age', 'y': '%'},
            height=300,
        )
        fig.update_traces(marker_color='#FF0000')
        fig.update_layout(margin=dict(l=0, r=0, t=10, b=0))
        st.plotly_chart(fig, use_container_width=True, key=_next_key("age"))


# ─────────────────────────────────────────────────────────────────────────── #
#  Settings                                                                   #
# ─────────────────────────────────────────────────────────────────────────── #

def display_settings():
    st.title("Settings")

    settings = get_settings()
    generator = get_generator()
    controller = st.session_state.controller

    st.subheader("🔑 API Keys")
    k1, k2 = st.columns(2)
    with k1:
        st.metric("YouTube Data API", "✅ Configured" if settings.youtube_api_key else "❌ Missing")
    with k2:
        label = f"✅ {generator.provider}" if generator.configured else "❌ Missing"
        st.metric("LLM Provider", label)
    if generator.configured:
        st.caption(f"Model: `{generator.model}`")
    st.caption("Keys are read from .env locally or from Streamlit secrets on the cloud.")

    st.divider()
    st.subheader("🌍 Region")
    current = controller.region_code if controller.region_code in REGIONS else REGIONS[0]
    region = st.selectbox("Trending chart region", REGIONS, index=REGIONS.index(current))
    if region != controller.region_code:
        controller.region_code = region
        st.session_state.feed_loaded_at = None
        st.success(f"Region set to {region}. The trending list will reload.")

    st.divider()
    st.subheader("🔄 Data Refresh")
    st.caption(f"Trending data is re-fetched from the YouTube API every {FEED_TTL_SECS // 60} minutes.")
    loaded_at = st.session_state.feed_loaded_at
    if loaded_at:
        st.caption(f"Last fetched: {loaded_at.strftime('%Y-%m-%d %H:%M:%S')}")


def main():
    init_session_state()

    with st.sidebar:
        st.title("📺 Trend Insights")
        st.radio(
            "Navigation",
            [NAV_HOME, NAV_TRENDS, NAV_INSIGHTS, NAV_SETTINGS],
            key="nav",
            label_visibility="collapsed",
        )

    nav = st.session_state.nav
    if nav == NAV_HOME:
        display_home()
    elif nav == NAV_TRENDS:
        display_trends()
    elif nav == NAV_INSIGHTS:
        display_insights()
    else:
        display_settings()


if __name__ == "__main__":
    main()
