import asyncio
import json
import threading

from analytics.demographics import predict_audience
from dashboard.controller import DashboardController
from dashboard.state import FAILED, READY
from discovery.hot_keywords import KEYWORD_SAMPLE

from conftest import FakeGenerator

VIDEOS = {
    'A': {'id': 'A', 'title': 'Speedrun world record', 'description': 'gaming', 'category_id': '20'},
    'B': {'id': 'B', 'title': 'Evening news', 'description': 'politics', 'category_id': '25'},
}

REFINED_A = {
    "gender": [{"name": "Male", "value": 90}, {"name": "Female", "value": 10}],
    "age": [{"name": "Teens", "value": 100}],
    "categoryName": "Refined for A",
}

SUMMARY = {"oneLiner": "tagline", "popularFactor": ["one", "two", "three"]}


class StubYouTube:
    def __init__(self, videos=None, trending=None):
        self.videos = videos or {}
        self.trending = trending or []
        self.calls = []

    def get_video_details(self, video_id):
        return self.videos.get(video_id)

    def get_trending_videos(self, region_code='KR', limit=100):
        self.calls.append((region_code, limit))
        return self.trending


class GatedGenerator(FakeGenerator):
    """Holds any prompt about video A until the gate opens; everything else answers at once."""

    def __init__(self):
        super().__init__()
        self.a_started = threading.Event()
        self.gate = threading.Event()

    def generate(self, prompt, json_output=True):
        self.prompts.append(prompt)
        if 'Speedrun world record' in prompt and 'core audience' in prompt:
            self.a_started.set()
            self.gate.wait(5)
            return json.dumps(REFINED_A)
        if 'core audience' in prompt:
            return 'not json'
        return json.dumps(SUMMARY)


def test_analyze_baseline_then_refinement():
    gen = FakeGenerator(reply=json.dumps(REFINED_A))
    controller = DashboardController(StubYouTube(VIDEOS), gen)
    snapshots = []

    def on_update(state):
        snapshots.append((state.status, state.demographics, state.ai_refining))

    asyncio.run(controller.analyze('A', on_update))

    ready = [s for s in snapshots if s[0] == READY]
    # first READY render is the heuristic baseline, before any AI result
    assert ready[0][1] == predict_audience('20')
    assert ready[0][2] is True
    assert controller.insights.demographics.category_name == 'Refined for A'
    assert not controller.insights.ai_refining


def test_analyze_without_llm_keeps_baseline():
    controller = DashboardController(StubYouTube(VIDEOS), FakeGenerator(configured=False, provider='none'))
    asyncio.run(controller.analyze('B'))
    state = controller.insights
    assert state.status == READY
    assert state.demographics == predict_audience('25')
    assert state.summary is None
    assert not state.ai_refining
    assert not state.summary_pending


def test_analyze_unknown_video_fails():
    controller = DashboardController(StubYouTube(VIDEOS), FakeGenerator())
    asyncio.run(controller.analyze('missing'))
    assert controller.insights.status == FAILED


def test_late_refinement_for_a_never_overwrites_b():
    gen = GatedGenerator()
    controller = DashboardController(StubYouTube(VIDEOS), gen)

    async def scenario():
        task_a = asyncio.create_task(controller.analyze('A'))
        assert await asyncio.to_thread(gen.a_started.wait, 5)
        await controller.analyze('B')
        gen.gate.set()
        await task_a

    asyncio.run(scenario())

    state = controller.insights
    assert state.video_id == 'B'
    # B's refiner got non-JSON, so B shows its own baseline
    assert state.demographics == predict_audience('25')
    assert state.demographics.category_name == 'News & Politics'


def test_clear_selection_discards_in_flight_results():
    gen = GatedGenerator()
    controller = DashboardController(StubYouTube(VIDEOS), gen)

    async def scenario():
        task_a = asyncio.create_task(controller.analyze('A'))
        assert await asyncio.to_thread(gen.a_started.wait, 5)
        controller.clear_selection()
        gen.gate.set()
        await task_a

    asyncio.run(scenario())
    assert controller.insights.video is None
    assert controller.insights.demographics is None
    assert controller.insights.summary is None


def test_feed_then_keywords():
    trending = [{'id': str(n), 'title': f'title {n}'} for n in range(40)]
    keywords = [{"term": "t", "growth": "+1%", "description": "d", "trend": [1, 2, 3, 4, 5, 6]}]
    gen = FakeGenerator(reply=json.dumps(keywords))
    youtube = StubYouTube(trending=trending)
    controller = DashboardController(youtube, gen, region_code='US')

    token = asyncio.run(controller.refresh_feed(100))

    assert youtube.calls == [('US', 100)]
    assert controller.feed.status == READY
    assert controller.feed.is_current(token)
    assert [k.term for k in controller.feed.keywords] == ['t']
    prompt = gen.prompts[0]
    assert f'title {KEYWORD_SAMPLE - 1}' in prompt
    assert f'title {KEYWORD_SAMPLE}\n' not in prompt


def test_empty_feed_skips_keywords():
    gen = FakeGenerator(reply='[]')
    controller = DashboardController(StubYouTube(), gen)
    asyncio.run(controller.refresh_feed())
    assert controller.feed.status == FAILED
    assert gen.prompts == []


def test_keywords_for_stale_feed_are_dropped():
    trending = [{'id': '1', 'title': 'x'}]
    gen = FakeGenerator(reply='[]')
    controller = DashboardController(StubYouTube(trending=trending), gen)
    old = asyncio.run(controller.load_feed())
    asyncio.run(controller.load_feed())
    assert asyncio.run(controller.load_keywords(old)) is False


def test_empty_refresh_after_success_clears_feed_without_llm_call():
    keywords = [{"term": "old", "growth": "+1%", "description": "d", "trend": [1, 2, 3, 4, 5, 6]}]
    gen = FakeGenerator(reply=json.dumps(keywords))
    youtube = StubYouTube(trending=[{'id': '1', 'title': 'old title'}])
    controller = DashboardController(youtube, gen)

    asyncio.run(controller.refresh_feed())
    assert [k.term for k in controller.feed.keywords] == ['old']
    assert len(gen.prompts) == 1

    youtube.trending = []
    token = asyncio.run(controller.refresh_feed())

    assert controller.feed.status == FAILED
    assert controller.feed.videos == []
    assert controller.feed.keywords == []
    assert len(gen.prompts) == 1
    assert asyncio.run(controller.load_keywords(token)) is False
