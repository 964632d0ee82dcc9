import os
import unittest
from unittest import mock

from tools.seo_models import ChannelSample, TargetVideo, VideoText
from tools.youtube_fetch_channel_samples import ResolutionError
from workbench.app import create_app


ENV_KEYS = [
    "YOUTUBE_API_KEY",
    "SECRET_KEY",
    "MAX_CHANNELS",
    "SAMPLES_PER_CHANNEL",
]


class StubFetcher:
    quota_used = 0

    def fetch_channel_sample(self, reference, max_videos=25, channel_url=None):
        return ChannelSample(
            channel_id="UC_STUB",
            channel_url=channel_url or reference,
            channel_title="Top5 News",
            videos=(
                VideoText("Top 5 News Today", "Daily roundup #news #top5"),
                VideoText("Top 5 Shocking Facts", "#news"),
            ),
        )

    def fetch_target_video(self, url):
        if "unknown" in url:
            raise ResolutionError("Video not found: unknown")
        return TargetVideo("abc123def45", "Market update", "Stocks moved today.", "Finance Desk")


class _AppTestCase(unittest.TestCase):
    def setUp(self):
        self.previous_env = {key: os.environ.get(key) for key in ENV_KEYS}
        os.environ["YOUTUBE_API_KEY"] = "test-key"
        os.environ["SECRET_KEY"] = "test-secret"
        os.environ["MAX_CHANNELS"] = "3"
        os.environ["SAMPLES_PER_CHANNEL"] = "5"

        self.app = create_app()
        self.client = self.app.test_client()

        patcher = mock.patch(
            "workbench.services.seo_runner.build_sample_fetcher",
            return_value=StubFetcher(),
        )
        self.build_fetcher = patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        for key, value in self.previous_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


class AnalyzeRouteTests(_AppTestCase):
    def test_empty_channel_list_returns_400(self):
        response = self.client.post("/api/analyze", json={"channels": []})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {"error": "Add at least one channel to analyze."})
        self.build_fetcher.assert_not_called()

    def test_non_json_body_returns_400(self):
        response = self.client.post("/api/analyze", data="not json", content_type="text/plain")
        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.get_json())

    def test_too_many_channels_returns_400(self):
        response = self.client.post("/api/analyze", json={"channels": ["@a1", "@b2", "@c3", "@d4"]})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "At most 3 channels can be analyzed at once.")

    def test_analysis_without_target_video(self):
        response = self.client.post("/api/analyze", json={"channels": ["@Top5News4"]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers.get("Cache-Control"), "no-store")

        payload = response.get_json()
        self.assertNotIn("recommendation", payload)
        self.assertNotIn("targetVideo", payload)
        self.assertEqual(payload["aggregateHashtags"], ["#news", "#top5"])
        self.assertEqual(payload["aggregateFirstWords"], ["top"])

        analysis = payload["channelAnalyses"][0]
        self.assertEqual(analysis["channelUrl"], "https://www.youtube.com/@Top5News4")
        self.assertEqual(analysis["firstWordFrequency"], {"top": 2})
        self.assertEqual(analysis["averageTitleLength"], 18.0)
        self.assertEqual(analysis["sampleTitles"], ["Top 5 News Today", "Top 5 Shocking Facts"])

    def test_analysis_with_target_video(self):
        response = self.client.post(
            "/api/analyze",
            json={"channels": ["@Top5News4"], "targetVideoUrl": "https://www.youtube.com/watch?v=abc123def45"},
        )
        self.assertEqual(response.status_code, 200)
        payload = response.get_json()
        self.assertEqual(payload["targetVideo"]["title"], "Market update")
        self.assertEqual(
            set(payload["recommendation"]),
            {"recommendedTitle", "recommendedDescription", "recommendedHashtags", "keywordHighlights"},
        )
        self.assertLessEqual(len(payload["recommendation"]["recommendedHashtags"]), 5)

    def test_unresolvable_target_video_returns_400(self):
        response = self.client.post(
            "/api/analyze",
            json={"channels": ["@Top5News4"], "targetVideoUrl": "https://youtu.be/unknown0000"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {"error": "Video not found: unknown"})


class WorkbenchPageTests(_AppTestCase):
    def test_page_renders_form(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Channel references", response.data)
        self.assertIn(b"@Top5News4", response.data)

    def test_form_post_renders_results(self):
        response = self.client.post("/", data={"channels": "@Top5News4", "video_url": ""})
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Channel intelligence", response.data)
        self.assertIn(b"Top 5 Shocking Facts", response.data)
        self.assertIn(b"TOP (2)", response.data)

    def test_form_post_without_channels_flashes_error(self):
        response = self.client.post("/", data={"channels": "   ", "video_url": ""})
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Add at least one channel to analyze.", response.data)
        self.assertNotIn(b"Channel intelligence", response.data)


if __name__ == "__main__":
    unittest.main()
