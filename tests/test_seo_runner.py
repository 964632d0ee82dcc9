import unittest

from tools.seo_models import ChannelSample, TargetVideo, VideoText
from tools.text_stats_aggregator import InvalidInputError
from tools.youtube_fetch_channel_samples import ResolutionError
from workbench.services.serializers import outcome_to_response
from workbench.services.seo_runner import (
    AnalysisFailure,
    AnalysisRequest,
    execute_analysis,
    normalize_channel_reference,
    parse_analysis_request,
    run_seo_analysis,
    settings_from_config,
    validate_channel_reference,
)


class FakeFetcher:
    def __init__(self, fail_on=None):
        self.quota_used = 0
        self.fail_on = fail_on
        self.sampled = []

    def fetch_channel_sample(self, reference, max_videos=25, channel_url=None):
        if reference == self.fail_on:
            raise ResolutionError(f"Channel not found: {reference}")
        self.sampled.append((reference, max_videos))
        self.quota_used += 2
        return ChannelSample(
            channel_id=f"UC_{len(self.sampled)}",
            channel_url=channel_url or reference,
            channel_title=f"Channel {len(self.sampled)}",
            videos=(
                VideoText("Top 5 News Today", "#news #top5"),
                VideoText("Top 5 Shocking Facts", "#news"),
            ),
        )

    def fetch_target_video(self, url):
        if "missing" in url:
            raise ResolutionError("Video not found: missing")
        return TargetVideo("abc123def45", "Shocking news update", "What happened today.", "Target Channel")


class ChannelReferenceTests(unittest.TestCase):
    def test_normalize_forces_https_and_strips_slash(self):
        self.assertEqual(
            normalize_channel_reference("http://youtube.com/@ChrisCappy/"),
            "https://youtube.com/@ChrisCappy",
        )

    def test_normalize_handle_and_channel_id(self):
        self.assertEqual(normalize_channel_reference(" @Top5News4 "), "https://www.youtube.com/@Top5News4")
        self.assertEqual(
            normalize_channel_reference("UCabcdefghijk12"),
            "https://www.youtube.com/channel/UCabcdefghijk12",
        )
        self.assertEqual(normalize_channel_reference("youtube.com/c/name"), "https://youtube.com/c/name")

    def test_validate_channel_reference(self):
        self.assertTrue(validate_channel_reference("https://youtube.com/@channelname"))
        self.assertTrue(validate_channel_reference("@TazaHalaat"))
        self.assertTrue(validate_channel_reference("https://youtube.com/channel/UCabcdefghijk"))
        self.assertFalse(validate_channel_reference("https://example.com/not-youtube"))


class ParseRequestTests(unittest.TestCase):
    def test_parses_list_and_dedupes(self):
        parsed = parse_analysis_request({
            "channels": ["@Top5News4", "  ", "https://www.youtube.com/@Top5News4/"],
            "targetVideoUrl": "  https://youtu.be/abc123def45 ",
        })
        self.assertEqual(parsed.channels, ("https://www.youtube.com/@Top5News4",))
        self.assertEqual(parsed.target_video_url, "https://youtu.be/abc123def45")

    def test_accepts_newline_separated_string(self):
        parsed = parse_analysis_request({"channels": "@One\n\n@Two\n"})
        self.assertEqual(parsed.channels, ("https://www.youtube.com/@One", "https://www.youtube.com/@Two"))
        self.assertIsNone(parsed.target_video_url)

    def test_empty_channels_rejected(self):
        with self.assertRaises(InvalidInputError) as ctx:
            parse_analysis_request({"channels": []})
        self.assertEqual(str(ctx.exception), "Add at least one channel to analyze.")

    def test_non_object_payload_rejected(self):
        with self.assertRaises(InvalidInputError):
            parse_analysis_request(None)
        with self.assertRaises(InvalidInputError):
            parse_analysis_request({"channels": [1, 2]})

    def test_invalid_reference_rejected(self):
        with self.assertRaises(InvalidInputError):
            parse_analysis_request({"channels": ["https://example.com/not-youtube"]})

    def test_too_many_channels_rejected(self):
        with self.assertRaises(InvalidInputError):
            parse_analysis_request({"channels": [f"@channel{n}" for n in range(4)]}, max_channels=3)


class RunnerTests(unittest.TestCase):
    def test_run_without_target_has_no_recommendation(self):
        fetcher = FakeFetcher()
        messages = []
        result = run_seo_analysis(
            AnalysisRequest(channels=("https://www.youtube.com/@One",)),
            fetcher,
            samples_per_channel=7,
            logger=messages.append,
        )

        self.assertIsNone(result.target)
        self.assertEqual(fetcher.sampled, [("https://www.youtube.com/@One", 7)])
        self.assertEqual(result.channel_analyses[0].channel_url, "https://www.youtube.com/@One")
        self.assertEqual(result.aggregate.hashtags, ["#news", "#top5"])
        self.assertTrue(any("Sampling channel" in message for message in messages))

    def test_run_with_target_has_recommendation(self):
        result = run_seo_analysis(
            AnalysisRequest(
                channels=("https://www.youtube.com/@One", "https://www.youtube.com/@Two"),
                target_video_url="https://youtu.be/abc123def45",
            ),
            FakeFetcher(),
        )
        self.assertIsNotNone(result.target)
        self.assertEqual(result.target.target_video.video_id, "abc123def45")
        self.assertEqual(result.aggregate.keyword_counts["top"], 4)

    def test_settings_from_config(self):
        settings = settings_from_config({"TOP_KEYWORDS": 3, "EXTRA_STOP_WORDS": ("news",)})
        self.assertEqual(settings.top_keywords, 3)
        self.assertIn("news", settings.stop_words)
        self.assertIn("the", settings.stop_words)


class ExecuteAnalysisTests(unittest.TestCase):
    def test_success_serializes_to_200(self):
        outcome = execute_analysis(
            {"channels": ["@One"]},
            {"YOUTUBE_API_KEY": "key"},
            fetcher_factory=lambda config: FakeFetcher(),
        )
        body, status = outcome_to_response(outcome)
        self.assertEqual(status, 200)
        self.assertEqual(body["aggregateFirstWords"], ["top"])
        self.assertNotIn("recommendation", body)

    def test_missing_api_key_is_failure(self):
        outcome = execute_analysis({"channels": ["@One"]}, {})
        self.assertIsInstance(outcome, AnalysisFailure)
        self.assertEqual(outcome.error, "YOUTUBE_API_KEY is missing")

    def test_resolution_failure_surfaces_unchanged(self):
        outcome = execute_analysis(
            {"channels": ["@One"], "targetVideoUrl": "https://youtu.be/missing0000"},
            {"YOUTUBE_API_KEY": "key"},
            fetcher_factory=lambda config: FakeFetcher(),
        )
        body, status = outcome_to_response(outcome)
        self.assertEqual(status, 400)
        self.assertEqual(body, {"error": "Video not found: missing"})

    def test_channel_failure_returns_no_partial_result(self):
        outcome = execute_analysis(
            {"channels": ["@One", "@Two"]},
            {"YOUTUBE_API_KEY": "key"},
            fetcher_factory=lambda config: FakeFetcher(fail_on="https://www.youtube.com/@Two"),
        )
        self.assertEqual(outcome, AnalysisFailure(error="Channel not found: https://www.youtube.com/@Two"))

    def test_invalid_input_is_failure_without_fetching(self):
        def factory(config):
            raise AssertionError("fetcher should not be built")

        outcome = execute_analysis({"channels": []}, {"YOUTUBE_API_KEY": "key"}, fetcher_factory=factory)
        self.assertEqual(outcome, AnalysisFailure(error="Add at least one channel to analyze."))


if __name__ == "__main__":
    unittest.main()
