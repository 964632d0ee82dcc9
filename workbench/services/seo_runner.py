"""SEO analysis runner wrapping the sample fetcher and text stats aggregator."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from tools.seo_models import AnalysisResult, ChannelSample
from tools.text_stats_aggregator import AnalyzerSettings, InvalidInputError, TextStatsAggregator
from tools.youtube_fetch_channel_samples import YouTubeSampleFetcher

YOUTUBE_CHANNEL_PATTERNS = [
    re.compile(r"^https://(www\.)?youtube\.com/@[\w.-]+/?$", re.IGNORECASE),
    re.compile(r"^https://(www\.)?youtube\.com/channel/UC[\w-]+/?$", re.IGNORECASE),
    re.compile(r"^https://(www\.)?youtube\.com/c/[\w-]+/?$", re.IGNORECASE),
    re.compile(r"^https://(www\.)?youtube\.com/user/[\w-]+/?$", re.IGNORECASE),
]
HANDLE_PATTERN = re.compile(r"^@[\w.-]+$")
CHANNEL_ID_PATTERN = re.compile(r"^UC[\w-]{10,}$")


@dataclass(frozen=True)
class AnalysisRequest:
    channels: Tuple[str, ...]
    target_video_url: Optional[str] = None


@dataclass(frozen=True)
class AnalysisFailure:
    error: str


AnalysisOutcome = Union[AnalysisResult, AnalysisFailure]



def normalize_channel_reference(reference: str) -> str:
    normalized = reference.strip()
    if HANDLE_PATTERN.match(normalized):
        return f"https://www.youtube.com/{normalized}"
    if CHANNEL_ID_PATTERN.match(normalized):
        return f"https://www.youtube.com/channel/{normalized}"
    if normalized.startswith("http://"):
        normalized = "https://" + normalized[len("http://") :]
    elif normalized.lower().startswith(("youtube.com/", "www.youtube.com/")):
        normalized = "https://" + normalized
    return normalized.rstrip("/")



def validate_channel_reference(reference: str) -> bool:
    normalized = normalize_channel_reference(reference)
    return any(pattern.match(normalized) for pattern in YOUTUBE_CHANNEL_PATTERNS)



def _emit(logger: Optional[Callable[[str], None]], message: str) -> None:
    if logger:
        logger(message)



def parse_analysis_request(payload: Any, max_channels: int = 10) -> AnalysisRequest:
    """Validate the inbound `{channels, targetVideoUrl?}` payload."""
    if not isinstance(payload, dict):
        raise InvalidInputError("Request body must be a JSON object.")

    raw_channels = payload.get("channels") or []
    if isinstance(raw_channels, str):
        raw_channels = raw_channels.splitlines()
    if not isinstance(raw_channels, list) or not all(isinstance(item, str) for item in raw_channels):
        raise InvalidInputError("channels must be a list of channel URLs or @handles.")

    channels: List[str] = []
    for raw in raw_channels:
        if not raw.strip():
            continue
        if not validate_channel_reference(raw):
            raise InvalidInputError(
                f"Unsupported channel reference: {raw.strip()}. "
                "Use @handle, https://youtube.com/@name, /channel/UC..., /c/name or /user/name"
            )
        normalized = normalize_channel_reference(raw)
        if normalized not in channels:
            channels.append(normalized)

    if not channels:
        raise InvalidInputError("Add at least one channel to analyze.")
    if len(channels) > max_channels:
        raise InvalidInputError(f"At most {max_channels} channels can be analyzed at once.")

    target_video_url = payload.get("targetVideoUrl")
    if target_video_url is not None and not isinstance(target_video_url, str):
        raise InvalidInputError("targetVideoUrl must be a string.")

    return AnalysisRequest(channels=tuple(channels), target_video_url=(target_video_url or "").strip() or None)



def settings_from_config(app_config: Mapping) -> AnalyzerSettings:
    settings = AnalyzerSettings(
        sample_limit=int(app_config.get("SAMPLE_LIMIT", 10)),
        top_keywords=int(app_config.get("TOP_KEYWORDS", 15)),
        top_hashtags=int(app_config.get("TOP_HASHTAGS", 10)),
        top_first_words=int(app_config.get("TOP_FIRST_WORDS", 10)),
        recommended_hashtag_count=int(app_config.get("RECOMMENDED_HASHTAGS", 5)),
        keyword_highlight_count=int(app_config.get("KEYWORD_HIGHLIGHTS", 8)),
    )
    return settings.with_extra_stop_words(app_config.get("EXTRA_STOP_WORDS", ()))



def build_sample_fetcher(app_config: Mapping) -> YouTubeSampleFetcher:
    api_key = app_config.get("YOUTUBE_API_KEY", "")
    if not api_key:
        raise ValueError("YOUTUBE_API_KEY is missing")
    return YouTubeSampleFetcher(api_key)



def run_seo_analysis(
    analysis_request: AnalysisRequest,
    fetcher: YouTubeSampleFetcher,
    samples_per_channel: int = 25,
    settings: Optional[AnalyzerSettings] = None,
    logger: Optional[Callable[[str], None]] = None,
) -> AnalysisResult:
    """Collect samples for every channel, resolve the target video, then aggregate."""
    samples: List[ChannelSample] = []
    for reference in analysis_request.channels:
        _emit(logger, f"Sampling channel: {reference}")
        sample = fetcher.fetch_channel_sample(reference, samples_per_channel, channel_url=reference)
        _emit(logger, f"Collected {len(sample.videos)} videos from {sample.channel_title or reference}")
        samples.append(sample)

    target_video = None
    if analysis_request.target_video_url:
        _emit(logger, f"Resolving target video: {analysis_request.target_video_url}")
        target_video = fetcher.fetch_target_video(analysis_request.target_video_url)

    result = TextStatsAggregator(settings).analyze(samples, target_video)
    _emit(logger, f"Analysis complete ({len(result.channel_analyses)} channels, quota ~{fetcher.quota_used} units)")
    return result



def execute_analysis(
    payload: Any,
    app_config: Mapping,
    fetcher_factory: Optional[Callable[[Mapping], YouTubeSampleFetcher]] = None,
    logger: Optional[Callable[[str], None]] = None,
) -> AnalysisOutcome:
    """Run one analysis end to end; every failure becomes an AnalysisFailure."""
    try:
        analysis_request = parse_analysis_request(payload, int(app_config.get("MAX_CHANNELS", 10)))
        fetcher = (fetcher_factory or build_sample_fetcher)(app_config)
        return run_seo_analysis(
            analysis_request,
            fetcher,
            samples_per_channel=int(app_config.get("SAMPLES_PER_CHANNEL", 25)),
            settings=settings_from_config(app_config),
            logger=logger,
        )
    except Exception as exc:  # pylint: disable=broad-except
        message = str(exc) or "Unexpected error"
        _emit(logger, f"Analysis failed: {message}")
        return AnalysisFailure(error=message)
