"""Value types shared by the sample fetcher, the analyzer and the web app."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class VideoText:
    title: str
    description: str = ""


@dataclass(frozen=True)
class ChannelSample:
    channel_id: str
    channel_url: str
    channel_title: str
    videos: Tuple[VideoText, ...] = ()

    @staticmethod
    def from_dict(data: Dict) -> "ChannelSample":
        return ChannelSample(
            channel_id=data.get("channelId", ""),
            channel_url=data.get("channelUrl", ""),
            channel_title=data.get("channelTitle", ""),
            videos=tuple(
                VideoText(title=item.get("title", ""), description=item.get("description", ""))
                for item in data.get("videos", [])
            ),
        )

    def to_dict(self) -> Dict:
        return {
            "channelId": self.channel_id,
            "channelUrl": self.channel_url,
            "channelTitle": self.channel_title,
            "videos": [{"title": v.title, "description": v.description} for v in self.videos],
        }


@dataclass(frozen=True)
class TargetVideo:
    video_id: str
    title: str
    description: str = ""
    channel_title: Optional[str] = None

    @staticmethod
    def from_dict(data: Dict) -> "TargetVideo":
        return TargetVideo(
            video_id=data.get("videoId", ""),
            title=data.get("title", ""),
            description=data.get("description", ""),
            channel_title=data.get("channelTitle"),
        )

    def to_dict(self) -> Dict:
        payload = {
            "videoId": self.video_id,
            "title": self.title,
            "description": self.description,
        }
        if self.channel_title is not None:
            payload["channelTitle"] = self.channel_title
        return payload


@dataclass(frozen=True)
class ChannelAnalysis:
    channel_id: str
    channel_url: str
    channel_title: str
    sample_titles: List[str]
    sample_descriptions: List[str]
    title_count: int
    average_title_length: float
    keyword_counts: Dict[str, int]
    hashtag_counts: Dict[str, int]
    first_word_frequency: Dict[str, int]
    top_keywords: List[str]
    common_hashtags: List[str]

    def to_dict(self) -> Dict:
        return {
            "channelId": self.channel_id,
            "channelUrl": self.channel_url,
            "channelTitle": self.channel_title,
            "sampleTitles": list(self.sample_titles),
            "sampleDescriptions": list(self.sample_descriptions),
            "averageTitleLength": round(self.average_title_length, 1),
            "topKeywords": list(self.top_keywords),
            "commonHashtags": list(self.common_hashtags),
            "firstWordFrequency": dict(self.first_word_frequency),
        }


@dataclass(frozen=True)
class AggregateSummary:
    keyword_counts: Dict[str, int]
    hashtag_counts: Dict[str, int]
    first_word_counts: Dict[str, int]
    keywords: List[str]
    hashtags: List[str]
    first_words: List[str]
    average_title_length: float


@dataclass(frozen=True)
class SeoRecommendation:
    recommended_title: str
    recommended_description: str
    recommended_hashtags: List[str]
    keyword_highlights: List[str]

    def to_dict(self) -> Dict:
        return {
            "recommendedTitle": self.recommended_title,
            "recommendedDescription": self.recommended_description,
            "recommendedHashtags": list(self.recommended_hashtags),
            "keywordHighlights": list(self.keyword_highlights),
        }


@dataclass(frozen=True)
class TargetedRecommendation:
    """A resolved target video together with the metadata suggested for it."""

    target_video: TargetVideo
    recommendation: SeoRecommendation


@dataclass(frozen=True)
class AnalysisResult:
    channel_analyses: List[ChannelAnalysis]
    aggregate: AggregateSummary
    target: Optional[TargetedRecommendation] = field(default=None)

    @property
    def has_recommendation(self) -> bool:
        return self.target is not None

    def to_dict(self) -> Dict:
        payload = {
            "channelAnalyses": [analysis.to_dict() for analysis in self.channel_analyses],
            "aggregateKeywords": list(self.aggregate.keywords),
            "aggregateHashtags": list(self.aggregate.hashtags),
            "aggregateFirstWords": list(self.aggregate.first_words),
        }
        if self.target is not None:
            payload["targetVideo"] = self.target.target_video.to_dict()
            payload["recommendation"] = self.target.recommendation.to_dict()
        return payload
