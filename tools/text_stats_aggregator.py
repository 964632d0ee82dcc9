#!/usr/bin/env python3
"""
Channel Text Stats Aggregator
Turns sample titles/descriptions from reference channels into SEO patterns

Computes, per channel and across all channels:
1. Keyword frequency (stop words removed)
2. Hashtag frequency
3. Opening-word frequency of titles
4. Average title length

When a target video is supplied, drafts a title, description, hashtag set
and keyword highlights that follow the reference channels' patterns.

Usage:
    python3 -m tools.text_stats_aggregator path/to/samples.json
"""

import sys
import json
from collections import Counter
from dataclasses import dataclass, replace
from pathlib import Path
from string import Formatter
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import regex

from tools.seo_models import (
    AggregateSummary,
    AnalysisResult,
    ChannelAnalysis,
    ChannelSample,
    SeoRecommendation,
    TargetedRecommendation,
    TargetVideo,
)


DEFAULT_STOP_WORDS = frozenset({
    'a', 'an', 'the', 'and', 'or', 'but', 'if', 'so', 'of', 'to', 'in', 'on', 'at', 'by',
    'for', 'with', 'from', 'as', 'into', 'about', 'over', 'after', 'before', 'up', 'out',
    'is', 'are', 'was', 'were', 'be', 'been', 'am', 'it', 'its', "it's", 'this', 'that',
    'these', 'those', 'you', 'your', 'we', 'our', 'i', 'me', 'my', 'he', 'she', 'they',
    'them', 'his', 'her', 'their', 'how', 'what', 'why', 'who', 'when', 'where', 'which',
    'do', 'does', 'did', "don't", 'not', 'no', 'can', 'will', 'just', 'all', 'more',
    'has', 'have', 'had', 'here', 'there', 'than', 'then', 'too', 'very', 'also',
    'http', 'https', 'www', 'com', 'youtube', 'video', 'videos', 'subscribe', 'channel',
})

DEFAULT_DESCRIPTION_SECTIONS = (
    "{title}",
    "{summary}",
    "In this video: {keywords}.",
    "{hashtags}",
)

# letters plus combining marks, so Devanagari and similar scripts stay whole
WORD_CHARS = r"[\p{L}\p{M}\p{N}_]"
TOKEN_PATTERN = regex.compile(rf"#{WORD_CHARS}+|{WORD_CHARS}+(?:'{WORD_CHARS}+)*")
NON_WORD_PATTERN = regex.compile(r"[^\p{L}\p{M}\p{N}_]")

_FORMATTER = Formatter()


class InvalidInputError(ValueError):
    """Raised when there is nothing usable to analyze."""


@dataclass(frozen=True)
class AnalyzerSettings:
    stop_words: FrozenSet[str] = DEFAULT_STOP_WORDS
    sample_limit: int = 10
    sample_description_chars: int = 200
    top_keywords: int = 15
    top_hashtags: int = 10
    top_first_words: int = 10
    title_keyword_count: int = 2
    min_title_length: int = 30
    max_title_length: int = 100
    description_keyword_count: int = 5
    description_summary_chars: int = 400
    description_sections: Tuple[str, ...] = DEFAULT_DESCRIPTION_SECTIONS
    recommended_hashtag_count: int = 5
    keyword_highlight_count: int = 8

    def __post_init__(self):
        for template in self.description_sections:
            for _, name, _, _ in _FORMATTER.parse(template):
                if name is not None and (not name or name[0].isdigit()):
                    raise ValueError(f"Description section needs named fields only: {template!r}")

    def with_extra_stop_words(self, words: Iterable[str]) -> "AnalyzerSettings":
        extra = {word.strip().lower() for word in words if word and word.strip()}
        if not extra:
            return self
        return replace(self, stop_words=self.stop_words | extra)


def tokenize(text: Optional[str]) -> List[str]:
    """Lowercase word and hashtag tokens; whitespace and punctuation delimit."""
    return TOKEN_PATTERN.findall((text or "").lower())


def keyword_tokens(tokens: Iterable[str], stop_words: FrozenSet[str]) -> List[str]:
    return [
        token for token in tokens
        if not token.startswith('#')
        and token not in stop_words
        and (len(token) > 1 or token.isdigit())
    ]


def hashtag_tokens(tokens: Iterable[str]) -> List[str]:
    return [token for token in tokens if token.startswith('#')]


def opening_word(title: str) -> Optional[str]:
    for token in tokenize(title):
        if not token.startswith('#'):
            return token
    return None


def rank(counts: Counter, limit: Optional[int] = None) -> List[str]:
    """Descending by count; ties keep first-seen order."""
    if limit is not None and limit <= 0:
        return []
    return [word for word, _ in counts.most_common(limit)]


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered


def truncate_words(text: Optional[str], limit: int) -> str:
    """Collapse whitespace and cut at the last word boundary within limit."""
    text = " ".join((text or "").split())
    if len(text) <= limit:
        return text
    cut = text[:limit + 1]
    boundary = cut.rfind(" ")
    cut = cut[:boundary] if boundary > 0 else text[:limit]
    return cut.rstrip(" |-,:;")


class TextStatsAggregator:
    def __init__(self, settings: Optional[AnalyzerSettings] = None):
        self.settings = settings or AnalyzerSettings()

    @staticmethod
    def has_text(sample: ChannelSample) -> bool:
        return any(tokenize(video.title) or tokenize(video.description) for video in sample.videos)

    def analyze_channel(self, sample: ChannelSample) -> ChannelAnalysis:
        settings = self.settings
        keyword_counts = Counter()
        hashtag_counts = Counter()
        first_word_counts = Counter()
        titles = []
        descriptions = []

        for video in sample.videos:
            title = (video.title or "").strip()
            description = (video.description or "").strip()

            if title:
                titles.append(title)
                first = opening_word(title)
                if first:
                    first_word_counts[first] += 1
            if description:
                descriptions.append(description)

            tokens = tokenize(title) + tokenize(description)
            keyword_counts.update(keyword_tokens(tokens, settings.stop_words))
            hashtag_counts.update(hashtag_tokens(tokens))

        average_title_length = float(np.mean([len(title) for title in titles])) if titles else 0.0

        return ChannelAnalysis(
            channel_id=sample.channel_id,
            channel_url=sample.channel_url,
            channel_title=sample.channel_title,
            sample_titles=titles[:settings.sample_limit],
            sample_descriptions=[
                truncate_words(description, settings.sample_description_chars)
                for description in descriptions[:settings.sample_limit]
            ],
            title_count=len(titles),
            average_title_length=average_title_length,
            keyword_counts=dict(keyword_counts),
            hashtag_counts=dict(hashtag_counts),
            first_word_frequency=dict(first_word_counts),
            top_keywords=rank(keyword_counts, settings.top_keywords),
            common_hashtags=rank(hashtag_counts, settings.top_hashtags),
        )

    def aggregate(self, analyses: Sequence[ChannelAnalysis]) -> AggregateSummary:
        """Sum full per-channel counts in channel order, then re-rank."""
        settings = self.settings
        keyword_counts = Counter()
        hashtag_counts = Counter()
        first_word_counts = Counter()

        for analysis in analyses:
            keyword_counts.update(analysis.keyword_counts)
            hashtag_counts.update(analysis.hashtag_counts)
            first_word_counts.update(analysis.first_word_frequency)

        total_titles = sum(analysis.title_count for analysis in analyses)
        if total_titles:
            average_title_length = float(np.average(
                [analysis.average_title_length for analysis in analyses],
                weights=[analysis.title_count for analysis in analyses],
            ))
        else:
            average_title_length = 0.0

        return AggregateSummary(
            keyword_counts=dict(keyword_counts),
            hashtag_counts=dict(hashtag_counts),
            first_word_counts=dict(first_word_counts),
            keywords=rank(keyword_counts, settings.top_keywords),
            hashtags=rank(hashtag_counts, settings.top_hashtags),
            first_words=rank(first_word_counts, settings.top_first_words),
            average_title_length=average_title_length,
        )

    def title_length_limit(self, average_title_length: float) -> int:
        settings = self.settings
        # the floor only applies when there is no observed length to follow
        if average_title_length <= 0:
            return min(settings.min_title_length, settings.max_title_length)
        return min(int(round(average_title_length)), settings.max_title_length)

    def build_title(self, target: TargetVideo, aggregate: AggregateSummary) -> str:
        settings = self.settings
        limit = self.title_length_limit(aggregate.average_title_length)
        base = " ".join((target.title or "").split())

        if not base:
            fallback = " ".join(word.capitalize() for word in aggregate.keywords[:settings.title_keyword_count + 1])
            return truncate_words(fallback, limit)

        present = set(tokenize(base))
        extras = [
            keyword for keyword in aggregate.keywords
            if keyword not in present and not keyword.isdigit()
        ][:settings.title_keyword_count]

        title = truncate_words(base, limit)
        separator = " | "
        for keyword in extras:
            candidate = f"{title}{separator}{keyword.capitalize()}"
            if len(candidate) > limit:
                break
            title = candidate
            separator = " "
        return title

    def select_hashtags(self, target: TargetVideo, aggregate: AggregateSummary) -> List[str]:
        settings = self.settings
        target_tokens = tokenize(f"{target.title} {target.description}")
        target_keywords = rank(Counter(keyword_tokens(target_tokens, settings.stop_words)))

        candidates = list(aggregate.hashtags) + hashtag_tokens(target_tokens)
        for keyword in target_keywords + list(aggregate.keywords):
            if keyword.isdigit():
                continue
            tag = "#" + NON_WORD_PATTERN.sub("", keyword)
            if len(tag) > 1:
                candidates.append(tag)

        return _dedupe(candidates)[:settings.recommended_hashtag_count]

    def keyword_highlights(self, target: TargetVideo, aggregate: AggregateSummary) -> List[str]:
        """Aggregate keywords the target already uses, then the ones it is missing."""
        settings = self.settings
        target_tokens = tokenize(f"{target.title} {target.description}")
        target_keywords = rank(Counter(keyword_tokens(target_tokens, settings.stop_words)))
        present = set(target_keywords)

        shared = [keyword for keyword in aggregate.keywords if keyword in present]
        supplement = [keyword for keyword in aggregate.keywords if keyword not in present]
        return _dedupe(shared + supplement + target_keywords)[:settings.keyword_highlight_count]

    def build_description(self, target: TargetVideo, aggregate: AggregateSummary, title: str,
                          hashtags: Sequence[str]) -> str:
        settings = self.settings
        fields: Dict[str, str] = {
            "title": title,
            "summary": truncate_words(target.description, settings.description_summary_chars),
            "keywords": ", ".join(aggregate.keywords[:settings.description_keyword_count]),
            "hashtags": " ".join(hashtags),
        }

        sections = []
        for template in settings.description_sections:
            names = [name for _, name, _, _ in _FORMATTER.parse(template) if name]
            # a section with any empty field is dropped entirely
            if any(not fields.get(name) for name in names):
                continue
            sections.append(template.format(**fields))
        return "\n\n".join(sections)

    def recommend(self, target: TargetVideo, aggregate: AggregateSummary) -> SeoRecommendation:
        title = self.build_title(target, aggregate)
        hashtags = self.select_hashtags(target, aggregate)
        return SeoRecommendation(
            recommended_title=title,
            recommended_description=self.build_description(target, aggregate, title, hashtags),
            recommended_hashtags=hashtags,
            keyword_highlights=self.keyword_highlights(target, aggregate),
        )

    def analyze(self, samples: Sequence[ChannelSample],
                target_video: Optional[TargetVideo] = None) -> AnalysisResult:
        samples = list(samples or [])
        if not samples:
            raise InvalidInputError("Add at least one channel to analyze.")
        if not any(self.has_text(sample) for sample in samples):
            raise InvalidInputError("No titles or descriptions could be read from the supplied channels.")

        analyses = [self.analyze_channel(sample) for sample in samples]
        aggregate = self.aggregate(analyses)

        target = None
        if target_video is not None:
            target = TargetedRecommendation(
                target_video=target_video,
                recommendation=self.recommend(target_video, aggregate),
            )

        return AnalysisResult(channel_analyses=analyses, aggregate=aggregate, target=target)


def analyze_channels_and_suggest(samples: Sequence[ChannelSample],
                                 target_video: Optional[TargetVideo] = None,
                                 settings: Optional[AnalyzerSettings] = None) -> AnalysisResult:
    return TextStatsAggregator(settings).analyze(samples, target_video)


def load_samples(data: Dict) -> Tuple[List[ChannelSample], Optional[TargetVideo]]:
    """Read a samples snapshot written by youtube_fetch_channel_samples.py."""
    samples = [ChannelSample.from_dict(item) for item in data.get('channels', [])]
    target_data = data.get('targetVideo')
    target_video = TargetVideo.from_dict(target_data) if target_data else None
    return samples, target_video


def main():
    """Main execution function"""
    if len(sys.argv) != 2:
        print("❌ Error: Missing samples file path")
        print("\nUsage:")
        print("  python3 -m tools.text_stats_aggregator path/to/samples.json")
        sys.exit(1)

    data_path = Path(sys.argv[1])
    if not data_path.exists():
        print(f"❌ Error: File not found: {data_path}")
        sys.exit(1)

    try:
        print(f"📂 Loading samples from: {data_path}")
        with open(data_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        samples, target_video = load_samples(data)
        result = analyze_channels_and_suggest(samples, target_video)

        output_file = data_path.parent / 'seo_analysis.json'
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)

        print(f"🔑 Aggregate keywords: {', '.join(result.aggregate.keywords[:10]) or '—'}")
        print(f"#️⃣  Aggregate hashtags: {', '.join(result.aggregate.hashtags[:10]) or '—'}")
        if result.target is not None:
            print(f"✍️  Recommended title: {result.target.recommendation.recommended_title}")
        print(f"\n📁 Analysis saved to: {output_file}")

    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)
    except InvalidInputError as e:
        print(f"❌ Validation Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
