#!/usr/bin/env python3
"""
YouTube Channel Sample Fetcher
Collects recent video titles/descriptions per channel from YouTube Data API v3

Usage:
    python3 -m tools.youtube_fetch_channel_samples "https://youtube.com/@channel" [@other ...] [--video VIDEO_URL]
"""

import sys
import os
import json
import re
import time
from pathlib import Path
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from dotenv import load_dotenv

from tools.seo_models import ChannelSample, TargetVideo, VideoText

# Load environment variables
load_dotenv()

VIDEO_ID_PATTERNS = [
    re.compile(r'youtube\.com/watch\?(?:.*&)?v=([\w-]{11})'),
    re.compile(r'youtu\.be/([\w-]{11})'),
    re.compile(r'youtube\.com/(?:shorts|embed|live|v)/([\w-]{11})'),
]
BARE_VIDEO_ID = re.compile(r'^[\w-]{11}$')

# Placeholders the uploads playlist returns for videos we cannot read
UNAVAILABLE_TITLES = {'Private video', 'Deleted video'}


class ResolutionError(ValueError):
    """A channel or video reference could not be resolved on YouTube."""


class YouTubeSampleFetcher:
    def __init__(self, api_key, client=None):
        """Initialize YouTube API client"""
        self.youtube = client or build('youtube', 'v3', developerKey=api_key)
        self.quota_used = 0

    def _execute(self, request, cost=1):
        try:
            response = request.execute()
        except HttpError as e:
            if e.resp.status == 403:
                raise ResolutionError("YouTube API quota exceeded. Wait until midnight PT or use a different API key.")
            if e.resp.status == 404:
                raise ResolutionError("YouTube resource not found.")
            raise ResolutionError(f"YouTube API error: {e}")
        self.quota_used += cost
        return response

    def extract_channel_id(self, reference):
        """
        Extract channel ID from a channel reference

        Supported formats:
        - @username
        - UCxxxxxxxx
        - https://youtube.com/@username
        - https://youtube.com/channel/UCxxxxxxxx
        - https://youtube.com/c/channelname
        - https://youtube.com/user/username
        """
        reference = reference.strip().rstrip('/')

        if reference.startswith('@'):
            return self.get_channel_id_from_username(reference)

        if re.fullmatch(r'UC[\w-]{10,}', reference):
            return reference

        match = re.search(r'youtube\.com/@([\w.-]+)', reference)
        if match:
            return self.get_channel_id_from_username(match.group(1))

        match = re.search(r'youtube\.com/channel/(UC[\w-]+)', reference)
        if match:
            return match.group(1)

        match = re.search(r'youtube\.com/c/([\w-]+)', reference)
        if match:
            return self.get_channel_id_from_custom_url(match.group(1))

        match = re.search(r'youtube\.com/user/([\w-]+)', reference)
        if match:
            return self.get_channel_id_from_username(match.group(1))

        raise ResolutionError(f"Invalid YouTube channel reference: {reference}")

    def get_channel_id_from_username(self, username):
        """Get channel ID from @handle or legacy username"""
        handle = username.lstrip('@')

        response = self._execute(self.youtube.channels().list(part='id', forHandle=handle))
        if response.get('items'):
            return response['items'][0]['id']

        # Fallback: legacy username
        response = self._execute(self.youtube.channels().list(part='id', forUsername=handle))
        if response.get('items'):
            return response['items'][0]['id']

        raise ResolutionError(f"Channel not found: @{handle}")

    def get_channel_id_from_custom_url(self, custom_url):
        """Get channel ID from custom URL (/c/channelname)"""
        request = self.youtube.search().list(
            part='snippet',
            q=custom_url,
            type='channel',
            maxResults=1
        )
        response = self._execute(request, cost=100)  # Search is expensive

        if response.get('items'):
            return response['items'][0]['snippet']['channelId']

        raise ResolutionError(f"Channel not found with custom URL: {custom_url}")

    def fetch_channel_info(self, channel_id):
        """Fetch channel title and uploads playlist"""
        response = self._execute(self.youtube.channels().list(part='snippet,contentDetails', id=channel_id))

        if not response.get('items'):
            raise ResolutionError(f"Channel not found: {channel_id}")

        channel = response['items'][0]
        return {
            'id': channel['id'],
            'title': channel['snippet']['title'],
            'customUrl': channel['snippet'].get('customUrl', ''),
            'uploadsPlaylistId': channel['contentDetails']['relatedPlaylists'].get('uploads', ''),
        }

    def fetch_channel_sample(self, reference, max_videos=25, channel_url=None):
        """
        Collect up to max_videos recent title/description pairs.

        The uploads playlist is read newest first, 50 items per page.
        """
        channel_id = self.extract_channel_id(reference)
        channel_info = self.fetch_channel_info(channel_id)
        uploads_playlist_id = channel_info['uploadsPlaylistId']

        if not uploads_playlist_id:
            raise ResolutionError(f"Could not find uploads playlist for channel: {channel_info['title']}")

        videos = []
        next_page_token = None
        while len(videos) < max_videos:
            request = self.youtube.playlistItems().list(
                part='snippet',
                playlistId=uploads_playlist_id,
                maxResults=min(50, max_videos - len(videos)),
                pageToken=next_page_token
            )
            response = self._execute(request)

            for item in response.get('items', []):
                snippet = item.get('snippet', {})
                title = snippet.get('title', '')
                if title in UNAVAILABLE_TITLES:
                    continue
                videos.append(VideoText(title=title, description=snippet.get('description', '')))

            next_page_token = response.get('nextPageToken')
            if not next_page_token:
                break

        return ChannelSample(
            channel_id=channel_id,
            channel_url=channel_url or f"https://www.youtube.com/channel/{channel_id}",
            channel_title=channel_info['title'],
            videos=tuple(videos[:max_videos]),
        )

    @staticmethod
    def extract_video_id(url):
        """Extract the 11-character video ID from watch, youtu.be, shorts, embed or live links"""
        value = (url or '').strip()
        if BARE_VIDEO_ID.match(value):
            return value
        for pattern in VIDEO_ID_PATTERNS:
            match = pattern.search(value)
            if match:
                return match.group(1)
        raise ResolutionError(f"Could not read a video ID from: {value}")

    def fetch_target_video(self, url):
        """Fetch title, description and channel of the video being optimized"""
        video_id = self.extract_video_id(url)
        response = self._execute(self.youtube.videos().list(part='snippet', id=video_id))

        if not response.get('items'):
            raise ResolutionError(f"Video not found: {video_id}")

        snippet = response['items'][0]['snippet']
        return TargetVideo(
            video_id=video_id,
            title=snippet.get('title', ''),
            description=snippet.get('description', ''),
            channel_title=snippet.get('channelTitle'),
        )

    def save_samples(self, samples, target_video, output_dir):
        """Save fetched samples to JSON file"""
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        data = {
            'channels': [sample.to_dict() for sample in samples],
            'targetVideo': target_video.to_dict() if target_video else None,
            'metadata': {
                'fetchedAt': time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime()),
                'channelCount': len(samples),
                'quotaUsed': self.quota_used
            }
        }

        output_file = output_path / 'samples.json'
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return str(output_file)


def main():
    """Main execution function"""
    args = sys.argv[1:]
    video_url = None
    if '--video' in args:
        index = args.index('--video')
        if index + 1 >= len(args):
            print("❌ Error: --video needs a video URL")
            sys.exit(1)
        video_url = args[index + 1]
        args = args[:index] + args[index + 2:]

    if not args:
        print("❌ Error: Missing channel reference")
        print("\nUsage:")
        print("  python3 -m tools.youtube_fetch_channel_samples \"CHANNEL_URL\" [\"@handle\" ...] [--video VIDEO_URL]")
        sys.exit(1)

    api_key = os.getenv('YOUTUBE_API_KEY')
    samples_per_channel = int(os.getenv('SAMPLES_PER_CHANNEL', 25))
    output_folder = os.getenv('OUTPUT_FOLDER', '.tmp/seo_samples')

    if not api_key:
        print("❌ Error: YOUTUBE_API_KEY not found in .env file")
        sys.exit(1)

    try:
        print("🚀 YouTube Channel Sample Fetcher")
        print("=" * 50)

        fetcher = YouTubeSampleFetcher(api_key)
        samples = []
        for reference in args:
            print(f"🔍 Sampling {reference}...")
            sample = fetcher.fetch_channel_sample(reference, samples_per_channel)
            print(f"   Channel: {sample.channel_title} ({len(sample.videos)} videos)")
            samples.append(sample)

        target_video = None
        if video_url:
            print(f"🎯 Resolving target video {video_url}...")
            target_video = fetcher.fetch_target_video(video_url)
            print(f"   Title: {target_video.title}")

        output_dir = f"{output_folder}/{time.strftime('%Y%m%d-%H%M%S', time.gmtime())}"
        output_file = fetcher.save_samples(samples, target_video, output_dir)

        print("=" * 50)
        print("✅ SUCCESS!")
        print(f"📁 Samples saved to: {output_file}")
        print(f"💰 API quota used: ~{fetcher.quota_used} units")
        print()
        print("Next step:")
        print(f"  python3 -m tools.text_stats_aggregator {output_file}")

    except ResolutionError as e:
        print(f"❌ Resolution Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
