import os
import sys
import json
import time

from workbench.config import AppConfig
from workbench.services.seo_runner import AnalysisFailure, execute_analysis


def parse_args(argv):
    channels = []
    video_url = None
    args = list(argv)
    while args:
        arg = args.pop(0)
        if arg == "--video":
            if not args:
                return None, None
            video_url = args.pop(0)
        else:
            channels.append(arg)
    return channels, video_url

def main():
    channels, video_url = parse_args(sys.argv[1:])
    if not channels:
        print("Usage: python3 main.py \"CHANNEL_URL\" [\"@handle\" ...] [--video VIDEO_URL]")
        sys.exit(1)

    config = AppConfig.from_env().to_flask_config()

    # Ensure reports directory exists
    os.makedirs("reports", exist_ok=True)

    print("\n🚀 Running SEO analysis...")
    outcome = execute_analysis(
        {"channels": channels, "targetVideoUrl": video_url},
        config,
        logger=lambda message: print(f"   {message}"),
    )

    if isinstance(outcome, AnalysisFailure):
        print(f"❌ {outcome.error}")
        sys.exit(1)

    print(f"\n🔑 Aggregate keywords: {', '.join(outcome.aggregate.keywords[:10]) or '—'}")
    print(f"#️⃣  Aggregate hashtags: {', '.join(outcome.aggregate.hashtags[:10]) or '—'}")
    print(f"🅰️  Opening word leaders: {', '.join(outcome.aggregate.first_words[:10]) or '—'}")

    if outcome.target is not None:
        recommendation = outcome.target.recommendation
        print(f"\n✍️  Recommended title: {recommendation.recommended_title}")
        print(f"🏷️  Hashtags: {' '.join(recommendation.recommended_hashtags)}")
        print(f"🎯 Keyword focus: {', '.join(recommendation.keyword_highlights)}")

    target_report = f"reports/seo_{time.strftime('%Y%m%d-%H%M%S', time.gmtime())}.json"
    with open(target_report, "w", encoding="utf-8") as report_file:
        json.dump(outcome.to_dict(), report_file, indent=2, ensure_ascii=False)

    print(f"\n✨ Report saved to: {target_report}")
    print("\n✅ SEO Analysis Complete!")

if __name__ == "__main__":
    main()
