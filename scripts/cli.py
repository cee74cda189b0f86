"""
CLI to fetch mood recommendations -> JSON.
"""
from __future__ import annotations
import argparse, json, os, sys
from core.config import Settings
from core.emotions import Emotion
from core.errors import MoodifyError
from core.music import SpotifyClient

def main():
    p = argparse.ArgumentParser()
    p.add_argument("--emotion", required=True, choices=[e.value for e in Emotion], help="Mood to recommend for")
    p.add_argument("--out", default="output/recommendations.json", help="Path to output JSON")
    args = p.parse_args()

    settings = Settings()
    try:
        tracks = SpotifyClient(settings).recommend_for_emotion(Emotion(args.emotion))
    except MoodifyError as e:
        print(json.dumps(e.to_detail(), indent=2), file=sys.stderr)
        sys.exit(1)
    result = [t.model_dump(mode="json") for t in tracks]
    print(json.dumps(result, indent=2, ensure_ascii=False))

    # Also write to file
    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2, ensure_ascii=False)
    print(f"Recommendations written to {args.out}")

if __name__ == "__main__":
    main()
