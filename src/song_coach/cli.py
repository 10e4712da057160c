"""CLI for analyzing a singing recording."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from song_coach.analysis import FeatureExtractor
from song_coach.audio import AnalysisConfig, AudioConfig, load_wav
from song_coach.errors import SongCoachError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="song-coach",
        description="Extract loudness, stability and rhythm descriptors from a WAV recording",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a WAV file")
    analyze.add_argument("path", type=Path, help="WAV file to analyze")
    analyze.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a summary line",
    )
    analyze.add_argument(
        "--downmix",
        choices=("mean", "first"),
        default="mean",
        help="How to reduce multi-channel audio to mono (default: mean)",
    )
    analyze.add_argument(
        "--sample-rate",
        type=int,
        default=None,
        help="Reject files not recorded at this rate",
    )
    analyze.add_argument(
        "--volume-window",
        type=int,
        default=AnalysisConfig.volume_window_samples,
        help="Loudness variation window in samples (default: %(default)s)",
    )
    analyze.add_argument(
        "--parallel",
        action="store_true",
        help="Run the meters on a thread pool",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    audio_config = AudioConfig(downmix=args.downmix, expected_sample_rate=args.sample_rate)
    analysis_config = AnalysisConfig(volume_window_samples=args.volume_window)

    try:
        buffer = load_wav(args.path, audio_config)
        result = FeatureExtractor(analysis_config, parallel=args.parallel).extract(buffer)
    except (SongCoachError, ValueError) as exc:
        logger.debug("Analysis of %s failed", args.path, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
