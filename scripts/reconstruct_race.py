"""Race reconstruction script: builds tracking records from a saved analysis payload.

Usage:
  uv run python scripts/reconstruct_race.py \\
      --frames analysis.json \\
      --roster starters.json \\
      --distance 2100 \\
      --output tracking.json

``analysis.json`` is the video-analysis response (``points`` or ``series``);
``starters.json`` is a list of ``{num_partant, nom_cheval, uuid, casaque_slug}``.
``RACE_*`` variables in the environment or a ``.env`` file override engine
constants.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from race_reconstruction.config import ReconstructionConfig
from race_reconstruction.engine.reconstructor import RaceReconstructor
from race_reconstruction.frames.loader import FrameLoader, FrameLoadError

load_dotenv()


def _read_json(path: str):
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"  [!] Cannot read {path!r}: {exc}", file=sys.stderr)
        sys.exit(1)


def main() -> None:
    ap = argparse.ArgumentParser(description="Reconstruct race results from video analysis")
    ap.add_argument("--frames", required=True, help="Analysis payload JSON path")
    ap.add_argument("--roster", required=True, help="Starter list JSON path")
    ap.add_argument(
        "--distance",
        type=float,
        default=None,
        help="Race distance in metres (default: RACE_DEFAULT_DISTANCE_M or 3200)",
    )
    ap.add_argument("--output", default="tracking.json", help="Output JSON file path")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    loader = FrameLoader()

    print("1/3  Loading frames and roster...")
    try:
        frames = loader.load(_read_json(args.frames))
        roster = loader.load_roster(_read_json(args.roster))
    except FrameLoadError as exc:
        print(f"  [!] {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"     {len(frames)} frames / {len(roster)} starters")

    print("2/3  Reconstructing...")
    reconstructor = RaceReconstructor(ReconstructionConfig.from_env())
    try:
        results = reconstructor.reconstruct(frames, roster, args.distance)
    except ValueError as exc:
        print(f"  [!] {exc}", file=sys.stderr)
        sys.exit(1)
    for r in results:
        print(
            f"     {r.finish_rank_code}  #{r.entrant.number:<3} {r.entrant.name:<24}"
            f" {r.tracking.official_time}  avg {r.tracking.average_rank}"
        )

    print(f"3/3  Writing {len(results)} records → {args.output}")
    Path(args.output).write_text(
        json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    print(f"\n[OK] Done: {args.output}")


if __name__ == "__main__":
    main()
