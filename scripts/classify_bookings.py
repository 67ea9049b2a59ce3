from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify bookings into ongoing and upcoming sets.")
    parser.add_argument(
        "--env-file",
        default=os.path.join(PROJECT_ROOT, ".env"),
        help="Path to .env file.",
    )
    parser.add_argument(
        "--input",
        default=None,
        help="JSON file holding a bookings payload. Fetches from the bookings API when omitted.",
    )
    parser.add_argument(
        "--now",
        default=None,
        help="Reference instant in ISO-8601 (defaults to the local clock).",
    )
    parser.add_argument("--token", default=None, help="Bearer token for the bookings API.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    load_env_file(os.path.abspath(args.env_file))

    from src.analytics.booking_classifier import classify_bookings
    from src.core.config import get_settings
    from src.core.logging import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level)

    if args.input:
        with open(args.input, "r", encoding="utf-8") as input_file:
            payload = json.load(input_file)
    else:
        from src.repositories.bookings_repository import BookingsRepository

        payload = BookingsRepository().fetch_raw_bookings(token=args.token)

    now = datetime.fromisoformat(args.now) if args.now else None
    result = classify_bookings(payload, now=now, confirmed_threshold_days=settings.confirmed_threshold_days)
    print(json.dumps(result.to_payload(), indent=2, default=str))


if __name__ == "__main__":
    main()
