# footpress/scripts/run_session.py
import sys
import time
import json
import logging
import argparse

from footpress import config
from footpress.analysis.bmi import InvalidBiometrics
from footpress.sensors.client import SensorClient
from footpress.sessions.session import STATUS_SAMPLING, STATUS_ANALYZING
from footpress.sessions.store import SessionStore
from footpress.suggestions.provider import SuggestionProvider

logger = logging.getLogger(__name__)


def wait_for_report(session, poll_seconds: float = 0.5, suggestion_timeout: float = 60.0) -> dict:
    session.window.wait()
    waited = 0.0
    while session.status == STATUS_ANALYZING and waited < suggestion_timeout:
        time.sleep(poll_seconds)
        waited += poll_seconds
    return session.snapshot()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run one foot pressure sampling session and print the report.")
    parser.add_argument("--name", default="")
    parser.add_argument("--height", required=True, help="height in cm")
    parser.add_argument("--weight", required=True, help="weight in kg")
    parser.add_argument("--mode", choices=["static", "remote"], default=config.SUGGESTION_MODE)
    parser.add_argument("--ticks", type=int, default=config.SAMPLING_TICKS)
    parser.add_argument("--url", default=config.SENSOR_URL)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    client = SensorClient(url=args.url)
    store = SessionStore(fetch=client.fetch, provider=SuggestionProvider(mode=args.mode), ticks=args.ticks)
    try:
        session = store.create(args.name, args.height, args.weight)
    except InvalidBiometrics as e:
        print(f"Invalid details: {e}", file=sys.stderr)
        store.close()
        client.close()
        return 2

    try:
        report = wait_for_report(session)
    except KeyboardInterrupt:
        store.discard(session.id)
        return 130
    finally:
        store.close()
        client.close()

    if report["status"] == STATUS_SAMPLING:
        logger.warning("Session ended before the window closed")
    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
