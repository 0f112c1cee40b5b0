"""Command-line client for the live validation WebSocket."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

import websockets

DEFAULT_URL = "ws://127.0.0.1:8000/ws/validate"


async def run_client(url: str, kind: str, texts: list[str], timeout: float) -> int:
    """Send each text for validation and print the verdicts.

    Returns the number of rejected texts.
    """

    logger = logging.getLogger("live_validation")
    rejected = 0

    async with websockets.connect(url, ping_interval=None) as websocket:
        for text in texts:
            await websocket.send(json.dumps({"kind": kind, "text": text}))
            message = await asyncio.wait_for(websocket.recv(), timeout=timeout)
            verdict = json.loads(message)

            if "error" in verdict and "is_valid" not in verdict:
                logger.error("Received error frame: %s", message)
                raise SystemExit(1)

            if verdict["is_valid"]:
                logger.info("ok (%s chars left): %s", verdict.get("remaining_chars"), text)
            else:
                rejected += 1
                logger.warning("rejected: %s -> %s", text, verdict.get("error"))

    return rejected


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check questions or names against the oracle's input rules.")
    parser.add_argument("texts", nargs="+", help="One or more texts to validate.")
    parser.add_argument("--url", default=DEFAULT_URL, help="WebSocket URL (default: %(default)s)")
    parser.add_argument("--kind", choices=("question", "name"), default="question")
    parser.add_argument("--timeout", type=float, default=10.0, help="Seconds to wait per verdict.")
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    try:
        rejected = asyncio.run(run_client(args.url, args.kind, args.texts, args.timeout))
    except KeyboardInterrupt:  # pragma: no cover - manual usage only
        return
    raise SystemExit(1 if rejected else 0)


if __name__ == "__main__":  # pragma: no cover
    main()
