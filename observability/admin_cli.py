"""Lightweight CLI helpers for inspecting stored fit results and chat transcripts."""
from __future__ import annotations

import argparse

from config.settings import settings
from storage.results import recent_fit_results
from zone_chat import ChatSession


def tail_results(limit: int = 20) -> None:
    for row in recent_fit_results(limit):
        shares = " ".join(f"{key}={value}%" for key, value in row["percentages"].items())
        print(f"[{row['timestamp']}] {row['session_id']} top={row['top_category']} {shares}")


def show_transcript(client_id: str) -> None:
    session = ChatSession.for_client(client_id)
    state = session.state()
    print(f"client={client_id} open={state.is_open} position=({state.position.x:.0f}, {state.position.y:.0f})")
    for message in state.messages:
        print(f"  [{message.timestamp}] {message.role}: {message.content}")


def main() -> None:
    parser = argparse.ArgumentParser(description=f"Inspect {settings.DB_PATH}")
    parser.add_argument("--tail-results", type=int, help="Show the latest completed fit interviews")
    parser.add_argument("--transcript", metavar="CLIENT_ID", help="Print the stored chat transcript for a client")
    args = parser.parse_args()

    if args.tail_results:
        tail_results(args.tail_results)
    if args.transcript:
        show_transcript(args.transcript)


if __name__ == "__main__":
    main()
