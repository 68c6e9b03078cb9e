"""Host loop that drives the battle sim via the REST API.

Resets the battle, then steps it once per frame and prints every event
until one side is left standing:
  - Movement ticks show only the shrinking gap between the agents.
  - Attack ticks print each hit or miss as it is resolved.

Usage:
    1. Start the server:  uvicorn main:app --reload
    2. Run the watcher:   python bots/watch_battle.py --seed 7

Environment variables:
    BATTLE_URL  Server URL (default: http://127.0.0.1:8000)
"""

import argparse
import math
import os
import sys
import time

import httpx

BASE_URL = os.environ.get("BATTLE_URL", "http://127.0.0.1:8000")
FRAME_SECONDS = 1 / 30


def _gap(state: dict) -> float | None:
    """Distance between the first two agents in a state payload."""
    agents = state["agents"]
    if len(agents) < 2:
        return None
    a, b = agents[0], agents[1]
    return math.hypot(b["x"] - a["x"], b["y"] - a["y"])


def _print_state(state: dict) -> None:
    """Print one line per agent."""
    for agent in state["agents"]:
        print(
            f"    {agent['name']:<10} HP {agent['hp']:>3}  "
            f"at ({agent['x']:.1f}, {agent['y']:.1f})"
        )


def main() -> None:
    """Run a battle to completion and print the play-by-play."""
    parser = argparse.ArgumentParser(description="Watch a battle tick by tick")
    parser.add_argument("--url", default=BASE_URL, help="Battle sim server URL")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for the battle")
    parser.add_argument("--max-ticks", type=int, default=1000, help="Give up after this many ticks")
    parser.add_argument("--fps", type=float, default=1 / FRAME_SECONDS, help="Ticks per second")
    args = parser.parse_args()

    client = httpx.Client(base_url=args.url, timeout=10.0)

    # 1. Fresh battle
    print("Resetting battle...")
    try:
        resp = client.post("/battle/reset", json={"seed": args.seed})
    except httpx.ConnectError:
        print(f"Error: Could not connect to server at {args.url}", file=sys.stderr)
        print("Is the server running?", file=sys.stderr)
        sys.exit(1)
    resp.raise_for_status()
    _print_state(resp.json())

    # 2. Frame loop
    print("\n--- BATTLE ---\n")
    frame = 1 / args.fps if args.fps > 0 else 0
    state: dict = resp.json()
    for _ in range(args.max_ticks):
        resp = client.post("/battle/step")
        resp.raise_for_status()
        payload = resp.json()
        state = payload["state"]

        events = payload["events"]
        if events:
            print(f"Tick {state['tick']}")
            for event in events:
                print(f"  -> {event['description']}")
        else:
            gap = _gap(state)
            if gap is not None:
                print(f"Tick {state['tick']} | closing in, gap {gap:.1f}")

        if state["status"] == "concluded":
            break
        time.sleep(frame)

    # 3. Result
    if state["status"] == "concluded":
        winner = state["winner"] or "nobody (draw)"
        print(f"\n*** BATTLE OVER after {state['tick']} ticks! Winner: {winner} ***")
    else:
        print(f"\nBattle still running after {args.max_ticks} ticks, giving up.")
    _print_state(state)

    client.close()


if __name__ == "__main__":
    main()
