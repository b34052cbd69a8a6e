#!/usr/bin/env python3
"""
Depth sweep over fixed Qirkat positions.

Each position is searched at depths 1..N inside one engine session. The
table shows the move chosen at the deepest search, the depth from which that
choice stopped changing, and the node count and time of the deepest search.
The per-depth moves are printed underneath when they were not all the same.

Usage: python3 tools/bench.py [max_depth]
"""
import os
import subprocess
import sys

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PYTHON = sys.executable
DEFAULT_DEPTH = 5

# Opening, forced capture, multi-jump follow-ups and sparse endgames.
POSITIONS = [
    ("Start",         "startpos"),
    ("After c2-c3",   "startpos moves c2-c3"),
    ("Capture",       "startpos moves d3-c3"),
    ("Double jump",   "startpos moves c2-c3 c4-c2 c1-c3 a3-c1 c3-a3 c5-c4"),
    ("Open middle",   "layout wwwww w---w ----- b---b bbbbb side white"),
    ("Few pieces",    "layout --w-- ----- -w--- --b-- b---b side black"),
    ("Race",          "layout ----- --w-- ----- --b-- ----- side white"),
]


def _info_fields(line: str) -> dict:
    """Turn "info depth 3 score 1 nodes 40 ..." into {"depth": 3, "score": 1, ...}."""
    parts = line.split()[1:]
    fields = {}
    for key, value in zip(parts[::2], parts[1::2]):
        try:
            fields[key] = int(value)
        except ValueError:
            pass
    return fields


def sweep(pos_spec: str, max_depth: int) -> list[dict]:
    """Search one position at every depth up to max_depth.

    Returns one dict per depth with keys depth, move, score, nodes, time.
    """
    script = [f"position {pos_spec}"]
    script += [f"go depth {d}" for d in range(1, max_depth + 1)]
    script.append("quit")
    out = subprocess.run(
        [PYTHON, "-m", "interface.qtp"],
        input="\n".join(script) + "\n",
        capture_output=True,
        text=True,
        cwd=REPO,
        check=False,
    ).stdout

    rows, info = [], {}
    for line in out.splitlines():
        if line.startswith("info "):
            info = _info_fields(line)
        elif line.startswith("bestmove "):
            rows.append({
                "depth": info.get("depth", len(rows) + 1),
                "move": line.split(maxsplit=1)[1],
                "score": info.get("score", 0),
                "nodes": info.get("nodes", 0),
                "time": info.get("time", 0),
            })
            info = {}
    return rows


def settled_depth(rows: list[dict]) -> int:
    """Shallowest depth from which the chosen move never changes again."""
    depth = rows[-1]["depth"]
    for row in reversed(rows):
        if row["move"] != rows[-1]["move"]:
            break
        depth = row["depth"]
    return depth


def main() -> None:
    max_depth = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DEPTH
    print(f"Qirkat depth sweep 1..{max_depth} ({PYTHON})")
    print()
    header = f"{'Position':<14} {'Move':<16} {'Settled':>7} {'Score':>6} {'Nodes':>9} {'Time(ms)':>9}"
    print(header)
    print("-" * len(header))

    total_nodes = total_time = 0
    for label, pos in POSITIONS:
        rows = sweep(pos, max_depth)
        if not rows:
            print(f"{label:<14} engine gave no answer")
            continue
        last = rows[-1]
        total_nodes += last["nodes"]
        total_time += last["time"]
        print(
            f"{label:<14} {last['move']:<16} {settled_depth(rows):>7} {last['score']:>6} "
            f"{last['nodes']:>9,} {last['time']:>9,}"
        )
        if len({row["move"] for row in rows}) > 1:
            print("  " + "  ".join(f"d{row['depth']}:{row['move']}" for row in rows))

    print("-" * len(header))
    print(f"{'TOTAL':<14} {'':<16} {'':>7} {'':>6} {total_nodes:>9,} {total_time:>9,}")


if __name__ == "__main__":
    main()
