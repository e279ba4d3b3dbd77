"""Hirschberg-Sinclair leader election on a bidirectional ring.

This example runs the synchronous HS simulation:
1. Every node starts as a candidate in phase 0
2. Candidates probe 2^k hops in both directions each phase
3. A probe meeting a larger ID is swallowed; weaker nodes drop out
4. Surviving candidates double their radius until the maximum ID's probe
   travels the whole ring and returns, electing it leader

## Ring Diagram

```
              +----+
       +------| 12 |------+
       |      +----+      |
     +---+              +----+
     | 5 |              |  3 |
     +---+              +----+
       |                  |
       |                  |
    +----+              +----+
    | 10 |              |  9 |
    +----+              +----+
       |                  |
       |    +---+  +---+  |
       +----| 1 |--| 7 |--+
            +---+  +---+

    phase 0: radius 1, most nodes eliminated by a neighbour
    phase k: survivors probe 2^k hops, wait for both replies
    final:   12's probe goes all the way round -> leader
```

Usage:
    python examples/hs_ring_election.py                 # default ring
    python examples/hs_ring_election.py 4 8 15 16 23 42 # custom ring
    python examples/hs_ring_election.py --scaling 64    # messages vs n plot
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from pathlib import Path

import ringelection
from ringelection import ElectionResult, RingNetwork, RoundTrace

DEFAULT_IDS = [5, 12, 3, 9, 7, 1, 10]


# =============================================================================
# Simulation Result
# =============================================================================


@dataclass
class SimulationResult:
    """Results from the HS ring election run."""
    ids: list[int]
    election: ElectionResult
    trace: RoundTrace
    scaling: list[ElectionResult] = field(default_factory=list)


# =============================================================================
# Main Simulation
# =============================================================================


def run_scaling(max_n: int, seed: int = 42) -> list[ElectionResult]:
    """Elect leaders on shuffled rings of size 2..max_n."""
    rng = random.Random(seed)
    results: list[ElectionResult] = []
    for n in range(2, max_n + 1):
        ids = list(range(1, n + 1))
        rng.shuffle(ids)
        results.append(RingNetwork(ids, record_trace=False).run())
    return results


def run(args=None) -> SimulationResult:
    """Run an HS election.

    Args:
        args: Optional argparse namespace with simulation parameters.

    Returns:
        SimulationResult with the election outcome and per-round trace.
    """
    ids = list(getattr(args, "ids", None) or DEFAULT_IDS) if args else list(DEFAULT_IDS)
    scaling_n = getattr(args, "scaling", 0) if args else 0

    ring = RingNetwork(ids)
    election = ring.run()

    scaling = run_scaling(scaling_n) if scaling_n and scaling_n >= 2 else []

    return SimulationResult(
        ids=ids,
        election=election,
        trace=ring.trace,
        scaling=scaling,
    )


# =============================================================================
# Summary
# =============================================================================


def print_summary(result: SimulationResult) -> None:
    """Print the election outcome as key=value lines."""
    for line in result.election.to_lines():
        print(line)


def print_trace(result: SimulationResult) -> None:
    """Print the per-round trace as a table."""
    df = result.trace.to_dataframe()
    print()
    print(df.to_string(index=False))


# =============================================================================
# Visualization
# =============================================================================


def visualize_results(result: SimulationResult, output_dir: Path) -> None:
    """Plot the per-round trace and, if computed, messages/rounds vs ring size."""
    import matplotlib.pyplot as plt

    output_dir.mkdir(parents=True, exist_ok=True)

    df = result.trace.to_dataframe()

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    ax = axes[0]
    ax.step(df["round"], df["messages_delivered"], where="post", color="steelblue",
            label="Delivered")
    ax.step(df["round"], df["messages_sent"], where="post", color="darkorange",
            label="Sent")
    ax.set_xlabel("Round")
    ax.set_ylabel("Messages")
    ax.set_title("Messages per Round")
    ax.legend()
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.step(df["round"], df["active_nodes"], where="post", color="seagreen",
            label="Active candidates")
    ax2 = ax.twinx()
    ax2.step(df["round"], df["max_phase"], where="post", color="firebrick",
             label="Max phase")
    ax.set_xlabel("Round")
    ax.set_ylabel("Active candidates")
    ax2.set_ylabel("Phase")
    ax.set_title("Candidates and Phase")
    ax.grid(True, alpha=0.3)

    fig.suptitle(
        f"HS Election on {result.election.ring_size} nodes "
        f"(leader {result.election.leader_id})",
        fontsize=14, fontweight="bold",
    )
    fig.tight_layout()
    fig.savefig(output_dir / "hs_ring_trace.png", dpi=150)
    plt.close(fig)
    print(f"Saved: {output_dir / 'hs_ring_trace.png'}")

    if not result.scaling:
        return

    sizes = [r.ring_size for r in result.scaling]
    messages = [r.total_messages_sent for r in result.scaling]
    rounds = [r.rounds for r in result.scaling]
    reference = [n * math.log2(n) for n in sizes]

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    ax = axes[0]
    ax.plot(sizes, messages, "o-", color="steelblue", markersize=3, label="Messages")
    ax.plot(sizes, reference, "--", color="gray", label="n log2 n")
    ax.set_xlabel("Ring size (n)")
    ax.set_ylabel("Messages")
    ax.set_title("Message Complexity")
    ax.legend()
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.plot(sizes, rounds, "o-", color="seagreen", markersize=3)
    ax.set_xlabel("Ring size (n)")
    ax.set_ylabel("Rounds")
    ax.set_title("Rounds to Elect")
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(output_dir / "hs_ring_scaling.png", dpi=150)
    plt.close(fig)
    print(f"Saved: {output_dir / 'hs_ring_scaling.png'}")


# =============================================================================
# Entry Point
# =============================================================================


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Hirschberg-Sinclair ring leader election")
    parser.add_argument("ids", type=int, nargs="*", help="Node IDs in ring order")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Enable console logging at this level")
    parser.add_argument("--scaling", type=int, default=0,
                        help="Also elect on rings of size 2..N for a scaling plot")
    parser.add_argument("--trace", action="store_true", help="Print the per-round trace")
    parser.add_argument("--output", type=str, default="output/hs_ring", help="Output directory")
    parser.add_argument("--no-viz", action="store_true", help="Skip visualization")
    args = parser.parse_args()

    if args.log_level:
        ringelection.enable_console_logging(level=args.log_level)
    else:
        ringelection.configure_from_env()

    result = run(args)
    print_summary(result)
    if args.trace:
        print_trace(result)

    if not args.no_viz:
        try:
            import matplotlib
            matplotlib.use("Agg")
            output_dir = Path(args.output)
            visualize_results(result, output_dir)
            print(f"\nVisualizations saved to: {output_dir.absolute()}")
        except ImportError:
            print("\nSkipping visualization (matplotlib not installed)")
