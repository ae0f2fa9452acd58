import argparse

import matplotlib.pyplot as plt
import numpy as np

from identifier_dfa import RuleCategory, State, run

_STATE_ORDER = [State.START, State.ACCEPT, State.REJECT]

_CATEGORY_COLORS = {
    RuleCategory.VALID_START: "#22c55e",
    RuleCategory.VALID_CONTINUATION: "#4ade80",
    RuleCategory.INVALID_START: "#ef4444",
    RuleCategory.INVALID_CONTINUATION: "#f87171",
    RuleCategory.ALREADY_REJECTED: "#9ca3af",
}


def state_series(result) -> np.ndarray:
    """State index after 0..n consumed characters (0=q0, 1=q1, 2=qR)."""
    index = {s: i for i, s in enumerate(_STATE_ORDER)}
    return np.array([index[s] for s in result.state_path()], dtype=np.int64)


def plot_trace(result, out_path="trace.png"):
    """Plot the state reached after each character and save it."""
    series = state_series(result)
    positions = np.arange(len(series))

    fig, ax = plt.subplots(figsize=(max(6, len(series) * 0.6), 4))
    ax.step(positions, series, where="post", color="#6366f1", linewidth=2)

    for step in result.trace:
        ax.scatter(step.index + 1, series[step.index + 1],
                   color=_CATEGORY_COLORS[step.category], s=80, zorder=3)
        ax.annotate(repr(step.character), (step.index + 1, series[step.index + 1]),
                    textcoords="offset points", xytext=(0, 10), ha="center")

    ax.set_yticks(range(len(_STATE_ORDER)))
    ax.set_yticklabels([f"{s.value} ({s.label})" for s in _STATE_ORDER])
    ax.set_ylim(-0.5, len(_STATE_ORDER) - 0.5)
    ax.set_xlabel("Characters consumed")
    verdict = "ACCEPTED" if result.accepted else "REJECTED"
    ax.set_title(f"Identifier DFA trace for {result.input_str!r}: {verdict}")
    ax.grid(True, axis="x", alpha=0.3)

    fig.savefig(out_path, dpi=160, bbox_inches="tight")
    plt.close(fig)
    return out_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Plot an identifier DFA trace")
    parser.add_argument("name", help="String to run through the automaton")
    parser.add_argument("-o", "--out", default="trace.png", help="Output image path")
    args = parser.parse_args(argv)

    result = run(args.name)
    print(f"Running '{args.name}' ({len(result.trace)} steps)...")
    path = plot_trace(result, args.out)
    print(f"Saved plot to '{path}'")


if __name__ == "__main__":
    main()
