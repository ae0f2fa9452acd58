import argparse
import sys

from logged_identifier_dfa import LoggedIdentifierDFA
from presets import EXAMPLE_PRESETS, DEFAULT_SPEED_MS, validate_speed
from viz.playback import PlaybackSession, play


def print_result(result, recommendation=None):
    """Print the trace, verdict and, if any, the naming recommendation."""
    print("Start State: q0")
    for step in result.trace:
        print(f"  [{step.index}] {step.character!r}: "
              f"{step.from_state.value} -> {step.to_state.value} ({step.category.value})")
    verdict = "ACCEPTED" if result.accepted else "REJECTED"
    path = [s.value for s in result.state_path()]
    print(f"Result: {verdict} (Path: {path})")

    if recommendation is not None:
        print(f"Recommendation: {recommendation.label.value} "
              f"(score {recommendation.score}/5) - {recommendation.overall}")
        for p in recommendation.positives:
            print(f"  + {p}")
        for s in recommendation.suggestions:
            print(f"  -> {s}")


def _print_frame(frame):
    if frame.step is None:
        print(f"  state={frame.current_state.value}")
        return
    print(f"  [{frame.position}/{frame.total}] {frame.step.character!r} "
          f"-> {frame.current_state.value}  {frame.step.reason}")


def run_demo(names, description=None, animate=False, speed_ms=DEFAULT_SPEED_MS,
             log_dir=None):
    """Validate each (name, description, expected) tuple; returns mismatch count."""
    dfa = LoggedIdentifierDFA(log_dir=log_dir or "logs")
    failures = 0

    for name, desc, expected in names:
        print(f"\n--- Testing string {name!r} ---")
        desc = desc if desc is not None else description
        result, rec = dfa.run_with_recommendation(name, desc)
        if animate:
            play(PlaybackSession(result, description=desc or ""), _print_frame,
                 interval_ms=speed_ms)
        print_result(result, rec)

        if expected is not None:
            if result.accepted == expected:
                print(">> VERIFICATION PASSED")
            else:
                failures += 1
                print(f">> VERIFICATION FAILED (Expected "
                      f"{'ACCEPTED' if expected else 'REJECTED'})")

    if log_dir:
        path = dfa.save_log()
        print(f"\nLog saved to: {path} ({len(dfa.logger.steps)} steps)")
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate variable names with the identifier DFA")
    parser.add_argument("names", nargs="*", help="Candidate identifiers")
    parser.add_argument("-d", "--description", default=None,
                        help="What the variable holds (enables recommendations)")
    parser.add_argument("--presets", action="store_true", help="Run the built-in examples")
    parser.add_argument("--animate", action="store_true", help="Replay each trace step by step")
    parser.add_argument("--speed", type=int, default=DEFAULT_SPEED_MS,
                        help="Milliseconds per character when animating")
    parser.add_argument("--log-dir", default=None, help="Write a JSONL run log here")
    args = parser.parse_args(argv)

    try:
        speed = validate_speed(args.speed)
    except ValueError as e:
        parser.error(str(e))

    cases = [(n, None, None) for n in args.names]
    if args.presets or not cases:
        print("=== Identifier DFA: [A-Za-z_][A-Za-z0-9_]* ===")
        cases += [(p.name, p.description, p.expected_valid) for p in EXAMPLE_PRESETS]

    failures = run_demo(cases, description=args.description, animate=args.animate,
                        speed_ms=speed, log_dir=args.log_dir)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
