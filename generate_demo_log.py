"""
Generate a demo simulation log for the visualization app.
Run: python generate_demo_log.py
"""

from logged_identifier_dfa import LoggedIdentifierDFA
from presets import EXAMPLE_PRESETS


def main(log_dir="logs"):
    dfa = LoggedIdentifierDFA(log_dir=log_dir)

    for preset in EXAMPLE_PRESETS:
        print(f"\n--- Running '{preset.name}' ---")
        result, rec = dfa.run_with_recommendation(preset.name, preset.description)
        verdict = "ACCEPTED" if result.accepted else "REJECTED"
        print(f"Result: {verdict} | Path: {[s.value for s in result.state_path()]}")
        if rec is not None:
            print(f"Recommendation: {rec.label.value} ({rec.score}/5)")

    path = dfa.save_log()
    print(f"\n✅ Log saved to: {path}")
    print(f"   Total steps logged: {len(dfa.logger.steps)}")
    return path


if __name__ == "__main__":
    main()
