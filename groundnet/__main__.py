"""
CLI entry point. Run as: python -m groundnet --kb <name>
"""

import argparse
import logging
import sys

from .errors import GroundNetError
from .knowledge import KNOWLEDGE_BASES
from .network.reconstruct import MixedHardPolicy
from .report import print_network, print_occurrences, print_reweighting, export_dot


def _parse_weights(text: str) -> list:
    try:
        return [float(w) for w in text.split(",") if w.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated numbers, got {text!r}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Ground a weighted knowledge base into an MRF")
    parser.add_argument("--kb", choices=list(KNOWLEDGE_BASES.keys()), default="smokers",
                        help="Which knowledge base to ground")
    parser.add_argument("--hard-weight", type=float, default=None,
                        help="Weight of hard constraints (default: 1 + sum of soft weights)")
    parser.add_argument("--no-neg-weights", action="store_true",
                        help="Rewrite negative-weight clauses into negated unit clauses")
    parser.add_argument("--weights", type=_parse_weights, default=None,
                        help="New per-formula weights, e.g. 1.0,0.5,2.0; reconstructs the network")
    parser.add_argument("--policy", choices=[p.value for p in MixedHardPolicy],
                        default=MixedHardPolicy.HARD_WINS.value,
                        help="How hard and soft sources of one constraint combine")
    parser.add_argument("--dot",     type=str, default=None, help="Export DOT graph to file")
    parser.add_argument("--quiet",   action="store_true",    help="Less output")
    parser.add_argument("--verbose", action="store_true",    help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO if not args.quiet else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    entry = KNOWLEDGE_BASES[args.kb]
    kb = entry["make_kb"]()
    print(f"Knowledge base: {args.kb} -- {entry['description']}")
    for index, clause in enumerate(kb.clauses):
        print(f"  {index}: {clause.to_text()}")

    try:
        result = kb.ground(
            weight_hard=args.hard_weight,
            track_dependencies=args.weights is not None,
            no_negative_weights=args.no_neg_weights,
        )
    except GroundNetError as e:
        print(f"Grounding failed: {e}", file=sys.stderr)
        return 1

    mrf = result.mrf
    print_network(mrf, result.space, limit=20 if args.quiet else 200)
    if not args.quiet:
        print_occurrences(mrf, result.space)

    if args.weights is not None:
        if len(args.weights) != len(kb.clauses):
            print(f"--weights needs {len(kb.clauses)} values, got {len(args.weights)}",
                  file=sys.stderr)
            return 2
        before = {c.id: c.weight for c in mrf.constraints()}
        try:
            mrf.reconstruct(args.weights, kb.hard_flags, MixedHardPolicy(args.policy))
        except GroundNetError as e:
            print(f"Reconstruction failed: {e}", file=sys.stderr)
            return 1
        print_reweighting(before, mrf, result.space)

    if args.dot:
        export_dot(mrf, args.dot, result.space)
    return 0


if __name__ == "__main__":
    sys.exit(main())
