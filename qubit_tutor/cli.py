# qubit_tutor/cli.py
import argparse, csv, logging, os, sys

from .bloch import compute_bloch_point
from .circuit import Circuit, measure
from .config import SessionConfig
from .gates import HADAMARD_VARIANTS, gate_table
from .session import Session

HEADER = ["step", "gate", "a_re", "a_im", "b_re", "b_im", "p0", "theta", "phi", "x", "y", "z"]

def parse_gates(text):
    return [g.strip() for g in text.split(",") if g.strip()]

def write_history_csv(path, history):
    """Create/overwrite CSV with one row per circuit step."""
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=HEADER)
        w.writeheader()
        for i, h in enumerate(history, start=1):
            p = compute_bloch_point(h.state)
            a, b = h.state.a, h.state.b
            w.writerow({
                "step": i, "gate": h.gate,
                "a_re": f"{a.real:.6f}", "a_im": f"{a.imag:.6f}",
                "b_re": f"{b.real:.6f}", "b_im": f"{b.imag:.6f}",
                "p0": f"{h.state.probabilities()[0]:.6f}",
                "theta": f"{p.theta:.6f}", "phi": f"{p.phi:.6f}",
                "x": f"{p.x:.6f}", "y": f"{p.y:.6f}", "z": f"{p.z:.6f}",
            })

# ---------------------------------------------------------------------

def _check_unknown(names, table):
    bad = Circuit(list(names)).unknown(table)
    if bad:
        print(f"Unknown gate(s): {', '.join(bad)}. Available: {', '.join(table)}", file=sys.stderr)
        return False
    return True

def cmd_gates(args):
    for name, g in gate_table(args.hadamard).items():
        unitary = "" if g.is_unitary() else "  [not unitary]"
        print(f"{name}  {g.description}{unitary}")
    return 0

def cmd_run(args):
    cfg = SessionConfig(seed=args.seed, hadamard=args.hadamard)
    sess = Session(cfg)
    names = parse_gates(args.gates)
    if not _check_unknown(names, sess.table):
        return 2
    for g in names:
        sess.add_gate(g)
    sess.run()

    print(f"[run] {' '.join(names) or '(empty)'}")
    for i, h in enumerate(sess.history, start=1):
        p = compute_bloch_point(h.state)
        print(f"  {i}: {h.gate}  |ψ> = {h.state.ket()}  θ={p.theta:.2f} φ={p.phi:.2f}")
    p = sess.bloch_point()
    print(f"final |ψ> = {sess.state.ket()}")
    print(f"bloch θ={p.theta:.4f} φ={p.phi:.4f}  (x, y, z)=({p.x:.4f}, {p.y:.4f}, {p.z:.4f})")

    if args.csv:
        write_history_csv(args.csv, sess.history)
        print(f"history → {args.csv}")
    if args.plot:
        from .plot_bloch import render_bloch
        render_bloch(sess.state, args.plot, history=sess.history)
        print(f"bloch sphere → {args.plot}")
    if args.measure:
        outcome = sess.measure()
        print(f"measurement: {outcome}  → |ψ> = {sess.state.ket()}")
    return 0

def cmd_sample(args):
    if args.shots <= 0:
        print("--shots must be positive", file=sys.stderr)
        return 2
    cfg = SessionConfig(seed=args.seed, hadamard=args.hadamard)
    table = cfg.gate_table()
    names = parse_gates(args.gates)
    if not _check_unknown(names, table):
        return 2
    final, _ = Circuit(names).run(table, check_norm=cfg.check_norm, check_norm_tol=cfg.norm_tol)
    rng = cfg.make_rng()
    counts = {0: 0, 1: 0}
    for _ in range(args.shots):
        outcome, _ = measure(final, rng)
        counts[outcome] += 1
    p0 = final.probabilities()[0]
    print(f"[sample] {' '.join(names) or '(empty)'}  shots={args.shots}  p0={p0:.4f}")
    for k in (0, 1):
        print(f"  |{k}>: {counts[k]}  ({counts[k] / args.shots:.4f})")
    if args.plot:
        from .plot_bloch import plot_measurement_counts
        plot_measurement_counts(counts, args.plot)
        print(f"counts → {args.plot}")
    return 0

# ---------------------------------------------------------------------
def build_parser():
    p = argparse.ArgumentParser(prog="qubit-tutor", description="single-qubit gate tutor")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_gates = sub.add_parser("gates", help="list available gates")
    p_gates.add_argument("--hadamard", type=str, default="observed", choices=list(HADAMARD_VARIANTS))

    p_run = sub.add_parser("run", help="run a comma-separated circuit from |0>")
    p_run.add_argument("gates", type=str)
    p_run.add_argument("--hadamard", type=str, default="observed", choices=list(HADAMARD_VARIANTS))
    p_run.add_argument("--seed", type=int, default=None)
    p_run.add_argument("--measure", action="store_true")
    p_run.add_argument("--plot", type=str, default=None)
    p_run.add_argument("--csv", type=str, default=None)

    p_sample = sub.add_parser("sample", help="measure the circuit output repeatedly")
    p_sample.add_argument("gates", type=str)
    p_sample.add_argument("--shots", type=int, default=1000)
    p_sample.add_argument("--hadamard", type=str, default="observed", choices=list(HADAMARD_VARIANTS))
    p_sample.add_argument("--seed", type=int, default=None)
    p_sample.add_argument("--plot", type=str, default=None)
    return p

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    if args.cmd == "gates":
        return cmd_gates(args)
    elif args.cmd == "run":
        return cmd_run(args)
    elif args.cmd == "sample":
        return cmd_sample(args)

if __name__ == "__main__":
    sys.exit(main())
