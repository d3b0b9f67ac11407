"""
experiments/run_experiments.py

Command-line harness that loads the baseline config, applies a scenario's
overrides and any command-line overrides, runs one simulation, and reports
the statistics next to the M/M/1/K reference values. The script is
intentionally lightweight so we can tweak scenarios as needed.
"""

from __future__ import annotations
import argparse, logging, os, sys
from typing import Dict, List, Optional
try:
    # When executed as a module: python -m experiments.run_experiments
    from .scenarios import SCENARIOS  # type: ignore
except ImportError:  # pragma: no cover
    # When run as a script in VSCode/terminal
    ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if ROOT not in sys.path:
        sys.path.insert(0, ROOT)
    from experiments.scenarios import SCENARIOS  # type: ignore

from twoqueue.config import apply_overrides, load_cfg
from twoqueue.errors import ConfigurationError, InternalConsistencyError
from twoqueue.simulation import run
from twoqueue.theory import mm1k_metrics

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CONFIG = os.path.join(ROOT, "config", "baseline.yaml")

logger = logging.getLogger("experiments")

def find_scenario(name: str) -> Dict:
    for sc in SCENARIOS:
        if sc["name"] == name:
            return sc
    names = ", ".join(s["name"] for s in SCENARIOS)
    raise ConfigurationError(f"Unknown scenario {name!r} (available: {names})")

def build_cfg(args: argparse.Namespace) -> Dict:
    """Baseline file, then scenario overrides, then command-line overrides."""
    cfg = load_cfg(args.config)
    cfg = apply_overrides(cfg, find_scenario(args.scenario)["overrides"])
    cli: Dict = {"sim": {}}
    if args.seed is not None:
        cli["sim"]["seed"] = args.seed
    if args.strategy is not None:
        cli["sim"]["strategy"] = args.strategy
    if args.packets is not None:
        cli["sim"]["max_packets"] = args.packets
    if args.plot:
        cli["experiments"] = {"plot": True, "record_trace": True}
    return apply_overrides(cfg, cli)

def plot_time_series(series: List[Dict[str, float]], reference: Optional[float], scenario_name: str):
    """
    Persist a PNG plot of the running average queue length versus the number
    of accepted packets, with the reference value drawn as a horizontal line
    for visual warm-up diagnosis.
    """
    if not series:
        return None
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt  # type: ignore
    except ImportError:
        logger.warning("matplotlib is not installed; skipping plot")
        return None
    x = [pt["accepted"] for pt in series]
    y = [pt["avg_queue_length"] for pt in series]
    plt.figure(figsize=(9, 5))
    plt.plot(x, y, label="Running avg queue length", color="#2563eb")
    if reference is not None:
        plt.axhline(reference, color="#f59e0b", linestyle="--", label="M/M/1/K reference")
    plt.xlim(left=0)
    plt.xlabel("Accepted packets")
    plt.ylabel("Average queue length (excluding packet in service)")
    plt.title(f"{scenario_name}: running average")
    plt.legend()
    plt.grid(True, linestyle="--", alpha=0.4)
    out_dir = os.path.join(ROOT, "experiments", "output")
    os.makedirs(out_dir, exist_ok=True)
    safe_name = scenario_name.lower().replace(" ", "_")
    out_path = os.path.join(out_dir, f"{safe_name}_queue_length.png")
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    return out_path

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Two-queue discrete-event simulation")
    ap.add_argument("--config", default=DEFAULT_CONFIG, help="YAML config file")
    ap.add_argument("--scenario", default="baseline", choices=[s["name"] for s in SCENARIOS])
    ap.add_argument("--seed", type=int, default=None, help="fixed RNG seed (default: wall clock)")
    ap.add_argument("--strategy", default=None, help="uniformly_random | shortest_queue")
    ap.add_argument("--packets", type=int, default=None, help="number of pre-generated arrivals")
    ap.add_argument("--plot", action="store_true", help="save a running-average plot")
    ap.add_argument("--log-level", default="WARNING")
    return ap.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    """Entry point: run the selected scenario once and report statistics."""
    args = parse_args(argv)
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s",
                        level=getattr(logging, str(args.log_level).upper(), logging.WARNING))
    try:
        cfg = build_cfg(args)
        res = run(cfg)
    except ConfigurationError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2
    except InternalConsistencyError as exc:
        logger.error("simulation aborted: %s", exc)
        return 1

    sim_cfg = cfg["sim"]
    print(f"Scenario: {args.scenario} (lambda={sim_cfg['arrival_rate']}, mu={sim_cfg['service_rate']}, "
          f"strategy={sim_cfg['strategy']}, packets={sim_cfg['max_packets']}, seed={sim_cfg['seed']})")
    print(f"  stats avg q length = {res['avg_queue_length']:.6f}, "
          f"avg wait time = {res['avg_wait_time']:.6f}, block rate = {res['blocked_rate']:.6f}")
    print(f"  blocked={res['blocked']} accepted={res['accepted']} events={res['iterations']}")
    print(f"  accepted by queue: {res['accepted_by_queue']}")

    reference = None
    if not cfg.get("routing", {}).get("overflow_to_other", True):
        ref = mm1k_metrics(float(sim_cfg["arrival_rate"]), float(sim_cfg["service_rate"]),
                           int(sim_cfg["queue_capacity"]))
        reference = ref["sampled_lq"]
        print("  M/M/1/K reference (per queue):")
        print(f"    pi0 = {ref['pi0']:.4f}, blocking = {ref['blocking']:.4f}, Lq = {ref['Lq']:.4f}")
        print(f"    expected avg q length = {ref['sampled_lq']:.4f}, expected avg wait = {ref['W_q']:.4f}")

    if cfg.get("experiments", {}).get("plot"):
        plot_path = plot_time_series(res.get("time_series", []), reference, args.scenario)
        if plot_path:
            print(f"  Running-average plot saved to: {plot_path}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
