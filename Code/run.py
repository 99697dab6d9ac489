# run.py
"""
Compare the regret-matching variants on rock-paper-scissors self-play and save
figures to ./figures/.

For every algorithm and seed, two minimizers play T rounds against each other.
At each requested T the averaged strategy of player one is scored by its
L-infinity deviation from the uniform equilibrium (1/3, 1/3, 1/3).

Terminal output: mean deviation across seeds, one row per algorithm.

Figures:
  - exploitability_vs_T.png   median deviation across seeds (log-log)
  - nash_gap_vs_T.png         median Nash gap of the averaged pair
"""
import os
import argparse
import logging

import numpy as np

import matplotlib
matplotlib.use("Agg")  # set backend before importing pyplot
import matplotlib.pyplot as plt

from game import RPS_PAYOFF, RPSAction
from matchers import ALGORITHMS, LABELS
from metrics import exploitability, max_deviation, qstats, value
from selfplay import SelfPlay

logger = logging.getLogger(__name__)


def save_fig(outdir, filename, dpi=200):
    """Save the current matplotlib figure and close it."""
    plt.tight_layout()
    plt.savefig(os.path.join(outdir, filename), dpi=dpi)
    plt.close()


def run_curve(name, T, seed, eval_every=50, plays=1, checkpoints=()):
    """
    One self-play run of `name` for T rounds.

    Returns:
        x     : evaluation times (every eval_every, each checkpoint, and T)
        dev   : deviation of player one's average from uniform at each x
        gap   : Nash gap of the averaged pair at each x
        final : (best_weight, opponent_best_weight) at T
    """
    rng = np.random.default_rng(seed)
    harness = SelfPlay.with_algorithm(name, RPS_PAYOFF)

    x = np.unique(np.concatenate([np.arange(eval_every, T + 1, eval_every), checkpoints, [T]]))
    x = x[(x >= 1) & (x <= T)].astype(int)
    dev = np.zeros(x.shape[0])
    gap = np.zeros(x.shape[0])

    k = 0
    for t in range(1, T + 1):
        for _ in range(plays):
            harness.run_one(rng)
        harness.update_regret()

        if k < x.shape[0] and t == x[k]:
            p = harness.best_weight()
            q = harness.opponent_best_weight()
            dev[k] = max_deviation(p)
            gap[k] = exploitability(p, q, RPS_PAYOFF)[0]
            k += 1

    return x, dev, gap, (harness.best_weight(), harness.opponent_best_weight())


def compare(names, Ts, seeds, eval_every=50, plays=1):
    """
    Run every algorithm for max(Ts) rounds per seed.

    Returns dict name -> {"x", "dev" (seeds, len(x)), "gap", "at_T" (seeds, len(Ts)), "final"}
    """
    T_max = max(Ts)
    results = {}
    for name in names:
        devs, gaps, finals = [], [], []
        for sd in seeds:
            x, dev, gap, final = run_curve(name, T_max, sd, eval_every, plays, Ts)
            devs.append(dev)
            gaps.append(gap)
            finals.append(final)
            logger.info("%s seed=%d deviation=%.4g", name, sd, dev[-1])

        devs = np.array(devs)
        idx = [int(np.searchsorted(x, T)) for T in Ts]
        results[name] = {
            "x": x,
            "dev": devs,
            "gap": np.array(gaps),
            "at_T": devs[:, idx],
            "final": finals,
        }
    return results


def plot_curves(outdir, results, key, filename, ylabel, title):
    """Median across seeds with IQR band, one line per algorithm."""
    plt.figure()
    for name, res in results.items():
        mat = res[key]
        med = np.median(mat, axis=0)
        q25 = np.quantile(mat, 0.25, axis=0)
        q75 = np.quantile(mat, 0.75, axis=0)
        plt.plot(res["x"], med, label=LABELS[name])
        plt.fill_between(res["x"], q25, q75, alpha=0.2)
    plt.xscale("log")
    plt.yscale("log")
    plt.xlabel("T")
    plt.ylabel(ylabel)
    plt.title(title)
    plt.legend()
    save_fig(outdir, filename)


def main(Ts=(1000, 2500, 5000, 10000, 25000), names=None, seeds=(0, 1, 2),
         outdir="figures", plays=1):
    os.makedirs(outdir, exist_ok=True)
    names = list(names) if names else list(ALGORITHMS)
    Ts = sorted(Ts)

    results = compare(names, Ts, list(seeds), plays=plays)

    plot_curves(outdir, results, "dev", "exploitability_vs_T.png",
                "max |w - 1/3|", "Deviation from Nash vs T")
    plot_curves(outdir, results, "gap", "nash_gap_vs_T.png",
                "Nash gap", "Nash gap of averaged strategies vs T")

    # Terminal output: comparison table
    print(f"Deviation from Nash by iteration count (lower is better, seeds={len(seeds)}, plays/update={plays}):")
    print()
    header = f"{'Algorithm':15}" + "".join(f" {T:>10}" for T in Ts)
    print(header)
    print("-" * len(header))
    for name in names:
        row = results[name]["at_T"].mean(axis=0)
        print(f"{LABELS[name]:15}" + "".join(f" {v:>10.4f}" for v in row))

    print()
    print(f"Final averaged strategy of player one and game value of the averaged pair (T={Ts[-1]}, first seed):")
    for name in names:
        p, q = results[name]["final"][0]
        mix = "  ".join(f"{a.name.lower()}={p[a]:.4f}" for a in RPSAction)
        dmin, _, dmed, _, dmax = qstats(results[name]["at_T"][:, -1])
        print(f"  {LABELS[name]:12} {mix}   deviation median={dmed:.4g} range=[{dmin:.4g},{dmax:.4g}]"
              f"   value={value(p, q, RPS_PAYOFF):+.4f}")

    print(f"Saved figures to: {outdir}/")
    return results


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--T", type=int, nargs="+", default=[1000, 2500, 5000, 10000, 25000])
    parser.add_argument(
        "--algorithms",
        nargs="*",
        choices=sorted(ALGORITHMS),
        default=None,
        help="subset to run, default all",
    )
    parser.add_argument("--nseeds", type=int, default=3)
    parser.add_argument(
        "--seeds",
        type=int,
        nargs="*",
        default=None,
        help="optional explicit list, e.g. --seeds 0 1 2 3",
    )
    parser.add_argument("--plays", type=int, default=1, help="plays per regret update")
    parser.add_argument("--outdir", type=str, default="figures")
    parser.add_argument("--log-level", type=str, default="WARNING")

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    seeds = list(args.seeds) if args.seeds is not None else list(range(args.nseeds))

    main(Ts=args.T, names=args.algorithms, seeds=seeds, outdir=args.outdir, plays=args.plays)

    # How to run:
    #   python run.py
    #   python run.py --T 1000 10000 --algorithms dcfr pdcfr+
    #   python run.py --plays 10 --nseeds 10 --log-level INFO
