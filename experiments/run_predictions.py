# experiments/run_predictions.py
# Python 3.10+
# Purpose: sweep the Fast Burg estimator over consecutive positions of a signal and
#          compare forward/backward one-step predictions with the true samples.
# - Each position is a full, independent estimate (no reuse between neighbours).
# - Signal source: synthetic sine (reference scenario), all-zero, or one CSV column.
# - Output: predictions.csv (per position) + manifest.json (plan snapshot), summary on stdout.
# - Deps: numpy, pandas, project modules (burg, common.numeric, common.signals)

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from burg import BurgError, FastBurg
from common.numeric import Precision, UnsupportedPrecisionError, backend_for
from common.signals import load_signal_csv, sine_signal, zero_signal

_LOG = logging.getLogger(__name__)

COLUMNS = ["position", "actual_fwd", "forward", "err_fwd", "actual_bwd", "backward", "err_bwd"]


@dataclass(slots=True)
class PredictionPlan:
    # signal source
    signal: str = "sine"              # sine|zeros|csv
    csv_path: Optional[str] = None
    column: Optional[str] = None
    length: int = 523
    period: float = 512 / 5.2

    # model
    order: int = 4
    history: int = 512
    precision: str = Precision.DOUBLE.value

    # sweep: positions start .. start+count-1 (start defaults to history)
    start: Optional[int] = None
    count: int = 10

    # output
    out_dir: Optional[str] = None


def build_signal(plan: PredictionPlan) -> np.ndarray:
    if plan.signal == "sine":
        return sine_signal(plan.length, plan.period)
    if plan.signal == "zeros":
        return zero_signal(plan.length)
    if plan.signal == "csv":
        if not plan.csv_path:
            raise ValueError("--csv is required for --signal csv")
        return load_signal_csv(plan.csv_path, plan.column)
    raise ValueError(f"unsupported signal source: {plan.signal}")


def run_sweep(signal: np.ndarray, plan: PredictionPlan) -> pd.DataFrame:
    """
    One row per position.  Backward columns are NaN where the backward target
    (position - history - 1) falls before the first sample.
    """
    if plan.count < 0:
        raise ValueError("count must be >= 0")
    start = plan.history if plan.start is None else int(plan.start)
    fb = FastBurg(signal, backend_for(plan.precision))
    x = fb.signal

    rows: List[Dict[str, float]] = []
    for position in range(start, start + plan.count):
        est = fb.train(position, plan.order, plan.history)
        fwd = fb.forward_prediction()
        row = {
            "position": position,
            "actual_fwd": float(x[position]),
            "forward": fwd,
            "err_fwd": abs(fwd - float(x[position])),
            "actual_bwd": float("nan"),
            "backward": float("nan"),
            "err_bwd": float("nan"),
        }
        target = est.window.backward_target
        if target >= 0:
            bwd = fb.backward_prediction()
            row.update(actual_bwd=float(x[target]), backward=bwd, err_bwd=abs(bwd - float(x[target])))
        rows.append(row)
        _LOG.debug("position=%d forward=%.12g err=%.3g", position, fwd, row["err_fwd"])

    return pd.DataFrame(rows, columns=COLUMNS)


def summarize(df: pd.DataFrame) -> Dict[str, float]:
    """Max/mean absolute errors; NaN where a direction has no rows."""
    def _stat(col: str, fn) -> float:
        s = df[col].dropna() if col in df else pd.Series(dtype=float)
        return float(fn(s)) if len(s) else float("nan")

    return {
        "n_positions": int(len(df)),
        "fwd_err_max": _stat("err_fwd", np.max),
        "fwd_err_mean": _stat("err_fwd", np.mean),
        "bwd_err_max": _stat("err_bwd", np.max),
        "bwd_err_mean": _stat("err_bwd", np.mean),
    }


def write_outputs(out_dir: Path, df: pd.DataFrame, plan: PredictionPlan, summary: Dict[str, float]) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    csv_path = out_dir / "predictions.csv"
    df.to_csv(csv_path, index=False)
    manifest = {
        "created_utc": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "plan": asdict(plan),
        "summary": summary,
    }
    (out_dir / "manifest.json").write_text(json.dumps(manifest, indent=2, ensure_ascii=False))
    return csv_path


# ---------- CLI ----------

def parse_args(argv: Optional[List[str]] = None) -> tuple[PredictionPlan, str]:
    ap = argparse.ArgumentParser(description="Fast Burg one-step prediction sweep")
    ap.add_argument("--signal", choices=["sine", "zeros", "csv"], default="sine")
    ap.add_argument("--csv", default=None, help="CSV file for --signal csv")
    ap.add_argument("--column", default=None, help="CSV column (default: first numeric column)")
    ap.add_argument("--length", type=int, default=523, help="synthetic signal length")
    ap.add_argument("--period", type=float, default=512 / 5.2, help="sine period in samples")

    ap.add_argument("--order", type=int, default=4)
    ap.add_argument("--history", type=int, default=512)
    ap.add_argument("--precision", default=Precision.DOUBLE.value,
                    help="|".join(p.value for p in Precision))

    ap.add_argument("--start", type=int, default=None, help="first position (default: --history)")
    ap.add_argument("--count", type=int, default=10)
    ap.add_argument("--out", default=None, help="output directory (predictions.csv, manifest.json)")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args(argv)

    plan = PredictionPlan(
        signal=args.signal,
        csv_path=args.csv,
        column=args.column,
        length=args.length,
        period=args.period,

        order=args.order,
        history=args.history,
        precision=args.precision,

        start=args.start,
        count=args.count,
        out_dir=args.out,
    )
    return plan, args.log_level


def main(argv: Optional[List[str]] = None) -> int:
    plan, log_level = parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(log_level).upper(), logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        backend_for(plan.precision)
        signal = build_signal(plan)
        df = run_sweep(signal, plan)
    except UnsupportedPrecisionError as e:
        print(f"[burg] ERROR: {e}", file=sys.stderr)
        return 2
    except (BurgError, ValueError, KeyError, OSError) as e:
        print(f"[burg] ERROR: {e}", file=sys.stderr)
        return 1

    summary = summarize(df)
    print(f"[burg] positions={summary['n_positions']} order={plan.order} history={plan.history} "
          f"precision={plan.precision}")
    print(f"[burg] forward  err max={summary['fwd_err_max']:.3e} mean={summary['fwd_err_mean']:.3e}")
    print(f"[burg] backward err max={summary['bwd_err_max']:.3e} mean={summary['bwd_err_mean']:.3e}")

    if plan.out_dir:
        csv_path = write_outputs(Path(plan.out_dir), df, plan, summary)
        print(f"[burg] saved: {csv_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
