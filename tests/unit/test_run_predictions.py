from __future__ import annotations

import json
import math

import pandas as pd
import pytest

from common.signals import sine_signal
from experiments.run_predictions import (
    COLUMNS,
    PredictionPlan,
    build_signal,
    main,
    run_sweep,
    summarize,
)


def test_run_sweep_sine_reference() -> None:
    plan = PredictionPlan(count=10)
    signal = build_signal(plan)
    df = run_sweep(signal, plan)
    assert list(df.columns) == COLUMNS
    assert df["position"].tolist() == list(range(512, 522))
    assert df["err_fwd"].max() < 1e-6
    # position 512 has no sample before its window
    assert math.isnan(df.loc[0, "backward"])
    assert df["err_bwd"].dropna().max() < 1e-6
    assert df["actual_fwd"].tolist() == pytest.approx(signal[512:522].tolist())


def test_run_sweep_zero_count() -> None:
    plan = PredictionPlan(count=0)
    df = run_sweep(sine_signal(600, 50.0), plan)
    assert df.empty
    assert list(df.columns) == COLUMNS
    s = summarize(df)
    assert s["n_positions"] == 0
    assert math.isnan(s["fwd_err_max"])


def test_summarize() -> None:
    df = pd.DataFrame(
        {
            "err_fwd": [0.1, 0.3],
            "err_bwd": [float("nan"), 0.2],
        }
    )
    s = summarize(df)
    assert s["n_positions"] == 2
    assert s["fwd_err_max"] == pytest.approx(0.3)
    assert s["fwd_err_mean"] == pytest.approx(0.2)
    assert s["bwd_err_max"] == pytest.approx(0.2)
    assert s["bwd_err_mean"] == pytest.approx(0.2)


def test_build_signal_csv_requires_path() -> None:
    with pytest.raises(ValueError):
        build_signal(PredictionPlan(signal="csv"))


def test_main_writes_outputs(tmp_path, capsys) -> None:
    out = tmp_path / "run"
    rc = main(["--count", "3", "--precision", "decimal", "--out", str(out)])
    assert rc == 0
    df = pd.read_csv(out / "predictions.csv")
    assert df["position"].tolist() == [512, 513, 514]
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["plan"]["precision"] == "decimal"
    assert manifest["summary"]["n_positions"] == 3
    assert "[burg] forward" in capsys.readouterr().out


def test_main_csv_signal(tmp_path) -> None:
    path = tmp_path / "sig.csv"
    pd.DataFrame({"x": sine_signal(80, 16.0)}).to_csv(path, index=False)
    rc = main(["--signal", "csv", "--csv", str(path), "--order", "2", "--history", "32",
               "--count", "5"])
    assert rc == 0


def test_main_reports_errors(capsys) -> None:
    assert main(["--precision", "quad"]) == 2
    assert "unsupported precision" in capsys.readouterr().err
    assert main(["--order", "512"]) == 1
    assert main(["--start", "100"]) == 1
