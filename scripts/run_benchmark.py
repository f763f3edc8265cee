"""Run the estimate-overrun benchmark on a CSV/JSON task snapshot."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from suggestion_engine.adapters import csv_adapter, json_adapter
from suggestion_engine.overrun_model import benchmark_models, build_training_table

logger = logging.getLogger("run_benchmark")


def _load_tasks(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    logging.basicConfig(
        level=os.getenv("SUGGESTION_ENGINE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description="Benchmark estimate-overrun models on a task snapshot")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON task snapshot")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    try:
        tasks = _load_tasks(Path(args.data))
    except ValueError as exc:
        logger.error(f"Could not load {args.data}: {exc}")
        sys.exit(1)

    try:
        X, y, feature_names = build_training_table(tasks)
        report = benchmark_models(X, y, seed=args.seed)
    except ValueError as exc:
        logger.error(f"Could not benchmark {args.data}: {exc}")
        sys.exit(1)
    report["feature_names"] = feature_names
    report["n_tasks"] = int(len(y))

    print(json.dumps(report, indent=2))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "overrun_benchmark.json"
    out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    logger.info(f"Saved benchmark report to {out_path}")


if __name__ == "__main__":
    main()
