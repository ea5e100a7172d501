"""CLI for running LiftSim single runs, tournaments and heuristic training."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from liftpolicy import available_policies, get_policy
from liftsim import SimulationConfig, SimulationEngine
from liftsim.metrics import combined_average
from liftsim.tournament import run_tournament
from liftsim.training import HeuristicTrainer

logger = logging.getLogger("liftsim.cli")


def load_config(path: Optional[Path], overrides: Dict[str, object]) -> SimulationConfig:
    data: Dict[str, object] = {}
    if path is not None:
        data = json.loads(path.read_text(encoding="utf-8"))
    data.update({key: value for key, value in overrides.items() if value is not None})
    return SimulationConfig(**data)


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def run_single(config: SimulationConfig, policy_name: str) -> Dict:
    engine = SimulationEngine.from_config(config)
    policy = get_policy(policy_name)
    result = engine.run(policy, config.seed, config.generation_window_ticks, config.density)

    print(f"Policy: {result.policy_name}")
    print(f"Seed: {result.seed}")
    print(f"Requests generated: {result.generated_count}")
    print(f"Ticks: {result.ticks_elapsed} (drain: {result.drain_ticks})")
    if result.drain_cap_exceeded:
        print(
            f"Drain cap hit: {result.pending_remaining} waiting, "
            f"{result.riders_remaining} riding"
        )
    print("Statistics:")
    for key, value in result.statistics.to_dict().items():
        print(f"  {key}: {value}")
    return {"mode": "single", "config": config.model_dump(), "result": result.to_dict()}


def run_policy_tournament(config: SimulationConfig) -> Dict:
    entries = run_tournament(config)
    print(f"Tournament over seeds: {', '.join(str(seed) for seed in config.seeds)}")
    for rank, entry in enumerate(entries, start=1):
        score = "n/a" if entry.score is None else f"{entry.score:.2f}"
        flag = "" if entry.qualified else "  (disqualified)"
        print(f"  {rank}. {entry.name}: {score}{flag}")
    return {
        "mode": "tournament",
        "config": config.model_dump(),
        "ranking": [entry.to_dict() for entry in entries],
    }


def run_training(config: SimulationConfig, iterations: int, seed: Optional[int]) -> Dict:
    trainer = HeuristicTrainer(config, seed=seed)

    def progress(iteration: int, weights, score: float, improved: bool) -> None:
        marker = " *" if improved else ""
        print(f"[{iteration}/{iterations}] score {score:.2f}{marker}")

    report = trainer.train(iterations, on_progress=progress)
    print(f"Best score: {report.best_score:.4f} ({report.improvements} improvements)")
    print("Best weights:")
    for key, value in report.best_weights.model_dump().items():
        print(f"  {key}: {value:.4f}")

    baseline = SimulationEngine.from_config(config).run_seeds(
        get_policy("fifo"), config.seeds, config.generation_window_ticks, config.density
    )
    fifo_score = combined_average(result.statistics for result in baseline)
    if fifo_score is not None:
        print(f"FIFO reference score: {fifo_score:.4f}")
    return {"mode": "train", "config": config.model_dump(), "report": report.to_dict()}


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("mode", choices=["single", "tournament", "train"])
    parser.add_argument("--config", type=Path, help="Path to a JSON configuration file")
    parser.add_argument("--policy", default="heuristic", choices=available_policies())
    parser.add_argument("--seed", type=int, help="Seed for single runs")
    parser.add_argument("--density", type=float)
    parser.add_argument("--window", type=int, dest="generation_window_ticks")
    parser.add_argument("--iterations", type=int, default=100)
    parser.add_argument("--training-seed", type=int)
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the run report as JSON",
    )
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(
        args.config,
        {
            "seed": args.seed,
            "density": args.density,
            "generation_window_ticks": args.generation_window_ticks,
        },
    )
    if args.mode == "single":
        results = run_single(config, args.policy)
    elif args.mode == "tournament":
        results = run_policy_tournament(config)
    else:
        results = run_training(config, args.iterations, args.training_seed)

    save_results(args.output, results)
    if args.output:
        print(f"Saved report to {args.output}")
        logger.info("Report written to %s", args.output)


if __name__ == "__main__":
    main()
