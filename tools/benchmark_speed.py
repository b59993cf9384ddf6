"""
Performance Benchmark
=====================

Measures headless simulation throughput (ticks per second) while paint is
being poured continuously.

Usage:
    python -m tools.benchmark_speed [--ticks N] [--frame-ms MS] [--seed SEED]
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from gravity_paint.paint_core.config_loader import load_config
from gravity_paint.paint_core.simulation import Simulation


def benchmark_simulation(
    num_ticks: int = 2000,
    frame_ms: float = 1000 / 60,
    seed: int = 42
) -> dict:
    """
    Benchmark the tick loop with paint held down the whole run.

    Args:
        num_ticks: Number of ticks to run.
        frame_ms: Simulated milliseconds per tick.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    sim = Simulation(config=load_config(), seed=seed)
    sim.start(0.0)
    sim.start_painting(0.0)

    merges = 0
    peak_particles = 0
    start = time.perf_counter()

    for i in range(1, num_ticks + 1):
        result = sim.tick(i * frame_ms)
        merges += len(result.merges)
        peak_particles = max(peak_particles, result.particle_count)

    elapsed = time.perf_counter() - start
    info = sim.get_info()

    return {
        "num_ticks": num_ticks,
        "elapsed_seconds": elapsed,
        "ticks_per_second": num_ticks / elapsed,
        "ms_per_tick": (elapsed * 1000) / num_ticks,
        "merges": merges,
        "peak_particles": peak_particles,
        "final_particles": info["particles"],
        "dry_particles": info["dry_particles"],
    }


def main():
    parser = argparse.ArgumentParser(description="Benchmark simulation speed")
    parser.add_argument("--ticks", type=int, default=2000, help="Ticks to simulate")
    parser.add_argument("--frame-ms", type=float, default=1000 / 60, help="Simulated ms per tick")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    results = benchmark_simulation(args.ticks, args.frame_ms, args.seed)

    print("=== Simulation Benchmark ===")
    print(f"  Ticks:           {results['num_ticks']}")
    print(f"  Elapsed:         {results['elapsed_seconds']:.3f} s")
    print(f"  Ticks/second:    {results['ticks_per_second']:.1f}")
    print(f"  ms/tick:         {results['ms_per_tick']:.3f}")
    print(f"  Merges:          {results['merges']}")
    print(f"  Peak particles:  {results['peak_particles']}")
    print(f"  Final particles: {results['final_particles']} ({results['dry_particles']} dry)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
