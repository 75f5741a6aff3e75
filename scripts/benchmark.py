#!/usr/bin/env python3
"""
Benchmark script for veccompress.

This script compresses seeded synthetic data across a range of grid steps
with every implemented method and records ratio, recall, collapse index and
timing for each run.
"""

import argparse
import json
import time
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

from veccompress import CompressionPipeline, compare_methods
from veccompress.utils.rng import SeededRNG


class BenchmarkSuite:
    """Benchmark suite for veccompress."""

    def __init__(self, output_dir: str = "benchmark_results"):
        """Initialize benchmark suite."""
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(exist_ok=True)

    def generate_data(self, num_vectors: int, dimension: int, seed: int = 42) -> np.ndarray:
        """Generate reproducible test vectors."""
        return SeededRNG(seed).random_vectors(num_vectors, dimension)

    def benchmark_grid_steps(self, vectors: np.ndarray, grid_steps: List[float]) -> Dict[str, Any]:
        """Benchmark both grid methods over a range of grid steps."""
        print("Benchmarking grid steps...")

        results = {}
        for method in ("LATTICE", "BOUNDARY_AWARE"):
            runs = []
            for grid_step in grid_steps:
                print(f"  Testing {method} with grid_step={grid_step}...")
                pipeline = CompressionPipeline(method=method, grid_step=grid_step, boundary_margin=grid_step / 2)

                start_time = time.time()
                result = pipeline.run(vectors)
                duration = time.time() - start_time

                runs.append({
                    "grid_step": grid_step,
                    "compression_ratio": result.compression_ratio,
                    "recall_at_10": result.metrics.recall_at_10,
                    "collapse_index": result.metrics.collapse_index,
                    "regime": result.regime.value,
                    "time": duration,
                })
            results[method] = runs

        return results

    def benchmark_method_comparison(self, vectors: np.ndarray, grid_steps: List[float]) -> Dict[str, Any]:
        """Record how much boundary-aware quantization improves on the lattice."""
        print("Benchmarking method comparison...")

        return {
            str(grid_step): compare_methods(vectors, grid_step)["improvement"]
            for grid_step in grid_steps
        }

    def benchmark_scalability(self, dimension: int, vector_counts: List[int]) -> Dict[str, Any]:
        """Benchmark pipeline time as the number of vectors grows."""
        print("Benchmarking scalability...")

        results = {}
        pipeline = CompressionPipeline()
        for count in vector_counts:
            print(f"  Testing {count} vectors...")
            vectors = self.generate_data(count, dimension)

            start_time = time.time()
            pipeline.run(vectors)
            results[str(count)] = {"time": time.time() - start_time}

        return results

    def run_benchmarks(self, config: Dict[str, Any]):
        """Run all benchmarks."""
        print("Starting veccompress benchmarks...")
        print(f"Configuration: {config}")

        vectors = self.generate_data(config["num_vectors"], config["dimension"])

        all_results = {
            "config": config,
            "grid_steps": self.benchmark_grid_steps(vectors, config["grid_steps"]),
            "comparison": self.benchmark_method_comparison(vectors, config["grid_steps"]),
            "scalability": self.benchmark_scalability(config["dimension"], config["vector_counts"]),
        }

        results_file = self.output_dir / "benchmark_results.json"
        with open(results_file, "w") as f:
            json.dump(all_results, f, indent=2)

        print(f"\nBenchmark results saved to {results_file}")
        self.print_summary(all_results)

    def print_summary(self, results: Dict[str, Any]):
        """Print benchmark summary."""
        print("\n" + "=" * 50)
        print("BENCHMARK SUMMARY")
        print("=" * 50)

        for method, runs in results["grid_steps"].items():
            print(f"\n{method}:")
            for run in runs:
                print(
                    f"  step={run['grid_step']:<6} ratio={run['compression_ratio']:8.2f} "
                    f"recall@10={run['recall_at_10']:.3f} regime={run['regime']}"
                )

        print("\nSCALABILITY:")
        for count, stats in results["scalability"].items():
            print(f"  {count} vectors: {stats['time']:.4f}s")


def main():
    """Main benchmark function."""
    parser = argparse.ArgumentParser(description="Benchmark veccompress")
    parser.add_argument("--vectors", type=int, default=1000,
                        help="Number of vectors to test with")
    parser.add_argument("--dimension", type=int, default=64,
                        help="Dimension of test vectors")
    parser.add_argument("--output-dir", type=str, default="benchmark_results",
                        help="Output directory for results")
    parser.add_argument("--quick", action="store_true",
                        help="Run quick benchmarks with smaller datasets")

    args = parser.parse_args()

    if args.quick:
        config = {
            "num_vectors": 100,
            "dimension": 16,
            "grid_steps": [0.05, 0.2],
            "vector_counts": [100, 500],
        }
    else:
        config = {
            "num_vectors": args.vectors,
            "dimension": args.dimension,
            "grid_steps": [0.01, 0.05, 0.1, 0.2, 0.5],
            "vector_counts": [100, 500, 1000, 5000],
        }

    suite = BenchmarkSuite(args.output_dir)
    suite.run_benchmarks(config)


if __name__ == "__main__":
    main()
