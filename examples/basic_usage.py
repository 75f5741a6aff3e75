"""
Basic usage example for veccompress.

This example demonstrates the main workflow:
- Compressing a vector set with analysis
- Reading metrics, regime and warnings
- Comparing quantization methods
- Picking a grid step automatically
"""

import json

import numpy as np

from veccompress import (
    CompressionConfig,
    CompressionPipeline,
    compare_methods,
    estimate_grid_step,
    safe_compress,
)


def main():
    """Run basic usage example."""
    print("veccompress - Basic Usage Example")
    print("=" * 50)

    # 1. Generate sample data
    print("\n1. Generating sample data...")
    np.random.seed(42)
    vectors = np.random.randn(500, 64)

    # 2. Compress with the default configuration
    print("2. Compressing with the balanced preset...")
    pipeline = CompressionPipeline(CompressionConfig.from_preset("balanced"))
    result = pipeline.run(vectors)
    print(f"   Compression ratio: {result.compression_ratio:.2f}x")
    print(f"   Recall@10: {result.metrics.recall_at_10:.3f}")
    print(f"   Collapse index: {result.metrics.collapse_index:.3f}")
    print(f"   Regime: {result.regime.value}")
    for warning in result.warnings or []:
        print(f"   Warning: {warning}")

    # 3. Try a coarser grid
    print("\n3. Compressing with the aggressive preset...")
    pipeline.set_config(CompressionConfig.from_preset("aggressive"))
    coarse = pipeline.run(vectors)
    print(f"   Compression ratio: {coarse.compression_ratio:.2f}x, regime: {coarse.regime.value}")

    # 4. Compare methods on the same grid
    print("\n4. Comparing lattice and boundary-aware quantization...")
    comparison = compare_methods(vectors, grid_step=0.2)
    print(f"   Improvement: {json.dumps(comparison['improvement'], indent=2)}")

    # 5. Let the helpers pick the grid
    print("\n5. Automatic grid selection...")
    print(f"   Estimated step for 4x: {estimate_grid_step(vectors, 4.0):.4f}")
    safe = safe_compress(vectors)
    print(f"   safe_compress settled on grid_step={safe.grid_step} ({safe.regime.value})")

    print("\nExample completed successfully!")


if __name__ == "__main__":
    main()
