#!/usr/bin/env python3
"""
Processing Pipeline Example
"""

import os

import numpy as np

from dataproc import Data, PipelineConfig, ProcessingExecutor, clip, percent_scale


def run_factories():
    """Apply processors directly"""
    print("=== Factory Processors ===")

    data = Data([-5.0, 3.0, 15.0])
    for processor in [clip(0, 10), percent_scale()]:
        print(f"{processor.get_name():<30} {processor.process(data)}")


def run_pipeline():
    """Run the YAML pipeline through the executor"""
    print("\n=== YAML Pipeline ===")

    config_path = os.path.join(os.path.dirname(__file__), "..", "config", "pipeline.yaml")
    config = PipelineConfig.load_from_yaml(config_path)

    np.random.seed(42)
    readings = np.random.normal(loc=20.0, scale=30.0, size=1000)

    executor = ProcessingExecutor(
        common_params={"pipeline": config, "console_log": True},
        role_params={"data": readings},
    )
    try:
        result = executor.run()
    finally:
        executor.close()

    print(f"Pipeline: {result['pipeline']}")
    print(f"Input:  min={result['input_summary']['min']:.2f} max={result['input_summary']['max']:.2f}")
    print(f"Output: mean={result['output_summary']['mean']:.4f} std={result['output_summary']['std']:.4f}")


if __name__ == "__main__":
    run_factories()
    run_pipeline()
