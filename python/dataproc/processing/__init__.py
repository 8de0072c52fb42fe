"""
Data Processing Module
数据处理模块

提供一维数据的缩放、标准化和截断处理器。

Usage:
    from dataproc import Data
    from dataproc.processing import clip, scale

    data = Data([-5.0, 3.0, 15.0])
    clipped = clip(0, 10).process(data)      # Data([0.0, 3.0, 10.0])
    scaled = scale(0, 100).process(clipped)  # Data([0.0, 30.0, 100.0])
"""

from .base import Processor
from .processors import (
    Scaler,
    PercentScaler,
    Standardizer,
    Clipper,
    ProcessorChain,
    scale,
    percent_scale,
    standardize,
    clip,
    clip_lower,
    clip_upper,
    chain,
)
from .registry import available_methods, build_processor
from .stats import data_min, data_max, data_avg, data_std, describe

__all__ = [
    "Processor",
    "Scaler",
    "PercentScaler",
    "Standardizer",
    "Clipper",
    "ProcessorChain",
    "scale",
    "percent_scale",
    "standardize",
    "clip",
    "clip_lower",
    "clip_upper",
    "chain",
    "available_methods",
    "build_processor",
    "data_min",
    "data_max",
    "data_avg",
    "data_std",
    "describe",
]
