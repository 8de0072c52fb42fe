"""
dataproc
一维数值数据处理库

功能模块：
- data: 不可变一维数据容器
- processing: 缩放、标准化、截断处理器
- config: 处理流水线配置
- utils: 日志工具
"""

from .data import Data
from .processing import (
    Processor,
    scale,
    percent_scale,
    standardize,
    clip,
    clip_lower,
    clip_upper,
    chain,
)
from .config import PipelineConfig, StepConfig
from .processing.executor import ProcessingExecutor

__version__ = "0.1.0"

__all__ = [
    "Data",
    "Processor",
    "scale",
    "percent_scale",
    "standardize",
    "clip",
    "clip_lower",
    "clip_upper",
    "chain",
    "PipelineConfig",
    "StepConfig",
    "ProcessingExecutor",
]
