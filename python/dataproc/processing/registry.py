"""
Processor Registry
处理器注册表

将配置中的方法名映射到工厂函数。
"""

import logging
from typing import Any, Callable, Dict, List, Mapping

from .base import Processor
from .processors import (
    clip,
    clip_lower,
    clip_upper,
    percent_scale,
    scale,
    standardize,
)

logger = logging.getLogger(__name__)


def _build_scale(params: Mapping[str, Any]) -> Processor:
    return scale(params["min"], params["max"])


def _build_clip(params: Mapping[str, Any]) -> Processor:
    return clip(params["lower"], params["upper"])


PROCESSOR_FACTORIES: Dict[str, Callable[[Mapping[str, Any]], Processor]] = {
    "scale": _build_scale,
    "percent_scale": lambda params: percent_scale(),
    "standardize": lambda params: standardize(),
    "clip": _build_clip,
    "clip_lower": lambda params: clip_lower(params["lower"]),
    "clip_upper": lambda params: clip_upper(params["upper"]),
}


def available_methods() -> List[str]:
    """已注册的方法名"""
    return sorted(PROCESSOR_FACTORIES)


def build_processor(method: str, params: Mapping[str, Any] = None) -> Processor:
    """
    根据方法名和参数创建处理器

    Args:
        method: 方法名，见 available_methods()
        params: 工厂参数

    Returns:
        Processor

    Raises:
        ValueError: 未知方法
        TypeError: 缺少必要参数
    """
    if method not in PROCESSOR_FACTORIES:
        raise ValueError(f"Unknown processing method: {method}")

    params = params or {}
    try:
        processor = PROCESSOR_FACTORIES[method](params)
    except KeyError as e:
        raise TypeError(f"Method '{method}' requires parameter {e}") from e

    logger.debug(f"Built processor {processor.get_name()} for method={method}")
    return processor
