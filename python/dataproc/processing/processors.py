"""
Data Processors
数据处理器

提供缩放、百分比缩放、标准化、截断等处理器及其工厂函数。

公式:
    Scaler:       x' = (x - min) / (max - min) * (target_max - target_min) + target_min
    Standardizer: z  = (x - mean) / std   (总体标准差)
    Clipper:      x' = min(upper, max(lower, x))
"""

import math
from typing import Any, Dict, Iterable, Tuple

import numpy as np

from ..data import Data
from .base import Processor
from .stats import data_avg, data_max, data_min, data_std


def format_number(value: float) -> str:
    """
    格式化名称中的数值

    1e-3 <= |x| < 1e7 时为普通小数（至少一位小数），否则为科学计数法，
    例如 1.0E7、5.0E-4；无穷和 NaN 输出为 Infinity / -Infinity / NaN。
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0 or 1e-3 <= abs(value) < 1e7:
        return np.format_float_positional(value, trim="0")
    mantissa, exponent = np.format_float_scientific(value, trim="0", exp_digits=1).split("e")
    return f"{mantissa}E{int(exponent)}"


class Scaler(Processor):
    """
    最小-最大缩放器

    将输入的观测范围 [min, max] 线性映射到 [target_min, target_max]。
    target_min > target_max 时得到反向映射。输入为常量时结果为 NaN。
    """

    __slots__ = ("target_min", "target_max")

    def __init__(self, target_min: float, target_max: float):
        self._set("target_min", float(target_min))
        self._set("target_max", float(target_max))

    def _transform(self, data: Data) -> np.ndarray:
        values = data.to_numpy()
        minimum = data_min(data)
        maximum = data_max(data)
        scaled = (values - minimum) / (maximum - minimum)
        return scaled * (self.target_max - self.target_min) + self.target_min

    def get_name(self) -> str:
        return f"Scaler({format_number(self.target_min)},{format_number(self.target_max)})"

    def get_params(self) -> Dict[str, Any]:
        return {"min": self.target_min, "max": self.target_max}

    def _init_args(self) -> Tuple:
        return (self.target_min, self.target_max)


class PercentScaler(Scaler):
    """缩放到 [0, 100]"""

    __slots__ = ()

    def __init__(self):
        super().__init__(0.0, 100.0)

    def _init_args(self) -> Tuple:
        return ()


class Standardizer(Processor):
    """
    标准化处理器

    z = (x - mean) / std，std 为总体标准差。输入为常量或为空时结果为 NaN。
    """

    __slots__ = ()

    def _transform(self, data: Data) -> np.ndarray:
        avg = data_avg(data)
        std = data_std(data)
        return (data.to_numpy() - avg) / std

    def get_name(self) -> str:
        return "Standardizer"


class Clipper(Processor):
    """
    截断处理器

    按启用的下界/上界截断数值。两个边界都启用时先按下界再按上界截断，
    因此 lower > upper 时所有值都变成 upper。两个都不启用时原样返回。
    """

    __slots__ = ("clip_lower", "clip_upper", "lower", "upper")

    def __init__(self, clip_lower: bool, clip_upper: bool,
                 lower: float = 0.0, upper: float = 0.0):
        """
        初始化截断处理器

        Args:
            clip_lower: 是否启用下界
            clip_upper: 是否启用上界
            lower: 下界
            upper: 上界
        """
        self._set("clip_lower", bool(clip_lower))
        self._set("clip_upper", bool(clip_upper))
        self._set("lower", float(lower))
        self._set("upper", float(upper))

    def _transform(self, data: Data) -> np.ndarray:
        values = data.to_numpy()
        if self.clip_lower and self.clip_upper:
            return np.minimum(np.maximum(values, self.lower), self.upper)
        elif self.clip_lower:
            return np.maximum(values, self.lower)
        elif self.clip_upper:
            return np.minimum(values, self.upper)
        else:
            return values.copy()

    def get_name(self) -> str:
        if self.clip_lower and self.clip_upper:
            bounds = f"lower = {format_number(self.lower)},upper = {format_number(self.upper)}"
        elif self.clip_lower:
            bounds = f"lower = {format_number(self.lower)}"
        elif self.clip_upper:
            bounds = f"upper = {format_number(self.upper)}"
        else:
            bounds = ""
        return f"({bounds})"

    def get_params(self) -> Dict[str, Any]:
        params = {}
        if self.clip_lower:
            params["lower"] = self.lower
        if self.clip_upper:
            params["upper"] = self.upper
        return params

    def _init_args(self) -> Tuple:
        return (self.clip_lower, self.clip_upper, self.lower, self.upper)


class ProcessorChain(Processor):
    """
    处理器链

    按顺序依次应用多个处理器，空链为恒等变换。
    """

    __slots__ = ("processors",)

    def __init__(self, processors: Iterable[Processor]):
        self._set("processors", tuple(processors))

    def _transform(self, data: Data) -> np.ndarray:
        for processor in self.processors:
            data = processor.process(data)
        return data.to_numpy()

    def get_name(self) -> str:
        return "Chain[" + " -> ".join(p.get_name() for p in self.processors) + "]"

    def get_params(self) -> Dict[str, Any]:
        return {"steps": [p.get_params() for p in self.processors]}

    def _init_args(self) -> Tuple:
        return (self.processors,)


def scale(target_min: float, target_max: float) -> Processor:
    return Scaler(target_min, target_max)


def percent_scale() -> Processor:
    return PercentScaler()


def standardize() -> Processor:
    return Standardizer()


def clip(lower: float, upper: float) -> Processor:
    return Clipper(True, True, lower, upper)


def clip_lower(lower: float) -> Processor:
    return Clipper(True, False, lower=lower)


def clip_upper(upper: float) -> Processor:
    return Clipper(False, True, upper=upper)


def chain(*processors: Processor) -> Processor:
    """组合多个处理器"""
    return ProcessorChain(processors)
