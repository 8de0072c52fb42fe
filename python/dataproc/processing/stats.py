"""
Data Statistics Helpers
数据统计辅助函数

处理器使用的聚合统计量：最小值、最大值、均值、总体标准差。

空输入不做特殊处理：min 返回 +inf，max 返回 -inf，avg 和 std 返回 NaN。
min/max 跳过 NaN 元素（全为 NaN 时同空输入），avg/std 遇到 NaN 返回 NaN。
"""

import logging
import warnings
from typing import Any, Dict

import numpy as np
from scipy import stats

from ..data import Data

logger = logging.getLogger(__name__)


def data_min(data: Data) -> float:
    """Returns the minimum of the non-NaN elements of ``data``, +inf when none."""
    return float(np.nanmin(data.to_numpy(), initial=np.inf))


def data_max(data: Data) -> float:
    """Returns the maximum of the non-NaN elements of ``data``, -inf when none."""
    return float(np.nanmax(data.to_numpy(), initial=-np.inf))


def data_avg(data: Data) -> float:
    """Returns the mean of ``data``."""
    values = data.to_numpy()
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(values.sum()) / np.float64(values.shape[0]))


def data_std(data: Data) -> float:
    """Returns the population standard deviation (divides by N) of ``data``."""
    values = data.to_numpy()
    avg = data_avg(data)
    with np.errstate(divide="ignore", invalid="ignore"):
        deviations = values - avg
        return float(np.sqrt(np.float64((deviations * deviations).sum()) / np.float64(values.shape[0])))


def describe(data: Data) -> Dict[str, Any]:
    """
    计算描述性统计

    Args:
        data: 输入数据

    Returns:
        统计结果字典，skewness/kurtosis 在少于3个元素时为 None
    """
    values = data.to_numpy()
    minimum = data_min(data)
    maximum = data_max(data)

    summary = {
        "count": data.size(),
        "min": minimum,
        "max": maximum,
        "mean": data_avg(data),
        "std": data_std(data),
        "range": maximum - minimum,
        "skewness": None,
        "kurtosis": None,
    }

    if data.size() >= 3:
        # constant input makes scipy warn about precision loss
        with np.errstate(divide="ignore", invalid="ignore"), warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            summary["skewness"] = float(stats.skew(values))
            summary["kurtosis"] = float(stats.kurtosis(values))

    logger.debug(f"Described data of size {data.size()}")
    return summary
