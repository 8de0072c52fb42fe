"""
Data Container
一维数据容器

不可变的一维浮点数序列，所有处理器的输入和输出类型。
"""

from typing import Any, Iterable, Iterator, List, Optional, Union

import numpy as np
import pandas as pd


class Data:
    """
    一维浮点数据

    构造时复制输入并将底层数组设为只读，之后内容和长度都不再改变。
    处理器总是返回新的 Data 实例，不会原地修改。

    Attributes:
        _values: 只读 float64 数组
    """

    __slots__ = ("_values",)

    def __init__(self, values: Union[Iterable[float], np.ndarray, pd.Series, "Data"]):
        """
        初始化数据容器

        Args:
            values: 数值序列、np.ndarray、pd.Series 或另一个 Data
        """
        if isinstance(values, Data):
            array = values._values
        elif isinstance(values, pd.Series):
            array = values.to_numpy(dtype=np.float64)
        elif isinstance(values, np.ndarray):
            array = values
        else:
            array = np.asarray(list(values), dtype=np.float64)

        array = np.array(array, dtype=np.float64, copy=True)
        if array.ndim != 1:
            raise ValueError(f"Data must be one-dimensional, got shape {array.shape}")
        array.setflags(write=False)
        self._values = array

    @classmethod
    def from_series(cls, series: pd.Series) -> "Data":
        """从 pandas Series 创建"""
        return cls(series)

    def size(self) -> int:
        """元素个数"""
        return int(self._values.shape[0])

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._values)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Data(self._values[index])
        return float(self._values[index])

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Data):
            return NotImplemented
        if self.size() != other.size():
            return False
        return bool(np.array_equal(self._values, other._values, equal_nan=True))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Data({self.to_list()})"

    def to_numpy(self) -> np.ndarray:
        """返回只读视图"""
        view = self._values.view()
        view.setflags(write=False)
        return view

    def to_list(self) -> List[float]:
        return self._values.tolist()

    def to_series(self, name: Optional[str] = None) -> pd.Series:
        """转换为 pandas Series（复制）"""
        return pd.Series(self._values.copy(), name=name, dtype=np.float64)
