"""
Processor Base Class
处理器基类

所有数据处理器的抽象基类，定义 process/get_name 接口。
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Tuple, Union

import numpy as np

from ..data import Data

logger = logging.getLogger(__name__)


class Processor(ABC):
    """
    数据处理器基类

    处理器是一个带名字的纯函数 Data -> Data。构造后参数固定，
    不持有可变状态，同一实例可以被多个线程同时调用。
    """

    __slots__ = ()

    def __setattr__(self, key, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __delattr__(self, key):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def _set(self, key: str, value: Any) -> None:
        """构造期间设置属性"""
        object.__setattr__(self, key, value)

    def _init_args(self) -> Tuple:
        """重建实例所需的构造参数"""
        return ()

    def __reduce__(self):
        # copy/pickle rebuild through __init__, slot state is never set directly
        return (self.__class__, self._init_args())

    def process(self, data: Union[Data, Iterable[float]]) -> Data:
        """
        处理数据

        Args:
            data: 输入数据

        Returns:
            新的 Data 实例，长度与输入相同
        """
        if not isinstance(data, Data):
            data = Data(data)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            values = self._transform(data)
        logger.debug(f"{self.get_name()} processed {data.size()} values")
        return Data(values)

    def __call__(self, data: Union[Data, Iterable[float]]) -> Data:
        return self.process(data)

    @abstractmethod
    def _transform(self, data: Data) -> np.ndarray:
        """对输入逐元素计算输出数组，子类必须实现"""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """诊断用名称"""
        pass

    @property
    def name(self) -> str:
        return self.get_name()

    def get_params(self) -> Dict[str, Any]:
        """获取构造参数"""
        return {}

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.get_name()}>"
