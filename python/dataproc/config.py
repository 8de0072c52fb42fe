"""
Pipeline Configuration
处理流水线配置

定义处理步骤和流水线配置，支持从字典或 YAML 文件加载。

YAML 示例:

    name: normalize
    log_level: INFO
    steps:
      - method: clip
        lower: 0
        upper: 10
      - method: percent_scale
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .processing.base import Processor
from .processing.processors import ProcessorChain
from .processing.registry import build_processor


@dataclass
class StepConfig:
    """单个处理步骤

    Attributes:
        method: 注册表中的方法名
        params: 工厂参数
    """
    method: str
    params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StepConfig':
        """从字典创建，除 method 外的键都作为参数"""
        if 'method' not in data:
            raise ValueError(f"Step config missing 'method': {data}")
        params = dict(data.get('params', {}))
        params.update({k: v for k, v in data.items() if k not in ('method', 'params')})
        return cls(method=data['method'], params=params)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {'method': self.method, **self.params}

    def build(self) -> Processor:
        return build_processor(self.method, self.params)


@dataclass
class PipelineConfig:
    """流水线配置

    Attributes:
        name: 流水线名称，用于日志
        steps: 处理步骤列表
        log_level: 日志级别
    """
    name: str = "pipeline"
    steps: List[StepConfig] = field(default_factory=list)
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PipelineConfig':
        """从字典创建"""
        return cls(
            name=data.get('name', 'pipeline'),
            steps=[s if isinstance(s, StepConfig) else StepConfig.from_dict(s)
                   for s in data.get('steps', [])],
            log_level=data.get('log_level', 'INFO')
        )

    @classmethod
    def load_from_yaml(cls, yaml_path: str) -> 'PipelineConfig':
        """从 YAML 文件加载

        Args:
            yaml_path: YAML文件路径
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}

        return cls.from_dict(config)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'name': self.name,
            'steps': [s.to_dict() for s in self.steps],
            'log_level': self.log_level
        }

    def build(self) -> ProcessorChain:
        """创建处理器链"""
        return ProcessorChain(step.build() for step in self.steps)
