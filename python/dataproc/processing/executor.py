"""
Processing Executor
数据处理执行器

按配置组装处理器链并对内存中的数据执行。
"""

import logging
from typing import Any, Dict, Optional

from ..config import PipelineConfig
from ..data import Data
from ..utils.logger_util import (
    PipelineConsoleHandler,
    PipelineFileHandler,
    current_scope,
)
from .processors import ProcessorChain
from .stats import describe

logger = logging.getLogger(__name__)


class ProcessingExecutor:
    """
    数据处理执行器

    Attributes:
        common_params: 通用参数，pipeline 为步骤列表、字典或 PipelineConfig
        role_params: 角色参数，data 为输入数据
    """

    def __init__(self, **kwargs):
        """
        初始化执行器

        Args:
            **kwargs: 包含以下键的字典:
                - common_params: 通用参数
                - role_params: 角色特定参数
        """
        self.common_params = kwargs.get('common_params', {})
        self.role_params = kwargs.get('role_params', {})

        self._parse_params()

    def _parse_params(self):
        """解析参数"""
        pipeline = self.common_params.get("pipeline", [])
        if isinstance(pipeline, PipelineConfig):
            self.config = pipeline
        elif isinstance(pipeline, dict):
            self.config = PipelineConfig.from_dict(pipeline)
        else:
            self.config = PipelineConfig.from_dict({
                "name": self.common_params.get("name", "pipeline"),
                "steps": list(pipeline),
            })
        # 是否输出统计摘要
        self.with_summary = self.common_params.get("with_summary", True)
        # 日志文件，非空时附加文件日志
        self.log_file = self.common_params.get("log_file", "")
        self.run_id = self.common_params.get("run_id")
        # 是否通过 loguru 输出到控制台
        self.console_log = self.common_params.get("console_log", False)

        self.chain: ProcessorChain = self.config.build()

        # 日志处理器只接收本执行器运行期间的记录
        self._log_scope = object()
        self.log_handlers = []
        if self.log_file:
            self.log_handlers.append(PipelineFileHandler(
                self.config.name,
                run_id=self.run_id,
                log_file=self.log_file,
                log_level=self.config.log_level,
                scope=self._log_scope,
            ))
        if self.console_log:
            self.log_handlers.append(PipelineConsoleHandler(
                self.config.name,
                run_id=self.run_id,
                log_level=self.config.log_level,
                scope=self._log_scope,
            ))
        for handler in self.log_handlers:
            handler.set_format()

    def _load_data(self) -> Optional[Data]:
        data = self.role_params.get("data")
        if data is None:
            return None
        if not isinstance(data, Data):
            data = Data(data)
        return data

    def run(self) -> Dict[str, Any]:
        """执行处理流水线"""
        token = current_scope.set(self._log_scope)
        try:
            return self._run()
        finally:
            current_scope.reset(token)

    def _run(self) -> Dict[str, Any]:
        logger.info(f"ProcessingExecutor: Starting pipeline '{self.config.name}': {self.chain.get_name()}")

        data = self._load_data()
        if data is None:
            logger.error("No data loaded")
            return {"error": "No data loaded"}

        logger.info(f"Data loaded: size={data.size()}")

        output = self.chain.process(data)

        result = {
            "name": self.config.name,
            "pipeline": self.chain.get_name(),
            "steps": [p.get_name() for p in self.chain.processors],
            "input_size": data.size(),
            "output_size": output.size(),
            "output": output,
        }
        if self.with_summary:
            result["input_summary"] = describe(data)
            result["output_summary"] = describe(output)

        logger.info("ProcessingExecutor: Completed")
        return result

    def close(self):
        """移除并关闭本执行器附加的日志处理器"""
        for handler in self.log_handlers:
            handler.close()
        self.log_handlers = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
