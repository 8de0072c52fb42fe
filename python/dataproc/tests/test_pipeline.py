"""
处理器注册表、流水线配置与执行器单元测试
Unit Tests for Registry, PipelineConfig and ProcessingExecutor
"""

import logging
import os
import tempfile
import unittest

import numpy as np

from dataproc import Data, PipelineConfig, ProcessingExecutor, StepConfig
from dataproc.processing import available_methods, build_processor
from dataproc.utils.logger_util import PipelineFileHandler


class TestRegistry(unittest.TestCase):
    """注册表单元测试"""

    def test_available_methods(self):
        self.assertEqual(
            available_methods(),
            ["clip", "clip_lower", "clip_upper", "percent_scale", "scale", "standardize"],
        )

    def test_build_processor(self):
        self.assertEqual(build_processor("scale", {"min": 0, "max": 1}).get_name(), "Scaler(0.0,1.0)")
        self.assertEqual(build_processor("clip_upper", {"upper": 3}).get_name(), "(upper = 3.0)")
        self.assertEqual(build_processor("standardize").get_name(), "Standardizer")

    def test_unknown_method(self):
        with self.assertRaises(ValueError):
            build_processor("normalize")

    def test_missing_parameter(self):
        with self.assertRaises(TypeError):
            build_processor("clip", {"lower": 0})


class TestPipelineConfig(unittest.TestCase):
    """流水线配置单元测试"""

    def test_from_dict_flattens_params(self):
        config = PipelineConfig.from_dict({
            "name": "normalize",
            "steps": [
                {"method": "clip", "lower": 0, "upper": 10},
                {"method": "scale", "params": {"min": -1, "max": 1}},
            ],
        })
        self.assertEqual(config.steps[0], StepConfig("clip", {"lower": 0, "upper": 10}))
        self.assertEqual(config.steps[1].params, {"min": -1, "max": 1})
        self.assertEqual(config.log_level, "INFO")

    def test_to_dict_round_trip(self):
        data = {
            "name": "normalize",
            "steps": [{"method": "clip_lower", "lower": 1.5}, {"method": "standardize"}],
            "log_level": "DEBUG",
        }
        self.assertEqual(PipelineConfig.from_dict(data).to_dict(), data)

    def test_step_without_method(self):
        with self.assertRaises(ValueError):
            StepConfig.from_dict({"lower": 0})

    def test_load_from_yaml(self):
        content = (
            "name: yaml_pipeline\n"
            "steps:\n"
            "  - method: clip\n"
            "    lower: 0\n"
            "    upper: 10\n"
            "  - method: percent_scale\n"
        )
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "pipeline.yaml")
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
            config = PipelineConfig.load_from_yaml(path)

        self.assertEqual(config.name, "yaml_pipeline")
        processor = config.build()
        self.assertEqual(processor.get_name(), "Chain[(lower = 0.0,upper = 10.0) -> Scaler(0.0,100.0)]")
        self.assertEqual(processor.process(Data([-5, 3, 15])), Data([0.0, 30.0, 100.0]))

    def test_missing_yaml(self):
        with self.assertRaises(FileNotFoundError):
            PipelineConfig.load_from_yaml("/nonexistent/pipeline.yaml")


class TestProcessingExecutor(unittest.TestCase):
    """执行器单元测试"""

    def test_run(self):
        executor = ProcessingExecutor(
            common_params={
                "name": "demo",
                "pipeline": [
                    {"method": "clip", "lower": 0, "upper": 10},
                    {"method": "scale", "min": 0, "max": 100},
                ],
            },
            role_params={"data": np.array([-5.0, 3.0, 15.0])},
        )
        result = executor.run()

        self.assertEqual(result["name"], "demo")
        self.assertEqual(result["steps"], ["(lower = 0.0,upper = 10.0)", "Scaler(0.0,100.0)"])
        self.assertEqual(result["input_size"], 3)
        self.assertEqual(result["output_size"], 3)
        self.assertEqual(result["output"], Data([0.0, 30.0, 100.0]))
        self.assertEqual(result["input_summary"]["min"], -5.0)
        self.assertEqual(result["output_summary"]["max"], 100.0)

    def test_run_with_config_object(self):
        config = PipelineConfig(name="std", steps=[StepConfig("standardize")])
        executor = ProcessingExecutor(
            common_params={"pipeline": config, "with_summary": False},
            role_params={"data": [1.0, 3.0]},
        )
        result = executor.run()
        self.assertEqual(result["pipeline"], "Chain[Standardizer]")
        self.assertEqual(result["output"], Data([-1.0, 1.0]))
        self.assertNotIn("input_summary", result)

    def test_degenerate_input_is_not_an_error(self):
        executor = ProcessingExecutor(
            common_params={"pipeline": [{"method": "standardize"}]},
            role_params={"data": [3.0, 3.0, 3.0]},
        )
        result = executor.run()
        self.assertNotIn("error", result)
        self.assertTrue(all(np.isnan(v) for v in result["output"]))

    def test_no_data(self):
        executor = ProcessingExecutor(common_params={"pipeline": [{"method": "standardize"}]})
        self.assertEqual(executor.run(), {"error": "No data loaded"})

    def test_unknown_method_fails_at_build(self):
        with self.assertRaises(ValueError):
            ProcessingExecutor(common_params={"pipeline": [{"method": "log"}]})

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, "run.log")
            executor = ProcessingExecutor(
                common_params={
                    "pipeline": {"name": "logged", "steps": [{"method": "percent_scale"}]},
                    "log_file": log_file,
                    "run_id": "r1",
                },
                role_params={"data": [1.0, 2.0]},
            )
            try:
                executor.run()
            finally:
                executor.close()

            with open(log_file, encoding="utf8") as f:
                content = f.read()

        self.assertIn("pipeline=logged run=r1", content)
        self.assertIn("Chain[Scaler(0.0,100.0)]", content)
        self.assertEqual(executor.log_handlers, [])

    def test_log_rotation(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, "rotate.log")
            with open(log_file, "w") as f:
                f.write("x" * 64)

            handler = PipelineFileHandler("rotate", log_file=log_file, max_size=16)
            handler.set_format()
            handler.close()

            self.assertTrue(os.path.exists(log_file + ".1"))
            with open(log_file + ".1") as f:
                self.assertEqual(f.read(), "x" * 64)

    def test_critical_log_level(self):
        with tempfile.TemporaryDirectory() as tmp:
            with ProcessingExecutor(
                common_params={
                    "pipeline": {"log_level": "CRITICAL", "steps": [{"method": "standardize"}]},
                    "log_file": os.path.join(tmp, "critical.log"),
                    "console_log": True,
                },
                role_params={"data": [1.0, 2.0]},
            ) as executor:
                self.assertEqual(executor.run()["output_size"], 2)
                self.assertEqual(len(executor.log_handlers), 2)

    def test_unknown_log_level(self):
        with self.assertRaises(ValueError):
            ProcessingExecutor(common_params={
                "pipeline": {"log_level": "VERBOSE", "steps": []},
                "console_log": True,
            })

    def test_close_restores_logger_level(self):
        std_logger = logging.getLogger("dataproc")
        previous = std_logger.level
        std_logger.setLevel(logging.WARNING)
        try:
            with tempfile.TemporaryDirectory() as tmp:
                executor = ProcessingExecutor(common_params={
                    "pipeline": {"log_level": "DEBUG", "steps": []},
                    "log_file": os.path.join(tmp, "level.log"),
                })
                self.assertEqual(std_logger.level, logging.DEBUG)
                executor.close()
            self.assertEqual(std_logger.level, logging.WARNING)
        finally:
            std_logger.setLevel(previous)

    def test_live_executors_keep_separate_logs(self):
        with tempfile.TemporaryDirectory() as tmp:
            first_log = os.path.join(tmp, "first.log")
            second_log = os.path.join(tmp, "second.log")
            first = ProcessingExecutor(
                common_params={"pipeline": {"name": "first", "steps": []}, "log_file": first_log},
                role_params={"data": [1.0]},
            )
            second = ProcessingExecutor(
                common_params={"pipeline": {"name": "second", "steps": []}, "log_file": second_log},
                role_params={"data": [2.0]},
            )
            try:
                first.run()
            finally:
                first.close()
                second.close()

            with open(first_log, encoding="utf8") as f:
                first_content = f.read()
            with open(second_log, encoding="utf8") as f:
                second_content = f.read()

        self.assertIn("pipeline=first", first_content)
        self.assertNotIn("pipeline=second", first_content)
        self.assertEqual(second_content, "")

    def test_context_manager_releases_handlers_on_error(self):
        std_logger = logging.getLogger("dataproc")
        handlers_before = list(std_logger.handlers)
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(RuntimeError):
                with ProcessingExecutor(common_params={
                    "pipeline": [{"method": "standardize"}],
                    "log_file": os.path.join(tmp, "error.log"),
                }):
                    raise RuntimeError("boom")
        self.assertEqual(std_logger.handlers, handlers_before)


if __name__ == "__main__":
    unittest.main()
