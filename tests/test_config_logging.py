# tests/test_config_logging.py

import logging

import pytest

from re2dfa import ConverterConfig, RegexToDFAConverter, UnsupportedSymbolError
from re2dfa.parser.config import MAX_NESTING_LIMIT
from re2dfa.utils.logging_config import (
    setup_logging, get_logger, get_performance_logger, PerformanceTimer,
    init_default_logging, performance_log_path
)


class TestConverterConfig:
    def test_defaults(self):
        config = ConverterConfig()
        assert config.strict_parentheses
        assert not config.reject_unsupported_symbols
        assert config.max_nesting_level == 100
        assert config.end_marker == "#"
        assert config.get_setting("missing", 7) == 7

    @pytest.mark.parametrize("marker", ["a", "0", "##", ""])
    def test_invalid_end_marker(self, marker):
        with pytest.raises(ValueError):
            ConverterConfig(end_marker=marker)

    def test_invalid_nesting_level(self):
        with pytest.raises(ValueError):
            ConverterConfig(max_nesting_level=0)

    def test_nesting_level_above_parser_capacity(self):
        ConverterConfig(max_nesting_level=MAX_NESTING_LIMIT)
        with pytest.raises(ValueError):
            ConverterConfig(max_nesting_level=MAX_NESTING_LIMIT + 1)

    def test_from_env_rejects_excessive_nesting(self, monkeypatch):
        monkeypatch.setenv("RE2DFA_MAX_NESTING", "5000")
        with pytest.raises(ValueError):
            ConverterConfig.from_env()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("RE2DFA_STRICT_PARENTHESES", "false")
        monkeypatch.setenv("RE2DFA_REJECT_UNSUPPORTED", "yes")
        monkeypatch.setenv("RE2DFA_MAX_NESTING", "12")
        config = ConverterConfig.from_env()
        assert not config.strict_parentheses
        assert config.reject_unsupported_symbols
        assert config.max_nesting_level == 12

    def test_from_env_defaults(self, monkeypatch):
        for name in ("RE2DFA_STRICT_PARENTHESES", "RE2DFA_REJECT_UNSUPPORTED", "RE2DFA_MAX_NESTING"):
            monkeypatch.delenv(name, raising=False)
        assert ConverterConfig.from_env() == ConverterConfig()

    def test_custom_end_marker_in_state_names(self, accepts):
        result = RegexToDFAConverter(ConverterConfig(end_marker="$")).convert("ab")
        assert result.context.leaves[result.context.end_leaf_id] == "$"
        assert accepts(result.dfa, "ab")

    def test_reject_unsupported_symbols_aborts_conversion(self):
        converter = RegexToDFAConverter(ConverterConfig(reject_unsupported_symbols=True))
        with pytest.raises(UnsupportedSymbolError):
            converter.convert("a+b")

    def test_ignored_symbols_are_reported(self, accepts):
        result = RegexToDFAConverter().convert("a+b")
        assert result.warnings == ["Warning at position 1: Ignored unsupported character '+'"]
        assert accepts(result.dfa, "ab")


class TestLogging:
    @pytest.fixture(autouse=True)
    def restore_package_loggers(self):
        """Put the re2dfa loggers back the way the import left them."""
        saved = {}
        for name in ("re2dfa", "re2dfa.performance"):
            lg = logging.getLogger(name)
            saved[name] = (list(lg.handlers), lg.level, lg.propagate, lg.disabled)
        yield
        for name, (handlers, level, propagate, disabled) in saved.items():
            lg = logging.getLogger(name)
            for handler in lg.handlers:
                if handler not in handlers:
                    handler.close()
            lg.handlers = handlers
            lg.setLevel(level)
            lg.propagate = propagate
            lg.disabled = disabled

    def test_logger_names(self):
        assert get_logger("custom").name == "re2dfa.custom"
        assert get_logger("re2dfa.converter").name == "re2dfa.converter"
        assert get_performance_logger().name == "re2dfa.performance"

    def test_default_logging_leaves_root_alone(self, monkeypatch):
        monkeypatch.delenv("RE2DFA_LOG_LEVEL", raising=False)
        monkeypatch.delenv("RE2DFA_ENABLE_PERFORMANCE_LOGGING", raising=False)
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level

        init_default_logging()
        init_default_logging()

        assert root.handlers == handlers
        assert root.level == level
        package_logger = logging.getLogger("re2dfa")
        null_handlers = [h for h in package_logger.handlers if isinstance(h, logging.NullHandler)]
        assert len(null_handlers) == 1
        assert package_logger.propagate

    def test_env_level_configures_package_tree_only(self, monkeypatch):
        monkeypatch.setenv("RE2DFA_LOG_LEVEL", "debug")
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level

        init_default_logging()

        assert root.handlers == handlers
        assert root.level == level
        package_logger = logging.getLogger("re2dfa")
        assert package_logger.level == logging.DEBUG
        assert any(type(h) is logging.StreamHandler for h in package_logger.handlers)
        assert not package_logger.propagate

    def test_setup_logging_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "re2dfa.log"
        setup_logging(log_level="DEBUG", log_file=str(log_file), enable_console=False)
        RegexToDFAConverter().convert("(a|b)*abb")
        for handler in logging.getLogger("re2dfa").handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf8")
        assert "[SYNTH] Built DFA with 4 states" in content
        assert "Token stream" in content
        assert not (tmp_path / "logs" / "re2dfa_performance.log").exists()

    def test_performance_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(log_level="INFO", log_file=str(log_file), enable_console=False,
                      enable_performance=True)
        RegexToDFAConverter().convert("ab")
        for handler in get_performance_logger().handlers:
            handler.flush()

        perf_file = tmp_path / "run_performance.log"
        assert performance_log_path(str(log_file)) == str(perf_file)
        content = perf_file.read_text(encoding="utf8")
        assert "PERF - re2dfa.performance - Starting re2dfa('ab')" in content
        assert "re2dfa('ab') completed in" in content

    def test_timing_line_truncates_long_expressions(self, caplog):
        caplog.set_level(logging.INFO, logger="re2dfa.performance")
        expression = "ab" * 100
        RegexToDFAConverter().convert(expression)
        messages = [r.getMessage() for r in caplog.records if r.name == "re2dfa.performance"]
        assert len(messages) == 1
        assert messages[0].startswith(f"re2dfa({expression[:40]!r}...) completed in ")
        assert expression not in caplog.text

    def test_performance_timer(self, caplog):
        logger = logging.getLogger("tests.timer")
        caplog.set_level(logging.DEBUG, logger="tests.timer")
        with PerformanceTimer("sample", logger) as timer:
            pass
        assert timer.duration is not None
        assert "sample completed" in caplog.text

    def test_performance_timer_reports_failure(self, caplog):
        logger = logging.getLogger("tests.timer")
        caplog.set_level(logging.DEBUG, logger="tests.timer")
        with pytest.raises(RuntimeError):
            with PerformanceTimer("broken", logger):
                raise RuntimeError("boom")
        assert "broken failed" in caplog.text
