"""
Unit tests for input validators and the classified error hierarchy.
"""

import logging

import pytest

from cmdbridge.validation import (
    CommandErrorKind,
    CommandFailedError,
    CommandNotFoundError,
    CommandTimeoutError,
    ErrorSeverity,
    ExecutionError,
    TemplateError,
    ValidationError,
    handle_cli_error,
    handle_error,
    validate_bindings,
    validate_directory,
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
    validate_process_id,
    validate_process_name,
)


@pytest.mark.unit
class TestNumericValidators:
    """Test cases for numeric validators."""

    def test_integer_from_string(self):
        assert validate_positive_integer("8", max_value=64) == 8

    @pytest.mark.parametrize("value", [0, 65, "x", None, True])
    def test_integer_rejected(self, value):
        with pytest.raises(ValidationError):
            validate_positive_integer(value, max_value=64, field_name="workers")

    def test_float(self):
        assert validate_positive_float("1.5", min_value=0.001) == 1.5

    def test_float_below_minimum(self):
        with pytest.raises(ValidationError, match="timeout must be >= 0.001"):
            validate_positive_float(0, min_value=0.001, field_name="timeout")


@pytest.mark.unit
class TestOtherValidators:
    """Test cases for path, choice and identifier validators."""

    def test_directory(self, temp_dir):
        assert validate_directory(temp_dir) == temp_dir

    def test_file_is_not_a_directory(self, temp_dir):
        path = temp_dir / "f.txt"
        path.write_text("x")
        with pytest.raises(ValidationError, match="not a directory"):
            validate_directory(path)

    def test_enum_choice_returns_canonical_casing(self):
        assert validate_enum_choice("POSIX", ["auto", "posix"], case_sensitive=False) == "posix"

    def test_enum_choice_case_sensitive(self):
        with pytest.raises(ValidationError):
            validate_enum_choice("POSIX", ["auto", "posix"])

    def test_process_id_is_stripped(self):
        assert validate_process_id(" 1234 ") == "1234"

    def test_process_name_is_stripped(self):
        assert validate_process_name("  chrome.exe ") == "chrome.exe"

    def test_process_name_with_spaces(self):
        assert validate_process_name("System Idle Process") == "System Idle Process"

    @pytest.mark.parametrize("name", ["a\nb", "a\rb", "%PATH%", "50%"])
    def test_process_name_rejects_line_breaks_and_percent(self, name):
        with pytest.raises(ValidationError):
            validate_process_name(name)

    def test_bindings_reject_empty_key(self):
        with pytest.raises(ValidationError):
            validate_bindings({"": "x"})


@pytest.mark.unit
class TestErrorHierarchy:
    """Test cases for the classified errors."""

    @pytest.mark.parametrize("error_class, kind", [
        (CommandNotFoundError, CommandErrorKind.COMMAND_NOT_FOUND),
        (CommandTimeoutError, CommandErrorKind.TIMEOUT),
        (CommandFailedError, CommandErrorKind.COMMAND_FAILED),
    ])
    def test_kinds(self, error_class, kind):
        error = error_class("boom", command="cmd")
        assert isinstance(error, ExecutionError)
        assert error.kind is kind
        assert error.command == "cmd"
        assert str(error) == "boom"

    def test_template_error_is_not_execution_error(self):
        error = TemplateError("bad", CommandErrorKind.PARSE_ERROR, template='"x')
        assert not isinstance(error, ExecutionError)
        assert error.template == '"x'


@pytest.mark.unit
class TestErrorHandlers:
    """Test cases for the logging error handlers."""

    def test_handle_error_reraises(self):
        with pytest.raises(ValueError):
            handle_error(ValueError("x"), "testing")

    def test_handle_error_logs(self, caplog):
        with caplog.at_level(logging.WARNING):
            handle_error(ValueError("x"), "testing", severity=ErrorSeverity.WARNING, reraise=False)
        assert "Error in testing: x" in caplog.text

    def test_handle_cli_error_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ValueError("x"), "kill", exit_code=3)
        assert exc_info.value.code == 3
