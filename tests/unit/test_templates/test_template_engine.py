"""
Unit tests for command template compilation.
"""

import dataclasses

import pytest

from cmdbridge.models.commands import CommandTemplateSpec
from cmdbridge.templates import compile_template, execute_template, tokenize_template
from cmdbridge.validation import (
    CommandErrorKind,
    CommandFailedError,
    TemplateError,
    ValidationError,
)


@pytest.mark.unit
class TestTokenizeTemplate:
    """Test cases for tokenize_template."""

    def test_quoted_span_is_one_token(self):
        assert tokenize_template('code "C:/My Project" --new-window') == [
            "code",
            '"C:/My Project"',
            "--new-window",
        ]

    def test_runs_of_whitespace(self):
        assert tokenize_template("  a \t b\n c  ") == ["a", "b", "c"]

    def test_empty(self):
        assert tokenize_template("   ") == []


@pytest.mark.unit
class TestCompileTemplate:
    """Test cases for compile_template."""

    def test_quoted_placeholder_with_spaces(self):
        """A bound value containing spaces stays a single argument."""
        spec = compile_template('notepad.exe "%s"', {"%s": "C:/a b.txt"})
        assert spec.executable == "notepad.exe"
        assert spec.arguments == ["C:/a b.txt"]

    def test_quoted_executable(self):
        spec = compile_template('"C:/Program Files/ShareX/ShareX.exe" -RectangleRegion', {})
        assert spec == CommandTemplateSpec("C:/Program Files/ShareX/ShareX.exe", ["-RectangleRegion"])

    def test_executable_is_never_substituted(self):
        spec = compile_template("%s --open %s", {"%s": "value"})
        assert spec.executable == "%s"
        assert spec.arguments == ["--open", "value"]

    def test_every_occurrence_is_replaced(self):
        spec = compile_template("tool --pair=%s:%s", {"%s": "x"})
        assert spec.arguments == ["--pair=x:x"]

    def test_multiple_placeholders(self):
        spec = compile_template("copy {src} {dst}", {"{src}": "a.txt", "{dst}": "b.txt"})
        assert spec.arguments == ["a.txt", "b.txt"]

    def test_values_are_not_rescanned(self):
        """A value that contains a placeholder is inserted literally."""
        spec = compile_template("echo %s", {"%s": "%s%s"})
        assert spec.arguments == ["%s%s"]

    def test_values_are_not_rescanned_across_placeholders(self):
        spec = compile_template("echo {a}", {"{a}": "{b}", "{b}": "boom"})
        assert spec.arguments == ["{b}"]

    def test_longest_placeholder_wins(self):
        spec = compile_template("run %s %sx", {"%s": "1", "%sx": "2"})
        assert spec.arguments == ["1", "2"]

    def test_no_bindings(self):
        spec = compile_template("tasklist /nh /fo csv")
        assert spec.argv == ["tasklist", "/nh", "/fo", "csv"]

    def test_unused_binding_is_harmless(self):
        spec = compile_template("ping localhost", {"%s": "unused"})
        assert spec.arguments == ["localhost"]

    @pytest.mark.parametrize("template", ["", "   ", "\t\n"])
    def test_empty_template(self, template):
        with pytest.raises(TemplateError) as exc_info:
            compile_template(template, {})
        assert exc_info.value.kind is CommandErrorKind.EMPTY_TEMPLATE

    def test_unbalanced_quotes(self):
        with pytest.raises(TemplateError) as exc_info:
            compile_template('notepad.exe "C:/a b.txt', {})
        assert exc_info.value.kind is CommandErrorKind.PARSE_ERROR

    def test_empty_executable(self):
        with pytest.raises(TemplateError) as exc_info:
            compile_template('"" --flag', {})
        assert exc_info.value.kind is CommandErrorKind.PARSE_ERROR

    def test_non_string_binding_value(self):
        with pytest.raises(ValidationError):
            compile_template("echo %s", {"%s": 5})


@pytest.mark.unit
class TestCommandTemplateSpec:
    """Test cases for re-joining a spec into one command line."""

    def test_whitespace_arguments_are_requoted(self):
        spec = CommandTemplateSpec("notepad.exe", ["C:/a b.txt", "-x"])
        assert spec.to_command_line() == 'notepad.exe "C:/a b.txt" -x'

    def test_command_line_compiles_back(self):
        spec = compile_template('"C:/Program Files/app.exe" "%s" --flag', {"%s": "a b"})
        assert compile_template(spec.to_command_line()) == spec

    def test_spec_is_immutable(self):
        spec = CommandTemplateSpec("app.exe", ["-x"])
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.executable = "other.exe"


@pytest.mark.unit
class TestExecuteTemplate:
    """Test cases for execute_template."""

    def test_runs_compiled_spec(self, fake_executor):
        fake_executor.respond("notepad.exe", stdout="ok")
        result = execute_template('notepad.exe "%s"', {"%s": "C:/a b.txt"}, executor=fake_executor)
        assert result.stdout == "ok"
        assert fake_executor.commands == ['notepad.exe "C:/a b.txt"']

    def test_template_error_runs_nothing(self, fake_executor):
        with pytest.raises(TemplateError):
            execute_template("", {}, executor=fake_executor)
        assert fake_executor.commands == []

    def test_failed_exit_raises(self, fake_executor):
        fake_executor.respond("tool", stderr="bad", exit_succeeded=False)
        with pytest.raises(CommandFailedError):
            execute_template("tool", executor=fake_executor)
