"""
User-defined command templates.

A template is a command line such as ``notepad.exe "%s"`` where ``%s`` is a
placeholder the caller binds to a value at run time. Templates are compiled
into an executable name plus a list of arguments, which the executor then
runs without a shell so that substituted values cannot change the argument
boundaries.
"""

import logging
import re
from typing import List, Mapping, Optional

from ..models.commands import CommandResult, CommandTemplateSpec
from ..validation import CommandErrorKind, TemplateError, validate_bindings

logger = logging.getLogger(__name__)

# A double-quoted span, or a run of non-whitespace characters.
_TOKEN = re.compile(r'"[^"]*"|\S+')


def tokenize_template(template: str) -> List[str]:
    """Split a template into raw tokens, quotes still attached.

    Examples:
        >>> tokenize_template('notepad.exe "C:/My Files/a.txt" -x')
        ['notepad.exe', '"C:/My Files/a.txt"', '-x']
    """
    return _TOKEN.findall(template)


def _placeholder_pattern(bindings: Mapping[str, str]) -> Optional["re.Pattern[str]"]:
    if not bindings:
        return None
    # Longest first, so "%sx" wins over "%s" where both are bound.
    keys = sorted(bindings, key=len, reverse=True)
    return re.compile("|".join(re.escape(key) for key in keys))


def compile_template(template: str, bindings: Optional[Mapping[str, str]] = None) -> CommandTemplateSpec:
    """
    Compile a command template into an executable and argument list.

    The first token is the executable and is never substituted. In every
    other token, each occurrence of each bound placeholder is replaced by
    its value in a single left-to-right pass; substituted text is not
    scanned again.

    Args:
        template: The raw command template.
        bindings: Placeholder to value mapping.

    Returns:
        The compiled CommandTemplateSpec.

    Raises:
        TemplateError: EMPTY_TEMPLATE when the template has no tokens,
            PARSE_ERROR when its quotes are unbalanced or the executable
            is empty.
        ValidationError: If a binding key or value is not a string.

    Examples:
        >>> compile_template('notepad.exe "%s"', {"%s": "C:/a b.txt"})
        CommandTemplateSpec(executable='notepad.exe', arguments=['C:/a b.txt'])
    """
    bindings = validate_bindings(bindings or {})

    tokens = tokenize_template(template)
    if not tokens:
        raise TemplateError(
            "Invalid command format: template is empty",
            kind=CommandErrorKind.EMPTY_TEMPLATE,
            template=template,
        )
    if template.count('"') % 2:
        raise TemplateError(
            f"Invalid command format: unbalanced quotes in {template!r}",
            kind=CommandErrorKind.PARSE_ERROR,
            template=template,
        )

    executable = tokens[0].replace('"', "")
    if not executable.strip():
        raise TemplateError(
            f"Invalid command format: empty executable in {template!r}",
            kind=CommandErrorKind.PARSE_ERROR,
            template=template,
        )

    pattern = _placeholder_pattern(bindings)
    arguments = []
    for token in tokens[1:]:
        argument = token.replace('"', "")
        if pattern is not None:
            argument = pattern.sub(lambda match: bindings[match.group(0)], argument)
        arguments.append(argument)

    logger.debug(f"Compiled template {template!r} -> {executable!r} with {len(arguments)} arguments")
    return CommandTemplateSpec(executable=executable, arguments=arguments)


def execute_template(
    template: str,
    bindings: Optional[Mapping[str, str]] = None,
    executor=None,
    timeout: Optional[float] = None,
) -> CommandResult:
    """
    Compile a template and run it with discrete arguments.

    Template errors are raised before anything is executed. A non-zero exit
    is raised as CommandFailedError.
    """
    spec = compile_template(template, bindings)
    if executor is None:
        from ..system.commands import get_executor

        executor = get_executor()
    return executor.execute_spec(spec, timeout=timeout).check()
