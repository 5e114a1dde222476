"""
libcli parser: turn a token stream into a validated ParsedConfig.

What this module provides
- parse(tokens, specs): parse an argv-like token source against a list of
  OptionSpec. The first token (the program path) is kept aside as
  ParsedConfig.binary; the rest is walked left to right.
- parse_from_process_arguments(specs, ...): the same, reading sys.argv.
- ParsedConfig: the immutable result mapping option names to value tuples.

State machine
- The parser is always collecting values for one spec (the open window),
  starting with the (unnamed) collector.
- "value": appended to the open window.
- "--name": closes the open window, opens the window of the named option.
- "-xyz": closes the open window; x and y are recorded at once as zero-value
  occurrences, z opens its window.
- end of input: closes the last window, then required options are checked.

Closing a window runs the arity policy on the collected values and records
them; recording an option that is already present is a DuplicateOptionError
unless the option is a switch. A Terminator option ends the walk on sight:
remaining tokens are ignored and required options are not checked.

Every fault aborts the whole parse (fail-fast); no partial result escapes.
"""
import logging
import shlex
import sys
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .faults import (
    FaultCode,
    ParseError,
    DuplicateOptionError,
    MissingRequiredOptionError,
    getdoc,
    trigger,
)
from .specs import NO_ABBREVIATION, SpecTable

logger = logging.getLogger(__name__)


class ParsedConfig(Mapping):
    """
    Result of a successful parse.

    A read-only mapping from option name to the tuple of values supplied for it,
    in the order the options were encountered. Switches map to an empty tuple:
    their presence in the mapping is the signal.

    Properties
    - binary: the program path (first token of the source).
    """

    def __init__(self, binary, parsed, /):
        self._binary = binary
        self._parsed = MappingProxyType(dict(parsed))

    @property
    def binary(self):
        return self._binary

    def option(self, name, /):
        """
        Return the values given to option name, or None when it was not supplied.
        """
        return self._parsed.get(name)

    def __getitem__(self, name):
        return self._parsed[name]

    def __iter__(self):
        return iter(self._parsed)

    def __len__(self):
        return len(self._parsed)

    def __repr__(self):
        return f"ParsedConfig(binary={self._binary!r}, parsed={dict(self._parsed)!r})"

    def __rich_repr__(self):
        yield "binary", self._binary
        yield "parsed", dict(self._parsed)


class _StateMachine:
    """
    single-use parse state: the spec table, the open window and the results.
    """

    def __init__(self, table, /):
        self.table = table
        self.parsed = {}
        self.current = table.unnamed
        self.window = []
        self.terminated = False

    def record(self, spec, values, /):
        if spec.name in self.parsed and not spec.policy.switch:
            raise DuplicateOptionError(
                "option %r was given more than once" % spec.name,
                title="duplicate option",
                code=FaultCode.DUPLICATE_OPTION,
                hint="pass %r a single time with all of its values" % spec.name,
                option_name=spec.name,
                docs=getdoc(FaultCode.DUPLICATE_OPTION),
            )
        self.parsed[spec.name] = values

    def close(self):
        values = self.current.policy.enforce(self.current, self.window)
        logger.debug("collected %r for option %r", values, self.current.name)
        self.record(self.current, values)
        self.window = []

    def open(self, spec, /):
        if spec.policy.terminator:
            logger.debug("terminator %r reached, ignoring the remaining tokens", spec.name)
            self.record(spec, ())
            self.terminated = True
            return
        self.current = spec
        self.window = []

    def feed(self, token, /):
        if token.startswith("--"):
            self.close()
            self.open(self.table.resolve_name(token))
        elif token.startswith("-") and len(token) > 1:
            self.close()
            *leading, last = token[1:]
            logger.debug("abbreviated options %r", [*leading, last])
            for char in leading:
                spec = self.table.resolve_abbreviation(char, token)
                if spec.policy.terminator:
                    self.open(spec)
                    return
                self.record(spec, ())
            # Only the last abbreviation of a group collects the values that follow.
            self.open(self.table.resolve_abbreviation(last, token))
        else:
            self.window.append(token)

    def finish(self):
        if self.terminated:
            return self.parsed
        self.close()
        for spec in self.table.required:
            if spec.name not in self.parsed:
                raise MissingRequiredOptionError(
                    "required option %r is missing" % spec.name,
                    title="missing required option",
                    code=FaultCode.MISSING_REQUIRED_OPTION,
                    hint=(
                        "pass at least one positional argument"
                        if spec.unnamed else
                        "pass '--%s'%s" % (spec.name, "" if spec.abbreviation is NO_ABBREVIATION else " or '-%s'" % spec.abbreviation)
                    ),
                    option_name=spec.name,
                    docs=getdoc(FaultCode.MISSING_REQUIRED_OPTION),
                )
        return self.parsed


def _tokenize(source, /):
    """
    Normalize a token source into an iterator of str.

    - str: shell-like string, split with shlex.split.
    - Iterable[str]: consumed lazily; every item must be a string.
    """
    if isinstance(source, str):
        yield from shlex.split(source)
        return
    if not isinstance(source, Iterable):
        raise TypeError("parse() first argument must be a string or an iterable of strings")
    for token in source:
        if not isinstance(token, str):
            raise TypeError("parse() first argument must be a string or an iterable of strings")
        yield token


def parse(tokens, specs, /):
    """
    Parse tokens against specs and return a ParsedConfig.

    Parameters
    - tokens: str | Iterable[str]
      argv-like source; the first token is the program path and is not parsed.
    - specs: Iterable[OptionSpec]
      exactly one spec must be named UNNAMED.

    Raises
    - ParseError subclasses (MissingUnnamedSpecError, UnknownLongOptionError,
      UnknownAbbreviationError, ArityViolationError, DuplicateOptionError,
      MissingRequiredOptionError) on the first violation.
    - ValueError when the source is empty (no program path).
    - TypeError on malformed arguments.
    """
    table = SpecTable(specs)
    machine = _StateMachine(table)

    tokens = _tokenize(tokens)
    try:
        binary = next(tokens)
    except StopIteration:
        raise ValueError("parse() token source must start with the program path") from None

    for token in tokens:
        machine.feed(token)
        if machine.terminated:
            break

    return ParsedConfig(binary, machine.finish())


def parse_from_process_arguments(specs, /, *, shell=False, fancy=False, colorful=True):
    """
    Parse sys.argv against specs.

    With shell=True a fault is printed on stderr (through rich) and the process
    exits with status 1, which is the conventional behavior of a CLI entry
    point. Otherwise the fault is raised like parse() does.
    """
    try:
        return parse(sys.argv, specs)
    except ParseError as fault:
        trigger(fault, shell=shell, fancy=fancy, colorful=colorful, prog=sys.argv[0] if sys.argv else None)


__all__ = (
    "ParsedConfig",
    "parse",
    "parse_from_process_arguments",
)
