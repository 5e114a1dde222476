r"""
libcli option specifications and the specification table.

Overview
- OptionSpec: immutable declaration of one option
  • abbreviation: single character (e.g. "o") or NO_ABBREVIATION.
  • name: long name (e.g. "output"); UNNAMED ("(unnamed)") is the pseudo-option
    that collects the positional tokens preceding the first flag.
  • description: free text rendered in usage output.
  • required: when True, the option must appear on the command line.
  • policy: arity policy (Exact, AtLeast, AtMost, Terminator).

- SpecTable: the two lookup indices (by name, by abbreviation) built from the
  caller's list for a single parse call. The caller keeps owning the specs; the
  table only borrows them and never mutates anything.

Validation highlights (construction time)
- abbreviation must be a single character other than "-" and whitespace.
- name must match r"[^\s-]\S*" (no leading dash, no whitespace).
- description, when provided, must be a non-empty string after trimming.
- policy must be an OptionPolicy instance.

Duplicate names or abbreviations in one list are a caller-contract violation:
the table keeps the last declaration and emits a DuplicateSpecWarning.

Quick example:
    >>> from libcli import OptionSpec, Exact, AtLeast, UNNAMED
    >>> specs = [
    ...     OptionSpec(None, UNNAMED, "input files", required=True, policy=AtLeast(1)),
    ...     OptionSpec("o", "output", "output file", policy=Exact(1)),
    ... ]
"""
import difflib
import functools
import operator
import re
from types import MappingProxyType

from .faults import (
    FaultCode,
    MissingUnnamedSpecError,
    UnknownLongOptionError,
    UnknownAbbreviationError,
    DuplicateSpecWarning,
    getdoc,
    trigger,
)
from .policies import OptionPolicy, Exact
from .utils import *

UNNAMED = "(unnamed)"
"""Reserved name of the positional collector."""

NO_ABBREVIATION = None
"""Abbreviation value of options that can only be spelled with their long name."""


class SpecType(type):
    """
    Metaclass that exposes declared fields as read-only properties.

    - every name in __introspectable__ becomes a property mirroring "_{name}".
    - __typename__ is derived from the class name ("OptionSpec" → "option-spec")
      and used in construction errors.
    - __repr__/__rich_repr__ list the introspectable fields in order.
    """

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__name__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize OptionSpec metadata in place.

    Raises
    - TypeError: when a field has the wrong type.
    - ValueError: when a string field has the right type but an invalid shape.
    """
    abbreviation = metadata["abbreviation"]
    if abbreviation is not NO_ABBREVIATION:
        if not isinstance(abbreviation, str):
            raise TypeError(f"{cls.__typename__} 'abbreviation' must be a string or None")
        elif len(abbreviation) != 1:
            raise ValueError(f"{cls.__typename__} 'abbreviation' must be a single character")
        elif abbreviation == "-" or abbreviation.isspace():
            raise ValueError(f"{cls.__typename__} 'abbreviation' cannot be a dash or whitespace")

    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[^\s-]\S*", name):
        raise ValueError(f"{cls.__typename__} 'name' cannot start with a dash or contain whitespace")

    if not isinstance(description := metadata["description"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'description' must be a string")
    elif isinstance(description, str) and not (description := description.strip()):
        raise ValueError(f"{cls.__typename__} 'description' cannot be empty")
    metadata["description"] = coalesce(description)

    # Options without an explicit policy are switches.
    if not isinstance(policy := coalesce(metadata["policy"], Exact(0)), OptionPolicy):
        raise TypeError(f"{cls.__typename__} 'policy' must be an arity policy (Exact, AtLeast, AtMost, Terminator)")
    metadata["policy"] = policy


class OptionSpec(metaclass=SpecType):
    """
    Immutable declaration of a command-line option.

    Properties
    - abbreviation: str | None
    - name: str
    - description: str | None
    - required: bool
    - policy: OptionPolicy

    Specs compare equal when all their fields are equal and can be used as
    dictionary keys.
    """

    __introspectable__ = (
        "abbreviation",
        "name",
        "description",
        "required",
        "policy",
    )

    def __new__(cls, abbreviation, name, /, description=Unset, *, required=False, policy=Unset):
        """
        Construct an OptionSpec.

        Parameters
        - abbreviation: single character, or NO_ABBREVIATION (None).
        - name: long name, or UNNAMED for the positional collector.
        - description: short text for usage output; None when omitted.
        - required: when True, parsing fails unless the option is given.
        - policy: arity policy; defaults to Exact(0) (a switch).
        """
        metadata = {
            "abbreviation": abbreviation,
            "name": name,
            "description": description,
            "required": bool(required),
            "policy": policy,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, value in metadata.items():
            object.__setattr__(self, "_" + name, value)
        return self

    @property
    def unnamed(self):
        return self._name == UNNAMED

    def __eq__(self, other):
        if not isinstance(other, OptionSpec):
            return NotImplemented
        return self.__key__() == other.__key__()

    def __hash__(self):
        return hash(self.__key__())

    def __key__(self):
        return tuple(getattr(self, "_" + name) for name in type(self).__introspectable__)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")


class SpecTable:
    """
    Lookup indices over a list of OptionSpec for one parse call.

    Properties
    - specs: tuple of the specs in caller order.
    - by_name / by_abbreviation: read-only mappings.
    - unnamed: the positional collector spec (MissingUnnamedSpecError if absent).
    - required: the required specs in caller order.
    """

    def __init__(self, specs, /):
        specs = tuple(specs)
        by_name = {}
        by_abbreviation = {}

        for spec in specs:
            if not isinstance(spec, OptionSpec):
                raise TypeError("SpecTable() argument must be an iterable of OptionSpec")

            if spec.name in by_name:
                self._conflict("name", spec.name, by_name[spec.name], spec)
            by_name[spec.name] = spec

            if spec.abbreviation is NO_ABBREVIATION:
                continue
            if spec.abbreviation in by_abbreviation:
                self._conflict("abbreviation", spec.abbreviation, by_abbreviation[spec.abbreviation], spec)
            by_abbreviation[spec.abbreviation] = spec

        self._specs = specs
        self._by_name = MappingProxyType(by_name)
        self._by_abbreviation = MappingProxyType(by_abbreviation)

    specs = property(lambda self: self._specs)
    by_name = property(lambda self: self._by_name)
    by_abbreviation = property(lambda self: self._by_abbreviation)

    @staticmethod
    def _conflict(kind, key, previous, current):
        trigger(DuplicateSpecWarning(
            "%s %r is declared more than once, the last declaration wins" % (kind, key),
            title="duplicate specification",
            code=FaultCode.DUPLICATE_SPEC,
            hint="give every option a unique name and abbreviation",
            key=key,
            specs=(previous, current),
            docs=getdoc(FaultCode.DUPLICATE_SPEC),
        ))

    @property
    def unnamed(self):
        try:
            return self._by_name[UNNAMED]
        except KeyError:
            raise MissingUnnamedSpecError(
                "no specification named %r to collect positional arguments" % UNNAMED,
                title="missing positional collector",
                code=FaultCode.MISSING_UNNAMED_SPEC,
                hint="add OptionSpec(None, %r, ...) to the specifications" % UNNAMED,
                docs=getdoc(FaultCode.MISSING_UNNAMED_SPEC),
            ) from None

    @property
    def required(self):
        return tuple(spec for spec in self._specs if spec.required)

    def resolve_name(self, token, /):
        """
        Resolve a "--name" token; raises UnknownLongOptionError.
        """
        name = token[2:]
        try:
            return self._by_name[name]
        except KeyError:
            pass

        candidates = [key for key in self._by_name if key != UNNAMED]
        suggestions = difflib.get_close_matches(name, candidates, 5)
        try:
            hint = "did you mean '--%s'?" % suggestions[0]
        except IndexError:
            hint = "run with '--help' to see all available options"
        raise UnknownLongOptionError(
            "unknown option %r" % token,
            title="unknown option",
            code=FaultCode.UNKNOWN_LONG_OPTION,
            hint=hint,
            name=name,
            token=token,
            suggestions=tuple(suggestions),
            docs=getdoc(FaultCode.UNKNOWN_LONG_OPTION),
        )

    def resolve_abbreviation(self, char, token, /):
        """
        Resolve one character of a "-xyz" group; raises UnknownAbbreviationError.
        """
        try:
            return self._by_abbreviation[char]
        except KeyError:
            raise UnknownAbbreviationError(
                "unknown abbreviated option %r in %r" % (char, token),
                title="unknown abbreviation",
                code=FaultCode.UNKNOWN_ABBREVIATION,
                hint="abbreviations are single characters, spell long options with two dashes",
                char=char,
                token=token,
                docs=getdoc(FaultCode.UNKNOWN_ABBREVIATION),
            ) from None

    def __len__(self):
        return len(self._specs)

    def __iter__(self):
        return iter(self._specs)

    def __repr__(self):
        return f"SpecTable({list(self._by_name)!r})"


__all__ = (
    "UNNAMED",
    "NO_ABBREVIATION",
    "OptionSpec",
    "SpecTable",
)
