"""
libcli faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
  Codes are grouped by domain to keep copy consistent and make logs/searches
  predictable.
- ParseError / ParseWarning: base types that carry a message plus structured
  options and know how to render themselves through rich.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- table      MissingUnnamedSpecError, DuplicateSpecWarning
- tokens     UnknownLongOptionError, UnknownAbbreviationError
- values     ArityViolationError, DuplicateOptionError
- validation MissingRequiredOptionError

Integration
- The parser raises faults directly: every fault aborts the current parse and no
  partial result is ever returned.
- CLI entry points call trigger(fault, shell=True) to print the fault on stderr
  and exit; without shell the exception is raised (or the warning emitted).
- Hosts customise rendering through __prog__, __styles__, __codes__ and __docs__
  attributes on their __main__ module.
"""
import copy
import os
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce, rename

console = Console(stderr=True)

# Warnings are attributed to the first frame outside of this package.
_INTERNAL = (os.path.dirname(__file__) + os.sep,)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping
    - specification table (1110x): MISSING_UNNAMED_SPEC
    - tokens (1111x): UNKNOWN_LONG_OPTION, UNKNOWN_ABBREVIATION
    - values (1112x): ARITY_VIOLATION, DUPLICATE_OPTION
    - validation (1113x): MISSING_REQUIRED_OPTION
    - warnings (12xxx): DUPLICATE_SPEC
    """
    # --- specification table errors ---
    MISSING_UNNAMED_SPEC    = 11101

    # --- token errors ---
    UNKNOWN_LONG_OPTION     = 11111
    UNKNOWN_ABBREVIATION    = 11112

    # --- value errors ---
    ARITY_VIOLATION         = 11121
    DUPLICATE_OPTION        = 11122

    # --- validation errors ---
    MISSING_REQUIRED_OPTION = 11131

    # --- warnings ---
    DUPLICATE_SPEC          = 12101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _field(name, /):
    # structured payload lives in the options mapping; expose it as an attribute
    return property(rename(lambda self: self.options.get(name), name))


class Fault:
    """
    shared behavior of errors and warnings.

    a fault holds a lowercase message and a read-only mapping of options. the
    options carry both the structured payload (option_name, actual, ...) and the
    rendering context (title, code, hint, shell, fancy, colorful, prog).
    """
    __palette__ = {}

    code = _field("code")
    title = _field("title")
    hint = _field("hint")

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(coalesce(self.message, ""))

    def __rich__(self):
        main = __import__("__main__")
        options = defaultdict(lambda: Unset, self.options)
        colorful = options["colorful"] is not False
        fancy = bool(options["fancy"])

        styles = defaultdict(str, type(self).__palette__ | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = getattr(main, "__prog__", options["prog"] or "libcli")
        code = options["code"].normalize() if isinstance(options["code"], FaultCode) else ""
        title = str(options["title"] or type(self).__name__)

        header = Text.assemble(
            "[ ",
            text(prog, styler("prog-name")),
            " | ",
            text(code, styler("code")),
            " | ",
            text(title.title(), styler("title")),
            " ]"
        )
        message = text(self.message, styler("message"))
        renders = [message]
        if options["hint"]:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(options["hint"], styler("hint"))))
        if options["docs"]:
            renders.append(text(options["docs"], styler("docs")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ParseError(Fault, Exception):
    """
    base class of every parse failure.

    raised by parse(); each subclass exposes its structured payload as
    attributes (see the subclasses below).
    """
    __palette__ = {
        # header parts
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # neon cyan fault code
        "title": "bold #FF4DA6",  # friendly pinky title

        # body
        "message": "#C8C8D0",  # soft light gray message
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
        "docs": "underline #00E5FF dim",
    }

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class MissingUnnamedSpecError(ParseError): ...


class UnknownLongOptionError(ParseError):
    name = _field("name")
    token = _field("token")
    suggestions = _field("suggestions")


class UnknownAbbreviationError(ParseError):
    char = _field("char")
    token = _field("token")


class ArityViolationError(ParseError):
    option_name = _field("option_name")
    actual = _field("actual")
    policy = _field("policy")


class DuplicateOptionError(ParseError):
    option_name = _field("option_name")


class MissingRequiredOptionError(ParseError):
    option_name = _field("option_name")


class ParseWarning(Fault, Warning):
    """
    base class of non-fatal diagnostics (emitted through the warnings module).
    """
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",  # amber fault code for warnings
        "title": "bold #FFC2E0",  # softer pinky title for warnings
        "message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
        "docs": "underline #FFB400 dim",
    }

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", 2), skip_file_prefixes=_INTERNAL)
        console.print(self)


class DuplicateSpecWarning(ParseWarning):
    key = _field("key")
    specs = _field("specs")


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see Fault subclasses).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the rich console on stderr (errors then
      exit with status 1); otherwise errors are raised and warnings emitted.

    typical options
    - shell, fancy, colorful, prog, stacklevel
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    return copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    returns None when no documentation is registered.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "Fault",
    "ParseError",
    "MissingUnnamedSpecError",
    "UnknownLongOptionError",
    "UnknownAbbreviationError",
    "ArityViolationError",
    "DuplicateOptionError",
    "MissingRequiredOptionError",
    "ParseWarning",
    "DuplicateSpecWarning",
    "trigger",
    "getdoc",
)
