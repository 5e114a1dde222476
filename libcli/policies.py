"""
libcli arity policies.

A policy governs how many value tokens may follow an option before the next
flag token. Policies are small immutable values compared and hashed by kind
and count, so they can be shared freely between specifications.

- Exact(n): exactly n values. Exact(0) is a switch: presence is the signal.
- AtLeast(n): n or more values.
- AtMost(n): n or fewer values.
- Terminator(): a switch that ends parsing on sight; remaining tokens are
  ignored and required options are not checked (help/version style options).

Enforcement
- policy.enforce(spec, values) runs once per option occurrence, when the
  option's value window closes, and returns the values as a tuple or raises
  ArityViolationError.
"""
from .faults import ArityViolationError, FaultCode, getdoc
from .utils import mirror, pluralize


class OptionPolicy:
    """
    Base class of the arity policies. Not meant to be instantiated directly.

    Properties
    - count: the bound the policy compares against.
    - switch: True when occurrences never carry values and may repeat freely.
    - terminator: True when resolving the option ends parsing.
    """
    __slots__ = ("_count",)

    __qualifier__ = ""

    count = mirror("count")

    def __new__(cls, count, /):
        if cls is OptionPolicy:
            raise TypeError("OptionPolicy cannot be instantiated directly, use Exact, AtLeast or AtMost")
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"{cls.__name__}() count must be an integer")
        if count < 0:
            raise ValueError(f"{cls.__name__}() count cannot be negative")
        self = super().__new__(cls)
        self._count = count
        return self

    @property
    def switch(self):
        return False

    @property
    def terminator(self):
        return False

    def admits(self, actual, /):
        raise NotImplementedError

    def describe(self):
        """
        Human-readable bound, e.g. "exactly 1 value" or "at least 2 values".
        """
        return f"{self.__qualifier__} {self._count} {pluralize('value', self._count)}"

    def enforce(self, spec, values, /):
        """
        Validate the values collected for one occurrence of spec.

        Returns the values unchanged (as a tuple) when admitted; raises
        ArityViolationError reporting the actual count and this policy otherwise.
        """
        values = tuple(values)
        if self.admits(len(values)):
            return values
        raise ArityViolationError(
            "option %r expects %s but got %d" % (spec.name, self.describe(), len(values)),
            title="wrong number of values",
            code=FaultCode.ARITY_VIOLATION,
            hint=self._hint(spec, len(values)),
            option_name=spec.name,
            actual=len(values),
            policy=self,
            docs=getdoc(FaultCode.ARITY_VIOLATION),
        )

    def _hint(self, spec, actual, /):
        if actual > self._count:
            return "remove the extra values after %r" % spec.name
        return "pass %s after %r" % (self.describe(), spec.name)

    def __eq__(self, other):
        if not isinstance(other, OptionPolicy):
            return NotImplemented
        return type(self) is type(other) and self._count == other._count

    def __hash__(self):
        return hash((type(self).__name__, self._count))

    def __repr__(self):
        return f"{type(self).__name__}({self._count})"

    def __rich_repr__(self):
        yield self._count

    def __setattr__(self, name, value):
        if hasattr(self, "_count"):
            raise AttributeError(f"{type(self).__name__!r} object is immutable")
        super().__setattr__(name, value)

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")


class Exact(OptionPolicy):
    __slots__ = ()
    __qualifier__ = "exactly"

    @property
    def switch(self):
        return self._count == 0

    def admits(self, actual, /):
        return actual == self._count


class AtLeast(OptionPolicy):
    __slots__ = ()
    __qualifier__ = "at least"

    def admits(self, actual, /):
        return actual >= self._count


class AtMost(OptionPolicy):
    __slots__ = ()
    __qualifier__ = "at most"

    def admits(self, actual, /):
        return actual <= self._count


class Terminator(OptionPolicy):
    __slots__ = ()
    __qualifier__ = "exactly"

    def __new__(cls):
        return super().__new__(cls, 0)

    @property
    def switch(self):
        return True

    @property
    def terminator(self):
        return True

    def admits(self, actual, /):
        return actual == 0

    def __repr__(self):
        return "Terminator()"

    def __rich_repr__(self):
        yield from ()


__all__ = (
    "OptionPolicy",
    "Exact",
    "AtLeast",
    "AtMost",
    "Terminator",
)
