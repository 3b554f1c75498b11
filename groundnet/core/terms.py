"""
Terms of the first-order language: constants, typed variables, functions.

Term is a closed union of three shapes. Every consumer below dispatches
over all three and raises TypeError on anything else:

    Constant("Anna", "person")                     -> Anna
    Variable("x", "person")                        -> x
    Function("walking", (Variable("x", "id"),), "event")
                                                   -> walking(x)

A Constant is always ground, a Variable never is, and a Function is
ground iff every argument is ground.

Names follow the lexical convention of the text form, so to_text() always
parses back to the same term:

    variable        word characters, lowercase initial     x, t1, person
    constant        word characters, any other initial     Anna, 10, _id
    function name   word characters                        walking

Substitutions are plain dicts from Variable to Term:
    {Variable("x", "person"): Constant("Anna")}
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from ..errors import MalformedStructureError


_IDENTIFIER = re.compile(r"\w+")


def _require_name(kind: str, value) -> None:
    if not isinstance(value, str) or not _IDENTIFIER.fullmatch(value):
        raise MalformedStructureError(f"{kind} must be a non-empty identifier, got {value!r}")


@dataclass(frozen=True)
class Constant:
    """
    A constant symbol. The domain it was declared in is carried along
    for reporting but does not take part in equality: the same symbol
    names the same individual wherever it is written.
    """
    symbol: str
    domain: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        _require_name("constant symbol", self.symbol)
        if self.symbol[0].islower():
            raise MalformedStructureError(
                f"constant symbol must not start lowercase, got {self.symbol!r}")

    def to_text(self) -> str:
        return self.symbol

    def __str__(self):
        return self.symbol


@dataclass(frozen=True)
class Variable:
    """A variable ranging over the constants of one domain."""
    name: str
    domain: Optional[str] = None

    def __post_init__(self):
        _require_name("variable name", self.name)
        if not self.name[0].islower():
            raise MalformedStructureError(
                f"variable name must start lowercase, got {self.name!r}")

    def to_text(self) -> str:
        return self.name

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Function:
    """A function application; domain is the function's return domain."""
    name: str
    args: tuple = ()
    domain: Optional[str] = None

    def __post_init__(self):
        _require_name("function name", self.name)
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))
        for arg in self.args:
            if not is_term(arg):
                raise MalformedStructureError(
                    f"argument of {self.name} is not a term: {arg!r}")

    @property
    def arity(self) -> int:
        return len(self.args)

    def to_text(self) -> str:
        return f"{self.name}({','.join(render(arg) for arg in self.args)})"

    def __str__(self):
        return self.to_text()


Term = Union[Constant, Variable, Function]


def is_term(value) -> bool:
    return isinstance(value, (Constant, Variable, Function))


def is_constant(term) -> bool:
    return isinstance(term, Constant)


def is_variable(term) -> bool:
    return isinstance(term, Variable)


def is_function(term) -> bool:
    return isinstance(term, Function)


def _unknown(term):
    return TypeError(f"not a term: {term!r}")


def is_ground(term: Term) -> bool:
    """No Variable anywhere in term, including nested function arguments."""
    if isinstance(term, Constant):
        return True
    if isinstance(term, Variable):
        return False
    if isinstance(term, Function):
        return all(is_ground(arg) for arg in term.args)
    raise _unknown(term)


def subterms(term: Term) -> Iterator[Term]:
    """Pre-order walk over term and everything nested inside it."""
    if isinstance(term, (Constant, Variable)):
        yield term
    elif isinstance(term, Function):
        yield term
        for arg in term.args:
            yield from subterms(arg)
    else:
        raise _unknown(term)


def occurs_in(var: Variable, term: Term) -> bool:
    """Does var occur anywhere in term?"""
    return any(t == var for t in subterms(term))


def substitute(term: Term, theta: dict) -> Term:
    """Apply a substitution to a single term. Follows chains."""
    if isinstance(term, Variable):
        if term in theta:
            return substitute(theta[term], theta)
        return term
    if isinstance(term, Constant):
        return term
    if isinstance(term, Function):
        return Function(term.name,
                        tuple(substitute(arg, theta) for arg in term.args),
                        term.domain)
    raise _unknown(term)


def render(term: Term) -> str:
    """Text form: constants and variables bare, functions as name(args)."""
    if isinstance(term, (Constant, Variable, Function)):
        return term.to_text()
    raise _unknown(term)
