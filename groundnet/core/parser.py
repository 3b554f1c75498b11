"""
Parser for the text rendering of atoms, literals and clauses.

This is the inverse of to_text() on AtomicFormula / Literal /
WeightedClause, not a parser for whole knowledge-base files.

Identifiers:
    lowercase initial       -> variable:   t, x, person1
    anything else           -> constant:   Foo, 10, ID0
    name(...) as argument   -> function:   walking(x)

Argument domains come from the schemas:
    predicate_schema = {AtomSignature("Happens", 2): ["event", "time"]}
    function_schema  = {AtomSignature("walking", 1): ("event", ["id"])}

Clauses:
    "1.5 !Smokes(x) v Cancer(x)"   soft, weight 1.5
    "!Smokes(x) v Cancer(x)."      hard
"""

import re
from typing import Optional

from ..errors import ParseError
from .atoms import AtomSignature, AtomicFormula, Literal, WeightedClause
from .terms import Constant, Variable, Function


_TOKEN = re.compile(r"\s*(?:(?P<ident>\w+)|(?P<punct>[(),!]))")
_WEIGHT = re.compile(r"\s*(?P<weight>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s+")


def _tokenize(text: str) -> list:
    tokens = []
    pos = 0
    while pos < len(text):
        if text[pos:].strip() == "":
            break
        m = _TOKEN.match(text, pos)
        if m is None:
            start = len(text) - len(text[pos:].lstrip())
            raise ParseError("unexpected character", text, start)
        kind = "ident" if m.group("ident") is not None else "punct"
        tokens.append((kind, m.group(kind), m.start(kind)))
        pos = m.end()
    return tokens


class _Cursor:
    def __init__(self, text: str):
        self.text = text
        self.tokens = _tokenize(text)
        self.i = 0

    def peek(self, offset=0):
        j = self.i + offset
        return self.tokens[j] if j < len(self.tokens) else None

    def take(self):
        token = self.peek()
        if token is None:
            raise ParseError("unexpected end of input", self.text)
        self.i += 1
        return token

    def expect(self, value: str):
        kind, got, pos = self.take()
        if got != value:
            raise ParseError(f"expected {value!r}, found {got!r}", self.text, pos)

    def at(self, value: str) -> bool:
        token = self.peek()
        return token is not None and token[1] == value

    def done(self) -> bool:
        return self.i >= len(self.tokens)


class AtomParser:
    """Parses atoms, literals and clauses against predicate/function schemas."""

    def __init__(self, predicate_schema: dict, function_schema: Optional[dict] = None):
        self.predicate_schema = dict(predicate_schema)
        self.function_schema = dict(function_schema or {})

    def parse_atom(self, text: str) -> AtomicFormula:
        cur = _Cursor(text)
        atom = self._atom(cur)
        self._finish(cur)
        return atom

    def parse_literal(self, text: str) -> Literal:
        cur = _Cursor(text)
        lit = self._literal(cur)
        self._finish(cur)
        return lit

    def parse_clause(self, text: str, label: str = "") -> WeightedClause:
        weight = None
        body = text.rstrip()
        m = _WEIGHT.match(body)
        if m:
            weight = float(m.group("weight"))
            body = body[m.end():]
        if body.endswith("."):
            if weight is not None:
                raise ParseError("a clause cannot be both weighted and hard", text)
            body = body[:-1]
        elif weight is None:
            raise ParseError("soft clause without a weight", text)

        cur = _Cursor(body)
        literals = [self._literal(cur)]
        while cur.at("v"):
            cur.take()
            literals.append(self._literal(cur))
        self._finish(cur)
        return WeightedClause(tuple(literals), weight, label)

    # ── grammar ──────────────────────────────────────────────────────────

    def _finish(self, cur: _Cursor):
        if not cur.done():
            _, got, pos = cur.peek()
            raise ParseError(f"trailing input {got!r}", cur.text, pos)

    def _literal(self, cur: _Cursor) -> Literal:
        if cur.at("!"):
            cur.take()
            return Literal(self._atom(cur), positive=False)
        return Literal(self._atom(cur))

    def _atom(self, cur: _Cursor) -> AtomicFormula:
        kind, name, pos = cur.take()
        if kind != "ident":
            raise ParseError(f"expected a predicate name, found {name!r}", cur.text, pos)
        args = self._arguments(cur) if cur.at("(") else []

        signature = AtomSignature(name, len(args))
        if signature not in self.predicate_schema:
            raise ParseError(f"unknown predicate {signature}", cur.text, pos)
        domains = self.predicate_schema[signature]
        return AtomicFormula(name, tuple(
            self._term(arg, domain, cur.text) for arg, domain in zip(args, domains)
        ))

    def _arguments(self, cur: _Cursor) -> list:
        """Raw argument trees: (name, pos) or (name, pos, [children])."""
        cur.expect("(")
        args = []
        if cur.at(")"):
            cur.take()
            return args
        while True:
            kind, name, pos = cur.take()
            if kind != "ident":
                raise ParseError(f"expected a term, found {name!r}", cur.text, pos)
            if cur.at("("):
                args.append((name, pos, self._arguments(cur)))
            else:
                args.append((name, pos))
            if cur.at(","):
                cur.take()
                continue
            cur.expect(")")
            return args

    def _term(self, raw, domain, text):
        name, pos = raw[0], raw[1]
        if len(raw) == 3:
            signature = AtomSignature(name, len(raw[2]))
            if signature not in self.function_schema:
                raise ParseError(f"unknown function {signature}", text, pos)
            return_domain, arg_domains = self.function_schema[signature]
            if domain is not None and return_domain != domain:
                raise ParseError(
                    f"function {signature} returns {return_domain}, expected {domain}",
                    text, pos)
            return Function(name, tuple(
                self._term(arg, d, text) for arg, d in zip(raw[2], arg_domains)
            ), return_domain)
        if name[0].islower():
            return Variable(name, domain)
        return Constant(name, domain)
