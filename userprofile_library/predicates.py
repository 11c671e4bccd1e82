"""Compiled attribute predicates.

A small closed set of immutable predicate variants evaluated against an
EvaluationContext. Predicates are produced once at compile time, compare
structurally, and serialize to plain dicts for diagnostics.

Public Interface:
    - Predicate: Base class, callable as ``predicate(context) -> bool``
    - AlwaysTrue / AlwaysFalse: Constants (ALWAYS_TRUE / ALWAYS_FALSE)
    - RoleMatch: Principal holds any of the roles
    - ScopeMatch: Any of the scopes is requested in the current auth flow
    - AnyOf / AllOf / Not: Composition, evaluated left to right
    - TargetIsServiceAccount: Managed entity is a service account
    - RealmFlag: A boolean realm setting is enabled
    - predicate_from_dict: Rebuild a predicate from its ``to_dict()`` form
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from typing import ClassVar

from userprofile_library.models.context import EvaluationContext


class Predicate:
    """Pure boolean function over an evaluation context."""

    kind: ClassVar[str] = ""

    def evaluate(self, context: EvaluationContext) -> bool:
        raise NotImplementedError

    def __call__(self, context: EvaluationContext) -> bool:
        return self.evaluate(context)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}

    def describe(self) -> str:
        return self.kind


@dataclass(frozen=True)
class AlwaysTrue(Predicate):
    kind: ClassVar[str] = "always-true"

    def evaluate(self, context: EvaluationContext) -> bool:
        return True


@dataclass(frozen=True)
class AlwaysFalse(Predicate):
    kind: ClassVar[str] = "always-false"

    def evaluate(self, context: EvaluationContext) -> bool:
        return False


ALWAYS_TRUE = AlwaysTrue()
ALWAYS_FALSE = AlwaysFalse()


@dataclass(frozen=True)
class RoleMatch(Predicate):
    """True if the principal holds any of the roles."""

    roles: frozenset[str]
    kind: ClassVar[str] = "role-match"

    def evaluate(self, context: EvaluationContext) -> bool:
        return not self.roles.isdisjoint(context.roles)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "roles": sorted(self.roles)}

    def describe(self) -> str:
        return f"role in {sorted(self.roles)}"


@dataclass(frozen=True)
class ScopeMatch(Predicate):
    """True if any of the scopes is requested or granted in the current auth flow.

    Always false outside an authentication flow.
    """

    scopes: frozenset[str]
    kind: ClassVar[str] = "scope-match"

    def evaluate(self, context: EvaluationContext) -> bool:
        granted = context.granted_scopes()
        if granted is None:
            return False
        return not self.scopes.isdisjoint(granted)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "scopes": sorted(self.scopes)}

    def describe(self) -> str:
        return f"scope in {sorted(self.scopes)}"


@dataclass(frozen=True)
class TargetIsServiceAccount(Predicate):
    """True if the managed entity is a service account."""

    kind: ClassVar[str] = "target-is-service-account"

    def evaluate(self, context: EvaluationContext) -> bool:
        return context.target is not None and context.target.is_service_account


@dataclass(frozen=True)
class RealmFlag(Predicate):
    """True if the named boolean realm setting is enabled."""

    flag: str
    kind: ClassVar[str] = "realm-flag"

    def evaluate(self, context: EvaluationContext) -> bool:
        return bool(getattr(context.realm, self.flag))

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "flag": self.flag}

    def describe(self) -> str:
        return f"realm.{self.flag}"


@dataclass(frozen=True)
class Not(Predicate):
    operand: Predicate
    kind: ClassVar[str] = "not"

    def evaluate(self, context: EvaluationContext) -> bool:
        return not self.operand.evaluate(context)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "operand": self.operand.to_dict()}

    def describe(self) -> str:
        return f"not ({self.operand.describe()})"


@dataclass(frozen=True)
class AnyOf(Predicate):
    """Logical OR, evaluated left to right with short-circuit."""

    operands: tuple[Predicate, ...]
    kind: ClassVar[str] = "any-of"

    def evaluate(self, context: EvaluationContext) -> bool:
        return any(p.evaluate(context) for p in self.operands)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "operands": [p.to_dict() for p in self.operands]}

    def describe(self) -> str:
        return " or ".join(f"({p.describe()})" for p in self.operands)


@dataclass(frozen=True)
class AllOf(Predicate):
    """Logical AND, evaluated left to right with short-circuit."""

    operands: tuple[Predicate, ...]
    kind: ClassVar[str] = "all-of"

    def evaluate(self, context: EvaluationContext) -> bool:
        return all(p.evaluate(context) for p in self.operands)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "operands": [p.to_dict() for p in self.operands]}

    def describe(self) -> str:
        return " and ".join(f"({p.describe()})" for p in self.operands)


def role_match(roles: Iterable[str]) -> RoleMatch:
    return RoleMatch(frozenset(roles))


def scope_match(scopes: Iterable[str]) -> ScopeMatch:
    return ScopeMatch(frozenset(scopes))


def any_of(*operands: Predicate) -> AnyOf:
    return AnyOf(tuple(operands))


def all_of(*operands: Predicate) -> AllOf:
    return AllOf(tuple(operands))


def predicate_from_dict(data: dict[str, Any]) -> Predicate:
    """Rebuild a predicate from its ``to_dict()`` form.

    Raises:
        ValueError: If the kind is unknown
    """
    kind = data.get("kind")
    if kind == AlwaysTrue.kind:
        return ALWAYS_TRUE
    if kind == AlwaysFalse.kind:
        return ALWAYS_FALSE
    if kind == RoleMatch.kind:
        return role_match(data.get("roles", []))
    if kind == ScopeMatch.kind:
        return scope_match(data.get("scopes", []))
    if kind == TargetIsServiceAccount.kind:
        return TargetIsServiceAccount()
    if kind == RealmFlag.kind:
        return RealmFlag(data["flag"])
    if kind == Not.kind:
        return Not(predicate_from_dict(data["operand"]))
    if kind == AnyOf.kind:
        return AnyOf(tuple(predicate_from_dict(p) for p in data.get("operands", [])))
    if kind == AllOf.kind:
        return AllOf(tuple(predicate_from_dict(p) for p in data.get("operands", [])))
    raise ValueError(f"Unknown predicate kind: {kind}")
