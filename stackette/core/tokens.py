from __future__ import annotations
"""Placeholders for values that only exist after provisioning.

A token stands for an attribute of another resource (its physical name,
an endpoint address…).  At declaration time it is just a reference to a
logical id; :func:`resolve` renders it into the template intrinsic.
"""
from dataclasses import dataclass
from typing import Any, Iterator

__all__ = ["Ref", "GetAtt", "resolve", "references"]


@dataclass(frozen=True)
class Ref:  # noqa: D101
    target: str

    def to_cfn(self) -> dict:
        return {"Ref": self.target}

    def __str__(self) -> str:
        return f"${{Token[Ref.{self.target}]}}"


@dataclass(frozen=True)
class GetAtt:  # noqa: D101
    target: str
    attribute: str

    def to_cfn(self) -> dict:
        return {"Fn::GetAtt": [self.target, self.attribute]}

    def __str__(self) -> str:
        return f"${{Token[{self.target}.{self.attribute}]}}"


Token = (Ref, GetAtt)


def resolve(value: Any) -> Any:
    """Return *value* with every token rendered (recurses into dicts/lists)."""
    if isinstance(value, Token):
        return value.to_cfn()
    if isinstance(value, dict):
        return {k: resolve(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [resolve(v) for v in value]
    return value


def references(value: Any) -> Iterator[str]:
    """Yield the logical id of every token found in *value*."""
    if isinstance(value, Token):
        yield value.target
    elif isinstance(value, dict):
        for v in value.values():
            yield from references(v)
    elif isinstance(value, (list, tuple)):
        for v in value:
            yield from references(v)
