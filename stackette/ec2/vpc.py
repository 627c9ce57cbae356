from __future__ import annotations

"""Network placement handles.

A :class:`Vpc` is an external reference: it is never rendered itself, it
only tells constructs which network and which subnets to use.
"""

from dataclasses import KW_ONLY, dataclass
from typing import Iterable, List, Optional, Tuple, Union

__all__ = ["Subnet", "Vpc"]


@dataclass(frozen=True)
class Subnet:  # noqa: D101
    subnet_id: str
    availability_zone: Optional[str] = None


SubnetLike = Union[Subnet, str]


def _subnets(items: Iterable[SubnetLike]) -> Tuple[Subnet, ...]:
    return tuple(s if isinstance(s, Subnet) else Subnet(subnet_id=s) for s in items)


@dataclass(frozen=True)
class Vpc:
    """A VPC and its subnets; subnet order is preserved as given.

    Subnets may be passed as :class:`Subnet` objects or bare subnet ids.
    """

    vpc_id: str
    _: KW_ONLY
    private_subnets: Tuple[Subnet, ...] = ()
    public_subnets: Tuple[Subnet, ...] = ()
    cidr: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "private_subnets", _subnets(self.private_subnets))
        object.__setattr__(self, "public_subnets", _subnets(self.public_subnets))

    @property
    def private_subnet_ids(self) -> List[str]:
        return [s.subnet_id for s in self.private_subnets]
