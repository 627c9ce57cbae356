from __future__ import annotations

"""Traffic peers and port ranges for security group rules."""

import ipaddress
from dataclasses import dataclass
from typing import Any, Dict

__all__ = ["Port", "Peer", "CidrPeer", "SecurityGroupPeer"]


@dataclass(frozen=True)
class Port:  # noqa: D101
    protocol: str
    from_port: int
    to_port: int

    @staticmethod
    def tcp(port: int) -> "Port":
        return Port("tcp", port, port)

    @staticmethod
    def tcp_range(start: int, end: int) -> "Port":
        if start > end:
            raise ValueError(f"Invalid port range {start}-{end}")
        return Port("tcp", start, end)

    @staticmethod
    def all_traffic() -> "Port":
        return Port("-1", -1, -1)

    def to_rule(self) -> Dict[str, Any]:
        if self.protocol == "-1":
            return {"ipProtocol": "-1"}
        return {"ipProtocol": self.protocol, "fromPort": self.from_port, "toPort": self.to_port}

    def __str__(self) -> str:
        if self.protocol == "-1":
            return "ALL TRAFFIC"
        if self.from_port == self.to_port:
            return f"{self.protocol.upper()} {self.from_port}"
        return f"{self.protocol.upper()} {self.from_port}-{self.to_port}"


@dataclass(frozen=True)
class CidrPeer:  # noqa: D101
    cidr: str

    def to_rule(self) -> Dict[str, Any]:
        return {"cidrIp": self.cidr}

    def __str__(self) -> str:
        return self.cidr


@dataclass(frozen=True)
class SecurityGroupPeer:  # noqa: D101
    group_id: Any  # plain id or a GetAtt token

    def to_rule(self) -> Dict[str, Any]:
        return {"sourceSecurityGroupId": self.group_id}

    def __str__(self) -> str:
        return str(self.group_id)


class Peer:
    """Factory for the peers accepted by ``add_ingress_rule``."""

    @staticmethod
    def ipv4(cidr: str) -> CidrPeer:
        if "/" not in cidr:
            raise ValueError(f"Invalid IPv4 CIDR '{cidr}': missing mask (e.g. /32)")
        try:
            ipaddress.IPv4Network(cidr, strict=False)
        except ValueError as e:
            raise ValueError(f"Invalid IPv4 CIDR '{cidr}': {e}") from e
        return CidrPeer(cidr)

    @staticmethod
    def any_ipv4() -> CidrPeer:
        return CidrPeer("0.0.0.0/0")

    @staticmethod
    def security_group_id(group_id: Any) -> SecurityGroupPeer:
        return SecurityGroupPeer(group_id)
