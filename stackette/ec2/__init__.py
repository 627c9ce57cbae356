"""Network placement (VPC, subnets) and access policy (security groups)."""

from .vpc import Subnet, Vpc
from .peer import Peer, Port, CidrPeer, SecurityGroupPeer
from .security_group import (
    ISecurityGroup,
    SecurityGroup,
    ImportedSecurityGroup,
    CfnSecurityGroupIngress,
    Owned,
    Borrowed,
    SecurityGroupBinding,
)

__all__ = [
    "Subnet",
    "Vpc",
    "Peer",
    "Port",
    "CidrPeer",
    "SecurityGroupPeer",
    "ISecurityGroup",
    "SecurityGroup",
    "ImportedSecurityGroup",
    "CfnSecurityGroupIngress",
    "Owned",
    "Borrowed",
    "SecurityGroupBinding",
]
