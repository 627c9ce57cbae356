from __future__ import annotations

"""Security groups: the access policy attached to network resources.

Two flavours implement :class:`ISecurityGroup`:

* :class:`SecurityGroup` – a resource declared in this stack.  Rules are
  kept inline on the resource.
* :class:`ImportedSecurityGroup` – an existing group known only by id.
  Each ingress rule becomes its own ``AWS::EC2::SecurityGroupIngress``
  resource under the imported construct.

:class:`Owned` and :class:`Borrowed` record whether a construct created a
group itself or was handed one by its caller.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Union

from stackette.core.construct import Construct
from stackette.core.node import CfnResource
from stackette.ec2.peer import CidrPeer, Port, SecurityGroupPeer
from stackette.ec2.vpc import Vpc
from stackette.utils.events import publish, IngressRuleAdded

__all__ = [
    "ISecurityGroup",
    "SecurityGroup",
    "ImportedSecurityGroup",
    "CfnSecurityGroupIngress",
    "Owned",
    "Borrowed",
    "SecurityGroupBinding",
]

PeerLike = Union[CidrPeer, SecurityGroupPeer]

ALLOW_ALL_EGRESS: Dict[str, Any] = {
    "cidrIp": "0.0.0.0/0",
    "description": "Allow all outbound traffic by default",
    "ipProtocol": "-1",
}

# A rule that matches nothing: an empty egress list would mean "allow all".
DISALLOW_ALL_EGRESS: Dict[str, Any] = {
    "cidrIp": "255.255.255.255/32",
    "description": "Disallow all traffic",
    "ipProtocol": "icmp",
    "fromPort": 252,
    "toPort": 86,
}


def _ingress_rule(peer: PeerLike, port: Port, description: str | None) -> Dict[str, Any]:
    rule: Dict[str, Any] = {**peer.to_rule(), **port.to_rule()}
    if description:
        rule["description"] = description
    return rule


class ISecurityGroup:  # noqa: D101 – minimalist interface
    path: str

    @property
    def security_group_id(self) -> Any:
        raise NotImplementedError

    def add_ingress_rule(self, peer: PeerLike, port: Port, description: str | None = None) -> None:
        raise NotImplementedError


class SecurityGroup(CfnResource, ISecurityGroup):
    resource_type = "AWS::EC2::SecurityGroup"

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        vpc: Vpc,
        description: str | None = None,
        allow_all_outbound: bool = True,
    ) -> None:
        self.vpc = vpc
        self.allow_all_outbound = allow_all_outbound
        egress = dict(ALLOW_ALL_EGRESS) if allow_all_outbound else dict(DISALLOW_ALL_EGRESS)
        super().__init__(
            scope,
            id,
            properties={
                "groupDescription": description,
                "securityGroupEgress": [egress],
                "vpcId": vpc.vpc_id,
            },
        )
        if description is None:
            self.properties["groupDescription"] = self.path

    # -------------------------------------------------- #
    @staticmethod
    def from_security_group_id(scope: Construct, id: str, group_id: str) -> "ImportedSecurityGroup":
        return ImportedSecurityGroup(scope, id, group_id)

    @property
    def security_group_id(self) -> Any:
        return self.get_att("GroupId")

    @property
    def ingress_rules(self) -> List[Dict[str, Any]]:
        return list(self.properties.get("securityGroupIngress", []))

    def add_ingress_rule(self, peer: PeerLike, port: Port, description: str | None = None) -> None:
        rule = _ingress_rule(peer, port, description)
        rules = self.properties.setdefault("securityGroupIngress", [])
        if rule in rules:
            return
        rules.append(rule)
        publish(IngressRuleAdded(group=self.path, peer=str(peer), port=str(port)))


class CfnSecurityGroupIngress(CfnResource):
    resource_type = "AWS::EC2::SecurityGroupIngress"


class ImportedSecurityGroup(Construct, ISecurityGroup):
    """A security group that exists outside this stack."""

    def __init__(self, scope: Construct, id: str, group_id: str) -> None:
        super().__init__(scope, id)
        self.group_id = group_id

    @property
    def security_group_id(self) -> Any:
        return self.group_id

    def add_ingress_rule(self, peer: PeerLike, port: Port, description: str | None = None) -> None:
        rule_id = f"from {peer}:{port}"
        if rule_id in self.children:
            return
        CfnSecurityGroupIngress(
            self,
            rule_id,
            properties={"groupId": self.group_id, **_ingress_rule(peer, port, description)},
        )
        publish(IngressRuleAdded(group=self.path, peer=str(peer), port=str(port)))


# --------------------------------------------------------------------------- #
# Ownership of the group a construct is bound to
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Owned:  # noqa: D101 – created by the construct itself
    group: SecurityGroup


@dataclass(frozen=True)
class Borrowed:  # noqa: D101 – supplied by the caller, only referenced
    group: ISecurityGroup


SecurityGroupBinding = Union[Owned, Borrowed]
