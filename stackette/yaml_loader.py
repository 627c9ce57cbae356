from __future__ import annotations
"""Minimal YAML → App loader.

A declarative alternative to building constructs in Python.  Example YAML:

```yaml
name: cache-app
stacks:
  - name: CacheStack
    description: Redis for the web tier
    vpc:
      id: vpc-0abc
      private_subnets: [subnet-a, subnet-b]
    security_groups:          # existing groups, referenced by name below
      - name: WebSg
        group_id: sg-0123
    clusters:
      - id: Cache
        num_cache_nodes: 2
        parameter_group_family: redis6.x
        ingress:
          - peer: 10.0.0.0/16   # CIDR, "any" or an imported group name
          - peer: WebSg
            port: 6380
```

Usage:
    from stackette.yaml_loader import load_app
    app = load_app("stack.yml")
    app.synth("cdk.out")
"""
from pathlib import Path
from typing import Any, Dict

import yaml
from jsonschema import validate as _js_validate

from stackette.core.stack import App, Stack, CfnOutput
from stackette.ec2.peer import Peer
from stackette.ec2.security_group import ISecurityGroup, SecurityGroup
from stackette.ec2.vpc import Subnet, Vpc
from stackette.elasticache.cluster import ClusterProps, ElastiCacheCluster
from stackette.utils.logging import log

__all__ = ["load_app", "build_app"]

_CLUSTER_FIELDS = (
    "engine_version",
    "node_type",
    "num_cache_nodes",
    "parameter_group_family",
    "preferred_maintenance_window",
    "port",
)


# --------------------------------------------------------------------------- #

def _vpc(data: Dict[str, Any]) -> Vpc:
    def _subnet(item: Any) -> Subnet:
        if isinstance(item, str):
            return Subnet(subnet_id=item)
        return Subnet(subnet_id=item["id"], availability_zone=item.get("availability_zone"))

    return Vpc(
        data["id"],
        private_subnets=[_subnet(s) for s in data.get("private_subnets", [])],
        public_subnets=[_subnet(s) for s in data.get("public_subnets", [])],
        cidr=data.get("cidr"),
    )


def _peer(name: str, groups: Dict[str, ISecurityGroup]):
    if name == "any":
        return Peer.any_ipv4()
    if name in groups:
        return Peer.security_group_id(groups[name].security_group_id)
    if "/" in name:
        return Peer.ipv4(name)
    raise KeyError(f"Peer '{name}' is neither a CIDR nor a known security group")


def _build_stack(app: App, data: Dict[str, Any]) -> Stack:
    stack = Stack(app, data["name"], description=data.get("description"))
    vpc = _vpc(data["vpc"])

    groups: Dict[str, ISecurityGroup] = {}
    for item in data.get("security_groups", []):
        groups[item["name"]] = SecurityGroup.from_security_group_id(stack, item["name"], item["group_id"])

    for item in data.get("clusters", []):
        sg_names = item.get("security_groups", [])
        missing = [n for n in sg_names if n not in groups]
        if missing:
            raise KeyError(f"Cluster '{item['id']}' references unknown security group '{missing[0]}'")

        props = ClusterProps(
            vpc=vpc,
            security_groups=[groups[n] for n in sg_names],
            **{k: item[k] for k in _CLUSTER_FIELDS if k in item},
        )
        cluster = ElastiCacheCluster(stack, item["id"], props)
        for rule in item.get("ingress", []):
            cluster.allow_ingress_from(_peer(rule["peer"], groups), rule.get("port"))

        if item.get("outputs", True):
            CfnOutput(stack, f"{item['id']}Endpoint", value=cluster.cluster_endpoint)
            CfnOutput(stack, f"{item['id']}Port", value=cluster.cluster_port)

    log.debug("stack %s loaded: %d resources", stack.id, len(stack.resources()))
    return stack


def build_app(data: Dict[str, Any]) -> App:
    """Validate *data* (already parsed YAML) and build the App it describes."""
    _js_validate(instance=data, schema=_SCHEMA)
    app = App(name=data.get("name", "app"))
    for stack_data in data["stacks"]:
        _build_stack(app, stack_data)
    return app


def load_app(path: str | Path) -> App:  # noqa: D401
    """Load YAML file at *path* into an App."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    return build_app(data)


# --------------------------------------------------------------------------- #
# JSON Schema for YAML files
# --------------------------------------------------------------------------- #

_SUBNET = {
    "anyOf": [
        {"type": "string"},
        {
            "type": "object",
            "required": ["id"],
            "properties": {"id": {"type": "string"}, "availability_zone": {"type": "string"}},
            "additionalProperties": False,
        },
    ]
}

_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["stacks"],
    "properties": {
        "name": {"type": "string"},
        "stacks": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "vpc"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "description": {"type": "string"},
                    "vpc": {
                        "type": "object",
                        "required": ["id"],
                        "properties": {
                            "id": {"type": "string"},
                            "cidr": {"type": "string"},
                            "private_subnets": {"type": "array", "items": _SUBNET},
                            "public_subnets": {"type": "array", "items": _SUBNET},
                        },
                        "additionalProperties": False,
                    },
                    "security_groups": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["name", "group_id"],
                            "properties": {
                                "name": {"type": "string"},
                                "group_id": {"type": "string"},
                            },
                            "additionalProperties": False,
                        },
                    },
                    "clusters": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["id"],
                            "properties": {
                                "id": {"type": "string", "minLength": 1},
                                "engine_version": {"type": "string"},
                                "node_type": {"type": "string"},
                                "num_cache_nodes": {"type": "integer", "minimum": 1},
                                "parameter_group_family": {"type": "string"},
                                "preferred_maintenance_window": {"type": "string"},
                                "port": {"type": "integer", "minimum": 1, "maximum": 65535},
                                "security_groups": {"type": "array", "items": {"type": "string"}},
                                "outputs": {"type": "boolean"},
                                "ingress": {
                                    "type": "array",
                                    "items": {
                                        "type": "object",
                                        "required": ["peer"],
                                        "properties": {
                                            "peer": {"type": "string"},
                                            "port": {"type": "integer", "minimum": 1, "maximum": 65535},
                                        },
                                        "additionalProperties": False,
                                    },
                                },
                            },
                            "additionalProperties": False,
                        },
                    },
                },
                "additionalProperties": False,
            },
        },
    },
}
