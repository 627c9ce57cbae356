from __future__ import annotations

"""ElastiCache (Redis) cluster construct.

Composes four records into one unit::

    subnet group ─┐
    security group ─┼─▶ cache cluster
    parameter group ┘   (optional)

The build order is declared as a :class:`~stackette.core.plan.BuildPlan`,
so the cluster can only be built once the records it references exist.
"""

from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from stackette.core.construct import Construct
from stackette.core.plan import BuildPlan, BuildStep
from stackette.ec2.peer import CidrPeer, Port, SecurityGroupPeer
from stackette.ec2.security_group import (
    Borrowed,
    ISecurityGroup,
    Owned,
    SecurityGroup,
    SecurityGroupBinding,
)
from stackette.ec2.vpc import Vpc
from stackette.elasticache.resources import CfnCacheCluster, CfnParameterGroup, CfnSubnetGroup
from stackette.utils.logging import log

__all__ = [
    "ClusterProps",
    "ElastiCacheCluster",
    "ENGINE",
    "DEFAULT_NODE_TYPE",
    "DEFAULT_ENGINE_VERSION",
    "DEFAULT_NUM_CACHE_NODES",
    "DEFAULT_PORT",
]

ENGINE = "redis"
DEFAULT_NODE_TYPE = "cache.t3.micro"
DEFAULT_ENGINE_VERSION = "6.x"
DEFAULT_NUM_CACHE_NODES = 1
DEFAULT_PORT = 6379


class ClusterProps(BaseModel):
    """Configuration of an :class:`ElastiCacheCluster`.

    Attributes:
        vpc: Network the cluster is placed in (its private subnets are used).
        engine_version: Defaults to ``6.x``.
        node_type: Defaults to ``cache.t3.micro``.
        num_cache_nodes: Defaults to 1.
        parameter_group_family: When set, a parameter group of this family is created.
        security_groups: When non-empty, the first group is used instead of a new one.
        preferred_maintenance_window: e.g. ``sun:05:00-sun:06:00``.
        port: Port the cluster listens on; left to the service default when unset.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    vpc: Vpc
    engine_version: Optional[str] = None
    node_type: Optional[str] = None
    num_cache_nodes: Optional[int] = Field(default=None, ge=1)
    parameter_group_family: Optional[str] = None
    security_groups: Tuple[ISecurityGroup, ...] = ()
    preferred_maintenance_window: Optional[str] = None
    port: Optional[int] = Field(default=None, ge=1, le=65535)


class ElastiCacheCluster(Construct):
    def __init__(self, scope: Construct, id: str, props: ClusterProps | None = None, **kwargs: Any) -> None:
        if props is None:
            props = ClusterProps(**kwargs)
        elif kwargs:
            raise TypeError("Pass either props or keyword arguments, not both")
        if not props.vpc.private_subnets:
            raise ValueError(f"VPC '{props.vpc.vpc_id}' has no private subnets to place cluster '{id}' in")

        super().__init__(scope, id)
        self.props = props

        plan = BuildPlan(
            [
                BuildStep("subnet_group", self._build_subnet_group),
                BuildStep("security_group", self._bind_security_group),
                BuildStep("parameter_group", self._build_parameter_group),
                BuildStep(
                    "cluster",
                    self._build_cluster,
                    requires=("subnet_group", "security_group", "parameter_group"),
                ),
            ]
        )
        built = plan.run()

        self.subnet_group: CfnSubnetGroup = built["subnet_group"]
        self.security_group_binding: SecurityGroupBinding = built["security_group"]
        self.parameter_group: CfnParameterGroup | None = built["parameter_group"]
        self.cluster: CfnCacheCluster = built["cluster"]

    # ------------------------------------------------------------------ #
    # Build steps
    # ------------------------------------------------------------------ #

    def _build_subnet_group(self, built: Mapping[str, Any]) -> CfnSubnetGroup:
        return CfnSubnetGroup(
            self,
            "SubnetGroup",
            description="Subnet group for ElastiCache cluster",
            subnet_ids=self.props.vpc.private_subnet_ids,
        )

    def _bind_security_group(self, built: Mapping[str, Any]) -> SecurityGroupBinding:
        if self.props.security_groups:
            log.debug("%s: using caller supplied security group %s", self.path, self.props.security_groups[0])
            return Borrowed(self.props.security_groups[0])
        return Owned(
            SecurityGroup(
                self,
                "SecurityGroup",
                vpc=self.props.vpc,
                description="Security group for ElastiCache cluster",
                allow_all_outbound=True,
            )
        )

    def _build_parameter_group(self, built: Mapping[str, Any]) -> CfnParameterGroup | None:
        if not self.props.parameter_group_family:
            return None
        return CfnParameterGroup(
            self,
            "ParameterGroup",
            cache_parameter_group_family=self.props.parameter_group_family,
            description="Parameter group for ElastiCache cluster",
        )

    def _build_cluster(self, built: Mapping[str, Any]) -> CfnCacheCluster:
        props = self.props
        parameter_group: CfnParameterGroup | None = built["parameter_group"]
        binding: SecurityGroupBinding = built["security_group"]

        return CfnCacheCluster(
            self,
            "Resource",
            engine=ENGINE,
            cache_node_type=props.node_type if props.node_type is not None else DEFAULT_NODE_TYPE,
            num_cache_nodes=props.num_cache_nodes if props.num_cache_nodes is not None else DEFAULT_NUM_CACHE_NODES,
            engine_version=props.engine_version if props.engine_version is not None else DEFAULT_ENGINE_VERSION,
            vpc_security_group_ids=[binding.group.security_group_id],
            cache_subnet_group_name=built["subnet_group"].ref,
            cache_parameter_group_name=parameter_group.ref if parameter_group is not None else None,
            preferred_maintenance_window=props.preferred_maintenance_window or None,
            port=props.port or None,
        )

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def security_group(self) -> ISecurityGroup:
        return self.security_group_binding.group

    @property
    def owns_security_group(self) -> bool:
        return isinstance(self.security_group_binding, Owned)

    def allow_ingress_from(self, peer: CidrPeer | SecurityGroupPeer, port: int | None = None) -> None:
        """Allow incoming connections on *port* (the default Redis port when omitted)."""
        self.security_group.add_ingress_rule(
            peer,
            Port.tcp(port if port is not None else DEFAULT_PORT),
            "Allow inbound Redis traffic",
        )

    @property
    def cluster_endpoint(self) -> Any:
        """Return the cluster endpoint address."""
        return self.cluster.attr_redis_endpoint_address

    @property
    def cluster_port(self) -> Any:
        """Return the cluster endpoint port."""
        return self.cluster.attr_redis_endpoint_port
