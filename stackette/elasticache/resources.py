from __future__ import annotations

"""Records mirroring the ElastiCache resource schema.

Keyword arguments are snake_case; they are stored under the schema's
camelCase field names.  Arguments left at ``None`` are not stored at all.
"""

from typing import Any, Dict, List, Optional, Sequence

from stackette.core.construct import Construct
from stackette.core.node import CfnResource
from stackette.core.tokens import GetAtt

__all__ = ["CfnSubnetGroup", "CfnParameterGroup", "CfnCacheCluster"]


class CfnSubnetGroup(CfnResource):  # noqa: D101
    resource_type = "AWS::ElastiCache::SubnetGroup"

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        description: str,
        subnet_ids: Sequence[str],
        cache_subnet_group_name: Optional[str] = None,
    ) -> None:
        super().__init__(
            scope,
            id,
            properties={
                "description": description,
                "subnetIds": list(subnet_ids),
                "cacheSubnetGroupName": cache_subnet_group_name,
            },
        )


class CfnParameterGroup(CfnResource):  # noqa: D101
    resource_type = "AWS::ElastiCache::ParameterGroup"
    verbatim_properties = frozenset({"properties"})

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        cache_parameter_group_family: str,
        description: str,
        properties: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(
            scope,
            id,
            properties={
                "cacheParameterGroupFamily": cache_parameter_group_family,
                "description": description,
                "properties": dict(properties) if properties else None,
            },
        )


class CfnCacheCluster(CfnResource):
    """``AWS::ElastiCache::CacheCluster``.

    The endpoint attributes are only meaningful once the cluster has been
    provisioned; until then they are unresolved tokens.
    """

    resource_type = "AWS::ElastiCache::CacheCluster"

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        cache_node_type: str,
        engine: str,
        num_cache_nodes: int,
        engine_version: Optional[str] = None,
        vpc_security_group_ids: Optional[List[Any]] = None,
        cache_subnet_group_name: Any = None,
        cache_parameter_group_name: Any = None,
        preferred_maintenance_window: Optional[str] = None,
        port: Optional[int] = None,
        cluster_name: Optional[str] = None,
    ) -> None:
        super().__init__(
            scope,
            id,
            properties={
                "engine": engine,
                "cacheNodeType": cache_node_type,
                "numCacheNodes": num_cache_nodes,
                "engineVersion": engine_version,
                "vpcSecurityGroupIds": vpc_security_group_ids,
                "cacheSubnetGroupName": cache_subnet_group_name,
                "cacheParameterGroupName": cache_parameter_group_name,
                "preferredMaintenanceWindow": preferred_maintenance_window,
                "port": port,
                "clusterName": cluster_name,
            },
        )

    # -------------------------------------------------- #
    @property
    def attr_redis_endpoint_address(self) -> GetAtt:
        return self.get_att("RedisEndpoint.Address")

    @property
    def attr_redis_endpoint_port(self) -> GetAtt:
        return self.get_att("RedisEndpoint.Port")

    @property
    def attr_configuration_endpoint_address(self) -> GetAtt:
        return self.get_att("ConfigurationEndpoint.Address")

    @property
    def attr_configuration_endpoint_port(self) -> GetAtt:
        return self.get_att("ConfigurationEndpoint.Port")
