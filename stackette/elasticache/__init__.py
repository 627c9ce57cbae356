"""ElastiCache records and the cache cluster construct."""

from .resources import CfnSubnetGroup, CfnParameterGroup, CfnCacheCluster
from .cluster import (
    ClusterProps,
    ElastiCacheCluster,
    ENGINE,
    DEFAULT_NODE_TYPE,
    DEFAULT_ENGINE_VERSION,
    DEFAULT_NUM_CACHE_NODES,
    DEFAULT_PORT,
)

__all__ = [
    "CfnSubnetGroup",
    "CfnParameterGroup",
    "CfnCacheCluster",
    "ClusterProps",
    "ElastiCacheCluster",
    "ENGINE",
    "DEFAULT_NODE_TYPE",
    "DEFAULT_ENGINE_VERSION",
    "DEFAULT_NUM_CACHE_NODES",
    "DEFAULT_PORT",
]
