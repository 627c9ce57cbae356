"""Stackette: tiny, type-safe declarative resource composition.

Main components:
* `App` / `Stack`: roots of the construct tree, rendered into templates
* `CfnResource`: a single declarative resource record
* `ElastiCacheCluster`: subnet group + security group + parameter group + cache cluster
* `Vpc`, `Peer`, `Port`: network placement and access rules
"""

# Version info
__version__ = "0.1.0"

# Core components
from stackette.core.construct import Construct
from stackette.core.node import CfnResource
from stackette.core.stack import App, Stack, CfnOutput
from stackette.core.tokens import Ref, GetAtt
from stackette.core.plan import BuildPlan, BuildStep

# Network
from stackette.ec2 import Vpc, Subnet, Peer, Port, SecurityGroup

# Cache
from stackette.elasticache import ClusterProps, ElastiCacheCluster

# Utility re-exports
from stackette.utils.ids import snake_case, logical_id

# Export all important symbols
__all__ = [
    # Core classes
    "Construct",
    "CfnResource",
    "App",
    "Stack",
    "CfnOutput",
    "Ref",
    "GetAtt",
    "BuildPlan",
    "BuildStep",

    # Network
    "Vpc",
    "Subnet",
    "Peer",
    "Port",
    "SecurityGroup",

    # Cache
    "ClusterProps",
    "ElastiCacheCluster",

    # Functions
    "snake_case",
    "logical_id",
]
