"""Integration stack: a Redis cluster reachable from the VPC.

Run with ``python examples/cache_stack.py``; templates land in ``cdk.out``.
"""

from stackette import App, CfnOutput, ElastiCacheCluster, Peer, Stack, Vpc


class CacheStack(Stack):
    def __init__(self, scope: App, id: str):
        super().__init__(scope, id, description="stackette integration: ElastiCache cluster")

        vpc = Vpc(
            "vpc-0a1b2c3d",
            private_subnets=["subnet-0aaa1111", "subnet-0bbb2222"],
            cidr="10.0.0.0/16",
        )

        self.cache = ElastiCacheCluster(
            self,
            "Cache",
            vpc=vpc,
            num_cache_nodes=2,
            parameter_group_family="redis6.x",
            preferred_maintenance_window="sun:05:00-sun:06:00",
        )
        self.cache.allow_ingress_from(Peer.ipv4(vpc.cidr))

        CfnOutput(self, "CacheEndpoint", value=self.cache.cluster_endpoint)
        CfnOutput(self, "CachePort", value=self.cache.cluster_port)


if __name__ == "__main__":
    app = App(name="cache-integ", outdir="cdk.out")
    CacheStack(app, "elasticache-cluster-integ")
    app.synth()
