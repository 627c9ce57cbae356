import pytest
from pydantic import ValidationError

from stackette import ClusterProps, ElastiCacheCluster, GetAtt, Peer, SecurityGroup, Stack, Vpc
from stackette.ec2 import Borrowed, CfnSecurityGroupIngress, Owned

vpc = Vpc("vpc-1", private_subnets=["subnet-a", "subnet-b"])

REQUIRED = {
    "engine",
    "cacheNodeType",
    "numCacheNodes",
    "engineVersion",
    "cacheSubnetGroupName",
    "vpcSecurityGroupIds",
}


def _security_groups(stack):
    return [r for r in stack.resources() if r.resource_type == "AWS::EC2::SecurityGroup"]


def test_defaults_produce_only_required_fields():
    stack = Stack(None, "S")
    cache = ElastiCacheCluster(stack, "Cache", vpc=vpc)
    props = cache.cluster.properties

    assert set(props) == REQUIRED
    assert props["engine"] == "redis"
    assert props["cacheNodeType"] == "cache.t3.micro"
    assert props["numCacheNodes"] == 1
    assert props["engineVersion"] == "6.x"
    assert props["cacheSubnetGroupName"] == cache.subnet_group.ref
    assert props["vpcSecurityGroupIds"] == [cache.security_group.security_group_id]
    assert cache.parameter_group is None
    assert "ParameterGroup" not in cache.children


def test_subnet_group_keeps_private_subnet_order():
    cache = ElastiCacheCluster(Stack(None, "S"), "Cache", vpc=Vpc("vpc-1", private_subnets=["s-2", "s-1", "s-3"]))
    assert cache.subnet_group.properties == {
        "description": "Subnet group for ElastiCache cluster",
        "subnetIds": ["s-2", "s-1", "s-3"],
    }


def test_scenario_num_cache_nodes():
    cache = ElastiCacheCluster(Stack(None, "S"), "Cache", vpc=vpc, num_cache_nodes=3)
    props = cache.cluster.properties
    assert props["numCacheNodes"] == 3
    assert props["cacheNodeType"] == "cache.t3.micro"
    assert props["engineVersion"] == "6.x"
    assert "port" not in props
    assert "cacheParameterGroupName" not in props


def test_scenario_parameter_group_and_port():
    cache = ElastiCacheCluster(
        Stack(None, "S"), "Cache", vpc=vpc, parameter_group_family="redis6.x", port=6380
    )
    props = cache.cluster.properties
    assert props["port"] == 6380
    assert props["cacheParameterGroupName"] == cache.parameter_group.ref
    assert cache.parameter_group.logical_id != cache.cluster.logical_id
    assert cache.parameter_group.properties == {
        "cacheParameterGroupFamily": "redis6.x",
        "description": "Parameter group for ElastiCache cluster",
    }


def test_all_options_supplied():
    props = ClusterProps(
        vpc=vpc,
        engine_version="7.0",
        node_type="cache.r6g.large",
        preferred_maintenance_window="sun:05:00-sun:06:00",
    )
    cache = ElastiCacheCluster(Stack(None, "S"), "Cache", props)
    rendered = cache.cluster.properties
    assert rendered["engineVersion"] == "7.0"
    assert rendered["cacheNodeType"] == "cache.r6g.large"
    assert rendered["preferredMaintenanceWindow"] == "sun:05:00-sun:06:00"


def test_empty_optional_strings_are_not_supplied():
    cache = ElastiCacheCluster(
        Stack(None, "S"), "Cache", vpc=vpc, parameter_group_family="", preferred_maintenance_window=""
    )
    assert set(cache.cluster.properties) == REQUIRED
    assert cache.parameter_group is None


def test_new_security_group_when_none_supplied():
    stack = Stack(None, "S")
    cache = ElastiCacheCluster(stack, "Cache", vpc=vpc, security_groups=[])

    assert cache.owns_security_group
    assert isinstance(cache.security_group_binding, Owned)
    (sg,) = _security_groups(stack)
    assert sg is cache.security_group
    assert sg.properties["groupDescription"] == "Security group for ElastiCache cluster"
    assert sg.properties["vpcId"] == "vpc-1"
    assert sg.properties["securityGroupEgress"][0]["ipProtocol"] == "-1"


def test_first_supplied_security_group_is_used():
    stack = Stack(None, "S")
    first = SecurityGroup.from_security_group_id(stack, "First", "sg-111")
    second = SecurityGroup.from_security_group_id(stack, "Second", "sg-222")
    cache = ElastiCacheCluster(stack, "Cache", vpc=vpc, security_groups=[first, second])

    assert not cache.owns_security_group
    assert cache.security_group_binding == Borrowed(first)
    assert cache.cluster.properties["vpcSecurityGroupIds"] == ["sg-111"]
    assert _security_groups(stack) == []


def test_allow_ingress_defaults_to_redis_port():
    cache = ElastiCacheCluster(Stack(None, "S"), "Cache", vpc=vpc)
    cache.allow_ingress_from(Peer.ipv4("10.0.0.0/16"))
    cache.allow_ingress_from(Peer.ipv4("10.9.0.0/16"), 6380)

    rules = cache.security_group.ingress_rules
    assert [(r["cidrIp"], r["fromPort"], r["toPort"]) for r in rules] == [
        ("10.0.0.0/16", 6379, 6379),
        ("10.9.0.0/16", 6380, 6380),
    ]
    assert all(r["description"] == "Allow inbound Redis traffic" for r in rules)


def test_allow_ingress_on_borrowed_caller_group():
    stack = Stack(None, "S")
    caller_sg = SecurityGroup(stack, "Shared", vpc=vpc)
    cache = ElastiCacheCluster(stack, "Cache", vpc=vpc, security_groups=[caller_sg])
    cache.allow_ingress_from(Peer.any_ipv4())

    assert caller_sg.ingress_rules[0]["fromPort"] == 6379
    assert _security_groups(stack) == [caller_sg]


def test_allow_ingress_on_imported_group_creates_rule_resource():
    stack = Stack(None, "S")
    imported = SecurityGroup.from_security_group_id(stack, "Existing", "sg-123")
    cache = ElastiCacheCluster(stack, "Cache", vpc=vpc, security_groups=[imported])
    cache.allow_ingress_from(Peer.ipv4("10.0.0.0/16"), 6390)

    (rule,) = [r for r in stack.resources() if isinstance(r, CfnSecurityGroupIngress)]
    assert rule.properties["groupId"] == "sg-123"
    assert rule.properties["fromPort"] == 6390


def test_endpoint_accessors():
    cache = ElastiCacheCluster(Stack(None, "S"), "Cache", vpc=vpc)
    assert cache.cluster_endpoint == GetAtt(cache.cluster.logical_id, "RedisEndpoint.Address")
    assert cache.cluster_port == GetAtt(cache.cluster.logical_id, "RedisEndpoint.Port")


def test_rendered_template():
    stack = Stack(None, "S")
    cache = ElastiCacheCluster(stack, "Cache", vpc=vpc, parameter_group_family="redis6.x")
    resources = stack.to_template()["Resources"]

    assert list(resources)[-1] == cache.cluster.logical_id
    rendered = resources[cache.cluster.logical_id]
    assert rendered["Type"] == "AWS::ElastiCache::CacheCluster"
    assert rendered["Properties"]["CacheSubnetGroupName"] == {"Ref": cache.subnet_group.logical_id}
    assert rendered["Properties"]["CacheParameterGroupName"] == {"Ref": cache.parameter_group.logical_id}
    assert rendered["Properties"]["VpcSecurityGroupIds"] == [
        {"Fn::GetAtt": [cache.security_group.logical_id, "GroupId"]}
    ]


def test_no_private_subnets_rejected():
    stack = Stack(None, "S")
    with pytest.raises(ValueError, match="no private subnets"):
        ElastiCacheCluster(stack, "Cache", vpc=Vpc("vpc-empty", public_subnets=["subnet-p"]))
    assert "Cache" not in stack.children


def test_invalid_props():
    with pytest.raises(ValidationError):
        ClusterProps(vpc=vpc, num_cache_nodes=0)
    with pytest.raises(ValidationError):
        ClusterProps(vpc=vpc, port=70000)
    with pytest.raises(TypeError):
        ElastiCacheCluster(Stack(None, "S"), "Cache", ClusterProps(vpc=vpc), port=6380)


def test_props_are_frozen():
    props = ClusterProps(vpc=vpc)
    with pytest.raises(ValidationError):
        props.port = 1
