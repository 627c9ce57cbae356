import pytest

from stackette.core.plan import BuildPlan, BuildStep


def test_requirements_run_first_regardless_of_declaration_order():
    calls = []

    def _make(name):
        def _fn(built):
            calls.append((name, sorted(built)))
            return name.upper()
        return _fn

    plan = BuildPlan([
        BuildStep("primary", _make("primary"), requires=("placement", "policy")),
        BuildStep("placement", _make("placement")),
        BuildStep("policy", _make("policy")),
    ])

    assert plan.order() == ["placement", "policy", "primary"]
    built = plan.run()
    assert built == {"placement": "PLACEMENT", "policy": "POLICY", "primary": "PRIMARY"}
    # primary saw both of its requirements
    assert calls[-1] == ("primary", ["placement", "policy"])


def test_skipped_step_maps_to_none():
    plan = BuildPlan([
        BuildStep("tuning", lambda built: None),
        BuildStep("primary", lambda built: built["tuning"] is None, requires=("tuning",)),
    ])
    built = plan.run()
    assert built["tuning"] is None
    assert built["primary"] is True


def test_unknown_requirement():
    with pytest.raises(ValueError, match="unknown step 'missing'"):
        BuildPlan([BuildStep("a", lambda b: 1, requires=("missing",))])


def test_cycle_rejected():
    with pytest.raises(ValueError, match="Cycle"):
        BuildPlan([
            BuildStep("a", lambda b: 1, requires=("b",)),
            BuildStep("b", lambda b: 1, requires=("a",)),
        ])


def test_duplicate_step_names():
    with pytest.raises(ValueError):
        BuildPlan([BuildStep("a", lambda b: 1), BuildStep("a", lambda b: 2)])
