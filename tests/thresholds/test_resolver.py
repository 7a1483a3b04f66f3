import pytest
from diffcov.core.config import ViolationsConfig
from diffcov.core.errors import ConfigurationConflictError, DiffCoverageError, InvalidThresholdError
from diffcov.thresholds.resolver import DefaultThresholdResolver
from diffcov.thresholds.types import ThresholdSet
from hypothesis import given
from hypothesis import strategies as st


@pytest.fixture
def resolver() -> DefaultThresholdResolver:
    return DefaultThresholdResolver()


# ----------------------------
# Happy paths
# ----------------------------


def test_nothing_configured_yields_disabled_thresholds(resolver):
    ts = resolver.resolve(0.0)
    assert ts == ThresholdSet(0.0, 0.0, 0.0, False)
    assert not ts.is_enforced()


def test_per_metric_values_pass_through(resolver):
    ts = resolver.resolve(0.0, min_lines=0.7, min_branches=0.0, min_instructions=0.0)
    assert ts.min_lines == 0.7
    assert ts.min_branches == 0.0
    assert ts.min_instructions == 0.0


def test_aggregate_fans_out_to_every_metric(resolver):
    ts = resolver.resolve(0.6, fail_on_violation=True)
    assert ts == ThresholdSet(min_lines=0.6, min_branches=0.6, min_instructions=0.6, fail_on_violation=True)


def test_fail_on_violation_is_propagated(resolver):
    assert resolver.resolve(0.0, min_branches=0.4, fail_on_violation=True).fail_on_violation is True
    assert resolver.resolve(0.0, min_branches=0.4, fail_on_violation=False).fail_on_violation is False


def test_resolve_violations_reads_config(resolver):
    cfg = ViolationsConfig(min_lines=0.5, min_instructions=0.9, fail_on_violation=True)
    ts = resolver.resolve_violations(cfg)
    assert ts == ThresholdSet(min_lines=0.5, min_branches=0.0, min_instructions=0.9, fail_on_violation=True)


# ----------------------------
# Conflicts
# ----------------------------


def test_aggregate_with_min_lines_conflicts(resolver):
    with pytest.raises(ConfigurationConflictError) as exc:
        resolver.resolve(0.8, min_lines=0.5)

    msg = str(exc.value)
    assert "minLines = 0.5" in msg
    assert "violations.minCoverage = 0.8" in msg
    assert exc.value.code == "configuration_conflict"


def test_conflict_lists_every_metric_in_fixed_order(resolver):
    with pytest.raises(ConfigurationConflictError) as exc:
        resolver.resolve(0.9, min_lines=0.1, min_branches=0.2, min_instructions=0.3)

    msg = str(exc.value)
    lines_at = msg.index("violations.minLines = 0.1")
    branches_at = msg.index("violations.minBranches = 0.2")
    instructions_at = msg.index("violations.minInstructions = 0.3")
    assert lines_at < branches_at < instructions_at
    assert exc.value.details == {
        "minCoverage": 0.9,
        "minLines": 0.1,
        "minBranches": 0.2,
        "minInstructions": 0.3,
    }


def test_conflict_omits_unset_metrics(resolver):
    with pytest.raises(ConfigurationConflictError) as exc:
        resolver.resolve(0.5, min_instructions=0.4)

    msg = str(exc.value)
    assert "violations.minInstructions = 0.4" in msg
    assert "violations.minLines" not in msg
    assert "violations.minBranches" not in msg


def test_conflict_is_a_diff_coverage_error(resolver):
    with pytest.raises(DiffCoverageError):
        resolver.resolve(0.5, min_branches=0.5)


# ----------------------------
# Range checks
# ----------------------------


@pytest.mark.parametrize(
    "kwargs, key",
    [
        ({"min_coverage": 1.5}, "minCoverage"),
        ({"min_coverage": 0.0, "min_lines": -0.5}, "minLines"),
        ({"min_coverage": 0.0, "min_branches": float("nan")}, "minBranches"),
        ({"min_coverage": 0.0, "min_instructions": 2.0}, "minInstructions"),
        ({"min_coverage": float("nan")}, "minCoverage"),
    ],
)
def test_out_of_range_threshold_rejected(resolver, kwargs, key):
    with pytest.raises(InvalidThresholdError) as exc:
        resolver.resolve(**kwargs)

    assert exc.value.code == "invalid_threshold"
    assert exc.value.details["key"] == key
    assert f"violations.{key}" in str(exc.value)


def test_out_of_range_direct_violations_config_rejected(resolver):
    with pytest.raises(InvalidThresholdError):
        resolver.resolve_violations(ViolationsConfig(min_lines=-0.5))


def test_range_bounds_are_inclusive(resolver):
    assert resolver.resolve(1.0).min_lines == 1.0
    assert resolver.resolve(0.0, min_lines=1.0).min_lines == 1.0


# ----------------------------
# Properties
# ----------------------------

_fraction = st.floats(min_value=0.0, max_value=1.0, allow_nan=False)


@given(_fraction, _fraction, _fraction, _fraction, st.booleans())
def test_conflict_iff_aggregate_and_metric_set(agg, lines, branches, instructions, fail):
    resolver = DefaultThresholdResolver()
    should_conflict = agg != 0.0 and (lines > 0.0 or branches > 0.0 or instructions > 0.0)

    if should_conflict:
        with pytest.raises(ConfigurationConflictError):
            resolver.resolve(
                agg,
                min_lines=lines,
                min_branches=branches,
                min_instructions=instructions,
                fail_on_violation=fail,
            )
        return

    ts = resolver.resolve(agg, min_lines=lines, min_branches=branches, min_instructions=instructions, fail_on_violation=fail)
    assert ts.fail_on_violation is fail
    if agg != 0.0:
        assert ts.min_lines == ts.min_branches == ts.min_instructions == agg
    else:
        assert (ts.min_lines, ts.min_branches, ts.min_instructions) == (lines, branches, instructions)


@given(_fraction, _fraction, _fraction, st.booleans())
def test_resolve_is_idempotent(lines, branches, instructions, fail):
    resolver = DefaultThresholdResolver()
    kwargs = {
        "min_lines": lines,
        "min_branches": branches,
        "min_instructions": instructions,
        "fail_on_violation": fail,
    }
    assert resolver.resolve(0.0, **kwargs) == resolver.resolve(0.0, **kwargs)
