# File: tests/test_swarm.py
import pytest
from woodpecker.common.errors import SwarmError, SwarmPolicyRejected
from woodpecker.common.swarm import MAX_POOL_SIZE, Concurrent, PagePolicy, Sequential, pool_size


@pytest.mark.parametrize(
    "count,limit,expected",
    [
        (1, MAX_POOL_SIZE, 1),
        (10, MAX_POOL_SIZE, 10),
        (16, MAX_POOL_SIZE, 16),
        (40, MAX_POOL_SIZE, 16),
        (40, 4, 4),
        (3, 4, 3),
        # a limit above the hard cap cannot raise it
        (40, 64, 16),
    ],
)
def test_pool_size(count, limit, expected):
    assert pool_size(Concurrent(count=count, page_size=10), limit) == expected


@pytest.mark.parametrize("cls", [Sequential, Concurrent])
@pytest.mark.parametrize("count,page_size", [(0, 10), (-1, 10), (3, 0), (True, 10), (2.5, 10)])
def test_swarm_rejects_non_positive(cls, count, page_size):
    with pytest.raises(ValueError):
        cls(count=count, page_size=page_size)


def test_swarm_values_are_immutable_and_comparable():
    swarm = Concurrent(count=4, page_size=30)
    assert swarm == Concurrent(4, 30)
    assert swarm != Sequential(4, 30)
    with pytest.raises(AttributeError):
        swarm.count = 5  # type: ignore[misc]


def test_page_policy():
    policy = PagePolicy(max_page=3, max_page_size=50)
    policy.check(3, 50)
    with pytest.raises(SwarmPolicyRejected) as excinfo:
        policy.check(4, 10)
    assert excinfo.value.page == 4
    assert isinstance(excinfo.value, SwarmError)
    with pytest.raises(SwarmPolicyRejected):
        policy.check(1, 51)


def test_empty_policy_allows_everything():
    PagePolicy().check(10_000, 10_000)
