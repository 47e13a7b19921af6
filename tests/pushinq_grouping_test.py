import suite
from dgen import from_schema
from pushinq import P, Enumerable, Group, comparers

test = suite.test
assert_that = suite.assert_that
Probe = suite.Probe

order_schema = {
    'id': {'_qen_provider': 'sequence'},
    'customer': {'_qen_provider': 'choice', 'from': ['acme', 'globex', 'initech']},
    'amount': ('pyint', {'min_value': 1, 'max_value': 500}),
}


@test("group_by groups in order of first key appearance")
def test_group_by_basic():
    groups = P(['apple', 'bob', 'avocado', 'cat', 'banana']).group.group_by(lambda w: w[0]).to.list()
    assert_that([g.key for g in groups] == ['a', 'b', 'c'], f"keys {[g.key for g in groups]}")
    assert_that(groups[0].items == ['apple', 'avocado'], f"got {groups[0].items}")
    assert_that(all(isinstance(g, Group) for g in groups), "elements should be groups")


@test("group_by accepts unhashable keys")
def test_group_by_unhashable_keys():
    rows = P([{'tags': ['x']}, {'tags': ['y']}, {'tags': ['x']}])
    groups = rows.group.group_by(lambda r: r['tags']).to.list()
    assert_that(len(groups) == 2 and len(groups[0]) == 2, f"got {groups}")


@test("group_by with a custom key comparer")
def test_group_by_comparer():
    groups = P(['A', 'b', 'a', 'B']).group.group_by(lambda s: s, comparers.by_field(str.lower)).to.list()
    assert_that([(g.key, g.items) for g in groups] == [('A', ['A', 'a']), ('b', ['b', 'B'])], f"got {groups}")


@test("group_by totals match the source")
def test_group_by_records():
    orders = from_schema(order_schema, seed=5).records(50)
    groups = P(orders).group.group_by(lambda o: o['customer'])
    assert_that(groups.to.count() <= 3, "at most three customers")
    total = groups.select(lambda g: sum(o['amount'] for o in g)).stats.sum_int(lambda x: x)
    assert_that(total == sum(o['amount'] for o in orders), "grouping must not lose or duplicate orders")


@test("group_by on absent source or without a selector is empty")
def test_group_by_empty():
    assert_that(Enumerable(None).group.group_by(len).to.list() == [], "absent source")
    assert_that(P([1]).group.group_by(None).to.list() == [], "missing selector")


@test("group_by is lazy and stops emitting groups early")
def test_group_by_lazy():
    probe = Probe([1, 2, 3, 4])
    groups = Enumerable(probe).group.group_by(lambda x: x % 2)
    assert_that(probe.runs == 0, "nothing runs before a terminal")
    first = groups.to.first_or_none()
    assert_that(first.key == 1 and first.items == [1, 3], f"got {first}")


if __name__ == "__main__":
    suite.run(title="pushinq grouping test")
