import suite
from collections import namedtuple
from dgen import from_schema
from pushinq import P, Enumerable, OrderedEnumerable, comparers

test = suite.test
assert_that = suite.assert_that
Probe = suite.Probe

Person = namedtuple('Person', ['name', 'age', 'city'])

people = [
    Person('alice', 25, 'nyc'),
    Person('bob', 30, 'la'),
    Person('charlie', 25, 'nyc'),
    Person('diana', 35, 'chicago'),
    Person('eve', 25, 'la'),
    Person('frank', 30, 'nyc'),
]

employee_schema = {
    'id': {'_qen_provider': 'sequence'},
    'dept': {'_qen_provider': 'choice', 'from': ['eng', 'ops', 'hr']},
    'level': ('pyint', {'min_value': 1, 'max_value': 3}),
}


@test("order_by sorts ascending by key")
def test_order_by():
    result = P([3, 1, 2]).order_by(lambda x: x).to.list()
    assert_that(result == [1, 2, 3], f"got {result}")


@test("order_by without a key sorts the elements themselves")
def test_order_by_identity():
    assert_that(P(['b', 'c', 'a']).order_by().to.list() == ['a', 'b', 'c'], "identity key")


@test("order_by_descending sorts descending")
def test_order_by_descending():
    result = P(people).order_by_descending(lambda p: p.age).select(lambda p: p.age).to.list()
    assert_that(result == [35, 30, 30, 25, 25, 25], f"got {result}")


@test("descending sort is still stable for ties")
def test_descending_stable():
    result = P(people).order_by_descending(lambda p: p.age).select(lambda p: p.name).to.list()
    assert_that(result == ['diana', 'bob', 'frank', 'alice', 'charlie', 'eve'], f"got {result}")


@test("then_by breaks ties in registration order")
def test_then_by():
    result = (P(people)
              .order_by(lambda p: p.age)
              .then_by_descending(lambda p: p.city)
              .select(lambda p: p.name)
              .to.list())
    # 25: nyc(alice, charlie), la(eve); 30: nyc(frank), la(bob); 35: diana
    assert_that(result == ['alice', 'charlie', 'eve', 'frank', 'bob', 'diana'], f"got {result}")


@test("full ties keep their input order")
def test_stability():
    result = P(people).order_by(lambda p: p.age).then_by(lambda p: p.city).select(lambda p: p.name).to.list()
    assert_that(result == ['eve', 'alice', 'charlie', 'bob', 'frank', 'diana'], f"got {result}")


@test("comparer functions drive the ordering")
def test_comparer_ordering():
    by_len = comparers.by_key(len)
    result = P(['ccc', 'a', 'bb', 'dd']).order_by(comparer=by_len).to.list()
    assert_that(result == ['a', 'bb', 'dd', 'ccc'], f"got {result}")
    keyed = P(['ccc', 'a', 'bb']).order_by(lambda s: s, comparer=comparers.reverse(comparers.natural)).to.list()
    assert_that(keyed == ['ccc', 'bb', 'a'], f"got {keyed}")


@test("adding sort levels does not touch the source")
def test_accumulation_is_free():
    probe = Probe([3, 1, 2])
    calls = []
    ordered = Enumerable(probe).order_by(lambda x: calls.append(x) or x).then_by(lambda x: -x)
    assert_that(isinstance(ordered, OrderedEnumerable), "should be ordered")
    assert_that(probe.runs == 0 and calls == [], "nothing should run before a terminal")


@test("key selectors run once per element per run")
def test_key_selector_calls():
    calls = []
    ordered = P([5, 3, 9, 1, 7]).order_by(lambda x: calls.append(x) or x)
    assert_that(ordered.to.list() == [1, 3, 5, 7, 9], "sorted")
    assert_that(len(calls) == 5, f"selector called {len(calls)} times")


@test("materializing twice is deterministic and re-runs the source")
def test_determinism():
    probe = Probe([4, 2, 4, 1])
    ordered = Enumerable(probe).order_by(lambda x: x % 2).then_by_descending(lambda x: x)
    first, second = ordered.to.list(), ordered.to.list()
    assert_that(first == second == [4, 4, 2, 1], f"got {first} / {second}")
    assert_that(probe.runs == 2, "no caching across runs")


@test("sorted output is a permutation of the input")
def test_permutation():
    rows = from_schema(employee_schema, seed=3).records(25)
    ordered = P(rows).order_by(lambda r: r['dept']).then_by_descending(lambda r: r['level']).to.list()
    assert_that(sorted(r['id'] for r in ordered) == sorted(r['id'] for r in rows), "same elements")
    keys = [(r['dept'], -r['level']) for r in ordered]
    assert_that(keys == sorted(keys), "rows should follow dept asc, level desc")


@test("empty and absent sources sort to nothing")
def test_order_empty():
    assert_that(P([]).order_by(lambda x: x).to.list() == [], "empty")
    assert_that(Enumerable(None).order_by(lambda x: x).then_by(lambda x: x).to.list() == [], "absent")


@test("take on a sorted sequence stops streaming early")
def test_sorted_take():
    assert_that(P([5, 4, 3, 2, 1]).order_by().take(2).to.list() == [1, 2], "two smallest")
    assert_that(P([5, 4, 3]).order_by().to.first_or_default() == 3, "first of sorted")
    assert_that(P([5, 4, 3]).order_by().to.last_or_default() == 5, "last of sorted")


@test("order_by on an ordered sequence re-sorts its sorted output")
def test_reorder():
    result = P(people).order_by(lambda p: p.city).order_by(lambda p: p.age).select(lambda p: p.name).to.list()
    assert_that(result == ['eve', 'alice', 'charlie', 'bob', 'frank', 'diana'], f"got {result}")


@test("single and count on ordered sequences skip the sort")
def test_order_terminals_skip_sort():
    calls = []
    ordered = P([2, 1]).order_by(lambda x: calls.append(x) or x)
    assert_that(ordered.to.count() == 2, "count")
    assert_that(ordered.to.single().outcome.name == 'MULTIPLE_ELEMENTS', "two elements")
    assert_that(ordered.to.any(), "any")
    assert_that(calls == [], "the sort key should never have been evaluated")
    assert_that(P([7]).order_by().to.single().value == 7, "single element")


if __name__ == "__main__":
    suite.run(title="pushinq ordering test")
