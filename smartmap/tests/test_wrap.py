from collections.abc import Mapping

from smartmap.smart_map import SmartMap, create
from smartmap.wrap import LazySequence, wrap


def _as_dict(value):
    return {'wrapped': dict(value)}


def test_scalars_pass_through():
    for value in (1, 1.5, 'text', b'raw', None, True):
        assert wrap(value, _as_dict) is value


def test_mapping_goes_through_factory():
    assert wrap({'a': 1}, _as_dict) == {'wrapped': {'a': 1}}


def test_containers_are_not_rewrapped(users_config):
    sm = create(users_config, {'user/id': 1})
    assert wrap(sm, _as_dict) is sm


def test_sequence_wraps_lazily():
    calls = []

    def factory(value):
        calls.append(value)
        return dict(value)

    seq = wrap([{'a': 1}, 2, {'b': 3}], factory)

    assert isinstance(seq, LazySequence)
    assert calls == []
    assert seq[0] == {'a': 1}
    assert calls == [{'a': 1}]
    assert len(seq) == 3


def test_lazy_sequence_is_restartable_and_sliceable():
    seq = wrap((1, {'a': 1}, 3), _as_dict)

    assert list(seq) == [1, {'wrapped': {'a': 1}}, 3]
    assert list(seq) == [1, {'wrapped': {'a': 1}}, 3]
    assert isinstance(seq[1:], LazySequence)
    assert list(seq[1:]) == [{'wrapped': {'a': 1}}, 3]
    assert seq[-1] == 3


def test_lazy_sequence_equality_and_hash():
    seq = LazySequence((1, 2, 3), lambda x: x * 10)

    assert seq == [10, 20, 30]
    assert seq == (10, 20, 30)
    assert seq != [10, 20]
    assert seq != 'abc'
    assert hash(seq) == hash((10, 20, 30))


def test_nested_sequences_are_wrapped():
    seq = wrap([[{'a': 1}]], _as_dict)
    inner = seq[0]

    assert isinstance(inner, LazySequence)
    assert inner[0] == {'wrapped': {'a': 1}}


def test_sets_are_wrapped_eagerly():
    wrapped = wrap({1, 2, (3, 4)}, _as_dict)

    assert isinstance(wrapped, set)
    assert any(isinstance(item, LazySequence) for item in wrapped)
    assert wrapped == {1, 2, LazySequence((3, 4), lambda x: x)}
    assert isinstance(wrap(frozenset({1}), _as_dict), frozenset)


def test_wrapping_a_set_twice_gives_distinct_equal_sets():
    value = {1, 2, 3}
    first, second = wrap(value, _as_dict), wrap(value, _as_dict)

    assert first == second
    assert first is not second
    assert first is not value


def test_nested_maps_become_smart_maps_sharing_config(users_config):
    sm = create(users_config, {'user/id': 1, 'nested': {'user/id': 2}})

    nested = sm['nested']

    assert isinstance(nested, SmartMap)
    assert isinstance(nested, Mapping)
    assert nested.env.config is sm.env.config
    assert nested.env.cell is not sm.env.cell
    assert nested['user/name'] == 'grace'
    # Resolution inside the nested map stays in the nested cache
    assert 'user/name' not in sm
    assert sm.to_dict()['nested'] == {'user/id': 2}


def test_wrappers_are_rebuilt_on_every_access(users_config):
    sm = create(users_config, {'nested': {'a': 1}, 'items': [1, 2]})

    assert sm['nested'] is not sm['nested']
    assert sm['nested'] == sm['nested']
    assert sm['items'] is not sm['items']
    assert sm['items'] == sm['items']
