import threading

from smartmap.cell import CacheCell


def test_deref_returns_copy_of_seed():
    seed = {'a': 1}
    cell = CacheCell(seed)
    seed['b'] = 2

    assert cell.deref() == {'a': 1}


def test_swap_installs_new_tree_and_keeps_old_snapshot():
    cell = CacheCell({'a': 1})
    before = cell.deref()

    after = cell.swap(lambda tree, k, v: {**tree, k: v}, 'b', 2)

    assert after == {'a': 1, 'b': 2}
    assert cell.deref() is after
    assert before == {'a': 1}


def test_compare_and_set_fails_on_stale_expectation():
    cell = CacheCell({'a': 1})
    stale = cell.deref()
    cell.compare_and_set(stale, {'a': 2})

    assert not cell.compare_and_set(stale, {'a': 3})
    assert cell.deref() == {'a': 2}
    assert cell.compare_and_set(cell.deref(), {'a': 3})
    assert cell.deref() == {'a': 3}


def test_swap_retries_on_conflict():
    cell = CacheCell({'n': 0})
    calls = [0]

    def interfering(tree):
        calls[0] += 1
        if calls[0] == 1:
            # Simulate another writer winning the race
            cell.compare_and_set(cell.deref(), {'n': 10})
        return {'n': tree['n'] + 1}

    assert cell.swap(interfering) == {'n': 11}
    assert calls[0] == 2


def test_concurrent_swaps_do_not_lose_updates():
    cell = CacheCell({})
    n_threads, n_keys = 8, 200

    def writer(idx):
        for i in range(n_keys):
            cell.swap(lambda tree, k: {**tree, k: True}, (idx, i))

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cell.deref()) == n_threads * n_keys


def test_meta_defaults_to_empty_and_can_be_set():
    cell = CacheCell({'a': 1})
    assert dict(cell.meta) == {}

    cell.set_meta({'source': 'test'})
    assert dict(cell.meta) == {'source': 'test'}

    cell.set_meta(None)
    assert dict(cell.meta) == {}


def test_updates_only_go_through_compare_and_set():
    """There is no unconditional overwrite; a writer holding a stale tree always loses."""
    cell = CacheCell({'a': 1})
    stale = cell.deref()
    cell.swap(lambda tree: {**tree, 'b': 2})

    assert not hasattr(cell, 'reset')
    assert not cell.compare_and_set(stale, {})
    assert cell.deref() == {'a': 1, 'b': 2}
