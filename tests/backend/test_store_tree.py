import asyncio
import json

import pytest

import statestore_lib as statestore


def run(coro):
    return asyncio.run(coro)


def test_example_scenario(tmp_path):
    root_dir = tmp_path / 'state'
    root = run(statestore.initialize(str(root_dir), mode='persistent'))
    assert root.get_namespace() == 'global'

    svc = run(root.get_store('svc', 'delegate'))
    assert svc.get_namespace() == 'global.svc'
    cache = run(svc.get_store('cache', 'full'))
    assert cache.get_namespace() == 'global.svc.cache'

    run(cache.set('hits', 42))
    assert run(cache.get('hits')) == 42
    assert run(run(root.get_store('other', 'full')).get('hits')) is None

    doc = root_dir / 'global' / 'svc' / 'cache' / 'db.json'
    assert json.loads(doc.read_text()) == {'hits': 42}


def test_initialize_validates_and_creates_root(tmp_path):
    root_dir = tmp_path / 'deep' / 'state'
    run(statestore.initialize(str(root_dir)))
    assert (root_dir / 'global' / 'db.json').exists()
    assert not (root_dir / '_testFile').exists()
    assert not (root_dir / '_testDir').exists()


def test_memory_mode_touches_no_files(tmp_path):
    root_dir = tmp_path / 'state'
    root = run(statestore.initialize(str(root_dir), mode='memory'))
    store = run(root.get_store('svc'))
    run(store.set('k', 1))
    assert not root_dir.exists()


@pytest.mark.parametrize('value', [7, 2.5, True, 'str', 'grüße ☃', '\ud800', None, {'a': [1, {'b': None}], 'c': 'd'}])
def test_persistent_round_trip(tmp_path, value):
    root = run(statestore.initialize(str(tmp_path)))
    store = run(root.get_store('rt'))
    marker = object()
    run(store.set('k', value))
    assert run(store.get('k', marker)) == value


def test_isolation_between_relatives(tmp_path):
    root = run(statestore.initialize(str(tmp_path)))
    parent = run(root.get_store('parent', 'full'))
    a = run(parent.get_store('a', 'full'))
    b = run(parent.get_store('b', 'full'))
    a_child = run(a.get_store('child', 'full'))

    run(a.set('secret', 'only-a'))
    for other in (root, parent, b, a_child):
        assert run(other.get('secret')) is None

    run(parent.set('shared-name', 'parent'))
    assert run(a.get('shared-name')) is None


def test_same_path_instances_share_data(tmp_path):
    root = run(statestore.initialize(str(tmp_path)))
    one = run(root.get_store('shared', 'delegate'))
    two = run(root.get_store('shared'))
    assert one is not two

    run(one.set('k', {'v': 1}))
    assert run(two.get('k')) == {'v': 1}
    run(two.remove('k'))
    assert run(one.get('k')) is None


def test_same_path_through_different_parents(tmp_path):
    root = run(statestore.initialize(str(tmp_path)))
    via_root = run(run(root.get_store('svc', 'delegate')).get_store('cache'))
    via_module = run(run(statestore.get_store('svc', 'delegate')).get_store('cache'))
    run(via_root.set('x', 1))
    assert run(via_module.get('x')) == 1


def test_data_outlives_nodes(tmp_path):
    root = run(statestore.initialize(str(tmp_path)))
    store = run(root.get_store('durable'))
    run(store.set('k', 'v'))
    del store
    assert run(run(root.get_store('durable')).get('k')) == 'v'
    # a separate tree over the same root sees it too
    other_root = statestore.create_root(statestore.StoreConfig(root_path=str(tmp_path)))
    assert run(run(other_root.get_store('durable')).get('k')) == 'v'


def test_memory_mode_nodes_do_not_share(tmp_path):
    root = run(statestore.initialize(str(tmp_path), mode='memory'))
    one = run(root.get_store('shared'))
    two = run(root.get_store('shared'))
    run(one.set('k', 1))
    assert run(two.get('k')) is None


def test_full_store_raw_backend(tmp_path):
    root = run(statestore.initialize(str(tmp_path)))
    admin = run(root.get_store('admin', 'full'))
    admin.storage.write('raw', [1, 2])
    assert run(admin.get('raw')) == [1, 2]
    assert admin.storage.document_path == tmp_path / 'global' / 'admin' / 'db.json'


def test_yaml_documents(tmp_path):
    root = run(statestore.initialize(str(tmp_path), serializer='yaml'))
    store = run(root.get_store('cfg'))
    run(store.set('flags', {'a': True}))
    assert (tmp_path / 'global' / 'cfg' / 'db.yaml').exists()
    assert run(store.get('flags')) == {'a': True}
