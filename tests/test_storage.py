import os
import json
import tempfile
import shutil
import logging

from radar_launcher.storage import ConfigRegistry
from radar_launcher.models import (
    JsonResource,
    Config,
    LootFilter,
    LootFilterManager,
    Watchlist,
    WatchlistEntry,
    AIFactionManager,
    RESOURCE_KINDS,
)


def make_tmp_root():
    return tempfile.mkdtemp(prefix='radar_tests_')


def write_raw(root, kind, text):
    with open(os.path.join(root, kind.FILE_NAME), 'w', encoding='utf-8') as f:
        f.write(text)


def test_missing_files_fall_back_to_defaults():
    root = make_tmp_root()
    try:
        registry = ConfigRegistry(root, logging.getLogger('t'))
        for kind in RESOURCE_KINDS:
            instance = registry.load_or_default(kind)
            assert isinstance(instance, kind)
            assert instance == kind()
        assert os.listdir(root) == []
    finally:
        shutil.rmtree(root)


def test_malformed_files_fall_back_to_defaults():
    root = make_tmp_root()
    try:
        registry = ConfigRegistry(root, logging.getLogger('t'))
        for kind in RESOURCE_KINDS:
            write_raw(root, kind, '{"not": json')
            instance = registry.load_or_default(kind)
            assert isinstance(instance, kind)
            assert instance == kind()
    finally:
        shutil.rmtree(root)


def test_schema_mismatch_falls_back_to_defaults():
    root = make_tmp_root()
    try:
        registry = ConfigRegistry(root, logging.getLogger('t'))
        write_raw(root, Config, json.dumps({'logging': 'yes'}))
        write_raw(root, LootFilterManager, json.dumps({'filters': [{'label': 'x'}]}))
        write_raw(root, Watchlist, json.dumps({'profiles': []}))
        write_raw(root, AIFactionManager, json.dumps([{'name': 'Scavs'}]))
        resources = registry.load_all()
        assert resources.config == Config()
        assert resources.loot_filters == LootFilterManager()
        assert resources.watchlist == Watchlist()
        assert resources.ai_factions == AIFactionManager()
    finally:
        shutil.rmtree(root)


def test_try_load_reports_failure_without_raising():
    root = make_tmp_root()
    try:
        ok, instance = Config.try_load(os.path.join(root, 'missing.json'))
        assert ok is False
        assert instance is None
    finally:
        shutil.rmtree(root)


def test_valid_files_are_loaded():
    root = make_tmp_root()
    try:
        write_raw(root, Config, json.dumps({'logging': True, 'ui_scale': 125}))
        write_raw(root, AIFactionManager, json.dumps({
            'factions': [{'name': 'Rogues', 'names': ['Knight', 'Birdeye']}],
        }))
        registry = ConfigRegistry(root, logging.getLogger('t'))
        resources = registry.load_all()
        assert resources.config.logging is True
        assert resources.config.ui_scale == 125
        assert resources.ai_factions.faction_for('Knight') == 'Rogues'
        assert resources.ai_factions.faction_for('Tagilla') is None
        # untouched kinds still get defaults
        assert resources.watchlist == Watchlist()
    finally:
        shutil.rmtree(root)


def test_save_then_load():
    root = make_tmp_root()
    try:
        registry = ConfigRegistry(root, logging.getLogger('t'))
        manager = LootFilterManager(
            selected='Keys',
            filters=[LootFilter(name='Keys', color='#FFD700', items=['5448ba0b4bdc2d02308b456c'])],
        )
        watchlist = Watchlist(profiles={'Streamers': [WatchlistEntry(account_id='1234567', tag='sniper', is_streamer=True)]})
        registry.save(manager)
        registry.save(watchlist)
        assert registry.load_or_default(LootFilterManager) == manager
        loaded = registry.load_or_default(Watchlist)
        assert loaded == watchlist
        assert loaded.entry_count() == 1
        # no temp files left behind
        assert sorted(os.listdir(root)) == sorted([LootFilterManager.FILE_NAME, Watchlist.FILE_NAME])
    finally:
        shutil.rmtree(root)


def test_duplicate_loot_filter_names_are_rejected():
    root = make_tmp_root()
    try:
        write_raw(root, LootFilterManager, json.dumps({
            'selected': 'A',
            'filters': [{'name': 'A'}, {'name': 'A'}],
        }))
        registry = ConfigRegistry(root, logging.getLogger('t'))
        assert registry.load_or_default(LootFilterManager) == LootFilterManager()
    finally:
        shutil.rmtree(root)


def test_deeply_nested_file_falls_back_to_default():
    root = make_tmp_root()
    try:
        write_raw(root, Config, '[' * 100000 + ']' * 100000)
        registry = ConfigRegistry(root, logging.getLogger('t'))
        assert registry.load_or_default(Config) == Config()
    finally:
        shutil.rmtree(root)


def test_wrong_field_types_fall_back_to_defaults():
    root = make_tmp_root()
    try:
        write_raw(root, Watchlist, json.dumps({
            'profiles': {'Default': [{'account_id': None, 'tag': 5, 'is_streamer': 'no'}]},
        }))
        write_raw(root, AIFactionManager, json.dumps({
            'factions': [{'name': 'Rogues', 'names': 'Knight'}],
        }))
        registry = ConfigRegistry(root, logging.getLogger('t'))
        assert registry.load_or_default(Watchlist) == Watchlist()
        factions = registry.load_or_default(AIFactionManager)
        assert factions == AIFactionManager()
        assert factions.faction_for('K') is None
    finally:
        shutil.rmtree(root)


def test_config_changes_are_saved_without_touching_loaded_config():
    root = make_tmp_root()
    try:
        registry = ConfigRegistry(root, logging.getLogger('t'))
        loaded = registry.load_or_default(Config)
        updated = registry.save_config_changes(loaded, {'logging': True, 'font_size': 15})
        assert loaded == Config()
        assert updated.logging is True
        assert registry.load_or_default(Config) == updated
        try:
            registry.save_config_changes(loaded, {'ui_scale': 10})
            assert False, 'should fail'
        except ValueError:
            pass
        assert registry.load_or_default(Config) == updated
    finally:
        shutil.rmtree(root)


def test_resource_base_is_abstract():
    try:
        JsonResource()
        assert False, 'should fail'
    except TypeError:
        pass
