import pytest

from configstore_lib.config.settings import StorageSettings
from configstore_lib.errors import FieldMissing
from configstore_lib.platform.local import LocalSessionProvider
from configstore_lib.storage import JournaledSaveDataBackend, PlainDirectoryBackend, acquire_storage


@pytest.fixture
def settings(tmp_path):
    return StorageSettings(plain_root=tmp_path / 'sd', journal_base=tmp_path / 'savedata')


def test_acquire_plain_by_default(settings, tmp_path):
    with acquire_storage('demo', settings=settings) as storage:
        assert isinstance(storage.backend, PlainDirectoryBackend)
        assert storage.storage_path() == tmp_path / 'sd' / 'demo'
        storage.set_field('level', '3')
        assert storage.get_field('level', int) == 3
        storage.set_flag('unlocked', True)
        assert storage.get_flag('unlocked') is True
        storage.remove_field('level')
        with pytest.raises(FieldMissing):
            storage.get_field('level', int)


def test_acquire_journaled_with_injected_collaborators(settings, medium, session_provider):
    with acquire_storage('demo', 'journaled', settings=settings,
                         session_provider=session_provider, medium=medium) as storage:
        assert isinstance(storage.backend, JournaledSaveDataBackend)
        assert storage.storage_path() == medium.mount_point('config') / '11' / '22' / 'demo'
        storage.set_field('level', '3')
    assert medium.commits == ['config', 'config']


def test_acquire_journaled_with_local_platform(settings, tmp_path):
    provider = LocalSessionProvider(user='tester')
    with acquire_storage('demo', 'journaled', settings=settings, session_provider=provider) as storage:
        storage.set_field('k', 'v')
        path = storage.storage_path()
    assert path.is_relative_to(tmp_path / 'savedata' / 'config')
    assert (path / 'k').read_text() == 'v'


def test_acquire_uses_settings_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = tmp_path / 'data' / 'config' / 'storage_config.yml'
    cfg.parent.mkdir(parents=True)
    cfg.write_text('plain_root: ./custom\n', encoding='utf-8')
    with acquire_storage('demo') as storage:
        assert storage.storage_path().resolve() == (tmp_path / 'custom' / 'demo').resolve()


def test_unknown_backend(settings):
    with pytest.raises(ValueError):
        acquire_storage('demo', 'cloud', settings=settings)


def test_separate_users_get_separate_storage(settings):
    with acquire_storage('demo', 'journaled', settings=settings,
                         session_provider=LocalSessionProvider(user='alice')) as alice:
        alice.set_field('name', 'alice')
    with acquire_storage('demo', 'journaled', settings=settings,
                         session_provider=LocalSessionProvider(user='bob')) as bob:
        with pytest.raises(FieldMissing):
            bob.get_field('name')
