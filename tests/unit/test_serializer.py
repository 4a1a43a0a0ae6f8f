import pytest

from configstore_lib.storage.serializer import (
    JSONSerializer,
    TOMLSerializer,
    YAMLSerializer,
    get_serializer,
)


def test_json_serializer_roundtrip():
    s = JSONSerializer()
    data = s.dump({'a': [1, 2], 'b': 'x'})
    assert isinstance(data, bytes)
    assert s.load(data) == {'a': [1, 2], 'b': 'x'}


def test_yaml_serializer_roundtrip():
    s = YAMLSerializer()
    data = s.dump({'name': 'demo', 'levels': [1, 2, 3]})
    assert b'name: demo' in data
    assert s.load(data) == {'name': 'demo', 'levels': [1, 2, 3]}


def test_toml_serializer_roundtrip():
    s = TOMLSerializer()
    data = s.dump({'player': {'name': 'mario', 'lives': 3}})
    assert b'[player]' in data
    assert s.load(data) == {'player': {'name': 'mario', 'lives': 3}}


def test_toml_rejects_non_table():
    with pytest.raises((TypeError, AttributeError)):
        TOMLSerializer().dump([1, 2, 3])


def test_get_serializer_by_name_and_instance():
    assert isinstance(get_serializer('json'), JSONSerializer)
    assert isinstance(get_serializer('YAML'), YAMLSerializer)
    custom = TOMLSerializer()
    assert get_serializer(custom) is custom


def test_get_serializer_unknown_name():
    with pytest.raises(ValueError):
        get_serializer('pickle')
