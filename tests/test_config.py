import pytest

from magento_mapper.config import MappingConfig
from magento_mapper.errors import ConfigurationError, PathConflictError
from magento_mapper.instructions import Constant, FieldReference, Resolver
from magento_mapper.sections import CORE, CUSTOM_ATTRIBUTES, EXTENSION_ATTRIBUTES, Placement, Section


def name_from_title(src):
    return src.get('title')


def test_entries_in_section_then_declared_order():
    config = MappingConfig({
        'customAttributes': {'color': 'color', 'brand': 'brand'},
        'core': {'sku': 'id', 'name': name_from_title},
        'extensionAttributes': {'stock_item.qty': 'qty'},
    })
    keys = [(e.section.name, e.key) for e in config.entries()]
    assert keys == [
        ('core', 'sku'),
        ('core', 'name'),
        ('extensionAttributes', 'stock_item.qty'),
        ('customAttributes', 'color'),
        ('customAttributes', 'brand'),
    ]
    assert len(config) == 5


def test_instructions_are_tagged():
    config = MappingConfig({'core': {'sku': 'id', 'name': name_from_title, 'type_id': Constant('simple')}})
    sku, name, type_id = config.section_entries('core')
    assert sku.instruction == FieldReference('id')
    assert name.instruction == Resolver(name_from_title)
    assert type_id.instruction == Constant('simple')


def test_destinations():
    config = MappingConfig({
        'core': {'sku': 'id'},
        'extensionAttributes': {'stock_item.qty': 'qty'},
        'customAttributes': {'color': 'color'},
    })
    dest = [e.destination for e in config.entries()]
    assert dest == [('sku',), ('extension_attributes', 'stock_item', 'qty'), ('custom_attributes',)]


def test_missing_sections_are_empty():
    config = MappingConfig({'core': {'sku': 'id'}})
    assert config.section_entries('customAttributes') == ()


def test_unknown_section():
    with pytest.raises(ConfigurationError, match="prices"):
        MappingConfig({'core': {'sku': 'id'}, 'prices': {'price': 'p'}})


def test_duplicate_key_rejected():
    with pytest.raises(ConfigurationError, match="Duplicate destination key 'sku'"):
        MappingConfig({'core': [('sku', 'id'), ('sku', 'code')]})


def test_unsupported_instruction():
    with pytest.raises(ConfigurationError, match="core.weight"):
        MappingConfig({'core': {'sku': 'id', 'weight': 1.5}})


@pytest.mark.parametrize('key', ['', 'a..b', '.a', 'a.'])
def test_bad_path(key):
    with pytest.raises(ConfigurationError):
        MappingConfig({'core': {key: 'x'}})


class TestPathConflicts:
    def test_prefix_in_same_section(self):
        with pytest.raises(PathConflictError) as exc:
            MappingConfig({'core': {'a': 'x', 'a.b': 'y'}})
        assert exc.value.path == 'a.b'

    def test_prefix_declared_after(self):
        with pytest.raises(PathConflictError):
            MappingConfig({'core': {'a.b.c': 'x', 'a.b': 'y'}})

    def test_core_and_extension_overlap(self):
        with pytest.raises(PathConflictError):
            MappingConfig({
                'core': {'extension_attributes.stock_item': 'x'},
                'extensionAttributes': {'stock_item.qty': 'y'},
            })

    def test_core_writes_list_field(self):
        with pytest.raises(PathConflictError):
            MappingConfig({'core': {'custom_attributes': 'x'}})

    def test_siblings_are_fine(self):
        config = MappingConfig({
            'core': {'a.b': 'x', 'a.c': 'y', 'ab': 'z', 'extension_attributes.website_ids': 'w'},
            'extensionAttributes': {'stock_item.qty': 'q'},
        })
        assert len(config) == 5

    def test_same_code_in_flat_list_and_path_section(self):
        config = MappingConfig({'core': {'color': 'c'}, 'customAttributes': {'color': 'c'}})
        assert len(config) == 2


def test_section_needs_output_key():
    with pytest.raises(ConfigurationError):
        Section('links', Placement.APPEND_TO_LIST)


def test_duplicate_section_names():
    with pytest.raises(ConfigurationError, match="declared twice"):
        MappingConfig({}, sections=(CORE, CORE))


def test_coerce():
    config = MappingConfig({'core': {'sku': 'id'}})
    assert MappingConfig.coerce(config) is config
    with pytest.raises(ConfigurationError):
        MappingConfig.coerce(config, context=object())
    built = MappingConfig.coerce({'core': {'sku': 'id'}}, sections=(CORE, EXTENSION_ATTRIBUTES, CUSTOM_ATTRIBUTES))
    assert [e.key for e in built.entries()] == ['sku']


@pytest.mark.parametrize('raw', ['sku', b'sku', 42, [('sku',)], [('sku', 'id', 'extra')], ['sk'], [None]])
def test_malformed_section_entries(raw):
    with pytest.raises(ConfigurationError, match="entries must be a mapping or"):
        MappingConfig({'core': raw})


def test_non_string_key_rejected():
    with pytest.raises(ConfigurationError, match="must be a string"):
        MappingConfig({'core': [(('a', 'b'), 'x')]})


def test_sections_and_context_are_read_only():
    config = MappingConfig({'core': {'sku': 'id'}}, context='lookup')
    assert config.sections == (CORE, EXTENSION_ATTRIBUTES, CUSTOM_ATTRIBUTES)
    assert config.context == 'lookup'
    with pytest.raises(AttributeError):
        config.sections = ()
    with pytest.raises(AttributeError):
        config.context = 'other'


def test_instruction_union_covers_every_variant():
    from typing import get_args
    from magento_mapper.instructions import Instruction
    assert set(get_args(Instruction)) == {FieldReference, Constant, Resolver}
