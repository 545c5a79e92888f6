import pytest
from precisionfield import OPERATOR_REGISTRY, lookup, label_for, category_of
from precisionfield.api.registry import (
    PRIMITIVE_KINDS, BOOLEAN_KINDS, DOMAIN_KINDS, METRIC_KINDS, UTILITY_KINDS, is_domain
)

ALL_KINDS = PRIMITIVE_KINDS + BOOLEAN_KINDS + DOMAIN_KINDS + METRIC_KINDS + UTILITY_KINDS

@pytest.mark.parametrize("kind", ALL_KINDS)
def test_lookup_is_total(kind):
    meta = lookup(kind)
    assert meta.kind == kind
    assert meta.label
    assert meta.category in ('Primitive', 'Boolean', 'Domain', 'Metric', 'Utility')

def test_categories():
    assert {category_of(k) for k in BOOLEAN_KINDS} == {'Boolean'}
    assert {category_of(k) for k in DOMAIN_KINDS} == {'Domain'}
    assert {category_of(k) for k in METRIC_KINDS} == {'Metric'}
    assert category_of('group') == 'Utility'
    assert is_domain('displace')
    assert not is_domain('dilate')

def test_labels():
    assert lookup('mirror').label == 'Mirror'
    assert lookup('repeat').label == 'Repeat (Modulo)'
    assert lookup('xor').label == 'XOR'

def test_unknown_kind_raises():
    with pytest.raises(ValueError, match="Unknown operator kind"):
        lookup('morph')

def test_label_fallback_for_unknown_kind():
    assert label_for('morph') == 'morph'
    assert label_for('shell') == 'Shell (Annular)'

def test_registry_is_read_only():
    with pytest.raises(TypeError):
        OPERATOR_REGISTRY['morph'] = None
    assert len(OPERATOR_REGISTRY) == len(ALL_KINDS)
