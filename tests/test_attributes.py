import json

import pytest

from credenta.attributes import Attributable, Attribute


def test_str_format():
    attr = Attribute(name="ATTRA", value_type="string", value_string="AttributeA")
    assert str(attr) == "ATTRA = AttributeA(string)"


def test_to_dict_uses_json_keys():
    attr = Attribute(name="ATTRB", value_type="int", value_string="123", seq=2)
    assert attr.to_dict() == {
        "name": "ATTRB",
        "seq": 2,
        "valueType": "int",
        "valueString": "123",
    }


def test_to_dict_omits_zero_seq():
    attr = Attribute(name="ATTRC", value_type="int", value_string="123")
    assert "seq" not in attr.to_dict()


@pytest.mark.parametrize("seq", [0, 1, 7])
def test_round_trip_through_json(seq):
    attr = Attribute(name="G1N1", value_type="int", value_string="1", seq=seq)
    restored = Attribute.from_dict(json.loads(json.dumps(attr.to_dict())))
    assert restored == attr


def test_from_dict_defaults_missing_fields():
    restored = Attribute.from_dict({"name": "only"})
    assert restored == Attribute(name="only", value_type="", value_string="", seq=0)


def test_attributable_is_abstract():
    with pytest.raises(TypeError):
        Attributable()