import json

import pytest

from credenta.attributes import AttributeError_
from credenta.hashing import VerificationMethod
from credenta.user import IdType, User


def _user(**kwargs):
    values = {
        "realm": "DEFAULT",
        "user_id": "USERID",
        "id_type": IdType.USER_ID,
        "role_masks": [0] * 10,
        "verification_method": VerificationMethod.PLAIN,
        "verification_hash": "placeholder",
        "enable": True,
    }
    values.update(kwargs)
    return User(**values)


@pytest.mark.parametrize(
    "id_type, stored",
    [
        (IdType.USER_ID, "USERID"),
        (IdType.EMAIL, "EMAIL"),
        (IdType.PHONE_NO, "PHONENO"),
    ],
)
def test_id_type_stored_form(id_type, stored):
    user = _user(id_type=id_type)
    data = user.to_dict()
    assert data["idType"] == stored
    assert User.from_dict(data, "file.json").id_type is id_type


def test_roles():
    user = _user()
    user.add_role(0)
    user.add_role(1)
    user.add_role(64)
    assert user.has_role(0)
    assert user.has_role(1)
    assert user.has_role(64)
    user.remove_role(1)
    user.remove_role(64)
    assert user.has_role(0)
    assert not user.has_role(1)
    assert not user.has_role(64)
    user.clear_roles()
    assert user.role_masks == [0] * 10


def test_set_attribute_keeps_first_value():
    user = _user()
    user.set_attribute("ATTRA", "string", "AttributeA")
    user.set_attribute("ATTRA", "int", "123")
    assert user.has_attribute("ATTRA")
    assert user.get_attribute("ATTRA") == ("string", "AttributeA")


def test_attributes_are_case_sensitive():
    user = _user()
    user.set_attribute("ATTRB", "int", "123")
    assert not user.has_attribute("attrb")
    with pytest.raises(AttributeError_):
        user.get_attribute("attrb")


def test_attribute_listing_and_removal():
    user = _user()
    user.set_attribute("ATTRC", "int", "123")
    user.set_attribute("ATTRA", "string", "AttributeA")
    user.set_attribute("ATTRB", "int", "123")
    assert user.sorted_attribute_keys() == ["ATTRA", "ATTRB", "ATTRC"]
    assert sorted(user.attribute_names()) == user.sorted_attribute_keys()
    user.remove_attribute("ATTRB")
    user.remove_attribute("NOT_THERE")
    assert user.sorted_attribute_keys() == ["ATTRA", "ATTRC"]
    user.remove_all_attributes()
    assert user.attribute_names() == []


def test_to_dict_field_names():
    data = _user().to_dict()
    assert data["id"] == "USERID"
    assert data["idType"] == "USERID"
    assert data["method"] == "PLAIN"
    assert data["hash"] == "placeholder"
    assert "groups" not in data
    assert data["attributes"] == {}


def test_str_is_json_of_dict():
    user = _user(groups=["GroupSon"])
    user.set_attribute("ATTRA", "string", "AttributeA")
    assert json.loads(str(user)) == user.to_dict()


def test_dict_round_trip():
    user = _user(groups=["GroupSon"], active=True)
    user.set_attribute("ATTRA", "string", "AttributeA")
    user.add_role(3)
    restored = User.from_dict(user.to_dict(), "file.json")
    assert restored.file_path == "file.json"
    assert restored.to_dict() == user.to_dict()
    assert restored.id_type is IdType.USER_ID
    assert restored.verification_method is VerificationMethod.PLAIN
    assert restored.has_role(3)


def test_save_reload_delete(tmp_path):
    path = tmp_path / "USERID_IN_DEFAULT.json"
    user = _user(file_path=str(path))
    user.add_role(64)
    user.save("TestUser")
    assert user.updated_by == "TestUser"

    loaded = User(file_path=str(path))
    loaded.reload()
    assert loaded.user_id == "USERID"
    assert loaded.enable is True
    assert loaded.has_role(64)
    assert loaded.updated_at == user.updated_at

    loaded.delete_file()
    assert not path.exists()
    with pytest.raises(FileNotFoundError):
        loaded.delete_file()


def test_reload_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        User(file_path=str(tmp_path / "none.json")).reload()