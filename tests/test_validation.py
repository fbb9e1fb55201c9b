from dataclasses import dataclass, field

import pytest

from blogkit.validation import ValidationError, Validator, get_validator, validate


@dataclass
class test:
    Name: str = field(default="", metadata={"validate": "required"})


@dataclass
class Profile:
    nickname: str = field(default="", metadata={"validate": "omitempty,min=3"})
    age: int = field(default=0, metadata={"validate": "gte=18,lte=130"})
    role: str = field(default="reader", metadata={"validate": "oneof=reader writer"})


@dataclass
class Account:
    email: str = field(default="", metadata={"validate": "required"})
    profile: Profile = field(default_factory=Profile)


def test_valid_data_passes():
    ts = test(Name="test")
    assert validate(ts) is None
    assert ts.Name == "test"


def test_invalid_data_fails_with_message():
    with pytest.raises(ValidationError) as info:
        validate(test())
    assert str(info.value) == "Key: 'test.Name' Error:Field validation for 'Name' failed on the 'required' tag"


def test_failures_are_listed():
    with pytest.raises(ValidationError) as info:
        Validator().validate(Profile(nickname="ab", age=10, role="admin"))
    assert info.value.failures == [
        ("Profile.nickname", "min"),
        ("Profile.age", "gte"),
        ("Profile.role", "oneof"),
    ]


def test_omitempty_skips_empty_value():
    assert Validator().validate(Profile(nickname="", age=30)) is None


def test_nested_dataclass_is_checked():
    with pytest.raises(ValidationError) as info:
        validate(Account(email="a@example.com", profile=Profile(age=5)))
    assert info.value.failures == [("Account.profile.age", "gte")]


def test_non_dataclass_raises_type_error():
    with pytest.raises(TypeError, match="validator"):
        validate({"Name": "x"})


def test_unknown_rule_raises():
    @dataclass
    class Odd:
        value: str = field(default="x", metadata={"validate": "shiny"})

    with pytest.raises(ValueError, match="Undefined validation function 'shiny'"):
        validate(Odd())


def test_get_validator_is_shared():
    validator = get_validator()
    assert validator is get_validator()
    assert validator.validate(test(Name="x")) is None
    with pytest.raises(ValidationError) as info:
        validator.validate(test())
    assert info.value.failures == [("test.Name", "required")]