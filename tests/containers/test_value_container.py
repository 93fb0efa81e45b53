# tests/containers/test_value_container.py
from __future__ import annotations

import threading

import pytest
from samples import Account, AccountSlot, Email, Nickname, Title, Username, valid_account

from specval import (
    SUCCESS,
    Condition,
    MandatoryValueMissing,
    NestedValidationFailed,
    OptionalContainer,
    Specification,
    ValueContainer,
    ValueInvalid,
)


class Tags(ValueContainer):
    specification = Specification(
        conditions=[Condition("hasAtMostTwoTags", lambda v: len(v) <= 2)],
    )


class Holder:
    def __init__(self) -> None:
        self.lock = threading.Lock()


class HolderSlot(ValueContainer):
    specification = Specification(
        conditions=[Condition("isHolder", lambda v: isinstance(v, Holder))],
    )


# --------------------------
# identity
# --------------------------
def test_identifier_is_stable_and_unique() -> None:
    # --- Arrange ---
    a = Username("bob")
    b = Username("bob")
    before = a.identifier

    # --- Act ---
    a.value = "ann"

    # --- Assert ---
    assert a.identifier == before
    assert a.identifier != b.identifier


def test_custom_identifier_factory_and_display_name() -> None:
    counter = iter(range(100))

    class Counted(ValueContainer):
        display_name = "Counted value"
        identifier_factory = staticmethod(lambda: f"id-{next(counter)}")

    first, second = Counted(), Counted()

    assert first.reference.kind == "Counted value"
    assert (first.identifier, second.identifier) == ("id-0", "id-1")
    assert str(first.reference) == "Counted value#id-0"


# --------------------------
# set / validate
# --------------------------
def test_set_assigns_valid_value() -> None:
    c = Username()

    c.set("ann")

    assert c.value == "ann"
    assert c.is_valid


def test_set_invalid_value_raises_and_keeps_new_value() -> None:
    # --- Arrange ---
    c = Username("bob")

    # --- Act / Assert ---
    with pytest.raises(ValueInvalid) as ei:
        c.set("abcd")

    # --- Assert ---
    assert ei.value.failed_conditions == ("hasMaxLength(3)",)
    assert c.value == "abcd"


def test_validate_raises_first_structural_failure() -> None:
    with pytest.raises(MandatoryValueMissing):
        Email().validate()


def test_construction_does_not_validate() -> None:
    c = Title("")

    assert c.value == ""
    assert not c.is_valid


# --------------------------
# non-mutating probes
# --------------------------
def test_validate_value_never_mutates_container() -> None:
    # --- Arrange ---
    c = Username("bob")

    # --- Act ---
    with pytest.raises(ValueInvalid):
        c.validate_value("abcd")

    # --- Assert ---
    assert c.value == "bob"
    assert c.is_valid


def test_would_be_valid_if_set_reports_outcome_without_mutation() -> None:
    c = Username("bob")

    assert c.would_be_valid_if_set("ann") is True
    assert c.would_be_valid_if_set("") is False
    assert c.value == "bob"


def test_probe_works_on_independent_copy_of_mutable_value() -> None:
    """
    @brief
    The probe rebinds the value on a copy, original value object untouched.
    """
    # --- Arrange ---
    tags = ["a"]
    c = Tags(tags)

    # --- Act ---
    ok = c.would_be_valid_if_set(["a", "b", "c"])

    # --- Assert ---
    assert ok is False
    assert c.value is tags
    assert tags == ["a"]


def test_would_be_valid_if_set_does_not_require_copyable_current_value() -> None:
    """
    @brief
    A current value holding a lock cannot be deep-copied; candidates still check.
    """
    # --- Arrange ---
    current = Holder()
    slot = HolderSlot(current)
    identifier = slot.identifier

    # --- Act / Assert ---
    assert slot.would_be_valid_if_set(Holder()) is True
    assert slot.would_be_valid_if_set("not a holder") is False
    assert slot.value is current
    assert slot.identifier == identifier


def test_probe_with_nested_entity_candidate() -> None:
    slot = AccountSlot(valid_account())
    original = slot.value

    with pytest.raises(NestedValidationFailed):
        slot.validate_value(Account(username="", email="a@b", title="Mr"))

    assert slot.value is original
    assert slot.check() is SUCCESS


def test_validate_raw_and_create_validated() -> None:
    Username.validate_raw("bob")
    with pytest.raises(ValueInvalid):
        Username.validate_raw("")

    created = Username.create_validated("ann")
    assert isinstance(created, Username)
    assert created.value == "ann"


# --------------------------
# valid_value
# --------------------------
def test_valid_value_fail_fast() -> None:
    assert Username("bob").valid_value() == "bob"
    with pytest.raises(ValueInvalid):
        Username("").valid_value()


def test_valid_value_collecting_never_aborts() -> None:
    # --- Arrange ---
    collected: list = []

    # --- Act ---
    values = [
        Username("").valid_value(collected),
        Username("bob").valid_value(collected),
        Email(None).valid_value(collected),
    ]

    # --- Assert ---
    assert values == ["", "bob", None]
    assert [type(i) for i in collected] == [ValueInvalid, MandatoryValueMissing]


def test_valid_value_collecting_still_propagates_foreign_errors() -> None:
    class Exploding:
        def validate(self) -> None:
            raise KeyError("unexpected")

    with pytest.raises(KeyError):
        OptionalContainer(Exploding()).valid_value([])


# --------------------------
# raw value I/O
# --------------------------
def test_dump_and_load_do_not_validate() -> None:
    loaded = Username.load("abcd")

    assert isinstance(loaded, Username)
    assert loaded.dump() == "abcd"
    assert not loaded.is_valid


def test_optional_container_accepts_anything() -> None:
    assert Nickname().check() is SUCCESS
    assert Nickname("whatever").check() is SUCCESS


def test_repr_mentions_value() -> None:
    assert "value='bob'" in repr(Username("bob"))
