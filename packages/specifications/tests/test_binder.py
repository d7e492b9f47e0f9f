"""Tests for ParameterBinder."""

from __future__ import annotations

from enum import Enum

import pytest

from twitter_query_specifications import (
    FieldNotFoundError,
    ParameterBinder,
    SpecificationBuilder,
    ValidationError,
    stringify_value,
)

FIELDS = ("Type", "SubjectUser", "FollowingUser")


class Kind(str, Enum):
    EXISTS = "Exists"


@pytest.fixture
def builder(registry) -> SpecificationBuilder:
    return SpecificationBuilder(registry=registry)


def test_binds_equality_terms(builder):
    spec = builder.where_equal(
        Type=Kind.EXISTS, SubjectUser="alice", FollowingUser="bob"
    ).build()
    bindings = ParameterBinder(FIELDS).bind(spec)
    assert dict(bindings) == {
        "Type": "Exists",
        "SubjectUser": "alice",
        "FollowingUser": "bob",
    }


def test_single_leaf_is_bound(builder):
    spec = builder.where("Type", "=", "Exists").build()
    assert dict(ParameterBinder(FIELDS).bind(spec)) == {"Type": "Exists"}


def test_unrecognized_fields_are_never_bound(builder):
    spec = builder.where_equal(Type="Exists", Password="secret", user_a="x").build()
    bindings = ParameterBinder(FIELDS).bind(spec)
    assert dict(bindings) == {"Type": "Exists"}


def test_missing_fields_are_absent(builder):
    spec = builder.where("SubjectUser", "=", "alice").build()
    bindings = ParameterBinder(FIELDS).bind(spec)
    assert "Type" not in bindings
    assert "FollowingUser" not in bindings


def test_or_and_not_terms_are_not_bound(builder):
    spec = (
        builder.where("Type", "=", "Exists")
        .or_group()
        .where("SubjectUser", "=", "alice")
        .where("SubjectUser", "=", "carol")
        .end_group()
        .not_group()
        .where("FollowingUser", "=", "bob")
        .end_group()
        .build()
    )
    assert dict(ParameterBinder(FIELDS).bind(spec)) == {"Type": "Exists"}


def test_non_equality_terms_are_not_bound(builder):
    spec = builder.where("SubjectUser", "startswith", "al").build()
    assert dict(ParameterBinder(FIELDS).bind(spec)) == {}


def test_nested_and_groups_are_descended(builder):
    spec = (
        builder.where("Type", "=", "Exists")
        .and_group()
        .where("SubjectUser", "=", "alice")
        .where("FollowingUser", "=", "bob")
        .end_group()
        .build()
    )
    assert len(ParameterBinder(FIELDS).bind(spec)) == 3


def test_values_are_not_trimmed_or_encoded(builder):
    spec = builder.where("SubjectUser", "=", " al ice&").build()
    assert ParameterBinder(FIELDS).bind(spec)["SubjectUser"] == " al ice&"


def test_none_values_are_skipped(builder):
    spec = builder.where("SubjectUser", "=", None).build()
    assert dict(ParameterBinder(FIELDS).bind(spec)) == {}


def test_conflicting_bindings_raise(builder):
    spec = builder.where("Type", "=", "Exists").where("Type", "=", "Show").build()
    with pytest.raises(ValidationError, match="Conflicting values for 'Type'") as e:
        ParameterBinder(FIELDS).bind(spec)
    assert e.value.path == "<root>.conditions[1]"


def test_repeated_identical_bindings_are_accepted(builder):
    spec = builder.where("Type", "=", "Exists").where("Type", "=", Kind.EXISTS).build()
    assert dict(ParameterBinder(FIELDS).bind(spec)) == {"Type": "Exists"}


def test_strict_mode_rejects_unknown_fields(builder):
    spec = (
        builder.where("Type", "=", "Exists")
        .or_group()
        .where("SubjectUsr", "=", "a")
        .where("SubjectUser", "=", "b")
        .end_group()
        .build()
    )
    binder = ParameterBinder(FIELDS, strict=True, resource_name="Friendship")
    with pytest.raises(FieldNotFoundError) as exc_info:
        binder.bind(spec)
    assert exc_info.value.invalid_field == "SubjectUsr"
    assert "SubjectUser" in exc_info.value.suggestions


def test_strict_mode_accepts_known_non_binding_fields(builder):
    spec = builder.where("Type", "=", "Exists").where("IsFriend", "=", True).build()
    binder = ParameterBinder(
        FIELDS, known_fields=(*FIELDS, "IsFriend"), strict=True
    )
    assert dict(binder.bind(spec)) == {"Type": "Exists"}


def test_accepts_dict_predicates():
    data = {
        "op": "and",
        "conditions": [
            {"op": "=", "attr": "Type", "val": "Exists"},
            {"op": "=", "attr": "SubjectUser", "val": "alice"},
        ],
    }
    assert dict(ParameterBinder(FIELDS).bind(data)) == {
        "Type": "Exists",
        "SubjectUser": "alice",
    }


def test_none_predicate_binds_nothing():
    assert dict(ParameterBinder(FIELDS).bind(None)) == {}


def test_bindings_are_read_only(builder):
    bindings = ParameterBinder(FIELDS).bind(builder.where("Type", "=", "x").build())
    with pytest.raises(TypeError):
        bindings["Type"] = "y"  # type: ignore[index]


@pytest.mark.parametrize(
    ("value", "expected"),
    [(Kind.EXISTS, "Exists"), (True, "true"), (False, "false"), (42, "42"), ("a", "a")],
)
def test_stringify_value(value, expected):
    assert stringify_value(value) == expected
