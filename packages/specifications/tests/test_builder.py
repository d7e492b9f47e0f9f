"""Tests for the SpecificationBuilder fluent API."""

from __future__ import annotations

import pytest

from twitter_query_specifications import (
    AndSpecification,
    AttributeSpecification,
    NotSpecification,
    OrSpecification,
    SpecificationBuilder,
    SpecificationOperator,
)


@pytest.fixture
def builder(registry) -> SpecificationBuilder:
    return SpecificationBuilder(registry=registry)


def test_single_where(builder: SpecificationBuilder, alice):
    spec = builder.where("screen_name", "=", "alice").build()
    assert isinstance(spec, AttributeSpecification)
    assert spec.is_satisfied_by(alice) is True


def test_multiple_where_implicit_and(builder: SpecificationBuilder, alice, bob):
    spec = (
        builder.where("screen_name", SpecificationOperator.STARTSWITH, "a")
        .where("followers", ">", 100)
        .build()
    )
    assert isinstance(spec, AndSpecification)
    assert spec.is_satisfied_by(alice) is True
    assert spec.is_satisfied_by(bob) is False


def test_where_equal_keeps_keyword_order(builder: SpecificationBuilder):
    spec = builder.where_equal(
        Type="Exists", SubjectUser="alice", FollowingUser="bob"
    ).build()
    assert [c["attr"] for c in spec.to_dict()["conditions"]] == [
        "Type",
        "SubjectUser",
        "FollowingUser",
    ]


def test_or_group(builder: SpecificationBuilder, alice, bob):
    spec = (
        builder.or_group()
        .where("screen_name", "=", "alice")
        .where("screen_name", "=", "bob")
        .end_group()
        .where("followers", ">", 50)
        .build()
    )
    assert isinstance(spec, AndSpecification)
    assert isinstance(spec.specifications[0], OrSpecification)
    assert spec.is_satisfied_by(alice) is True
    assert spec.is_satisfied_by(bob) is False


def test_not_group(builder: SpecificationBuilder, alice, bob):
    spec = builder.not_group().where("screen_name", "=", "alice").end_group().build()
    assert isinstance(spec, NotSpecification)
    assert spec.is_satisfied_by(bob) is True


def test_not_group_requires_single_condition(builder: SpecificationBuilder):
    builder.not_group().where("a", "=", 1).where("b", "=", 2)
    with pytest.raises(ValueError, match="exactly one"):
        builder.end_group()


def test_add_prebuilt_spec(builder: SpecificationBuilder, registry, alice):
    prebuilt = AttributeSpecification("followers", "=", 120, registry=registry)
    spec = builder.add(prebuilt).build()
    assert spec is prebuilt
    assert spec.is_satisfied_by(alice) is True


def test_build_errors(builder: SpecificationBuilder):
    with pytest.raises(ValueError, match="No conditions"):
        builder.build()
    builder.and_group().where("a", "=", 1)
    with pytest.raises(ValueError, match="still open"):
        builder.build()


def test_end_group_without_open_group(builder: SpecificationBuilder):
    with pytest.raises(ValueError, match="No open group"):
        builder.end_group()


def test_empty_group_rejected(builder: SpecificationBuilder):
    with pytest.raises(ValueError, match="empty group"):
        builder.or_group().end_group()


def test_reset(builder: SpecificationBuilder):
    builder.where("a", "=", 1).or_group()
    builder.reset()
    spec = builder.where("b", "=", 2).build()
    assert spec.to_dict() == {"op": "=", "attr": "b", "val": 2}


def test_default_registry_is_created():
    spec = SpecificationBuilder().where("x", "=", 1).build()
    assert spec.is_satisfied_by({"x": 1}) is True


def test_of_type_adds_discriminant(builder: SpecificationBuilder):
    spec = builder.of_type("Exists").where("SubjectUser", "=", "alice").build()
    assert spec.to_dict()["conditions"][0] == {
        "op": "=",
        "attr": "Type",
        "val": "Exists",
    }


def test_nested_and_group_is_flattened(builder: SpecificationBuilder):
    spec = (
        builder.where("a", "=", 1)
        .and_group()
        .where("b", "=", 2)
        .where("c", "=", 3)
        .end_group()
        .build()
    )
    assert isinstance(spec, AndSpecification)
    assert [c["attr"] for c in spec.to_dict()["conditions"]] == ["a", "b", "c"]
