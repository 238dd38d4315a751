"""Tests for category group management."""

import pytest

from budgetbook.domain.errors import ConflictError, NotFoundError, ValidationError


def _names(group_service):
    return [group.name for group in group_service.list_groups()]


def test_create_groups_append_to_order(group_service):
    group_service.create_group("Essentials")
    group_service.create_group("Fun")
    group_service.create_group("Savings")

    groups = group_service.list_groups()
    assert [g.name for g in groups] == ["Essentials", "Fun", "Savings"]
    assert [g.sort_order for g in groups] == [0, 1, 2]


def test_create_group_validation(group_service):
    with pytest.raises(ValidationError):
        group_service.create_group("")
    with pytest.raises(ValidationError, match="Invalid color"):
        group_service.create_group("Fun", color="#123456")


def test_create_group_normalizes_color(group_service):
    group_id = group_service.create_group("Fun", color=" #DC2626 ")
    assert group_service.require_group(group_id).color == "#dc2626"


def test_duplicate_group(group_service):
    group_service.create_group("Fun")
    with pytest.raises(ConflictError):
        group_service.create_group("Fun")


def test_move_group(group_service):
    essentials = group_service.create_group("Essentials")
    group_service.create_group("Fun")
    savings = group_service.create_group("Savings")

    assert group_service.move_group(savings, "up")
    assert _names(group_service) == ["Essentials", "Savings", "Fun"]

    assert group_service.move_group(essentials, "down")
    assert _names(group_service) == ["Savings", "Essentials", "Fun"]


def test_move_group_at_edge(group_service):
    first = group_service.create_group("Essentials")
    last = group_service.create_group("Fun")

    assert not group_service.move_group(first, "up")
    assert not group_service.move_group(last, "down")
    assert _names(group_service) == ["Essentials", "Fun"]


def test_move_group_errors(group_service):
    group_id = group_service.create_group("Essentials")
    with pytest.raises(ValidationError):
        group_service.move_group(group_id, "sideways")
    with pytest.raises(NotFoundError):
        group_service.move_group(group_id + 1, "up")


def test_reorder_groups(group_service):
    a = group_service.create_group("A")
    b = group_service.create_group("B")
    c = group_service.create_group("C")

    group_service.reorder_groups([c, a, b])

    assert _names(group_service) == ["C", "A", "B"]


def test_set_color(group_service):
    group_id = group_service.create_group("Fun")

    group_service.set_color(group_id, "#7c3aed")
    assert group_service.require_group(group_id).color == "#7c3aed"

    group_service.set_color(group_id, None)
    assert group_service.require_group(group_id).color is None


def test_set_color_missing_group(group_service):
    with pytest.raises(NotFoundError):
        group_service.set_color(5, "#7c3aed")


def test_delete_group_unassigns_categories(group_service, category_service):
    group_id = group_service.create_group("Essentials")
    rent = category_service.create_category("Rent", group_id=group_id)
    power = category_service.create_category("Power", group_id=group_id)

    assert group_service.delete_group(group_id) == 2

    assert group_service.list_groups() == []
    assert category_service.get_category(rent).group_id is None
    assert category_service.get_category(power).group_name is None


def test_delete_missing_group(group_service):
    with pytest.raises(NotFoundError):
        group_service.delete_group(1)
