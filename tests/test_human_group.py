import pytest

from planetgen.human_group import HumanGroup


def test_fields_are_stored():
    group = HumanGroup(id=3, population=120)
    assert group.id == 3
    assert group.population == 120


def test_equality_by_value():
    assert HumanGroup(1, 50) == HumanGroup(1, 50)
    assert not HumanGroup(1, 50) == HumanGroup(2, 50)


def test_upper_bound_accepted():
    group = HumanGroup(id=2**32 - 1, population=0)
    assert group.id == 2**32 - 1


@pytest.mark.parametrize("kwargs", [{"id": -1, "population": 1}, {"id": 1, "population": 2**32}])
def test_out_of_range_rejected(kwargs):
    with pytest.raises(ValueError):
        HumanGroup(**kwargs)


@pytest.mark.parametrize("kwargs", [{"id": 1.5, "population": 1}, {"id": 1, "population": True}])
def test_non_integer_rejected(kwargs):
    with pytest.raises(TypeError):
        HumanGroup(**kwargs)


def test_population_can_change():
    group = HumanGroup(7, 10)
    group.population += 5
    assert group.population == 15