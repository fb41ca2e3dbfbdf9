from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from equivmap.mapping import MapperConfigurationBuilder, MappingError
from tests.helpers.models import Order, OrderDto, OrderLine, OrderLineDto, Person, PersonDto

if TYPE_CHECKING:
    from equivmap.mapping import Mapper


def _mapper() -> Mapper:
    builder = MapperConfigurationBuilder()
    builder.create_map(Person, PersonDto)
    builder.create_map(OrderDto, Order)
    builder.create_map(OrderLineDto, OrderLine)
    return builder.build().create_mapper()


def test_map_creates_new_destination() -> None:
    mapper = _mapper()

    dto = mapper.map(Person(id=1, name="Ada"), PersonDto)

    assert isinstance(dto, PersonDto)
    assert (dto.id, dto.name) == (1, "Ada")


def test_map_updates_existing_destination_in_place() -> None:
    mapper = _mapper()
    existing = PersonDto(id=1, name="Old")

    result = mapper.map(Person(id=1, name="New"), PersonDto, existing)

    assert result is existing
    assert existing.name == "New"


def test_map_none_is_none() -> None:
    assert _mapper().map(None, PersonDto) is None


def test_map_without_type_map_raises() -> None:
    with pytest.raises(MappingError):
        _mapper().map(PersonDto(id=1, name="x"), Person)


def test_replace_collection_maps_elements_fresh() -> None:
    mapper = _mapper()
    original_line = OrderLine(id=1, sku="A", quantity=1)
    order = Order(id=5, lines=[original_line])
    original_list = order.lines

    mapper.map(
        OrderDto(id=5, lines=[OrderLineDto(id=1, sku="A", quantity=3)]),
        Order,
        order,
    )

    assert order.lines is original_list
    assert len(order.lines) == 1
    assert order.lines[0] is not original_line
    assert order.lines[0].quantity == 3


def test_map_top_level_list_without_destination() -> None:
    mapper = _mapper()

    people = mapper.map(
        [Person(id=1, name="a")],
        list[PersonDto],
        source_type=list[Person],
    )

    assert isinstance(people, list)
    assert isinstance(people[0], PersonDto)
    assert people[0].name == "a"
