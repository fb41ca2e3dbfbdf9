"""Entry point for mapping values with a sealed configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .errors import MappingError
from .strategies import MapRequest

if TYPE_CHECKING:
    from .configuration import MapperConfiguration


class Mapper:
    """Dispatch map requests to the first matching strategy."""

    def __init__(self, configuration: MapperConfiguration) -> None:
        self.configuration = configuration

    def map[T](
        self,
        source: Any,
        destination_type: type[T] | Any,
        destination: T | None = None,
        *,
        source_type: Any = None,
    ) -> T:
        """Map ``source`` to ``destination_type``, updating ``destination`` if given.

        ``source_type`` defaults to the runtime type of ``source``; pass a
        parameterised collection type (``list[OrderLineDto]``) when mapping
        collections so element types are known.
        """

        if source is None:
            return None  # type: ignore[return-value]
        request = MapRequest(
            source=source,
            destination=destination,
            source_type=type(source) if source_type is None else source_type,
            destination_type=Any if destination_type is None else destination_type,
        )
        for strategy in self.configuration.mappers:
            if strategy.is_match(request, self):
                return strategy.map(request, self)
        raise MappingError(
            f"No mapping strategy accepts {request.source_type!r} -> {request.destination_type!r}"
        )
