"""Resource -> operation options aggregate."""

from collections.abc import Iterator

from .models import OperationOption


class OptionsByResource:
    """Ordered mapping from resource value to the options emitted under it.

    Resources keep first-seen order, options keep append order, and the same
    option may appear more than once under one resource.
    """

    def __init__(self):
        self._options: dict[str, list[OperationOption]] = {}

    def add(self, resource: str, option: OperationOption) -> None:
        self._options.setdefault(resource, []).append(option)

    @property
    def size(self) -> int:
        return len(self._options)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[tuple[str, list[OperationOption]]]:
        return iter(self._options.items())
