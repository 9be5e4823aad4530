from __future__ import annotations

from typing import Any

from typing_extensions import Self


class ServiceToken:
    """Opaque key for services that have no natural class identity.

    Tokens compare and hash by identity: two tokens created from the same
    name are still different keys. The name is only used for display.
    """

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        """Display name given to ``Identity``."""
        return self._name

    def __repr__(self) -> str:
        return f"ServiceToken({self._name!r})"

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self

    def __reduce__(self) -> Any:
        msg = f"{self!r} is process-local and cannot be pickled."
        raise TypeError(msg)


def Identity(name: str) -> ServiceToken:  # noqa: N802
    """Create a new symbolic service key.

    Examples:
        .. code-block:: python

            HTTP_CLIENT = Identity("App:HttpClient")
            container.bind(HTTP_CLIENT, RequestsHttpClient)

    """
    return ServiceToken(name)
