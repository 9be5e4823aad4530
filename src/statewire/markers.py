from typing import Any, NamedTuple


class Inject(NamedTuple):
    """Select the service key injected into a constructor parameter.

    Attach ``Inject`` metadata to ``typing.Annotated`` when the dependency is
    bound under a key that differs from the parameter annotation, typically a
    ``ServiceToken``.

    Examples:
        .. code-block:: python

            from typing import Annotated

            CACHE = Identity("App:Cache")


            class Repository:
                def __init__(self, cache: Annotated[RedisCache, Inject(CACHE)]) -> None:
                    self.cache = cache

    """

    key: Any
