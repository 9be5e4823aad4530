from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any, TypeVar, overload

from statewire.bindings import Binding, InstanceBinding, MockBinding, SingletonBinding
from statewire.dependencies import DependenciesExtractor
from statewire.exceptions import (
    StateWireDependencyNotRegisteredError,
    StateWireInvalidKeyError,
    StateWireInvalidRegistrationError,
    StateWireLockViolationError,
)
from statewire.identity import ServiceToken
from statewire.lock_state import LockState
from statewire.resolution_stack import resolving

T = TypeVar("T")

ProviderFunc = Callable[["Container"], None]
"""Batch registration callback receiving the container it should bind into."""

ConstructHandler = Callable[[Any], None]
"""Callback invoked with every newly constructed service instance."""

logger = logging.getLogger(__name__)


class Container:
    """Own the binding table, the lock state and service construction.

    Service keys are classes (abstract classes and protocols included) or
    ``ServiceToken`` values created with ``Identity``. Every key has at most
    one binding; binding a key again replaces the previous binding.

    The lock state guards two usage windows. Resolution (``get``,
    ``get_optional``, ``resolve``) is rejected while the container is locked.
    Mutation (``bind``, ``bind_instance``, ``bind_mock``) is accepted only on
    containers created unlocked, or inside an ``expand`` call. A container
    created with ``create_locked=True`` therefore cannot be extended by direct
    bind calls once it has been handed out; it is populated through
    ``expand`` and then released with ``unlock``.

    All operations are serialized by a re-entrant lock so a container can be
    shared between threads, although the intended ownership is one container
    per request or per session.

    The lock is held while providers, constructors and construct-handlers
    run. Code in those callbacks must not wait for another thread that uses
    the same container, or both threads deadlock.
    """

    def __init__(self, *, create_locked: bool = False) -> None:
        """Initialize an empty container.

        Args:
            create_locked: Start in ``LockState.LOCKED`` and reject direct
                bind calls for the whole lifetime of the container. Services
                are then registered with ``expand`` and the container is
                released for use with ``unlock``.

        """
        self._create_locked = create_locked
        self._lock_state = LockState.LOCKED if create_locked else LockState.UNLOCKED
        self._bindings: dict[Any, Binding] = {}
        self._service_keys: list[Any] = []
        self._construct_handlers: list[ConstructHandler] = []
        self._expand_depth = 0
        self._dependencies_extractor = DependenciesExtractor()
        self._lock = threading.RLock()

    @property
    def create_locked(self) -> bool:
        """Whether the container was created locked and only accepts ``expand``."""
        return self._create_locked

    @property
    def lock_state(self) -> LockState:
        """Current lock state."""
        with self._lock:
            return self._lock_state

    @property
    def is_locked(self) -> bool:
        """Whether resolution is currently rejected."""
        return self.lock_state is LockState.LOCKED

    @property
    def service_keys(self) -> tuple[Any, ...]:
        """Bound keys in binding order."""
        with self._lock:
            return tuple(self._service_keys)

    def bind(self, key: Any, implementation: type[Any] | None = None) -> None:
        """Bind ``key`` to a class constructed once, on first resolution.

        When ``implementation`` is omitted the key is its own implementation.

        Examples:
            .. code-block:: python

                container.bind(HttpServer)  # HttpServer builds itself
                container.bind(BaseCache, RedisCache)  # BaseCache resolves to RedisCache
                container.bind(Identity("App:Cache"), RedisCache)

        Args:
            key: Class or ``ServiceToken`` naming the service.
            implementation: Concrete class to construct for ``key``.

        Raises:
            StateWireInvalidKeyError: ``key`` is a token and no implementation
                was given, or ``key`` is neither a class nor a token.
            StateWireLockViolationError: The container does not accept
                mutation.
            StateWireInvalidRegistrationError: The implementation is not a
                concrete class.

        """
        if isinstance(key, ServiceToken) and implementation is None:
            raise StateWireInvalidKeyError(key, "a token must be bound with an implementation")
        self._validate_key(key)

        with self._lock:
            self._ensure_mutable("bind")
            concrete = key if implementation is None else implementation
            self._validate_implementation(concrete)
            self._store(SingletonBinding(key, concrete))

    def bind_instance(self, key: Any, instance: Any) -> None:
        """Bind ``key`` to an existing value that is never constructed.

        The common use case is sharing one object between several containers.
        """
        self._validate_key(key)
        with self._lock:
            self._ensure_mutable("bind_instance")
            self._store(InstanceBinding(key, instance))

    def bind_mock(self, key: Any, implementation: Any) -> None:
        """Bind ``key`` to a partial stand-in for the real service.

        Intended for unit tests; the stand-in does not have to implement the
        whole interface of the real service.

        Examples:
            .. code-block:: python

                container.bind_mock(HttpServer, SimpleNamespace(listen=Mock()))

        """
        self._validate_key(key)
        with self._lock:
            self._ensure_mutable("bind_mock")
            self._store(MockBinding(key, implementation))

    def is_bound(self, key: Any) -> bool:
        """Whether ``key`` has a binding. Not guarded by the lock state."""
        with self._lock:
            return key in self._bindings

    @overload
    def get(self, key: type[T]) -> T: ...

    @overload
    def get(self, key: Any) -> Any: ...

    def get(self, key: Any) -> Any:
        """Return the service bound to ``key``, constructing it on first access.

        Raises:
            StateWireLockViolationError: The container is locked.
            StateWireDependencyNotRegisteredError: ``key`` (or a required
                constructor dependency) is not bound.

        """
        with self._lock:
            self._ensure_resolvable("get")
            binding = self._bindings.get(key)
            if binding is None:
                raise StateWireDependencyNotRegisteredError(key)
            return self._resolve_binding(binding)

    @overload
    def get_optional(self, key: type[T]) -> T | None: ...

    @overload
    def get_optional(self, key: Any) -> Any | None: ...

    def get_optional(self, key: Any) -> Any | None:
        """Return the service bound to ``key`` or ``None`` when it is not bound."""
        with self._lock:
            self._ensure_resolvable("get_optional")
            binding = self._bindings.get(key)
            if binding is None:
                return None
            return self._resolve_binding(binding)

    def resolve(self, cls: type[T]) -> T:
        """Construct an unmanaged instance of ``cls`` with its dependencies injected.

        The instance is neither bound nor memoized; every call builds a new one.
        """
        if not inspect.isclass(cls):
            msg = f"Container.resolve() expects a class, got {cls!r}."
            raise StateWireInvalidRegistrationError(msg)

        with self._lock:
            self._ensure_resolvable("resolve")
            return self._construct(cls, cls)

    def expand(self, providers: ProviderFunc | Iterable[ProviderFunc]) -> None:
        """Run provider functions with mutation and resolution permitted.

        The container is unlocked for the duration of the call and the prior
        lock state is restored afterwards, also when a provider raises. The
        error still propagates; bindings made before the failure are kept.

        Args:
            providers: A provider function or an iterable of them, run in order.

        """
        all_providers = [providers] if callable(providers) else list(providers)

        with self._lock:
            pre_lock_state = self._lock_state
            self._expand_depth += 1
            logger.debug("Expanding container with %d provider(s)", len(all_providers))
            try:
                self._lock_state = LockState.UNLOCKED
                for provider in all_providers:
                    self.use(provider)
            finally:
                self._expand_depth -= 1
                self._lock_state = pre_lock_state

    def use(self, provider: ProviderFunc) -> None:
        """Let ``provider`` register its services into this container."""
        provider(self)

    def unlock(self) -> None:
        """Release the container for resolution."""
        with self._lock:
            self._lock_state = LockState.UNLOCKED
            logger.debug("Container unlocked")

    def get_all_services(self) -> list[Any]:
        """Resolve every bound key, in binding order."""
        with self._lock:
            return [self.get(key) for key in list(self._service_keys)]

    def add_construct_handler(self, handler: ConstructHandler) -> None:
        """Register a callback invoked with every newly constructed service.

        Handlers run in registration order, after construction succeeds and
        before the instance is handed to the caller. Instance and mock
        bindings are never constructed and therefore never reported.
        """
        with self._lock:
            self._construct_handlers.append(handler)

    def _resolve_binding(self, binding: Binding) -> Any:
        if isinstance(binding, SingletonBinding):
            if not binding.is_built:
                binding.store(self._construct(binding.key, binding.implementation))
            return binding.instance
        return binding.instance

    def _construct(self, key: Any, cls: type[Any]) -> Any:
        # resolution hook; nested dependencies pass through here as well
        self._ensure_resolvable("construct")

        with resolving(key):
            kwargs: dict[str, Any] = {}
            for parameter in self._dependencies_extractor.get_dependencies(cls):
                dependency = self._bindings.get(parameter.service_key)
                if dependency is None:
                    if parameter.has_default:
                        continue
                    raise StateWireDependencyNotRegisteredError(parameter.service_key)
                kwargs[parameter.name] = self._resolve_binding(dependency)

            logger.debug("Constructing %s for %r", cls.__qualname__, key)
            instance = cls(**kwargs)

        for handler in self._construct_handlers:
            handler(instance)
        return instance

    def _store(self, binding: Binding) -> None:
        key = binding.key
        if key in self._bindings:
            # replace, so packages can override services bound before them
            del self._bindings[key]
            self._service_keys.remove(key)
            logger.debug("Rebinding %r as %s", key, binding.kind.value)
        else:
            logger.debug("Binding %r as %s", key, binding.kind.value)

        self._bindings[key] = binding
        self._service_keys.append(key)

    def _ensure_mutable(self, operation: str) -> None:
        if self._expand_depth:
            return
        if self._lock_state is LockState.LOCKED:
            raise StateWireLockViolationError(operation, "trying to modify a locked container.")
        if self._create_locked:
            raise StateWireLockViolationError(
                operation,
                "trying to modify container after unlocking; use expand() instead.",
            )

    def _ensure_resolvable(self, operation: str) -> None:
        if self._lock_state is LockState.LOCKED:
            raise StateWireLockViolationError(
                operation,
                "trying to resolve a service from a locked container.",
            )

    def _validate_key(self, key: Any) -> None:
        if not (isinstance(key, ServiceToken) or inspect.isclass(key)):
            raise StateWireInvalidKeyError(key, "expected a class or a ServiceToken")

    def _validate_implementation(self, implementation: Any) -> None:
        if not inspect.isclass(implementation):
            msg = f"Implementation must be a class, got {implementation!r}."
            raise StateWireInvalidRegistrationError(msg)

        if inspect.isabstract(implementation):
            msg = f"Implementation '{implementation.__qualname__}' cannot be an abstract class."
            raise StateWireInvalidRegistrationError(msg)
