from statewire.bindings import BindingKind
from statewire.container import Container, ProviderFunc
from statewire.exceptions import (
    StateWireCircularDependencyError,
    StateWireDependencyExtractionError,
    StateWireDependencyNotRegisteredError,
    StateWireError,
    StateWireInvalidKeyError,
    StateWireInvalidRegistrationError,
    StateWireLockViolationError,
    StateWirePayloadRetrievalError,
    StateWireSerializationConflictError,
)
from statewire.identity import Identity, ServiceToken
from statewire.lock_state import LockState
from statewire.markers import Inject
from statewire.observables import ObservableEntry, get_observables, register_observable, serializable
from statewire.payload import (
    STATE_PAYLOAD_KEY,
    EnvelopePayloadSource,
    JsonPayloadSource,
    PayloadSource,
    SerializedState,
    dump_state,
)
from statewire.runtime import define_container, define_module, dehydrate, hydrate
from statewire.serializer import STATE_SERIALIZER, StateSerializer

__all__ = [
    "STATE_PAYLOAD_KEY",
    "STATE_SERIALIZER",
    "BindingKind",
    "Container",
    "EnvelopePayloadSource",
    "Identity",
    "Inject",
    "JsonPayloadSource",
    "LockState",
    "ObservableEntry",
    "PayloadSource",
    "ProviderFunc",
    "SerializedState",
    "ServiceToken",
    "StateSerializer",
    "StateWireCircularDependencyError",
    "StateWireDependencyExtractionError",
    "StateWireDependencyNotRegisteredError",
    "StateWireError",
    "StateWireInvalidKeyError",
    "StateWireInvalidRegistrationError",
    "StateWireLockViolationError",
    "StateWirePayloadRetrievalError",
    "StateWireSerializationConflictError",
    "define_container",
    "define_module",
    "dehydrate",
    "dump_state",
    "get_observables",
    "hydrate",
    "register_observable",
    "serializable",
]
