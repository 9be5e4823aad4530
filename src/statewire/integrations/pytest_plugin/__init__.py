from statewire.integrations.pytest_plugin.plugin import statewire_container, statewire_serializer

__all__ = ["statewire_container", "statewire_serializer"]
