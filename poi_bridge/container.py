"""Dependency injection container.

A small explicit container: ports are registered with factories and
resolved on demand, so tests can swap any adapter (most often the tool
backend) without touching the services.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(CommandService)

        # Testing
        container = Container.create_default()
        container.register(ToolBackendPort, lambda: FakeBackend())
        service = container.resolve(CommandService)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[Any, Callable[[], Any]] = field(default_factory=dict, repr=False)
    _singletons: Dict[Any, Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[Any] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: Any,
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Re-registering a type replaces its factory and drops any cached
        instance.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: Any) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: Any) -> bool:
        """Check if a type is registered."""
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Drop cached singletons so the next resolve builds fresh ones."""
        with self._lock:
            self._singletons.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        The geocoder is bound to None when geocoding is disabled, which
        makes the resolver stop at the gazetteer.
        """
        from .adapters.cache import InMemoryCache
        from .adapters.gazetteer import CSVGazetteerRepository
        from .adapters.geocoding import NominatimGeocoderAdapter
        from .adapters.nlp import RuleBasedCommandInterpreter
        from .adapters.rpc import SubprocessRPCClient
        from .ports.cache import CachePort
        from .ports.gazetteer import GazetteerRepositoryPort
        from .ports.geocoding import GeocoderPort
        from .ports.nlp import CommandInterpreterPort
        from .ports.rpc import ToolBackendPort
        from .services import CommandService, LocationResolverService

        config = config or get_config()
        container = cls(config=config)

        container.register(
            CachePort,
            lambda: InMemoryCache(
                name="geocode",
                default_ttl_seconds=config.geocoding.cache_ttl_seconds,
            ),
        )
        container.register(
            GazetteerRepositoryPort,
            lambda: CSVGazetteerRepository(config.gazetteer),
        )

        def create_geocoder() -> Optional[GeocoderPort]:
            if not config.geocoding.enabled:
                return None
            return NominatimGeocoderAdapter(
                config.geocoding, container.resolve(CachePort)
            )

        container.register(GeocoderPort, create_geocoder)
        container.register(CommandInterpreterPort, RuleBasedCommandInterpreter)
        container.register(ToolBackendPort, lambda: SubprocessRPCClient(config.rpc))

        container.register(
            LocationResolverService,
            lambda: LocationResolverService(
                gazetteer=container.resolve(GazetteerRepositoryPort).load(),
                geocoder=container.resolve(GeocoderPort),
                config=config.search,
            ),
        )
        container.register(
            CommandService,
            lambda: CommandService(
                interpreter=container.resolve(CommandInterpreterPort),
                resolver=container.resolve(LocationResolverService),
                backend=container.resolve(ToolBackendPort),
                config=config.search,
            ),
        )

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container, creating it on first use."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container (used by tests)."""
    global _default_container
    with _container_lock:
        _default_container = None
