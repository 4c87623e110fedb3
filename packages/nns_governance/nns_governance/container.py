from __future__ import annotations

from importlib import import_module
from typing import Callable, Dict, Mapping, MutableMapping, Optional

from .client import GovernanceClient
from .config import GovernanceConfig
from .command import CommandParser
from .engine import ProposalQueryEngine
from .exceptions import ConfigurationError
from .interfaces import GovernanceTransport


TransportFactory = Callable[[GovernanceConfig, "GovernanceContainer"], GovernanceTransport]


class GovernanceContainer:
    """Builds transports, clients and the query engine from one config."""

    def __init__(
        self,
        config: Optional[GovernanceConfig] = None,
        overrides: Optional[Mapping[str, TransportFactory]] = None,
    ) -> None:
        self.config = config or GovernanceConfig()
        self._factories = self._build_factories(overrides or {})

    def build_engine(self) -> ProposalQueryEngine:
        return ProposalQueryEngine(
            client_factory=self.create_client,
            parser=CommandParser(default_limit=self.config.default_limit),
            strict_commands=self.config.strict_commands,
            detail_concurrency=self.config.detail_concurrency,
            omit_large_fields=self.config.omit_large_fields,
        )

    def register_factory(self, implementation: str, factory: TransportFactory) -> None:
        self._factories[implementation] = factory

    def create_transport(self) -> GovernanceTransport:
        # Not cached: every query gets its own connection.
        implementation = self.config.transport
        if implementation not in self._factories:
            available = ", ".join(sorted(self._factories.keys())) or "<none>"
            raise ConfigurationError(
                f"No factory found for transport '{implementation}'. Available: {available}"
            )
        return self._factories[implementation](self.config, self)

    def create_client(self) -> GovernanceClient:
        return GovernanceClient(self.create_transport(), timeout=self.config.request_timeout)

    def _build_factories(
        self, overrides: Mapping[str, TransportFactory]
    ) -> Dict[str, TransportFactory]:
        factories: MutableMapping[str, TransportFactory] = {
            "icp": _from_config_factory("nns_governance.transport.icp", "IcpGovernanceTransport"),
        }
        factories.update(overrides)
        return dict(factories)


def _from_config_factory(module_name: str, class_name: str) -> TransportFactory:
    def _factory(cfg: GovernanceConfig, _container: GovernanceContainer) -> GovernanceTransport:
        module = import_module(module_name)
        return getattr(module, class_name).from_config(cfg)

    return _factory
