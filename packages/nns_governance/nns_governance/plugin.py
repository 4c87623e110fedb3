"""
Host-facing capability: a plugin exposing one provider that answers
``!proposals`` messages with NNS governance proposals.
"""

import asyncio
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import GovernanceConfig, validate_plugin_settings
from .container import GovernanceContainer
from .engine import ProposalQueryEngine
from .logger import get_logger
from .schemas.models import Message, ProviderResult

logger = get_logger("GovernancePlugin")

MessageLike = Union[Message, Mapping[str, Any], str, None]


class GovernanceProvider:
    name = "GOVERNANCE_PROVIDER"
    description = "Fetch NNS Governance proposals via !proposals command"

    def __init__(self, engine: ProposalQueryEngine):
        self.engine = engine

    async def get(self, message: MessageLike) -> ProviderResult:
        result = await self.engine.execute(_message_text(message))
        return ProviderResult(
            text="",
            values={},
            data={"proposals": [p.model_dump() for p in result.proposals]},
        )


class GovernancePlugin:
    """
    Entry point for agent hosts.

    Example:
        ```python
        plugin = GovernancePlugin()
        plugin.init({"GOVERNANCE_CANISTER_ID": "rrkah-fqaaa-aaaaa-aaaaq-cai"})
        result = plugin.handle_sync("!proposals 5 status 1")
        for proposal in result.data["proposals"]:
            print(proposal["id"], proposal["title"])
        ```
    """

    name = "plugin-icp-nns"
    description = "NNS governance proposal queries for chat agents"

    def __init__(
        self,
        config: Optional[GovernanceConfig] = None,
        container: Optional[GovernanceContainer] = None,
    ):
        self.container = container or GovernanceContainer(config or GovernanceConfig.from_env())
        self.providers: List[GovernanceProvider] = []
        self._build_providers()

    @property
    def config(self) -> GovernanceConfig:
        return self.container.config

    def init(self, settings: Mapping[str, Any]) -> None:
        """
        Validate host-supplied settings and apply them.

        Raises:
            ConfigurationError: If a setting is present but malformed.
        """
        logger.info(f"Initializing {self.name}")
        validated = validate_plugin_settings(settings)
        if validated.GOVERNANCE_CANISTER_ID:
            self.container.config = replace(
                self.container.config, canister_id=validated.GOVERNANCE_CANISTER_ID
            )
            self._build_providers()

    def get_provider(self, name: str) -> Optional[GovernanceProvider]:
        return next((p for p in self.providers if p.name == name), None)

    async def handle(self, command_text: str) -> ProviderResult:
        provider = self.get_provider(GovernanceProvider.name)
        return await provider.get(command_text)

    def handle_sync(self, command_text: str) -> ProviderResult:
        """Synchronous wrapper for handle."""
        return asyncio.run(self.handle(command_text))

    def _build_providers(self) -> None:
        self.providers = [GovernanceProvider(self.container.build_engine())]


def _message_text(message: MessageLike) -> Optional[str]:
    if message is None or isinstance(message, str):
        return message
    if isinstance(message, Message):
        return message.content.text
    content: Dict[str, Any] = message.get("content") or {}
    return content.get("text")
