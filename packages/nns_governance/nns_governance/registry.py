"""
Topic and ProposalStatus registries.

Codes follow the NNS governance API types
(https://github.com/dfinity/ic/blob/master/rs/nns/governance/api/src/types.rs).
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Type


class Topic(IntEnum):
    # Fallback used when followees for other topics are not specified.
    UNSPECIFIED = 0
    # Manage neurons: restricted followees, short voting period.
    NEURON_MANAGEMENT = 1
    # Real time ICP valuation, short voting period.
    EXCHANGE_RATE = 2
    # Node operators' rewards, etc.
    NETWORK_ECONOMICS = 3
    # Freeze malicious canisters, etc.
    GOVERNANCE = 4
    # Upgrades and config of node software.
    NODE_ADMIN = 5
    # Grant/revoke DCIDs or NOIDs.
    PARTICIPANT_MANAGEMENT = 6
    # Create, split, modify subnets.
    SUBNET_MANAGEMENT = 7
    # NNS-controlled canisters.
    NETWORK_CANISTER_MANAGEMENT = 8
    # Regulatory updates on neuron genesis.
    KYC = 9
    NODE_PROVIDER_REWARDS = 10
    # 11 was retired upstream.
    IC_OS_VERSION_DEPLOYMENT = 12
    IC_OS_VERSION_ELECTION = 13
    SNS_AND_COMMUNITY_FUND = 14
    API_BOUNDARY_NODE_MANAGEMENT = 15
    SUBNET_RENTAL = 16
    PROTOCOL_CANISTER_MANAGEMENT = 17
    SERVICE_NERVOUS_SYSTEM_MANAGEMENT = 18


class ProposalStatus(IntEnum):
    UNSPECIFIED = 0
    # A decision (adopt/reject) has yet to be made.
    OPEN = 1
    REJECTED = 2
    # Adopted; execution has not started or its outcome is not yet known.
    ADOPTED = 3
    EXECUTED = 4
    # Adopted, but execution failed.
    FAILED = 5


def _display_name(member_name: str) -> str:
    # IC_OS_VERSION_ELECTION -> IcOsVersionElection, the ledger's published spelling
    return "".join(part.capitalize() for part in member_name.split("_"))


class EnumRegistry:
    """Immutable bidirectional code <-> canonical name mapping."""

    def __init__(self, label: str, names_by_code: Mapping[int, str]):
        self.label = label
        self._names: Mapping[int, str] = MappingProxyType(dict(names_by_code))
        self._codes: Mapping[str, int] = MappingProxyType(
            {name: code for code, name in self._names.items()}
        )
        if len(self._codes) != len(self._names):
            raise ValueError(f"{label} registry has duplicate names")

    @classmethod
    def from_enum(cls, enum_cls: Type[IntEnum]) -> "EnumRegistry":
        return cls(
            enum_cls.__name__,
            {int(member): _display_name(member.name) for member in enum_cls},
        )

    def name_of(self, code: int) -> Optional[str]:
        return self._names.get(code)

    def code_of(self, name: str) -> Optional[int]:
        return self._codes.get(name)

    def describe(self, code: int) -> str:
        """Display name for a code, or ``Unknown(<code>)`` when the ledger sends one we don't know."""
        name = self.name_of(code)
        return name if name is not None else f"Unknown({code})"

    def codes(self) -> Tuple[int, ...]:
        return tuple(sorted(self._names))

    def __contains__(self, code: object) -> bool:
        return code in self._names

    def __iter__(self) -> Iterator[int]:
        return iter(self.codes())

    def __len__(self) -> int:
        return len(self._names)


TOPICS = EnumRegistry.from_enum(Topic)
PROPOSAL_STATUSES = EnumRegistry.from_enum(ProposalStatus)
