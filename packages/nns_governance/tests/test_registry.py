import pytest

from nns_governance.registry import (
    PROPOSAL_STATUSES, TOPICS, EnumRegistry, ProposalStatus, Topic
)


@pytest.mark.parametrize("registry", [TOPICS, PROPOSAL_STATUSES])
def test_code_name_code_round_trip(registry):
    for code in registry.codes():
        assert registry.code_of(registry.name_of(code)) == code


def test_topic_codes_skip_eleven():
    assert 11 not in TOPICS
    assert TOPICS.codes() == (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 12, 13, 14, 15, 16, 17, 18)


def test_published_names():
    assert TOPICS.name_of(13) == "IcOsVersionElection"
    assert TOPICS.name_of(17) == "ProtocolCanisterManagement"
    assert TOPICS.name_of(9) == "Kyc"
    assert TOPICS.code_of("ServiceNervousSystemManagement") == Topic.SERVICE_NERVOUS_SYSTEM_MANAGEMENT
    assert PROPOSAL_STATUSES.name_of(ProposalStatus.OPEN) == "Open"
    assert PROPOSAL_STATUSES.code_of("Executed") == 4
    assert len(PROPOSAL_STATUSES) == 6


def test_unknown_codes():
    assert TOPICS.name_of(11) is None
    assert TOPICS.code_of("NotATopic") is None
    assert TOPICS.describe(99) == "Unknown(99)"
    assert PROPOSAL_STATUSES.describe(1) == "Open"


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        TOPICS._names[11] = "Retired"


def test_duplicate_names_rejected():
    with pytest.raises(ValueError):
        EnumRegistry("Broken", {1: "Same", 2: "Same"})
