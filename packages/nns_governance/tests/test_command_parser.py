import pytest

from nns_governance.command import CommandParser, QueryRequest


@pytest.fixture
def parser():
    return CommandParser()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("!proposals", QueryRequest(limit=10)),
        ("!proposals 25", QueryRequest(limit=25)),
        ("!proposals 50 topic 13", QueryRequest(limit=50, topic_filter=13)),
        ("!proposals 10 status 1", QueryRequest(limit=10, status_filter=1)),
        ("!proposals 20 topic 17 status 4", QueryRequest(limit=20, topic_filter=17, status_filter=4)),
        ("!proposals topic 8", QueryRequest(limit=10, topic_filter=8)),
        ("!proposals status 2", QueryRequest(limit=10, status_filter=2)),
        ("!PROPOSALS 5 Topic 4 STATUS 3", QueryRequest(limit=5, topic_filter=4, status_filter=3)),
        ("  !proposals   7\ttopic  1  ", QueryRequest(limit=7, topic_filter=1)),
        ("!proposals 007", QueryRequest(limit=7)),
    ],
)
def test_parses_grammar(parser, text, expected):
    assert parser.parse(text) == expected


def test_zero_limit_passes_through(parser):
    assert parser.parse("!proposals 0").limit == 0


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "hello there",
        "proposals 10",
        "!proposal 10",
        "!proposals 10 status 4 topic 13",
        "!proposals topic",
        "!proposals topic x",
        "!proposals -1",
        "!proposals 10 20",
        "!proposals 10 topic 13 extra",
        "!proposals 4294967296",
        "!proposals topic 2147483648",
        "!proposals ²",
        "please run !proposals",
    ],
)
def test_unrecognized_commands(parser, text):
    assert parser.parse(text) is None


def test_custom_default_limit():
    assert CommandParser(default_limit=3).parse("!proposals topic 13") == QueryRequest(
        limit=3, topic_filter=13
    )
