"""Tests for assemble_outcome and the malformed-block policies."""

import logging

import pytest

from lifesim.parsing import FieldDecodeError, TagMissing, assemble_outcome
from lifesim.parsing.outcome import parse_relationship, parse_removal

from tests.helpers import outcome_response, relationship_block


# ── required fields ──────────────────────────────────────


def test_minimal_outcome():
    result = assemble_outcome(outcome_response())
    assert result.summary == "Sam found a wallet and kept it."
    assert result.outcome == "You feel a little guilty but richer."
    assert result.notable_life_event is False
    assert result.life_event_summary is None
    assert result.new_relationships == ()
    assert result.removed_relationships == ()


@pytest.mark.parametrize("tag", ["summary", "outcome", "notableLifeEvent"])
def test_required_tag_missing(tag):
    text = outcome_response().replace(f"<{tag}>", "<other>")
    with pytest.raises(TagMissing, match=tag):
        assemble_outcome(text)


@pytest.mark.parametrize("raw", ["true", "TRUE", " true "])
def test_notable_flag_true_variants(raw):
    result = assemble_outcome(outcome_response(notable=raw, life_event="First day of school"))
    assert result.notable_life_event is True


def test_notable_flag_garbage_fails():
    with pytest.raises(FieldDecodeError, match="notableLifeEvent"):
        assemble_outcome(outcome_response(notable="maybe"))


# ── life event summary ───────────────────────────────────


def test_life_event_summary_when_notable():
    result = assemble_outcome(outcome_response(notable="true", life_event="Adopted a dog"))
    assert result.life_event_summary == "Adopted a dog"


def test_life_event_summary_required_when_notable():
    with pytest.raises(TagMissing, match="lifeEventSummary"):
        assemble_outcome(outcome_response(notable="true"))


def test_life_event_summary_empty_when_notable_fails():
    with pytest.raises(FieldDecodeError, match="lifeEventSummary"):
        assemble_outcome(outcome_response(notable="true", life_event=" "))


def test_life_event_summary_ignored_when_not_notable():
    result = assemble_outcome(outcome_response(notable="false", life_event="Something"))
    assert result.life_event_summary is None


def test_life_event_summary_lowercase_alias():
    text = outcome_response(notable="true") + "\n<lifeEventsummary>Moved house</lifeEventsummary>"
    assert assemble_outcome(text).life_event_summary == "Moved house"


# ── new relationships ────────────────────────────────────


def test_new_relationships_parsed_in_order():
    text = outcome_response(new=[
        relationship_block(name="Ana", age="7", gender="Female", kind="friend", status="8"),
        relationship_block(name="Mr. Lee", age="45", gender="male", kind="teacher", status="6/10"),
    ])
    result = assemble_outcome(text)
    assert [r.name for r in result.new_relationships] == ["Ana", "Mr. Lee"]
    ana, lee = result.new_relationships
    assert ana.age == 7
    assert ana.gender == "female"
    assert ana.relationship_type == "friend"
    assert ana.relationship_status == 8
    assert lee.relationship_status == 6


def test_empty_new_relationships_container():
    result = assemble_outcome(outcome_response(new=[]))
    assert result.new_relationships == ()


def test_nonstandard_gender_passed_through():
    text = outcome_response(new=[relationship_block(gender="unknown")])
    assert assemble_outcome(text).new_relationships[0].gender == "unknown"


def test_skip_policy_drops_malformed_block(caplog):
    text = outcome_response(new=[
        relationship_block(name="Ana"),
        relationship_block(name="Bo", age="about ten"),
        relationship_block(name="Cy"),
    ])
    with caplog.at_level(logging.WARNING):
        result = assemble_outcome(text, policy="skip")
    assert [r.name for r in result.new_relationships] == ["Ana", "Cy"]
    assert "relationship block 2" in caplog.text


def test_skip_policy_drops_block_missing_field():
    block = relationship_block(name="Bo").replace("<relationshipType>friend</relationshipType>", "")
    result = assemble_outcome(outcome_response(new=[block, relationship_block(name="Cy")]))
    assert [r.name for r in result.new_relationships] == ["Cy"]


def test_strict_policy_fails_on_malformed_block():
    text = outcome_response(new=[
        relationship_block(name="Ana"),
        relationship_block(name="Bo", status="12"),
    ])
    with pytest.raises(FieldDecodeError, match="relationshipStatus"):
        assemble_outcome(text, policy="strict")


def test_strict_policy_accepts_well_formed_blocks():
    text = outcome_response(new=[relationship_block(name="Ana")])
    assert len(assemble_outcome(text, policy="strict").new_relationships) == 1


# ── removed relationships ────────────────────────────────


def test_removed_relationships_parsed():
    text = outcome_response(removed=[("Tom", "Moved away"), ("Kim", "Had a falling out")])
    result = assemble_outcome(text)
    assert [(r.name, r.reason) for r in result.removed_relationships] == [
        ("Tom", "Moved away"), ("Kim", "Had a falling out"),
    ]


def test_removed_without_reason_skipped():
    text = outcome_response(removed=[("Tom", ""), ("Kim", "Fight")])
    result = assemble_outcome(text)
    assert [r.name for r in result.removed_relationships] == ["Kim"]


def test_removed_without_reason_strict_fails():
    text = outcome_response(removed=[("Tom", "")])
    with pytest.raises(FieldDecodeError, match="reason"):
        assemble_outcome(text, policy="strict")


def test_both_lists_together():
    text = outcome_response(
        new=[relationship_block(name="Ana")],
        removed=[("Tom", "Moved away")],
    )
    result = assemble_outcome(text)
    assert len(result.new_relationships) == 1
    assert len(result.removed_relationships) == 1


# ── block parsers ────────────────────────────────────────


def test_parse_relationship_block():
    record = parse_relationship(relationship_block(name="Ana", age="0", status=" 10 "))
    assert record.age == 0
    assert record.relationship_status == 10


def test_parse_relationship_missing_name():
    block = relationship_block().replace("<name>Ana</name>", "")
    with pytest.raises(TagMissing, match="name"):
        parse_relationship(block)


def test_parse_removal_block():
    removal = parse_removal("<removedRelationship><name>Tom</name><reason>Left</reason>")
    assert removal.name == "Tom"
    assert removal.reason == "Left"
