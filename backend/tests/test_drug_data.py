import pytest

from rxcheck.constants import SeverityLevel
from rxcheck.drug_data import (
    COMMON_MEDICINES,
    DRUG_INTERACTIONS,
    InteractionRule,
    build_rule_set,
    get_risk_level,
    rule_set_from_mapping,
)


def test_vocabulary_is_lowercase_and_unique():
    assert all(name == name.lower() for name in COMMON_MEDICINES)
    assert len(set(COMMON_MEDICINES)) == len(COMMON_MEDICINES)


def test_rules_stored_under_their_subject():
    for subject, rules in DRUG_INTERACTIONS.items():
        assert rules
        assert all(rule.subject == subject for rule in rules)


def test_rule_set_is_read_only():
    with pytest.raises(TypeError):
        DRUG_INTERACTIONS["aspirin"] = ()


def test_build_rule_set_keeps_authoring_order():
    rules = build_rule_set([
        InteractionRule("x", "p1", SeverityLevel.LOW, "c", "d"),
        InteractionRule("y", "p2", SeverityLevel.HIGH, "c", "d"),
        InteractionRule("x", "p3", SeverityLevel.MEDIUM, "c", "d"),
    ])
    assert [r.partner for r in rules["x"]] == ["p1", "p3"]
    assert [r.partner for r in rules["y"]] == ["p2"]


def test_rule_set_from_mapping_rejects_mismatched_key():
    rule = InteractionRule("aspirin", "warfarin", SeverityLevel.HIGH, "Bleeding Risk", "d")
    assert rule_set_from_mapping({"aspirin": [rule]})["aspirin"] == (rule,)
    with pytest.raises(ValueError):
        rule_set_from_mapping({"warfarin": [rule]})


def test_severity_ordering():
    assert SeverityLevel.LOW.rank < SeverityLevel.MEDIUM.rank < SeverityLevel.HIGH.rank


@pytest.mark.parametrize("name,expected", [
    ("Warfarin", SeverityLevel.HIGH),
    ("insulin", SeverityLevel.HIGH),
    ("PARACETAMOL", SeverityLevel.LOW),
    ("ibuprofen", SeverityLevel.MEDIUM),
])
def test_risk_level(name, expected):
    assert get_risk_level(name) == expected
