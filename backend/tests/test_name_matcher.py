import pytest

from rxcheck.drug_data import COMMON_MEDICINES
from rxcheck.services.name_matcher import (
    MedicineNameMatcher,
    contains_either_way,
    match_medicines,
)


@pytest.fixture
def matcher():
    return MedicineNameMatcher()


@pytest.mark.parametrize("text", ["", "   ", "\n\r\n", " , . ,"])
def test_blank_text_matches_nothing(matcher, text):
    assert matcher.match(text) == []


def test_prescription_line(matcher):
    assert matcher.match("Take Paracetamol 500mg twice daily") == ["paracetamol"]


def test_truncated_token_matches_longer_entry(matcher):
    assert "acetaminophen" in matcher.match("acetaminop")


def test_token_with_trailing_noise_matches_entry(matcher):
    assert "acetaminophen" in matcher.match("acetaminophenextra")


def test_results_follow_vocabulary_order(matcher):
    assert matcher.match("Warfarin and aspirin") == ["aspirin", "warfarin"]
    assert matcher.match("Amoxicillin 500mg\nIbuprofen 400mg") == ["ibuprofen", "amoxicillin"]


def test_splits_on_commas_periods_and_line_breaks(matcher):
    text = "Ibuprofen,Metformin.\r\nLisinopril"
    assert matcher.match(text) == ["ibuprofen", "metformin", "lisinopril"]


def test_no_duplicates(matcher):
    assert matcher.match("aspirin Aspirin ASPIRIN, aspirin.") == ["aspirin"]


def test_brand_names_are_matched(matcher):
    assert matcher.match("TYLENOL extra strength") == ["tylenol"]


def test_single_letter_token_matches_broadly(matcher):
    # Known false-positive source of bidirectional containment
    detected = matcher.match("x a")
    assert "aspirin" in detected
    assert "paracetamol" in detected


def test_results_are_vocabulary_members(matcher):
    text = "Rx: Lipitor 20mg, cipro 500 mg bid. Glucophage; Norvasc? metoprolol-succinate"
    detected = matcher.match(text)
    assert len(detected) == len(set(detected))
    assert all(d in COMMON_MEDICINES for d in detected)
    assert "lipitor" in detected
    assert "glucophage" in detected


def test_custom_vocabulary():
    matcher = MedicineNameMatcher(["foo", "bar", "qux"])
    assert matcher.match("foobar, baz") == ["foo", "bar"]


def test_tokenize_drops_empty_tokens():
    assert MedicineNameMatcher.tokenize("  Aspirin,, 81mg.\n") == ["aspirin", "81mg"]


@pytest.mark.parametrize("bad", [None, 42, b"aspirin", ["aspirin"]])
def test_non_string_text_rejected(matcher, bad):
    with pytest.raises(TypeError):
        matcher.match(bad)


def test_contains_either_way():
    assert contains_either_way("warfarin", "warfarin sodium")
    assert contains_either_way("warfarin sodium", "warfarin")
    assert not contains_either_way("aspirin", "ibuprofen")


def test_module_level_match_uses_default_vocabulary():
    assert match_medicines("metformin 850") == ["metformin"]


def test_factory_builds_matcher_with_vocabulary():
    from rxcheck.services.name_matcher import create_name_matcher

    assert create_name_matcher().vocabulary == COMMON_MEDICINES
    assert create_name_matcher(["zolpidem"]).match("Zolpidem 10mg at night") == ["zolpidem"]
