import pytest

from changeoverplan.qco.similarity import bigrams, normalize, similarity


def test_normalize_collapses_case_and_whitespace():
    assert normalize("  Attach   POCKET\t") == "attach pocket"
    assert normalize(None) == ""


def test_bigrams_keep_multiplicity():
    assert bigrams("aaa") == {"aa": 2}
    assert bigrams("a") == {}


def test_identical_and_empty_inputs():
    assert similarity("Join yoke", "join  YOKE") == 1.0
    assert similarity("", "  ") == 1.0
    assert similarity("", "hem") == 0.0
    assert similarity("hem", "") == 0.0


def test_whitespace_is_ignored():
    assert similarity("Join yoke", "Joinyoke") == 1.0


def test_dice_coefficient_on_bigrams():
    assert similarity("night", "nacht") == pytest.approx(0.25)
    assert similarity("Atach pockt", "Attach pocket") == pytest.approx(0.8)


def test_single_characters_that_differ_score_zero():
    assert similarity("a", "b") == 0.0


def test_symmetric_and_bounded():
    pairs = [("Attach label", "Attch lbl"), ("Hem bottom", "Bottom hem"), ("SNLS", "snls-2")]
    for a, b in pairs:
        score = similarity(a, b)
        assert score == pytest.approx(similarity(b, a))
        assert 0.0 <= score <= 1.0
