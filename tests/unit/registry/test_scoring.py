"""Unit tests for eligibility scoring."""

import pytest
from models import AidoiMetadata, MAX_TOTAL, RUBRIC_FIELDS
from registry import ELIGIBILITY_THRESHOLD, EligibilityResult, completion, item_points, score


class TestScoreExtremes:
    """Whole-rubric answer sets."""

    def test_all_lowest_scores_zero(self, lowest_answers):
        result = score(lowest_answers)
        assert result.total == 0
        assert not result.is_eligible

    def test_all_highest_scores_max(self, highest_answers):
        result = score(highest_answers)
        assert result.total == 105
        assert result.total == MAX_TOTAL
        assert result.is_eligible

    def test_all_middle_scores_63(self, middle_answers):
        result = score(middle_answers)
        assert result.total == 63
        assert result.is_eligible

    def test_section_maxima(self, highest_answers):
        result = score(highest_answers)
        assert (result.score_b, result.score_c, result.score_d, result.score_e, result.score_f) == (40, 20, 15, 15, 15)

    def test_scenario(self, scenario_answers):
        result = score(scenario_answers)
        assert result.score_b == 24
        assert result.score_c == 20
        assert result.score_d == 15
        assert result.score_e == 9
        assert result.score_f == 0
        assert result.total == 68
        assert result.is_eligible


class TestThreshold:
    """Eligibility boundary at 60."""

    def test_threshold_constant(self):
        assert ELIGIBILITY_THRESHOLD == 60

    def test_exactly_60_is_eligible(self, make_answers):
        answers = make_answers(b="a", c="yes", d="not", e="no", f="no")
        result = score(answers)
        assert result.total == 60
        assert result.is_eligible

    def test_exactly_59_is_not_eligible(self, make_answers):
        """60 - 4 (a -> c) + 3 (not -> partial)."""
        answers = make_answers(b="a", c="yes", d="not", e="no", f="no")
        answers["stage_references"] = "c"
        answers["limitations_errors_documented"] = "partial"
        result = score(answers)
        assert result.total == 59
        assert not result.is_eligible


class TestFailSafeInput:
    """Missing or garbage answers degrade to zero, never raise."""

    def test_empty_dict(self):
        result = score({})
        assert result.total == 0
        assert not result.is_eligible

    @pytest.mark.parametrize("junk", [None, 42, "", [], object()])
    def test_non_mapping_input(self, junk):
        assert score(junk).total == 0

    def test_garbage_values_score_zero(self):
        answers = {name: "maybe" for name in RUBRIC_FIELDS}
        assert score(answers).total == 0

    def test_wrong_vocabulary_scores_zero(self):
        # "yes" isn't a stage level, "a" isn't a yes/partial/no
        assert item_points("stage_hypothesis", "yes") == 0
        assert item_points("provenance_log_available", "a") == 0

    def test_other_casing_is_garbage(self):
        assert item_points("provenance_log_available", "YES") == 0
        assert item_points("provenance_log_available", "Yes") == 5

    def test_stage_c_is_one_point(self):
        assert item_points("stage_design", "c") == 1

    def test_unknown_field_scores_zero(self):
        assert item_points("not_a_rubric_field", "yes") == 0

    def test_partial_form(self):
        result = score({"stage_hypothesis": "a", "provenance_text_generated": "partial"})
        assert result.score_b == 5
        assert result.score_c == 3
        assert result.total == 8

    def test_extra_fields_ignored(self, highest_answers):
        highest_answers["title"] = "Irrelevant"
        highest_answers["total_score"] = 3
        assert score(highest_answers).total == 105


class TestPurity:

    def test_idempotent(self, scenario_answers):
        assert score(scenario_answers) == score(scenario_answers)

    def test_input_not_mutated(self, scenario_answers):
        before = dict(scenario_answers)
        score(scenario_answers)
        assert scenario_answers == before

    def test_result_is_frozen(self, lowest_answers):
        result = score(lowest_answers)
        with pytest.raises(Exception):
            result.total = 100

    def test_repeated_calls_are_cheap(self, benchmark, middle_answers):
        result = benchmark(score, middle_answers, rounds=1000)
        assert result.total == 63


class TestMetadataInput:

    def test_scores_metadata_model(self, scenario_answers):
        metadata = AidoiMetadata.model_validate(scenario_answers)
        assert score(metadata).total == 68

    def test_as_metadata_fields(self, scenario_answers):
        fields = score(scenario_answers).as_metadata_fields()
        assert fields == {
            "score_section_b": 24,
            "score_section_c": 20,
            "score_section_d": 15,
            "score_section_e": 9,
            "score_section_f": 0,
            "total_score": 68,
            "is_eligible": True,
        }

    def test_default_result(self):
        result = EligibilityResult()
        assert result.total == 0
        assert result.max_total == 105


class TestCompletion:

    def test_empty_form(self):
        assert completion({}) == 0.0

    def test_full_form(self, lowest_answers):
        # Lowest answers are still answers
        assert completion(lowest_answers) == 1.0

    def test_partial_form(self):
        answers = {"stage_hypothesis": "a", "stage_design": "bogus"}
        assert completion(answers) == pytest.approx(1 / 21)
