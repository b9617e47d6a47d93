#!/usr/bin/env python3
"""
Test suite for the scoring adapter's Ok/Err contract.
"""

import json
import unittest
from types import SimpleNamespace
from unittest.mock import Mock

from core.llm.interfaces import LLMProvider
from core.scoring.adapter import ScoringAdapter
from core.scoring.schema_models import ResumeScore, ScreeningQuestionSet


def _job():
    return SimpleNamespace(
        company_name="Acme",
        role="Backend Engineer",
        seniority="Senior",
        budget_info="$120k-$150k",
        raw_jd="Python services on AWS",
        enhanced_jd=None,
        must_have_skills=["Python"],
        nice_to_have=[],
    )


class TestScoringAdapter(unittest.TestCase):

    def setUp(self):
        self.llm = Mock(spec=LLMProvider)
        self.adapter = ScoringAdapter(self.llm)

    def test_valid_resume_score(self):
        raw = json.dumps({"match_score": 82, "skills_matched": ["Python"], "recommended_action": "Yes"})
        self.llm.complete_json.return_value = raw

        result = self.adapter.score_resume("Python dev", _job())

        self.assertTrue(result.ok)
        self.assertIsInstance(result.data, ResumeScore)
        self.assertEqual(result.data.match_score, 82)
        self.assertEqual(result.data.recommended_action, "yes")
        self.assertEqual(result.raw, raw)

    def test_uses_capability_temperature(self):
        self.llm.complete_json.return_value = '{"score": 50}'
        self.adapter.score_compensation("$130k", "$120k-$150k")
        _, kwargs = self.llm.complete_json.call_args
        self.assertEqual(kwargs["temperature"], 0.4)

    def test_score_clamped(self):
        self.llm.complete_json.return_value = '{"match_score": 140}'
        self.assertEqual(self.adapter.score_resume("resume", _job()).data.match_score, 100)

    def test_json_wrapped_in_prose(self):
        self.llm.complete_json.return_value = 'Here you go: {"summary": "Seasoned engineer",}'
        result = self.adapter.summarize_resume("resume")
        self.assertTrue(result.ok)
        self.assertEqual(result.data.summary, "Seasoned engineer")

    def test_invalid_json(self):
        self.llm.complete_json.return_value = "not json at all"
        result = self.adapter.score_resume("resume", _job())
        self.assertFalse(result.ok)
        self.assertTrue(result.reason.startswith("invalid_json"))
        self.assertEqual(result.raw, "not json at all")
        self.assertIsNone(result.data)

    def test_non_object_json(self):
        self.llm.complete_json.return_value = "[1, 2]"
        result = self.adapter.summarize_resume("resume")
        self.assertFalse(result.ok)
        self.assertIn("expected a JSON object", result.reason)

    def test_schema_violation(self):
        self.llm.complete_json.return_value = '{"confidence": 0.9}'
        result = self.adapter.score_resume("resume", _job())
        self.assertFalse(result.ok)
        self.assertTrue(result.reason.startswith("schema_violation"))

    def test_empty_question_set_is_violation(self):
        self.llm.complete_json.return_value = '{"screening_questions": []}'
        result = self.adapter.generate_screening_questions(_job())
        self.assertFalse(result.ok)

    def test_question_defaults(self):
        self.llm.complete_json.return_value = '{"screening_questions": [{"text": "Why us?"}]}'
        result = self.adapter.generate_screening_questions(_job(), {"name": "Jane", "skills": ["Python"]})
        self.assertIsInstance(result.data, ScreeningQuestionSet)
        question = result.data.screening_questions[0]
        self.assertEqual((question.time_limit_sec, question.type), (120, "video"))

    def test_provider_exception(self):
        self.llm.complete_json.side_effect = RuntimeError("timeout")
        result = self.adapter.enhance_job(_job())
        self.assertFalse(result.ok)
        self.assertEqual(result.reason, "llm_error: timeout")
        self.assertIsNone(result.raw)

    def test_empty_inputs_skip_llm(self):
        self.assertFalse(self.adapter.score_resume("  ", _job()).ok)
        self.assertFalse(self.adapter.score_profile(None, None, _job()).ok)
        self.assertFalse(self.adapter.score_compensation(None, "$100k").ok)
        self.assertFalse(self.adapter.score_video("", []).ok)
        self.llm.complete_json.assert_not_called()

    def test_profile_prompt_includes_github_summary(self):
        self.llm.complete_json.return_value = '{"score": 70}'
        self.adapter.score_profile({'username': 'janedoe', 'repositories': []}, None, _job())
        user_message = self.llm.complete_json.call_args[0][1]
        self.assertIn("GitHub Profile: janedoe", user_message)


if __name__ == '__main__':
    unittest.main()
