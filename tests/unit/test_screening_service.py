#!/usr/bin/env python3
"""
Test suite for the screening lifecycle: creation, lazy questions, upload and scoring.
"""

import unittest

from sqlalchemy.exc import IntegrityError

from core.errors import AdapterError, NotFoundError, ValidationError
from core.scoring.results import Ok
from core.scoring.schema_models import VideoScore
from core.screening.service import ScreeningService
from database.models import Screening
from database.uow import unit_of_work
from tests.support import err, make_session_factory, scoring_mock, seed_application, seed_job, seed_user


class ScreeningServiceTestCase(unittest.TestCase):

    def setUp(self):
        self.session_factory = make_session_factory()
        self.job_id = seed_job(self.session_factory)
        self.user_id = seed_user(self.session_factory)
        self.application_id = seed_application(self.session_factory, self.job_id, self.user_id)
        self.scoring = scoring_mock()
        self.service = ScreeningService(self.session_factory, self.scoring, "https://talent.example/")

    def _create_screening(self, **fields):
        with unit_of_work(self.session_factory) as uow:
            application = uow.applications.get_by_id(self.application_id)
            screening, _ = self.service.ensure_screening(uow, application)
            for key, value in fields.items():
                setattr(screening, key, value)
            return str(screening.id)

    def _screening(self, screening_id):
        with unit_of_work(self.session_factory) as uow:
            return uow.screenings.get_by_id(screening_id)


class TestEnsureScreening(ScreeningServiceTestCase):

    def test_created_once(self):
        with unit_of_work(self.session_factory) as uow:
            application = uow.applications.get_by_id(self.application_id)
            first, created = self.service.ensure_screening(uow, application)
            second, created_again = self.service.ensure_screening(uow, application)

        self.assertTrue(created)
        self.assertFalse(created_again)
        self.assertEqual(first.id, second.id)
        self.assertTrue(first.screening_link.startswith("https://talent.example/screening/"))
        self.assertEqual(first.screening_questions, [])

    def test_constraint_rejects_second_screening(self):
        self._create_screening()

        with self.assertRaises(IntegrityError):
            with unit_of_work(self.session_factory) as uow:
                application = uow.applications.get_by_id(self.application_id)
                uow.screenings.add(Screening(
                    application_id=application.id,
                    job_id=application.job_id,
                    screening_link="https://talent.example/screening/duplicate",
                    screening_questions=[],
                ))

    def test_concurrent_creator_reuses_stored_screening(self):
        first_id = self._create_screening()

        with unit_of_work(self.session_factory) as uow:
            application = uow.applications.get_by_id(self.application_id)
            # A writer that checked before the first insert committed
            screening, created = uow.screenings.create_screening(
                application_id=application.id,
                job_id=application.job_id,
                screening_link="https://talent.example/screening/late",
            )
            self.assertFalse(created)
            self.assertEqual(str(screening.id), first_id)
            # Outer transaction is still usable after the rolled-back savepoint
            self.assertEqual(uow.screenings.get_by_application(application.id).id, screening.id)

        with unit_of_work(self.session_factory) as uow:
            self.assertEqual(uow.session.query(Screening).count(), 1)


class TestGetQuestions(ScreeningServiceTestCase):

    def test_generated_on_first_read_and_persisted(self):
        screening_id = self._create_screening()

        first = self.service.get_questions(screening_id)
        second = self.service.get_questions(screening_id)

        self.assertEqual(first['role'], 'Backend Engineer')
        self.assertEqual(first['company_name'], 'Acme')
        self.assertEqual(first['questions'][0]['text'], 'Walk us through a recent project.')
        self.assertEqual(second['questions'], first['questions'])
        self.scoring.generate_screening_questions.assert_called_once()
        self.assertEqual(len(self._screening(screening_id).screening_questions), 1)

    def test_falls_back_to_job_questions(self):
        self.scoring.generate_screening_questions.return_value = err("schema_violation: empty")
        screening_id = self._create_screening()

        result = self.service.get_questions(screening_id)

        self.assertEqual(result['questions'][0]['text'], 'Tell us about a system you built.')

    def test_candidate_context_passed_to_generation(self):
        screening_id = self._create_screening()
        self.service.get_questions(screening_id)
        _, candidate = self.scoring.generate_screening_questions.call_args[0]
        self.assertEqual(candidate['name'], 'Jane Doe')

    def test_missing_screening(self):
        with self.assertRaises(NotFoundError):
            self.service.get_questions("00000000-0000-0000-0000-000000000000")


class TestUploadVideo(ScreeningServiceTestCase):

    def test_requires_video_url(self):
        screening_id = self._create_screening()
        with self.assertRaises(ValidationError):
            self.service.upload_video(screening_id, "  ")

    def test_generates_questions_when_absent(self):
        screening_id = self._create_screening()
        dto = self.service.upload_video(screening_id, " https://videos.example/1.mp4 ")
        self.assertEqual(dto.video_url, "https://videos.example/1.mp4")
        self.assertEqual(len(dto.screening_questions), 1)

    def test_explicit_questions_replace_existing(self):
        screening_id = self._create_screening(screening_questions=[{"text": "Old question"}])
        questions = [{"text": "New question", "time_limit_sec": 60, "type": "video"}]

        dto = self.service.upload_video(screening_id, "https://videos.example/1.mp4", questions)

        self.assertEqual(dto.screening_questions, questions)
        self.scoring.generate_screening_questions.assert_not_called()


class TestProcess(ScreeningServiceTestCase):

    def _video_score(self):
        data = VideoScore(overall_score=74, overall_recommendation="yes", two_line_summary="Clear.\nSolid.")
        return Ok(data=data, raw=data.model_dump_json())

    def test_requires_video(self):
        screening_id = self._create_screening()
        with self.assertRaises(ValidationError):
            self.service.process(screening_id, "transcript")

    def test_requires_transcript(self):
        screening_id = self._create_screening(video_url="https://videos.example/1.mp4")
        with self.assertRaises(ValidationError):
            self.service.process(screening_id)

    def test_scores_and_stores_result(self):
        self.scoring.score_video.return_value = self._video_score()
        questions = [{"text": "Why us?", "time_limit_sec": 120, "type": "video"}]
        screening_id = self._create_screening(
            video_url="https://videos.example/1.mp4",
            screening_questions=questions,
        )

        dto = self.service.process(screening_id, " I built a payments API. ")

        self.scoring.score_video.assert_called_once_with("I built a payments API.", questions)
        self.assertEqual(dto.transcript, "I built a payments API.")
        self.assertEqual(dto.scoring['overall_score'], 74)
        self.assertEqual(self._screening(screening_id).scoring['overall_recommendation'], 'yes')

    def test_reuses_stored_transcript(self):
        self.scoring.score_video.return_value = self._video_score()
        screening_id = self._create_screening(
            video_url="https://videos.example/1.mp4",
            transcript="Stored transcript",
        )
        self.service.process(screening_id)
        self.assertEqual(self.scoring.score_video.call_args[0][0], "Stored transcript")

    def test_scoring_failure_leaves_screening_unscored(self):
        self.scoring.score_video.return_value = err("invalid_json: nope")
        screening_id = self._create_screening(video_url="https://videos.example/1.mp4")

        with self.assertRaises(AdapterError):
            self.service.process(screening_id, "transcript")

        screening = self._screening(screening_id)
        self.assertIsNone(screening.scoring)
        self.assertIsNone(screening.transcript)


if __name__ == '__main__':
    unittest.main()
