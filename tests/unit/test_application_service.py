#!/usr/bin/env python3
"""
Test suite for ApplicationService: submission, consent, approval and listing.
"""

import unittest
from unittest.mock import Mock

from core.applications.orchestrator import ApplicationScoringOrchestrator
from core.applications.service import ApplicationService
from core.errors import NotFoundError, PreconditionError, ValidationError
from core.screening.service import ScreeningService
from database.models import JobCandidateMatch, Screening
from database.uow import unit_of_work
from notification.channels import EmailChannel, EmailResult, NotificationChannel
from tests.support import (
    err,
    inline_queue,
    job_settings,
    make_session_factory,
    scoring_mock,
    seed_application,
    seed_job,
    seed_user,
)


class ApplicationServiceTestCase(unittest.TestCase):

    def setUp(self):
        self.session_factory = make_session_factory()
        self.job_id = seed_job(self.session_factory)
        self.scoring = scoring_mock()
        self.orchestrator = Mock(spec=ApplicationScoringOrchestrator)
        self.screening_service = ScreeningService(self.session_factory, self.scoring, "https://talent.example")
        self.email = Mock(spec=NotificationChannel)
        self.email.send.return_value = EmailResult(ok=True, id="msg-1")
        self.service = ApplicationService(
            self.session_factory,
            self.scoring,
            self.orchestrator,
            self.screening_service,
            self.email,
            inline_queue()
        )

    def _application(self, application_id):
        with unit_of_work(self.session_factory) as uow:
            return uow.applications.get_by_id(application_id)


class TestSubmitApplication(ApplicationServiceTestCase):

    def _payload(self, **overrides):
        payload = {
            'email': ' Jane@Example.com ',
            'name': 'Jane Doe',
            'resume_text': 'Python engineer with AWS experience',
            'github_url': 'https://github.com/janedoe',
            'consent_given': True,
        }
        payload.update(overrides)
        return payload

    def test_creates_user_and_pending_application(self):
        receipt = self.service.submit_application(self.job_id, self._payload())

        self.assertEqual(receipt.status, 'submitted')
        self.assertFalse(hasattr(receipt, 'unified_score'))

        application = self._application(receipt.application_id)
        self.assertEqual(application.unified_score, 0)
        self.assertEqual(application.scoring_status, 'pending')
        self.assertTrue(application.consent_given)

        with unit_of_work(self.session_factory) as uow:
            user = uow.users.get_by_email('jane@example.com')
            self.assertEqual(str(user.id), receipt.user_id)
            self.assertEqual(user.github_url, 'https://github.com/janedoe')

    def test_enqueues_scoring(self):
        receipt = self.service.submit_application(self.job_id, self._payload())
        self.orchestrator.score_application.assert_called_once_with(receipt.application_id)

    def test_reuses_existing_user_last_resume_wins(self):
        first = self.service.submit_application(self.job_id, self._payload())
        other_job = seed_job(self.session_factory, role="Data Engineer")
        second = self.service.submit_application(other_job, self._payload(resume_text='Updated resume'))

        self.assertEqual(first.user_id, second.user_id)
        with unit_of_work(self.session_factory) as uow:
            self.assertEqual(uow.users.get_by_id(first.user_id).resume_text, 'Updated resume')

    def test_links_existing_match(self):
        user_id = seed_user(self.session_factory, email='jane@example.com')
        with unit_of_work(self.session_factory) as uow:
            uow.matches.add(JobCandidateMatch(
                job_id=uow.jobs.get_by_id(self.job_id).id,
                user_id=uow.users.get_by_id(user_id).id,
                match_score=70, tag_match_score=70, skills_match_score=70,
                matched_tags=[], matched_skills=[], missing_skills=[],
                status='contacted',
            ))

        receipt = self.service.submit_application(self.job_id, self._payload())

        with unit_of_work(self.session_factory) as uow:
            match = uow.matches.get_existing_match(self.job_id, user_id)
            self.assertEqual(match.status, 'applied')
            self.assertEqual(str(match.application_id), receipt.application_id)
            self.assertEqual(uow.applications.get_by_id(receipt.application_id).match_id, match.id)

    def test_validation(self):
        with self.assertRaises(ValidationError):
            self.service.submit_application(self.job_id, self._payload(email='not-an-email'))
        with self.assertRaises(ValidationError):
            self.service.submit_application(self.job_id, self._payload(resume_text='   '))
        with self.assertRaises(NotFoundError):
            self.service.submit_application("00000000-0000-0000-0000-000000000000", self._payload())
        self.orchestrator.score_application.assert_not_called()


class TestApproveApplication(ApplicationServiceTestCase):

    def setUp(self):
        super().setUp()
        self.user_id = seed_user(self.session_factory)

    def _screenings(self):
        with unit_of_work(self.session_factory) as uow:
            return uow.session.query(Screening).all()

    def test_requires_consent(self):
        application_id = seed_application(self.session_factory, self.job_id, self.user_id, consent_given=False)

        with self.assertRaises(PreconditionError):
            self.service.approve_application(application_id)

        self.assertFalse(self._application(application_id).level1_approved)

    def test_unknown_application(self):
        with self.assertRaises(NotFoundError):
            self.service.approve_application("00000000-0000-0000-0000-000000000000")

    def test_approval_without_auto_invite(self):
        application_id = seed_application(
            self.session_factory, self.job_id, self.user_id, consent_given=True, unified_score=95
        )

        result = self.service.approve_application(application_id)

        self.assertTrue(result.application.level1_approved)
        self.assertIsNone(result.screening)
        self.assertFalse(result.email_sent)
        self.email.send.assert_not_called()

    def test_auto_invite_creates_screening_and_sends(self):
        job_id = seed_job(self.session_factory, settings=job_settings(autoInviteOnLevel1Approval=True))
        application_id = seed_application(
            self.session_factory, job_id, self.user_id, consent_given=True, unified_score=70
        )

        result = self.service.approve_application(application_id)

        self.assertTrue(result.email_sent)
        self.assertIsNotNone(result.screening)
        message = self.email.send.call_args[0][0]
        self.assertEqual(message.to, 'jane@example.com')
        self.assertEqual(message.subject, 'Next steps at Acme')
        context = self.scoring.generate_invite_email.call_args[0][0]
        self.assertEqual(context['screening_link'], result.screening.screening_link)

        screenings = self._screenings()
        self.assertEqual(len(screenings), 1)
        self.assertIsNotNone(screenings[0].invite_sent_at)

    def test_auto_invite_below_threshold(self):
        job_id = seed_job(self.session_factory, settings=job_settings(autoInviteOnLevel1Approval=True))
        application_id = seed_application(
            self.session_factory, job_id, self.user_id, consent_given=True, unified_score=69
        )

        result = self.service.approve_application(application_id)

        self.assertTrue(result.application.level1_approved)
        self.assertFalse(result.email_sent)
        self.assertEqual(self._screenings(), [])

    def test_reuses_existing_screening(self):
        job_id = seed_job(self.session_factory, settings=job_settings(autoInviteOnLevel1Approval=True))
        application_id = seed_application(
            self.session_factory, job_id, self.user_id, consent_given=True, unified_score=90
        )

        first = self.service.approve_application(application_id)
        second = self.service.approve_application(application_id)

        self.assertEqual(first.screening.id, second.screening.id)
        self.assertEqual(len(self._screenings()), 1)

    def test_generation_failure_keeps_approval_without_invite_stamp(self):
        self.scoring.generate_invite_email.return_value = err()
        job_id = seed_job(self.session_factory, settings=job_settings(autoInviteOnLevel1Approval=True))
        application_id = seed_application(
            self.session_factory, job_id, self.user_id, consent_given=True, unified_score=90
        )

        result = self.service.approve_application(application_id)

        self.assertTrue(result.application.level1_approved)
        self.assertFalse(result.email_sent)
        self.email.send.assert_not_called()
        self.assertIsNone(self._screenings()[0].invite_sent_at)

    def test_send_failure_keeps_approval_and_stamps_attempt(self):
        self.email.send.return_value = EmailResult(ok=False, error='SMTP unavailable')
        job_id = seed_job(self.session_factory, settings=job_settings(autoInviteOnLevel1Approval=True))
        application_id = seed_application(
            self.session_factory, job_id, self.user_id, consent_given=True, unified_score=90
        )

        result = self.service.approve_application(application_id)

        self.assertTrue(self._application(application_id).level1_approved)
        self.assertFalse(result.email_sent)
        self.assertIsNotNone(self._screenings()[0].invite_sent_at)

    def test_dry_run_email_channel(self):
        self.service.email_channel = EmailChannel(dry_run=True)
        job_id = seed_job(self.session_factory, settings=job_settings(autoInviteOnLevel1Approval=True))
        application_id = seed_application(
            self.session_factory, job_id, self.user_id, consent_given=True, unified_score=90
        )

        self.assertTrue(self.service.approve_application(application_id).email_sent)


class TestConsentListAndRescore(ApplicationServiceTestCase):

    def setUp(self):
        super().setUp()
        self.user_a = seed_user(self.session_factory, email='a@example.com')
        self.user_b = seed_user(self.session_factory, email='b@example.com')
        self.app_a = seed_application(self.session_factory, self.job_id, self.user_a, unified_score=80,
                                      level1_approved=True, consent_given=True)
        self.app_b = seed_application(self.session_factory, self.job_id, self.user_b, unified_score=40)

    def test_record_consent(self):
        dto = self.service.record_consent(self.app_b)
        self.assertTrue(dto.consent_given)
        self.assertTrue(self._application(self.app_b).consent_given)

    def test_list_filters_and_sorting(self):
        items, total = self.service.list_applications(self.job_id, sort_by='score', sort_order='desc')
        self.assertEqual(total, 2)
        self.assertEqual([a.id for a in items], [self.app_a, self.app_b])

        items, total = self.service.list_applications(self.job_id, status='approved')
        self.assertEqual([a.id for a in items], [self.app_a])

        items, total = self.service.list_applications(self.job_id, status='pending')
        self.assertEqual([a.id for a in items], [self.app_b])

        items, total = self.service.list_applications(self.job_id, min_score=50)
        self.assertEqual([a.id for a in items], [self.app_a])

    def test_list_pagination(self):
        items, total = self.service.list_applications(self.job_id, sort_by='score', sort_order='asc', page=2, limit=1)
        self.assertEqual(total, 2)
        self.assertEqual([a.id for a in items], [self.app_a])

    def test_list_rejects_bad_filters(self):
        with self.assertRaises(ValidationError):
            self.service.list_applications(self.job_id, status='archived')
        with self.assertRaises(ValidationError):
            self.service.list_applications(self.job_id, sort_by='name')
        with self.assertRaises(NotFoundError):
            self.service.list_applications("00000000-0000-0000-0000-000000000000")

    def test_get_application_includes_scores(self):
        dto = self.service.get_application(self.app_a)
        self.assertEqual(dto.unified_score, 80)
        self.assertEqual(dto.candidate_email, 'a@example.com')

    def test_rescore_resets_and_enqueues(self):
        dto = self.service.rescore(self.app_a)
        self.assertEqual(dto.scoring_status, 'pending')
        self.orchestrator.score_application.assert_called_once_with(self.app_a)


if __name__ == '__main__':
    unittest.main()
