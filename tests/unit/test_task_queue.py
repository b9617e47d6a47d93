#!/usr/bin/env python3
"""
Test suite for the background task queue.
"""

import threading
import unittest
from unittest.mock import MagicMock, Mock, patch

from pipeline.tasks import BackgroundTaskQueue, match_job_task, score_application_task
from pipeline.worker import redacted


def remote_task(value):
    return value


class TestBackgroundTaskQueue(unittest.TestCase):

    def test_inline_runs_local_func(self):
        queue = BackgroundTaskQueue(run_inline=True)
        local = Mock()
        self.assertIsNone(queue.enqueue(remote_task, 'a1', local_func=local))
        local.assert_called_once_with('a1')
        self.assertEqual(queue.mode, 'inline')

    def test_inline_defaults_to_func(self):
        calls = []
        queue = BackgroundTaskQueue(run_inline=True)
        queue.enqueue(calls.append, 'x')
        self.assertEqual(calls, ['x'])

    def test_thread_mode(self):
        done = threading.Event()
        seen = []

        def local(value):
            seen.append(value)
            done.set()

        queue = BackgroundTaskQueue(use_async_queue=False)
        self.assertEqual(queue.mode, 'thread')
        queue.enqueue(remote_task, 'j1', local_func=local)
        self.assertTrue(done.wait(5))
        self.assertEqual(seen, ['j1'])

    def test_thread_failure_is_logged(self):
        def failing():
            raise RuntimeError('boom')

        with self.assertLogs('pipeline.tasks', level='ERROR'):
            BackgroundTaskQueue._run_safely(failing, ())

    @patch('pipeline.tasks.Redis')
    def test_redis_unavailable_falls_back_to_thread(self, redis_cls):
        redis_cls.from_url.return_value.ping.side_effect = ConnectionError('refused')
        queue = BackgroundTaskQueue(redis_url='redis://nowhere:6379/0')
        self.assertEqual(queue.mode, 'thread')
        self.assertEqual(queue.health(), {'mode': 'thread', 'queue': 'talentscout', 'redis_connected': False})

    @patch('pipeline.tasks.Queue')
    @patch('pipeline.tasks.Redis')
    def test_rq_mode(self, redis_cls, queue_cls):
        rq_queue = MagicMock()
        rq_queue.enqueue.return_value = Mock(id='rq-1')
        queue_cls.return_value = rq_queue
        local = Mock()

        queue = BackgroundTaskQueue(redis_url='redis://cache:6379/0', job_timeout='5m')
        job_id = queue.enqueue(remote_task, 'a1', local_func=local)

        self.assertEqual(queue.mode, 'rq')
        self.assertEqual(job_id, 'rq-1')
        rq_queue.enqueue.assert_called_once_with(remote_task, 'a1', job_timeout='5m', result_ttl=86400)
        local.assert_not_called()


class TestWorkerTasks(unittest.TestCase):

    @patch('pipeline.tasks._worker_context')
    def test_score_application_task(self, context):
        context.orchestrator.score_application.return_value.to_dict.return_value = {'status': 'scored'}
        self.assertEqual(score_application_task('a1'), {'status': 'scored'})
        context.orchestrator.score_application.assert_called_once_with('a1')

    @patch('pipeline.tasks._worker_context')
    def test_match_job_task(self, context):
        context.matcher.match_job_to_candidates.return_value.to_dict.return_value = {'matched_candidates': 2}
        self.assertEqual(match_job_task('j1'), {'matched_candidates': 2})

    def test_redis_url_redacted(self):
        self.assertEqual(redacted('redis://:s3cret@cache:6379/0'), 'redis://:***@cache:6379/0')
        self.assertEqual(redacted('redis://localhost:6379/0'), 'redis://localhost:6379/0')


if __name__ == '__main__':
    unittest.main()
