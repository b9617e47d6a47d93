#!/usr/bin/env python3
"""
Test suite for the OpenAI provider and its retry helpers.
"""

import unittest
from types import SimpleNamespace
from unittest.mock import Mock, patch

import httpx
import openai

from core.llm.openai_service import OpenAIService, declared_wait_seconds, reset_duration_seconds

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _rate_limit_error(headers):
    response = httpx.Response(429, headers=headers, request=_REQUEST)
    return openai.RateLimitError("rate limited", response=response, body=None)


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestRetryHelpers(unittest.TestCase):

    def test_reset_duration_seconds(self):
        self.assertEqual(reset_duration_seconds("1s"), 1.0)
        self.assertAlmostEqual(reset_duration_seconds("500ms"), 0.5)
        self.assertEqual(reset_duration_seconds("1m30s"), 90.0)
        self.assertEqual(reset_duration_seconds(""), 0.0)

    def test_wait_uses_longest_header(self):
        error = _rate_limit_error({"retry-after": "3", "x-ratelimit-reset-tokens": "6s"})
        self.assertEqual(declared_wait_seconds(error), 6.0)

    def test_wait_ignores_bad_retry_after(self):
        error = _rate_limit_error({"retry-after": "soon"})
        self.assertEqual(declared_wait_seconds(error), 0.0)


class TestOpenAIService(unittest.TestCase):

    def setUp(self):
        self.service = OpenAIService(api_key="sk-test", model_config={'model': 'gpt-test', 'temperature': 0.1})
        self.service.client = Mock()

    def test_complete_json(self):
        self.service.client.chat.completions.create.return_value = _completion('{"ok": true}')

        self.assertEqual(self.service.complete_json("system", "user"), '{"ok": true}')

        kwargs = self.service.client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs['model'], 'gpt-test')
        self.assertEqual(kwargs['temperature'], 0.1)
        self.assertEqual(kwargs['response_format'], {"type": "json_object"})

    def test_complete_json_temperature_override(self):
        self.service.client.chat.completions.create.return_value = _completion('{}')
        self.service.complete_json("system", "user", temperature=0.0)
        self.assertEqual(self.service.client.chat.completions.create.call_args.kwargs['temperature'], 0.0)

    def test_empty_choices(self):
        self.service.client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        self.assertEqual(self.service.complete_json("system", "user"), '')

    def test_transient_error_retried(self):
        self.service.client.chat.completions.create.side_effect = [
            openai.APIConnectionError(request=_REQUEST),
            _completion('{"ok": true}'),
        ]
        with patch('tenacity.nap.time.sleep'):
            self.assertEqual(self.service.complete_json("system", "user"), '{"ok": true}')
        self.assertEqual(self.service.client.chat.completions.create.call_count, 2)

    def test_retries_bounded_by_config(self):
        service = OpenAIService(api_key="sk-test", max_retries=2)
        service.client = Mock()
        service.client.chat.completions.create.side_effect = openai.APIConnectionError(request=_REQUEST)
        with patch('tenacity.nap.time.sleep'):
            with self.assertRaises(openai.APIConnectionError):
                service.complete_json("system", "user")
        self.assertEqual(service.client.chat.completions.create.call_count, 2)

    def test_non_retryable_error_raised_immediately(self):
        response = httpx.Response(400, request=_REQUEST)
        self.service.client.chat.completions.create.side_effect = openai.BadRequestError(
            "bad request", response=response, body=None
        )
        with self.assertRaises(openai.BadRequestError):
            self.service.complete_json("system", "user")
        self.assertEqual(self.service.client.chat.completions.create.call_count, 1)

    def test_embeddings_preserve_order(self):
        self.service.client.embeddings.create.return_value = SimpleNamespace(data=[
            SimpleNamespace(index=1, embedding=[0.0, 1.0]),
            SimpleNamespace(index=0, embedding=[1.0, 0.0]),
        ])
        self.assertEqual(self.service.generate_embeddings(["a", "b"]), [[1.0, 0.0], [0.0, 1.0]])

    def test_embeddings_empty_input(self):
        self.assertEqual(self.service.generate_embeddings([]), [])
        self.service.client.embeddings.create.assert_not_called()


if __name__ == '__main__':
    unittest.main()
