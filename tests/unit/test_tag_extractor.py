#!/usr/bin/env python3
"""
Test suite for embedding-ranked tag extraction.
"""

import unittest
from types import SimpleNamespace
from typing import List
from unittest.mock import Mock

from core.llm.interfaces import LLMProvider
from core.tags.extractor import TagEmbeddingCache, TagExtractor
from core.tags.vocabulary import COMMON_TAGS, dedupe_tags, normalize_tag_name

VOCABULARY = ['Python', 'Golang', 'React', 'Kubernetes']


class KeywordEmbeddings(LLMProvider):
    """One dimension per vocabulary tag; text vectors count keyword hits."""

    def __init__(self, fail_batch=False, fail_text=False):
        self.fail_batch = fail_batch
        self.fail_text = fail_text
        self.embedded: List[str] = []

    def complete_json(self, system_prompt, user_message, temperature=None):
        raise NotImplementedError

    def generate_embedding(self, text):
        if text in VOCABULARY:
            self.embedded.append(text)
        elif self.fail_text:
            raise RuntimeError("embedding endpoint down")
        lowered = text.lower()
        keywords = ['python', 'golang', 'react', 'kubernetes']
        return [float(lowered.count(k)) for k in keywords]

    def generate_embeddings(self, texts):
        if self.fail_batch:
            raise RuntimeError("batch endpoint down")
        return [self.generate_embedding(t) for t in texts]


class TestTagExtractor(unittest.TestCase):

    def test_extract_normalizes_aliases(self):
        extractor = TagExtractor(KeywordEmbeddings(), vocabulary=VOCABULARY, min_similarity=0.3)
        tags = extractor.extract("Golang and Python services, more Python")
        self.assertEqual(tags, ['Python', 'Go'])

    def test_extract_blank_text(self):
        extractor = TagExtractor(KeywordEmbeddings(), vocabulary=VOCABULARY)
        self.assertEqual(extractor.extract("   "), [])
        self.assertEqual(extractor.extract(None), [])

    def test_extract_failure_raises(self):
        extractor = TagExtractor(KeywordEmbeddings(fail_text=True), vocabulary=VOCABULARY)
        with self.assertRaises(RuntimeError):
            extractor.extract("Python developer")

    def test_extract_without_vocabulary_embeddings_raises(self):
        llm = Mock(spec=LLMProvider)
        llm.generate_embeddings.side_effect = RuntimeError("batch endpoint down")
        llm.generate_embedding.side_effect = RuntimeError("embedding endpoint down")
        extractor = TagExtractor(llm, vocabulary=VOCABULARY)
        with self.assertRaises(RuntimeError):
            extractor.extract("Python developer")

    def test_rank_respects_top_k(self):
        extractor = TagExtractor(KeywordEmbeddings(), vocabulary=VOCABULARY, min_similarity=0.1, top_k=1)
        ranked = extractor.rank("python react react")
        self.assertEqual([tag for tag, _ in ranked], ['React'])

    def test_vocabulary_embedded_once(self):
        llm = KeywordEmbeddings()
        cache = TagEmbeddingCache()
        extractor = TagExtractor(llm, cache=cache, vocabulary=VOCABULARY)
        extractor.extract("python")
        extractor.extract("react")
        self.assertEqual(len(cache), len(VOCABULARY))
        self.assertEqual(sorted(llm.embedded), sorted(VOCABULARY))

    def test_batch_failure_falls_back_to_single(self):
        cache = TagEmbeddingCache()
        extractor = TagExtractor(KeywordEmbeddings(fail_batch=True), cache=cache, vocabulary=VOCABULARY)
        self.assertEqual(extractor.extract("kubernetes"), ['Kubernetes'])
        self.assertEqual(len(cache), len(VOCABULARY))

    def test_extract_for_job_adds_skills_and_role(self):
        extractor = TagExtractor(KeywordEmbeddings(), vocabulary=VOCABULARY, min_similarity=0.3)
        job = SimpleNamespace(
            raw_jd="Build python services on kubernetes",
            role="Platform Engineer",
            seniority="Senior",
            must_have_skills=["Python", "k8s"],
            nice_to_have=["Terraform", " "],
        )
        tags = extractor.extract_for_job(job)
        self.assertEqual(tags[:2], ['Python', 'Kubernetes'])
        self.assertIn('Terraform', tags)
        self.assertEqual(tags[-1], 'Platform Engineer')
        self.assertEqual(len(tags), len({t.lower() for t in tags}))

    def test_extract_for_job_fallback(self):
        extractor = TagExtractor(KeywordEmbeddings(fail_text=True), vocabulary=VOCABULARY)
        job = SimpleNamespace(raw_jd="anything", role="Go Developer", seniority=None,
                              must_have_skills=["golang"], nice_to_have=[])
        self.assertEqual(extractor.extract_for_job(job), ['Go Developer', 'Go'])

    def test_extract_for_job_cap(self):
        extractor = TagExtractor(KeywordEmbeddings(fail_text=True), vocabulary=VOCABULARY, max_job_tags=2)
        job = SimpleNamespace(raw_jd="", role="Dev", seniority=None,
                              must_have_skills=["A", "B", "C"], nice_to_have=[])
        self.assertEqual(extractor.extract_for_job(job), ['Dev', 'A'])


class TestVocabulary(unittest.TestCase):

    def test_common_tags_unique(self):
        self.assertEqual(len(COMMON_TAGS), len(set(COMMON_TAGS)))

    def test_normalize_aliases(self):
        self.assertEqual(normalize_tag_name("golang"), "Go")
        self.assertEqual(normalize_tag_name(" K8s "), "Kubernetes")
        self.assertEqual(normalize_tag_name("postgres"), "PostgreSQL")
        self.assertEqual(normalize_tag_name("FastAPI"), "FastAPI")

    def test_dedupe_keeps_first_spelling(self):
        self.assertEqual(dedupe_tags(["Python", "python", "", " AWS ", None]), ["Python", "AWS"])


if __name__ == '__main__':
    unittest.main()
