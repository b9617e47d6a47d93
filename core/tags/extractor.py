#!/usr/bin/env python3
"""
Tag Extractor - Embedding-ranked technology tags for jobs and resumes.

Text is embedded once and compared by cosine similarity against every tag
in the vocabulary; the best tags above a similarity floor are kept. Tag
embeddings live in a TagEmbeddingCache for the lifetime of the process.
"""
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from core.llm.interfaces import LLMProvider
from core.tags.vocabulary import COMMON_TAGS, dedupe_tags, normalize_tag_name

logger = logging.getLogger(__name__)

EMBEDDING_BATCH_SIZE = 100


def _row_normed(x: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    x = np.asarray(x, dtype=np.float32)
    n = np.linalg.norm(x, axis=1, keepdims=True)
    return x / np.maximum(n, eps)


class TagEmbeddingCache:
    """
    Vocabulary tag -> embedding vector.

    Process lifetime, no eviction. Safe to share between threads.
    """

    def __init__(self):
        self._vectors: Dict[str, np.ndarray] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._vectors)

    def __contains__(self, tag: str) -> bool:
        return tag in self._vectors

    def get(self, tag: str) -> Optional[np.ndarray]:
        return self._vectors.get(tag)

    def put(self, tag: str, vector: Iterable[float]) -> None:
        with self._lock:
            self._vectors[tag] = np.asarray(vector, dtype=np.float32)

    def missing(self, tags: Iterable[str]) -> List[str]:
        return [tag for tag in tags if tag not in self._vectors]

    def matrix(self, tags: Iterable[str]) -> Tuple[List[str], Optional[np.ndarray]]:
        """Stack the cached vectors for ``tags`` (skipping uncached ones) into a row-normalized matrix."""
        present = [tag for tag in tags if tag in self._vectors]
        if not present:
            return [], None
        return present, _row_normed(np.vstack([self._vectors[tag] for tag in present]))


class TagExtractor:
    """Extracts normalized tags from free text and from job postings."""

    def __init__(
        self,
        llm: LLMProvider,
        cache: Optional[TagEmbeddingCache] = None,
        vocabulary: Optional[List[str]] = None,
        top_k: int = 20,
        min_similarity: float = 0.25,
        max_job_tags: int = 25
    ):
        self.llm = llm
        self.cache = cache if cache is not None else TagEmbeddingCache()
        self.vocabulary = vocabulary or COMMON_TAGS
        self.top_k = top_k
        self.min_similarity = min_similarity
        self.max_job_tags = max_job_tags

    def _ensure_vocabulary_embeddings(self) -> None:
        missing = self.cache.missing(self.vocabulary)
        if not missing:
            return

        logger.info(f"Embedding {len(missing)} vocabulary tags")
        for start in range(0, len(missing), EMBEDDING_BATCH_SIZE):
            chunk = missing[start:start + EMBEDDING_BATCH_SIZE]
            try:
                vectors = self.llm.generate_embeddings(chunk)
                for tag, vector in zip(chunk, vectors):
                    self.cache.put(tag, vector)
            except Exception as e:
                logger.warning(f"Batch tag embedding failed ({e}); falling back to one tag at a time")
                for tag in chunk:
                    try:
                        self.cache.put(tag, self.llm.generate_embedding(tag))
                    except Exception as tag_error:
                        # Tag is skipped for this run and retried next time
                        logger.error(f"Error embedding tag '{tag}': {tag_error}")

    def rank(self, text: str, top_k: Optional[int] = None) -> List[Tuple[str, float]]:
        """
        Rank vocabulary tags by cosine similarity to ``text``.

        Returns:
            (tag, similarity) pairs at or above ``min_similarity``, best first,
            at most ``top_k`` of them. Raises if the text cannot be embedded
            or no vocabulary tag has an embedding.
        """
        self._ensure_vocabulary_embeddings()
        tags, tag_matrix = self.cache.matrix(self.vocabulary)
        if tag_matrix is None:
            raise RuntimeError("No vocabulary tag embeddings available")

        text_vec = _row_normed(np.asarray([self.llm.generate_embedding(text)], dtype=np.float32))
        similarities = (tag_matrix @ text_vec.T).ravel()

        order = np.argsort(-similarities, kind='stable')
        ranked = [
            (tags[i], float(similarities[i]))
            for i in order
            if similarities[i] >= self.min_similarity
        ]
        return ranked[:top_k or self.top_k]

    def extract(self, text: Optional[str]) -> List[str]:
        """
        Normalized, deduplicated tags for a resume or any free text.

        Blank text yields []. Embedding failures propagate so callers can keep
        previously stored tags.
        """
        if not text or not text.strip():
            return []
        ranked = self.rank(text)
        return dedupe_tags(normalize_tag_name(tag) for tag, _ in ranked)

    def extract_for_job(self, job: Any) -> List[str]:
        """
        Tags for a job: embedding-ranked tags, then explicit skills, then the
        role if no tag already covers it. Capped at ``max_job_tags``.
        Falls back to role + skills when embeddings are unavailable.
        """
        skills = [s for s in list(job.must_have_skills or []) + list(job.nice_to_have or []) if s and s.strip()]
        job_text = ' '.join(
            part for part in [job.raw_jd or '', job.role or '', job.seniority or '', *skills] if part
        )

        try:
            ranked = self.rank(job_text)
        except Exception as e:
            logger.error(f"Job tag extraction failed, using explicit skills: {e}")
            fallback = [job.role] + skills if job.role else skills
            return dedupe_tags(normalize_tag_name(tag) for tag in fallback)[:self.max_job_tags]

        tags = [normalize_tag_name(tag) for tag, _ in ranked]
        lowered = {t.lower() for t in tags}
        for skill in skills:
            normalized = normalize_tag_name(skill)
            if normalized.lower() not in lowered:
                tags.append(normalized)
                lowered.add(normalized.lower())

        if job.role:
            role = normalize_tag_name(job.role)
            if not any(role.lower() in t.lower() for t in tags):
                tags.append(role)

        return dedupe_tags(tags)[:self.max_job_tags]
