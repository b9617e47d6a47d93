"""Tag extraction."""
from core.tags.extractor import TagEmbeddingCache, TagExtractor
from core.tags.vocabulary import COMMON_TAGS, normalize_tag_name

__all__ = ['TagEmbeddingCache', 'TagExtractor', 'COMMON_TAGS', 'normalize_tag_name']
