"""LLM-backed scoring adapter and its tagged results."""
from core.scoring.adapter import ScoringAdapter
from core.scoring.results import AdapterResult, Err, Ok

__all__ = ['ScoringAdapter', 'AdapterResult', 'Ok', 'Err']
