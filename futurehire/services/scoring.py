# futurehire/services/scoring.py
"""
Deterministic placeholder scorer.

Given a test id and submitted answers, return a score in [0, 100] derived
from a hash of the canonical submission, so repeated submissions score the
same. A real assessment algorithm replaces this collaborator.
"""
from abc import ABC, abstractmethod
from typing import Any
import hashlib
import json


class Scorer(ABC):

    @abstractmethod
    def score(self, test_id: str, answers: Any) -> int:
        """Return a score in [0, 100] for one submission."""
        ...


class DeterministicScorer(Scorer):

    def score(self, test_id: str, answers: Any) -> int:
        s = json.dumps({"test_id": test_id, "answers": answers}, sort_keys=True, ensure_ascii=False, default=str)
        h = hashlib.sha256(s.encode("utf-8")).hexdigest()
        # take first 8 hex digits to int, fold into [0, 100]
        return int(h[:8], 16) % 101
