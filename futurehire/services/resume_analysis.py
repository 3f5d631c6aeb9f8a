# futurehire/services/resume_analysis.py
from abc import ABC, abstractmethod
from typing import Any, Dict


class ResumeAnalyzer(ABC):
    """External resume evaluation service."""

    @abstractmethod
    async def analyze(self, filename: str, content: bytes) -> Dict[str, Any]:
        ...


class MockResumeAnalyzer(ResumeAnalyzer):
    """
    Stand-in for the real evaluation service. The result is opaque to the
    rest of the system; only its replace-wholesale semantics matter.
    """

    async def analyze(self, filename: str, content: bytes) -> Dict[str, Any]:
        return {
            "skills": ["JavaScript", "React", "Node.js"],
            "projects": ["E-commerce Website", "Portfolio Site"],
            "weakPoints": ["Lack of experience in backend databases"],
            "suggestions": ["Add more technical projects", "Improve resume formatting"],
            "roleSuggestions": ["Frontend Developer", "Full Stack Developer"],
            "companyMatches": ["Google", "Microsoft", "Amazon"],
        }
