"""Sample resume data and a stand-in completion client shared by the tests."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from resume_api.services.completion_service import parse_completion


SAMPLE_RECORD: Dict[str, Any] = {
    "personal_info": {
        "name": "Priya Raman",
        "email": "priya.raman@mailbox.org",
        "phone": "+44 7700 900123",
        "linkedin": "https://www.linkedin.com/in/priyaraman",
        "languages": "English, Tamil",
    },
    "education": [
        {"degree": "MSc Computer Science", "university": "University of Leeds", "year": "2019"}
    ],
    "work_experience": [
        {
            "job_title": "Backend Engineer",
            "company": "Northwind Logistics",
            "duration": "2019 - 2024",
            "responsibilities": ["Built shipment tracking APIs", "Ran the on-call rota"],
        }
    ],
    "skills": {"technical": ["Python", "PostgreSQL"], "soft": ["Mentoring"]},
    "certifications": [{"name": "AWS Solutions Architect", "issuer": "Amazon", "year": 2022}],
    "projects": [{"title": "Route Planner", "technology": "FastAPI", "time_period": "2023"}],
    "spam": False,
}


class StubCompletionClient:
    """Stands in for ``CompletionClient``; returns a fixed reply."""

    def __init__(
        self,
        result: Optional[Dict[str, Any]] = None,
        raw: Optional[str] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.result = result
        self.raw = raw
        self.error = error
        self.calls: List[str] = []

    async def complete(self, resume_text: str) -> Dict[str, Any]:
        self.calls.append(resume_text)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return parse_completion(self.raw)
        return json.loads(json.dumps(self.result))


