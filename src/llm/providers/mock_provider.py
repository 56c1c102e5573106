from __future__ import annotations
import json
from llm.providers.base import LLMProvider

class MockProvider(LLMProvider):
    name = "mock"

    def generate(self, *, system: str, user: str, json_mode: bool = False) -> str:
        """
        Returns a canned recommendation reply so the app runs without an API key.
        """
        if "top 5 tasks" in user.lower():
            return json.dumps({
                "recommendations": [
                    {
                        "taskName": "Finish the quarterly report",
                        "sessionDuration": 90,
                        "priority": 1,
                        "reason": "Deadline in 3 days and already half done",
                        "currentCompletion": 50,
                        "targetCompletion": 80,
                        "deadline": None,
                        "timeRemaining": "No deadline"
                    },
                    {
                        "taskName": "Review pull requests",
                        "sessionDuration": 30,
                        "priority": 2,
                        "reason": "Short session that unblocks teammates",
                        "currentCompletion": 0,
                        "targetCompletion": 100,
                        "deadline": None,
                        "timeRemaining": "No deadline"
                    }
                ]
            })

        # Default fallback
        return "{}"
