"""Intent extractor protocol.

The natural-language understanding step lives outside this service. It
turns a prompt into intent JSON (see dto.intent for the format).
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IntentExtractor(Protocol):
    """Protocol for NLU backends producing intent JSON."""

    def extract(self, prompt: str, api: str) -> str:
        """Extract an intent from a prompt.

        Args:
            prompt: The user's natural-language prompt
            api: API variant the user asked for

        Returns:
            Intent JSON text
        """
        ...
