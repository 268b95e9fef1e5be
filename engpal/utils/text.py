"""
Text helpers shared by validators and response parsing
"""


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens; empty or blank text has 0"""
    if not text or not text.strip():
        return 0
    return len(text.split())


def strip_code_fence(text: str) -> str:
    """
    Remove the markdown fence models like to wrap JSON in

    Handles a leading ```json or ``` marker and a trailing ```
    independently, so a response missing one side still comes out clean.
    """
    cleaned = (text or "").strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def truncate(text: str, limit: int = 500) -> str:
    """Shorten text for log lines"""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
