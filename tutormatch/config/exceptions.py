"""Custom exceptions for configuration management."""

from pathlib import Path
from typing import List, Optional, Union

# Extra suggestion shown when a failure involves the active profile store
STORE_BACKEND_HINTS = {
    "sql": "The sql store reads DATABASE_URL (default: sqlite:///./data/tutormatch.db); "
    "seed it with scripts/seed_sample_profiles.py",
    "rest": "The rest store needs BACKEND_URL and BACKEND_API_KEY; "
    "set store.backend: sql to use the local database instead",
}


class ConfigurationError(Exception):
    """
    Exception raised when configuration validation fails.

    Collects every validation error found so that the user can fix them all
    in one pass. The rendered message names the offending config file and,
    when the failure concerns a profile store, ends with a hint for that
    backend.

    Attributes:
        message: Primary error message
        errors: Specific validation errors
        suggestions: Suggestions for fixing them, backend hint last
        config_file: Config file being loaded, if any
        store_backend: Store backend the failure applies to, if any
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
        config_file: Optional[Union[str, Path]] = None,
        store_backend: Optional[str] = None,
    ):
        self.message = message
        self.errors = errors or []
        self.config_file = Path(config_file) if config_file else None
        self.store_backend = store_backend

        # Keep first occurrence; callers often pass overlapping advice
        self.suggestions = list(dict.fromkeys(suggestions or []))
        hint = STORE_BACKEND_HINTS.get(store_backend or "")
        if hint and hint not in self.suggestions:
            self.suggestions.append(hint)

        super().__init__(self._format_message())

    def _format_message(self) -> str:
        header = self.message
        if self.config_file is not None:
            header = f"{header} [{self.config_file}]"
        parts = [header]

        if self.errors:
            parts.append("\nValidation Errors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)
