from pathlib import Path

from app.simplification.exceptions import SimplificationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_system_prompt(path: Path | None = None) -> str:
    """Load the system prompt.

    Args:
        path: Path to the prompt file. Defaults to the bundled system_prompt.txt.

    Raises:
        SimplificationError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "system_prompt.txt", "system prompt")


def load_user_prompt_template(path: Path | None = None) -> str:
    """Load the user prompt template.

    The template has ``{language}`` and ``{redacted_text}`` placeholders.

    Raises:
        SimplificationError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "user_prompt.txt", "user prompt template")


def _read(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SimplificationError(f"Failed to load {what}: {exc}") from exc
