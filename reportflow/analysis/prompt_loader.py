from pathlib import Path

from reportflow.analysis.exceptions import AnalysisError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def _read_template(path: Path, kind: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AnalysisError(f"Failed to load {kind} template: {exc}") from exc


def load_analysis_prompt(path: Path | None = None) -> str:
    """Load the analysis prompt template.

    Placeholders: ``{report_type}`` and ``{report_text}``.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    return _read_template(path or _DEFAULT_PROMPT_DIR / "analysis_prompt.txt", "analysis prompt")


def load_image_prompt(path: Path | None = None) -> str:
    """Load the illustration-prompt template.

    Placeholders: ``{report_type}`` and ``{analysis_text}``.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    return _read_template(path or _DEFAULT_PROMPT_DIR / "image_prompt.txt", "image prompt")
