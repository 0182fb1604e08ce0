"""
Template loading utilities for the assistant.

Provides functions to load versioned prompt templates from files.
"""
from pathlib import Path
from typing import Any, Dict, Optional

from proworker.lib.logging import get_logger


logger = get_logger(__name__)


# Template directory
TEMPLATES_DIR = Path(__file__).parent / "templates"


def load_template(
    agent_type: str = "assistant",
    locale: str = "en",
    version: int = 1
) -> Optional[str]:
    """
    Load prompt template from file.

    Args:
        agent_type: Template family (assistant)
        locale: Language code (en)
        version: Template version number

    Returns:
        Template content as string, or None if not found

    Example:
        >>> template = load_template("assistant", "en", 1)
        >>> prompt = format_template(template, {"language": "English", ...})
    """
    filename = f"{agent_type}_{locale}_v{version}.txt"
    template_path = TEMPLATES_DIR / filename

    if not template_path.exists():
        logger.warning(f"Template file not found: {template_path}")
        return None

    try:
        content = template_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to load template {filename}: {e}")
        return None

    logger.debug(f"Loaded template: {filename}")
    return content


def format_template(template: str, context: Dict[str, Any]) -> str:
    """
    Format template with context variables.

    Missing variables leave the template unformatted rather than failing
    the request.
    """
    try:
        return template.format(**context)
    except (KeyError, IndexError, ValueError) as e:
        logger.error(f"Template formatting error: {e}")
        return template
