from pathlib import Path

import yaml
from pydantic import ValidationError

from content_pipeline.rules.models import Rules

DEFAULT_RULES_PATH = Path(__file__).with_name("rules.yaml")


def _strip_yaml_fence(content: str) -> str:
    """Return the body of the first ```yaml block, or the content unchanged."""
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break

        if in_block:
            yaml_lines.append(line)

    if found_block:
        return "\n".join(yaml_lines)
    return content


def parse_rules(content: str) -> Rules:
    """
    Parse and validate rules from YAML text.
    Raises ValueError if the YAML or the schema is invalid.
    """
    try:
        data = yaml.safe_load(_strip_yaml_fence(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e


def load_rules(path: Path = DEFAULT_RULES_PATH) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path, encoding="utf-8") as f:
        content = f.read()

    return parse_rules(content)
