import pytest

from content_pipeline.adapters.rules import RulesAdapter
from content_pipeline.components.render_content import ContentRenderer, build_config
from content_pipeline.rules.loader import DEFAULT_RULES_PATH, load_rules
from content_pipeline.rules.models import Rules


@pytest.fixture
def rules() -> Rules:
    """Load the REAL rules shipped with the package."""
    if not DEFAULT_RULES_PATH.exists():
        raise FileNotFoundError(f"Rules not found at {DEFAULT_RULES_PATH}")
    return load_rules(DEFAULT_RULES_PATH)


@pytest.fixture
def rules_adapter(rules: Rules) -> RulesAdapter:
    return RulesAdapter(rules)


@pytest.fixture
def renderer(rules_adapter: RulesAdapter) -> ContentRenderer:
    return ContentRenderer(config=build_config(rules_adapter))
