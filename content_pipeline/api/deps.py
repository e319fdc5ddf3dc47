import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from content_pipeline.adapters.rules import RulesAdapter
from content_pipeline.components.render_content import ContentRenderer, build_config
from content_pipeline.rules.loader import DEFAULT_RULES_PATH, load_rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        rules_path = os.environ.get("CONTENT_PIPELINE_RULES")
        self.rules_path = Path(rules_path) if rules_path else DEFAULT_RULES_PATH


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules_adapter() -> RulesAdapter:
    return RulesAdapter(load_rules(get_settings().rules_path))


# --- Services ---
def get_content_renderer(
    rules: RulesAdapter = Depends(get_rules_adapter),
) -> ContentRenderer:
    return ContentRenderer(config=build_config(rules))
