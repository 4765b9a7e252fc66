from pathlib import Path

import pytest

from folio.api.deps import PortableTextRulesAdapter
from folio.rules.loader import load_rules
from folio.rules.models import Rules

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def rules_path() -> Path:
    return PROJECT_ROOT / "rules.yaml"


@pytest.fixture
def rules(rules_path: Path) -> Rules:
    """Load REAL rules from project root."""
    return load_rules(rules_path)


@pytest.fixture
def rules_adapter(rules: Rules) -> PortableTextRulesAdapter:
    return PortableTextRulesAdapter(rules)


@pytest.fixture
def article_body() -> list[dict]:
    """A small article body covering text, marks, lists and custom blocks."""
    return [
        {
            "_key": "intro",
            "_type": "block",
            "style": "normal",
            "markDefs": [{"_key": "docs", "_type": "link", "href": "https://example.com/docs"}],
            "children": [
                {"_type": "span", "text": "Read the ", "marks": []},
                {"_type": "span", "text": "docs", "marks": ["docs"]},
            ],
        },
        {
            "_key": "image-1",
            "_type": "image",
            "alt": "Inline image caption",
            "asset": {
                "url": "https://cdn.sanity.io/images/demo/production/example.jpg",
                "width": 1200,
                "height": 800,
            },
        },
        {
            "_key": "code-1",
            "_type": "code",
            "code": "console.log('hello')",
            "language": "ts",
            "filename": "example.ts",
        },
        {
            "_key": "item-1",
            "_type": "block",
            "listItem": "bullet",
            "children": [{"_type": "span", "text": "First"}],
        },
        {
            "_key": "item-2",
            "_type": "block",
            "listItem": "bullet",
            "children": [{"_type": "span", "text": "Second"}],
        },
    ]
