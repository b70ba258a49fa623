"""Definition of the cloze note type cards are added with."""

from typing import Any

FIELD_NAME = "Text"
TEMPLATE_NAME = "Cloze"

FRONT_TEMPLATE = "{{cloze:Text}}"
BACK_TEMPLATE = "{{cloze:Text}}"

CARD_CSS = """
.card {
 font-family: Consolas, 'Courier New', monospace;
 font-size: 14px;
 text-align: left;
 color: #d4d4d4;
 background-color: #1e1e1e;
}

.code-cloze {
 padding: 20px;
 line-height: 1.5;
 border-radius: 5px;
 background-color: #1e1e1e;
}

.code-cloze pre {
 margin: 0;
 white-space: pre-wrap;
 font-family: inherit;
}

.code-cloze-header {
 margin-bottom: 8px;
 font-size: 12px;
 color: #9cdcfe;
}

.code-cloze-header .title {
 font-weight: bold;
 font-size: 16px;
 color: #ffffff;
}

.code-cloze-header .tags {
 color: #808080;
}

.code-cloze-scope {
 margin-bottom: 8px;
 font-size: 12px;
 color: #c586c0;
}

.cloze {
 font-weight: bold;
 color: #1e1e1e;
 background-color: #ffd700;
}
.nightMode .cloze {
 color: #1e1e1e;
 background-color: #ffd700;
}
"""


def templates() -> dict[str, dict[str, str]]:
    """Templates keyed by name, as ``updateModelTemplates`` expects."""
    return {TEMPLATE_NAME: {"Front": FRONT_TEMPLATE, "Back": BACK_TEMPLATE}}


def create_model_params(model_name: str) -> dict[str, Any]:
    """Parameters for the ``createModel`` action."""
    return {
        "modelName": model_name,
        "inOrderFields": [FIELD_NAME],
        "css": CARD_CSS,
        "isCloze": True,
        "cardTemplates": [
            {"Name": TEMPLATE_NAME, "Front": FRONT_TEMPLATE, "Back": BACK_TEMPLATE}
        ],
    }
