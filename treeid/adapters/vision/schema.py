"""
Response schema sent with every identification request, and the parser that
turns the model's JSON text into TreeData.
"""
import json
from typing import List, Optional
from pydantic import BaseModel, ValidationError
from treeid.orchestrator.contracts import TreeData
from treeid.orchestrator.errors import ResponseParseError, ResponseValidationError

PROMPT = "Identify the tree in this image."

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "commonName": {
            "type": "STRING",
            "description": "The common name of the tree.",
        },
        "scientificName": {
            "type": "STRING",
            "description": "The scientific (Latin) name of the tree.",
        },
        "description": {
            "type": "STRING",
            "description": (
                "A brief, interesting paragraph about the tree, including its "
                "characteristics and typical habitat."
            ),
        },
        "careTips": {
            "type": "ARRAY",
            "description": "A short list of 3-4 essential care tips for this tree if it were in a garden.",
            "items": {"type": "STRING"},
        },
    },
    "required": ["commonName", "scientificName", "description"],
}


class TreeDataIn(BaseModel):
    commonName: str
    scientificName: str
    description: str
    careTips: Optional[List[str]] = None


def parse_tree_data(text: str) -> TreeData:
    try:
        raw = json.loads(text.strip())
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"response was not valid JSON ({e})") from e

    try:
        parsed = TreeDataIn.model_validate(raw)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors())
        raise ResponseValidationError(f"response did not match the tree schema ({fields})") from e

    return TreeData(
        common_name=parsed.commonName,
        scientific_name=parsed.scientificName,
        description=parsed.description,
        care_tips=tuple(parsed.careTips or ()),
    )
