import jsonschema

from .models import Payload
from .schema_loader import load_schema

SCRIPT_SCHEMA = "Script.v1.json"


def validate_script(data: dict) -> None:
    """Validate a script dict against the canonical Script.v1.json contract.

    Raises jsonschema.ValidationError if non-conformant.
    """
    schema = load_schema(SCRIPT_SCHEMA)
    jsonschema.validate(data, schema)


def validate_script_model(payload: Payload) -> None:
    """Validate a Payload model by projecting it to its camelCase wire form.

    Raises jsonschema.ValidationError if the projected document is non-conformant.
    """
    validate_script(payload.to_json_dict())
