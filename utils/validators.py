from pydantic import ValidationError as SchemaError

from utils.errors import ValidationError


def format_schema_errors(exc):
    """Turn a pydantic error into {"details.salary": ["..."], ...}"""
    errors = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "payload"
        message = err["msg"]
        # pydantic prefixes custom ValueError messages
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(field, []).append(message)
    return errors


def validate_payload(schema, data):
    """Validate request data against a schema, raising utils.errors.ValidationError"""
    if not isinstance(data, dict):
        raise ValidationError({"payload": ["A JSON object is required"]})
    try:
        return schema.model_validate(data)
    except SchemaError as e:
        raise ValidationError(format_schema_errors(e)) from e


def clean_query_args(args):
    """Drop empty query string values so they are treated as absent filters"""
    return {key: value for key, value in args.items() if value is not None and str(value).strip() != ""}
