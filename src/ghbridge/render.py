"""Markdown rendering of the operation catalog (for `ghbridge operations`)."""

from typing import Any, Dict, List, Optional

from jinja2 import Environment

from .schema import Operation, field_type

CATALOG_TEMPLATE = """\
# ghbridge operations
{% for op in operations %}
## {{ op.name }}

{{ op.description }}
{% if op.params %}
| Parameter | Type | Required |
|---|---|---|
{% for p in op.params -%}
| `{{ p.name }}` | {{ p.type }} | {{ "yes" if p.required else "no" }} |
{% endfor -%}
{% else %}
No parameters.
{% endif -%}
{% endfor %}"""


def _type_name(annotation: Any) -> str:
    base = field_type(annotation)
    if base is dict:
        return "mapping"
    return getattr(base, "__name__", str(base))


def describe_params(op: Operation) -> List[Dict[str, Any]]:
    """Name, type and required-ness of every parameter, in declaration order."""
    model = op.params
    must = set(model.REQUIRED) | set(model.REQUIRED_TEXT) | set(model.POSITIVE)
    return [
        {"name": name, "type": _type_name(field.annotation), "required": name in must}
        for name, field in model.model_fields.items()
    ]


def render_catalog(operations: List[Operation], env: Optional[Environment] = None) -> str:
    env = env or Environment(autoescape=False, keep_trailing_newline=True)
    template = env.from_string(CATALOG_TEMPLATE)
    rows = [
        {"name": op.name, "description": op.description, "params": describe_params(op)}
        for op in operations
    ]
    return template.render(operations=rows)
