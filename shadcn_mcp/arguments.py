"""Per-tool argument models.

Incoming ``tools/call`` arguments are an untyped JSON object. Each tool gets a
pydantic model; anything that does not validate is rejected as InvalidParams
before a command is built.
"""

from __future__ import annotations

from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from shadcn_mcp.errors import invalid_params, method_not_found
from shadcn_mcp.registry import ADD_COMPONENT, INIT_SHADCN, LIST_COMPONENTS


class _ToolArguments(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    directory: StrictStr = Field(
        ..., min_length=1, description="Absolute path to the project root"
    )


class InitShadcnArguments(_ToolArguments):
    pass


class ListComponentsArguments(_ToolArguments):
    pass


ComponentName = Annotated[StrictStr, Field(min_length=1)]


class AddComponentArguments(_ToolArguments):
    components: list[ComponentName] = Field(
        ..., description="Component names to add (e.g. button, card)"
    )


ToolArguments = Union[InitShadcnArguments, AddComponentArguments, ListComponentsArguments]

ARGUMENT_MODELS: dict[str, type[_ToolArguments]] = {
    INIT_SHADCN: InitShadcnArguments,
    ADD_COMPONENT: AddComponentArguments,
    LIST_COMPONENTS: ListComponentsArguments,
}


def _describe(err: ValidationError) -> str:
    parts = []
    for item in err.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "arguments"
        parts.append(f"`{loc}`: {item['msg']}")
    return "Invalid arguments: " + "; ".join(parts)


def parse_arguments(name: str, arguments: dict[str, Any] | None) -> ToolArguments:
    """
    Validate raw arguments for tool ``name``.

    Raises:
        McpError: METHOD_NOT_FOUND for an unknown tool, INVALID_PARAMS when the
            arguments do not satisfy the tool's contract.
    """
    model = ARGUMENT_MODELS.get(name)
    if model is None:
        raise method_not_found(f"Unknown tool: {name}")

    raw = arguments if arguments is not None else {}
    if not isinstance(raw, dict):
        raise invalid_params("Invalid arguments: expected an object")

    if model is AddComponentArguments:
        components = raw.get("components")
        if not isinstance(components, list) or not components:
            raise invalid_params("`components` must be a non-empty array")

    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise invalid_params(_describe(e)) from e
