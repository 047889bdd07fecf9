"""Output utilities for LangChain tools."""

from pydantic import BaseModel


def output_dict(model: BaseModel, drop_empty: bool = True) -> dict:
    """Convert a Pydantic output model to a JSON-compatible tool result.

    None-valued fields are dropped by default so tool results stay short
    in the model's context.
    """
    return model.model_dump(mode="json", exclude_none=drop_empty)
