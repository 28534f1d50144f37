from typing import Any, Dict

from pydantic import BaseModel, Field


class ToolDescription(BaseModel):
    """Name, description and argument schema of a registered tool."""

    name: str = Field(..., description="Tool name used by the workflow engine")
    description: str = Field(..., description="Human readable tool description")
    parameters: Dict[str, Any] = Field(
        default_factory=dict,
        description="JSON schema of the tool arguments.",
    )
