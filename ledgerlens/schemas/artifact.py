"""
Pydantic models describing uploaded artifacts and generation requests.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class UploadedFile(BaseModel):
    """A binary file supplied through the upload surface."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="Original file name including extension.")
    mime_type: str = Field(
        "",
        description="Media type reported by the uploader; may be empty or generic.",
    )
    content: bytes = Field(..., repr=False)

    @property
    def size(self) -> int:
        return len(self.content)


class UploadedArtifact(BaseModel):
    """The file and/or pasted text submitted for a single analysis attempt."""

    model_config = ConfigDict(frozen=True)

    file: Optional[UploadedFile] = None
    text: Optional[str] = Field(
        None, description="Pasted financial data or a free-text annotation."
    )

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())

    @property
    def is_empty(self) -> bool:
        has_file = self.file is not None and self.file.size > 0
        return not has_file and not self.has_text


class InlineBinary(BaseModel):
    """Opaque file bytes forwarded to the model as base64."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inline_binary"] = "inline_binary"
    mime_type: str
    data: str = Field(..., repr=False, description="Base64-encoded payload.")


class InlineText(BaseModel):
    """Plain text forwarded to the model."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inline_text"] = "inline_text"
    text: str


ContentPart = Annotated[Union[InlineBinary, InlineText], Field(discriminator="kind")]


class GenerationRequest(BaseModel):
    """Everything needed for one schema-constrained generation call."""

    parts: List[ContentPart]
    response_schema: Dict[str, Any]
    model_name: str
    temperature: float
    max_output_tokens: int
    safety_threshold: str = "BLOCK_NONE"
    response_mime_type: str = "application/json"


class GenerationResponse(BaseModel):
    """Provider output reduced to the signals the validator needs."""

    text: Optional[str] = None
    finish_reason: Optional[str] = None
    block_reason: Optional[str] = None


__all__ = [
    "ContentPart",
    "GenerationRequest",
    "GenerationResponse",
    "InlineBinary",
    "InlineText",
    "UploadedArtifact",
    "UploadedFile",
]
