from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class GenerationRequest(BaseModel):
    """Model representing the input data for commit message generation."""
    model_config = ConfigDict(populate_by_name=True)

    changes: Optional[str] = Field(None, description="Free-text description of the changes.")
    git_diff: Optional[str] = Field(None, alias="gitDiff", description="The raw git diff output.")
    commit_type: Optional[str] = Field(None, alias="commitType", description="Preferred conventional commit type.")
    context: Optional[str] = Field(None, description="Any extra context for the generator.")


class GenerationConfig(BaseModel):
    """Tuning parameters sent with every call to the generation service."""
    model_config = ConfigDict(frozen=True)

    temperature: float
    top_p: float
    top_k: int
    max_output_tokens: int
    response_mime_type: str


GENERATION_CONFIG = GenerationConfig(
    temperature=0.7,
    top_p=0.95,
    top_k=40,
    max_output_tokens=2048,
    response_mime_type="application/json",
)


class Prompt(BaseModel):
    model_config = ConfigDict(frozen=True)

    system: str
    user: str


class CommitResult(BaseModel):
    """Model representing the generated commit message and its alternatives."""
    model_config = ConfigDict(populate_by_name=True, strict=True)

    commit_message: str = Field(..., alias="commitMessage")
    body: str = ""
    alternatives: List[str]

    @field_validator("body", mode="before")
    @classmethod
    def null_body_is_empty(cls, value):
        return "" if value is None else value

    @field_validator("commit_message")
    @classmethod
    def commit_message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("commitMessage must not be empty")
        return value


class ErrorResponse(BaseModel):
    error: str
