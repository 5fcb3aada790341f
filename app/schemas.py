"""Wire schemas for the generateContent endpoint."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Part(BaseModel):
    text: str


class Content(BaseModel):
    role: str = "user"
    parts: Part


class GenerationConfig(BaseModel):
    temperature: Optional[float] = None
    response_mime_type: str = "text/plain"


class Tool(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    google_search: Dict[str, Any] = Field(default_factory=dict, alias="googleSearch")


class GenerateContentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contents: List[Content]
    generation_config: GenerationConfig = Field(default_factory=GenerationConfig, alias="generationConfig")
    tools: Optional[List[Tool]] = None

    def to_body(self) -> Dict[str, Any]:
        """Serialize to the JSON body sent over the wire."""

        return self.model_dump(by_alias=True, exclude_none=True)


class _ResponseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WebSource(_ResponseModel):
    uri: str = Field(..., min_length=1)
    title: Optional[str] = None


class GroundingChunk(_ResponseModel):
    web: WebSource


class GroundingMetadata(_ResponseModel):
    grounding_chunks: Optional[List[GroundingChunk]] = Field(None, alias="groundingChunks")


class ResponsePart(_ResponseModel):
    text: Optional[str] = None


class CandidateContent(_ResponseModel):
    parts: List[ResponsePart]


class Candidate(_ResponseModel):
    content: CandidateContent
    grounding_metadata: Optional[GroundingMetadata] = Field(None, alias="groundingMetadata")


class UsageMetadata(_ResponseModel):
    prompt_token_count: int = Field(0, alias="promptTokenCount")
    candidates_token_count: int = Field(0, alias="candidatesTokenCount")
    total_token_count: int = Field(0, alias="totalTokenCount")
