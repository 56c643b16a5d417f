from pydantic import BaseModel, Field, field_validator
from typing import Annotated, List, Literal, Union

from responses_proxy.shared.constants import ASSISTANT_ROLE, INPUT_TEXT_TYPE


class InputTextPart(BaseModel):
    type: Literal["input_text"]
    text: str


class InputFilePart(BaseModel):
    type: Literal["input_file"]
    filename: str
    file_data: str

    @field_validator("file_data")
    @classmethod
    def must_be_data_uri(cls, v: str) -> str:
        if not v.startswith("data:"):
            raise ValueError("file_data must be a data URI")
        return v


ContentPart = Annotated[Union[InputTextPart, InputFilePart], Field(discriminator="type")]


class ConversationTurn(BaseModel):
    role: Literal["developer", "user", "assistant"]
    content: List[ContentPart]

    @classmethod
    def assistant_text(cls, text: str) -> "ConversationTurn":
        return cls(role=ASSISTANT_ROLE, content=[InputTextPart(type=INPUT_TEXT_TYPE, text=text)])


class CompletionRequest(BaseModel):
    system: str
    input: List[ConversationTurn]


class CompletionResponse(BaseModel):
    text: str
    assistant_message: ConversationTurn
