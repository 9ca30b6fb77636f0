"""Structured prompt payload consumed by the text-generation service."""

from pydantic import BaseModel, Field


class GenerationPrompt(BaseModel):
    system_prompt: str = Field(..., description="Instructions for the writer model")
    user_prompt: str = Field(..., description="Job description plus serialized candidate summary")

    def to_messages(self) -> list:
        """Chat-completions message list."""
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.user_prompt},
        ]
