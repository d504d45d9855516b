from dataclasses import dataclass
from typing import Literal, Protocol, Sequence, get_args


Role = Literal["system", "user", "assistant"]
LLMProvider = Literal["openai", "anthropic", "perplexity", "deepseek"]

SUPPORTED_PROVIDERS: tuple[str, ...] = get_args(LLMProvider)


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class AIClient(Protocol):
    provider: str

    async def complete(self, messages: Sequence[ChatMessage]) -> str: ...
