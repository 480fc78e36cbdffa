"""
LLM-backed reasoning client.
"""

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import PromptTemplate

from app.core.logging import get_logger
from app.services.change_review.prompts import CHANGE_CLASSIFICATION_PROMPT

logger = get_logger(__name__)


class LLMReasoningClient:
    """Runs the classification prompt through a chat model and returns its text."""

    def __init__(
        self,
        llm: BaseChatModel,
        prompt: PromptTemplate = CHANGE_CLASSIFICATION_PROMPT,
    ):
        self._chain = prompt | llm | StrOutputParser()

    async def reason(self, text: str) -> str:
        logger.debug("Requesting change reasoning (%d chars)", len(text))
        return await self._chain.ainvoke({"change_description": text})
