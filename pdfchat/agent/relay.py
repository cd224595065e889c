"""Agno-backed completion relay with streaming and a wall-clock budget.

The relay receives an already composed message list (one system message
first, then the conversation) and streams text fragments back.

Design notes:

1. **Fresh agent per call** - The system prompt changes with every request
   (document attached or not), and requests must not share mutable state.
   The Agno ``Agent`` holds no storage and no knowledge base.

2. **Client-owned history** - The browser sends the whole conversation on
   every turn, so the agent runs without a session store. ``system_message``
   replaces Agno's generated system prompt so exactly one system message
   reaches the model.

3. **Deadline, not per-chunk timeout** - ``request_timeout`` bounds the whole
   stream. Each ``__anext__`` waits only for the time left, and the pending
   provider call is cancelled when the budget runs out.

4. **Single error type** - Anything raised by Agno or the provider SDK leaves
   this module as ``ProviderError`` carrying the diagnostic text. There are
   no retries.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Sequence

from agno.agent import Agent
from agno.models.base import Model
from agno.models.google import Gemini
from agno.models.message import Message as AgnoMessage
from agno.models.openai import OpenAIChat
from agno.run.agent import RunContentEvent, RunErrorEvent

from pdfchat.agent.config import RelayConfig, get_relay_config
from pdfchat.models.errors import ProviderError
from pdfchat.models.schemas import ChatMessage, Role

logger = logging.getLogger(__name__)

PROVIDER_FAILED = "Failed to process your request"


class RelayService:
    """Streams completions for composed message lists.

    Wraps Agno with:
    - Provider selection (Gemini or OpenAI-compatible)
    - Fixed sampling temperature and output ceiling from config
    - A wall-clock budget across the whole stream
    - Uniform ``ProviderError`` failures
    """

    def __init__(self, config: RelayConfig | None = None) -> None:
        """Initialize the relay service.

        Args:
            config: Optional relay configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_relay_config()

    @property
    def config(self) -> RelayConfig:
        return self._config

    def _create_model(self) -> Model:
        """Create the provider model.

        Returns:
            Agno model configured with the relay's sampling parameters.
        """
        if self._config.provider == "openai":
            return OpenAIChat(
                id=self._config.model_name,
                api_key=self._config.api_key,
                base_url=self._config.base_url,
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
        return Gemini(
            id=self._config.model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_tokens,
        )

    def _create_agent(self, system_prompt: str) -> Agent:
        return Agent(
            model=self._create_model(),
            system_message=system_prompt,
            markdown=False,
        )

    async def _open_stream(self, messages: Sequence[ChatMessage]) -> AsyncGenerator[str]:
        """Run the agent and yield raw text fragments.

        Args:
            messages: Composed messages; the first one is the system prompt.

        Yields:
            Text fragments in arrival order.
        """
        system, *history = messages
        if system.role is not Role.SYSTEM:
            history.insert(0, system)
            system = ChatMessage(role=Role.SYSTEM, content="")

        agent = self._create_agent(system.content)
        run_input = [AgnoMessage(role=m.role.value, content=m.content) for m in history]

        async for event in agent.arun(run_input, stream=True):
            if isinstance(event, RunErrorEvent):
                raise ProviderError(PROVIDER_FAILED, event.content or "Provider returned an error")
            if isinstance(event, RunContentEvent) and isinstance(event.content, str) and event.content:
                yield event.content

    async def stream_completion(self, messages: Sequence[ChatMessage]) -> AsyncGenerator[str]:
        """Stream a completion within the configured time budget.

        Args:
            messages: Composed messages (system prompt first).

        Yields:
            Response text chunks as they arrive.

        Raises:
            ProviderError: On any provider failure or when the budget runs out.
        """
        if not messages:
            raise ProviderError(PROVIDER_FAILED, "No messages to send")

        timeout = self._config.request_timeout
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        stream = self._open_stream(messages)

        logger.info(
            f"Dispatching {len(messages)} messages to {self._config.provider}:"
            f"{self._config.model_name}"
        )
        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise TimeoutError
                try:
                    chunk = await asyncio.wait_for(anext(stream), remaining)
                except StopAsyncIteration:
                    return
                yield chunk
        except TimeoutError as e:
            logger.warning(f"Completion exceeded {timeout:g}s budget")
            raise ProviderError(
                PROVIDER_FAILED, f"Request timed out after {timeout:g} seconds"
            ) from e
        except ProviderError:
            raise
        except Exception as e:
            logger.error(f"Completion provider failed: {e}")
            raise ProviderError(PROVIDER_FAILED, str(e) or type(e).__name__) from e
        finally:
            await stream.aclose()


def get_relay_service() -> RelayService:
    """Create a relay service for one request.

    Reads configuration on every call so a missing credential fails each
    request rather than the process.

    Raises:
        ConfigurationError: If the provider credential is absent.
    """
    return RelayService()
