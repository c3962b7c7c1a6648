"""
Agent core for Browser Agent.

Provides the main agent loop that drives the completion service and
the browser until the model answers.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

from .command_parser import parse_command
from .config import AgentConfig
from .conversation import Conversation
from .errors import (
    AgentError,
    CompletionServiceError,
    IterationLimitError,
    ToolExecutionError,
    TranscriptLimitError,
    UnrecognizedCommandError,
)
from .logger import RunLogger
from .screenshots import ScreenshotStore
from .tools import BrowserTools
from .types import Answer, ConversationMessage, Unknown


logger = logging.getLogger(__name__)


class Completer(Protocol):
    async def complete(self, prompt: str) -> str: ...


class SessionProvider(Protocol):
    def session(self): ...


@dataclass
class AgentResult:
    """Result of running the agent for one request."""
    success: bool
    final_answer: Optional[str]
    steps_taken: int
    error: Optional[str] = None
    error_type: Optional[str] = None
    transcript: tuple[ConversationMessage, ...] = field(default_factory=tuple)


class BrowserAgent:
    """Runs the agent loop for a single request.

    Each cycle renders the conversation, asks the completion service for
    the next command, executes it on the request's page and records the
    exchange. The loop ends on an answer or on the first error.
    """

    def __init__(
        self,
        query: str,
        config: AgentConfig,
        completion_client: Completer,
        browser: SessionProvider,
        screenshots: Optional[ScreenshotStore] = None,
        base_url: str = "",
        run_logger: Optional[RunLogger] = None,
    ):
        """Initialize the browser agent.

        Args:
            query: The user's query
            config: Agent configuration
            completion_client: Text-in/text-out completion service
            browser: Shared browser handing out one page per request
            screenshots: Screenshot store (defaults to config.screenshots_dir)
            base_url: Public base address used in screenshot URLs
            run_logger: Per-request logger
        """
        self.query = query
        self.config = config
        self.completion_client = completion_client
        self.browser = browser
        self.screenshots = screenshots or ScreenshotStore(config.screenshots_dir)
        self.base_url = base_url
        self.run_logger = run_logger or RunLogger(query, runs_dir=config.runs_dir)

        self.conversation = Conversation(query)
        self.steps = 0

    async def run(self) -> AgentResult:
        """Run the agent until it answers or fails.

        Returns:
            AgentResult with outcome details
        """
        self.run_logger.print_header()

        try:
            async with self.browser.session() as page:
                tools = BrowserTools(
                    page,
                    self.screenshots,
                    extract_max_chars=self.config.extract_max_chars,
                )
                answer = await self._main_loop(tools)
        except AgentError as e:
            self.run_logger.print_error(str(e))
            return self._result(error=str(e), error_type=type(e).__name__)
        except Exception as e:
            logger.exception("Unexpected error in agent loop")
            error = f"{type(e).__name__}: {e}"
            self.run_logger.print_error(error)
            return self._result(error=error, error_type=type(e).__name__)
        else:
            self.run_logger.print_final_answer(answer)
            return self._result(final_answer=answer)
        finally:
            self.run_logger.print_summary()

    async def _main_loop(self, tools: BrowserTools) -> str:
        """Main agent loop.

        Returns:
            The final answer text

        Raises:
            AgentError: On the first failure of any kind
        """
        while True:
            prompt = self.conversation.render()
            self._check_limits(prompt)

            model_output = await self._complete(prompt)
            command = parse_command(model_output)
            self.steps += 1

            if isinstance(command, Answer):
                await self.run_logger.log_step(model_output, command)
                return command.text

            if isinstance(command, Unknown):
                error = UnrecognizedCommandError(command.raw_text)
                await self.run_logger.log_step(model_output, command, error=str(error))
                raise error

            self.run_logger.print_step(command)
            try:
                observation = await tools.execute(command, self.base_url)
            except ToolExecutionError as e:
                await self.run_logger.log_step(model_output, command, error=str(e))
                raise

            await self.run_logger.log_step(model_output, command, observation=observation)
            self.run_logger.print_result(observation)
            self.conversation.add_exchange(model_output, observation)

    async def _complete(self, prompt: str) -> str:
        """Call the completion service; any failure is a CompletionServiceError."""
        try:
            return await self.completion_client.complete(prompt)
        except CompletionServiceError:
            raise
        except Exception as e:
            raise CompletionServiceError(f"{type(e).__name__}: {e}") from e

    def _check_limits(self, prompt: str) -> None:
        """Enforce the optional loop limits before the next completion."""
        max_iterations = self.config.max_iterations
        if max_iterations is not None and self.steps >= max_iterations:
            raise IterationLimitError(
                f"No answer after {max_iterations} iterations"
            )

        max_chars = self.config.max_transcript_chars
        if max_chars is not None and len(prompt) > max_chars:
            raise TranscriptLimitError(
                f"Transcript grew to {len(prompt)} characters (limit {max_chars})"
            )

    def _result(
        self,
        final_answer: Optional[str] = None,
        error: Optional[str] = None,
        error_type: Optional[str] = None,
    ) -> AgentResult:
        return AgentResult(
            success=final_answer is not None,
            final_answer=final_answer,
            steps_taken=self.steps,
            error=error,
            error_type=error_type,
            transcript=self.conversation.messages,
        )


async def run_agent(
    query: str,
    config: AgentConfig,
    completion_client: Completer,
    browser: SessionProvider,
    screenshots: Optional[ScreenshotStore] = None,
    base_url: str = "",
    run_logger: Optional[RunLogger] = None,
) -> AgentResult:
    """Convenience function to run the agent for one query.

    Returns:
        AgentResult
    """
    agent = BrowserAgent(
        query,
        config,
        completion_client,
        browser,
        screenshots=screenshots,
        base_url=base_url,
        run_logger=run_logger,
    )
    return await agent.run()
