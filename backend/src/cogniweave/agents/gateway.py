import json
import logging
import time
from typing import Any

from pydantic_ai import Agent
from pydantic_ai.models import Model

from cogniweave.config import settings
from cogniweave.errors import ModelGatewayError

logger = logging.getLogger(__name__)


class AgentTimer:
    """Simple context manager for timing agent calls."""

    def __enter__(self):
        self._start = time.monotonic()
        return self

    def __exit__(self, *args):
        pass

    @property
    def duration_ms(self) -> int:
        return int((time.monotonic() - self._start) * 1000)


class ModelGateway:
    """Process-wide entry point to the hosted language model.

    Each call sends a system instruction plus a JSON-serialized payload as the
    user message and returns the model's raw text. One ``Agent`` is kept per
    system instruction and reused across requests. Any failure raised by the
    provider is re-raised as ``ModelGatewayError``.
    """

    def __init__(self, model: Model | str | None = None):
        self.model = model or settings.default_model
        self._agents: dict[str, Agent[None, str]] = {}

    @property
    def model_name(self) -> str:
        return self.model if isinstance(self.model, str) else self.model.model_name

    def _agent_for(self, system_instruction: str) -> Agent[None, str]:
        agent = self._agents.get(system_instruction)
        if agent is None:
            agent = Agent(output_type=str, system_prompt=system_instruction)
            self._agents[system_instruction] = agent
        return agent

    async def invoke(
        self,
        system_instruction: str,
        payload: dict[str, Any],
        max_output_tokens: int,
        agent_name: str = "model",
    ) -> str:
        agent = self._agent_for(system_instruction)
        prompt = json.dumps(payload, indent=2)
        with AgentTimer() as timer:
            try:
                result = await agent.run(
                    prompt,
                    model=self.model,
                    model_settings={"max_tokens": max_output_tokens},
                )
                usage = result.usage()
                output = result.output
            except Exception as e:
                logger.warning(
                    "agent=%s model=%s status=error duration_ms=%d error=%s",
                    agent_name,
                    self.model_name,
                    timer.duration_ms,
                    e,
                )
                raise ModelGatewayError(str(e) or type(e).__name__) from e

        logger.info(
            "agent=%s model=%s status=success duration_ms=%d input_tokens=%s output_tokens=%s",
            agent_name,
            self.model_name,
            timer.duration_ms,
            usage.input_tokens,
            usage.output_tokens,
        )
        return output
