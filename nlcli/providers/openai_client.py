from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Dict, List, Optional

from openai import OpenAI
from pydantic import ValidationError

from ..utils.prompt import build_messages
from ..utils.schema import RISK_LEVELS, RiskLabeledCommand
from .errors import (
    InvalidCredentialError,
    InvalidFormatError,
    InvalidJSONError,
    InvalidStructureError,
    NoResponseError,
    NotConfiguredError,
    QuotaExceededError,
    ServiceError,
)

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.S)


def _strip_fence(text: str) -> str:
    """Models sometimes wrap the array in a ```json fence despite being told not to."""
    m = _FENCE.match(text.strip())
    return m.group(1) if m else text.strip()


def _reply_text(response: Any) -> str:
    try:
        return (response.choices[0].message.content or "").strip()
    except (AttributeError, IndexError, TypeError):
        return ""


def _shape_commands(data: Any) -> List[RiskLabeledCommand]:
    if not isinstance(data, list):
        raise InvalidFormatError()

    commands: List[RiskLabeledCommand] = []
    for item in data:
        if not isinstance(item, dict):
            raise InvalidStructureError()
        if not item.get("command") or not item.get("description") or not item.get("risk"):
            raise InvalidStructureError()
        risk = item["risk"]
        if risk not in RISK_LEVELS:
            logger.debug("coercing unknown risk %r to medium", risk)
            risk = "medium"
        try:
            commands.append(
                RiskLabeledCommand(command=item["command"], description=item["description"], risk=risk)
            )
        except ValidationError as e:
            raise InvalidStructureError() from e
    return commands


class OpenAIResolver:
    """
    Turns an instruction into candidate commands through the chat completions API.

    The credential is read once, when the resolver is built. Without one the
    resolver reports itself unconfigured and never touches the network.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-3.5-turbo",
        max_tokens: int = 800,
        temperature: float = 0.3,
        api_key_env: str = "OPENAI_API_KEY",
        client: Any = None,
    ):
        self.model = model
        self.max_tokens = int(max_tokens)
        self.temperature = float(temperature)
        self.api_key_env = api_key_env
        key = api_key if api_key is not None else os.environ.get(api_key_env, "")
        key = (key or "").strip()
        if client is not None:
            self._client = client
        elif key:
            self._client = OpenAI(api_key=key)
        else:
            self._client = None

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "OpenAIResolver":
        o = cfg.get("openai", {}) or {}
        return cls(
            model=o.get("model", "gpt-3.5-turbo"),
            max_tokens=o.get("max_tokens", 800),
            temperature=o.get("temperature", 0.3),
            api_key_env=o.get("api_key_env", "OPENAI_API_KEY"),
        )

    def is_configured(self) -> bool:
        return self._client is not None

    def _complete(self, instruction: str) -> Any:
        try:
            return self._client.chat.completions.create(
                model=self.model,
                messages=build_messages(instruction),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            code = getattr(e, "code", None)
            if code == "insufficient_quota":
                raise QuotaExceededError() from e
            if code == "invalid_api_key":
                raise InvalidCredentialError(self.api_key_env) from e
            logger.debug("OpenAI API error: %s", e)
            raise ServiceError(str(e)) from e

    def convert_to_commands(self, instruction: str) -> List[RiskLabeledCommand]:
        if not self.is_configured():
            raise NotConfiguredError(self.api_key_env)

        logger.debug("asking %s for commands", self.model)
        text = _reply_text(self._complete(instruction))
        if not text:
            raise NoResponseError()

        try:
            data = json.loads(_strip_fence(text))
        except json.JSONDecodeError as e:
            logger.debug("Failed to parse OpenAI response: %s", e)
            raise InvalidJSONError(str(e)) from e

        return _shape_commands(data)
