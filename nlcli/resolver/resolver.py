from __future__ import annotations

import logging
from typing import List, Optional

from ..providers.openai_client import OpenAIResolver
from ..utils.schema import RiskLabeledCommand
from .patterns import resolve_with_patterns

logger = logging.getLogger(__name__)


class CommandResolver:
    """Ask the model first when it is configured; otherwise, or when it fails, use the keyword rules."""

    def __init__(self, ai: Optional[OpenAIResolver] = None):
        self.ai = ai

    def resolve(self, instruction: str) -> List[RiskLabeledCommand]:
        if self.ai is not None and self.ai.is_configured():
            try:
                commands = self.ai.convert_to_commands(instruction)
            except Exception as e:
                logger.warning("OpenAI API failed, falling back to pattern matching: %s", e)
            else:
                if commands:
                    return list(commands)
                logger.warning("OpenAI returned no commands, falling back to pattern matching")
        return resolve_with_patterns(instruction)
