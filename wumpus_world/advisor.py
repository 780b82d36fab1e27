"""
Remote advisor — asks a large language model for a hint or an action.

The model only ever sees a small serialisable snapshot of the game
(position, heading, gold/arrow, percepts, how much has been explored). Its
answers are free text for hints and a single action token for the bot.

The remote side is treated as fallible and non-deterministic. Every call
is wrapped so that a transport error, an API error, an empty or malformed
response, or an out-of-vocabulary token never reaches the game: the
advisor falls back to the local heuristics and returns the same type it
would have returned on success.

Configuration is an explicit AdvisorConfig owned by the caller; nothing is
stored at module level.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import openai
from openai import OpenAI as OpenAIClient

from wumpus_world import heuristics
from wumpus_world.world import Action, GameState

logger = logging.getLogger(__name__)


@dataclass
class AdvisorConfig:
    """Connection and sampling settings for the remote advisor."""
    api_key: str = ""
    model: str = "gpt-4o-mini"
    base_url: Optional[str] = None
    timeout: float = 10.0              # Seconds per request
    hint_temperature: float = 0.4
    hint_max_tokens: int = 200
    action_temperature: float = 0.1
    action_max_tokens: int = 10

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "AdvisorConfig":
        """Read OPENAI_API_KEY, WUMPUS_ADVISOR_MODEL and OPENAI_BASE_URL."""
        return cls(
            api_key=os.environ.get("OPENAI_API_KEY", ""),
            model=os.environ.get("WUMPUS_ADVISOR_MODEL", cls.model),
            base_url=os.environ.get("OPENAI_BASE_URL") or None,
        )


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------

def snapshot(state: GameState) -> Dict[str, Any]:
    """The part of the state the advisor is allowed to see."""
    return {
        "position": {"x": state.agent_position.x, "y": state.agent_position.y},
        "direction": state.agent_direction.value,
        "has_gold": state.has_gold,
        "has_arrow": state.has_arrow,
        "percepts": state.percepts.as_dict(),
        "visited_cells": state.grid.count_visited(),
        "grid_size": state.grid_size,
    }


def build_prompt(view: Dict[str, Any]) -> str:
    """Hint prompt for a snapshot."""
    percepts = view["percepts"]
    total = view["grid_size"] * view["grid_size"]
    considerations = []
    if percepts["stench"]:
        considerations.append("- There is a stench: the Wumpus is adjacent.")
    if percepts["breeze"]:
        considerations.append("- There is a breeze: a pit is adjacent.")
    if percepts["glitter"]:
        considerations.append("- There is a glitter: the gold is in this cell.")
    if view["has_gold"]:
        considerations.append("- The player has the gold and should return to (0,0).")
    else:
        considerations.append("- The player still needs to find the gold.")

    lines = [
        "You are helping a player explore the Wumpus World cave.",
        "Current game state:",
        f"- Position: ({view['position']['x']}, {view['position']['y']})",
        f"- Direction: {view['direction']}",
        f"- Has gold: {view['has_gold']}",
        f"- Has arrow: {view['has_arrow']}",
        f"- Percepts: {json.dumps(percepts)}",
        f"- Visited cells: {view['visited_cells']} of {total}",
        "",
        "Give a concise hint (at most two sentences) for the best next move.",
        "Consider:",
        *considerations,
        "",
        "Only recommend safe moves when possible.",
    ]
    return "\n".join(lines)


def build_action_prompt(view: Dict[str, Any]) -> str:
    """Action prompt: the hint prompt plus the token-only instruction."""
    tokens = ", ".join(f'"{a.value}"' for a in Action.all())
    return (f"{build_prompt(view)}\n\n"
            f"Reply with exactly one of these actions and nothing else:\n"
            f"{tokens}\n")


def parse_action(text: Optional[str]) -> Optional[Action]:
    """Strip whitespace and quoting from a reply and map it to an Action."""
    if not text:
        return None
    token = text.strip().strip("\"'`").strip()
    return Action.parse(token)


# ---------------------------------------------------------------------------
# Advisor
# ---------------------------------------------------------------------------

# Raised by the client or while unpacking a malformed completion
_COMPLETION_ERRORS = (openai.OpenAIError, AttributeError, IndexError,
                      TypeError, ValueError)


class Advisor:
    """
    Hint and action provider backed by a chat-completion model.

    Parameters
    ----------
    config : AdvisorConfig
        Credentials and sampling settings.
    client : optional
        Any object with ``chat.completions.create(...)``. Built from the
        config on first use when omitted.
    """

    def __init__(self, config: Optional[AdvisorConfig] = None,
                 client: Any = None):
        self.config = config or AdvisorConfig()
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = OpenAIClient(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
            )
        return self._client

    @property
    def available(self) -> bool:
        return self._client is not None or self.config.configured

    def _complete(self, prompt: str, temperature: float,
                  max_tokens: int) -> str:
        response = self.client.chat.completions.create(
            model=self.config.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        text = response.choices[0].message.content
        if not text or not text.strip():
            raise ValueError("empty completion")
        return text.strip()

    def hint(self, state: GameState) -> str:
        """Remote hint, or the local heuristic hint if the call goes wrong."""
        if not self.available:
            return heuristics.hint(state)
        prompt = build_prompt(snapshot(state))
        try:
            return self._complete(prompt, self.config.hint_temperature,
                                  self.config.hint_max_tokens)
        except _COMPLETION_ERRORS as e:
            logger.warning("Advisor hint failed, using local hint: %s", e)
            return heuristics.hint(state)

    def action(self, state: GameState) -> Action:
        """
        Remote action for the bot.

        Transport or parse failures fall back to the local policy; a reply
        outside the action vocabulary becomes moveForward.
        """
        if not self.available:
            return heuristics.policy(state)
        prompt = build_action_prompt(snapshot(state))
        try:
            text = self._complete(prompt, self.config.action_temperature,
                                  self.config.action_max_tokens)
        except _COMPLETION_ERRORS as e:
            logger.warning("Advisor action failed, using local policy: %s", e)
            return heuristics.policy(state)

        action = parse_action(text)
        if action is None:
            logger.warning("Advisor returned invalid action %r, "
                           "defaulting to moveForward", text)
            return Action.MOVE_FORWARD
        return action
