"""Tests for the remote advisor and its local fallback."""

import json
import os
import unittest
from types import SimpleNamespace
from unittest import mock

import openai

from wumpus_world.advisor import (
    Advisor, AdvisorConfig, build_action_prompt, build_prompt, parse_action,
    snapshot,
)
from wumpus_world.heuristics import hint as local_hint
from wumpus_world.heuristics import policy as local_policy
from wumpus_world.world import Action, build_world


class FakeCompletions:
    """Stands in for client.chat.completions."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(reply=None, error=None):
    completions = FakeCompletions(reply, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


class TestSnapshot(unittest.TestCase):

    def test_fields_and_json(self):
        state = build_world(4, wumpus=(3, 3), pits=[(1, 0)])
        view = snapshot(state)
        self.assertEqual(view["position"], {"x": 0, "y": 0})
        self.assertEqual(view["direction"], "east")
        self.assertFalse(view["has_gold"])
        self.assertTrue(view["has_arrow"])
        self.assertTrue(view["percepts"]["breeze"])
        self.assertEqual(view["visited_cells"], 1)
        self.assertEqual(view["grid_size"], 4)
        json.dumps(view)

    def test_prompts(self):
        view = snapshot(build_world(4, wumpus=(3, 3), pits=[(1, 0)]))
        prompt = build_prompt(view)
        self.assertIn("Position: (0, 0)", prompt)
        self.assertIn("breeze", prompt)
        self.assertIn("Visited cells: 1 of 16", prompt)
        action_prompt = build_action_prompt(view)
        for action in Action.all():
            self.assertIn(action.value, action_prompt)


class TestParseAction(unittest.TestCase):

    def test_parse(self):
        self.assertEqual(parse_action("turnLeft"), Action.TURN_LEFT)
        self.assertEqual(parse_action('  "shoot"\n'), Action.SHOOT)
        self.assertEqual(parse_action("`grab`"), Action.GRAB)
        self.assertIsNone(parse_action("climb"))
        self.assertIsNone(parse_action(""))
        self.assertIsNone(parse_action(None))


class TestConfig(unittest.TestCase):

    def test_defaults_unconfigured(self):
        self.assertFalse(AdvisorConfig().configured)
        self.assertTrue(AdvisorConfig(api_key="k").configured)

    def test_from_env(self):
        env = {"OPENAI_API_KEY": "secret", "WUMPUS_ADVISOR_MODEL": "tiny"}
        with mock.patch.dict(os.environ, env, clear=True):
            config = AdvisorConfig.from_env()
        self.assertEqual(config.api_key, "secret")
        self.assertEqual(config.model, "tiny")
        self.assertIsNone(config.base_url)

    def test_from_env_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = AdvisorConfig.from_env()
        self.assertFalse(config.configured)
        self.assertEqual(config.model, "gpt-4o-mini")


class TestAdvisorHint(unittest.TestCase):

    def setUp(self):
        self.state = build_world(4, wumpus=(3, 3), pits=[(1, 0)])

    def test_remote_hint(self):
        client = fake_client("Turn south and step carefully.")
        advisor = Advisor(AdvisorConfig(api_key="k", model="m"), client=client)
        self.assertEqual(advisor.hint(self.state), "Turn south and step carefully.")
        call = client.chat.completions.calls[0]
        self.assertEqual(call["model"], "m")
        self.assertEqual(call["temperature"], 0.4)
        self.assertEqual(call["max_tokens"], 200)

    def test_unconfigured_uses_local(self):
        advisor = Advisor(AdvisorConfig())
        self.assertEqual(advisor.hint(self.state), local_hint(self.state))

    def test_api_error_falls_back(self):
        client = fake_client(error=openai.OpenAIError("connection refused"))
        advisor = Advisor(AdvisorConfig(api_key="k"), client=client)
        with self.assertLogs("wumpus_world.advisor", level="WARNING"):
            text = advisor.hint(self.state)
        self.assertEqual(text, local_hint(self.state))

    def test_empty_reply_falls_back(self):
        advisor = Advisor(AdvisorConfig(api_key="k"), client=fake_client("   "))
        with self.assertLogs("wumpus_world.advisor", level="WARNING"):
            self.assertEqual(advisor.hint(self.state), local_hint(self.state))

    def test_malformed_response_falls_back(self):
        client = SimpleNamespace(chat=SimpleNamespace(
            completions=SimpleNamespace(create=lambda **kw: SimpleNamespace(choices=[]))
        ))
        advisor = Advisor(AdvisorConfig(api_key="k"), client=client)
        with self.assertLogs("wumpus_world.advisor", level="WARNING"):
            self.assertEqual(advisor.hint(self.state), local_hint(self.state))

    def test_prompt_errors_are_not_swallowed(self):
        client = fake_client("unused")
        advisor = Advisor(AdvisorConfig(api_key="k"), client=client)
        with mock.patch("wumpus_world.advisor.build_prompt",
                        side_effect=TypeError("bad field")):
            with self.assertRaises(TypeError):
                advisor.hint(self.state)
        self.assertEqual(client.chat.completions.calls, [])


class TestAdvisorAction(unittest.TestCase):

    def setUp(self):
        self.state = build_world(4, wumpus=(3, 3), gold=(2, 2))

    def test_remote_action(self):
        client = fake_client("turnRight")
        advisor = Advisor(AdvisorConfig(api_key="k"), client=client)
        self.assertEqual(advisor.action(self.state), Action.TURN_RIGHT)
        call = client.chat.completions.calls[0]
        self.assertEqual(call["temperature"], 0.1)
        self.assertEqual(call["max_tokens"], 10)

    def test_invalid_token_defaults_to_move_forward(self):
        advisor = Advisor(AdvisorConfig(api_key="k"),
                          client=fake_client("climb out"))
        with self.assertLogs("wumpus_world.advisor", level="WARNING"):
            self.assertEqual(advisor.action(self.state), Action.MOVE_FORWARD)

    def test_transport_error_falls_back_to_policy(self):
        client = fake_client(error=openai.OpenAIError("timeout"))
        advisor = Advisor(AdvisorConfig(api_key="k"), client=client)
        with self.assertLogs("wumpus_world.advisor", level="WARNING"):
            action = advisor.action(self.state)
        self.assertIsInstance(action, Action)
        self.assertEqual(action, local_policy(self.state))

    def test_unconfigured_uses_policy(self):
        advisor = Advisor()
        self.assertFalse(advisor.available)
        self.assertEqual(advisor.action(self.state), local_policy(self.state))

    def test_snapshot_errors_are_not_swallowed(self):
        client = fake_client("turnLeft")
        advisor = Advisor(AdvisorConfig(api_key="k"), client=client)
        with mock.patch("wumpus_world.advisor.snapshot",
                        side_effect=AttributeError("no such cell")):
            with self.assertRaises(AttributeError):
                advisor.action(self.state)
        self.assertEqual(client.chat.completions.calls, [])


if __name__ == "__main__":
    unittest.main()
