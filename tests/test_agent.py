from __future__ import annotations

import json
from typing import Any

import pytest
from conftest import RecordingController, completion_payload, make_agent, make_client

from agent_bootstrap.agents.agent import Agent
from agent_bootstrap.app.errors import ConfigurationError, ServiceFailure, ServiceFailureKind
from agent_bootstrap.infrastructure.data_models import Message, Role
from agent_bootstrap.infrastructure.openai_gpt_manager import GPTService
from agent_bootstrap.services.gpt_controller import GENERATE_FAILURE_MESSAGE, GPTController


def test_haiku_scenario() -> None:
    client = make_client(completion_payload("line1\nline2\nline3"))
    agent = Agent("0", GPTController(GPTService(api_key="sk-test", client=client)))
    prompt = [
        {"role": "developer", "content": "You write haiku."},
        {"role": "user", "content": "Write a haiku"},
    ]

    reply = agent.send_prompt(prompt)

    assert reply.content == "line1\nline2\nline3"
    assert len(agent.log) == 1
    assert agent.log[0].text == f"Sending prompt: {json.dumps(prompt)}"
    assert client.chat.completions.calls[0]["messages"] == prompt


def test_prompt_is_logged_before_the_call() -> None:
    seen_log_sizes: list[int] = []

    class ObservingController(RecordingController):
        def generate_response(self, messages: Any) -> Message:
            seen_log_sizes.append(len(agent.log))
            return super().generate_response(messages)

    agent = make_agent("a", ObservingController())
    agent.send_prompt([{"role": "user", "content": "hi"}])

    assert seen_log_sizes == [1]


def test_send_prompt_propagates_service_failure_and_keeps_log() -> None:
    failure = ServiceFailure(GENERATE_FAILURE_MESSAGE, kind=ServiceFailureKind.GENERATION)
    agent = make_agent("a", RecordingController(error=failure))

    with pytest.raises(ServiceFailure) as excinfo:
        agent.send_prompt([{"role": "user", "content": "hi"}])

    assert excinfo.value is failure
    assert len(agent.log) == 1


def test_send_prompt_passes_an_immutable_request() -> None:
    controller = RecordingController()
    agent = make_agent("a", controller)

    agent.send_prompt([Message(role=Role.USER, content="hi")])

    assert controller.requests == [(Message(role=Role.USER, content="hi"),)]


def test_messaging_logs_once_per_participant_in_call_order() -> None:
    alice = make_agent("alice")
    bob = make_agent("bob")

    alice.send_message(bob, "hello")
    bob.send_message(alice, "hi back")
    alice.send_message(bob, "bye")

    assert [e.text for e in alice.log] == [
        "Communicating with bob: hello",
        "Received message from bob: hi back",
        "Communicating with bob: bye",
    ]
    assert [e.text for e in bob.log] == [
        "Received message from alice: hello",
        "Communicating with alice: hi back",
        "Received message from alice: bye",
    ]


def test_receive_message_has_no_other_effect() -> None:
    controller = RecordingController()
    receiver = make_agent("r", controller)
    sender = make_agent("s")

    sender.send_message(receiver, "ping")

    assert controller.requests == []
    assert len(sender.log) == 1


def test_log_is_a_read_only_snapshot() -> None:
    agent = make_agent("a")
    snapshot = agent.log

    agent.send_message(make_agent("b"), "x")

    assert snapshot == ()
    assert len(agent.log) == 1
    assert agent.id == "a"


def test_agent_without_credential_fails_at_construction() -> None:
    with pytest.raises(ConfigurationError, match="GPT_API_KEY"):
        Agent("0")
