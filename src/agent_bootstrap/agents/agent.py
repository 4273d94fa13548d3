import json
from collections.abc import Iterable, Mapping
from typing import Any

from agent_bootstrap.infrastructure.data_models import LogEntry, Message, build_prompt_request
from agent_bootstrap.infrastructure.platform_manager import create_logger
from agent_bootstrap.services.gpt_controller import GPTController

logger = create_logger(logger_name="agent-bootstrap")


class Agent:
    """
    One actor that can ask the model for completions and exchange text with peer agents.

    Every action is recorded in the agent's own append-only log and echoed to the
    shared logger. Messaging between agents is a direct synchronous call.
    """

    def __init__(self, agent_id: str, controller: GPTController | None = None) -> None:
        self._id = agent_id
        self._controller = controller if controller is not None else GPTController()
        self._log: list[LogEntry] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def log(self) -> tuple[LogEntry, ...]:
        return tuple(self._log)

    def send_prompt(self, messages: Iterable[Message | Mapping[str, Any]]) -> Message:
        """
        Ask the model for a completion of `messages`.

        Returns:
            The first choice's message; its content may be empty

        Raises:
            ServiceFailure: If the controller could not produce a response
        """
        request = build_prompt_request(messages)
        self._record(f"Sending prompt: {json.dumps([m.to_dict() for m in request])}")
        return self._controller.generate_response(request)

    def send_message(self, peer: "Agent", text: str) -> None:
        self._record(f"Communicating with {peer.id}: {text}")
        peer.receive_message(self, text)

    def receive_message(self, sender: "Agent", text: str) -> None:
        self._record(f"Received message from {sender.id}: {text}")

    def _record(self, action: str) -> None:
        entry = LogEntry.now(action)
        self._log.append(entry)
        logger.info(f"Agent {self._id}: {entry}")

    def __repr__(self) -> str:
        return f"Agent(id={self._id!r}, log_entries={len(self._log)})"
