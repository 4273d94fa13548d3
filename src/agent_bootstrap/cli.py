import argparse
import sys
from dataclasses import replace

from agent_bootstrap.agents.agent import Agent
from agent_bootstrap.app.config import get_settings
from agent_bootstrap.app.errors import ConfigurationError, IOFailure, ServiceFailure
from agent_bootstrap.infrastructure.data_models import Message, Role
from agent_bootstrap.infrastructure.file_writer import write_to_file
from agent_bootstrap.infrastructure.openai_gpt_manager import GPTService
from agent_bootstrap.infrastructure.platform_manager import create_logger
from agent_bootstrap.services.gpt_controller import GPTController

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="agent-bootstrap",
        description="Send a prompt through an agent and optionally write the reply to a file",
    )

    parser.add_argument("prompt", help="User message to send to the model")

    parser.add_argument(
        "--system",
        "-s",
        default=DEFAULT_SYSTEM_PROMPT,
        help="Developer instructions sent before the prompt",
    )

    parser.add_argument("--agent-id", default="0", help="Identifier of the agent (default: 0)")

    parser.add_argument("--model", "-m", help="Override the configured GPT model")

    parser.add_argument(
        "--output",
        "-o",
        help="Write the reply content to this path (relative to OUTPUT_ROOT)",
    )

    parser.add_argument(
        "--log-level",
        "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set the logging level (default: WARNING)",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    Run one agent prompt from the command line.

    Returns:
        int: Exit code (0 for success, 1 for error)
    """
    args = parse_args(argv)
    logger = create_logger(logger_name="agent-bootstrap", log_level=args.log_level)

    try:
        settings = get_settings()
        if args.model:
            settings = replace(settings, gpt_model=args.model)

        agent = Agent(args.agent_id, GPTController(GPTService.from_settings(settings)))
        reply = agent.send_prompt([
            Message(role=Role.DEVELOPER, content=args.system),
            Message(role=Role.USER, content=args.prompt),
        ])

        if not reply.content:
            logger.warning("The model produced no content")

        print(reply.content)

        if args.output:
            if not reply.content:
                logger.warning(f"Nothing to write to {args.output}")
            else:
                write_to_file(reply.content, args.output, root=settings.output_root)

    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except ServiceFailure as e:
        print(f"Service failure: {e}", file=sys.stderr)
        return 1
    except IOFailure as e:
        print(f"Write failed: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
