from agent_bootstrap.agents.agent import Agent

__all__ = ["Agent"]
