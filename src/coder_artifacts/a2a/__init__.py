"""A2A (Agent-to-Agent) discovery for the coder agent."""

from coder_artifacts.a2a.agent_card import AgentCard, get_agent_card

__all__ = ["AgentCard", "get_agent_card"]
