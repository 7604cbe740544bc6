"""A2A Agent Card - Capabilities advertisement for the coder agent."""

from pydantic import BaseModel, Field

from coder_artifacts.config import get_settings


class AgentProvider(BaseModel):
    """Organization publishing the agent."""

    organization: str
    url: str | None = None


class AgentCapabilities(BaseModel):
    """Optional protocol features the agent supports."""

    streaming: bool = False
    push_notifications: bool = False
    state_transition_history: bool = False


class AgentSkill(BaseModel):
    """A skill the agent can perform."""

    id: str
    name: str
    description: str
    tags: list[str] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)
    input_modes: list[str] = Field(default_factory=list)
    output_modes: list[str] = Field(default_factory=list)


class AgentCard(BaseModel):
    """
    A2A Agent Card - Describes agent capabilities for discovery.

    Other agents and the inspector fetch this to learn what the agent does
    and which input and output modes it accepts.
    """

    name: str = Field(description="Unique agent identifier")
    description: str = Field(description="Human-readable description")
    version: str = Field(description="Semantic version")
    url: str | None = Field(default=None, description="Base URL for A2A endpoints")
    provider: AgentProvider | None = None
    capabilities: AgentCapabilities = Field(default_factory=AgentCapabilities)
    default_input_modes: list[str] = Field(default_factory=lambda: ["text"])
    default_output_modes: list[str] = Field(default_factory=lambda: ["text"])
    skills: list[AgentSkill] = Field(description="Available skills")


def get_agent_card(base_url: str | None = None) -> AgentCard:
    """
    Generate the agent card for the coder agent.

    Args:
        base_url: Base URL where A2A endpoints are hosted.

    Returns:
        AgentCard describing this agent's capabilities.
    """
    settings = get_settings()

    return AgentCard(
        name="coder-agent",
        description="A code-writing agent that emits full code files as artifacts.",
        version=settings.api_version,
        url=base_url,
        provider=AgentProvider(organization="A2A Samples"),
        capabilities=AgentCapabilities(
            streaming=True,
            push_notifications=False,
            state_transition_history=True,
        ),
        default_input_modes=["text"],
        default_output_modes=["text", "artifact"],
        skills=[
            AgentSkill(
                id="code_generation",
                name="Code Generation",
                description="Generate high-quality code files based on your requirements.",
                tags=["coding", "programming", "development"],
                examples=[
                    "Write a TypeScript function to calculate fibonacci numbers",
                    "Create a React component for a todo list",
                    "Build a REST API endpoint for user authentication",
                    "Generate a Python script to scrape websites",
                ],
                input_modes=["text"],
                output_modes=["text", "artifact"],
            ),
        ],
    )
